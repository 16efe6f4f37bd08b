# ClaimDesk - Insurance Claims Back Office
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""asyncpg implementation of the persistence gateway."""

import contextlib
from collections.abc import AsyncIterator, Iterator
from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

import asyncpg
from beartype import beartype

from ..core.database import Database
from ..core.errors import DuplicateKeyError, ReferentialIntegrityError
from ..core.logging_utils import get_logger
from ..models.claim import Claim, ClaimCreate, ClaimStatus, RiskLevel
from ..models.claim_event import ClaimEvent, ClaimEventCreate
from ..models.document import ClaimDocument, ClaimDocumentCreate
from ..models.fraud_alert import FraudAlert, FraudAlertCreate
from ..models.policy import Policy, PolicyCreate, PolicyType
from ..models.user import User, UserCreate, UserRole

logger = get_logger(__name__)

_USER_COLUMNS = """
    id, email, password_hash, first_name, last_name, phone, role,
    is_active, last_login_at, created_at, updated_at
"""

_POLICY_COLUMNS = """
    id, policy_number, user_id AS owner_id, policy_type, coverage_amount,
    deductible, premium_amount, start_date, end_date, is_active,
    created_at, updated_at
"""

_CLAIM_COLUMNS = """
    id, claim_number, policy_id, user_id AS owner_id, assigned_adjuster_id,
    incident_date, incident_description AS description,
    incident_location AS location, claimed_amount, approved_amount,
    deductible_amount, status, risk_score, risk_level, fraud_flag,
    fraud_score, reported_at, submitted_at, reviewed_at, closed_at,
    created_at, updated_at
"""

_EVENT_COLUMNS = """
    id, claim_id, user_id, event_type, old_status, new_status, notes, created_at
"""

_DOCUMENT_COLUMNS = """
    id, claim_id, uploaded_by, document_type, file_name, file_size,
    mime_type, s3_bucket AS storage_bucket, s3_key AS storage_key, uploaded_at
"""

_ALERT_COLUMNS = """
    id, claim_id, alert_type, severity, description, is_resolved,
    resolved_by, resolved_at, created_at
"""


@contextlib.contextmanager
def _translate_integrity_errors() -> Iterator[None]:
    """Map asyncpg integrity violations onto gateway exceptions."""
    try:
        yield
    except asyncpg.UniqueViolationError as e:
        raise DuplicateKeyError(e.constraint_name or "unique") from e
    except asyncpg.ForeignKeyViolationError as e:
        raise ReferentialIntegrityError(e.constraint_name or "foreign_key") from e


class PostgresGateway:
    """Persistence gateway issuing parameterized SQL through a pool.

    A gateway built from a :class:`Database` borrows a pooled connection per
    call. ``transaction()`` returns a gateway pinned to one connection with
    an open transaction; nested calls open savepoints.
    """

    def __init__(
        self, db: Database, connection: asyncpg.Connection | None = None
    ) -> None:
        self._db = db
        self._conn = connection

    @contextlib.asynccontextmanager
    async def transaction(self) -> AsyncIterator["PostgresGateway"]:
        if self._conn is not None:
            async with self._conn.transaction():
                yield self
            return

        async with self._db.transaction() as conn:
            yield PostgresGateway(self._db, conn)

    @contextlib.asynccontextmanager
    async def _connection(self) -> AsyncIterator[asyncpg.Connection]:
        if self._conn is not None:
            yield self._conn
        else:
            async with self._db.acquire() as conn:
                yield conn

    async def _fetchrow(self, query: str, *args: Any) -> Any:
        async with self._connection() as conn:
            with _translate_integrity_errors():
                return await conn.fetchrow(query, *args)

    async def _fetch(self, query: str, *args: Any) -> list[Any]:
        async with self._connection() as conn:
            return await conn.fetch(query, *args)

    async def _insert(self, query: str, *args: Any) -> Any:
        # Savepoint keeps the outer transaction alive after a unique violation.
        async with self._connection() as conn:
            with _translate_integrity_errors():
                async with conn.transaction():
                    return await conn.fetchrow(query, *args)

    async def _execute(self, query: str, *args: Any) -> str:
        async with self._connection() as conn:
            with _translate_integrity_errors():
                async with conn.transaction():
                    return await conn.execute(query, *args)

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    @beartype
    async def get_user(self, user_id: UUID) -> User | None:
        row = await self._fetchrow(
            f"SELECT {_USER_COLUMNS} FROM users WHERE id = $1", user_id
        )
        return User.model_validate(dict(row)) if row else None

    @beartype
    async def get_user_by_email(self, email: str) -> User | None:
        row = await self._fetchrow(
            f"SELECT {_USER_COLUMNS} FROM users WHERE lower(email) = lower($1)",
            email,
        )
        return User.model_validate(dict(row)) if row else None

    @beartype
    async def insert_user(
        self, data: UserCreate, *, password_hash: str, role: UserRole
    ) -> User:
        row = await self._insert(
            f"""
            INSERT INTO users (
                email, password_hash, first_name, last_name, phone, role
            )
            VALUES ($1, $2, $3, $4, $5, $6)
            RETURNING {_USER_COLUMNS}
            """,
            str(data.email),
            password_hash,
            data.first_name,
            data.last_name,
            data.phone,
            role.value,
        )
        return User.model_validate(dict(row))

    @beartype
    async def save_user(self, user: User) -> User:
        row = await self._fetchrow(
            f"""
            UPDATE users
            SET first_name = $2, last_name = $3, phone = $4, role = $5,
                is_active = $6, last_login_at = $7, updated_at = now()
            WHERE id = $1
            RETURNING {_USER_COLUMNS}
            """,
            user.id,
            user.first_name,
            user.last_name,
            user.phone,
            user.role.value,
            user.is_active,
            user.last_login_at,
        )
        return User.model_validate(dict(row))

    # ------------------------------------------------------------------
    # Policies
    # ------------------------------------------------------------------

    @beartype
    async def get_policy(self, policy_id: UUID) -> Policy | None:
        row = await self._fetchrow(
            f"SELECT {_POLICY_COLUMNS} FROM policies WHERE id = $1", policy_id
        )
        return Policy.model_validate(dict(row)) if row else None

    @beartype
    async def policy_number_exists(self, policy_number: str) -> bool:
        async with self._connection() as conn:
            return bool(
                await conn.fetchval(
                    "SELECT EXISTS(SELECT 1 FROM policies WHERE policy_number = $1)",
                    policy_number,
                )
            )

    @beartype
    async def insert_policy(
        self, data: PolicyCreate, *, policy_number: str, policy_type: PolicyType
    ) -> Policy:
        row = await self._insert(
            f"""
            INSERT INTO policies (
                policy_number, user_id, policy_type, coverage_amount,
                deductible, premium_amount, start_date, end_date, is_active
            )
            VALUES ($1, $2, $3, $4, $5, $6, $7, $8, true)
            RETURNING {_POLICY_COLUMNS}
            """,
            policy_number,
            data.user_id,
            policy_type.value,
            data.coverage_amount,
            data.deductible,
            data.premium_amount,
            data.start_date,
            data.end_date,
        )
        return Policy.model_validate(dict(row))

    @beartype
    async def save_policy(self, policy: Policy) -> Policy:
        row = await self._fetchrow(
            f"""
            UPDATE policies
            SET coverage_amount = $2, deductible = $3, premium_amount = $4,
                start_date = $5, end_date = $6, is_active = $7,
                updated_at = now()
            WHERE id = $1
            RETURNING {_POLICY_COLUMNS}
            """,
            policy.id,
            policy.coverage_amount,
            policy.deductible,
            policy.premium_amount,
            policy.start_date,
            policy.end_date,
            policy.is_active,
        )
        return Policy.model_validate(dict(row))

    @beartype
    async def delete_policy(self, policy_id: UUID) -> bool:
        result = await self._execute("DELETE FROM policies WHERE id = $1", policy_id)
        return result != "DELETE 0"

    @beartype
    async def list_policies(
        self, *, owner_id: UUID | None = None, active_only: bool = False
    ) -> list[Policy]:
        query_parts = [f"SELECT {_POLICY_COLUMNS} FROM policies WHERE 1=1"]
        params: list[Any] = []

        if owner_id is not None:
            params.append(owner_id)
            query_parts.append(f"AND user_id = ${len(params)}")

        if active_only:
            query_parts.append("AND is_active = true")

        query_parts.append("ORDER BY created_at DESC")

        rows = await self._fetch(" ".join(query_parts), *params)
        return [Policy.model_validate(dict(row)) for row in rows]

    # ------------------------------------------------------------------
    # Claims
    # ------------------------------------------------------------------

    @beartype
    async def get_claim(self, claim_id: UUID) -> Claim | None:
        row = await self._fetchrow(
            f"SELECT {_CLAIM_COLUMNS} FROM claims WHERE id = $1", claim_id
        )
        return Claim.model_validate(dict(row)) if row else None

    @beartype
    async def claim_number_exists(self, claim_number: str) -> bool:
        async with self._connection() as conn:
            return bool(
                await conn.fetchval(
                    "SELECT EXISTS(SELECT 1 FROM claims WHERE claim_number = $1)",
                    claim_number,
                )
            )

    @beartype
    async def insert_claim(
        self,
        data: ClaimCreate,
        *,
        claim_number: str,
        owner_id: UUID,
        deductible_amount: Decimal,
        status: ClaimStatus,
        risk_score: int,
        risk_level: RiskLevel,
        submitted_at: datetime,
    ) -> Claim:
        row = await self._insert(
            f"""
            INSERT INTO claims (
                claim_number, policy_id, user_id, incident_date,
                incident_description, incident_location, claimed_amount,
                deductible_amount, status, risk_score, risk_level,
                reported_at, submitted_at
            )
            VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10, $11, $12, $12)
            RETURNING {_CLAIM_COLUMNS}
            """,
            claim_number,
            data.policy_id,
            owner_id,
            data.incident_date,
            data.description,
            data.location,
            data.claimed_amount,
            deductible_amount,
            status.value,
            risk_score,
            risk_level.value,
            submitted_at,
        )
        return Claim.model_validate(dict(row))

    @beartype
    async def save_claim(self, claim: Claim) -> Claim:
        row = await self._fetchrow(
            f"""
            UPDATE claims
            SET assigned_adjuster_id = $2, approved_amount = $3, status = $4,
                risk_score = $5, risk_level = $6, fraud_flag = $7,
                fraud_score = $8, reviewed_at = $9, closed_at = $10,
                updated_at = now()
            WHERE id = $1
            RETURNING {_CLAIM_COLUMNS}
            """,
            claim.id,
            claim.assigned_adjuster_id,
            claim.approved_amount,
            claim.status.value,
            claim.risk_score,
            claim.risk_level.value,
            claim.fraud_flag,
            claim.fraud_score,
            claim.reviewed_at,
            claim.closed_at,
        )
        return Claim.model_validate(dict(row))

    @beartype
    async def delete_claim(self, claim_id: UUID) -> bool:
        result = await self._execute("DELETE FROM claims WHERE id = $1", claim_id)
        return result != "DELETE 0"

    @beartype
    async def list_claims(
        self,
        *,
        owner_id: UUID | None = None,
        status: ClaimStatus | None = None,
        adjuster_id: UUID | None = None,
    ) -> list[Claim]:
        query_parts = [f"SELECT {_CLAIM_COLUMNS} FROM claims WHERE 1=1"]
        params: list[Any] = []

        if owner_id is not None:
            params.append(owner_id)
            query_parts.append(f"AND user_id = ${len(params)}")

        if status is not None:
            params.append(status.value)
            query_parts.append(f"AND status = ${len(params)}")

        if adjuster_id is not None:
            params.append(adjuster_id)
            query_parts.append(f"AND assigned_adjuster_id = ${len(params)}")

        query_parts.append("ORDER BY created_at DESC")

        rows = await self._fetch(" ".join(query_parts), *params)
        return [Claim.model_validate(dict(row)) for row in rows]

    # ------------------------------------------------------------------
    # Claim events, documents and fraud alerts
    # ------------------------------------------------------------------

    @beartype
    async def insert_claim_event(self, event: ClaimEventCreate) -> ClaimEvent:
        row = await self._insert(
            f"""
            INSERT INTO claim_events (
                claim_id, user_id, event_type, old_status, new_status, notes
            )
            VALUES ($1, $2, $3, $4, $5, $6)
            RETURNING {_EVENT_COLUMNS}
            """,
            event.claim_id,
            event.user_id,
            event.event_type.value,
            event.old_status.value if event.old_status else None,
            event.new_status.value if event.new_status else None,
            event.notes,
        )
        return ClaimEvent.model_validate(dict(row))

    @beartype
    async def list_claim_events(self, claim_id: UUID) -> list[ClaimEvent]:
        rows = await self._fetch(
            f"""
            SELECT {_EVENT_COLUMNS} FROM claim_events
            WHERE claim_id = $1
            ORDER BY created_at
            """,
            claim_id,
        )
        return [ClaimEvent.model_validate(dict(row)) for row in rows]

    @beartype
    async def insert_document(
        self, claim_id: UUID, uploader_id: UUID, data: ClaimDocumentCreate
    ) -> ClaimDocument:
        row = await self._insert(
            f"""
            INSERT INTO claim_documents (
                claim_id, uploaded_by, document_type, file_name, file_size,
                mime_type, s3_bucket, s3_key
            )
            VALUES ($1, $2, $3, $4, $5, $6, $7, $8)
            RETURNING {_DOCUMENT_COLUMNS}
            """,
            claim_id,
            uploader_id,
            data.document_type,
            data.file_name,
            data.file_size,
            data.mime_type,
            data.storage_bucket,
            data.storage_key,
        )
        return ClaimDocument.model_validate(dict(row))

    @beartype
    async def list_documents(self, claim_id: UUID) -> list[ClaimDocument]:
        rows = await self._fetch(
            f"""
            SELECT {_DOCUMENT_COLUMNS} FROM claim_documents
            WHERE claim_id = $1
            ORDER BY uploaded_at
            """,
            claim_id,
        )
        return [ClaimDocument.model_validate(dict(row)) for row in rows]

    @beartype
    async def insert_fraud_alert(
        self, claim_id: UUID, data: FraudAlertCreate
    ) -> FraudAlert:
        row = await self._insert(
            f"""
            INSERT INTO fraud_alerts (claim_id, alert_type, severity, description)
            VALUES ($1, $2, $3, $4)
            RETURNING {_ALERT_COLUMNS}
            """,
            claim_id,
            data.alert_type,
            data.severity.value,
            data.description,
        )
        return FraudAlert.model_validate(dict(row))

    @beartype
    async def get_fraud_alert(self, alert_id: UUID) -> FraudAlert | None:
        row = await self._fetchrow(
            f"SELECT {_ALERT_COLUMNS} FROM fraud_alerts WHERE id = $1", alert_id
        )
        return FraudAlert.model_validate(dict(row)) if row else None

    @beartype
    async def save_fraud_alert(self, alert: FraudAlert) -> FraudAlert:
        row = await self._fetchrow(
            f"""
            UPDATE fraud_alerts
            SET is_resolved = $2, resolved_by = $3, resolved_at = $4
            WHERE id = $1
            RETURNING {_ALERT_COLUMNS}
            """,
            alert.id,
            alert.is_resolved,
            alert.resolved_by,
            alert.resolved_at,
        )
        return FraudAlert.model_validate(dict(row))

    @beartype
    async def list_fraud_alerts(
        self, claim_id: UUID, *, unresolved_only: bool = False
    ) -> list[FraudAlert]:
        query = f"SELECT {_ALERT_COLUMNS} FROM fraud_alerts WHERE claim_id = $1"
        if unresolved_only:
            query += " AND is_resolved = false"
        query += " ORDER BY created_at DESC"

        rows = await self._fetch(query, claim_id)
        return [FraudAlert.model_validate(dict(row)) for row in rows]
