"""In-memory persistence gateway used by the unit tests.

Mirrors the behaviour the managers rely on from the real store: generated
ids and timestamps, unique natural keys, the foreign-key delete rules and
transaction rollback when the ``transaction()`` block raises.
"""

import contextlib
from collections.abc import AsyncIterator
from datetime import datetime, timezone
from decimal import Decimal
from uuid import UUID, uuid4

from claimdesk.core.errors import DuplicateKeyError, ReferentialIntegrityError
from claimdesk.models.claim import Claim, ClaimCreate, ClaimStatus, RiskLevel
from claimdesk.models.claim_event import ClaimEvent, ClaimEventCreate
from claimdesk.models.document import ClaimDocument, ClaimDocumentCreate
from claimdesk.models.fraud_alert import FraudAlert, FraudAlertCreate
from claimdesk.models.policy import Policy, PolicyCreate, PolicyType
from claimdesk.models.user import User, UserCreate, UserRole
from claimdesk.repositories.gateway import (
    CLAIM_NUMBER_KEY,
    CLAIM_POLICY_FK,
    POLICY_NUMBER_KEY,
    USER_EMAIL_KEY,
)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryGateway:
    """Dictionary-backed gateway with snapshot-based transactions."""

    def __init__(self) -> None:
        self.users: dict[UUID, User] = {}
        self.policies: dict[UUID, Policy] = {}
        self.claims: dict[UUID, Claim] = {}
        self.events: list[ClaimEvent] = []
        self.documents: list[ClaimDocument] = []
        self.alerts: dict[UUID, FraudAlert] = {}
        # Number of upcoming claim/policy inserts that lose a uniqueness race.
        self.claim_insert_races = 0
        self.policy_insert_races = 0
        self.transactions_started = 0

    # ------------------------------------------------------------------
    # Test helpers
    # ------------------------------------------------------------------

    def seed(self, *records: User | Policy | Claim | FraudAlert) -> None:
        for record in records:
            if isinstance(record, User):
                self.users[record.id] = record
            elif isinstance(record, Policy):
                self.policies[record.id] = record
            elif isinstance(record, Claim):
                self.claims[record.id] = record
            else:
                self.alerts[record.id] = record

    def delete_user(self, user_id: UUID) -> None:
        """Delete a user, applying the CASCADE and SET NULL rules."""
        for claim in list(self.claims.values()):
            if claim.owner_id == user_id:
                del self.claims[claim.id]
            elif claim.assigned_adjuster_id == user_id:
                self.claims[claim.id] = claim.model_copy(
                    update={"assigned_adjuster_id": None}
                )
        for policy in list(self.policies.values()):
            if policy.owner_id == user_id:
                del self.policies[policy.id]
        del self.users[user_id]

    def _snapshot(self) -> tuple:
        return (
            dict(self.users),
            dict(self.policies),
            dict(self.claims),
            list(self.events),
            list(self.documents),
            dict(self.alerts),
        )

    def _restore(self, snapshot: tuple) -> None:
        (
            self.users,
            self.policies,
            self.claims,
            self.events,
            self.documents,
            self.alerts,
        ) = snapshot

    @contextlib.asynccontextmanager
    async def transaction(self) -> AsyncIterator["InMemoryGateway"]:
        self.transactions_started += 1
        snapshot = self._snapshot()
        try:
            yield self
        except BaseException:
            self._restore(snapshot)
            raise

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    async def get_user(self, user_id: UUID) -> User | None:
        return self.users.get(user_id)

    async def get_user_by_email(self, email: str) -> User | None:
        for user in self.users.values():
            if str(user.email).lower() == email.lower():
                return user
        return None

    async def insert_user(
        self, data: UserCreate, *, password_hash: str, role: UserRole
    ) -> User:
        if await self.get_user_by_email(str(data.email)) is not None:
            raise DuplicateKeyError(USER_EMAIL_KEY)
        now = _now()
        user = User(
            id=uuid4(),
            **data.model_dump(),
            role=role,
            password_hash=password_hash,
            created_at=now,
            updated_at=now,
        )
        self.users[user.id] = user
        return user

    async def save_user(self, user: User) -> User:
        saved = user.model_copy(update={"updated_at": _now()})
        self.users[saved.id] = saved
        return saved

    # ------------------------------------------------------------------
    # Policies
    # ------------------------------------------------------------------

    async def get_policy(self, policy_id: UUID) -> Policy | None:
        return self.policies.get(policy_id)

    async def policy_number_exists(self, policy_number: str) -> bool:
        return any(p.policy_number == policy_number for p in self.policies.values())

    async def insert_policy(
        self, data: PolicyCreate, *, policy_number: str, policy_type: PolicyType
    ) -> Policy:
        if self.policy_insert_races > 0:
            self.policy_insert_races -= 1
            raise DuplicateKeyError(POLICY_NUMBER_KEY)
        if await self.policy_number_exists(policy_number):
            raise DuplicateKeyError(POLICY_NUMBER_KEY)
        if data.user_id not in self.users:
            raise ReferentialIntegrityError("policies_user_id_fkey")
        now = _now()
        policy = Policy(
            id=uuid4(),
            policy_number=policy_number,
            owner_id=data.user_id,
            policy_type=policy_type,
            coverage_amount=data.coverage_amount,
            deductible=data.deductible,
            premium_amount=data.premium_amount,
            start_date=data.start_date,
            end_date=data.end_date,
            is_active=True,
            created_at=now,
            updated_at=now,
        )
        self.policies[policy.id] = policy
        return policy

    async def save_policy(self, policy: Policy) -> Policy:
        saved = policy.model_copy(update={"updated_at": _now()})
        self.policies[saved.id] = saved
        return saved

    async def delete_policy(self, policy_id: UUID) -> bool:
        if any(c.policy_id == policy_id for c in self.claims.values()):
            raise ReferentialIntegrityError(CLAIM_POLICY_FK)
        return self.policies.pop(policy_id, None) is not None

    async def list_policies(
        self, *, owner_id: UUID | None = None, active_only: bool = False
    ) -> list[Policy]:
        return [
            p
            for p in self.policies.values()
            if (owner_id is None or p.owner_id == owner_id)
            and (not active_only or p.is_active)
        ]

    # ------------------------------------------------------------------
    # Claims
    # ------------------------------------------------------------------

    async def get_claim(self, claim_id: UUID) -> Claim | None:
        return self.claims.get(claim_id)

    async def claim_number_exists(self, claim_number: str) -> bool:
        return any(c.claim_number == claim_number for c in self.claims.values())

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
        if self.claim_insert_races > 0:
            self.claim_insert_races -= 1
            raise DuplicateKeyError(CLAIM_NUMBER_KEY)
        if await self.claim_number_exists(claim_number):
            raise DuplicateKeyError(CLAIM_NUMBER_KEY)
        if data.policy_id not in self.policies:
            raise ReferentialIntegrityError(CLAIM_POLICY_FK)
        if owner_id not in self.users:
            raise ReferentialIntegrityError("claims_user_id_fkey")
        now = _now()
        claim = Claim(
            id=uuid4(),
            claim_number=claim_number,
            policy_id=data.policy_id,
            owner_id=owner_id,
            incident_date=data.incident_date,
            description=data.description,
            location=data.location,
            claimed_amount=data.claimed_amount,
            deductible_amount=deductible_amount,
            status=status,
            risk_score=risk_score,
            risk_level=risk_level,
            reported_at=submitted_at,
            submitted_at=submitted_at,
            created_at=now,
            updated_at=now,
        )
        self.claims[claim.id] = claim
        return claim

    async def save_claim(self, claim: Claim) -> Claim:
        if (
            claim.assigned_adjuster_id is not None
            and claim.assigned_adjuster_id not in self.users
        ):
            raise ReferentialIntegrityError("claims_assigned_adjuster_id_fkey")
        saved = claim.model_copy(update={"updated_at": _now()})
        self.claims[saved.id] = saved
        return saved

    async def delete_claim(self, claim_id: UUID) -> bool:
        removed = self.claims.pop(claim_id, None) is not None
        self.events = [e for e in self.events if e.claim_id != claim_id]
        self.documents = [d for d in self.documents if d.claim_id != claim_id]
        self.alerts = {k: a for k, a in self.alerts.items() if a.claim_id != claim_id}
        return removed

    async def list_claims(
        self,
        *,
        owner_id: UUID | None = None,
        status: ClaimStatus | None = None,
        adjuster_id: UUID | None = None,
    ) -> list[Claim]:
        return [
            c
            for c in self.claims.values()
            if (owner_id is None or c.owner_id == owner_id)
            and (status is None or c.status == status)
            and (adjuster_id is None or c.assigned_adjuster_id == adjuster_id)
        ]

    # ------------------------------------------------------------------
    # Claim side records
    # ------------------------------------------------------------------

    async def insert_claim_event(self, event: ClaimEventCreate) -> ClaimEvent:
        if event.claim_id not in self.claims:
            raise ReferentialIntegrityError("claim_events_claim_id_fkey")
        stored = ClaimEvent(id=uuid4(), created_at=_now(), **event.model_dump())
        self.events.append(stored)
        return stored

    async def list_claim_events(self, claim_id: UUID) -> list[ClaimEvent]:
        return [e for e in self.events if e.claim_id == claim_id]

    async def insert_document(
        self, claim_id: UUID, uploader_id: UUID, data: ClaimDocumentCreate
    ) -> ClaimDocument:
        stored = ClaimDocument(
            id=uuid4(),
            claim_id=claim_id,
            uploaded_by=uploader_id,
            uploaded_at=_now(),
            **data.model_dump(),
        )
        self.documents.append(stored)
        return stored

    async def list_documents(self, claim_id: UUID) -> list[ClaimDocument]:
        return [d for d in self.documents if d.claim_id == claim_id]

    async def insert_fraud_alert(
        self, claim_id: UUID, data: FraudAlertCreate
    ) -> FraudAlert:
        stored = FraudAlert(
            id=uuid4(), claim_id=claim_id, created_at=_now(), **data.model_dump()
        )
        self.alerts[stored.id] = stored
        return stored

    async def get_fraud_alert(self, alert_id: UUID) -> FraudAlert | None:
        return self.alerts.get(alert_id)

    async def save_fraud_alert(self, alert: FraudAlert) -> FraudAlert:
        self.alerts[alert.id] = alert
        return alert

    async def list_fraud_alerts(
        self, claim_id: UUID, *, unresolved_only: bool = False
    ) -> list[FraudAlert]:
        return [
            a
            for a in self.alerts.values()
            if a.claim_id == claim_id and (not unresolved_only or not a.is_resolved)
        ]
