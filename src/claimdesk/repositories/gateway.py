# ClaimDesk - Insurance Claims Back Office
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Persistence gateway contract consumed by the managers.

The gateway owns identifier generation, uniqueness of natural keys and the
foreign-key delete rules:

- policy -> claim is RESTRICT (deleting a policy with claims raises
  ``ReferentialIntegrityError``)
- user -> policy and user -> claim (owner) are CASCADE
- user -> claim (adjuster) is SET NULL

``transaction()`` yields a gateway bound to a single transaction. Inserts of
numbered records run inside a savepoint, so a ``DuplicateKeyError`` raised
for a lost number race leaves the enclosing transaction usable.
"""

from contextlib import AbstractAsyncContextManager
from datetime import datetime
from decimal import Decimal
from typing import Final, Protocol
from uuid import UUID

from ..models.claim import Claim, ClaimCreate, ClaimStatus, RiskLevel
from ..models.claim_event import ClaimEvent, ClaimEventCreate
from ..models.document import ClaimDocument, ClaimDocumentCreate
from ..models.fraud_alert import FraudAlert, FraudAlertCreate
from ..models.policy import Policy, PolicyCreate, PolicyType
from ..models.user import User, UserCreate, UserRole

# Constraint names shared by the migration, the asyncpg gateway and the
# managers that retry on number collisions.
USER_EMAIL_KEY: Final = "users_email_key"
POLICY_NUMBER_KEY: Final = "policies_policy_number_key"
CLAIM_NUMBER_KEY: Final = "claims_claim_number_key"
CLAIM_POLICY_FK: Final = "claims_policy_id_fkey"


class PersistenceGateway(Protocol):
    """Durable storage for every ClaimDesk record."""

    def transaction(self) -> AbstractAsyncContextManager["PersistenceGateway"]: ...

    # Users
    async def get_user(self, user_id: UUID) -> User | None: ...

    async def get_user_by_email(self, email: str) -> User | None: ...

    async def insert_user(
        self, data: UserCreate, *, password_hash: str, role: UserRole
    ) -> User: ...

    async def save_user(self, user: User) -> User: ...

    # Policies
    async def get_policy(self, policy_id: UUID) -> Policy | None: ...

    async def policy_number_exists(self, policy_number: str) -> bool: ...

    async def insert_policy(
        self, data: PolicyCreate, *, policy_number: str, policy_type: PolicyType
    ) -> Policy: ...

    async def save_policy(self, policy: Policy) -> Policy: ...

    async def delete_policy(self, policy_id: UUID) -> bool: ...

    async def list_policies(
        self, *, owner_id: UUID | None = None, active_only: bool = False
    ) -> list[Policy]: ...

    # Claims
    async def get_claim(self, claim_id: UUID) -> Claim | None: ...

    async def claim_number_exists(self, claim_number: str) -> bool: ...

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
    ) -> Claim: ...

    async def save_claim(self, claim: Claim) -> Claim: ...

    async def delete_claim(self, claim_id: UUID) -> bool: ...

    async def list_claims(
        self,
        *,
        owner_id: UUID | None = None,
        status: ClaimStatus | None = None,
        adjuster_id: UUID | None = None,
    ) -> list[Claim]: ...

    # Claim side records
    async def insert_claim_event(self, event: ClaimEventCreate) -> ClaimEvent: ...

    async def list_claim_events(self, claim_id: UUID) -> list[ClaimEvent]: ...

    async def insert_document(
        self, claim_id: UUID, uploader_id: UUID, data: ClaimDocumentCreate
    ) -> ClaimDocument: ...

    async def list_documents(self, claim_id: UUID) -> list[ClaimDocument]: ...

    async def insert_fraud_alert(
        self, claim_id: UUID, data: FraudAlertCreate
    ) -> FraudAlert: ...

    async def get_fraud_alert(self, alert_id: UUID) -> FraudAlert | None: ...

    async def save_fraud_alert(self, alert: FraudAlert) -> FraudAlert: ...

    async def list_fraud_alerts(
        self, claim_id: UUID, *, unresolved_only: bool = False
    ) -> list[FraudAlert]: ...
