"""Initial database schema.

Revision ID: 001
Revises:
Create Date: 2025-07-02

"""

from collections.abc import Sequence

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

user_role = postgresql.ENUM(
    "CUSTOMER", "AGENT", "ADJUSTER", "ADMIN", name="user_role", create_type=False
)
claim_status = postgresql.ENUM(
    "DRAFT",
    "SUBMITTED",
    "UNDER_REVIEW",
    "INVESTIGATING",
    "APPROVED",
    "DENIED",
    "CLOSED",
    name="claim_status",
    create_type=False,
)
policy_type = postgresql.ENUM(
    "AUTO", "HOME", "HEALTH", "LIFE", "BUSINESS", name="policy_type", create_type=False
)
risk_level = postgresql.ENUM(
    "LOW", "MEDIUM", "HIGH", "CRITICAL", name="risk_level", create_type=False
)


def _id_column() -> sa.Column:
    return sa.Column(
        "id",
        postgresql.UUID(as_uuid=True),
        nullable=False,
        server_default=sa.text("gen_random_uuid()"),
    )


def _timestamp_column(name: str, nullable: bool = False) -> sa.Column:
    return sa.Column(
        name,
        sa.DateTime(timezone=True),
        nullable=nullable,
        server_default=None if nullable else sa.text("CURRENT_TIMESTAMP"),
    )


def upgrade() -> None:
    """Create the users, policies, claims and claim side tables."""
    bind = op.get_bind()
    for enum_type in (user_role, claim_status, policy_type, risk_level):
        enum_type.create(bind, checkfirst=True)

    op.create_table(
        "users",
        _id_column(),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("phone", sa.String(20), nullable=True),
        sa.Column("role", user_role, nullable=False, server_default="CUSTOMER"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        _timestamp_column("last_login_at", nullable=True),
        _timestamp_column("created_at"),
        _timestamp_column("updated_at"),
        sa.PrimaryKeyConstraint("id", name="users_pkey"),
        sa.UniqueConstraint("email", name="users_email_key"),
    )
    op.create_index("idx_users_role", "users", ["role"])

    op.create_table(
        "policies",
        _id_column(),
        sa.Column("policy_number", sa.String(50), nullable=False),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("policy_type", policy_type, nullable=False),
        sa.Column("coverage_amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("deductible", sa.Numeric(10, 2), nullable=False),
        sa.Column("premium_amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        _timestamp_column("created_at"),
        _timestamp_column("updated_at"),
        sa.PrimaryKeyConstraint("id", name="policies_pkey"),
        sa.UniqueConstraint("policy_number", name="policies_policy_number_key"),
        sa.ForeignKeyConstraint(
            ["user_id"], ["users.id"], name="policies_user_id_fkey", ondelete="CASCADE"
        ),
        sa.CheckConstraint("end_date > start_date", name="valid_dates"),
        sa.CheckConstraint(
            "coverage_amount > 0 AND deductible >= 0 AND premium_amount > 0",
            name="positive_amounts",
        ),
    )
    op.create_index("idx_policies_user_id", "policies", ["user_id"])
    op.create_index("idx_policies_active", "policies", ["is_active", "end_date"])

    op.create_table(
        "claims",
        _id_column(),
        sa.Column("claim_number", sa.String(50), nullable=False),
        sa.Column("policy_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("assigned_adjuster_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("incident_date", sa.Date(), nullable=False),
        sa.Column("incident_description", sa.Text(), nullable=False),
        sa.Column("incident_location", sa.String(255), nullable=True),
        sa.Column("claimed_amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("approved_amount", sa.Numeric(12, 2), nullable=True),
        sa.Column("deductible_amount", sa.Numeric(10, 2), nullable=True),
        sa.Column("status", claim_status, nullable=False, server_default="DRAFT"),
        sa.Column("risk_score", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("risk_level", risk_level, nullable=False, server_default="LOW"),
        sa.Column("fraud_flag", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column(
            "fraud_score", sa.Numeric(5, 2), nullable=False, server_default="0.00"
        ),
        _timestamp_column("reported_at", nullable=True),
        _timestamp_column("submitted_at", nullable=True),
        _timestamp_column("reviewed_at", nullable=True),
        _timestamp_column("closed_at", nullable=True),
        _timestamp_column("created_at"),
        _timestamp_column("updated_at"),
        sa.PrimaryKeyConstraint("id", name="claims_pkey"),
        sa.UniqueConstraint("claim_number", name="claims_claim_number_key"),
        sa.ForeignKeyConstraint(
            ["policy_id"],
            ["policies.id"],
            name="claims_policy_id_fkey",
            ondelete="RESTRICT",
        ),
        sa.ForeignKeyConstraint(
            ["user_id"], ["users.id"], name="claims_user_id_fkey", ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["assigned_adjuster_id"],
            ["users.id"],
            name="claims_assigned_adjuster_id_fkey",
            ondelete="SET NULL",
        ),
        sa.CheckConstraint("claimed_amount > 0", name="positive_claimed_amount"),
        sa.CheckConstraint(
            "incident_date <= CURRENT_DATE", name="valid_incident_date"
        ),
        sa.CheckConstraint(
            "fraud_score >= 0 AND fraud_score <= 100", name="valid_fraud_score"
        ),
    )
    op.create_index("idx_claims_user_id", "claims", ["user_id"])
    op.create_index("idx_claims_policy_id", "claims", ["policy_id"])
    op.create_index("idx_claims_status", "claims", ["status"])
    op.create_index("idx_claims_adjuster", "claims", ["assigned_adjuster_id"])

    op.create_table(
        "claim_events",
        _id_column(),
        sa.Column("claim_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("event_type", sa.String(50), nullable=False),
        sa.Column("old_status", claim_status, nullable=True),
        sa.Column("new_status", claim_status, nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        _timestamp_column("created_at"),
        sa.PrimaryKeyConstraint("id", name="claim_events_pkey"),
        sa.ForeignKeyConstraint(
            ["claim_id"], ["claims.id"], name="claim_events_claim_id_fkey", ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["user_id"], ["users.id"], name="claim_events_user_id_fkey", ondelete="CASCADE"
        ),
    )
    op.create_index("idx_claim_events_claim_id", "claim_events", ["claim_id"])

    op.create_table(
        "claim_documents",
        _id_column(),
        sa.Column("claim_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("uploaded_by", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("document_type", sa.String(50), nullable=False),
        sa.Column("file_name", sa.String(255), nullable=False),
        sa.Column("file_size", sa.BigInteger(), nullable=False),
        sa.Column("mime_type", sa.String(100), nullable=False),
        sa.Column("s3_key", sa.String(500), nullable=False),
        sa.Column("s3_bucket", sa.String(255), nullable=False),
        _timestamp_column("uploaded_at"),
        sa.PrimaryKeyConstraint("id", name="claim_documents_pkey"),
        sa.ForeignKeyConstraint(
            ["claim_id"],
            ["claims.id"],
            name="claim_documents_claim_id_fkey",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["uploaded_by"],
            ["users.id"],
            name="claim_documents_uploaded_by_fkey",
            ondelete="CASCADE",
        ),
        sa.CheckConstraint("file_size > 0", name="positive_file_size"),
    )
    op.create_index("idx_claim_documents_claim_id", "claim_documents", ["claim_id"])

    op.create_table(
        "fraud_alerts",
        _id_column(),
        sa.Column("claim_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("alert_type", sa.String(100), nullable=False),
        sa.Column("severity", risk_level, nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column(
            "is_resolved", sa.Boolean(), nullable=False, server_default=sa.false()
        ),
        sa.Column("resolved_by", postgresql.UUID(as_uuid=True), nullable=True),
        _timestamp_column("resolved_at", nullable=True),
        _timestamp_column("created_at"),
        sa.PrimaryKeyConstraint("id", name="fraud_alerts_pkey"),
        sa.ForeignKeyConstraint(
            ["claim_id"],
            ["claims.id"],
            name="fraud_alerts_claim_id_fkey",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["resolved_by"],
            ["users.id"],
            name="fraud_alerts_resolved_by_fkey",
            ondelete="SET NULL",
        ),
    )
    op.create_index("idx_fraud_alerts_claim_id", "fraud_alerts", ["claim_id"])
    op.create_index("idx_fraud_alerts_resolved", "fraud_alerts", ["is_resolved"])


def downgrade() -> None:
    """Drop all tables and enum types."""
    for table in (
        "fraud_alerts",
        "claim_documents",
        "claim_events",
        "claims",
        "policies",
        "users",
    ):
        op.drop_table(table)

    bind = op.get_bind()
    for enum_type in (risk_level, policy_type, claim_status, user_role):
        enum_type.drop(bind, checkfirst=True)
