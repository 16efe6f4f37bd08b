# ClaimDesk - Insurance Claims Back Office
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Append-only audit records of claim status changes."""

from datetime import datetime
from enum import Enum
from uuid import UUID

from beartype import beartype
from pydantic import Field

from .base import BaseModelConfig
from .claim import ClaimStatus


class ClaimEventType(str, Enum):
    """Kinds of audit events written by the lifecycle manager."""

    CLAIM_SUBMITTED = "CLAIM_SUBMITTED"
    STATUS_CHANGED = "STATUS_CHANGED"


@beartype
class ClaimEventCreate(BaseModelConfig):
    """Event as handed to the gateway, before it is assigned an id."""

    claim_id: UUID
    user_id: UUID = Field(..., description="Acting user")
    event_type: ClaimEventType
    old_status: ClaimStatus | None = None
    new_status: ClaimStatus | None = None
    notes: str | None = Field(None, max_length=1000)


@beartype
class ClaimEvent(ClaimEventCreate):
    """Stored audit event."""

    id: UUID
    created_at: datetime
