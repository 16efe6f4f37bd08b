# ClaimDesk - Insurance Claims Back Office
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""References to claim documents kept in external object storage.

Only the storage locator is recorded here; file bytes never pass through
this package.
"""

from datetime import datetime
from uuid import UUID

from beartype import beartype
from pydantic import Field

from .base import BaseModelConfig


@beartype
class ClaimDocumentCreate(BaseModelConfig):
    """Document reference supplied by the uploader."""

    # PHOTO, POLICE_REPORT, ESTIMATE, RECEIPT, ... (not enumerated)
    document_type: str = Field(..., min_length=1, max_length=50)
    file_name: str = Field(..., min_length=1, max_length=255)
    file_size: int = Field(..., gt=0, description="Size in bytes")
    mime_type: str = Field(..., min_length=1, max_length=100)
    storage_bucket: str = Field(..., min_length=1, max_length=255)
    storage_key: str = Field(..., min_length=1, max_length=500)


@beartype
class ClaimDocument(ClaimDocumentCreate):
    """Stored document reference."""

    id: UUID
    claim_id: UUID
    uploaded_by: UUID
    uploaded_at: datetime
