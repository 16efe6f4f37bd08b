# ClaimDesk - Insurance Claims Back Office
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Persistence gateway contract and its PostgreSQL implementation."""

from .gateway import (
    CLAIM_NUMBER_KEY,
    CLAIM_POLICY_FK,
    POLICY_NUMBER_KEY,
    USER_EMAIL_KEY,
    PersistenceGateway,
)
from .postgres import PostgresGateway

__all__ = [
    "PersistenceGateway",
    "PostgresGateway",
    "USER_EMAIL_KEY",
    "POLICY_NUMBER_KEY",
    "CLAIM_NUMBER_KEY",
    "CLAIM_POLICY_FK",
]
