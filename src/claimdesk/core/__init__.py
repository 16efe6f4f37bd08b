# ClaimDesk - Insurance Claims Back Office
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Core infrastructure components for ClaimDesk."""

from .config import Settings, get_settings
from .database import Database, get_database
from .errors import ErrorKind, ServiceError
from .logging_utils import configure_logging, get_logger
from .result_types import Err, Ok, Result

__all__ = [
    "Settings",
    "get_settings",
    "Database",
    "get_database",
    "ErrorKind",
    "ServiceError",
    "configure_logging",
    "get_logger",
    "Ok",
    "Err",
    "Result",
]
