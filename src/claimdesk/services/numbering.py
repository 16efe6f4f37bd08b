# ClaimDesk - Insurance Claims Back Office
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Human-readable claim and policy numbers.

Numbers carry a random uppercase hex suffix. Uniqueness is checked before
the insert and enforced again by the store; both kinds of collision lead to
a fresh number, up to a configured number of attempts.
"""

import re
import secrets
from collections.abc import Awaitable, Callable
from typing import Final, TypeVar

from beartype import beartype

from ..core.errors import DuplicateKeyError
from ..core.logging_utils import get_logger
from ..models.policy import PolicyType

logger = get_logger(__name__)

T = TypeVar("T")

CLAIM_NUMBER_PATTERN: Final = re.compile(r"^CLM-[0-9A-F]{8}$")
POLICY_NUMBER_PATTERN: Final = re.compile(
    r"^POL-(AUTO|HOME|HEALTH|LIFE|BUSINESS)-[0-9A-F]{6}$"
)


def _suffix(length: int) -> str:
    return secrets.token_hex((length + 1) // 2)[:length].upper()


@beartype
def generate_claim_number() -> str:
    return f"CLM-{_suffix(8)}"


@beartype
def generate_policy_number(policy_type: PolicyType) -> str:
    return f"POL-{policy_type.value}-{_suffix(6)}"


async def insert_with_unique_number(
    *,
    generate: Callable[[], str],
    exists: Callable[[str], Awaitable[bool]],
    insert: Callable[[str], Awaitable[T]],
    constraint: str,
    max_attempts: int,
) -> T | None:
    """Insert a numbered record, drawing new numbers on collision.

    Returns ``None`` once ``max_attempts`` numbers have collided. A
    ``DuplicateKeyError`` on any other constraint propagates.
    """
    for attempt in range(1, max_attempts + 1):
        number = generate()
        if await exists(number):
            logger.debug("Number %s already taken (attempt %d)", number, attempt)
            continue
        try:
            return await insert(number)
        except DuplicateKeyError as e:
            if e.constraint != constraint:
                raise
            logger.info("Lost insert race for %s (attempt %d)", number, attempt)

    logger.warning("Gave up generating a unique number after %d attempts", max_attempts)
    return None
