# ClaimDesk - Insurance Claims Back Office
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Submission-time risk scoring for claims.

The score is the sum of the weights of every rule that fires. Only one
rule ships today (the claimed amount exceeding half of the policy
coverage); further signals are added by passing more rules, without
changing the scoring signature.
"""

from collections.abc import Callable, Sequence
from decimal import Decimal
from typing import Final

from attrs import field, frozen
from beartype import beartype

from ..models.claim import RiskLevel
from ..models.policy import Policy

HIGH_AMOUNT_RATIO: Final = Decimal("0.5")
HIGH_AMOUNT_WEIGHT: Final = 30

# (minimum score, level), checked top-down.
_LEVEL_THRESHOLDS: Final = (
    (70, RiskLevel.CRITICAL),
    (50, RiskLevel.HIGH),
    (30, RiskLevel.MEDIUM),
)


@frozen
class RiskAssessment:
    """Score and level stored on a claim at submission."""

    score: int = field()
    level: RiskLevel = field()


@frozen
class RiskRule:
    """A named predicate that adds ``weight`` to the score when it fires."""

    name: str = field()
    weight: int = field()
    applies: Callable[[Decimal, Policy], bool] = field()


def _exceeds_half_coverage(claimed_amount: Decimal, policy: Policy) -> bool:
    # Strict: exactly half of the coverage does not fire.
    return claimed_amount > policy.coverage_amount * HIGH_AMOUNT_RATIO


DEFAULT_RULES: Final[tuple[RiskRule, ...]] = (
    RiskRule(
        name="high_amount",
        weight=HIGH_AMOUNT_WEIGHT,
        applies=_exceeds_half_coverage,
    ),
)


@beartype
def risk_level_for(score: int) -> RiskLevel:
    """Map a score onto its level: >=70 CRITICAL, >=50 HIGH, >=30 MEDIUM."""
    for minimum, level in _LEVEL_THRESHOLDS:
        if score >= minimum:
            return level
    return RiskLevel.LOW


@beartype
def score_claim(
    claimed_amount: Decimal,
    policy: Policy,
    rules: Sequence[RiskRule] = DEFAULT_RULES,
) -> RiskAssessment:
    """Score a claim against the policy it is filed under."""
    score = sum(
        rule.weight for rule in rules if rule.applies(claimed_amount, policy)
    )
    return RiskAssessment(score=score, level=risk_level_for(score))
