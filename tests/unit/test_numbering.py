"""Test claim and policy number generation."""

from unittest.mock import AsyncMock

import pytest

from claimdesk.core.errors import DuplicateKeyError
from claimdesk.models.policy import PolicyType
from claimdesk.services.numbering import (
    CLAIM_NUMBER_PATTERN,
    POLICY_NUMBER_PATTERN,
    generate_claim_number,
    generate_policy_number,
    insert_with_unique_number,
)


class TestGenerators:
    def test_claim_number_format(self) -> None:
        for _ in range(50):
            assert CLAIM_NUMBER_PATTERN.match(generate_claim_number())

    @pytest.mark.parametrize("policy_type", list(PolicyType))
    def test_policy_number_format(self, policy_type: PolicyType) -> None:
        number = generate_policy_number(policy_type)

        assert POLICY_NUMBER_PATTERN.match(number)
        assert number.startswith(f"POL-{policy_type.value}-")


class TestInsertWithUniqueNumber:
    async def test_skips_numbers_already_taken(self) -> None:
        numbers = iter(["A", "B"])
        exists = AsyncMock(side_effect=[True, False])
        insert = AsyncMock(return_value="record")

        result = await insert_with_unique_number(
            generate=lambda: next(numbers),
            exists=exists,
            insert=insert,
            constraint="claims_claim_number_key",
            max_attempts=3,
        )

        assert result == "record"
        insert.assert_awaited_once_with("B")

    async def test_retries_after_duplicate_on_same_constraint(self) -> None:
        insert = AsyncMock(
            side_effect=[DuplicateKeyError("claims_claim_number_key"), "record"]
        )

        result = await insert_with_unique_number(
            generate=generate_claim_number,
            exists=AsyncMock(return_value=False),
            insert=insert,
            constraint="claims_claim_number_key",
            max_attempts=3,
        )

        assert result == "record"
        assert insert.await_count == 2

    async def test_other_constraints_propagate(self) -> None:
        insert = AsyncMock(side_effect=DuplicateKeyError("users_email_key"))

        with pytest.raises(DuplicateKeyError):
            await insert_with_unique_number(
                generate=generate_claim_number,
                exists=AsyncMock(return_value=False),
                insert=insert,
                constraint="claims_claim_number_key",
                max_attempts=3,
            )

    async def test_returns_none_when_exhausted(self) -> None:
        exists = AsyncMock(return_value=True)
        insert = AsyncMock()

        result = await insert_with_unique_number(
            generate=generate_claim_number,
            exists=exists,
            insert=insert,
            constraint="claims_claim_number_key",
            max_attempts=4,
        )

        assert result is None
        assert exists.await_count == 4
        insert.assert_not_awaited()
