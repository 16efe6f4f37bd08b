"""Unit tests for the policy service."""

from datetime import date
from uuid import uuid4

import pytest

from claimdesk.core.errors import ErrorKind
from claimdesk.models.policy import PolicyType
from claimdesk.models.user import UserRole
from claimdesk.services.numbering import POLICY_NUMBER_PATTERN
from claimdesk.services.policy_service import PolicyService, parse_policy_type
from tests.fixtures.test_data import make_claim, make_policy, make_policy_create


class TestPolicyServiceInit:
    def test_requires_gateway(self, settings) -> None:
        with pytest.raises(ValueError, match="Persistence gateway required"):
            PolicyService(None, settings)


class TestPolicyCreation:
    """Test policy creation rules."""

    async def test_create_policy_success(self, policy_service, customer) -> None:
        result = await policy_service.create(make_policy_create(customer.id))

        assert result.is_ok()
        policy = result.unwrap()
        assert policy.policy_type == PolicyType.AUTO
        assert POLICY_NUMBER_PATTERN.match(policy.policy_number)
        assert policy.policy_number.startswith("POL-AUTO-")
        assert policy.is_active is True
        assert policy.owner_id == customer.id
        assert policy.customer_name == "John Customer"

    @pytest.mark.parametrize("name", ["home", " Life ", "BUSINESS"])
    async def test_type_name_is_case_insensitive(
        self, policy_service, customer, name: str
    ) -> None:
        result = await policy_service.create(
            make_policy_create(customer.id, policy_type=name)
        )

        expected = PolicyType(name.strip().upper())
        assert result.unwrap().policy_type == expected
        assert result.unwrap().policy_number.startswith(f"POL-{expected.value}-")

    async def test_unknown_policy_type(self, policy_service, customer) -> None:
        result = await policy_service.create(
            make_policy_create(customer.id, policy_type="PET")
        )

        error = result.unwrap_err()
        assert error.kind == ErrorKind.INVALID_INPUT
        assert error.message == "Invalid policy type: PET"

    @pytest.mark.parametrize("end", [date(2024, 1, 1), date(2023, 12, 31)])
    async def test_end_date_must_follow_start(
        self, policy_service, gateway, customer, end: date
    ) -> None:
        result = await policy_service.create(
            make_policy_create(customer.id, end_date=end)
        )

        error = result.unwrap_err()
        assert error.kind == ErrorKind.INVALID_INPUT
        assert error.message == "End date must be after start date"
        assert gateway.policies == {}

    async def test_owner_must_exist(self, policy_service) -> None:
        result = await policy_service.create(make_policy_create(uuid4()))

        assert result.unwrap_err().message == "User not found"

    async def test_exhausted_policy_numbers(
        self, policy_service, gateway, customer, settings
    ) -> None:
        gateway.policy_insert_races = settings.number_max_attempts

        result = await policy_service.create(make_policy_create(customer.id))

        assert result.unwrap_err().kind == ErrorKind.EXHAUSTED
        assert gateway.policies == {}

    async def test_retries_after_lost_insert_race(
        self, policy_service, gateway, customer
    ) -> None:
        gateway.policy_insert_races = 1

        result = await policy_service.create(make_policy_create(customer.id))

        assert result.is_ok()
        assert len(gateway.policies) == 1


class TestPolicyReads:
    async def test_owner_reads_own_policy(self, policy_service, customer, policy) -> None:
        result = await policy_service.get(policy.id, customer.id, UserRole.CUSTOMER)

        assert result.unwrap().id == policy.id

    async def test_agent_reads_any_policy(self, policy_service, agent, policy) -> None:
        result = await policy_service.get(policy.id, agent.id, UserRole.AGENT)

        assert result.is_ok()

    async def test_adjuster_cannot_read_foreign_policy(
        self, policy_service, adjuster, policy
    ) -> None:
        result = await policy_service.get(policy.id, adjuster.id, UserRole.ADJUSTER)

        assert result.unwrap_err().kind == ErrorKind.FORBIDDEN

    async def test_missing_policy(self, policy_service, admin) -> None:
        result = await policy_service.get(uuid4(), admin.id, UserRole.ADMIN)

        assert result.unwrap_err().message == "Policy not found"

    async def test_list_active_by_owner(
        self, policy_service, gateway, customer, policy
    ) -> None:
        gateway.seed(make_policy(customer.id, is_active=False))

        everything = (await policy_service.list_by_owner(customer.id)).unwrap()
        active = (await policy_service.list_active_by_owner(customer.id)).unwrap()

        assert len(everything) == 2
        assert [p.id for p in active] == [policy.id]

    async def test_list_all(self, policy_service, gateway, other_customer, policy) -> None:
        gateway.seed(make_policy(other_customer.id))

        result = await policy_service.list_all()

        assert len(result.unwrap()) == 2


class TestPolicyLifecycle:
    async def test_deactivate(self, policy_service, gateway, policy) -> None:
        result = await policy_service.deactivate(policy.id)

        assert result.unwrap().is_active is False
        assert gateway.policies[policy.id].is_active is False

    async def test_deactivate_missing(self, policy_service) -> None:
        result = await policy_service.deactivate(uuid4())

        assert result.unwrap_err().kind == ErrorKind.NOT_FOUND

    async def test_delete_unclaimed_policy(self, policy_service, gateway, policy) -> None:
        result = await policy_service.delete(policy.id)

        assert result.is_ok()
        assert policy.id not in gateway.policies

    async def test_delete_policy_with_claims_conflicts(
        self, policy_service, gateway, policy
    ) -> None:
        """Test the store keeps a policy that claims still reference."""
        gateway.seed(make_claim(policy))

        result = await policy_service.delete(policy.id)

        error = result.unwrap_err()
        assert error.kind == ErrorKind.CONFLICT
        assert error.message == "Cannot delete a policy with existing claims"
        assert policy.id in gateway.policies

    def test_parse_policy_type(self) -> None:
        assert parse_policy_type("health") == PolicyType.HEALTH
        assert parse_policy_type("boat") is None
