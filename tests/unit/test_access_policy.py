"""Unit tests for role-based access predicates."""

from uuid import uuid4

import pytest

from claimdesk.models.user import UserRole
from claimdesk.services.access_policy import (
    ADMIN_ONLY,
    CLAIM_STAFF_ROLES,
    POLICY_STAFF_ROLES,
    can_access_claim,
    can_access_policy,
    has_any_role,
)
from tests.fixtures.test_data import make_claim, make_policy


@pytest.fixture
def owner_id():
    return uuid4()


@pytest.fixture
def policy(owner_id):
    return make_policy(owner_id)


@pytest.fixture
def claim(policy):
    return make_claim(policy)


class TestClaimAccess:
    """Test who may read a claim."""

    @pytest.mark.parametrize("role", [UserRole.ADMIN, UserRole.ADJUSTER])
    def test_claim_staff_read_any_claim(self, claim, role: UserRole) -> None:
        assert can_access_claim(claim, uuid4(), role)

    @pytest.mark.parametrize("role", [UserRole.CUSTOMER, UserRole.AGENT])
    def test_others_read_only_their_own(self, claim, owner_id, role: UserRole) -> None:
        assert can_access_claim(claim, owner_id, role)
        assert not can_access_claim(claim, uuid4(), role)


class TestPolicyAccess:
    """Test who may read a policy."""

    @pytest.mark.parametrize("role", [UserRole.ADMIN, UserRole.AGENT])
    def test_policy_staff_read_any_policy(self, policy, role: UserRole) -> None:
        assert can_access_policy(policy, uuid4(), role)

    @pytest.mark.parametrize("role", [UserRole.CUSTOMER, UserRole.ADJUSTER])
    def test_others_read_only_their_own(
        self, policy, owner_id, role: UserRole
    ) -> None:
        assert can_access_policy(policy, owner_id, role)
        assert not can_access_policy(policy, uuid4(), role)


class TestRoleGroups:
    def test_group_membership(self) -> None:
        assert CLAIM_STAFF_ROLES == {UserRole.ADMIN, UserRole.ADJUSTER}
        assert POLICY_STAFF_ROLES == {UserRole.ADMIN, UserRole.AGENT}
        assert ADMIN_ONLY == {UserRole.ADMIN}

    def test_has_any_role(self) -> None:
        assert has_any_role(UserRole.ADMIN, ADMIN_ONLY)
        assert not has_any_role(UserRole.ADJUSTER, ADMIN_ONLY)
