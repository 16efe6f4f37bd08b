"""Test configuration and fixtures.

Services run against an in-memory gateway seeded with one user per role
and an active AUTO policy owned by the customer. The HTTP tests reuse the
same gateway through a dependency override.
"""

from collections.abc import Generator
from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from claimdesk.core.config import Settings, clear_settings_cache
from claimdesk.core.database import Database
from claimdesk.models.policy import Policy
from claimdesk.models.user import User, UserRole
from claimdesk.services.claim_service import ClaimService
from claimdesk.services.document_service import DocumentService
from claimdesk.services.fraud_alert_service import FraudAlertService
from claimdesk.services.policy_service import PolicyService
from claimdesk.services.user_service import UserService
from tests.fixtures.in_memory_gateway import InMemoryGateway
from tests.fixtures.test_data import make_policy, make_user

if TYPE_CHECKING:
    from fastapi import FastAPI


@pytest.fixture(autouse=True)
def reset_singletons() -> Generator[None, None, None]:
    """Reset cached settings between tests."""
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def settings() -> Settings:
    return Settings(number_max_attempts=5)


@pytest.fixture
def gateway() -> InMemoryGateway:
    return InMemoryGateway()


@pytest.fixture
def customer(gateway: InMemoryGateway) -> User:
    user = make_user(UserRole.CUSTOMER, email="customer@example.com")
    gateway.seed(user)
    return user


@pytest.fixture
def other_customer(gateway: InMemoryGateway) -> User:
    user = make_user(
        UserRole.CUSTOMER, email="other@example.com", first_name="Other"
    )
    gateway.seed(user)
    return user


@pytest.fixture
def agent(gateway: InMemoryGateway) -> User:
    user = make_user(
        UserRole.AGENT, email="agent@example.com", first_name="Alex", last_name="Agent"
    )
    gateway.seed(user)
    return user


@pytest.fixture
def adjuster(gateway: InMemoryGateway) -> User:
    user = make_user(
        UserRole.ADJUSTER,
        email="adjuster@example.com",
        first_name="Jane",
        last_name="Adjuster",
    )
    gateway.seed(user)
    return user


@pytest.fixture
def admin(gateway: InMemoryGateway) -> User:
    user = make_user(
        UserRole.ADMIN, email="admin@example.com", first_name="Admin", last_name="User"
    )
    gateway.seed(user)
    return user


@pytest.fixture
def policy(gateway: InMemoryGateway, customer: User) -> Policy:
    record = make_policy(customer.id)
    gateway.seed(record)
    return record


@pytest.fixture
def claim_service(gateway: InMemoryGateway, settings: Settings) -> ClaimService:
    return ClaimService(gateway, settings)


@pytest.fixture
def policy_service(gateway: InMemoryGateway, settings: Settings) -> PolicyService:
    return PolicyService(gateway, settings)


@pytest.fixture
def user_service(gateway: InMemoryGateway) -> UserService:
    return UserService(gateway)


@pytest.fixture
def document_service(gateway: InMemoryGateway) -> DocumentService:
    return DocumentService(gateway)


@pytest.fixture
def fraud_alert_service(gateway: InMemoryGateway) -> FraudAlertService:
    return FraudAlertService(gateway)


@pytest.fixture
def mock_db() -> MagicMock:
    """Create mock database for health checks."""
    db = MagicMock(spec=Database)
    db.health_check = AsyncMock()
    return db


@pytest.fixture
def test_app(gateway: InMemoryGateway, mock_db: MagicMock) -> "FastAPI":
    """Create the application with persistence swapped for test doubles."""
    from claimdesk.api.dependencies import get_gateway
    from claimdesk.core.database import get_database
    from claimdesk.main import create_app

    app = create_app()
    app.dependency_overrides[get_gateway] = lambda: gateway
    app.dependency_overrides[get_database] = lambda: mock_db
    return app


@pytest.fixture
def test_client(test_app: "FastAPI") -> TestClient:
    """Create test client for FastAPI app (lifespan is not run)."""
    return TestClient(test_app)
