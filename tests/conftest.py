from unittest.mock import AsyncMock, Mock

import pytest

from blueprint.domain.entities.account import Account
from blueprint.domain.interfaces.identity import IIdentityProvider
from blueprint.domain.interfaces.repositories import IProfileRepository
from blueprint.domain.rate_limiting.services import FixedWindowRateLimiter
from blueprint.domain.rate_limiting.value_objects import RateLimitPolicyTable
from blueprint.domain.services.authentication.authentication_gate_service import (
    AuthenticationGateService,
)
from blueprint.domain.validation.validators import FieldValidator
from blueprint.infrastructure.rate_limiting.in_memory_window_repository import (
    InMemoryRateLimitWindowRepository,
)
from blueprint.utils.i18n import setup_i18n


class FakeClock:
    """Millisecond clock advanced explicitly by tests."""

    def __init__(self, start_ms: int = 1_700_000_000_000):
        self.now_ms = start_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, ms: int) -> None:
        self.now_ms += ms


@pytest.fixture(scope="session", autouse=True)
def load_message_catalogues():
    setup_i18n()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def rate_limiter(clock):
    """Limiter with the default policy table and a controllable clock."""
    return FixedWindowRateLimiter(
        RateLimitPolicyTable.default(), InMemoryRateLimitWindowRepository(), clock=clock
    )


@pytest.fixture
def account():
    return Account(account_id="uid-123", email="jane@example.com")


@pytest.fixture
def mock_identity_provider(account):
    """Identity provider whose calls succeed by default."""
    provider = Mock(spec=IIdentityProvider)
    provider.create_account = AsyncMock(return_value=account)
    provider.sign_in = AsyncMock(return_value=account)
    provider.sign_out = AsyncMock(return_value=None)
    provider.send_password_reset_email = AsyncMock(return_value=None)
    provider.update_password = AsyncMock(return_value=None)
    provider.current_account = Mock(return_value=account)
    return provider


@pytest.fixture
def mock_profile_repository():
    """Profile repository with no existing profiles."""
    repository = Mock(spec=IProfileRepository)
    repository.find_profile_by_field = AsyncMock(return_value=False)
    repository.read_profile = AsyncMock(return_value=None)
    repository.write_profile = AsyncMock(return_value=None)
    return repository


@pytest.fixture
def gate_service(mock_identity_provider, mock_profile_repository, rate_limiter):
    return AuthenticationGateService(
        identity_provider=mock_identity_provider,
        profile_repository=mock_profile_repository,
        rate_limiter=rate_limiter,
        validator=FieldValidator(),
    )


@pytest.fixture
def registration_form():
    return {
        "first_name": "Jane",
        "last_name": "Doe",
        "username": "Jane_Doe",
        "email": "jane@example.com",
        "password": "password123",
        "confirm_password": "password123",
    }
