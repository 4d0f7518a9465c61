"""
Pytest configuration and shared fixtures.

This module provides common fixtures for testing:
- JWT and password handlers
- JSON store with repositories
- Auth service wired to a temporary store
- API client
"""

import os
import sys
import tempfile
from pathlib import Path
from typing import Generator
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

# Set test environment variables before imports
os.environ["JWT_SECRET_KEY"] = "test_jwt_secret_key_for_testing_only_32bytes!"
os.environ["SMS_DRY_RUN"] = "true"

from parent_auth.auth import JWTHandler, PasswordHandler
from parent_auth.models import ParentAccount
from parent_auth.services import AuthService, SMSService
from parent_auth.store import JSONTxHandler, ParentAuthRepository, PhoneCertifyRepository


# =============================================================================
# Configuration
# =============================================================================

@pytest.fixture(scope="session")
def test_config():
    """Test configuration values."""
    return {
        "jwt_secret": "test_jwt_secret_key_for_testing_only_32bytes!",
        "test_phone": "01012345678",
        "test_login_id": "parent01",
        "test_password": "TestPassword123!",
        "test_name": "Test Parent",
    }


# =============================================================================
# Credential Fixtures
# =============================================================================

@pytest.fixture
def jwt_handler(test_config) -> JWTHandler:
    """Create a JWTHandler with test secret."""
    return JWTHandler(secret_key=test_config["jwt_secret"])


@pytest.fixture
def password_handler() -> PasswordHandler:
    """Create a PasswordHandler with the minimum work factor to keep tests fast."""
    return PasswordHandler(rounds=4)


# =============================================================================
# Store Fixtures
# =============================================================================

@pytest.fixture
def temp_data_dir() -> Generator[Path, None, None]:
    """Create a temporary data directory."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def data_file(temp_data_dir) -> Path:
    """Path of the JSON store file (not created yet)."""
    return temp_data_dir / "parent_auth.json"


@pytest.fixture
def tx_handler(data_file) -> JSONTxHandler:
    """Create a JSONTxHandler on the temporary store file."""
    return JSONTxHandler(data_file, lock_timeout=1)


@pytest.fixture
def phone_certify_repo() -> PhoneCertifyRepository:
    return PhoneCertifyRepository()


@pytest.fixture
def parent_auth_repo() -> ParentAuthRepository:
    return ParentAuthRepository()


# =============================================================================
# Service Fixtures
# =============================================================================

@pytest.fixture
def sms_agency() -> MagicMock:
    """SMS sender that records calls instead of sending."""
    return MagicMock(spec=SMSService)


@pytest.fixture
def tx_spy(tx_handler) -> MagicMock:
    """Transaction handler that counts begin/commit/rollback calls."""
    return MagicMock(wraps=tx_handler)


@pytest.fixture
def auth_service(
    parent_auth_repo,
    phone_certify_repo,
    tx_spy,
    sms_agency,
    password_handler,
    jwt_handler
) -> AuthService:
    """AuthService wired to the temporary store and a mock SMS sender."""
    return AuthService(
        parent_auth_repo=parent_auth_repo,
        phone_certify_repo=phone_certify_repo,
        tx_handler=tx_spy,
        message_agency=sms_agency,
        hash_handler=password_handler,
        jwt_handler=jwt_handler
    )


@pytest.fixture
def read_cert(tx_handler, phone_certify_repo):
    """Return a function reading a certification record outside the service."""
    def _read(phone_number):
        tx = tx_handler.begin_tx()
        try:
            return phone_certify_repo.get_by_phone_number(tx, phone_number)
        finally:
            tx_handler.rollback(tx)
    return _read


@pytest.fixture
def certified_phone(auth_service, read_cert, test_config) -> str:
    """Phone number that has been sent a code and certified."""
    phone = test_config["test_phone"]
    auth_service.send_certify_code_to_phone(phone)
    code = read_cert(phone).certify_code
    auth_service.certify_phone_with_code(phone, code)
    auth_service.tx_handler.reset_mock()
    auth_service.message_agency.reset_mock()
    return phone


@pytest.fixture
def new_account(test_config) -> ParentAccount:
    """Unsaved account with a plain text password."""
    return ParentAccount(
        login_id=test_config["test_login_id"],
        password=test_config["test_password"],
        name=test_config["test_name"]
    )


@pytest.fixture
def signed_up_parent(auth_service, certified_phone, new_account) -> ParentAccount:
    """Parent account stored on the certified phone."""
    stored = auth_service.sign_up_parent(new_account, certified_phone)
    auth_service.tx_handler.reset_mock()
    return stored


# =============================================================================
# API Client Fixtures
# =============================================================================

@pytest.fixture
def mock_services():
    """Create mock services container."""
    services = MagicMock()
    services.auth = MagicMock(spec=AuthService)
    services.config = MagicMock()
    return services


@pytest.fixture
def api_app():
    """Create FastAPI app for testing."""
    from api.main import app
    return app


@pytest.fixture
def api_client(api_app) -> TestClient:
    """Create synchronous test client for API."""
    return TestClient(api_app)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as unit test"
    )
    config.addinivalue_line(
        "markers", "service: mark test as auth service workflow test"
    )
    config.addinivalue_line(
        "markers", "api: mark test as API endpoint test"
    )
