"""Shared test fixtures for pocketnotes."""

import pytest

from pocketnotes.config import AuthConfig, Settings
from pocketnotes.db import get_core, init_db
from pocketnotes.main import create_app
from pocketnotes.auth import CredentialStore, TokenIssuer

TEST_SECRET = "test-secret-key-that-is-long-enough-for-hs256"


@pytest.fixture
def test_settings(tmp_path):
    """Settings pointing at a temp-file database, with fast bcrypt."""
    return Settings(
        database_path=str(tmp_path / "test.db"),
        jwt_secret_key=TEST_SECRET,
        bcrypt_work_factor=4,
    )


@pytest.fixture
def auth_config(test_settings) -> AuthConfig:
    return test_settings.auth_config()


@pytest.fixture
def token_issuer(auth_config) -> TokenIssuer:
    return TokenIssuer(auth_config)


@pytest.fixture
def credential_store(auth_config) -> CredentialStore:
    return CredentialStore(auth_config)


@pytest.fixture
def core(test_settings):
    """Autocommit Core on a fresh temp database.

    Each test gets a fresh database file.
    """
    init_db(test_settings.database_path)
    core = get_core(database_path=test_settings.database_path)
    yield core
    core.close()


@pytest.fixture
def app(test_settings):
    """Flask app bound to the temp database."""
    app = create_app(test_settings)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    """Create test client for API testing."""
    with app.test_client() as client:
        yield client


@pytest.fixture
def register_account(client):
    """Return a helper that registers through the API and returns the response JSON."""
    def _register(name="Ann", email="ann@x.com", password="secret1"):
        response = client.post(
            "/auth/register",
            json={"name": name, "email": email, "password": password}
        )
        assert response.status_code == 201, response.get_json()
        return response.get_json()

    return _register


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def ann(register_account):
    """Registered account "Ann". Returns the register response (includes token)."""
    return register_account()


@pytest.fixture
def bob(register_account):
    """Second registered account "Bob"."""
    return register_account(name="Bob", email="bob@x.com", password="hunter22")


@pytest.fixture
def ann_headers(ann):
    return bearer(ann["token"])


@pytest.fixture
def bob_headers(bob):
    return bearer(bob["token"])

