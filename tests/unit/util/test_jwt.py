"""Unit tests for JWT helpers."""

import pytest

from ledger.config import AuthSettings, Settings
from ledger.domain.service import JWTService
from ledger.util.jwt import JWTError, create_token, verify_token
from tests.harness import create_env_fixture

SETTINGS = AuthSettings(jwt_secret="unit-test-secret-long-enough-for-hs256-keys")

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()


def test_round_trip_identity():
    token = create_token("identity-42", SETTINGS)

    assert verify_token(token, SETTINGS).user_id == "identity-42"


def test_expired_token():
    settings = SETTINGS.model_copy(update={"jwt_expiry_days": -1})
    token = create_token("identity-42", settings)

    with pytest.raises(JWTError, match="expired"):
        verify_token(token, settings)


def test_wrong_secret():
    token = create_token("identity-42", SETTINGS)
    other = AuthSettings(jwt_secret="another-secret-that-is-long-enough-for-hs256")

    with pytest.raises(JWTError, match="Invalid"):
        JWTService(other).verify_token(token)


def test_garbage_token():
    with pytest.raises(JWTError):
        verify_token("not-a-jwt", SETTINGS)


@pytest.mark.asyncio
async def test_service_reads_identity_from_host_token(unit_env):
    """The injected service verifies tokens minted by the host's identity system."""
    jwt_service = await unit_env.get(JWTService)
    token = create_token("identity-42", Settings().auth)

    assert jwt_service.verify_token(token).user_id == "identity-42"


def test_service_does_not_mint_tokens():
    """Token issuance stays with the host; the service only verifies."""
    assert not hasattr(JWTService(SETTINGS), "create_token")
