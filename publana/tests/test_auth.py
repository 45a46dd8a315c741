"""
Unit tests for the authentication module.
"""

from unittest.mock import AsyncMock

import pytest

from publana.errors import AdminUnauthorized, InvalidToken, Unauthorized
from publana.modules.auth import AuthModule, extract_bearer_token
from publana.modules.storage import MemoryOptionStore
from publana.modules.tokens import TokenStore

VALID_TOKEN = "0123456789abcdef" * 4


@pytest.fixture
def token_store():
    """Token store holding a single valid token."""
    return TokenStore(MemoryOptionStore({"publana_api_tokens": [VALID_TOKEN]}))


@pytest.fixture
def auth_module(token_store):
    """Create an AuthModule instance with an in-memory token store."""
    return AuthModule(token_store, admin_api_keys=["admin-key", "second-admin-key"])


@pytest.mark.parametrize(
    "header,expected",
    [
        ("Bearer abc", "abc"),
        ("bearer abc", "abc"),
        ("BEARER abc", "abc"),
        ("Bearer \t  abc  ", "abc"),
        ("Bearer abc def", "abc def"),
    ],
)
def test_extract_bearer_token(header, expected):
    """Test bearer extraction is case-insensitive and whitespace tolerant."""
    assert extract_bearer_token(header) == expected


@pytest.mark.parametrize("header", [None, "", "Token abc", "Basic dXNlcjpwYXNz", "Bearer", "Bearerabc"])
def test_extract_bearer_token_rejects_other_schemes(header):
    """Test non-bearer or missing credentials yield None."""
    assert extract_bearer_token(header) is None


@pytest.mark.asyncio
async def test_authenticate_valid_token(auth_module):
    """Test authentication with a token present in the store."""
    result = await auth_module.authenticate(f"Bearer {VALID_TOKEN}")

    assert result.ok is True
    assert result.method == "bearer"


@pytest.mark.asyncio
async def test_authenticate_lowercase_scheme(auth_module):
    """Test the scheme name is matched case-insensitively."""
    result = await auth_module.authenticate(f"bearer {VALID_TOKEN}")
    assert result.ok is True


@pytest.mark.asyncio
async def test_authenticate_trims_token(auth_module):
    """Test surrounding whitespace is removed before lookup."""
    result = await auth_module.authenticate(f"Bearer   {VALID_TOKEN}   ")
    assert result.ok is True


@pytest.mark.asyncio
async def test_authenticate_missing_header(auth_module):
    """Test missing header raises Unauthorized."""
    with pytest.raises(Unauthorized) as exc_info:
        await auth_module.authenticate(None)

    assert exc_info.value.status == 401
    assert exc_info.value.code == "publana_unauthorized"


@pytest.mark.asyncio
async def test_authenticate_wrong_scheme(auth_module):
    """Test a non-bearer scheme raises Unauthorized even with a valid token."""
    with pytest.raises(Unauthorized):
        await auth_module.authenticate(f"Token {VALID_TOKEN}")


@pytest.mark.asyncio
async def test_authenticate_unknown_token(auth_module):
    """Test an unknown token raises InvalidToken."""
    with pytest.raises(InvalidToken) as exc_info:
        await auth_module.authenticate("Bearer not-a-real-token")

    assert exc_info.value.status == 401
    assert exc_info.value.code == "publana_invalid_token"
    assert exc_info.value.message == "Invalid or expired authentication."


@pytest.mark.asyncio
async def test_authenticate_is_case_sensitive(auth_module):
    """Test token comparison does not fold case."""
    with pytest.raises(InvalidToken):
        await auth_module.authenticate(f"Bearer {VALID_TOKEN.upper()}")


@pytest.mark.asyncio
async def test_authenticate_revoked_token(auth_module, token_store):
    """Test a revoked token is rejected on the next request."""
    await token_store.remove(VALID_TOKEN)

    with pytest.raises(InvalidToken):
        await auth_module.authenticate(f"Bearer {VALID_TOKEN}")


@pytest.mark.asyncio
async def test_authenticate_does_not_write():
    """Test authentication is read-only against the store."""
    options = AsyncMock()
    options.get = AsyncMock(return_value=[VALID_TOKEN])
    options.set = AsyncMock()
    auth = AuthModule(TokenStore(options))

    await auth.authenticate(f"Bearer {VALID_TOKEN}")
    with pytest.raises(InvalidToken):
        await auth.authenticate("Bearer other")

    options.set.assert_not_called()


def test_verify_admin_key_valid(auth_module):
    """Test admin API key validation with configured keys."""
    assert auth_module.verify_admin_key("admin-key").method == "api_key"
    assert auth_module.verify_admin_key("second-admin-key").ok is True


@pytest.mark.parametrize("api_key", [None, "", "wrong", "admin-key "])
def test_verify_admin_key_invalid(auth_module, api_key):
    """Test admin API key validation rejects unknown keys."""
    with pytest.raises(AdminUnauthorized):
        auth_module.verify_admin_key(api_key)


def test_verify_admin_key_without_configured_keys(token_store):
    """Test every admin key is rejected when none are configured."""
    auth = AuthModule(token_store, admin_api_keys=[])

    with pytest.raises(AdminUnauthorized):
        auth.verify_admin_key("anything")
