"""Shared test fixtures for cognito-token."""

import time
from collections.abc import Callable, Iterator
from typing import Any

import httpx
import jwt
import pytest
import structlog
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey
from jwt.algorithms import RSAAlgorithm

from cognito_token.core.settings import TokenConfig
from tests.fakes import (
    CLIENT_ID,
    ISSUER,
    KID,
    REDIRECT_URI,
    REGION,
    USER_POOL_ID,
    FakeIdp,
)

_ENV_NAMES = (
    "COGNITO_CLIENT_ID",
    "COGNITO_USER_POOL_ID",
    "COGNITO_REGION",
    "COGNITO_REDIRECT_URI",
    "COGNITO_CODE",
    "COGNITO_OAUTH_URL",
    "COGNITO_TOKEN_FILE",
    "COGNITO_ID_TOKEN",
    "COGNITO_VERIFY_EXP",
    "COGNITO_DECODE_ONLY",
    "COGNITO_HTTP_TIMEOUT",
    "COGNITO_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Isolate tests from COGNITO_* variables and structlog configuration."""
    for name in _ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    yield
    structlog.reset_defaults()


@pytest.fixture(scope="session")
def private_key() -> RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def other_private_key() -> RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def public_jwk(private_key: RSAPrivateKey) -> dict[str, Any]:
    """The signing key's public half as a Cognito-style JWK."""
    jwk = RSAAlgorithm.to_jwk(private_key.public_key(), as_dict=True)
    jwk.update({"kid": KID, "alg": "RS256", "use": "sig"})
    return jwk


@pytest.fixture
def claims() -> dict[str, Any]:
    """A valid id_token payload for the test user pool."""
    now = int(time.time())
    return {
        "sub": "aaaaaaaa-bbbb-cccc-dddd-eeeeeeeeeeee",
        "iss": ISSUER,
        "aud": CLIENT_ID,
        "token_use": "id",
        "auth_time": now,
        "iat": now,
        "exp": now + 3600,
        "email": "alice@example.com",
        "cognito:username": "alice",
    }


@pytest.fixture
def sign(private_key: RSAPrivateKey) -> Callable[..., str]:
    """Return a helper that signs a payload as a compact JWT."""

    def _sign(
        payload: dict[str, Any],
        *,
        kid: str | None = KID,
        key: Any = None,
        algorithm: str = "RS256",
    ) -> str:
        headers = {"kid": kid} if kid is not None else {}
        return jwt.encode(
            payload,
            private_key if key is None else key,
            algorithm=algorithm,
            headers=headers,
        )

    return _sign


@pytest.fixture
def idp(public_jwk: dict[str, Any]) -> FakeIdp:
    return FakeIdp({"keys": [public_jwk]})


@pytest.fixture
def http_client(idp: FakeIdp) -> Iterator[httpx.Client]:
    """An httpx client wired to the fake identity provider."""
    with httpx.Client(transport=httpx.MockTransport(idp.handle)) as client:
        yield client


@pytest.fixture
def make_config() -> Callable[..., TokenConfig]:
    """Build a TokenConfig for the test pool, overriding any field."""

    def _make(**overrides: Any) -> TokenConfig:
        options: dict[str, Any] = {
            "client_id": CLIENT_ID,
            "user_pool_id": USER_POOL_ID,
            "region": REGION,
            "redirect_uri": REDIRECT_URI,
        }
        options.update(overrides)
        return TokenConfig(**options)

    return _make
