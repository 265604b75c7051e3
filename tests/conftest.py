"""
Shared test keys, provider documents and token factory.
"""

import base64
import time

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from jose import jwt

from oidc_guard import AuthConfig
from oidc_guard.core import clear_all_validators

PROVIDER_URL = "https://idp.test.com/realms/contacts"
DISCOVERY_URL = f"{PROVIDER_URL}/.well-known/openid-configuration"
JWKS_URL = f"{PROVIDER_URL}/protocol/openid-connect/certs"
AUDIENCE = "contacts-api"

DISCOVERY = {"issuer": PROVIDER_URL, "jwks_uri": JWKS_URL}


def _b64url_uint(value: int) -> str:
    data = value.to_bytes((value.bit_length() + 7) // 8, "big")
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def _generate_key() -> tuple[str, dict[str, str]]:
    """Generate an RSA key pair (DO NOT use in production) as (private PEM, public n/e)."""
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    pem = key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("ascii")
    numbers = key.public_key().public_numbers()
    return pem, {"n": _b64url_uint(numbers.n), "e": _b64url_uint(numbers.e)}


TEST_PRIVATE_KEY, TEST_PUBLIC_COMPONENTS = _generate_key()
OTHER_PRIVATE_KEY, _ = _generate_key()

TEST_JWKS = {
    "keys": [
        {
            "kty": "RSA",
            "kid": "k1",
            "use": "sig",
            "alg": "RS256",
            **TEST_PUBLIC_COMPONENTS,
        }
    ]
}


def create_test_token(
    claims: dict | None = None,
    kid: str | None = "k1",
    private_key: str = TEST_PRIVATE_KEY,
    algorithm: str = "RS256",
) -> str:
    """Create a signed test JWT; claims override a valid default payload."""
    payload = {
        "sub": "user-123",
        "preferred_username": "testuser",
        "email": "testuser@example.com",
        "aud": AUDIENCE,
        "iss": PROVIDER_URL,
        "exp": int(time.time()) + 3600,
    }
    payload.update(claims or {})
    headers = {"kid": kid} if kid is not None else None
    return jwt.encode(payload, private_key, algorithm=algorithm, headers=headers)


class FakeClock:
    """Monotonic clock the tests advance by hand."""

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def config():
    """Create test config."""
    return AuthConfig(
        provider_url=PROVIDER_URL,
        audience=AUDIENCE,
        cache_ttl_seconds=300,
        http_timeout=5.0,
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture(autouse=True)
def _reset_validators():
    clear_all_validators()
    yield
    clear_all_validators()
