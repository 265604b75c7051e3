"""
oidc-guard: Bearer token validation against an OpenID Connect identity provider.

This library provides:
- Discovery of issuer and JWKS location from the provider's openid-configuration
- TTL-cached metadata and JWKS shared by concurrent requests
- RSA signature, audience, issuer and expiry checks with a typed error taxonomy
- FastAPI dependencies that map failures to 401/500 responses

Quick start:
    from oidc_guard import Claims, load_config, require_claims

    config = load_config()  # IDP_URL, IDP_AUDIENCE

    @app.get("/api/contacts")
    async def list_contacts(claims: Claims = Depends(require_claims(config))):
        return {"owner": claims.preferred_username}
"""

from oidc_guard.claims import Claims
from oidc_guard.config import AuthConfig
from oidc_guard.core import get_validator, parse_bearer_token, verify_bearer_token
from oidc_guard.errors import (
    AuthenticationError,
    InvalidToken,
    KeyConstructionError,
    KeyNotFound,
    MissingToken,
    ProviderUnreachable,
)
from oidc_guard.fastapi import optional_claims, require_claims, to_http_exception
from oidc_guard.models import KeySet, ProviderMetadata, SigningKey
from oidc_guard.settings import IdpSettings, load_config
from oidc_guard.validator import TokenValidator

__version__ = "0.1.0"

__all__ = [
    # Config
    "AuthConfig",
    "IdpSettings",
    "load_config",
    # Claims and provider documents
    "Claims",
    "ProviderMetadata",
    "SigningKey",
    "KeySet",
    # Validator
    "TokenValidator",
    "get_validator",
    "parse_bearer_token",
    "verify_bearer_token",
    # Errors
    "AuthenticationError",
    "MissingToken",
    "InvalidToken",
    "KeyNotFound",
    "KeyConstructionError",
    "ProviderUnreachable",
    # FastAPI dependencies
    "require_claims",
    "optional_claims",
    "to_http_exception",
]
