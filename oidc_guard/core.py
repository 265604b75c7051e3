"""
Core authentication functions.
"""

import logging
from functools import lru_cache

from oidc_guard.claims import Claims
from oidc_guard.config import AuthConfig
from oidc_guard.errors import AuthenticationError, MissingToken
from oidc_guard.validator import TokenValidator

logger = logging.getLogger(__name__)


@lru_cache(maxsize=16)
def _get_validator(config: AuthConfig) -> TokenValidator:
    """
    Get or create the TokenValidator for the given config.

    This ensures every request for the same config shares one validator (and its caches).
    """
    return TokenValidator(config)


def parse_bearer_token(authorization: str | None) -> str:
    """
    Parse Bearer token from Authorization header.

    Args:
        authorization: Authorization header value (e.g., "Bearer eyJ...")

    Returns:
        The token string

    Raises:
        MissingToken: If the header is missing, uses another scheme, or has no token
    """
    if not authorization:
        raise MissingToken("Missing authorization header")

    parts = authorization.split()

    if len(parts) != 2:
        raise MissingToken("Invalid authorization header format")

    scheme, token = parts

    if scheme.lower() != "bearer":
        raise MissingToken(f"Invalid authentication scheme: {scheme}, expected Bearer")

    return token


async def verify_bearer_token(
    authorization: str | None,
    validator: TokenValidator,
) -> Claims:
    """
    Verify a Bearer token from an Authorization header.

    Args:
        authorization: Authorization header value (e.g., "Bearer eyJ...")
        validator: The validator holding provider metadata and JWKS caches

    Returns:
        Claims of the verified token

    Raises:
        AuthenticationError: If authentication fails for any reason

    Example:
        try:
            claims = await verify_bearer_token(request.headers.get("Authorization"), validator)
            print(f"User: {claims.preferred_username}")
        except AuthenticationError as e:
            print(f"Auth failed: {e.message} ({e.code})")
    """
    token = parse_bearer_token(authorization)

    try:
        claims = await validator.authenticate(token)
    except AuthenticationError as e:
        logger.warning(f"Token validation error: {e.message} ({e.code})")
        raise

    logger.debug(f"Token verified for user {claims.preferred_username}")
    return claims


def get_validator(config: AuthConfig) -> TokenValidator:
    """
    Get the process-wide TokenValidator for a config.

    Useful for direct cache operations like clearing.
    """
    return _get_validator(config)


def clear_validator_cache(config: AuthConfig) -> None:
    """Clear cached metadata and JWKS for a specific config."""
    _get_validator(config).clear_cache()


def clear_all_validators() -> None:
    """Forget every validator (and with it every cached metadata and JWKS)."""
    _get_validator.cache_clear()
