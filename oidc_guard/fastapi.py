"""
FastAPI dependency factories for bearer token authentication.

Usage:
    from oidc_guard import AuthConfig, Claims, require_claims

    config = AuthConfig(provider_url="https://idp.example.com/realms/contacts", audience="contacts-api")

    @app.get("/api/contacts")
    async def list_contacts(claims: Claims = Depends(require_claims(config))):
        return {"owner": claims.preferred_username}
"""

import logging
from collections.abc import Callable
from typing import Annotated

from fastapi import Header, HTTPException, status

from oidc_guard.claims import Claims
from oidc_guard.config import AuthConfig
from oidc_guard.core import get_validator, verify_bearer_token
from oidc_guard.errors import AuthenticationError

logger = logging.getLogger(__name__)

BEARER_CHALLENGE = 'Bearer error="invalid_token"'


def to_http_exception(error: AuthenticationError) -> HTTPException:
    """
    Map an authentication error to the response the client sees.

    Client-side failures become 401 with a Bearer challenge. Server-side failures
    (provider unreachable, unusable key) become an identical generic 500.
    """
    if error.status_code >= 500:
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal Server Error",
        )

    headers = {"WWW-Authenticate": BEARER_CHALLENGE} if error.challenge else None
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=error.message,
        headers=headers,
    )


def require_claims(
    config: AuthConfig,
) -> Callable[..., Claims]:
    """
    Create a FastAPI dependency that requires valid JWT authentication.

    Returns Claims if the token is valid, raises 401 or 500 otherwise.

    Args:
        config: Authentication configuration

    Returns:
        FastAPI dependency function

    Example:
        @app.get("/api/profile")
        async def get_profile(claims: Claims = Depends(require_claims(config))):
            return {"username": claims.preferred_username, "email": claims.email}
    """

    async def dependency(
        authorization: Annotated[str | None, Header()] = None,
    ) -> Claims:
        try:
            return await verify_bearer_token(authorization, get_validator(config))
        except AuthenticationError as e:
            if e.status_code >= 500:
                logger.error(f"Authentication unavailable: {e.message} ({e.code})")
            raise to_http_exception(e) from e

    return dependency


def optional_claims(
    config: AuthConfig,
) -> Callable[..., Claims | None]:
    """
    Create a FastAPI dependency that optionally validates JWT authentication.

    Returns Claims if a valid token is provided, None if there is no token or it
    is rejected. Server-side failures still raise 500, since they say nothing
    about the caller's credentials.

    Example:
        @app.get("/api/public")
        async def public_endpoint(claims: Claims | None = Depends(optional_claims(config))):
            if claims:
                return {"username": claims.preferred_username, "authenticated": True}
            return {"authenticated": False}
    """

    async def dependency(
        authorization: Annotated[str | None, Header()] = None,
    ) -> Claims | None:
        if not authorization:
            return None

        try:
            return await verify_bearer_token(authorization, get_validator(config))
        except AuthenticationError as e:
            if e.status_code >= 500:
                logger.error(f"Authentication unavailable: {e.message} ({e.code})")
                raise to_http_exception(e) from e
            return None

    return dependency
