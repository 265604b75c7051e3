"""
Validator configuration.
"""

from dataclasses import dataclass

DISCOVERY_PATH = "/.well-known/openid-configuration"


@dataclass(frozen=True)
class AuthConfig:
    """
    Configuration for bearer token validation against an OpenID Connect provider.

    Attributes:
        provider_url: Base URL of the identity provider (e.g., "https://idp.example.com/realms/contacts")
        audience: Audience every accepted token must carry in its 'aud' claim
        cache_ttl_seconds: How long discovery metadata and JWKS stay fresh (default: 300 = 5 minutes)
        http_timeout: Timeout for discovery and JWKS requests (default: 10.0 seconds)

    Example:
        config = AuthConfig(
            provider_url="https://idp.example.com/realms/contacts",
            audience="contacts-api",
        )
    """

    provider_url: str
    audience: str
    cache_ttl_seconds: int = 300
    http_timeout: float = 10.0

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not self.provider_url:
            raise ValueError("provider_url is required")
        if not self.audience:
            raise ValueError("audience is required")
        if self.cache_ttl_seconds < 0:
            raise ValueError("cache_ttl_seconds must be non-negative")
        if self.http_timeout <= 0:
            raise ValueError("http_timeout must be positive")

    @property
    def discovery_url(self) -> str:
        """URL of the provider's OpenID configuration document."""
        return self.provider_url.rstrip("/") + DISCOVERY_PATH
