"""Identity provider settings loaded from environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from oidc_guard.config import AuthConfig

CACHE_TTL_DEFAULT = 300
HTTP_TIMEOUT_DEFAULT = 10.0


class IdpSettings(BaseSettings):
    """Identity provider settings read from IDP_* variables or a .env file."""

    model_config = SettingsConfigDict(env_prefix="IDP_", env_file=".env", extra="ignore")

    url: str
    audience: str
    cache_ttl_seconds: int = CACHE_TTL_DEFAULT
    http_timeout: float = HTTP_TIMEOUT_DEFAULT

    def to_config(self) -> AuthConfig:
        """Build the immutable validator configuration."""
        return AuthConfig(
            provider_url=self.url,
            audience=self.audience,
            cache_ttl_seconds=self.cache_ttl_seconds,
            http_timeout=self.http_timeout,
        )


def load_config() -> AuthConfig:
    """Read IDP_URL and IDP_AUDIENCE (plus optional tuning) from the environment."""
    return IdpSettings().to_config()
