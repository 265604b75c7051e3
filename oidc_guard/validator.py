"""
Bearer token validator backed by OpenID Connect discovery and a TTL-cached JWKS.
"""

import logging
import time
from typing import Any, Callable

import httpx
from jose import jwt
from jose.backends.base import Key
from jose.exceptions import JOSEError

from oidc_guard.cache import CacheSlot
from oidc_guard.claims import Claims
from oidc_guard.config import AuthConfig
from oidc_guard.errors import InvalidToken, KeyNotFound, ProviderUnreachable
from oidc_guard.keys import RSA_ALGORITHMS, build_verifying_key
from oidc_guard.models import KeySet, ProviderMetadata

logger = logging.getLogger(__name__)


class TokenValidator:
    """
    Validates RS-signed JWTs issued by an OpenID Connect provider.

    Features:
    - Discovers issuer and JWKS location from {provider_url}/.well-known/openid-configuration
    - Caches discovery metadata and JWKS independently for the configured TTL (default: 5 minutes)
    - Verifies signature, audience, issuer and expiry; returns typed Claims
    - Safe for concurrent use from many coroutines. Callers that find a slot stale
      at the same moment each fetch; there is no single-flight coalescing.

    Every failure is raised as an AuthenticationError subclass and nothing is
    retried: a provider outage fails the current request.

    Example:
        validator = TokenValidator(config)
        claims = await validator.authenticate(token)
    """

    def __init__(
        self,
        config: AuthConfig,
        http_client: httpx.AsyncClient | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config
        self._http_client = http_client
        self._metadata: CacheSlot[ProviderMetadata] = CacheSlot(config.cache_ttl_seconds, clock)
        self._keyset: CacheSlot[KeySet] = CacheSlot(config.cache_ttl_seconds, clock)

    async def _fetch_json(self, url: str) -> Any:
        """
        GET a JSON document from the provider.

        Raises:
            ProviderUnreachable: On transport errors, timeouts, non-200 responses
                or a body that is not JSON
        """
        try:
            if self._http_client is not None:
                response = await self._http_client.get(url, timeout=self.config.http_timeout)
            else:
                async with httpx.AsyncClient(timeout=self.config.http_timeout) as client:
                    response = await client.get(url)

            if response.status_code != 200:
                raise ProviderUnreachable(f"HTTP {response.status_code} from {url}")

            return response.json()

        except httpx.HTTPError as e:
            raise ProviderUnreachable(f"HTTP error fetching {url}: {e}") from e
        except ValueError as e:
            raise ProviderUnreachable(f"Invalid JSON from {url}: {e}") from e

    async def get_metadata(self) -> ProviderMetadata:
        """
        Get the provider's discovery metadata, fetching it if the cache is empty or stale.

        Raises:
            ProviderUnreachable: If the discovery document cannot be fetched or parsed
        """
        cached = self._metadata.get()
        if cached is not None:
            logger.debug("Using cached OIDC configuration")
            return cached

        url = self.config.discovery_url
        logger.info(f"Fetching OIDC configuration from {url}")
        document = await self._fetch_json(url)
        try:
            metadata = ProviderMetadata.from_json(document)
        except ValueError as e:
            raise ProviderUnreachable(str(e)) from e

        return self._metadata.store(metadata)

    async def get_keyset(self) -> KeySet:
        """
        Get the provider's JWKS, fetching it if the cache is empty or stale.

        A stale JWKS is always refetched from the jwks_uri of fresh metadata.

        Raises:
            ProviderUnreachable: If metadata or JWKS cannot be fetched or parsed
        """
        cached = self._keyset.get()
        if cached is not None:
            logger.debug("Using cached JWKS")
            return cached

        metadata = await self.get_metadata()
        logger.info(f"Fetching JWKS from {metadata.jwks_uri}")
        document = await self._fetch_json(metadata.jwks_uri)
        try:
            keyset = KeySet.from_json(document)
        except ValueError as e:
            raise ProviderUnreachable(str(e)) from e

        logger.info(
            f"JWKS cache updated with {len(keyset)} keys, "
            f"expires in {self.config.cache_ttl_seconds}s"
        )
        return self._keyset.store(keyset)

    async def get_verifying_key(self, key_id: str, algorithm: str | None = None) -> Key:
        """
        Get the RSA public key whose identifier equals key_id.

        Args:
            key_id: Key ID from the token header
            algorithm: Algorithm to verify with; defaults to the key's declared 'alg'

        Raises:
            KeyNotFound: If no key in the current JWKS has this identifier
            KeyConstructionError: If the key's modulus/exponent are unusable
            ProviderUnreachable: If the JWKS cannot be fetched
        """
        keyset = await self.get_keyset()
        signing_key = keyset.find(key_id)
        if signing_key is None:
            raise KeyNotFound(key_id)
        return build_verifying_key(signing_key, algorithm)

    async def authenticate(self, token: str) -> Claims:
        """
        Verify a JWT and return its claims.

        The signature is checked with the algorithm named in the token header,
        which must be one of RS256/RS384/RS512. Audience must match the configured
        audience, issuer must match the provider metadata, and the token must not
        be expired. No clock-skew leeway is applied.

        Args:
            token: Raw JWT string

        Returns:
            Claims from the verified payload

        Raises:
            InvalidToken: Undecodable token, unsupported algorithm, bad signature,
                or any audience/issuer/expiry/required-claim failure
            KeyNotFound: Header has no 'kid', or the kid is not in the JWKS
            KeyConstructionError: The matching JWKS entry is unusable
            ProviderUnreachable: Discovery or JWKS fetch failed
        """
        try:
            header = jwt.get_unverified_header(token)
        except JOSEError as e:
            logger.debug(f"Invalid token header: {e}")
            raise InvalidToken() from e

        # An empty or non-string kid cannot name a key, so it counts as missing.
        kid = header.get("kid")
        if not isinstance(kid, str) or not kid:
            raise KeyNotFound(None)

        algorithm = header.get("alg")
        if not isinstance(algorithm, str) or algorithm not in RSA_ALGORITHMS:
            logger.debug(f"Rejected token signed with algorithm {algorithm}")
            raise InvalidToken()

        verifying_key = await self.get_verifying_key(kid, algorithm)
        metadata = await self.get_metadata()

        try:
            payload = jwt.decode(
                token,
                verifying_key,
                algorithms=[algorithm],
                audience=self.config.audience,
                issuer=metadata.issuer,
                options={"leeway": 0},
            )
            return Claims.from_payload(payload, self.config.audience)
        except (JOSEError, ValueError, TypeError) as e:
            logger.debug(f"Token verification failed: {e}")
            raise InvalidToken() from e

    def clear_cache(self) -> None:
        """Drop cached metadata and JWKS. Useful for testing or forced refresh."""
        self._metadata.clear()
        self._keyset.clear()
        logger.debug("OIDC configuration and JWKS caches cleared")

    @property
    def cache_valid(self) -> bool:
        """Check if both metadata and JWKS are currently fresh."""
        return self._metadata.is_fresh and self._keyset.is_fresh

    @property
    def cache_expires_in(self) -> float | None:
        """Seconds until the JWKS cache goes stale, or None if nothing is cached."""
        return self._keyset.expires_in
