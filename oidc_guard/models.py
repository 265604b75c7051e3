"""
Provider metadata and JWKS documents.
"""

from dataclasses import dataclass
from typing import Any


def _require_str(data: dict[str, Any], field: str, source: str) -> str:
    value = data.get(field)
    if not isinstance(value, str):
        raise ValueError(f"Invalid {source}: missing '{field}' field")
    return value


@dataclass(frozen=True)
class ProviderMetadata:
    """
    Subset of the OpenID configuration document the validator relies on.

    Attributes:
        issuer: Issuer identity; must equal the 'iss' claim of accepted tokens
        jwks_uri: Location of the provider's JSON Web Key Set
    """

    issuer: str
    jwks_uri: str

    @classmethod
    def from_json(cls, data: Any) -> "ProviderMetadata":
        """
        Parse a discovery document.

        Raises:
            ValueError: If the document is not an object or lacks issuer/jwks_uri
        """
        if not isinstance(data, dict):
            raise ValueError("Invalid discovery document: expected a JSON object")
        return cls(
            issuer=_require_str(data, "issuer", "discovery document"),
            jwks_uri=_require_str(data, "jwks_uri", "discovery document"),
        )


@dataclass(frozen=True)
class SigningKey:
    """
    One RSA public key from a JWKS.

    Attributes:
        kid: Key identifier, unique within a key set
        alg: Algorithm the provider declares for the key (e.g., "RS256")
        n: RSA modulus, base64url-encoded
        e: RSA public exponent, base64url-encoded
        kty: Key type, "RSA" unless the provider says otherwise
    """

    kid: str
    alg: str
    n: str
    e: str
    kty: str = "RSA"

    @classmethod
    def from_json(cls, data: Any) -> "SigningKey":
        if not isinstance(data, dict):
            raise ValueError("Invalid JWKS entry: expected a JSON object")
        return cls(
            kid=_require_str(data, "kid", "JWKS entry"),
            alg=_require_str(data, "alg", "JWKS entry"),
            n=_require_str(data, "n", "JWKS entry"),
            e=_require_str(data, "e", "JWKS entry"),
            kty=data.get("kty") or "RSA",
        )

    def to_jwk(self) -> dict[str, str]:
        """Render the key as a JWK dictionary."""
        return {"kty": self.kty, "kid": self.kid, "alg": self.alg, "n": self.n, "e": self.e}


@dataclass(frozen=True)
class KeySet:
    """Signing keys in the order the provider published them."""

    keys: tuple[SigningKey, ...]

    def find(self, kid: str) -> SigningKey | None:
        """Return the key whose identifier equals kid, if any."""
        for key in self.keys:
            if key.kid == kid:
                return key
        return None

    def __len__(self) -> int:
        return len(self.keys)

    @classmethod
    def from_json(cls, data: Any) -> "KeySet":
        """
        Parse a JWKS document.

        Raises:
            ValueError: If 'keys' is missing or any key lacks kid/alg/n/e
        """
        if not isinstance(data, dict) or not isinstance(data.get("keys"), list):
            raise ValueError("Invalid JWKS response: missing 'keys' field")
        return cls(keys=tuple(SigningKey.from_json(key) for key in data["keys"]))
