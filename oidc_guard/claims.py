"""
Token claims model.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Claims:
    """
    Verified JWT claims.

    Attributes:
        sub: Subject identifier, if the provider sent one
        preferred_username: Username to display for the caller
        email: Email address, if present
        aud: Audience the token was accepted for
        iss: Issuer of the token
        exp: Expiration timestamp (Unix epoch)
        raw_payload: Full decoded JWT payload for accessing custom claims

    Example:
        claims = Claims(
            sub="f3b1c2d4",
            preferred_username="testuser",
            email="testuser@example.com",
            aud="contacts-api",
            iss="https://idp.example.com/realms/contacts",
            exp=1737500000,
            raw_payload={...},
        )
    """

    sub: str | None
    preferred_username: str
    email: str | None
    aud: str
    iss: str
    exp: int
    raw_payload: dict[str, Any]

    def get_claim(self, key: str, default: Any = None) -> Any:
        """Get a custom claim from the raw payload."""
        return self.raw_payload.get(key, default)

    @classmethod
    def from_payload(cls, payload: dict[str, Any], audience: str) -> "Claims":
        """
        Create Claims from a verified JWT payload.

        Args:
            payload: Decoded JWT payload dictionary
            audience: The audience the token was validated against. A token whose
                'aud' is a list is reported with this value.

        Returns:
            Claims instance

        Raises:
            ValueError: If required claims are missing or have the wrong type
        """
        username = payload.get("preferred_username")
        if not isinstance(username, str):
            raise ValueError("Token missing required 'preferred_username' claim")

        aud = payload.get("aud")
        if isinstance(aud, list):
            if audience not in aud:
                raise ValueError("Token audience does not include the expected audience")
            aud = audience
        if not isinstance(aud, str):
            raise ValueError("Token missing required 'aud' claim")

        iss = payload.get("iss")
        if not isinstance(iss, str):
            raise ValueError("Token missing required 'iss' claim")

        exp = payload.get("exp")
        if exp is None or isinstance(exp, bool):
            raise ValueError("Token missing required 'exp' claim")

        sub = payload.get("sub")
        email = payload.get("email")

        return cls(
            sub=str(sub) if sub is not None else None,
            preferred_username=username,
            email=str(email) if email is not None else None,
            aud=aud,
            iss=iss,
            exp=int(exp),
            raw_payload=payload,
        )
