"""
Authentication error taxonomy.

Every failure raised by the validator is an AuthenticationError subclass.
Each class carries the HTTP status the request layer should answer with and
whether a Bearer challenge header belongs on the response.
"""


class AuthenticationError(Exception):
    """
    Authentication failed.

    Attributes:
        message: Human-readable error message
        code: Error code for programmatic handling
    """

    status_code: int = 401
    challenge: bool = True
    default_code: str = "auth_failed"

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code


class MissingToken(AuthenticationError):
    """No usable bearer credential was presented."""

    default_code = "missing_token"

    def __init__(self, message: str = "Missing or malformed Authorization header") -> None:
        super().__init__(message)


class InvalidToken(AuthenticationError):
    """
    The token failed structural decoding, signature verification, or claim checks.

    The message is fixed so that a bad signature cannot be told apart from a
    wrong audience, issuer, or an expired token.
    """

    default_code = "invalid_token"

    def __init__(self) -> None:
        super().__init__("The token provided is invalid")


class KeyNotFound(AuthenticationError):
    """The token references a key id absent from the provider's key set."""

    default_code = "key_not_found"

    def __init__(self, key_id: str | None) -> None:
        if key_id is None:
            message = "No key id in token header"
        else:
            message = f"Could not find a public key for the given token key id: {key_id}"
        super().__init__(message)
        self.key_id = key_id


class KeyConstructionError(AuthenticationError):
    """A key set entry could not be turned into a usable RSA public key."""

    status_code = 500
    challenge = False
    default_code = "key_construction"

    def __init__(self, key_id: str) -> None:
        super().__init__(f"Could not construct a valid RSA public key for key id: {key_id}")
        self.key_id = key_id


class ProviderUnreachable(AuthenticationError):
    """Fetching or decoding the discovery document or JWKS failed."""

    status_code = 500
    challenge = False
    default_code = "provider_unreachable"
