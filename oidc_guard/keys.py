"""
RSA verifying key construction from JWKS entries.
"""

import logging

from jose import jwk
from jose.backends.base import Key
from jose.constants import ALGORITHMS
from jose.exceptions import JOSEError

from oidc_guard.errors import KeyConstructionError
from oidc_guard.models import SigningKey

logger = logging.getLogger(__name__)

# Header-declared algorithms are only honored within this family, since every
# verifying key is built as an RSA key.
RSA_ALGORITHMS = frozenset(ALGORITHMS.RSA_DS)


def build_verifying_key(signing_key: SigningKey, algorithm: str | None = None) -> Key:
    """
    Construct an RSA public key from a JWKS entry's modulus and exponent.

    Args:
        signing_key: The JWKS entry
        algorithm: Algorithm the key will verify with; defaults to the entry's 'alg'

    Returns:
        A python-jose Key usable with jwt.decode

    Raises:
        KeyConstructionError: If the entry is not an RSA signing key or its
            modulus/exponent do not form a valid public key
    """
    alg = algorithm or signing_key.alg
    if alg not in RSA_ALGORITHMS:
        logger.error(f"Key {signing_key.kid} requested with non-RSA algorithm {alg}")
        raise KeyConstructionError(signing_key.kid)

    try:
        return jwk.construct(signing_key.to_jwk(), algorithm=alg)
    except (JOSEError, ValueError, TypeError) as e:
        logger.error(f"Could not construct RSA key {signing_key.kid}: {e}")
        raise KeyConstructionError(signing_key.kid) from e
