"""JWK to RSA public key conversion."""

from cryptography.hazmat.primitives.asymmetric.rsa import (
    RSAPublicKey,
    RSAPublicNumbers,
)

from cognito_token.crypto.jws import base64url_decode
from cognito_token.crypto.types import JWKEntry

RSA_KEY_TYPE = "RSA"


class InvalidKeyMaterial(ValueError):
    """A JWK record cannot be turned into an RSA public key."""


def _base64url_to_int(value: str) -> int:
    """Decode an unpadded base64url big-endian integer."""
    if not value:
        raise InvalidKeyMaterial("empty key parameter")
    return int.from_bytes(base64url_decode(value), byteorder="big")


def jwk_to_public_key(entry: JWKEntry) -> RSAPublicKey:
    """Build an RSA public key from the ``n`` and ``e`` members of a JWK."""
    if entry.kty != RSA_KEY_TYPE:
        raise InvalidKeyMaterial(f"unsupported key type {entry.kty!r}")
    numbers = RSAPublicNumbers(
        e=_base64url_to_int(entry.e),
        n=_base64url_to_int(entry.n),
    )
    return numbers.public_key()

