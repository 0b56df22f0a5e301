"""Compact JWS helpers: base64url coding, segment splitting, header parsing."""

import base64
import binascii
import json

from pydantic import ValidationError

from cognito_token.core.errors import MalformedToken
from cognito_token.crypto.types import TokenHeader

SEGMENT_COUNT = 3


def base64url_encode(data: bytes) -> str:
    """Encode bytes as base64url without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def base64url_decode(segment: str) -> bytes:
    """Decode a base64url segment, restoring any stripped padding."""
    text = segment.replace("-", "+").replace("_", "/")
    text += "=" * (-len(text) % 4)
    return base64.b64decode(text, validate=True)


def split_token(token: str) -> tuple[str, str, str]:
    """Split a compact token into header, payload and signature segments."""
    parts = token.split(".")
    if len(parts) != SEGMENT_COUNT:
        raise MalformedToken(
            f"Token must have {SEGMENT_COUNT} segments, found {len(parts)}"
        )
    if not all(parts):
        raise MalformedToken("Token contains an empty segment")
    header, payload, signature = parts
    return header, payload, signature


def decode_segment(segment: str, what: str) -> dict:
    """Decode one base64url JSON segment into an object."""
    try:
        value = json.loads(base64url_decode(segment))
    except (binascii.Error, ValueError) as exc:
        raise MalformedToken(f"Token {what} is not base64url-encoded JSON") from exc
    if not isinstance(value, dict):
        raise MalformedToken(f"Token {what} is not a JSON object")
    return value


def decode_header(segment: str) -> TokenHeader:
    """Parse the header segment and require a string ``kid``."""
    raw = decode_segment(segment, "header")
    try:
        return TokenHeader.model_validate(raw)
    except ValidationError as exc:
        raise MalformedToken("Token header has no usable kid") from exc
