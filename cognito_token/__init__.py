"""Verification of Amazon Cognito id_tokens against the user pool's JWKS."""

from cognito_token.core.errors import (
    AudienceMismatch,
    ConfigurationInvalid,
    IssuerMismatch,
    JwksFetchFailed,
    JwksParseFailed,
    KeyNotFound,
    MalformedToken,
    NetworkTimeout,
    ResourceUnavailable,
    SignatureInvalid,
    TokenExchangeFailed,
    TokenExpired,
    TokenNotFound,
    TokenNotYetValid,
    TokenVerificationError,
)
from cognito_token.core.settings import TokenConfig
from cognito_token.oidc.jwks import KeySetFetcher
from cognito_token.oidc.token_source import TokenSource
from cognito_token.oidc.types import ClaimsResult
from cognito_token.oidc.verifier import TokenVerifier, decode_claims

__version__ = "0.1.0"

__all__ = [
    "AudienceMismatch",
    "ClaimsResult",
    "ConfigurationInvalid",
    "IssuerMismatch",
    "JwksFetchFailed",
    "JwksParseFailed",
    "KeyNotFound",
    "KeySetFetcher",
    "MalformedToken",
    "NetworkTimeout",
    "ResourceUnavailable",
    "SignatureInvalid",
    "TokenConfig",
    "TokenExchangeFailed",
    "TokenExpired",
    "TokenNotFound",
    "TokenNotYetValid",
    "TokenSource",
    "TokenVerificationError",
    "TokenVerifier",
    "decode_claims",
]
