"""Error taxonomy for token acquisition and verification."""

from typing import Any


class TokenVerificationError(Exception):
    """Base class for every failure raised by the pipeline."""

    code = "token_verification_error"

    def __init__(self, message: str, **details: Any) -> None:
        self.message = message
        self.details = {k: v for k, v in details.items() if v is not None}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Render as an OAuth-style error document."""
        return {"error": self.code, "error_description": self.message, **self.details}


class ConfigurationInvalid(TokenVerificationError):
    code = "configuration_invalid"


class ResourceUnavailable(TokenVerificationError):
    code = "resource_unavailable"


class TokenNotFound(TokenVerificationError):
    code = "token_not_found"


class TokenExchangeFailed(TokenVerificationError):
    """The authorization-code exchange did not yield an id_token."""

    code = "token_exchange_failed"

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        body: str | None = None,
    ) -> None:
        super().__init__(message, status_code=status_code, body=body)
        self.status_code = status_code
        self.body = body


class NetworkTimeout(TokenVerificationError):
    code = "network_timeout"


class MalformedToken(TokenVerificationError):
    code = "malformed_token"


class JwksFetchFailed(TokenVerificationError):
    code = "jwks_fetch_failed"

    def __init__(
        self, message: str, *, url: str, status_code: int | None = None
    ) -> None:
        super().__init__(message, url=url, status_code=status_code)
        self.url = url
        self.status_code = status_code


class JwksParseFailed(TokenVerificationError):
    code = "jwks_parse_failed"


class KeyNotFound(TokenVerificationError):
    code = "key_not_found"

    def __init__(self, kid: str) -> None:
        super().__init__(f"No matching key found for kid={kid}", kid=kid)
        self.kid = kid


class SignatureInvalid(TokenVerificationError):
    code = "signature_invalid"


class IssuerMismatch(TokenVerificationError):
    code = "issuer_mismatch"

    def __init__(self, expected: str, actual: Any) -> None:
        super().__init__(
            f"Token issuer {actual!r} does not match {expected!r}",
            expected=expected,
            actual=actual,
        )
        self.expected = expected
        self.actual = actual


class AudienceMismatch(TokenVerificationError):
    code = "audience_mismatch"

    def __init__(self, expected: str, actual: Any) -> None:
        super().__init__(
            f"Token audience {actual!r} does not include {expected!r}",
            expected=expected,
            actual=actual,
        )
        self.expected = expected
        self.actual = actual


class TokenExpired(TokenVerificationError):
    code = "token_expired"


class TokenNotYetValid(TokenVerificationError):
    code = "token_not_yet_valid"
