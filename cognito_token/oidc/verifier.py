"""RS256 id_token verification against a user pool's published keys."""

from typing import Any

import httpx
import jwt
from jwt.types import Options

from cognito_token.core.errors import (
    AudienceMismatch,
    IssuerMismatch,
    MalformedToken,
    SignatureInvalid,
    TokenExpired,
    TokenNotYetValid,
    TokenVerificationError,
)
from cognito_token.core.logging import get_logger
from cognito_token.core.settings import TokenConfig
from cognito_token.crypto.jws import decode_header, decode_segment, split_token
from cognito_token.crypto.keys import jwk_to_public_key
from cognito_token.crypto.types import JWKEntry
from cognito_token.oidc.http import open_client
from cognito_token.oidc.jwks import KeySetFetcher
from cognito_token.oidc.token_source import TokenSource
from cognito_token.oidc.types import ClaimsResult

ALGORITHM = "RS256"


class TokenVerifier:
    """Checks a compact token's signature and claims.

    Phases run in order and the first failure is raised: split, header,
    key lookup, signature, then ``iss``/``aud``/``exp``. With
    ``decode_only`` the key is still looked up but nothing is enforced.
    """

    def __init__(
        self,
        config: TokenConfig,
        fetcher: KeySetFetcher | None = None,
        logger: Any = None,
    ) -> None:
        self._config = config
        self._log = get_logger(__name__, logger)
        self._fetcher = fetcher or KeySetFetcher(
            timeout=config.http_timeout, logger=logger
        )

    def verify(self, token: str) -> ClaimsResult:
        """Verify ``token`` and return its claims."""
        try:
            return self._verify(token)
        except TokenVerificationError as exc:
            self._log.warning("token_rejected", error=exc.code, reason=exc.message)
            raise

    def _verify(self, token: str) -> ClaimsResult:
        header_segment, payload_segment, _ = split_token(token)
        header = decode_header(header_segment)
        payload = decode_segment(payload_segment, "payload")
        self._log.debug("token_header", kid=header.kid, alg=header.alg)

        jwk = self._fetcher.get_signing_key(self._config.jwks_url, header.kid)

        if self._config.decode_only:
            self._log.debug("token_decoded_unverified", claims=sorted(payload))
            return ClaimsResult(
                claims=payload,
                header=header.model_dump(exclude_none=True),
                kid=header.kid,
                verified=False,
            )

        claims = self._validate(token, jwk, payload)
        self._log.debug("token_verified", sub=claims.get("sub"))
        return ClaimsResult(
            claims=claims,
            header=header.model_dump(exclude_none=True),
            kid=header.kid,
        )

    def _options(self) -> Options:
        verify_exp = self._config.verify_exp
        return {
            "verify_signature": True,
            "verify_exp": verify_exp,
            "verify_iss": True,
            "verify_aud": True,
            "require": ["exp"] if verify_exp else [],
        }

    def _validate(
        self, token: str, jwk: JWKEntry, payload: dict[str, Any]
    ) -> dict[str, Any]:
        """Run signature and claim checks, mapping library errors to ours."""
        config = self._config
        try:
            key = jwk_to_public_key(jwk)
            return jwt.decode(
                token,
                key,
                algorithms=[ALGORITHM],
                issuer=config.issuer,
                audience=config.client_id,
                options=self._options(),
            )
        except (jwt.InvalidSignatureError, jwt.InvalidAlgorithmError) as exc:
            raise SignatureInvalid(f"JWT validation failed: {exc}") from exc
        except jwt.ExpiredSignatureError as exc:
            raise TokenExpired("Token has expired", exp=payload.get("exp")) from exc
        except jwt.ImmatureSignatureError as exc:
            raise TokenNotYetValid(f"JWT validation failed: {exc}") from exc
        except jwt.InvalidIssuerError as exc:
            raise IssuerMismatch(config.issuer, payload.get("iss")) from exc
        except jwt.InvalidAudienceError as exc:
            raise AudienceMismatch(config.client_id, payload.get("aud")) from exc
        except jwt.MissingRequiredClaimError as exc:
            raise self._missing_claim(exc) from exc
        except (jwt.DecodeError, jwt.InvalidTokenError) as exc:
            raise MalformedToken(f"JWT validation failed: {exc}") from exc
        except Exception as exc:
            # Bad key material and other crypto-layer failures.
            raise SignatureInvalid(f"JWT validation failed: {exc}") from exc

    def _missing_claim(self, exc: jwt.MissingRequiredClaimError) -> TokenVerificationError:
        config = self._config
        if exc.claim == "iss":
            return IssuerMismatch(config.issuer, None)
        if exc.claim == "aud":
            return AudienceMismatch(config.client_id, None)
        if exc.claim == "exp":
            return TokenExpired("Token has no exp claim")
        return MalformedToken(f"JWT validation failed: {exc}")


def decode_claims(
    config: TokenConfig,
    client: httpx.Client | None = None,
    logger: Any = None,
) -> ClaimsResult:
    """Acquire the configured token and verify it.

    One HTTP client serves both the code exchange and the JWKS fetch.
    """
    with open_client(client, config.http_timeout) as http:
        token = TokenSource(config, client=http, logger=logger).resolve()
        fetcher = KeySetFetcher(client=http, timeout=config.http_timeout, logger=logger)
        return TokenVerifier(config, fetcher=fetcher, logger=logger).verify(token)
