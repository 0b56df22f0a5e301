"""Retrieval of a user pool's published signing keys."""

from typing import Any

import httpx
from pydantic import ValidationError

from cognito_token.core.errors import (
    JwksFetchFailed,
    JwksParseFailed,
    KeyNotFound,
    NetworkTimeout,
)
from cognito_token.core.logging import get_logger
from cognito_token.core.settings import HTTP_TIMEOUT_DEFAULT
from cognito_token.crypto.types import JWKEntry, JWKSResponse
from cognito_token.oidc.http import open_client


class KeySetFetcher:
    """Fetches a JWKS document and selects a key by ``kid``.

    Every call goes to the network; there is no cache and no retry.
    """

    def __init__(
        self,
        client: httpx.Client | None = None,
        timeout: float = HTTP_TIMEOUT_DEFAULT,
        logger: Any = None,
    ) -> None:
        self._client = client
        self._timeout = timeout
        self._log = get_logger(__name__, logger)

    def fetch(self, jwks_url: str) -> JWKSResponse:
        """GET and parse the key set at ``jwks_url``."""
        try:
            with open_client(self._client, self._timeout) as client:
                response = client.get(jwks_url)
        except httpx.TimeoutException as exc:
            raise NetworkTimeout(f"Timed out fetching JWKS from {jwks_url}", url=jwks_url) from exc
        except httpx.HTTPError as exc:
            raise JwksFetchFailed(f"Failed to fetch JWKS: {exc}", url=jwks_url) from exc

        self._log.debug("jwks_fetched", url=jwks_url, status_code=response.status_code)
        if not response.is_success:
            raise JwksFetchFailed(
                f"Failed to fetch JWKS ({response.status_code})",
                url=jwks_url,
                status_code=response.status_code,
            )

        try:
            return JWKSResponse.model_validate_json(response.content)
        except ValidationError as exc:
            raise JwksParseFailed(f"Malformed JWKS document at {jwks_url}", url=jwks_url) from exc

    def get_signing_key(self, jwks_url: str, kid: str) -> JWKEntry:
        """Return the first published key whose ``kid`` equals ``kid``."""
        jwks = self.fetch(jwks_url)
        jwk = jwks.find(kid)
        if jwk is None:
            self._log.debug("jwks_kid_missing", kid=kid, available=[k.kid for k in jwks.keys])
            raise KeyNotFound(kid)
        self._log.debug("jwks_key_selected", kid=kid, alg=jwk.alg)
        return jwk
