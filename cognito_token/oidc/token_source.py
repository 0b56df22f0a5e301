"""Resolution of the raw id_token from its configured origin."""

import os
from typing import IO, Any
from urllib.parse import quote, urlencode

import httpx
from pydantic import ValidationError

from cognito_token.core.errors import (
    NetworkTimeout,
    ResourceUnavailable,
    TokenExchangeFailed,
    TokenNotFound,
)
from cognito_token.core.logging import get_logger
from cognito_token.core.settings import (
    TOKEN_ORIGIN_CODE,
    TOKEN_ORIGIN_FILE,
    TOKEN_ORIGIN_INLINE,
    TokenConfig,
)
from cognito_token.oidc.http import open_client
from cognito_token.oidc.types import TokenResponse

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def _is_handle(source: Any) -> bool:
    return callable(getattr(source, "read", None))


def _read_all(source: str | os.PathLike | IO) -> str | bytes:
    """Read a whole file, given either a path or an open handle."""
    if _is_handle(source):
        try:
            return source.read()
        except (OSError, ValueError) as exc:
            raise ResourceUnavailable(f"could not read {source!r}") from exc
    try:
        with open(source, "rb") as fh:
            return fh.read()
    except OSError as exc:
        raise ResourceUnavailable(
            f"could not open {source} for reading", path=os.fspath(source)
        ) from exc


def read_token_file(source: str | os.PathLike | IO) -> str:
    """Extract ``id_token`` from a JSON token file or handle.

    Handles passed in by the caller are left open.
    """
    content = _read_all(source)
    try:
        document = TokenResponse.model_validate_json(content)
    except ValidationError as exc:
        raise TokenNotFound("token file is not a JSON object with an id_token") from exc
    if not document.id_token:
        raise TokenNotFound("token file has no id_token element")
    return document.id_token


def encode_form(params: dict[str, str]) -> str:
    """Percent-encode form fields (spaces as %20)."""
    return urlencode(params, quote_via=quote)


class TokenSource:
    """Produces the raw token string for one verification call."""

    def __init__(
        self,
        config: TokenConfig,
        client: httpx.Client | None = None,
        logger: Any = None,
    ) -> None:
        self._config = config
        self._client = client
        self._log = get_logger(__name__, logger)

    def resolve(self) -> str:
        """Return the token from the highest-precedence configured origin."""
        origin = self._config.token_origin
        self._log.debug("token_source", origin=origin)
        if origin == TOKEN_ORIGIN_INLINE:
            return self._config.id_token
        if origin == TOKEN_ORIGIN_FILE:
            token = read_token_file(self._config.token_file)
            self._log.debug("token_read_from_file")
            return token
        if origin == TOKEN_ORIGIN_CODE:
            return self.exchange_code()
        raise TokenNotFound("no token origin configured")

    def exchange_code(self) -> str:
        """Redeem the authorization code at the token endpoint."""
        config = self._config
        body = encode_form(
            {
                "grant_type": "authorization_code",
                "client_id": config.client_id,
                "code": config.code,
                "redirect_uri": config.redirect_uri,
            }
        )
        try:
            with open_client(self._client, config.http_timeout) as client:
                response = client.post(
                    config.oauth_url,
                    content=body,
                    headers={"Content-Type": FORM_CONTENT_TYPE},
                )
        except httpx.TimeoutException as exc:
            raise NetworkTimeout(
                f"Timed out exchanging code at {config.oauth_url}", url=config.oauth_url
            ) from exc
        except httpx.HTTPError as exc:
            raise TokenExchangeFailed(f"Failed to fetch token: {exc}") from exc

        if not response.is_success:
            raise TokenExchangeFailed(
                f"Failed to fetch token ({response.status_code})",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            document = TokenResponse.model_validate_json(response.content)
        except ValidationError as exc:
            raise TokenExchangeFailed(
                "could not decode token response",
                status_code=response.status_code,
                body=response.text,
            ) from exc
        if not document.id_token:
            raise TokenExchangeFailed(
                "token response has no id_token",
                status_code=response.status_code,
                body=response.text,
            )
        self._log.debug("token_exchanged", status_code=response.status_code)
        return document.id_token
