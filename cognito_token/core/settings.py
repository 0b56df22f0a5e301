"""Verifier configuration: environment defaults, config files, and the core config."""

from collections.abc import Mapping
from typing import Any

from pydantic import (
    AliasChoices,
    AliasGenerator,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

from cognito_token.core.errors import ConfigurationInvalid

DEFAULT_REGION = "us-east-1"
HTTP_TIMEOUT_DEFAULT = 10.0
ISSUER_TEMPLATE = "https://cognito-idp.{region}.amazonaws.com/{user_pool_id}"
JWKS_PATH = "/.well-known/jwks.json"

TOKEN_ORIGIN_INLINE = "id_token"
TOKEN_ORIGIN_FILE = "token_file"
TOKEN_ORIGIN_CODE = "code"


def _dashed(name: str) -> AliasChoices:
    """Accept both ``client_id`` and ``client-id`` spellings."""
    return AliasChoices(name, name.replace("_", "-"))


_OPTION_ALIASES = AliasGenerator(validation_alias=_dashed)


class ConfigOverrides(BaseModel):
    """Partial option set read from a JSON config file."""

    model_config = ConfigDict(alias_generator=_OPTION_ALIASES, extra="ignore")

    client_id: str | None = None
    user_pool_id: str | None = None
    region: str | None = None
    redirect_uri: str | None = None
    code: str | None = None
    oauth_url: str | None = None
    token_file: str | None = None
    id_token: str | None = None
    verify_exp: bool | None = None
    decode_only: bool | None = None
    http_timeout: float | None = None
    log_level: str | None = None


class EnvSettings(BaseSettings):
    """Option defaults taken from ``COGNITO_*`` environment variables."""

    model_config = SettingsConfigDict(env_prefix="COGNITO_")

    client_id: str | None = None
    user_pool_id: str | None = None
    region: str | None = None
    redirect_uri: str | None = None
    code: str | None = None
    oauth_url: str | None = None
    token_file: str | None = None
    id_token: str | None = None
    verify_exp: bool | None = None
    decode_only: bool | None = None
    http_timeout: float | None = None
    log_level: str = "info"


class TokenConfig(BaseModel):
    """Immutable configuration consumed by the verification pipeline.

    Exactly one token origin is used, in this order of precedence:
    ``id_token``, then ``token_file``, then the ``code`` + ``oauth_url``
    exchange.
    """

    model_config = ConfigDict(
        alias_generator=_OPTION_ALIASES,
        frozen=True,
    )

    client_id: str | None = None
    user_pool_id: str | None = None
    region: str = DEFAULT_REGION
    redirect_uri: str | None = None
    code: str | None = None
    oauth_url: str | None = None
    # A path or an already-open readable handle.
    token_file: Any = None
    id_token: str | None = None
    verify_exp: bool = True
    decode_only: bool = False
    http_timeout: float = Field(default=HTTP_TIMEOUT_DEFAULT, gt=0)

    @model_validator(mode="after")
    def _check_invariants(self) -> "TokenConfig":
        for name in ("client_id", "user_pool_id"):
            if not getattr(self, name):
                raise ConfigurationInvalid(f"{name} is a required argument", field=name)
        if self.token_origin is None:
            raise ConfigurationInvalid(
                "either provide a file containing a token (token_file), "
                "the token (id_token) or supply the code and the oauth_url"
            )
        if self.token_origin == TOKEN_ORIGIN_CODE and not self.redirect_uri:
            raise ConfigurationInvalid(
                "redirect_uri is required for the code exchange",
                field="redirect_uri",
            )
        return self

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> "TokenConfig":
        """Validate a merged option mapping, reporting type errors uniformly."""
        try:
            return cls.model_validate(dict(options))
        except ValidationError as exc:
            raise ConfigurationInvalid(str(exc)) from exc

    @property
    def token_origin(self) -> str | None:
        """Which of the three token origins will be used, if any."""
        if self.id_token:
            return TOKEN_ORIGIN_INLINE
        if self.token_file:
            return TOKEN_ORIGIN_FILE
        if self.code and self.oauth_url:
            return TOKEN_ORIGIN_CODE
        return None

    @property
    def issuer(self) -> str:
        """Expected ``iss`` claim for the user pool."""
        return ISSUER_TEMPLATE.format(region=self.region, user_pool_id=self.user_pool_id)

    @property
    def jwks_url(self) -> str:
        """Published key set location for the user pool."""
        return f"{self.issuer}{JWKS_PATH}"
