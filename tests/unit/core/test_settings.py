"""Tests for TokenConfig validation and option layering models."""

import io

import pytest
from pydantic import ValidationError

from cognito_token.core.errors import ConfigurationInvalid
from cognito_token.core.settings import (
    DEFAULT_REGION,
    ConfigOverrides,
    EnvSettings,
    TokenConfig,
)
from tests.fakes import CLIENT_ID, ISSUER, JWKS_URL, OAUTH_URL, REDIRECT_URI, USER_POOL_ID


class TestRequiredFields:
    """client_id and user_pool_id are always required."""

    def test_missing_client_id(self) -> None:
        with pytest.raises(ConfigurationInvalid) as exc_info:
            TokenConfig(user_pool_id=USER_POOL_ID, id_token="a.b.c")
        assert exc_info.value.details["field"] == "client_id"

    def test_missing_user_pool_id(self) -> None:
        with pytest.raises(ConfigurationInvalid) as exc_info:
            TokenConfig(client_id=CLIENT_ID, id_token="a.b.c")
        assert exc_info.value.details["field"] == "user_pool_id"

    def test_empty_string_counts_as_missing(self) -> None:
        with pytest.raises(ConfigurationInvalid):
            TokenConfig(client_id="", user_pool_id=USER_POOL_ID, id_token="a.b.c")


class TestTokenOrigin:
    """Exactly one token origin must be satisfiable."""

    def test_no_origin_rejected(self) -> None:
        with pytest.raises(ConfigurationInvalid):
            TokenConfig(client_id=CLIENT_ID, user_pool_id=USER_POOL_ID)

    def test_code_without_oauth_url_rejected(self) -> None:
        with pytest.raises(ConfigurationInvalid):
            TokenConfig(
                client_id=CLIENT_ID,
                user_pool_id=USER_POOL_ID,
                code="abc",
                redirect_uri=REDIRECT_URI,
            )

    def test_code_exchange_requires_redirect_uri(self) -> None:
        with pytest.raises(ConfigurationInvalid) as exc_info:
            TokenConfig(
                client_id=CLIENT_ID,
                user_pool_id=USER_POOL_ID,
                code="abc",
                oauth_url=OAUTH_URL,
            )
        assert exc_info.value.details["field"] == "redirect_uri"

    def test_inline_token(self) -> None:
        config = TokenConfig(client_id=CLIENT_ID, user_pool_id=USER_POOL_ID, id_token="a.b.c")
        assert config.token_origin == "id_token"

    def test_token_file_path(self) -> None:
        config = TokenConfig(
            client_id=CLIENT_ID, user_pool_id=USER_POOL_ID, token_file="token.json"
        )
        assert config.token_origin == "token_file"

    def test_token_file_handle(self) -> None:
        handle = io.StringIO('{"id_token": "a.b.c"}')
        config = TokenConfig(client_id=CLIENT_ID, user_pool_id=USER_POOL_ID, token_file=handle)
        assert config.token_file is handle

    def test_code_exchange(self) -> None:
        config = TokenConfig(
            client_id=CLIENT_ID,
            user_pool_id=USER_POOL_ID,
            code="abc",
            oauth_url=OAUTH_URL,
            redirect_uri=REDIRECT_URI,
        )
        assert config.token_origin == "code"

    def test_precedence_inline_over_file_over_code(self) -> None:
        config = TokenConfig(
            client_id=CLIENT_ID,
            user_pool_id=USER_POOL_ID,
            id_token="a.b.c",
            token_file="token.json",
            code="abc",
            oauth_url=OAUTH_URL,
        )
        assert config.token_origin == "id_token"
        config = config.model_copy(update={"id_token": None})
        assert config.token_origin == "token_file"


class TestDefaultsAndDerivedValues:
    """Defaults and issuer/JWKS URL derivation."""

    def test_defaults(self) -> None:
        config = TokenConfig(client_id=CLIENT_ID, user_pool_id=USER_POOL_ID, id_token="a.b.c")
        assert config.region == DEFAULT_REGION
        assert config.verify_exp is True
        assert config.decode_only is False
        assert config.http_timeout > 0

    def test_issuer_and_jwks_url(self) -> None:
        config = TokenConfig(client_id=CLIENT_ID, user_pool_id=USER_POOL_ID, id_token="a.b.c")
        assert config.issuer == ISSUER
        assert config.jwks_url == JWKS_URL

    def test_region_in_issuer(self) -> None:
        config = TokenConfig(
            client_id=CLIENT_ID,
            user_pool_id="eu-west-1_abc",
            region="eu-west-1",
            id_token="a.b.c",
        )
        assert config.issuer == "https://cognito-idp.eu-west-1.amazonaws.com/eu-west-1_abc"

    def test_config_is_frozen(self) -> None:
        config = TokenConfig(client_id=CLIENT_ID, user_pool_id=USER_POOL_ID, id_token="a.b.c")
        with pytest.raises(ValidationError):
            config.client_id = "other"


class TestOptionSpellings:
    """Dashed option names deserialize into the same fields."""

    def test_dashed_keys(self) -> None:
        config = TokenConfig.from_options(
            {
                "client-id": CLIENT_ID,
                "user-pool-id": USER_POOL_ID,
                "id-token": "a.b.c",
                "verify-exp": False,
            }
        )
        assert config.client_id == CLIENT_ID
        assert config.verify_exp is False

    def test_type_error_reported_as_configuration_invalid(self) -> None:
        with pytest.raises(ConfigurationInvalid):
            TokenConfig.from_options(
                {
                    "client_id": CLIENT_ID,
                    "user_pool_id": USER_POOL_ID,
                    "id_token": "a.b.c",
                    "http_timeout": "soon",
                }
            )

    def test_overrides_keep_only_given_fields(self) -> None:
        overrides = ConfigOverrides.model_validate(
            {"client-id": CLIENT_ID, "log-level": "debug", "unknown": 1}
        )
        assert overrides.model_dump(exclude_none=True) == {
            "client_id": CLIENT_ID,
            "log_level": "debug",
        }


class TestEnvSettings:
    """COGNITO_* environment defaults."""

    def test_reads_prefixed_variables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("COGNITO_CLIENT_ID", CLIENT_ID)
        monkeypatch.setenv("COGNITO_REGION", "eu-west-1")
        env = EnvSettings()
        assert env.client_id == CLIENT_ID
        assert env.region == "eu-west-1"
        assert env.log_level == "info"

    def test_boolean_flags_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("COGNITO_VERIFY_EXP", "false")
        env = EnvSettings()
        assert env.verify_exp is False
        assert env.decode_only is None
