"""``decode-token`` command: verify a Cognito id_token and print its claims."""

import argparse
import json
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import structlog
from pydantic import ValidationError

from cognito_token.core.errors import ConfigurationInvalid, TokenVerificationError
from cognito_token.core.logging import configure_logging
from cognito_token.core.settings import ConfigOverrides, EnvSettings, TokenConfig
from cognito_token.oidc.verifier import decode_claims

EXIT_OK = 0
EXIT_VERIFICATION_FAILED = 1
EXIT_CONFIGURATION_INVALID = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="decode-token",
        description="Verify and decode an Amazon Cognito id_token.",
    )
    parser.add_argument("-i", "--client-id", help="app client id")
    parser.add_argument("-c", "--code", help="code returned from a successful login")
    parser.add_argument("-C", "--config", help="config file (JSON format)")
    parser.add_argument("--id-token", help="the token string")
    parser.add_argument(
        "--log-level", help="logging level (trace, debug, info, warn, error)"
    )
    parser.add_argument("--oauth-url", help="token endpoint URL")
    parser.add_argument("--redirect-uri", help="login redirect URI")
    parser.add_argument("--region", help="AWS region of the user pool")
    parser.add_argument(
        "--token-file", help="file with a JSON payload containing the id_token element"
    )
    parser.add_argument("--user-pool-id", help="Cognito user pool id")
    parser.add_argument(
        "--verify-exp",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="check the token's expiration (default: on)",
    )
    parser.add_argument(
        "--decode-only",
        action="store_true",
        default=None,
        help="decode without enforcing signature or claims",
    )
    parser.add_argument(
        "--timeout", dest="http_timeout", type=float, help="HTTP timeout in seconds"
    )
    return parser


def load_config_file(path: str) -> dict[str, Any]:
    """Read a JSON config file whose keys may use dashes or underscores."""
    config_path = Path(path)
    if not config_path.exists():
        raise ConfigurationInvalid(f"no such file {path}", field="config")
    try:
        overrides = ConfigOverrides.model_validate_json(config_path.read_bytes())
    except (OSError, ValidationError) as exc:
        raise ConfigurationInvalid(f"could not read config file {path}", field="config") from exc
    return overrides.model_dump(exclude_none=True)


def load_env() -> EnvSettings:
    """Read COGNITO_* environment defaults."""
    try:
        return EnvSettings()
    except ValidationError as exc:
        raise ConfigurationInvalid(f"invalid environment settings: {exc}") from exc


def merge_options(args: argparse.Namespace, env: EnvSettings) -> dict[str, Any]:
    """Layer options: command line over config file over environment."""
    options: dict[str, Any] = env.model_dump(exclude_none=True)
    cli = {k: v for k, v in vars(args).items() if v is not None and k != "config"}
    if args.config:
        options.update(load_config_file(args.config))
    options.update(cli)
    return options


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        options = merge_options(args, load_env())
        configure_logging(options.pop("log_level", "info"))
        config = TokenConfig.from_options(options)
    except ConfigurationInvalid as exc:
        print(json.dumps(exc.to_dict(), default=str), file=sys.stderr)
        return EXIT_CONFIGURATION_INVALID

    logger = structlog.get_logger("cognito_token")
    try:
        result = decode_claims(config, logger=logger)
    except TokenVerificationError as exc:
        print(json.dumps(exc.to_dict(), default=str), file=sys.stderr)
        return EXIT_VERIFICATION_FAILED

    print(json.dumps(result.claims, indent=2, sort_keys=True, default=str))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
