"""Type definitions for token endpoint responses and verification results."""

from typing import Any

from pydantic import BaseModel, ConfigDict


class TokenResponse(BaseModel):
    """OAuth token endpoint response, or the token file written from one."""

    model_config = ConfigDict(extra="allow")

    id_token: str | None = None


class ClaimsResult(BaseModel):
    """Claims of a token that passed every enabled check."""

    model_config = ConfigDict(frozen=True)

    claims: dict[str, Any]
    header: dict[str, Any]
    kid: str
    verified: bool = True

    def __getitem__(self, name: str) -> Any:
        return self.claims[name]

    def get(self, name: str, default: Any = None) -> Any:
        return self.claims.get(name, default)
