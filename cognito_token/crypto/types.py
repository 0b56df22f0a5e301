"""Type definitions for JWS headers and published key sets."""

from pydantic import BaseModel, ConfigDict


class JWKEntry(BaseModel):
    """Single JWK entry in a JWKS response.

    Key material is not validated here; a record that cannot be turned into
    a public key fails later, at signature verification.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    kid: str
    kty: str = "RSA"
    alg: str | None = None
    use: str | None = None
    n: str = ""
    e: str = ""


class JWKSResponse(BaseModel):
    """JSON Web Key Set document."""

    keys: list[JWKEntry]

    def find(self, kid: str) -> JWKEntry | None:
        """First key whose ``kid`` matches exactly."""
        return next((key for key in self.keys if key.kid == kid), None)


class TokenHeader(BaseModel):
    """Decoded JOSE header of a compact token."""

    model_config = ConfigDict(extra="allow", frozen=True)

    kid: str
    alg: str | None = None
    typ: str | None = None
