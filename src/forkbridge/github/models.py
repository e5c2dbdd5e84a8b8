"""Pydantic models for OAuth payloads returned by GitHub."""

from pydantic import BaseModel, ConfigDict, Field


class AccessToken(BaseModel):
    """Payload of ``/login/oauth/access_token`` requested as JSON.

    Example:
        >>> token = AccessToken(access_token="gho_abc", token_type="bearer", scope="repo")
        >>> token.authorization
        'token gho_abc'
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    access_token: str = Field(min_length=1)
    token_type: str = "bearer"
    scope: str = ""

    @property
    def scopes(self) -> list[str]:
        """Granted scopes; GitHub separates them with commas."""
        return [s.strip() for s in self.scope.split(",") if s.strip()]

    @property
    def authorization(self) -> str:
        """Authorization header value for subsequent API calls."""
        return f"token {self.access_token}"
