from pydantic import BaseModel, Field


class AuthContext(BaseModel):
    """
    Result of the bearer-token check, attached to each MCP request.
    """

    is_authenticated: bool
    auth_required: bool
    token_hash: str | None = Field(None, description="Truncated SHA-256 of the presented token")
