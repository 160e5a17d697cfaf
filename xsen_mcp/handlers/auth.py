"""Bearer-token gate applied by the MCP JSON-RPC handler before routing."""

import hashlib
import hmac

from xsen_mcp.models.auth import AuthContext
from xsen_mcp.models.errors import AuthenticationError
from xsen_mcp.utils.logging import get_logger

logger = get_logger(__name__)

BEARER_PREFIX = "Bearer "


def _hash_token(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()[:8]


class BearerTokenAuth:
    """
    Compares the `Authorization: Bearer <token>` header against a shared secret.

    When `required` is False every request is let through.
    """

    def __init__(self, secret: str | None, required: bool) -> None:
        if required and not secret:
            raise ValueError("A bearer secret must be configured when authentication is required.")
        self.secret = secret
        self.required = required

    def authenticate(self, authorization_header: str | None) -> AuthContext:
        """
        Checks the Authorization header.

        Raises:
            AuthenticationError: If auth is required and the token is missing or wrong.
        """
        if not self.required:
            return AuthContext(is_authenticated=False, auth_required=False)

        if not authorization_header:
            logger.warning("mcp_auth_rejected", reason="missing_header")
            raise AuthenticationError()

        if not authorization_header.startswith(BEARER_PREFIX):
            logger.warning("mcp_auth_rejected", reason="malformed_header")
            raise AuthenticationError()

        token = authorization_header[len(BEARER_PREFIX):].strip()
        token_hash = _hash_token(token)
        if not hmac.compare_digest(token.encode(), (self.secret or "").encode()):
            logger.warning("mcp_auth_rejected", reason="invalid_token", token_hash=token_hash)
            raise AuthenticationError()

        return AuthContext(is_authenticated=True, auth_required=True, token_hash=token_hash)
