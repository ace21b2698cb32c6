"""
FastAPI dependencies for authentication.

These dependencies are used to protect endpoints and hand the caller's
identity to handlers as an explicit AuthContext argument.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.core.errors import Unauthorized
from app.core.security import TokenIssuer

# HTTP Bearer token scheme (Authorization: Bearer <token>)
# auto_error is off so every failure is reported as our own 401 body
security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthContext:
    """Identity of the authenticated caller for the current request."""

    user_id: str
    claims: Dict[str, Any] = field(default_factory=dict)


def get_token_issuer(request: Request) -> TokenIssuer:
    """Return the token issuer built at application startup."""
    return request.app.state.token_issuer


async def get_auth_context(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> AuthContext:
    """
    Authenticate the request from its bearer token.

    Requires the literal ``Bearer`` scheme. A missing header, any other
    scheme, or a token that fails verification all raise the same
    Unauthorized error.
    """
    if credentials is None or credentials.scheme != "Bearer":
        raise Unauthorized()

    claims = issuer.verify(credentials.credentials)
    return AuthContext(user_id=str(claims["sub"]), claims=claims)
