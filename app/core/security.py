"""
Security utilities for JWT authentication and password hashing.

Implements stateless JWT authentication using a shared HMAC secret (HS256).
Passwords are hashed using bcrypt for security.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from app.core.config import settings
from app.core.errors import Unauthorized

# Password hashing context (bcrypt, cost factor from settings)
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a hashed password."""
    # Bcrypt has a 72-byte limit - truncate if necessary
    password_bytes = plain_password.encode('utf-8')[:72]
    return pwd_context.verify(password_bytes, hashed_password)


def get_password_hash(password: str) -> str:
    """
    Hash a password using bcrypt.

    Note: Bcrypt has a 72-byte limit. Passwords longer than 72 bytes
    are automatically truncated to comply with this limitation.
    """
    # Bcrypt has a 72-byte limit - truncate if necessary
    password_bytes = password.encode('utf-8')[:72]
    return pwd_context.hash(password_bytes)


class TokenIssuer:
    """
    Signs and verifies bearer tokens for authenticated users.

    Built once at startup from configuration and shared read-only by all
    requests. The user id travels in the standard ``sub`` claim.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expires_delta: timedelta = timedelta(hours=1),
    ):
        if not secret_key:
            raise ValueError("A token signing secret is required")
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.expires_delta = expires_delta

    @classmethod
    def from_settings(cls, config=settings) -> "TokenIssuer":
        return cls(
            secret_key=config.JWT_SECRET,
            algorithm=config.JWT_ALGORITHM,
            expires_delta=timedelta(minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES),
        )

    def issue(self, user_id: str, now: Optional[datetime] = None) -> str:
        """
        Create a signed access token for a user.

        Args:
            user_id: Id of the authenticated user
            now: Issue time (defaults to the current UTC time)

        Returns:
            Encoded JWT token as a string
        """
        issued_at = now or datetime.now(timezone.utc)
        to_encode = {
            "sub": str(user_id),
            "iat": issued_at,
            "exp": issued_at + self.expires_delta,
        }
        return jwt.encode(to_encode, self._secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> Dict[str, Any]:
        """
        Decode and validate a token.

        Raises:
            Unauthorized: If the token is missing, malformed, expired,
                signed with another key, or carries no user id
        """
        if not token:
            raise Unauthorized()
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self.algorithm])
        except JWTError:
            raise Unauthorized()

        if not payload.get("sub"):
            raise Unauthorized()
        return payload
