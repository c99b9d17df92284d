"""
JWT access tokens for API authentication.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from pydantic import BaseModel

from tsea.config import get_settings


class AccessTokenPayload(BaseModel):
    """Decoded access token."""

    sub: str  # User ID
    email: str
    exp: datetime
    iat: datetime
    jti: str


class JWTManager:
    """Creates and verifies signed access tokens."""

    def __init__(
        self,
        secret_key: Optional[str] = None,
        algorithm: Optional[str] = None,
        access_token_expire_minutes: Optional[int] = None,
    ):
        settings = get_settings()
        self.secret_key = secret_key or settings.secret_key
        self.algorithm = algorithm or settings.algorithm
        self.access_token_expire_minutes = (
            access_token_expire_minutes or settings.access_token_expire_minutes
        )

    def create_access_token(
        self,
        user_id: uuid.UUID,
        email: str,
        expires_delta: Optional[timedelta] = None,
    ) -> tuple[str, int]:
        """
        Create a signed access token.

        Returns:
            Tuple of (token, seconds until expiry)
        """
        now = datetime.now(timezone.utc)
        lifetime = expires_delta or timedelta(minutes=self.access_token_expire_minutes)
        payload = {
            "sub": str(user_id),
            "email": email,
            "exp": now + lifetime,
            "iat": now,
            "jti": str(uuid.uuid4()),
            "type": "access",
        }
        token = jwt.encode(payload, self.secret_key, algorithm=self.algorithm)
        return token, int(lifetime.total_seconds())

    def verify_access_token(self, token: str) -> Optional[AccessTokenPayload]:
        """Decode a token; None when invalid, expired or not an access token."""
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError:
            return None
        if payload.get("type") != "access":
            return None
        return AccessTokenPayload(
            sub=payload["sub"],
            email=payload["email"],
            exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            iat=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
            jti=payload["jti"],
        )


_jwt_manager: Optional[JWTManager] = None


def get_jwt_manager() -> JWTManager:
    """Get or create the default JWT manager."""
    global _jwt_manager
    if _jwt_manager is None:
        _jwt_manager = JWTManager()
    return _jwt_manager


def verify_access_token(token: str) -> Optional[AccessTokenPayload]:
    return get_jwt_manager().verify_access_token(token)
