"""
Identity Core - Authentication and user management.
"""

from tsea.kernel.identity.identity_service import IdentityService
from tsea.kernel.identity.jwt import AccessTokenPayload, JWTManager, verify_access_token
from tsea.kernel.identity.password import hash_password, verify_password

__all__ = [
    "IdentityService",
    "AccessTokenPayload",
    "JWTManager",
    "verify_access_token",
    "hash_password",
    "verify_password",
]
