"""
Credential primitives for the parent auth service.

bcrypt password hashing and JWT access token issuance.
"""

from .jwt_handler import JWTHandler, TokenPayload
from .password import PasswordHandler

__all__ = [
    "JWTHandler",
    "TokenPayload",
    "PasswordHandler",
]
