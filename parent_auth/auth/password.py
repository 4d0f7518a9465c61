"""
Password handling utilities.

Uses bcrypt for secure password hashing.
"""

import logging

import bcrypt

from ..errors import PasswordMismatchError

logger = logging.getLogger(__name__)

# bcrypt work factor (higher = more secure but slower)
BCRYPT_ROUNDS = 12

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_PASSWORD_BYTES = 72


class PasswordHandler:
    """
    Handles password hashing and comparison using bcrypt.

    Usage:
        handler = PasswordHandler()
        hashed = handler.generate_hash_with_salt("my_password")
        handler.compare_hash_and_password(hashed, "my_password")  # raises on mismatch
    """

    def __init__(self, rounds: int = BCRYPT_ROUNDS):
        """
        Initialize password handler.

        Args:
            rounds: bcrypt work factor (default: 12)
        """
        self.rounds = rounds

    def generate_hash_with_salt(self, password: str) -> str:
        """
        Hash a password using bcrypt with a fresh salt.

        Args:
            password: Plain text password

        Returns:
            Hashed password string (includes salt)

        Raises:
            ValueError: If the password is empty or longer than 72 bytes
        """
        if not password:
            raise ValueError("Password cannot be empty")

        encoded = password.encode("utf-8")
        if len(encoded) > BCRYPT_MAX_PASSWORD_BYTES:
            raise ValueError(f"Password cannot be longer than {BCRYPT_MAX_PASSWORD_BYTES} bytes")

        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(encoded, salt).decode("utf-8")

    def compare_hash_and_password(self, hashed: str, password: str):
        """
        Compare a stored hash with a plain text password.

        Args:
            hashed: Previously hashed password
            password: Plain text password to check

        Raises:
            PasswordMismatchError: If the password does not match
            ValueError: If the stored hash is malformed
        """
        if not hashed:
            raise ValueError("Stored hash is empty")

        # Longer than any password sign-up accepts
        if len(password.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
            raise PasswordMismatchError("password does not match hash")

        if not password or not bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8")):
            raise PasswordMismatchError("password does not match hash")
