"""
Unit tests for Password Handler.

Tests password hashing and hash comparison.
"""

import pytest

from parent_auth.auth import PasswordHandler
from parent_auth.errors import PasswordMismatchError


class TestPasswordHandler:
    """Tests for PasswordHandler class."""

    @pytest.mark.unit
    def test_generate_hash(self, password_handler):
        """Test password hashing."""
        password = "SecurePassword123!"
        hashed = password_handler.generate_hash_with_salt(password)

        assert hashed is not None
        assert hashed != password
        assert hashed.startswith("$2b$")  # bcrypt prefix

    @pytest.mark.unit
    def test_compare_correct_password(self, password_handler):
        """Test comparing correct password raises nothing."""
        password = "SecurePassword123!"
        hashed = password_handler.generate_hash_with_salt(password)

        password_handler.compare_hash_and_password(hashed, password)

    @pytest.mark.unit
    def test_compare_incorrect_password(self, password_handler):
        """Test comparing incorrect password raises a mismatch."""
        hashed = password_handler.generate_hash_with_salt("SecurePassword123!")

        with pytest.raises(PasswordMismatchError):
            password_handler.compare_hash_and_password(hashed, "WrongPassword")

    @pytest.mark.unit
    def test_compare_empty_password_is_mismatch(self, password_handler):
        """Test empty input password is a mismatch, not a crash."""
        hashed = password_handler.generate_hash_with_salt("SecurePassword123!")

        with pytest.raises(PasswordMismatchError):
            password_handler.compare_hash_and_password(hashed, "")

    @pytest.mark.unit
    def test_compare_malformed_hash(self, password_handler):
        """Test malformed stored hash is not reported as a mismatch."""
        with pytest.raises(ValueError):
            password_handler.compare_hash_and_password("not-a-bcrypt-hash", "SecurePassword123!")

    @pytest.mark.unit
    def test_compare_password_over_72_bytes(self, password_handler):
        """Test input bcrypt can't take is a mismatch, not an error."""
        hashed = password_handler.generate_hash_with_salt("SecurePassword123!")

        with pytest.raises(PasswordMismatchError):
            password_handler.compare_hash_and_password(hashed, "x" * 100)
        with pytest.raises(PasswordMismatchError):
            password_handler.compare_hash_and_password(hashed, "비밀번호" * 7)

    @pytest.mark.unit
    def test_compare_empty_hash(self, password_handler):
        """Test empty stored hash raises ValueError."""
        with pytest.raises(ValueError, match="empty"):
            password_handler.compare_hash_and_password("", "SecurePassword123!")

    @pytest.mark.unit
    def test_same_password_has_different_hash_each_time(self, password_handler):
        """Test that same password produces different hashes (due to salt)."""
        password = "SamePassword"
        hash1 = password_handler.generate_hash_with_salt(password)
        hash2 = password_handler.generate_hash_with_salt(password)

        assert hash1 != hash2
        # But both should compare correctly
        password_handler.compare_hash_and_password(hash1, password)
        password_handler.compare_hash_and_password(hash2, password)

    @pytest.mark.unit
    def test_empty_password(self, password_handler):
        """Test that empty password raises error."""
        with pytest.raises(ValueError, match="cannot be empty"):
            password_handler.generate_hash_with_salt("")

    @pytest.mark.unit
    def test_unicode_password(self, password_handler):
        """Test hashing unicode password."""
        password = "비밀번호123!"
        hashed = password_handler.generate_hash_with_salt(password)

        password_handler.compare_hash_and_password(hashed, password)

    @pytest.mark.unit
    def test_long_password(self, password_handler):
        """Test hashing very long password raises error (bcrypt limit)."""
        with pytest.raises(ValueError, match="cannot be longer than 72"):
            password_handler.generate_hash_with_salt("A" * 100)

    @pytest.mark.unit
    def test_rounds_are_encoded_in_hash(self):
        """Test the configured work factor ends up in the hash."""
        handler = PasswordHandler(rounds=5)
        hashed = handler.generate_hash_with_salt("TestPassword")

        assert hashed.split("$")[2] == "05"
