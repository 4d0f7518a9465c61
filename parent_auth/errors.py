"""
Error types for the parent auth service.

Two layers:
- Collaborator errors, raised by stores and handlers (transaction, SMS,
  hashing, tokens). The auth service matches on these classes.
- Usecase errors, raised by the auth service to its callers. Each one
  carries an HTTP status, a numeric code and a message.
"""

from enum import IntEnum
from typing import Optional


# =============================================================================
# Collaborator errors
# =============================================================================

class TxError(Exception):
    """Transaction could not be begun, used or resolved."""


class StoreError(Exception):
    """Base class for repository errors."""


class RowNotExistError(StoreError):
    """No row matches the lookup."""


class InvalidModelError(StoreError):
    """Record failed validation before being written."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"invalid model: {reason}")


class EntryDuplicateError(StoreError):
    """Write collided with a unique key."""

    def __init__(self, duplicate_key: str):
        self.duplicate_key = duplicate_key
        super().__init__(f"duplicate entry for key '{duplicate_key}'")


class PasswordMismatchError(Exception):
    """Password does not match the stored hash."""


class MessageDeliveryError(Exception):
    """SMS message could not be delivered."""


class TokenIssueError(Exception):
    """Access token could not be generated."""


# =============================================================================
# Usecase errors
# =============================================================================

class ConflictCode(IntEnum):
    """Sub-reason codes carried by ConflictError."""
    PHONE_ALREADY_IN_USE = -101
    PHONE_ALREADY_CERTIFIED = -102
    INCORRECT_CERTIFY_CODE = -103
    PARENT_ID_ALREADY_IN_USE = -201
    UNCERTIFIED_PHONE = -202
    INCORRECT_PARENT_PW = -301
    NOT_EXIST_PARENT_ID = -302


class UsecaseError(Exception):
    """
    Classified error returned by the auth service.

    Attributes:
        status: HTTP status the delivery layer should answer with
        code: Machine-readable code (0 when there is no sub-reason)
        message: Human-readable description
    """

    status: int = 500

    def __init__(self, message: str, code: int = 0):
        self.message = message
        self.code = int(code)
        super().__init__(message)

    def to_dict(self) -> dict:
        return {
            "status": self.status,
            "code": self.code,
            "message": self.message
        }


class NotFoundError(UsecaseError):
    status = 404


class ConflictError(UsecaseError):
    status = 409

    def __init__(self, message: str, code: ConflictCode):
        super().__init__(message, code)
        self.conflict_code = code


class InternalServerError(UsecaseError):
    """Wraps an unclassified failure with context."""

    status = 500

    def __init__(self, context: str, cause: Optional[BaseException] = None):
        message = f"{context}: {cause}" if cause is not None else context
        super().__init__(message)
        self.context = context
        self.cause = cause
