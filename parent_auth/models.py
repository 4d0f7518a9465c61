"""
Domain models.

PhoneCertification is the verification state of one phone number.
ParentAccount is a parent's login credentials.
"""

import secrets
from dataclasses import dataclass, asdict
from typing import Optional

CERTIFY_CODE_MIN = 100000
CERTIFY_CODE_MAX = 999999


@dataclass
class PhoneCertification:
    """Certification record for a phone number."""
    phone_number: str
    certify_code: int = 0
    certified: Optional[bool] = None  # None until a code has been issued
    parent_uuid: Optional[str] = None  # Owning account once claimed

    @staticmethod
    def generate_certify_code() -> int:
        """Return a random 6-digit certify code."""
        return CERTIFY_CODE_MIN + secrets.randbelow(CERTIFY_CODE_MAX - CERTIFY_CODE_MIN + 1)

    def is_certified(self) -> bool:
        return self.certified is True

    def is_owned(self) -> bool:
        return self.parent_uuid is not None

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "PhoneCertification":
        return cls(
            phone_number=data["phone_number"],
            certify_code=int(data.get("certify_code", 0)),
            certified=data.get("certified"),
            parent_uuid=data.get("parent_uuid")
        )


@dataclass
class ParentAccount:
    """Parent login account."""
    login_id: str
    password: str  # Plain text on the way in, bcrypt hash once stored
    name: str
    uuid: str = ""

    @staticmethod
    def generate_random_uuid() -> str:
        """Return a fresh random account identifier."""
        return f"parent-{secrets.token_hex(6)}"

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "ParentAccount":
        return cls(
            login_id=data["login_id"],
            password=data["password"],
            name=data["name"],
            uuid=data.get("uuid", "")
        )
