"""Configuration module for the parent auth service."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

DEFAULT_DATA_FILE = Path(__file__).parent.parent / "data" / "parent_auth.json"


@dataclass
class StoreConfig:
    """JSON document store settings."""
    data_file: Path = field(default_factory=lambda: Path(os.getenv("DATA_FILE", str(DEFAULT_DATA_FILE))))
    # Seconds to wait for the transaction lock before giving up
    lock_timeout_seconds: float = field(default_factory=lambda: float(os.getenv("TX_LOCK_TIMEOUT_SECONDS", "10")))


@dataclass
class JWTConfig:
    """Access token settings."""
    secret_key: str = field(default_factory=lambda: os.getenv("JWT_SECRET_KEY", ""))
    access_token_expire_hours: int = field(default_factory=lambda: int(os.getenv("ACCESS_TOKEN_EXPIRE_HOURS", "24")))


@dataclass
class HashConfig:
    """Password hashing settings."""
    bcrypt_rounds: int = field(default_factory=lambda: int(os.getenv("BCRYPT_ROUNDS", "12")))


@dataclass
class SMSConfig:
    """Twilio credentials for certify code delivery."""
    account_sid: str = field(default_factory=lambda: os.getenv("TWILIO_ACCOUNT_SID", ""))
    auth_token: str = field(default_factory=lambda: os.getenv("TWILIO_AUTH_TOKEN", ""))
    from_number: str = field(default_factory=lambda: os.getenv("TWILIO_PHONE_NUMBER", ""))
    # Log messages instead of sending them (local development)
    dry_run: bool = field(default_factory=lambda: os.getenv("SMS_DRY_RUN", "false").lower() == "true")


@dataclass
class Config:
    """Main configuration container."""
    store: StoreConfig = field(default_factory=StoreConfig)
    jwt: JWTConfig = field(default_factory=JWTConfig)
    hash: HashConfig = field(default_factory=HashConfig)
    sms: SMSConfig = field(default_factory=SMSConfig)


def load_config() -> Config:
    """Load configuration from environment variables."""
    return Config()
