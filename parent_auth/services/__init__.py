"""
Services layer for the parent auth service.

This module provides the business logic as reusable services that can be
consumed by the API or scripts.
"""

from datetime import timedelta
from typing import Optional

from ..auth import JWTHandler, PasswordHandler
from ..config import Config, load_config
from ..store import JSONTxHandler, ParentAuthRepository, PhoneCertifyRepository
from .auth_service import AuthService
from .sms_service import SMSService

__all__ = [
    "AuthService",
    "SMSService",
    "create_auth_service",
]


def create_auth_service(
    config: Optional[Config] = None,
    message_agency: Optional[SMSService] = None
) -> AuthService:
    """
    Factory function to create the auth service with its collaborators.

    Args:
        config: Optional config (loads from env if not provided)
        message_agency: Optional SMS sender (creates a Twilio one if not provided)

    Returns:
        Wired AuthService
    """
    cfg = config or load_config()

    return AuthService(
        parent_auth_repo=ParentAuthRepository(),
        phone_certify_repo=PhoneCertifyRepository(),
        tx_handler=JSONTxHandler(cfg.store.data_file, lock_timeout=cfg.store.lock_timeout_seconds),
        message_agency=message_agency or SMSService(cfg.sms),
        hash_handler=PasswordHandler(rounds=cfg.hash.bcrypt_rounds),
        jwt_handler=JWTHandler(secret_key=cfg.jwt.secret_key or None),
        access_token_lifetime=timedelta(hours=cfg.jwt.access_token_expire_hours)
    )
