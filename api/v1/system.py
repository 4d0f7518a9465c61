"""
System endpoints.

Reports how the running service is wired.
"""

from fastapi import APIRouter

from parent_auth import __version__

from ..deps import ServicesDep

router = APIRouter()


@router.get("/status")
def get_status(services: ServicesDep):
    """
    Service status.

    Shows which store file is in use and how certify codes are delivered.
    """
    sms = services.config.sms
    if sms.account_sid and sms.auth_token and sms.from_number:
        sms_mode = "twilio"
    elif sms.dry_run:
        sms_mode = "dry_run"
    else:
        sms_mode = "disabled"

    return {
        "version": __version__,
        "store": {
            "data_file": str(services.config.store.data_file),
            "lock_timeout_seconds": services.config.store.lock_timeout_seconds
        },
        "sms": sms_mode,
        "access_token_expire_hours": services.config.jwt.access_token_expire_hours
    }
