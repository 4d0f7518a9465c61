"""
SMS Service using Twilio.

Delivers phone certify codes.
"""

import logging
from typing import Optional

from twilio.rest import Client

from ..config import SMSConfig
from ..errors import MessageDeliveryError

logger = logging.getLogger(__name__)


class SMSService:
    """Service for sending SMS messages via Twilio."""

    def __init__(self, config: Optional[SMSConfig] = None):
        config = config or SMSConfig()
        self.account_sid = config.account_sid
        self.auth_token = config.auth_token
        self.from_number = config.from_number
        self.dry_run = config.dry_run
        self._client = None

        if self.account_sid and self.auth_token:
            self._client = Client(self.account_sid, self.auth_token)
            logger.info("Twilio SMS service initialized")
        elif self.dry_run:
            logger.info("SMS dry run enabled, messages will be logged instead of sent")

    def is_configured(self) -> bool:
        """Check if Twilio is properly configured."""
        return self._client is not None and bool(self.from_number)

    def format_korean_phone(self, phone: str) -> str:
        """
        Format Korean phone number to E.164 format.

        Input examples:
            - "01012345678"
            - "010-1234-5678"
            - "+821012345678"
            - "821012345678"

        Output: "+821012345678"
        """
        # Remove everything except digits
        digits = ''.join(filter(str.isdigit, phone))

        # Domestic numbers drop the trunk prefix 0 behind the country code
        if not digits.startswith('82'):
            digits = '82' + digits.lstrip('0')

        return '+' + digits

    def send_sms_to_one(self, receiver: str, content: str):
        """
        Send an SMS message to one receiver.

        Args:
            receiver: Destination phone number
            content: Message body

        Raises:
            MessageDeliveryError: If Twilio is not configured or the send fails
        """
        to_formatted = self.format_korean_phone(receiver)

        if not self.is_configured():
            if self.dry_run:
                logger.info(f"[DRY RUN] SMS to {to_formatted}: {content}")
                return
            raise MessageDeliveryError("Twilio not configured")

        try:
            message = self._client.messages.create(
                body=content,
                from_=self.from_number,
                to=to_formatted
            )
        except Exception as e:
            logger.error(f"SMS send failed to {to_formatted}: {e}")
            raise MessageDeliveryError(f"failed to send SMS to {to_formatted}: {e}") from e

        logger.info(f"SMS sent successfully to {to_formatted}: {message.sid}")
