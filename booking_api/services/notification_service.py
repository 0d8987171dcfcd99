import asyncio
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from zoneinfo import ZoneInfo

from twilio.rest import Client

from booking_api.core.config import Settings
from booking_api.core.logger import logger

SMS_TEMPLATE = (
    "{business}: Hey {name}, your {service} is booked for {when}. "
    "Reply STOP to opt out, HELP for help."
)


class NotificationStatus(str, Enum):
    SENT = "sent"
    FAILED = "failed"
    SKIPPED = "skipped"
    QUEUED = "queued"


@dataclass
class NotificationResult:
    status: NotificationStatus
    sid: Optional[str] = None
    error: Optional[str] = None

    @property
    def delivered(self) -> bool:
        return self.status == NotificationStatus.SENT


def format_start_time(start_at: datetime, tz_name: str) -> str:
    """Render a start time in the business timezone, e.g. '10/21/2026, 02:30 PM'."""
    if start_at.tzinfo is None:
        start_at = start_at.replace(tzinfo=timezone.utc)
    return start_at.astimezone(ZoneInfo(tz_name)).strftime("%m/%d/%Y, %I:%M %p")


class SmsNotifier:
    """
    Sends booking confirmations through Twilio.
    Never raises: every outcome comes back as a NotificationResult.
    """

    def __init__(self, settings: Settings, client: Optional[Client] = None):
        self.settings = settings
        self._client = client

    @property
    def client(self) -> Optional[Client]:
        if self._client is None and self.settings.sms_configured:
            self._client = Client(self.settings.TWILIO_ACCOUNT_SID, self.settings.TWILIO_AUTH_TOKEN)
        return self._client

    def compose(self, name: str, service: str, start_at: datetime) -> str:
        return SMS_TEMPLATE.format(
            business=self.settings.BUSINESS_NAME,
            name=name,
            service=service,
            when=format_start_time(start_at, self.settings.BUSINESS_TIMEZONE),
        )

    def send(self, to_number: str, body: str) -> NotificationResult:
        if not to_number:
            return NotificationResult(NotificationStatus.SKIPPED, error="no phone number")

        client = self.client
        if client is None:
            logger.warning("⚠️ Twilio credentials missing, SMS skipped")
            return NotificationResult(NotificationStatus.SKIPPED, error="sms provider not configured")

        try:
            logger.info(f"📤 Sending SMS to {to_number}...")
            message = client.messages.create(
                from_=self.settings.TWILIO_PHONE_NUMBER,
                to=to_number,
                body=body,
            )
        except Exception as e:
            logger.warning(f"[SMS] failed: {e}")
            return NotificationResult(NotificationStatus.FAILED, error=str(e))

        logger.info(f"[SMS] sid: {message.sid}")
        return NotificationResult(NotificationStatus.SENT, sid=message.sid)

    async def send_booking_confirmation(self, phone: str, name: str, service: str,
                                        start_at: datetime) -> NotificationResult:
        try:
            body = self.compose(name, service, start_at)
        except Exception as e:
            logger.warning(f"[SMS] could not compose confirmation: {e}")
            return NotificationResult(NotificationStatus.FAILED, error=str(e))

        # Twilio's client is blocking
        return await asyncio.to_thread(self.send, phone, body)
