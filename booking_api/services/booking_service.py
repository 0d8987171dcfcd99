import asyncio
import re
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from fastapi import BackgroundTasks

from booking_api.core.config import Settings
from booking_api.core.errors import ValidationFailed
from booking_api.core.logger import logger
from booking_api.models.api_models import BookingRequest
from booking_api.models.db_models import Booking, utcnow
from booking_api.services.notification_service import (
    NotificationResult,
    NotificationStatus,
    SmsNotifier,
)
from booking_api.services.store import BookingStore

NON_DIGITS = re.compile(r"\D")


def to_e164(phone: Optional[str]) -> Optional[str]:
    """
    Normalize a phone number to E.164.
    10 digits are taken as a US number, 11 digits starting with 1 get a '+',
    a value already starting with '+' passes through untouched.
    Anything else normalizes to None.
    """
    if not phone:
        return None
    raw = str(phone)
    digits = NON_DIGITS.sub("", raw)
    if len(digits) == 10:
        return f"+1{digits}"
    if len(digits) == 11 and digits.startswith("1"):
        return f"+{digits}"
    if raw.startswith("+"):
        return raw
    return None


def last_name_of(full_name: Optional[str]) -> str:
    parts = (full_name or "").strip().lower().split()
    return parts[-1] if parts else ""


@dataclass
class BookingOutcome:
    id: int
    notification: NotificationResult


class BookingService:
    def __init__(self, store: BookingStore, notifier: SmsNotifier, settings: Settings):
        self.store = store
        self.notifier = notifier
        self.settings = settings

    @staticmethod
    def _require(req: BookingRequest):
        if not req.name or not req.name.strip():
            raise ValidationFailed("missing_name", "Missing name")
        if not req.service or not req.service.strip():
            raise ValidationFailed("missing_service", "Missing service")
        if req.start_at is None:
            raise ValidationFailed("missing_start_at", "Missing startAt")

    async def create_booking(self, req: BookingRequest,
                             background_tasks: Optional[BackgroundTasks] = None) -> BookingOutcome:
        self._require(req)

        phone = to_e164(req.phone)
        if req.phone and not phone:
            logger.info(f"☎️ Phone '{req.phone}' is not normalizable, storing without phone")

        # Blocking SQLAlchemy write, kept off the event loop
        booking_id = await asyncio.to_thread(
            self.store.create,
            name=req.name,
            phone=phone,
            email=req.email,
            service=req.service,
            notes=req.notes,
            start_at=req.start_at,
        )
        logger.info(f"✅ Booking {booking_id} created: {req.name}, {req.service} at {req.start_at.isoformat()}")

        if not phone:
            result = NotificationResult(NotificationStatus.SKIPPED, error="no phone number")
        elif background_tasks is not None and self.settings.SMS_IN_BACKGROUND:
            background_tasks.add_task(
                self.notifier.send_booking_confirmation, phone, req.name, req.service, req.start_at
            )
            result = NotificationResult(NotificationStatus.QUEUED)
        else:
            result = await self.notifier.send_booking_confirmation(phone, req.name, req.service, req.start_at)

        if result.status == NotificationStatus.FAILED:
            logger.warning(f"⚠️ Booking {booking_id} persisted, confirmation SMS failed: {result.error}")
        else:
            logger.info(f"📨 Booking {booking_id} confirmation: {result.status.value}")

        return BookingOutcome(id=booking_id, notification=result)

    def list_bookings(self) -> List[Booking]:
        return self.store.list_all()

    def lookup(self, last_name: Optional[str], last4: Optional[str],
               now: Optional[datetime] = None) -> List[Booking]:
        """
        Public lookup: upcoming bookings whose phone ends with ``last4`` and
        whose last name token matches ``last_name`` case-insensitively.
        """
        if not last_name or not last_name.strip() or not last4:
            raise ValidationFailed("missing_lookup_fields", "Missing lastName or last4")

        wanted = last_name.strip().lower()
        digits = NON_DIGITS.sub("", str(last4))
        if len(digits) != 4:
            raise ValidationFailed("invalid_last4", "Last 4 must be 4 digits")

        candidates = self.store.find_by_phone_suffix(digits, now or utcnow())
        # Case-insensitive match on the final name token, done here rather than in SQL
        return [b for b in candidates if last_name_of(b.name) == wanted]

    def update_booking(self, booking_id: int, req: BookingRequest) -> Booking:
        self._require(req)
        booking = self.store.update_by_id(
            booking_id,
            name=req.name,
            phone=to_e164(req.phone),
            email=req.email,
            service=req.service,
            notes=req.notes,
            start_at=req.start_at,
            status=req.status,
        )
        logger.info(f"✏️ Booking {booking_id} updated")
        return booking
