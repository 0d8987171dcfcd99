from typing import List, Optional
from datetime import datetime
from sqlmodel import Session, select

from booking_api.core.errors import BookingNotFound
from booking_api.core.logger import logger
from booking_api.models.db_models import Booking, to_storage

# Fields an update overwrites; id and created_at never change
MUTABLE_FIELDS = ("name", "phone", "email", "service", "notes", "start_at", "status")


class BookingStore:
    """
    Single-record persistence for bookings.
    Every call runs in its own session and commits before returning.
    """

    def __init__(self, engine):
        self.engine = engine

    def create(self, name: str, service: str, start_at: datetime, phone: Optional[str] = None,
               email: Optional[str] = None, notes: Optional[str] = None) -> int:
        booking = Booking(
            name=name,
            phone=phone,
            email=email,
            service=service,
            notes=notes or "",
            start_at=to_storage(start_at),
        )
        with Session(self.engine) as session:
            session.add(booking)
            session.commit()
            session.refresh(booking)
            logger.debug(f"💾 Booking {booking.id} inserted")
            return booking.id

    def get(self, booking_id: int) -> Optional[Booking]:
        with Session(self.engine) as session:
            return session.get(Booking, booking_id)

    def list_all(self) -> List[Booking]:
        with Session(self.engine) as session:
            statement = select(Booking).order_by(Booking.start_at.asc(), Booking.id.asc())
            return list(session.exec(statement).all())

    def find_by_phone_suffix(self, last4: str, now: datetime) -> List[Booking]:
        """Upcoming bookings (start >= now) whose phone ends with ``last4``."""
        with Session(self.engine) as session:
            statement = (
                select(Booking)
                .where(Booking.phone.endswith(last4, autoescape=True))
                .where(Booking.start_at >= to_storage(now))
                .order_by(Booking.start_at.asc(), Booking.id.asc())
            )
            return list(session.exec(statement).all())

    def update_by_id(self, booking_id: int, **fields) -> Booking:
        with Session(self.engine) as session:
            booking = session.get(Booking, booking_id)
            if booking is None:
                raise BookingNotFound(message=f"Booking {booking_id} not found")

            for field in MUTABLE_FIELDS:
                value = fields.get(field)
                if field == "notes":
                    value = value or ""
                elif field == "start_at":
                    value = to_storage(value)
                setattr(booking, field, value)

            session.add(booking)
            session.commit()
            session.refresh(booking)
            return booking
