from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List
from datetime import datetime

from booking_api.models.db_models import Booking, from_storage

# --- Incoming Request Models ---
# Required fields are checked by BookingService so that a missing or blank
# value maps to a named validation error instead of a schema error.

class BookingRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    service: Optional[str] = None
    notes: Optional[str] = None
    start_at: Optional[datetime] = Field(default=None, alias="startAt")
    status: Optional[str] = None

class LoginRequest(BaseModel):
    password: Optional[str] = None

# --- Outgoing Response Models ---

class PublicBookingView(BaseModel):
    """What the public lookup reveals about a booking."""
    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    service: str
    start_at: datetime = Field(alias="startAt")
    notes: str = ""

    @classmethod
    def from_row(cls, row: Booking) -> "PublicBookingView":
        return cls(id=row.id, name=row.name, service=row.service,
                   start_at=from_storage(row.start_at), notes=row.notes or "")

class BookingView(PublicBookingView):
    phone: Optional[str] = None
    email: Optional[str] = None
    status: Optional[str] = None
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")

    @classmethod
    def from_row(cls, row: Booking) -> "BookingView":
        return cls(id=row.id, name=row.name, service=row.service,
                   start_at=from_storage(row.start_at), notes=row.notes or "",
                   phone=row.phone, email=row.email, status=row.status,
                   created_at=from_storage(row.created_at) if row.created_at else None)

class CreatedResponse(BaseModel):
    ok: bool = True
    id: int

class BookingListResponse(BaseModel):
    ok: bool = True
    bookings: List[BookingView]

class PublicBookingListResponse(BaseModel):
    ok: bool = True
    bookings: List[PublicBookingView]

class LoginResponse(BaseModel):
    ok: bool = True
    token: str
