from typing import Optional
from fastapi import APIRouter, BackgroundTasks, Depends, Query, Request

from booking_api.core.security import require_admin
from booking_api.models.api_models import (
    BookingListResponse,
    BookingRequest,
    BookingView,
    CreatedResponse,
    PublicBookingListResponse,
    PublicBookingView,
)
from booking_api.services.booking_service import BookingService

router = APIRouter(prefix="/bookings")


def get_booking_service(request: Request) -> BookingService:
    return request.app.state.booking_service


@router.post("", status_code=201, response_model=CreatedResponse)
async def create_booking(req: BookingRequest, background_tasks: BackgroundTasks,
                         service: BookingService = Depends(get_booking_service)):
    outcome = await service.create_booking(req, background_tasks)
    return CreatedResponse(id=outcome.id)


# Store reads are blocking, so these handlers are plain defs run in the threadpool
@router.get("/public", response_model=PublicBookingListResponse)
def lookup_bookings(last_name: Optional[str] = Query(None, alias="lastName"),
                    last4: Optional[str] = Query(None),
                    service: BookingService = Depends(get_booking_service)):
    bookings = service.lookup(last_name, last4)
    return PublicBookingListResponse(bookings=[PublicBookingView.from_row(b) for b in bookings])


@router.get("", response_model=BookingListResponse, dependencies=[Depends(require_admin)])
def list_bookings(service: BookingService = Depends(get_booking_service)):
    bookings = service.list_bookings()
    return BookingListResponse(bookings=[BookingView.from_row(b) for b in bookings])


@router.put("/{booking_id}", response_model=CreatedResponse, dependencies=[Depends(require_admin)])
def update_booking(booking_id: int, req: BookingRequest,
                   service: BookingService = Depends(get_booking_service)):
    booking = service.update_booking(booking_id, req)
    return CreatedResponse(id=booking.id)
