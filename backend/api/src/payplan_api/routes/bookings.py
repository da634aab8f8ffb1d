"""Booking endpoints.

Provides REST endpoints for:
- Listing bookings
- Creating, reading and replacing a booking with its properties
- Deleting a booking (cascades to properties and paid periods)
"""

from fastapi import APIRouter, Depends, Response
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT

from payplan.models import Booking, BookingError, ErrorCode
from payplan.services.booking_service import BookingService
from payplan_api.dependencies import get_booking_service
from payplan_api.models.bookings import BookingListResponse, BookingRequest

router = APIRouter(tags=["bookings"])


@router.get(
    "/bookings",
    summary="List bookings",
    response_model=BookingListResponse,
)
async def list_bookings(
    service: BookingService = Depends(get_booking_service),
) -> BookingListResponse:
    """List every booking, latest check-in first."""
    bookings = service.list_bookings()
    return BookingListResponse(bookings=bookings, total_count=len(bookings))


@router.post(
    "/bookings",
    summary="Create booking",
    description="""
Create a booking with its properties.

**Notes:**
- Checkout must be after checkin
- At least one property is required
- A property's own checkout date must fall within the stay
""",
    response_model=Booking,
    status_code=HTTP_201_CREATED,
    responses={
        201: {"description": "Booking created"},
        422: {"description": "Invalid booking data"},
        500: {"description": "Booking could not be saved"},
    },
)
async def create_booking(
    body: BookingRequest,
    service: BookingService = Depends(get_booking_service),
) -> Booking:
    """Create a booking."""
    return service.create_booking(body)


@router.get(
    "/bookings/{booking_id}",
    summary="Get booking by ID",
    response_model=Booking,
    responses={404: {"description": "Booking not found"}},
)
async def get_booking(
    booking_id: str,
    service: BookingService = Depends(get_booking_service),
) -> Booking:
    """Get a booking with its properties."""
    return service.require_booking(booking_id)


@router.put(
    "/bookings/{booking_id}",
    summary="Replace booking",
    description="""
Replace a booking and its whole property set.

Properties are stored in the submitted order; properties left out of the
request are removed.
""",
    response_model=Booking,
    responses={
        404: {"description": "Booking not found"},
        422: {"description": "Invalid booking data"},
        500: {"description": "Booking could not be saved"},
    },
)
async def update_booking(
    booking_id: str,
    body: BookingRequest,
    service: BookingService = Depends(get_booking_service),
) -> Booking:
    """Replace a booking."""
    return service.update_booking(booking_id, body)


@router.delete(
    "/bookings/{booking_id}",
    summary="Delete booking",
    status_code=HTTP_204_NO_CONTENT,
    responses={404: {"description": "Booking not found"}},
)
async def delete_booking(
    booking_id: str,
    service: BookingService = Depends(get_booking_service),
) -> Response:
    """Delete a booking with its properties and paid periods."""
    if not service.delete_booking(booking_id):
        raise BookingError(
            code=ErrorCode.BOOKING_NOT_FOUND,
            details={"booking_id": booking_id},
        )
    return Response(status_code=HTTP_204_NO_CONTENT)
