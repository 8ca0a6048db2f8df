from fastapi import APIRouter, Depends, status

from clinic_booking.auth.dependencies import (
    RequestContext,
    get_ledger,
    get_request_context,
    require_admin,
)
from clinic_booking.models.booking import Booking
from clinic_booking.schemas import (
    BookingResponse,
    BookingStatsResponse,
    BookingWithDetailsResponse,
    BookSlotRequest,
    SlotWithBookingResponse,
)
from clinic_booking.services.ledger import BookingLedger

router = APIRouter(tags=['bookings'])


def to_details(ledger: BookingLedger, bookings: list[Booking]) -> list[BookingWithDetailsResponse]:
    return [
        BookingWithDetailsResponse.from_booking(booking, ledger.booking_status(booking))
        for booking in bookings
    ]


@router.get('/slots', response_model=list[SlotWithBookingResponse])
def list_slots(ledger: BookingLedger = Depends(get_ledger)):
    # Booked slots stay in the list so the calendar can show them as taken.
    return [
        SlotWithBookingResponse.from_pair(slot, booking)
        for slot, booking in ledger.list_availability()
    ]


@router.post('/book', response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
def book_slot(
    data: BookSlotRequest,
    context: RequestContext = Depends(get_request_context),
    ledger: BookingLedger = Depends(get_ledger),
):
    booking = ledger.attempt_booking(context.user_id, data.slot_id)
    return BookingResponse.model_validate(booking)


@router.get('/my-bookings', response_model=list[BookingWithDetailsResponse])
def list_my_bookings(
    context: RequestContext = Depends(get_request_context),
    ledger: BookingLedger = Depends(get_ledger),
):
    return to_details(ledger, ledger.list_bookings_for_user(context.user_id))


@router.get(
    '/all-bookings',
    response_model=list[BookingWithDetailsResponse],
    dependencies=[Depends(require_admin)],
)
def list_all_bookings(ledger: BookingLedger = Depends(get_ledger)):
    return to_details(ledger, ledger.list_all_bookings())


@router.get('/stats', response_model=BookingStatsResponse, dependencies=[Depends(require_admin)])
def get_booking_stats(ledger: BookingLedger = Depends(get_ledger)):
    stats = ledger.booking_stats()
    return BookingStatsResponse(
        today_count=stats.today_count,
        this_week_count=stats.this_week_count,
        unique_patients=stats.unique_patients,
        total_bookings=stats.total_bookings,
    )
