"""Request and response bodies for the HTTP surface.

Field names are snake_case in Python and camelCase on the wire.
"""

from datetime import datetime, timezone
from typing import Annotated

from pydantic import AfterValidator, BaseModel
from pydantic.alias_generators import to_camel

from clinic_booking.models.booking import Booking
from clinic_booking.models.slot import Slot


def _as_utc(value: datetime) -> datetime:
    # Stored timestamps are naive UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


UtcDatetime = Annotated[datetime, AfterValidator(_as_utc)]


class ApiModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class LoginRequest(ApiModel):
    email: str | None = None
    role: str | None = None


class BookSlotRequest(ApiModel):
    slot_id: str


class MessageResponse(ApiModel):
    message: str


class UserResponse(ApiModel):
    id: str
    email: str
    first_name: str | None = None
    last_name: str | None = None
    role: str
    created_at: UtcDatetime
    updated_at: UtcDatetime


class SlotResponse(ApiModel):
    id: str
    start_at: UtcDatetime
    end_at: UtcDatetime


class BookingResponse(ApiModel):
    id: str
    user_id: str
    slot_id: str
    created_at: UtcDatetime


class SlotWithBookingResponse(SlotResponse):
    booking: BookingResponse | None = None
    is_available: bool

    @classmethod
    def from_pair(cls, slot: Slot, booking: Booking | None) -> 'SlotWithBookingResponse':
        return cls(
            id=slot.id,
            start_at=slot.start_at,
            end_at=slot.end_at,
            booking=BookingResponse.model_validate(booking) if booking is not None else None,
            is_available=booking is None,
        )


class BookingWithDetailsResponse(BookingResponse):
    user: UserResponse
    slot: SlotResponse
    status: str

    @classmethod
    def from_booking(cls, booking: Booking, status: str) -> 'BookingWithDetailsResponse':
        return cls(
            id=booking.id,
            user_id=booking.user_id,
            slot_id=booking.slot_id,
            created_at=booking.created_at,
            user=UserResponse.model_validate(booking.user),
            slot=SlotResponse.model_validate(booking.slot),
            status=status,
        )


class BookingStatsResponse(ApiModel):
    today_count: int
    this_week_count: int
    unique_patients: int
    total_bookings: int
