"""Pydantic schemas for booking data."""

from datetime import date, datetime, time
from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from cinebox.models.booking import BookingStatus


class BookingSummary(BaseModel):
    """Flat booking view assembled from explicit joins."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    booking_code: str
    status: BookingStatus
    number_of_seats: int
    seat_amount: Decimal
    food_amount: Decimal
    discount_amount: Decimal
    final_amount: Decimal
    created_at: datetime
    hold_expires_at: datetime | None = None  # only while PENDING

    movie_title: str
    theater_name: str
    room_name: str
    show_date: date
    start_time: time

    seat_labels: list[str]


class OccupiedSeatsResponse(BaseModel):
    """Seats currently held or sold for a showtime."""

    showtime_id: int
    seat_ids: list[int]


class BookingStatusResponse(BaseModel):
    """Booking status after a manual transition."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    booking_code: str
    status: BookingStatus
    cancelled_at: datetime | None = None
