"""Read-only projection queries.

Each function selects exactly the columns its caller needs through explicit
joins instead of walking ORM relationships.
"""

from datetime import datetime, timedelta

from sqlalchemy import and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from cinebox.config import settings
from cinebox.models import Booking, BookingSeat, BookingStatus, Movie, Room, Seat, Showtime, Theater
from cinebox.schemas.booking import BookingSummary
from cinebox.utils.dates import utc_now


async def get_occupied_seat_ids(
    db: AsyncSession,
    showtime_id: int,
    now: datetime | None = None,
    hold_minutes: int | None = None,
) -> list[int]:
    """
    Get IDs of seats occupied for a showtime.

    A seat is occupied by a CONFIRMED booking, or by a PENDING booking whose
    hold has not lapsed yet. Lapsed holds count as free even before the
    expiry sweep has processed them, and released seat rows never count.
    """
    now = now or utc_now()
    if hold_minutes is None:
        hold_minutes = settings.booking_hold_minutes
    hold_cutoff = now - timedelta(minutes=hold_minutes)

    stmt = (
        select(BookingSeat.seat_id)
        .join(Booking, Booking.id == BookingSeat.booking_id)
        .where(
            BookingSeat.showtime_id == showtime_id,
            BookingSeat.released_at.is_(None),
            or_(
                Booking.status == BookingStatus.CONFIRMED,
                and_(
                    Booking.status == BookingStatus.PENDING,
                    Booking.created_at >= hold_cutoff,
                ),
            ),
        )
        .distinct()
        .order_by(BookingSeat.seat_id)
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def get_booking_summary(
    db: AsyncSession,
    booking_id: int,
    hold_minutes: int | None = None,
) -> BookingSummary | None:
    """
    Build a booking summary with movie, venue and seat labels.

    Returns:
        BookingSummary, or None if the booking does not exist
    """
    if hold_minutes is None:
        hold_minutes = settings.booking_hold_minutes

    stmt = (
        select(
            Booking.id,
            Booking.booking_code,
            Booking.status,
            Booking.number_of_seats,
            Booking.seat_amount,
            Booking.food_amount,
            Booking.discount_amount,
            Booking.final_amount,
            Booking.created_at,
            Movie.title.label("movie_title"),
            Theater.name.label("theater_name"),
            Room.name.label("room_name"),
            Showtime.show_date,
            Showtime.start_time,
        )
        .join(Showtime, Showtime.id == Booking.showtime_id)
        .join(Movie, Movie.id == Showtime.movie_id)
        .join(Room, Room.id == Showtime.room_id)
        .join(Theater, Theater.id == Room.theater_id)
        .where(Booking.id == booking_id)
    )
    result = await db.execute(stmt)
    row = result.one_or_none()
    if row is None:
        return None

    seats_stmt = (
        select(Seat.row_name, Seat.seat_number)
        .join(BookingSeat, BookingSeat.seat_id == Seat.id)
        .where(BookingSeat.booking_id == booking_id)
        .order_by(Seat.row_name, Seat.seat_number)
    )
    seats_result = await db.execute(seats_stmt)
    seat_labels = [f"{seat.row_name}{seat.seat_number}" for seat in seats_result.all()]

    hold_expires_at = None
    if row.status == BookingStatus.PENDING:
        hold_expires_at = row.created_at + timedelta(minutes=hold_minutes)

    return BookingSummary(
        id=row.id,
        booking_code=row.booking_code,
        status=row.status,
        number_of_seats=row.number_of_seats,
        seat_amount=row.seat_amount,
        food_amount=row.food_amount,
        discount_amount=row.discount_amount,
        final_amount=row.final_amount,
        created_at=row.created_at,
        hold_expires_at=hold_expires_at,
        movie_title=row.movie_title,
        theater_name=row.theater_name,
        room_name=row.room_name,
        show_date=row.show_date,
        start_time=row.start_time,
        seat_labels=seat_labels,
    )
