"""Booking lifecycle: status transitions and the seat holds they imply."""

import logging
from collections.abc import Iterable
from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.orm.attributes import set_committed_value

from cinebox.config import settings
from cinebox.exceptions import (
    BookingError,
    BookingExpiredError,
    BookingNotFoundError,
    InvalidBookingTransition,
)
from cinebox.models.booking import Booking, BookingStatus
from cinebox.models.showtime import Showtime
from cinebox.utils.dates import utc_now

logger = logging.getLogger(__name__)


class BookingLifecycle:
    """
    Owns every status change of a booking after it has been created.

    Allowed transitions:
    - PENDING -> CONFIRMED (payment completed within the hold window)
    - PENDING -> EXPIRED (hold window lapsed)
    - PENDING | CONFIRMED -> CANCELLED

    Leaving PENDING through EXPIRED or CANCELLED releases the booking's seats
    in the same unit of work as the status change. Methods flush but never
    commit; the caller owns the transaction.
    """

    def __init__(self, db: AsyncSession, hold_minutes: int | None = None) -> None:
        """
        Initialize the lifecycle manager.

        Args:
            db: Database session
            hold_minutes: Seat hold TTL (uses settings if not provided)
        """
        self.db = db
        if hold_minutes is None:
            hold_minutes = settings.booking_hold_minutes
        self.hold = timedelta(minutes=hold_minutes)

    def hold_expires_at(self, booking: Booking) -> datetime:
        return booking.created_at + self.hold

    def is_hold_expired(self, booking: Booking, now: datetime) -> bool:
        """True when the booking is still PENDING and older than the hold TTL."""
        return booking.status == BookingStatus.PENDING and self.hold_expires_at(booking) < now

    def release_seats(self, booking: Booking, now: datetime) -> int:
        """Stamp released_at on the booking's unreleased seats and return how many."""
        released = 0
        for booking_seat in booking.seats:
            if booking_seat.released_at is None:
                booking_seat.released_at = now
                released += 1
        return released

    def expire(self, booking: Booking, now: datetime) -> int:
        """
        Move a PENDING booking to EXPIRED and release its seats.

        Returns:
            Number of seats released
        """
        self._check_transition(booking, (BookingStatus.PENDING,), BookingStatus.EXPIRED)
        booking.status = BookingStatus.EXPIRED
        return self.release_seats(booking, now)

    async def confirm(self, booking_id: int, now: datetime | None = None) -> Booking:
        """
        Confirm a PENDING booking after payment.

        If the hold has already lapsed the booking is expired instead, the
        expiry is committed, and BookingExpiredError is raised.
        """
        now = now or utc_now()
        booking = await self._get_for_update(booking_id)
        self._check_transition(booking, (BookingStatus.PENDING,), BookingStatus.CONFIRMED)

        if self.is_hold_expired(booking, now):
            booking_code = booking.booking_code
            self.expire(booking, now)
            # Persist the expiry even though the caller's transaction will fail
            await self.db.commit()
            logger.warning(f"Booking {booking_code} hold expired before confirmation")
            raise BookingExpiredError(booking_id, booking_code)

        booking.status = BookingStatus.CONFIRMED
        await self.db.flush()
        logger.info(f"Booking {booking.booking_code} confirmed")
        return booking

    async def cancel(
        self,
        booking_id: int,
        now: datetime | None = None,
        reason: str | None = None,
    ) -> Booking:
        """
        Cancel a PENDING or CONFIRMED booking whose showtime has not started.

        Releases the booking's seats and records when and why it was cancelled.
        """
        now = now or utc_now()
        booking = await self._get_for_update(booking_id)
        self._check_transition(
            booking,
            (BookingStatus.PENDING, BookingStatus.CONFIRMED),
            BookingStatus.CANCELLED,
        )

        starts_at = await self._showtime_start(booking.showtime_id)
        if starts_at is not None and starts_at <= now:
            raise BookingError(
                f"Booking {booking.booking_code} is for a showtime that has already started"
            )

        booking.status = BookingStatus.CANCELLED
        booking.cancelled_at = now
        booking.cancellation_reason = reason
        released = self.release_seats(booking, now)
        await self.db.flush()
        logger.info(f"Booking {booking.booking_code} cancelled, released {released} seats")
        return booking

    async def expire_pending_bookings(self, now: datetime | None = None) -> int:
        """
        Expire every PENDING booking whose hold has lapsed.

        Each booking is expired inside its own savepoint, so a failure on one
        booking is logged and skipped without affecting the others. Rows
        locked by a concurrent confirm or cancel are skipped this tick, and
        the status write is conditional on the row still being PENDING, so a
        booking confirmed after it was read is never expired. Repeated runs
        over the same data are a no-op.

        Returns:
            Number of bookings expired by this run
        """
        now = now or utc_now()
        cutoff = now - self.hold

        stmt = (
            select(Booking)
            .options(selectinload(Booking.seats))
            .where(
                Booking.status == BookingStatus.PENDING,
                Booking.created_at < cutoff,
            )
            .order_by(Booking.created_at)
            .with_for_update(skip_locked=True)
        )
        result = await self.db.execute(stmt)
        bookings = list(result.scalars().all())

        if not bookings:
            logger.debug("No pending bookings past their hold window")
            return 0

        expired = 0
        for booking in bookings:
            # Read before the savepoint; a rollback expires the instance
            booking_code = booking.booking_code
            if not self.is_hold_expired(booking, now):
                logger.debug(f"Booking {booking_code} is no longer eligible for expiry, skipping")
                continue

            try:
                async with self.db.begin_nested():
                    released = await self._expire_if_pending(booking, now)
            except Exception as e:
                logger.error(f"Error expiring booking {booking_code}: {e}", exc_info=True)
                continue

            if released is None:
                logger.info(f"Booking {booking_code} left PENDING before it could expire, skipping")
                continue

            expired += 1
            logger.info(f"Booking {booking_code} expired, released {released} seats")

        logger.info(f"Expired {expired} of {len(bookings)} overdue pending bookings")
        return expired

    async def _expire_if_pending(self, booking: Booking, now: datetime) -> int | None:
        """
        Expire the booking only if its row is still PENDING.

        Returns:
            Number of seats released, or None if the row had already moved on
        """
        result = await self.db.execute(
            update(Booking)
            .where(
                Booking.id == booking.id,
                Booking.status == BookingStatus.PENDING,
            )
            .values(status=BookingStatus.EXPIRED)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            return None

        set_committed_value(booking, "status", BookingStatus.EXPIRED)
        released = self.release_seats(booking, now)
        await self.db.flush()
        return released

    async def _get_for_update(self, booking_id: int) -> Booking:
        stmt = (
            select(Booking)
            .options(selectinload(Booking.seats))
            .where(Booking.id == booking_id)
            .with_for_update()
        )
        result = await self.db.execute(stmt)
        booking = result.scalar_one_or_none()
        if booking is None:
            raise BookingNotFoundError(booking_id)
        return booking

    async def _showtime_start(self, showtime_id: int) -> datetime | None:
        stmt = select(Showtime.show_date, Showtime.start_time).where(Showtime.id == showtime_id)
        result = await self.db.execute(stmt)
        row = result.one_or_none()
        if row is None:
            return None
        return datetime.combine(row.show_date, row.start_time, tzinfo=ZoneInfo(settings.timezone))

    @staticmethod
    def _check_transition(
        booking: Booking,
        allowed: Iterable[BookingStatus],
        target: BookingStatus,
    ) -> None:
        if booking.status not in allowed:
            raise InvalidBookingTransition(booking.booking_code, booking.status.value, target.value)
