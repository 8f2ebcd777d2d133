"""Tests for booking status transitions and the pending booking sweep."""

from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.dialects import postgresql

from cinebox.exceptions import (
    BookingError,
    BookingExpiredError,
    BookingNotFoundError,
    InvalidBookingTransition,
)
from cinebox.models.booking import Booking, BookingStatus
from cinebox.models.booking_seat import BookingSeat
from cinebox.services.booking_lifecycle import BookingLifecycle

NOW = datetime(2026, 10, 19, 5, 0, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def make_booking(
    id: int = 1,
    age: timedelta = timedelta(minutes=20),
    status: BookingStatus = BookingStatus.PENDING,
    seat_ids: tuple[int, ...] = (11, 12),
) -> Booking:
    return Booking(
        id=id,
        booking_code=f"BK{id:06d}",
        user_id=1,
        showtime_id=100,
        number_of_seats=len(seat_ids),
        total_amount=Decimal("150000"),
        final_amount=Decimal("150000"),
        status=status,
        created_at=NOW - age,
        seats=[
            BookingSeat(seat_id=seat_id, showtime_id=100, price=Decimal("75000"))
            for seat_id in seat_ids
        ],
    )


def make_nested_ctx() -> MagicMock:
    ctx = MagicMock()
    ctx.__aenter__ = AsyncMock(return_value=ctx)
    ctx.__aexit__ = AsyncMock(return_value=False)
    return ctx


def make_db(*results: MagicMock) -> AsyncMock:
    db = AsyncMock()
    db.execute = AsyncMock(side_effect=list(results))
    db.begin_nested = MagicMock(side_effect=lambda: make_nested_ctx())
    return db


def scalars_result(items: list) -> MagicMock:
    result = MagicMock()
    result.scalars.return_value.all.return_value = items
    return result


def scalar_result(item) -> MagicMock:
    result = MagicMock()
    result.scalar_one_or_none.return_value = item
    return result


def update_result(rowcount: int) -> MagicMock:
    result = MagicMock()
    result.rowcount = rowcount
    return result


def showtime_result(show_date: date, start_time: time) -> MagicMock:
    result = MagicMock()
    result.one_or_none.return_value = SimpleNamespace(show_date=show_date, start_time=start_time)
    return result


# ---------------------------------------------------------------------------
# Hold window
# ---------------------------------------------------------------------------


class TestHoldWindow:
    def test_hold_expires_fifteen_minutes_after_creation(self):
        lifecycle = BookingLifecycle(AsyncMock(), hold_minutes=15)
        booking = make_booking(age=timedelta(0))
        assert lifecycle.hold_expires_at(booking) == NOW + timedelta(minutes=15)

    def test_exactly_at_hold_boundary_is_not_expired(self):
        lifecycle = BookingLifecycle(AsyncMock(), hold_minutes=15)
        assert not lifecycle.is_hold_expired(make_booking(age=timedelta(minutes=15)), NOW)

    def test_past_hold_boundary_is_expired(self):
        lifecycle = BookingLifecycle(AsyncMock(), hold_minutes=15)
        booking = make_booking(age=timedelta(minutes=15, seconds=1))
        assert lifecycle.is_hold_expired(booking, NOW)

    def test_confirmed_booking_never_expires(self):
        lifecycle = BookingLifecycle(AsyncMock(), hold_minutes=15)
        booking = make_booking(age=timedelta(hours=3), status=BookingStatus.CONFIRMED)
        assert not lifecycle.is_hold_expired(booking, NOW)

    def test_release_seats_is_idempotent(self):
        lifecycle = BookingLifecycle(AsyncMock())
        booking = make_booking()

        assert lifecycle.release_seats(booking, NOW) == 2
        assert all(s.released_at == NOW for s in booking.seats)
        assert lifecycle.release_seats(booking, NOW + timedelta(minutes=1)) == 0
        assert all(s.released_at == NOW for s in booking.seats)

    def test_expire_rejects_non_pending(self):
        lifecycle = BookingLifecycle(AsyncMock())
        booking = make_booking(status=BookingStatus.CANCELLED)

        with pytest.raises(InvalidBookingTransition):
            lifecycle.expire(booking, NOW)
        assert booking.status == BookingStatus.CANCELLED


# ---------------------------------------------------------------------------
# expire_pending_bookings
# ---------------------------------------------------------------------------


class TestExpirePendingBookings:
    async def test_overdue_booking_is_expired_and_seats_released(self):
        booking = make_booking(age=timedelta(minutes=20))
        db = make_db(scalars_result([booking]), update_result(1))

        expired = await BookingLifecycle(db, hold_minutes=15).expire_pending_bookings(NOW)

        assert expired == 1
        assert booking.status == BookingStatus.EXPIRED
        assert all(s.released_at == NOW for s in booking.seats)
        db.begin_nested.assert_called_once()
        db.commit.assert_not_awaited()

    async def test_no_overdue_bookings(self):
        db = make_db(scalars_result([]))

        expired = await BookingLifecycle(db).expire_pending_bookings(NOW)

        assert expired == 0
        db.begin_nested.assert_not_called()

    async def test_query_uses_hold_cutoff(self):
        db = make_db(scalars_result([]))

        await BookingLifecycle(db, hold_minutes=15).expire_pending_bookings(NOW)

        stmt = db.execute.call_args.args[0]
        params = stmt.compile().params
        assert NOW - timedelta(minutes=15) in params.values()
        assert BookingStatus.PENDING in params.values()

    async def test_query_skips_rows_locked_by_other_transactions(self):
        db = make_db(scalars_result([]))

        await BookingLifecycle(db).expire_pending_bookings(NOW)

        stmt = db.execute.call_args.args[0]
        assert "FOR UPDATE SKIP LOCKED" in str(stmt.compile(dialect=postgresql.dialect()))

    async def test_status_write_is_conditional_on_pending(self):
        booking = make_booking(age=timedelta(minutes=20))
        db = make_db(scalars_result([booking]), update_result(1))

        await BookingLifecycle(db, hold_minutes=15).expire_pending_bookings(NOW)

        update_stmt = db.execute.call_args_list[1].args[0]
        assert update_stmt.table.name == "bookings"
        params = update_stmt.compile().params
        assert params["id_1"] == booking.id
        assert params["status_1"] == BookingStatus.PENDING
        assert params["status"] == BookingStatus.EXPIRED

    async def test_booking_within_hold_is_left_alone(self):
        """A booking that is no longer eligible when reached is skipped."""
        fresh = make_booking(id=1, age=timedelta(minutes=15))
        db = make_db(scalars_result([fresh]))

        expired = await BookingLifecycle(db, hold_minutes=15).expire_pending_bookings(NOW)

        assert expired == 0
        assert fresh.status == BookingStatus.PENDING
        assert all(s.released_at is None for s in fresh.seats)

    async def test_second_run_is_a_no_op(self):
        booking = make_booking(age=timedelta(minutes=30))
        db = make_db(scalars_result([booking]), update_result(1), scalars_result([booking]))
        lifecycle = BookingLifecycle(db, hold_minutes=15)

        assert await lifecycle.expire_pending_bookings(NOW) == 1
        assert await lifecycle.expire_pending_bookings(NOW) == 0
        assert booking.status == BookingStatus.EXPIRED

    async def test_booking_confirmed_after_read_is_not_expired(self):
        """The row was PENDING when selected but CONFIRMED by the time of the write."""
        booking = make_booking(age=timedelta(minutes=15, seconds=1))
        db = make_db(scalars_result([booking]), update_result(0))

        expired = await BookingLifecycle(db, hold_minutes=15).expire_pending_bookings(NOW)

        assert expired == 0
        assert booking.status != BookingStatus.EXPIRED
        assert all(s.released_at is None for s in booking.seats)
        db.flush.assert_not_awaited()

    async def test_failure_on_one_booking_does_not_stop_the_sweep(self):
        first = make_booking(id=1, age=timedelta(minutes=40))
        second = make_booking(id=2, age=timedelta(minutes=30), seat_ids=(13,))
        db = make_db(scalars_result([first, second]), update_result(1), update_result(1))
        db.flush = AsyncMock(side_effect=[RuntimeError("deadlock detected"), None])

        expired = await BookingLifecycle(db, hold_minutes=15).expire_pending_bookings(NOW)

        assert expired == 1
        assert second.status == BookingStatus.EXPIRED
        assert second.seats[0].released_at == NOW
        assert db.begin_nested.call_count == 2


# ---------------------------------------------------------------------------
# confirm
# ---------------------------------------------------------------------------


class TestConfirm:
    async def test_confirm_within_hold(self):
        booking = make_booking(age=timedelta(minutes=5))
        db = make_db(scalar_result(booking))

        result = await BookingLifecycle(db, hold_minutes=15).confirm(1, NOW)

        assert result is booking
        assert booking.status == BookingStatus.CONFIRMED
        assert all(s.released_at is None for s in booking.seats)
        db.flush.assert_awaited_once()
        db.commit.assert_not_awaited()

    async def test_confirm_after_hold_expires_booking(self):
        booking = make_booking(age=timedelta(minutes=16))
        db = make_db(scalar_result(booking))

        with pytest.raises(BookingExpiredError) as exc_info:
            await BookingLifecycle(db, hold_minutes=15).confirm(1, NOW)

        assert exc_info.value.status_code == 410
        assert exc_info.value.booking_code == "BK000001"
        assert booking.status == BookingStatus.EXPIRED
        assert all(s.released_at == NOW for s in booking.seats)
        db.commit.assert_awaited_once()

    async def test_confirm_cancelled_booking_is_rejected(self):
        booking = make_booking(age=timedelta(minutes=5), status=BookingStatus.CANCELLED)
        db = make_db(scalar_result(booking))

        with pytest.raises(InvalidBookingTransition) as exc_info:
            await BookingLifecycle(db).confirm(1, NOW)

        assert exc_info.value.status_code == 409
        assert exc_info.value.current == "CANCELLED"
        assert exc_info.value.target == "CONFIRMED"

    async def test_confirm_missing_booking(self):
        db = make_db(scalar_result(None))

        with pytest.raises(BookingNotFoundError) as exc_info:
            await BookingLifecycle(db).confirm(999, NOW)

        assert exc_info.value.status_code == 404


# ---------------------------------------------------------------------------
# cancel
# ---------------------------------------------------------------------------


class TestCancel:
    async def test_cancel_confirmed_booking_before_showtime(self):
        booking = make_booking(status=BookingStatus.CONFIRMED)
        db = make_db(
            scalar_result(booking),
            showtime_result(date(2026, 10, 25), time(19, 30)),
        )

        result = await BookingLifecycle(db).cancel(1, NOW, reason="Change of plans")

        assert result.status == BookingStatus.CANCELLED
        assert result.cancelled_at == NOW
        assert result.cancellation_reason == "Change of plans"
        assert all(s.released_at == NOW for s in result.seats)
        db.flush.assert_awaited_once()

    async def test_cancel_after_showtime_started(self):
        booking = make_booking(status=BookingStatus.CONFIRMED)
        # 2026-10-19 10:00 in Ho Chi Minh City is 03:00 UTC, before NOW
        db = make_db(
            scalar_result(booking),
            showtime_result(date(2026, 10, 19), time(10, 0)),
        )

        with pytest.raises(BookingError, match="already started"):
            await BookingLifecycle(db).cancel(1, NOW)

        assert booking.status == BookingStatus.CONFIRMED
        assert all(s.released_at is None for s in booking.seats)

    async def test_cancel_expired_booking_is_rejected(self):
        booking = make_booking(status=BookingStatus.EXPIRED)
        db = make_db(scalar_result(booking))

        with pytest.raises(InvalidBookingTransition):
            await BookingLifecycle(db).cancel(1, NOW)

        assert db.execute.await_count == 1
