"""Scheduled job that expires lapsed booking holds."""

import logging

from cinebox.database import AsyncSessionLocal
from cinebox.services.booking_lifecycle import BookingLifecycle
from cinebox.tasks.guard import skip_if_running
from cinebox.utils.dates import utc_now

logger = logging.getLogger(__name__)


@skip_if_running
async def run_booking_expiry() -> int:
    """Expire PENDING bookings past their hold window and release their seats.

    Creates its own DB session so it can be called from the scheduler or the
    admin API without a request context. Failures are logged and swallowed;
    the next tick retries anything still overdue.
    """
    logger.debug("Checking for expired booking holds")

    async with AsyncSessionLocal() as db:
        try:
            lifecycle = BookingLifecycle(db)
            expired = await lifecycle.expire_pending_bookings(utc_now())
            await db.commit()
        except Exception as e:
            logger.error(f"Booking expiry sweep failed: {e}", exc_info=True)
            await db.rollback()
            return 0

    if expired > 0:
        logger.info(f"Booking expiry sweep complete: {expired} bookings expired")
    return expired
