"""Scheduled jobs that expire vouchers and coupons.

The two sweeps are registered separately and each owns its session, so a
failure in one never blocks the other.
"""

import logging

from cinebox.database import AsyncSessionLocal
from cinebox.services.promotion_expiry import (
    CouponExpiryResult,
    VoucherExpiryResult,
    expire_coupons,
    expire_vouchers,
)
from cinebox.tasks.guard import skip_if_running
from cinebox.utils.dates import local_today, utc_now

logger = logging.getLogger(__name__)


@skip_if_running
async def run_voucher_expiry() -> VoucherExpiryResult | None:
    logger.info("Running voucher expiration check")

    async with AsyncSessionLocal() as db:
        try:
            result = await expire_vouchers(db, local_today())
            await db.commit()
        except Exception as e:
            logger.error(f"Error updating expired vouchers: {e}", exc_info=True)
            await db.rollback()
            return None

    logger.info("Voucher expiration check completed")
    return result


@skip_if_running
async def run_coupon_expiry() -> CouponExpiryResult | None:
    # Hourly, because coupon expiry is precise to the hour
    logger.info("Running coupon expiration check")

    async with AsyncSessionLocal() as db:
        try:
            result = await expire_coupons(db, utc_now())
            await db.commit()
        except Exception as e:
            logger.error(f"Error updating expired coupons: {e}", exc_info=True)
            await db.rollback()
            return None

    logger.info("Coupon expiration check completed")
    return result
