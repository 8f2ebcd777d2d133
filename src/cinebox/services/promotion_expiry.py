"""Expiry sweeps for vouchers and coupons."""

import logging
from datetime import date, datetime
from typing import NamedTuple

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from cinebox.models.coupon import Coupon, UserCoupon
from cinebox.models.promotion import PromotionStatus, WalletStatus
from cinebox.models.voucher import UserVoucher, Voucher
from cinebox.utils.dates import local_today, utc_now

logger = logging.getLogger(__name__)


class VoucherExpiryResult(NamedTuple):
    vouchers: int
    user_vouchers: int


class CouponExpiryResult(NamedTuple):
    coupons: int
    exhausted: int
    user_coupons: int


async def expire_vouchers(db: AsyncSession, today: date | None = None) -> VoucherExpiryResult:
    """
    Mark vouchers past their expiry date as EXPIRED.

    A voucher is valid through its expiry date, so only vouchers whose
    expiry_date is strictly before today are expired. Wallet entries still
    AVAILABLE for such vouchers are expired too. Every statement filters on
    the pre-expiry status, so re-running is a no-op.
    """
    today = today or local_today()

    expired_voucher_ids = select(Voucher.id).where(Voucher.expiry_date < today)
    user_voucher_result = await db.execute(
        update(UserVoucher)
        .where(
            UserVoucher.status == WalletStatus.AVAILABLE,
            UserVoucher.voucher_id.in_(expired_voucher_ids),
        )
        .values(status=WalletStatus.EXPIRED)
        .execution_options(synchronize_session=False)
    )

    voucher_result = await db.execute(
        update(Voucher)
        .where(
            Voucher.status == PromotionStatus.ACTIVE,
            Voucher.expiry_date < today,
        )
        .values(status=PromotionStatus.EXPIRED)
        .execution_options(synchronize_session=False)
    )

    result = VoucherExpiryResult(
        vouchers=voucher_result.rowcount,
        user_vouchers=user_voucher_result.rowcount,
    )
    logger.info(
        f"Expired {result.vouchers} vouchers and {result.user_vouchers} wallet vouchers "
        f"(expiry before {today})"
    )
    return result


async def expire_coupons(db: AsyncSession, now: datetime | None = None) -> CouponExpiryResult:
    """
    Mark coupons past their expiry instant as EXPIRED.

    Also switches ACTIVE coupons that reached their usage limit to INACTIVE
    and expires AVAILABLE wallet entries of expired coupons. Expiry runs
    before the exhaustion check so a coupon that is both ends up EXPIRED.
    """
    now = now or utc_now()

    coupon_result = await db.execute(
        update(Coupon)
        .where(
            Coupon.status == PromotionStatus.ACTIVE,
            Coupon.expiry_at < now,
        )
        .values(status=PromotionStatus.EXPIRED)
        .execution_options(synchronize_session=False)
    )

    exhausted_result = await db.execute(
        update(Coupon)
        .where(
            Coupon.status == PromotionStatus.ACTIVE,
            Coupon.usage_limit.is_not(None),
            Coupon.usage_count >= Coupon.usage_limit,
        )
        .values(status=PromotionStatus.INACTIVE)
        .execution_options(synchronize_session=False)
    )

    expired_coupon_ids = select(Coupon.id).where(Coupon.expiry_at < now)
    user_coupon_result = await db.execute(
        update(UserCoupon)
        .where(
            UserCoupon.status == WalletStatus.AVAILABLE,
            UserCoupon.coupon_id.in_(expired_coupon_ids),
        )
        .values(status=WalletStatus.EXPIRED)
        .execution_options(synchronize_session=False)
    )

    result = CouponExpiryResult(
        coupons=coupon_result.rowcount,
        exhausted=exhausted_result.rowcount,
        user_coupons=user_coupon_result.rowcount,
    )
    logger.info(
        f"Updated {result.coupons} expired coupons, {result.exhausted} exhausted coupons, "
        f"{result.user_coupons} expired wallet coupons"
    )
    return result
