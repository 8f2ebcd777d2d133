"""Coupon models: discount coupons and their per-user wallet entries."""

import enum
from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, Enum as SAEnum, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from cinebox.models.base import Base, TimestampMixin
from cinebox.models.promotion import PromotionStatus, WalletStatus


class DiscountType(str, enum.Enum):
    PERCENTAGE = "PERCENTAGE"
    FIXED_AMOUNT = "FIXED_AMOUNT"


class Coupon(Base, TimestampMixin):
    """
    Coupon model.

    Unlike vouchers, coupons expire at an exact instant (expiry_at) and may
    carry a usage limit; an exhausted coupon is switched to INACTIVE.
    """

    __tablename__ = "coupons"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    coupon_code: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    pin_code: Mapped[str] = mapped_column(String(10), nullable=False)
    discount_type: Mapped[DiscountType] = mapped_column(
        SAEnum(DiscountType, name="discount_type"),
        nullable=False,
    )
    discount_value: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    max_discount_amount: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    min_purchase_amount: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    usage_limit: Mapped[int | None] = mapped_column(Integer, nullable=True)  # None = unlimited
    usage_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    start_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    expiry_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        index=True,
    )
    status: Mapped[PromotionStatus] = mapped_column(
        SAEnum(PromotionStatus, name="promotion_status"),
        nullable=False,
        default=PromotionStatus.ACTIVE,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<Coupon(code={self.coupon_code!r}, status={self.status})>"


class UserCoupon(Base, TimestampMixin):
    """A coupon redeemed into a user's wallet."""

    __tablename__ = "user_coupons"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    coupon_id: Mapped[int] = mapped_column(
        ForeignKey("coupons.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    status: Mapped[WalletStatus] = mapped_column(
        SAEnum(WalletStatus, name="wallet_status"),
        nullable=False,
        default=WalletStatus.AVAILABLE,
    )
    redeemed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    used_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    used_for_booking_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
