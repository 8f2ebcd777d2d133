"""Voucher models: fixed-value vouchers and their per-user wallet entries."""

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import Date, DateTime, Enum as SAEnum, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from cinebox.models.base import Base, TimestampMixin
from cinebox.models.promotion import PromotionStatus, WalletStatus


class Voucher(Base, TimestampMixin):
    """
    Voucher model.

    Vouchers expire with day granularity: a voucher is usable through the
    whole of its expiry_date and becomes EXPIRED from the following day.
    """

    __tablename__ = "vouchers"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    voucher_code: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    pin_code: Mapped[str] = mapped_column(String(10), nullable=False)
    value: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    min_purchase_amount: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    expiry_date: Mapped[date | None] = mapped_column(Date, nullable=True, index=True)
    status: Mapped[PromotionStatus] = mapped_column(
        SAEnum(PromotionStatus, name="promotion_status"),
        nullable=False,
        default=PromotionStatus.ACTIVE,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<Voucher(code={self.voucher_code!r}, status={self.status})>"


class UserVoucher(Base, TimestampMixin):
    """A voucher redeemed into a user's wallet."""

    __tablename__ = "user_vouchers"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    voucher_id: Mapped[int] = mapped_column(
        ForeignKey("vouchers.id", ondelete="CASCADE"),
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
