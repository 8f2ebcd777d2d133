"""Booking model and its status lifecycle."""

import enum
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Enum as SAEnum, ForeignKey, Index, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cinebox.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from cinebox.models.booking_seat import BookingSeat


class BookingStatus(str, enum.Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    EXPIRED = "EXPIRED"
    CANCELLED = "CANCELLED"


class Booking(Base, TimestampMixin):
    """
    Booking model.

    Created PENDING by the reservation flow, which holds its seats for a
    fixed time. From PENDING a booking moves to CONFIRMED (paid), EXPIRED
    (hold lapsed) or CANCELLED, and never returns to PENDING.
    """

    __tablename__ = "bookings"
    # Serves the expiry sweep: status = PENDING AND created_at < cutoff
    __table_args__ = (Index("ix_bookings_status_created_at", "status", "created_at"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    booking_code: Mapped[str] = mapped_column(String(20), nullable=False, unique=True)

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )
    showtime_id: Mapped[int] = mapped_column(
        ForeignKey("showtimes.id"),
        nullable=False,
        index=True,
    )

    number_of_seats: Mapped[int] = mapped_column(Integer, nullable=False)

    # Amounts
    seat_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=0)
    food_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=0)
    discount_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=0)
    total_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    final_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)

    status: Mapped[BookingStatus] = mapped_column(
        SAEnum(BookingStatus, name="booking_status"),
        nullable=False,
        default=BookingStatus.PENDING,
        index=True,
    )
    notes: Mapped[str | None] = mapped_column(String(500), nullable=True)
    cancelled_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    cancellation_reason: Mapped[str | None] = mapped_column(String(500), nullable=True)

    # Never lazy-load; callers must ask for seats explicitly with selectinload()
    seats: Mapped[list["BookingSeat"]] = relationship(
        back_populates="booking",
        cascade="all, delete-orphan",
        lazy="raise",
    )

    def __repr__(self) -> str:
        return (
            f"<Booking(id={self.id}, code={self.booking_code!r}, "
            f"status={self.status}, created_at={self.created_at})>"
        )
