"""Booking seat model linking a booking to the seats it holds."""

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Numeric, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cinebox.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from cinebox.models.booking import Booking


class BookingSeat(Base, TimestampMixin):
    """
    Booking seat model.

    A row here occupies the seat for the showtime while its booking is
    PENDING or CONFIRMED. released_at records when the hold was given up.
    """

    __tablename__ = "booking_seats"
    __table_args__ = (UniqueConstraint("booking_id", "seat_id", name="uq_booking_seat"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    booking_id: Mapped[int] = mapped_column(
        ForeignKey("bookings.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    seat_id: Mapped[int] = mapped_column(
        ForeignKey("seats.id"),
        nullable=False,
        index=True,
    )
    showtime_id: Mapped[int] = mapped_column(
        ForeignKey("showtimes.id"),
        nullable=False,
        index=True,
    )
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    released_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    booking: Mapped["Booking"] = relationship(back_populates="seats", lazy="raise")

    def __repr__(self) -> str:
        return (
            f"<BookingSeat(booking_id={self.booking_id}, seat_id={self.seat_id}, "
            f"showtime_id={self.showtime_id})>"
        )
