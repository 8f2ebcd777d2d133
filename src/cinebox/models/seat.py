"""Seat model for the physical seat layout of a room."""

import enum

from sqlalchemy import Enum as SAEnum
from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from cinebox.models.base import Base, TimestampMixin


class SeatType(str, enum.Enum):
    STANDARD = "STANDARD"
    VIP = "VIP"
    COUPLE = "COUPLE"


class Seat(Base, TimestampMixin):
    """
    Seat model.

    A seat belongs to a room and is identified by row letter and number.
    Occupancy is per showtime and derived from bookings, never stored here.
    """

    __tablename__ = "seats"
    __table_args__ = (
        UniqueConstraint("room_id", "row_name", "seat_number", name="uq_room_row_number"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    room_id: Mapped[int] = mapped_column(
        ForeignKey("rooms.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    row_name: Mapped[str] = mapped_column(String(5), nullable=False)
    seat_number: Mapped[int] = mapped_column(Integer, nullable=False)
    seat_type: Mapped[SeatType] = mapped_column(
        SAEnum(SeatType, name="seat_type"),
        nullable=False,
        default=SeatType.STANDARD,
    )
    active: Mapped[bool] = mapped_column(default=True, nullable=False)

    @property
    def label(self) -> str:
        return f"{self.row_name}{self.seat_number}"

    def __repr__(self) -> str:
        return f"<Seat(id={self.id}, room_id={self.room_id}, label={self.label!r})>"
