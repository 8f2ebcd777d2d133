"""Showtime model for scheduled screenings."""

import enum
from datetime import date, time
from decimal import Decimal

from sqlalchemy import Date, Enum as SAEnum, ForeignKey, Numeric, Time
from sqlalchemy.orm import Mapped, mapped_column

from cinebox.models.base import Base, TimestampMixin


class ShowtimeStatus(str, enum.Enum):
    SCHEDULED = "SCHEDULED"
    CANCELLED = "CANCELLED"
    FINISHED = "FINISHED"


class Showtime(Base, TimestampMixin):
    """A screening of a movie in a room at a given date and time."""

    __tablename__ = "showtimes"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    movie_id: Mapped[int] = mapped_column(
        ForeignKey("movies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    room_id: Mapped[int] = mapped_column(
        ForeignKey("rooms.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    show_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    start_time: Mapped[time] = mapped_column(Time, nullable=False)
    end_time: Mapped[time] = mapped_column(Time, nullable=False)
    base_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    status: Mapped[ShowtimeStatus] = mapped_column(
        SAEnum(ShowtimeStatus, name="showtime_status"),
        nullable=False,
        default=ShowtimeStatus.SCHEDULED,
    )

    def __repr__(self) -> str:
        return (
            f"<Showtime(id={self.id}, movie_id={self.movie_id}, "
            f"show_date={self.show_date}, start_time={self.start_time})>"
        )
