"""Movie model for the film catalog."""

import enum
from datetime import date

from sqlalchemy import Date, Enum as SAEnum, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from cinebox.models.base import Base, TimestampMixin


class MovieStatus(str, enum.Enum):
    COMING_SOON = "COMING_SOON"
    NOW_SHOWING = "NOW_SHOWING"
    ENDED = "ENDED"


class Movie(Base, TimestampMixin):
    """
    Movie model.

    The status column is derived from release_date and recomputed daily by
    the movie status job; it is never edited independently.
    """

    __tablename__ = "movies"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    duration: Mapped[int | None] = mapped_column(Integer, nullable=True)  # minutes
    release_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    age_rating: Mapped[str | None] = mapped_column(String(10), nullable=True)
    status: Mapped[MovieStatus] = mapped_column(
        SAEnum(MovieStatus, name="movie_status"),
        nullable=False,
        default=MovieStatus.COMING_SOON,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<Movie(id={self.id}, title={self.title!r}, status={self.status})>"
