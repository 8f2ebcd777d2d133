"""Room (auditorium) model."""

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from cinebox.models.base import Base, TimestampMixin


class Room(Base, TimestampMixin):
    """A screening room inside a theater."""

    __tablename__ = "rooms"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    theater_id: Mapped[int] = mapped_column(
        ForeignKey("theaters.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)

    def __repr__(self) -> str:
        return f"<Room(id={self.id}, theater_id={self.theater_id}, name={self.name!r})>"
