"""Theater model for cinema venues."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from cinebox.models.base import Base, TimestampMixin


class Theater(Base, TimestampMixin):
    """Cinema venue containing one or more rooms."""

    __tablename__ = "theaters"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    city: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    address: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<Theater(id={self.id}, name={self.name!r}, city={self.city!r})>"
