"""Database models for the draft server."""

from datetime import datetime

from sqlalchemy import JSON, DateTime, Integer, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class RoomRecord(Base):
    """Database model for draft rooms.

    The full room is stored as JSON in ``data``; the scalar columns mirror
    the fields that are useful to query on.

    Attributes:
        code: Room join code (primary key)
        host_id: Player id of the host
        status: Lifecycle status ("lobby", "drafting", "closed")
        version: Write counter used for compare-and-swap updates
        data: Full serialized room record
        created_at: When the room was created
        updated_at: When the room was last written
    """

    __tablename__ = "rooms"

    code: Mapped[str] = mapped_column(String(10), primary_key=True)
    host_id: Mapped[str] = mapped_column(String(50), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="lobby", index=True)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    data: Mapped[dict] = mapped_column(JSON, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=func.now(), nullable=False, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=func.now(), onupdate=func.now(), nullable=False
    )
