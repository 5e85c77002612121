import uuid
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Text
from app.core.base import Base, TimestampedMixin

class Video(Base, TimestampedMixin):
    user_id: Mapped[uuid.UUID] = mapped_column(index=True)
    title: Mapped[str] = mapped_column(String(255))
    description: Mapped[str] = mapped_column(Text, default="")
    # StorageReference strings: a URL, or "<bucket>,<key>" to be signed on read
    thumbnail_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    video_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
