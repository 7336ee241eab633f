import uuid

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, JSONType, TimestampMixin


class Content(Base, TimestampMixin):
    """학습 자료 (PDF, 공식, 시사 등)"""
    __tablename__ = "content"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    title_hi: Mapped[str | None] = mapped_column(String(255), default=None)
    type: Mapped[str] = mapped_column(String(30), nullable=False, index=True)
    language: Mapped[str] = mapped_column(String(10), nullable=False, default="en")
    is_free: Mapped[bool] = mapped_column(nullable=False, default=False)
    category: Mapped[str | None] = mapped_column(String(100), default=None)
    file_url: Mapped[str | None] = mapped_column(Text, default=None)
    file_path: Mapped[str | None] = mapped_column(Text, default=None)
    file_size: Mapped[int | None] = mapped_column(default=None)
    file_size_mb: Mapped[float | None] = mapped_column(default=None)
    page_count: Mapped[int | None] = mapped_column(default=None)
    content_text: Mapped[str | None] = mapped_column(Text, default=None)
    description_en: Mapped[str | None] = mapped_column(Text, default=None)
    description_hi: Mapped[str | None] = mapped_column(Text, default=None)
    # "metadata"는 Declarative 예약어라 속성명만 바꾼다
    file_metadata: Mapped[dict | None] = mapped_column("metadata", JSONType, default=None)
