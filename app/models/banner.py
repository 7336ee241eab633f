import uuid

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, TimestampMixin


class Banner(Base, TimestampMixin):
    __tablename__ = "app_banners"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    image_url: Mapped[str] = mapped_column(Text, nullable=False)
    target_type: Mapped[str] = mapped_column(String(30), nullable=False, default="none")
    target_value: Mapped[str | None] = mapped_column(Text, default=None)
    display_order: Mapped[int] = mapped_column(nullable=False, default=0, index=True)
    is_active: Mapped[bool] = mapped_column(nullable=False, default=True)
