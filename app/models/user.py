import uuid
from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, TimestampMixin

ADMIN_PLAN = "admin"


class User(Base, TimestampMixin):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    phone: Mapped[str | None] = mapped_column(String(20), default=None, index=True)
    email: Mapped[str | None] = mapped_column(String(255), default=None, unique=True, index=True)
    name: Mapped[str | None] = mapped_column(String(255), default=None)
    plan: Mapped[str] = mapped_column(String(20), nullable=False, default="free", index=True)  # 'guest', 'free', 'pro', 'admin'
    exam_type: Mapped[str | None] = mapped_column(String(50), default=None)
    coins: Mapped[int] = mapped_column(nullable=False, default=0)
    streak_days: Mapped[int] = mapped_column(nullable=False, default=0)
    last_active_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), default=None)

    @property
    def is_admin(self) -> bool:
        return self.plan == ADMIN_PLAN
