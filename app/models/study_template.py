import uuid

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, JSONType, TimestampMixin


class StudyTemplate(Base, TimestampMixin):
    __tablename__ = "study_templates"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, default=None)
    tasks: Mapped[list[dict]] = mapped_column(JSONType, nullable=False)
    is_active: Mapped[bool] = mapped_column(nullable=False, default=True)
