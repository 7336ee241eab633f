import uuid

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, TimestampMixin

CORRECT_OPTIONS = ("a", "b", "c", "d")


class Question(Base, TimestampMixin):
    __tablename__ = "questions"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    question_text: Mapped[str] = mapped_column(Text, nullable=False)
    question_text_hi: Mapped[str | None] = mapped_column(Text, default=None)
    option_a: Mapped[str] = mapped_column(Text, nullable=False)
    option_a_hi: Mapped[str | None] = mapped_column(Text, default=None)
    option_b: Mapped[str] = mapped_column(Text, nullable=False)
    option_b_hi: Mapped[str | None] = mapped_column(Text, default=None)
    option_c: Mapped[str] = mapped_column(Text, nullable=False)
    option_c_hi: Mapped[str | None] = mapped_column(Text, default=None)
    option_d: Mapped[str] = mapped_column(Text, nullable=False)
    option_d_hi: Mapped[str | None] = mapped_column(Text, default=None)
    correct_answer: Mapped[str] = mapped_column(String(1), nullable=False)  # 'a' ~ 'd'
    subject: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    topic: Mapped[str | None] = mapped_column(String(255), default=None)
    difficulty: Mapped[str] = mapped_column(String(20), nullable=False, default="medium", index=True)
    explanation: Mapped[str | None] = mapped_column(Text, default=None)
    explanation_hi: Mapped[str | None] = mapped_column(Text, default=None)

    test_links: Mapped[list["TestQuestion"]] = relationship(
        "TestQuestion",
        back_populates="question",
        cascade="all, delete-orphan",
    )
