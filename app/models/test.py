import uuid

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, TimestampMixin


class Test(Base, TimestampMixin):
    __tablename__ = "tests"
    # pytest가 테스트 클래스로 수집하지 않도록
    __test__ = False

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    title_hi: Mapped[str | None] = mapped_column(String(255), default=None)
    description: Mapped[str | None] = mapped_column(Text, default=None)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    test_type: Mapped[str] = mapped_column(String(50), nullable=False, default="mock", index=True)
    duration_minutes: Mapped[int] = mapped_column(nullable=False, default=60)
    total_marks: Mapped[int] = mapped_column(nullable=False, default=200)
    passing_marks: Mapped[int] = mapped_column(nullable=False, default=70)
    difficulty: Mapped[str] = mapped_column(String(20), nullable=False, default="medium")
    is_free: Mapped[bool] = mapped_column(nullable=False, default=False)
    total_questions: Mapped[int] = mapped_column(nullable=False, default=0)
    total_attempts: Mapped[int] = mapped_column(nullable=False, default=0)

    question_links: Mapped[list["TestQuestion"]] = relationship(
        "TestQuestion",
        back_populates="test",
        cascade="all, delete-orphan",
        order_by="TestQuestion.order_index",
    )


class TestQuestion(Base):
    """시험-문제 연결 테이블 (출제 순서 포함)"""
    __tablename__ = "test_questions"
    __test__ = False

    test_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("tests.id", ondelete="CASCADE"), primary_key=True)
    question_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("questions.id", ondelete="CASCADE"), primary_key=True)
    order_index: Mapped[int] = mapped_column(nullable=False, index=True)

    test: Mapped["Test"] = relationship("Test", back_populates="question_links")
    question: Mapped["Question"] = relationship("Question", back_populates="test_links")
