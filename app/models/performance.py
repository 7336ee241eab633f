"""사용자 성적 집계 (요약은 DB 뷰, 과목별은 집계 테이블). 이 앱에서는 읽기 전용"""
import uuid

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base


class UserPerformanceSummary(Base):
    __tablename__ = "user_performance_summary"

    user_id: Mapped[uuid.UUID] = mapped_column(primary_key=True)
    total_tests: Mapped[int] = mapped_column(default=0)
    average_score: Mapped[float | None] = mapped_column(default=None)
    average_accuracy: Mapped[float | None] = mapped_column(default=None)
    total_questions_attempted: Mapped[int] = mapped_column(default=0)
    avg_time_per_question: Mapped[float | None] = mapped_column(default=None)


class UserSubjectPerformance(Base):
    __tablename__ = "user_subject_performance"

    user_id: Mapped[uuid.UUID] = mapped_column(primary_key=True)
    subject: Mapped[str] = mapped_column(String(100), primary_key=True)
    questions_attempted: Mapped[int] = mapped_column(default=0)
    correct_answers: Mapped[int] = mapped_column(default=0)
    accuracy: Mapped[float | None] = mapped_column(default=None)
