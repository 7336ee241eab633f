from app.models.audit_log import AuditLog
from app.models.banner import Banner
from app.models.base import Base, get_db
from app.models.content import Content
from app.models.news import NewsItem
from app.models.notification import Notification
from app.models.performance import UserPerformanceSummary, UserSubjectPerformance
from app.models.question import Question
from app.models.report import Report
from app.models.setting import Setting
from app.models.study_template import StudyTemplate
from app.models.test import Test, TestQuestion
from app.models.test_attempt import Payment, TestAttempt
from app.models.user import User

__all__ = [
    "Base",
    "User",
    "Test",
    "TestQuestion",
    "Question",
    "Content",
    "Banner",
    "Notification",
    "NewsItem",
    "Report",
    "AuditLog",
    "Setting",
    "StudyTemplate",
    "TestAttempt",
    "Payment",
    "UserPerformanceSummary",
    "UserSubjectPerformance",
    "get_db",
]
