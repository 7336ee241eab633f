"""create_admin_schema

Revision ID: 3c1f9a7d2b64
Revises:
Create Date: 2026-10-17 10:12:41.508213

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '3c1f9a7d2b64'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id() -> sa.Column:
    return sa.Column('id', sa.Uuid(), server_default=sa.text('gen_random_uuid()'), nullable=False)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    ]


def upgrade() -> None:
    """관리자 백오피스 테이블, 뷰, 통계 프로시저 생성"""
    op.create_table(
        'users',
        _id(),
        sa.Column('phone', sa.String(length=20), nullable=True),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('name', sa.String(length=255), nullable=True),
        sa.Column('plan', sa.String(length=20), server_default='free', nullable=False),
        sa.Column('exam_type', sa.String(length=50), nullable=True),
        sa.Column('coins', sa.Integer(), server_default='0', nullable=False),
        sa.Column('streak_days', sa.Integer(), server_default='0', nullable=False),
        sa.Column('last_active_date', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)
    op.create_index(op.f('ix_users_phone'), 'users', ['phone'], unique=False)
    op.create_index(op.f('ix_users_plan'), 'users', ['plan'], unique=False)

    op.create_table(
        'tests',
        _id(),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('title_hi', sa.String(length=255), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('slug', sa.String(length=255), nullable=False),
        sa.Column('test_type', sa.String(length=50), server_default='mock', nullable=False),
        sa.Column('duration_minutes', sa.Integer(), server_default='60', nullable=False),
        sa.Column('total_marks', sa.Integer(), server_default='200', nullable=False),
        sa.Column('passing_marks', sa.Integer(), server_default='70', nullable=False),
        sa.Column('difficulty', sa.String(length=20), server_default='medium', nullable=False),
        sa.Column('is_free', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('total_questions', sa.Integer(), server_default='0', nullable=False),
        sa.Column('total_attempts', sa.Integer(), server_default='0', nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_tests_slug'), 'tests', ['slug'], unique=False)
    op.create_index(op.f('ix_tests_test_type'), 'tests', ['test_type'], unique=False)

    op.create_table(
        'questions',
        _id(),
        sa.Column('question_text', sa.Text(), nullable=False),
        sa.Column('question_text_hi', sa.Text(), nullable=True),
        sa.Column('option_a', sa.Text(), nullable=False),
        sa.Column('option_a_hi', sa.Text(), nullable=True),
        sa.Column('option_b', sa.Text(), nullable=False),
        sa.Column('option_b_hi', sa.Text(), nullable=True),
        sa.Column('option_c', sa.Text(), nullable=False),
        sa.Column('option_c_hi', sa.Text(), nullable=True),
        sa.Column('option_d', sa.Text(), nullable=False),
        sa.Column('option_d_hi', sa.Text(), nullable=True),
        sa.Column('correct_answer', sa.String(length=1), nullable=False),
        sa.Column('subject', sa.String(length=100), nullable=False),
        sa.Column('topic', sa.String(length=255), nullable=True),
        sa.Column('difficulty', sa.String(length=20), server_default='medium', nullable=False),
        sa.Column('explanation', sa.Text(), nullable=True),
        sa.Column('explanation_hi', sa.Text(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("correct_answer IN ('a', 'b', 'c', 'd')", name='ck_questions_correct_answer'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_questions_subject'), 'questions', ['subject'], unique=False)
    op.create_index(op.f('ix_questions_difficulty'), 'questions', ['difficulty'], unique=False)

    op.create_table(
        'test_questions',
        sa.Column('test_id', sa.Uuid(), nullable=False),
        sa.Column('question_id', sa.Uuid(), nullable=False),
        sa.Column('order_index', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['test_id'], ['tests.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['question_id'], ['questions.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('test_id', 'question_id'),
    )
    op.create_index(op.f('ix_test_questions_order_index'), 'test_questions', ['order_index'], unique=False)

    op.create_table(
        'content',
        _id(),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('title_hi', sa.String(length=255), nullable=True),
        sa.Column('type', sa.String(length=30), nullable=False),
        sa.Column('language', sa.String(length=10), server_default='en', nullable=False),
        sa.Column('is_free', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('category', sa.String(length=100), nullable=True),
        sa.Column('file_url', sa.Text(), nullable=True),
        sa.Column('file_path', sa.Text(), nullable=True),
        sa.Column('file_size', sa.Integer(), nullable=True),
        sa.Column('file_size_mb', sa.Float(), nullable=True),
        sa.Column('page_count', sa.Integer(), nullable=True),
        sa.Column('content_text', sa.Text(), nullable=True),
        sa.Column('description_en', sa.Text(), nullable=True),
        sa.Column('description_hi', sa.Text(), nullable=True),
        sa.Column('metadata', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_content_type'), 'content', ['type'], unique=False)

    op.create_table(
        'app_banners',
        _id(),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('image_url', sa.Text(), nullable=False),
        sa.Column('target_type', sa.String(length=30), server_default='none', nullable=False),
        sa.Column('target_value', sa.Text(), nullable=True),
        sa.Column('display_order', sa.Integer(), server_default='0', nullable=False),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_app_banners_display_order'), 'app_banners', ['display_order'], unique=False)

    op.create_table(
        'app_notifications',
        _id(),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('type', sa.String(length=20), server_default='info', nullable=False),
        sa.Column('target_audience', sa.String(length=20), server_default='all', nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'news',
        _id(),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('link', sa.Text(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('pub_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('source', sa.String(length=255), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('link'),
    )
    op.create_index(op.f('ix_news_pub_date'), 'news', ['pub_date'], unique=False)

    op.create_table(
        'user_reports',
        _id(),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('type', sa.String(length=50), nullable=False),
        sa.Column('target_id', sa.String(length=64), nullable=True),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('status', sa.String(length=20), server_default='pending', nullable=False),
        sa.Column('admin_note', sa.Text(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_user_reports_user_id'), 'user_reports', ['user_id'], unique=False)
    op.create_index(op.f('ix_user_reports_status'), 'user_reports', ['status'], unique=False)

    op.create_table(
        'audit_logs',
        _id(),
        sa.Column('action', sa.String(length=100), nullable=False),
        sa.Column('table_name', sa.String(length=100), nullable=True),
        sa.Column('record_id', sa.String(length=64), nullable=True),
        sa.Column('details', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column('user_id', sa.Uuid(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_audit_logs_action'), 'audit_logs', ['action'], unique=False)
    op.create_index(op.f('ix_audit_logs_user_id'), 'audit_logs', ['user_id'], unique=False)

    op.create_table(
        'settings',
        sa.Column('key', sa.String(length=50), nullable=False),
        sa.Column('value', postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('key'),
    )

    op.create_table(
        'study_templates',
        _id(),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('tasks', postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'test_attempts',
        _id(),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('test_id', sa.Uuid(), nullable=False),
        sa.Column('score', sa.Float(), nullable=True),
        sa.Column('accuracy', sa.Float(), nullable=True),
        sa.Column('total_questions', sa.Integer(), server_default='0', nullable=False),
        sa.Column('correct_answers', sa.Integer(), server_default='0', nullable=False),
        sa.Column('wrong_answers', sa.Integer(), server_default='0', nullable=False),
        sa.Column('duration_seconds', sa.Integer(), nullable=True),
        sa.Column('status', sa.String(length=20), server_default='in_progress', nullable=False),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['test_id'], ['tests.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_test_attempts_user_id'), 'test_attempts', ['user_id'], unique=False)
    op.create_index(op.f('ix_test_attempts_test_id'), 'test_attempts', ['test_id'], unique=False)

    op.create_table(
        'payments',
        _id(),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('amount', sa.Float(), server_default='0', nullable=False),
        sa.Column('status', sa.String(length=20), server_default='captured', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_payments_user_id'), 'payments', ['user_id'], unique=False)

    # 과목별 성적은 앱 쪽 집계 작업이 채우는 테이블
    op.create_table(
        'user_subject_performance',
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('subject', sa.String(length=100), nullable=False),
        sa.Column('questions_attempted', sa.Integer(), server_default='0', nullable=False),
        sa.Column('correct_answers', sa.Integer(), server_default='0', nullable=False),
        sa.Column('accuracy', sa.Float(), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('user_id', 'subject'),
    )

    op.execute(
        """
        CREATE VIEW user_performance_summary AS
        SELECT
            user_id,
            COUNT(*)::int AS total_tests,
            AVG(score) AS average_score,
            AVG(accuracy) AS average_accuracy,
            COALESCE(SUM(total_questions), 0)::int AS total_questions_attempted,
            SUM(duration_seconds)::float / NULLIF(SUM(total_questions), 0) AS avg_time_per_question
        FROM test_attempts
        WHERE completed_at IS NOT NULL
        GROUP BY user_id
        """
    )

    op.execute(
        """
        CREATE OR REPLACE FUNCTION get_daily_registrations(days integer)
        RETURNS TABLE(date date, count bigint) AS $$
            SELECT created_at::date AS date, COUNT(*) AS count
            FROM users
            WHERE created_at >= now() - make_interval(days => days)
            GROUP BY created_at::date
            ORDER BY 1
        $$ LANGUAGE sql STABLE
        """
    )
    op.execute(
        """
        CREATE OR REPLACE FUNCTION get_popular_tests(limit_count integer)
        RETURNS TABLE(id uuid, title varchar, attempts bigint) AS $$
            SELECT t.id, t.title, COUNT(a.id) AS attempts
            FROM tests t
            LEFT JOIN test_attempts a ON a.test_id = t.id
            GROUP BY t.id, t.title
            ORDER BY attempts DESC
            LIMIT limit_count
        $$ LANGUAGE sql STABLE
        """
    )
    op.execute(
        """
        CREATE OR REPLACE FUNCTION get_monthly_revenue(months integer)
        RETURNS TABLE(month text, revenue double precision) AS $$
            SELECT to_char(date_trunc('month', created_at), 'YYYY-MM') AS month,
                   COALESCE(SUM(amount), 0) AS revenue
            FROM payments
            WHERE created_at >= date_trunc('month', now()) - make_interval(months => months - 1)
            GROUP BY 1
            ORDER BY 1
        $$ LANGUAGE sql STABLE
        """
    )


def downgrade() -> None:
    """관리자 백오피스 스키마 제거"""
    op.execute("DROP FUNCTION IF EXISTS get_monthly_revenue(integer)")
    op.execute("DROP FUNCTION IF EXISTS get_popular_tests(integer)")
    op.execute("DROP FUNCTION IF EXISTS get_daily_registrations(integer)")
    op.execute("DROP VIEW IF EXISTS user_performance_summary")
    for table in (
        'user_subject_performance',
        'payments',
        'test_attempts',
        'study_templates',
        'settings',
        'audit_logs',
        'user_reports',
        'news',
        'app_notifications',
        'app_banners',
        'content',
        'test_questions',
        'questions',
        'tests',
        'users',
    ):
        op.drop_table(table)
