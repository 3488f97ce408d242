"""initial club schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '0001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None


youth_category = sa.Enum('F', 'E', 'D', 'C', 'B', 'A', 'ADULT', name='youthcategory')
trainer_role = sa.Enum('TRAINER', 'ADMIN', name='trainerrole')
day_of_week = sa.Enum(
    'MONDAY', 'TUESDAY', 'WEDNESDAY', 'THURSDAY', 'FRIDAY', 'SATURDAY', 'SUNDAY', name='dayofweek'
)
recurrence_interval = sa.Enum('ONCE', 'WEEKLY', 'BIWEEKLY', 'MONTHLY', name='recurrenceinterval')
attendance_status = sa.Enum('PRESENT', 'ABSENT_EXCUSED', 'ABSENT_UNEXCUSED', name='attendancestatus')


def upgrade() -> None:
    op.create_table(
        'athletes',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('first_name', sa.String(), nullable=False),
        sa.Column('last_name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False, unique=True),
        sa.Column('birth_date', sa.Date(), nullable=True),
        sa.Column('youth_category', youth_category, nullable=True),
        sa.Column('guardian_name', sa.String(), nullable=True),
        sa.Column('guardian_email', sa.String(), nullable=True),
        sa.Column('guardian_phone', sa.String(), nullable=True),
        sa.Column('emergency_contact_name', sa.String(), nullable=True),
        sa.Column('emergency_contact_phone', sa.String(), nullable=True),
        sa.Column('is_approved', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('approved_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )

    op.create_table(
        'trainers',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('first_name', sa.String(), nullable=False),
        sa.Column('last_name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False, unique=True),
        sa.Column('role', trainer_role, nullable=False, server_default='TRAINER'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )

    op.create_table(
        'recurring_trainings',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('day_of_week', day_of_week, nullable=False),
        sa.Column('start_time', sa.String(5), nullable=False),
        sa.Column('end_time', sa.String(5), nullable=False),
        sa.Column('recurrence', recurrence_interval, nullable=False, server_default='WEEKLY'),
        sa.Column('valid_from', sa.Date(), nullable=True),
        sa.Column('valid_until', sa.Date(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )

    op.create_table(
        'training_groups',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('recurring_training_id', sa.String(36),
                  sa.ForeignKey('recurring_trainings.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('sort_order', sa.Integer(), nullable=False, server_default='0'),
    )

    op.create_table(
        'recurring_training_athlete_assignments',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('training_group_id', sa.String(36),
                  sa.ForeignKey('training_groups.id', ondelete='CASCADE'), nullable=False),
        sa.Column('athlete_id', sa.String(36), sa.ForeignKey('athletes.id', ondelete='CASCADE'), nullable=False),
        sa.Column('assigned_at', sa.DateTime(), nullable=True),
        sa.Column('assigned_by', sa.String(36), nullable=True),
        sa.UniqueConstraint('training_group_id', 'athlete_id', name='uq_group_athlete'),
    )

    op.create_table(
        'recurring_training_trainer_assignments',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('training_group_id', sa.String(36),
                  sa.ForeignKey('training_groups.id', ondelete='CASCADE'), nullable=False),
        sa.Column('trainer_id', sa.String(36), sa.ForeignKey('trainers.id', ondelete='CASCADE'), nullable=False),
        sa.Column('is_primary', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('assigned_at', sa.DateTime(), nullable=True),
        sa.UniqueConstraint('training_group_id', 'trainer_id', name='uq_group_trainer'),
    )

    op.create_table(
        'training_sessions',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('day_of_week', day_of_week, nullable=False),
        sa.Column('recurring_training_id', sa.String(36),
                  sa.ForeignKey('recurring_trainings.id', ondelete='SET NULL'), nullable=True),
        sa.Column('start_time', sa.String(5), nullable=True),
        sa.Column('end_time', sa.String(5), nullable=True),
        sa.Column('is_cancelled', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('cancellation_reason', sa.String(), nullable=True),
        sa.Column('is_completed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('completed_at', sa.DateTime(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.UniqueConstraint('recurring_training_id', 'date', name='uq_session_training_date'),
    )
    op.create_index('idx_session_date', 'training_sessions', ['date'])

    op.create_table(
        'session_groups',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('training_session_id', sa.String(36),
                  sa.ForeignKey('training_sessions.id', ondelete='CASCADE'), nullable=False),
        sa.Column('training_group_id', sa.String(36),
                  sa.ForeignKey('training_groups.id', ondelete='CASCADE'), nullable=False),
        sa.Column('exercises', sa.Text(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.UniqueConstraint('training_session_id', 'training_group_id', name='uq_session_group'),
    )

    op.create_table(
        'session_group_trainer_assignments',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('session_group_id', sa.String(36),
                  sa.ForeignKey('session_groups.id', ondelete='CASCADE'), nullable=False),
        sa.Column('trainer_id', sa.String(36), sa.ForeignKey('trainers.id', ondelete='CASCADE'), nullable=False),
    )

    op.create_table(
        'session_athlete_assignments',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('training_session_id', sa.String(36),
                  sa.ForeignKey('training_sessions.id', ondelete='CASCADE'), nullable=False),
        sa.Column('athlete_id', sa.String(36), sa.ForeignKey('athletes.id', ondelete='CASCADE'), nullable=False),
        sa.Column('session_group_id', sa.String(36),
                  sa.ForeignKey('session_groups.id', ondelete='CASCADE'), nullable=False),
        sa.Column('assigned_by', sa.String(36), nullable=True),
        sa.Column('assigned_at', sa.DateTime(), nullable=True),
        sa.UniqueConstraint('training_session_id', 'athlete_id', name='uq_session_athlete'),
    )

    op.create_table(
        'attendance_records',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('athlete_id', sa.String(36), sa.ForeignKey('athletes.id', ondelete='CASCADE'), nullable=False),
        sa.Column('training_session_id', sa.String(36),
                  sa.ForeignKey('training_sessions.id', ondelete='CASCADE'), nullable=False),
        sa.Column('status', attendance_status, nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('marked_by', sa.String(36), sa.ForeignKey('trainers.id'), nullable=True),
        sa.Column('marked_at', sa.DateTime(), nullable=True),
        sa.UniqueConstraint('athlete_id', 'training_session_id', name='uq_attendance_athlete_session'),
    )

    op.create_table(
        'cancellations',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('athlete_id', sa.String(36), sa.ForeignKey('athletes.id', ondelete='CASCADE'), nullable=False),
        sa.Column('training_session_id', sa.String(36),
                  sa.ForeignKey('training_sessions.id', ondelete='CASCADE'), nullable=False),
        sa.Column('reason', sa.String(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )

    op.create_table(
        'absence_alerts',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('athlete_id', sa.String(36), sa.ForeignKey('athletes.id', ondelete='CASCADE'), nullable=False),
        sa.Column('absence_count', sa.Integer(), nullable=False),
        sa.Column('absence_period_start', sa.Date(), nullable=False),
        sa.Column('absence_period_end', sa.Date(), nullable=False),
        sa.Column('email_sent_to_athlete', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('email_sent_to_admin', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('sent_at', sa.DateTime(), nullable=False),
        sa.Column('acknowledged_at', sa.DateTime(), nullable=True),
        sa.Column('acknowledged_by', sa.String(36), sa.ForeignKey('trainers.id'), nullable=True),
    )

    op.create_table(
        'monthly_trainer_summaries',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('trainer_id', sa.String(36), sa.ForeignKey('trainers.id', ondelete='CASCADE'), nullable=False),
        sa.Column('month', sa.Integer(), nullable=False),
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('calculated_hours', sa.Numeric(6, 2), nullable=False, server_default='0'),
        sa.Column('adjusted_hours', sa.Numeric(6, 2), nullable=True),
        sa.Column('final_hours', sa.Numeric(6, 2), nullable=False, server_default='0'),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('last_modified_by', sa.String(36), nullable=True),
        sa.Column('last_modified_at', sa.DateTime(), nullable=True),
        sa.UniqueConstraint('month', 'year', 'trainer_id', name='uq_trainer_month_year'),
    )

    op.create_table(
        'system_settings',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('cancellation_deadline_hours', sa.Integer(), nullable=False, server_default='2'),
        sa.Column('absence_alert_threshold', sa.Integer(), nullable=False, server_default='3'),
        sa.Column('absence_alert_window_days', sa.Integer(), nullable=False, server_default='30'),
        sa.Column('absence_alert_cooldown_days', sa.Integer(), nullable=False, server_default='14'),
        sa.Column('absence_alert_enabled', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('admin_notification_email', sa.String(), nullable=True),
        sa.Column('session_generation_days_ahead', sa.Integer(), nullable=False, server_default='90'),
        sa.Column('last_modified_by', sa.String(36), nullable=True),
        sa.Column('last_modified_at', sa.DateTime(), nullable=True),
    )


def downgrade() -> None:
    op.drop_table('system_settings')
    op.drop_table('monthly_trainer_summaries')
    op.drop_table('absence_alerts')
    op.drop_table('cancellations')
    op.drop_table('attendance_records')
    op.drop_table('session_athlete_assignments')
    op.drop_table('session_group_trainer_assignments')
    op.drop_table('session_groups')
    op.drop_index('idx_session_date', table_name='training_sessions')
    op.drop_table('training_sessions')
    op.drop_table('recurring_training_trainer_assignments')
    op.drop_table('recurring_training_athlete_assignments')
    op.drop_table('training_groups')
    op.drop_table('recurring_trainings')
    op.drop_table('trainers')
    op.drop_table('athletes')
    op.execute("DROP TYPE IF EXISTS attendancestatus")
    op.execute("DROP TYPE IF EXISTS recurrenceinterval")
    op.execute("DROP TYPE IF EXISTS dayofweek")
    op.execute("DROP TYPE IF EXISTS trainerrole")
    op.execute("DROP TYPE IF EXISTS youthcategory")
