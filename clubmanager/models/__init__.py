from .athlete import YouthCategory, Athlete
from .trainer import TrainerRole, Trainer
from .recurring_training import (
    DayOfWeek,
    RecurrenceInterval,
    RecurringTraining,
    TrainingGroup,
    RecurringTrainingAthleteAssignment,
    RecurringTrainingTrainerAssignment,
)
from .training_session import (
    TrainingSession,
    SessionGroup,
    SessionGroupTrainerAssignment,
    SessionAthleteAssignment,
)
from .attendance import AttendanceStatus, AttendanceRecord, Cancellation
from .absence_alert import AbsenceAlert
from .trainer_summary import MonthlyTrainerSummary
from .settings import SystemSettings
