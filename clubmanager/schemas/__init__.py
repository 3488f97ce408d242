from .validation import ValidationResult, GroupConflict, AssignmentSummaryItem
from .assignment import (
    AthleteAssignmentCreate,
    AthleteAssignmentResponse,
    AthleteAssignmentResult,
    TrainerAssignmentCreate,
    TrainerAssignmentResponse,
    TrainerAssignmentResult,
    SessionReassignmentRequest,
    SessionReassignmentResponse,
    SessionReassignmentResult,
)
from .training_session import (
    TrainingSessionResponse,
    SessionGenerationRequest,
    SessionGenerationResult,
    SessionCancelRequest,
    AttendanceEntry,
    AttendanceMarkRequest,
    AttendanceRecordResponse,
    CancellationCreate,
    CancellationResponse,
)
from .statistics import (
    MonthlyAttendance,
    AttendanceBucket,
    CategoryAttendanceBucket,
    TrainingAttendanceBucket,
    AttendanceStatistics,
    AbsenceAlertEntry,
    MonthlyComparisonEntry,
    AthleteDashboardStats,
)
from .absence_alert import AbsenceAlertResponse
from .trainer_hours import TrainerHoursSummary, TrainerSessionDetail, TrainerHoursAdjustment
from .settings import SystemSettingsResponse, SystemSettingsUpdate
