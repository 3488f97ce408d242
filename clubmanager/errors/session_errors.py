# clubmanager/errors/session_errors.py

class SessionError(Exception):
    """Base exception for training session errors."""
    pass

class SessionNotFound(SessionError):
    """Raised when a training session is not found."""
    pass

class RecurringTrainingNotFound(SessionError):
    """Raised when a recurring training is not found."""
    pass

class SessionCancelled(SessionError):
    """Raised when attendance is marked on a cancelled session."""
    pass

class CancellationDeadlinePassed(SessionError):
    """Raised when an athlete cancels after the configured deadline."""
    pass

class CancellationExists(SessionError):
    """Raised when an athlete already has an active cancellation for the session."""
    pass

class CancellationNotFound(SessionError):
    """Raised when a cancellation is not found."""
    pass

class AbsenceAlertNotFound(SessionError):
    """Raised when an absence alert is not found."""
    pass
