from .proctoring import (
    BrowserInfo,
    SessionStartRequest,
    ViolationLogRequest,
    SessionEndRequest,
    SnapshotRequest,
    Violation,
    Snapshot,
    ProctoringWarning,
    SessionStarted,
    ViolationLogResult,
    SessionEnded,
    SessionStatus,
    SessionSummary,
    SessionReport,
)

__all__ = [
    "BrowserInfo",
    "SessionStartRequest",
    "ViolationLogRequest",
    "SessionEndRequest",
    "SnapshotRequest",
    "Violation",
    "Snapshot",
    "ProctoringWarning",
    "SessionStarted",
    "ViolationLogResult",
    "SessionEnded",
    "SessionStatus",
    "SessionSummary",
    "SessionReport",
]
