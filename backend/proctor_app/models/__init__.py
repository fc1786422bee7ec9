from .proctoring_session import ProctoringSession
from .proctoring_violations import ProctoringViolation
from .proctoring_snapshot import ProctoringSnapshot
from .quiz_result import QuizResult

__all__ = [
    "ProctoringSession",
    "ProctoringViolation",
    "ProctoringSnapshot",
    "QuizResult",
]
