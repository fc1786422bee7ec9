"""
Read-side projections of a proctoring session: warnings, recommendation,
status view and instructor report. Nothing here mutates the session.
"""

from typing import Dict, List

from ..models.proctoring_session import ProctoringSession
from ..models.proctoring_violations import ProctoringViolation
from ..schemas.proctoring import (
    ProctoringWarning,
    SessionReport,
    SessionStatus,
    SessionSummary,
    Snapshot,
    Violation,
)
from ..utils.timezone import format_local_time, minutes_between
from .scoring import THRESHOLDS, count_violations_by_type, get_risk_level
from .violation_classifier import ViolationType


# (violation type, count from which the warning shows, message template)
WARNING_RULES = (
    (ViolationType.NO_FACE_DETECTED.value, 3,
     "No face detected {count} times. Keep your face inside the camera frame!"),
    (ViolationType.MULTIPLE_FACES.value, 1,
     "Multiple people detected {count} times. Only the examinee may be present!"),
    (ViolationType.EXIT_FULLSCREEN.value, 1,
     "Left fullscreen {count} times. Stay in fullscreen mode!"),
    (ViolationType.TAB_SWITCH.value, 1,
     "Switched tabs {count} times. Do not leave the exam page!"),
)

RECOMMENDATION_LOCKED = "Quiz was locked after serious violations. Investigate or allow a retake."
RECOMMENDATION_HIGH_SCORE = "High suspicion score. Review the recording before accepting the result."
RECOMMENDATION_MANY_MINOR = "Many minor violations. Keep monitoring this student."
RECOMMENDATION_CLEAN = "No serious signs of cheating."

HIGH_SUSPICION_SCORE = 50
MANY_VIOLATIONS = 10


def generate_warnings(counts: Dict[str, int]) -> List[ProctoringWarning]:
    warnings = []
    for violation_type, show_from, template in WARNING_RULES:
        count = counts.get(violation_type, 0)
        if count >= show_from:
            warnings.append(ProctoringWarning(
                type=violation_type,
                message=template.format(count=count),
                remaining=THRESHOLDS[violation_type] - count,
            ))
    return warnings


def get_recommendation(is_locked: bool, suspicion_score: int, violation_count: int) -> str:
    if is_locked:
        return RECOMMENDATION_LOCKED
    if suspicion_score >= HIGH_SUSPICION_SCORE:
        return RECOMMENDATION_HIGH_SCORE
    if violation_count >= MANY_VIOLATIONS:
        return RECOMMENDATION_MANY_MINOR
    return RECOMMENDATION_CLEAN


def violation_view(violation: ProctoringViolation) -> Violation:
    return Violation(
        type=violation.violation_type,
        timestamp=violation.timestamp,
        severity=violation.severity,
        details=violation.details,
        sequence=violation.sequence,
    )


def session_counts(session: ProctoringSession) -> Dict[str, int]:
    return count_violations_by_type(v.violation_type for v in session.violations)


def build_status(session: ProctoringSession) -> SessionStatus:
    counts = session_counts(session)
    return SessionStatus(
        is_active=session.status == "active",
        is_locked=session.is_locked,
        lock_reason=session.lock_reason,
        suspicion_score=session.suspicion_score,
        violations=[violation_view(v) for v in session.violations],
        violation_counts=counts,
        warnings=generate_warnings(counts),
    )


def build_summary(session: ProctoringSession) -> SessionSummary:
    return SessionSummary(
        id=session.id,
        user_id=session.user_id,
        quiz_id=session.quiz_id,
        result_id=session.result_id,
        status=session.status,
        start_time=session.start_time,
        end_time=session.end_time,
        suspicion_score=session.suspicion_score,
        final_suspicion_score=session.final_suspicion_score,
        violation_count=len(session.violations),
        is_locked=session.is_locked,
        lock_reason=session.lock_reason,
        lock_time=session.lock_time,
        browser_info=session.browser_info,
        metadata=session.session_metadata,
        snapshots=[
            Snapshot(timestamp=s.timestamp, image_url=s.image_url, violation_type=s.violation_type)
            for s in session.snapshots
        ],
    )


def build_report(session: ProctoringSession) -> SessionReport:
    counts = session_counts(session)
    return SessionReport(
        session=build_summary(session),
        violations=[violation_view(v) for v in session.violations],
        violation_counts=counts,
        duration=minutes_between(session.start_time, session.end_time),
        risk_level=get_risk_level(session.suspicion_score),
        recommendation=get_recommendation(
            session.is_locked, session.suspicion_score, len(session.violations)
        ),
        started_at_display=format_local_time(session.start_time),
        ended_at_display=format_local_time(session.end_time),
    )
