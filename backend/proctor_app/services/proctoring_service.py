"""
Proctoring Service - lifecycle of one proctored quiz attempt
"""

import logging
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, List, Optional, TypeVar

from ..core.config import settings
from ..core.errors import (
    ConcurrentModificationError,
    InvalidSessionStatusError,
    ProctoringError,
    SessionClosedError,
    SessionNotFoundError,
)
from ..models.proctoring_session import ProctoringSession
from ..models.proctoring_snapshot import ProctoringSnapshot
from ..models.proctoring_violations import ProctoringViolation
from ..schemas.proctoring import (
    SessionReport,
    SessionStatus,
    Snapshot,
    ViolationLogResult,
)
from ..utils.timezone import utc_now
from .reporting import build_report, build_status, violation_view
from .scoring import count_violations_by_type, evaluate_lock
from .session_repository import ProctoringSessionRepository
from .violation_classifier import classify, get_points

logger = logging.getLogger(__name__)

T = TypeVar("T")

END_STATUSES = ("completed", "locked", "terminated")


class ProctoringService:
    """
    Orchestrates the classifier, scoring engine and repository.

    Every mutating operation is a read-modify-write of one session row. The
    row carries a version counter, so a concurrent writer makes ``save``
    fail; the operation is then re-read and re-applied, up to
    ``max_retries`` extra times.
    """

    def __init__(
        self,
        repository: ProctoringSessionRepository,
        clock: Callable[[], datetime] = utc_now,
        max_retries: Optional[int] = None,
    ):
        self.repository = repository
        self.clock = clock
        self.max_retries = settings.max_update_retries if max_retries is None else max_retries

    def start_session(
        self,
        user_id: str,
        quiz_id: str,
        result_id: Optional[str] = None,
        browser_info: Optional[Dict[str, Any]] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> ProctoringSession:
        session = self.repository.create_session(
            user_id=user_id,
            quiz_id=quiz_id,
            start_time=self.clock(),
            result_id=result_id,
            browser_info=browser_info,
            metadata=metadata,
        )
        logger.info(f"Proctoring session started: {session.id} (user={user_id}, quiz={quiz_id})")
        return session

    def log_violation(
        self,
        session_id: str,
        violation_type: str,
        details: Optional[Any] = None,
    ) -> ViolationLogResult:
        def apply(session: ProctoringSession) -> ProctoringViolation:
            severity = classify(violation_type)
            if session.has_ended:
                raise SessionClosedError(session.id, session.status)

            violation = ProctoringViolation(
                sequence=session.violation_count + 1,
                violation_type=violation_type,
                severity=severity.value,
                details=details,
                timestamp=self.clock(),
            )
            session.violations.append(violation)
            session.violation_count = violation.sequence
            session.suspicion_score += get_points(violation_type)

            counts = count_violations_by_type(v.violation_type for v in session.violations)
            decision = evaluate_lock(counts, session.suspicion_score)
            if decision.should_lock and not session.is_locked:
                session.is_locked = True
                session.lock_reason = decision.reason
                session.lock_time = self.clock()
                logger.warning(
                    f"Proctoring session {session.id} locked: {decision.reason} "
                    f"(score={session.suspicion_score})"
                )
            return violation

        session, violation = self._mutate(session_id, apply)

        logger.info(
            f"Violation {violation_type} logged for session {session.id}: "
            f"score={session.suspicion_score}, locked={session.is_locked}"
        )
        return ViolationLogResult(
            violation=violation_view(violation),
            suspicion_score=session.suspicion_score,
            is_locked=session.is_locked,
            lock_reason=session.lock_reason,
        )

    def end_session(self, session_id: str, status: str = "completed") -> ProctoringSession:
        if status not in END_STATUSES:
            raise InvalidSessionStatusError(status)

        def apply(session: ProctoringSession) -> bool:
            if session.has_ended:
                return False
            session.end_time = self.clock()
            session.status = status
            session.final_suspicion_score = session.suspicion_score
            return True

        session, ended_now = self._mutate(session_id, apply)

        if not ended_now:
            logger.info(f"Proctoring session {session.id} already ended ({session.status}), nothing to do")
            return session

        logger.info(
            f"Proctoring session ended: {session.id} status={status} "
            f"final_score={session.final_suspicion_score}"
        )
        if session.result_id:
            self._push_result_summary(session)
        return session

    def get_session_status(self, session_id: str) -> SessionStatus:
        return build_status(self._get(session_id))

    def get_report(self, session_id: str) -> SessionReport:
        return build_report(self._get(session_id))

    def record_snapshot(
        self,
        session_id: str,
        image_url: str,
        violation_type: Optional[str] = None,
    ) -> Snapshot:
        """Attach an evidence capture to a session. Scoring never reads these."""

        def apply(session: ProctoringSession) -> ProctoringSnapshot:
            if violation_type is not None:
                classify(violation_type)
            if session.has_ended:
                raise SessionClosedError(session.id, session.status)
            snapshot = ProctoringSnapshot(
                timestamp=self.clock(),
                image_url=image_url,
                violation_type=violation_type,
            )
            session.snapshots.append(snapshot)
            return snapshot

        _, snapshot = self._mutate(session_id, apply)
        return Snapshot(
            timestamp=snapshot.timestamp,
            image_url=snapshot.image_url,
            violation_type=snapshot.violation_type,
        )

    def terminate_stale_sessions(self, max_age_minutes: Optional[int] = None) -> List[str]:
        """End every active session started more than ``max_age_minutes`` ago."""
        if max_age_minutes is None:
            max_age_minutes = settings.stale_session_minutes
        cutoff = self.clock() - timedelta(minutes=max_age_minutes)

        terminated = []
        for session_id in self.repository.find_stale_session_ids(cutoff):
            try:
                self.end_session(session_id, status="terminated")
            except ProctoringError as e:
                logger.error(f"Failed to terminate stale session {session_id}: {e}")
                continue
            terminated.append(session_id)

        if terminated:
            logger.info(f"Terminated {len(terminated)} stale proctoring sessions")
        return terminated

    def _get(self, session_id: str) -> ProctoringSession:
        session = self.repository.find_session_by_id(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def _mutate(self, session_id: str, apply: Callable[[ProctoringSession], T]):
        attempts = self.max_retries + 1
        for attempt in range(1, attempts + 1):
            session = self._get(session_id)
            result = apply(session)
            try:
                self.repository.save(session)
            except ConcurrentModificationError:
                if attempt == attempts:
                    logger.error(f"Giving up on session {session_id} after {attempts} conflicting writes")
                    raise
                logger.warning(f"Concurrent update on session {session_id}, retrying ({attempt}/{attempts})")
                continue
            return session, result

    def _push_result_summary(self, session: ProctoringSession) -> None:
        summary = {
            "sessionId": session.id,
            "suspicionScore": session.suspicion_score,
            "violationCount": len(session.violations),
            "wasLocked": session.is_locked,
            "lockReason": session.lock_reason,
        }
        try:
            updated = self.repository.update_external_result(session.result_id, summary)
        except Exception as e:
            logger.error(f"Failed to push proctoring summary to result {session.result_id}: {e}")
            return

        if not updated:
            logger.warning(f"Quiz result {session.result_id} not found, proctoring summary dropped")
