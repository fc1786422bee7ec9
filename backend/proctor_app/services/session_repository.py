import logging
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload
from sqlalchemy.orm.exc import StaleDataError

from ..core.errors import ConcurrentModificationError, StorageError
from ..models.proctoring_session import ProctoringSession
from ..models.quiz_result import QuizResult

logger = logging.getLogger(__name__)

SEQUENCE_CONSTRAINT = "uq_proctoring_violation_sequence"
# SQLite reports the columns instead of the constraint name
SEQUENCE_COLUMNS = "proctoring_violations.session_id, proctoring_violations.sequence"


def is_sequence_conflict(error: IntegrityError) -> bool:
    diag = getattr(error.orig, "diag", None)
    if diag is not None and getattr(diag, "constraint_name", None) == SEQUENCE_CONSTRAINT:
        return True
    message = str(error.orig)
    return SEQUENCE_CONSTRAINT in message or SEQUENCE_COLUMNS in message


class ProctoringSessionRepository:
    """SQLAlchemy persistence for proctoring sessions.

    The only component that talks to the database. Every write goes through
    ``save``, which turns version conflicts into ``ConcurrentModificationError``
    and any other database failure into ``StorageError``.
    """

    def __init__(self, db: Session):
        self.db = db

    def create_session(
        self,
        user_id: str,
        quiz_id: str,
        start_time: datetime,
        result_id: Optional[str] = None,
        browser_info: Optional[Dict[str, Any]] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> ProctoringSession:
        session = ProctoringSession(
            id=str(uuid.uuid4()),
            user_id=user_id,
            quiz_id=quiz_id,
            result_id=result_id,
            start_time=start_time,
            status="active",
            suspicion_score=0,
            violation_count=0,
            is_locked=False,
            browser_info=browser_info,
            session_metadata=metadata,
            violations=[],
            snapshots=[],
        )
        self.db.add(session)
        self.save(session)
        return session

    def find_session_by_id(self, session_id: str) -> Optional[ProctoringSession]:
        try:
            return (
                self.db.query(ProctoringSession)
                .options(
                    selectinload(ProctoringSession.violations),
                    selectinload(ProctoringSession.snapshots),
                )
                .populate_existing()
                .filter(ProctoringSession.id == session_id)
                .first()
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to load proctoring session {session_id}: {e}")
            raise StorageError(f"Failed to load proctoring session {session_id}") from e

    def save(self, session: ProctoringSession) -> None:
        try:
            self.db.commit()
        except StaleDataError as e:
            self.db.rollback()
            raise ConcurrentModificationError(
                f"Proctoring session {session.id} was modified concurrently"
            ) from e
        except IntegrityError as e:
            self.db.rollback()
            if not is_sequence_conflict(e):
                logger.error(f"Integrity error saving proctoring session {session.id}: {e}")
                raise StorageError(f"Failed to save proctoring session {session.id}") from e
            # A concurrent append took the same violation sequence number
            raise ConcurrentModificationError(
                f"Proctoring session {session.id} was modified concurrently"
            ) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to save proctoring session {session.id}: {e}")
            raise StorageError(f"Failed to save proctoring session {session.id}") from e

    def update_external_result(self, result_id: str, summary: Dict[str, Any]) -> bool:
        """Write the proctoring summary onto the graded quiz result.

        Returns False when the result does not exist.
        """
        try:
            result = self.db.query(QuizResult).filter(QuizResult.id == result_id).first()
            if result is None:
                return False

            result.proctoring_data = summary
            result.violations_count = summary.get("violationCount", 0)
            result.is_flagged = bool(summary.get("wasLocked"))
            self.db.commit()
            return True
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageError(f"Failed to update quiz result {result_id}") from e

    def find_stale_session_ids(self, started_before: datetime) -> List[str]:
        try:
            rows = (
                self.db.query(ProctoringSession.id)
                .filter(
                    ProctoringSession.status == "active",
                    ProctoringSession.end_time.is_(None),
                    ProctoringSession.start_time < started_before,
                )
                .order_by(ProctoringSession.start_time)
                .all()
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageError("Failed to query stale proctoring sessions") from e
        return [row[0] for row in rows]

    def list_active_sessions(self, limit: int = 50) -> List[ProctoringSession]:
        try:
            return (
                self.db.query(ProctoringSession)
                .filter(ProctoringSession.end_time.is_(None))
                .order_by(ProctoringSession.start_time.desc())
                .limit(limit)
                .all()
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageError("Failed to list active proctoring sessions") from e
