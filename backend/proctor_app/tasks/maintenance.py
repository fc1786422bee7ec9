from proctor_app.core.celery_app import celery_app
from proctor_app.core import database
from proctor_app.services.proctoring_service import ProctoringService
from proctor_app.services.session_repository import ProctoringSessionRepository
import logging

logger = logging.getLogger(__name__)


@celery_app.task(name="terminate_stale_proctoring_sessions")
def terminate_stale_sessions(max_age_minutes=None):
    """Task to terminate proctoring sessions that were started but never ended"""
    db = database.SessionLocal()
    try:
        service = ProctoringService(ProctoringSessionRepository(db))
        terminated = service.terminate_stale_sessions(max_age_minutes)
        return {
            'terminated_sessions': terminated,
            'total_terminated': len(terminated)
        }
    except Exception as exc:
        logger.error(f"Error in terminate_stale_sessions: {exc}")
        raise
    finally:
        db.close()
