from fastapi import APIRouter, Depends, status

from ....api.deps import get_proctoring_service
from ....schemas.proctoring import (
    SessionEndRequest,
    SessionEnded,
    SessionReport,
    SessionStarted,
    SessionStartRequest,
    SessionStatus,
    Snapshot,
    SnapshotRequest,
    ViolationLogRequest,
    ViolationLogResult,
)
from ....services.proctoring_service import ProctoringService

router = APIRouter()


@router.post("/start", response_model=SessionStarted, status_code=status.HTTP_201_CREATED)
def start_session(
    request: SessionStartRequest,
    service: ProctoringService = Depends(get_proctoring_service),
):
    """Start a proctoring session for a quiz attempt"""
    session = service.start_session(
        user_id=request.user_id,
        quiz_id=request.quiz_id,
        result_id=request.result_id,
        browser_info=request.browser_info.model_dump(by_alias=True) if request.browser_info else None,
        metadata=request.metadata,
    )
    return SessionStarted(session_id=session.id, start_time=session.start_time)


@router.post("/violation", response_model=ViolationLogResult)
def log_violation(
    request: ViolationLogRequest,
    service: ProctoringService = Depends(get_proctoring_service),
):
    """Log a proctoring violation"""
    return service.log_violation(request.session_id, request.violation_type, request.details)


@router.get("/session/{session_id}", response_model=SessionStatus)
def get_session_status(
    session_id: str,
    service: ProctoringService = Depends(get_proctoring_service),
):
    return service.get_session_status(session_id)


@router.post("/end", response_model=SessionEnded)
def end_session(
    request: SessionEndRequest,
    service: ProctoringService = Depends(get_proctoring_service),
):
    """End a proctoring session"""
    session = service.end_session(request.session_id, request.status)
    return SessionEnded(
        session_id=session.id,
        status=session.status,
        end_time=session.end_time,
        suspicion_score=session.suspicion_score,
        final_suspicion_score=session.final_suspicion_score,
        was_locked=session.is_locked,
    )


@router.get("/report/{session_id}", response_model=SessionReport)
def get_report(
    session_id: str,
    service: ProctoringService = Depends(get_proctoring_service),
):
    """Instructor-facing proctoring report"""
    return service.get_report(session_id)


@router.post("/snapshot", response_model=Snapshot, status_code=status.HTTP_201_CREATED)
def record_snapshot(
    request: SnapshotRequest,
    service: ProctoringService = Depends(get_proctoring_service),
):
    return service.record_snapshot(request.session_id, request.image_url, request.violation_type)
