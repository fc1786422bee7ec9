from pydantic import BaseModel, Field, field_serializer
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import Any, Dict, List, Optional

from ..utils.timezone import to_utc_iso


class CamelModel(BaseModel):
    """JSON bodies use the camelCase keys the web client sends.

    Timestamps are naive UTC in Python and carry an explicit ``+00:00``
    offset once serialized to JSON.
    """

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class BrowserInfo(CamelModel):
    user_agent: Optional[str] = None
    platform: Optional[str] = None
    language: Optional[str] = None


class SessionStartRequest(CamelModel):
    user_id: str = Field(min_length=1)
    quiz_id: str = Field(min_length=1)
    result_id: Optional[str] = None
    browser_info: Optional[BrowserInfo] = None
    metadata: Optional[Dict[str, Any]] = None


class ViolationLogRequest(CamelModel):
    session_id: str
    violation_type: str
    details: Optional[Any] = None


class SessionEndRequest(CamelModel):
    session_id: str
    status: str = "completed"


class SnapshotRequest(CamelModel):
    session_id: str
    image_url: str = Field(min_length=1)
    violation_type: Optional[str] = None


class Violation(CamelModel):
    type: str
    timestamp: datetime
    severity: str
    details: Optional[Any] = None
    sequence: int

    @field_serializer('timestamp', when_used='json')
    def serialize_timestamp(self, value):
        return to_utc_iso(value)


class Snapshot(CamelModel):
    timestamp: datetime
    image_url: str
    violation_type: Optional[str] = None

    @field_serializer('timestamp', when_used='json')
    def serialize_timestamp(self, value):
        return to_utc_iso(value)


class ProctoringWarning(CamelModel):
    type: str
    message: str
    remaining: int


class SessionStarted(CamelModel):
    session_id: str
    start_time: datetime

    @field_serializer('start_time', when_used='json')
    def serialize_start_time(self, value):
        return to_utc_iso(value)


class ViolationLogResult(CamelModel):
    violation: Violation
    suspicion_score: int
    is_locked: bool
    lock_reason: Optional[str] = None


class SessionEnded(CamelModel):
    session_id: str
    status: str
    end_time: datetime
    suspicion_score: int
    final_suspicion_score: int
    was_locked: bool

    @field_serializer('end_time', when_used='json')
    def serialize_end_time(self, value):
        return to_utc_iso(value)


class SessionStatus(CamelModel):
    is_active: bool
    is_locked: bool
    lock_reason: Optional[str] = None
    suspicion_score: int
    violations: List[Violation] = []
    violation_counts: Dict[str, int]
    warnings: List[ProctoringWarning] = []


class SessionSummary(CamelModel):
    id: str
    user_id: str
    quiz_id: str
    result_id: Optional[str] = None
    status: str
    start_time: datetime
    end_time: Optional[datetime] = None
    suspicion_score: int
    final_suspicion_score: Optional[int] = None
    violation_count: int
    is_locked: bool
    lock_reason: Optional[str] = None
    lock_time: Optional[datetime] = None
    browser_info: Optional[Dict[str, Any]] = None
    metadata: Optional[Dict[str, Any]] = None
    snapshots: List[Snapshot] = []

    @field_serializer('start_time', 'end_time', 'lock_time', when_used='json-unless-none')
    def serialize_times(self, value):
        return to_utc_iso(value)


class SessionReport(CamelModel):
    session: SessionSummary
    violations: List[Violation] = []
    violation_counts: Dict[str, int]
    duration: Optional[float] = None
    risk_level: str
    recommendation: str
    started_at_display: Optional[str] = None
    ended_at_display: Optional[str] = None
