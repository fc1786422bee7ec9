import uuid

from sqlalchemy import Column, String, DateTime, Boolean, Integer, JSON, Index
from sqlalchemy.orm import relationship

from ..core.database import Base
from ..utils.timezone import utc_now


class ProctoringSession(Base):
    """Integrity record of one quiz attempt."""
    __tablename__ = "proctoring_sessions"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, nullable=False, index=True)
    quiz_id = Column(String, nullable=False, index=True)
    result_id = Column(String, nullable=True)

    start_time = Column(DateTime, nullable=False, default=utc_now)
    end_time = Column(DateTime, nullable=True)
    status = Column(String(20), nullable=False, default="active", index=True)

    suspicion_score = Column(Integer, nullable=False, default=0)
    final_suspicion_score = Column(Integer, nullable=True)
    violation_count = Column(Integer, nullable=False, default=0)

    is_locked = Column(Boolean, nullable=False, default=False)
    lock_reason = Column(String, nullable=True)
    lock_time = Column(DateTime, nullable=True)

    browser_info = Column(JSON, nullable=True)
    session_metadata = Column("metadata", JSON, nullable=True)

    version_id = Column(Integer, nullable=False)

    created_at = Column(DateTime, default=utc_now)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now)

    violations = relationship(
        "ProctoringViolation",
        back_populates="session",
        order_by="ProctoringViolation.sequence",
        cascade="all, delete-orphan",
    )
    snapshots = relationship(
        "ProctoringSnapshot",
        back_populates="session",
        order_by="ProctoringSnapshot.id",
        cascade="all, delete-orphan",
    )

    __mapper_args__ = {"version_id_col": version_id}
    __table_args__ = (
        Index("ix_proctoring_sessions_user_quiz", "user_id", "quiz_id"),
    )

    @property
    def has_ended(self) -> bool:
        return self.end_time is not None

    def __repr__(self):
        return f"<ProctoringSession {self.id} {self.status} score={self.suspicion_score}>"
