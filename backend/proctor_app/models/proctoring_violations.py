from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, JSON, UniqueConstraint
from sqlalchemy.orm import relationship

from ..core.database import Base
from ..utils.timezone import utc_now


class ProctoringViolation(Base):
    __tablename__ = "proctoring_violations"

    id = Column(Integer, primary_key=True, index=True)
    session_id = Column(String(36), ForeignKey("proctoring_sessions.id"), nullable=False, index=True)
    # 1-based position in the session history
    sequence = Column(Integer, nullable=False)
    violation_type = Column(String(50), nullable=False)
    severity = Column(String(20), nullable=False, default="low")
    details = Column(JSON, nullable=True)
    timestamp = Column(DateTime, nullable=False, default=utc_now)

    session = relationship("ProctoringSession", back_populates="violations")

    __table_args__ = (
        UniqueConstraint("session_id", "sequence", name="uq_proctoring_violation_sequence"),
    )

    def __repr__(self):
        return f"<ProctoringViolation {self.violation_type} #{self.sequence} for session {self.session_id}>"
