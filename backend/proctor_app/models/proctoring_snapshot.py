from sqlalchemy import Column, String, DateTime, ForeignKey, Integer
from sqlalchemy.orm import relationship

from ..core.database import Base
from ..utils.timezone import utc_now


class ProctoringSnapshot(Base):
    __tablename__ = "proctoring_snapshots"

    id = Column(Integer, primary_key=True, index=True)
    session_id = Column(String(36), ForeignKey("proctoring_sessions.id"), nullable=False, index=True)
    timestamp = Column(DateTime, nullable=False, default=utc_now)
    image_url = Column(String, nullable=False)
    violation_type = Column(String(50), nullable=True)

    session = relationship("ProctoringSession", back_populates="snapshots")
