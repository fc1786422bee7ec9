from sqlalchemy import Column, String, DateTime, Float, Boolean, Integer, JSON

from ..core.database import Base
from ..utils.timezone import utc_now


class QuizResult(Base):
    """Graded quiz attempt. The proctoring engine only writes its summary here."""
    __tablename__ = "quiz_results"

    id = Column(String(36), primary_key=True)
    user_id = Column(String, nullable=False, index=True)
    quiz_id = Column(String, nullable=False, index=True)
    score = Column(Float, nullable=True)
    status = Column(String, default="in_progress")

    proctoring_data = Column(JSON, nullable=True)
    violations_count = Column(Integer, default=0)
    is_flagged = Column(Boolean, default=False)

    created_at = Column(DateTime, default=utc_now)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now)
