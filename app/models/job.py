import enum
import uuid
from sqlalchemy import Column, String, DateTime, Enum, ForeignKey, func
from sqlalchemy.orm import relationship
from app.core.database import Base

# Misspelled value some clients still send for REJECTED
LEGACY_REJECTED = "REJECTEDz"


class JobStatus(str, enum.Enum):
    """
    Stage of a job application.

    - WISHLIST: Saved, not applied yet
    - APPLIED: Application sent
    - INTERVIEW: Interviewing
    - OFFER: Offer received
    - REJECTED: Application closed without an offer
    """
    WISHLIST = "WISHLIST"
    APPLIED = "APPLIED"
    INTERVIEW = "INTERVIEW"
    OFFER = "OFFER"
    REJECTED = "REJECTED"


class Job(Base):
    """
    A job application tracked by a single user.
    """
    __tablename__ = "jobs"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()), index=True)
    title = Column(String, nullable=False, index=True)
    company = Column(String, nullable=False)
    status = Column(Enum(JobStatus), default=JobStatus.WISHLIST, nullable=False, index=True)
    description = Column(String, nullable=True)
    notes = Column(String, nullable=True)
    deadline = Column(String, nullable=True)

    # Owner, set once at creation and never updated
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    user = relationship("User", back_populates="jobs")

    def __repr__(self):
        return f"<Job(id={self.id}, title='{self.title}', status={self.status.value})>"
