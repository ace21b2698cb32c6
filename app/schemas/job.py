import logging
from pydantic import BaseModel, Field, field_validator
from typing import Any, Optional
from datetime import datetime

from app.models.job import JobStatus, LEGACY_REJECTED

logger = logging.getLogger(__name__)


class JobRequest(BaseModel):
    """Schema for creating or replacing a job"""
    title: str = Field(..., min_length=1)
    company: str = Field(..., min_length=1)
    status: JobStatus
    description: Optional[str] = None
    notes: Optional[str] = None
    deadline: Optional[str] = Field(None, description="Date-like string, e.g. 2025-01-31")

    @field_validator("status", mode="before")
    @classmethod
    def normalize_legacy_status(cls, v: Any) -> Any:
        """Accept the legacy misspelling of REJECTED from older clients"""
        if v == LEGACY_REJECTED:
            logger.warning(f"Received legacy job status '{LEGACY_REJECTED}', storing as REJECTED")
            return JobStatus.REJECTED
        return v


class JobResponse(BaseModel):
    """Schema for job response"""
    id: str
    title: str
    company: str
    status: JobStatus
    description: Optional[str] = None
    notes: Optional[str] = None
    deadline: Optional[str] = None
    user_id: str = Field(..., serialization_alias="userId")
    created_at: Optional[datetime] = Field(None, serialization_alias="createdAt")
    updated_at: Optional[datetime] = Field(None, serialization_alias="updatedAt")

    class Config:
        from_attributes = True  # Allows conversion from SQLAlchemy models
