"""
Database models package.
"""

from app.models.user import User
from app.models.job import Job, JobStatus

__all__ = ["User", "Job", "JobStatus"]
