"""
CRUD operations for Job model.

Every read and write after creation is filtered by both job id and owner id,
so a job owned by someone else is indistinguishable from a missing one.
Update and delete are single conditional statements; the affected-row count
tells the caller whether the job existed for that owner.
"""

from typing import List, Optional
from sqlalchemy.orm import Session
from app.models.job import Job
from app.schemas.job import JobRequest


def create(db: Session, job_data: JobRequest, owner_id: str) -> Job:
    """
    Create a new job owned by the given user.

    Args:
        db: Database session
        job_data: Validated job data
        owner_id: Id of the authenticated caller

    Returns:
        Created Job instance with id
    """
    db_job = Job(
        title=job_data.title,
        company=job_data.company,
        status=job_data.status,
        description=job_data.description,
        notes=job_data.notes,
        deadline=job_data.deadline,
        user_id=owner_id,
    )

    db.add(db_job)
    db.commit()
    db.refresh(db_job)

    return db_job


def _owned(db: Session, job_id: str, owner_id: str):
    return db.query(Job).filter(Job.id == job_id, Job.user_id == owner_id)


def get_for_owner(db: Session, job_id: str, owner_id: str) -> Optional[Job]:
    """
    Retrieve a job by id if it belongs to the owner.

    Returns:
        Job instance if found and owned, None otherwise
    """
    return _owned(db, job_id, owner_id).first()


def get_multi_by_owner(db: Session, owner_id: str) -> List[Job]:
    """Retrieve all of a user's jobs, oldest first."""
    return db.query(Job).filter(Job.user_id == owner_id).order_by(Job.created_at).all()


def update_for_owner(db: Session, job_id: str, owner_id: str, job_data: JobRequest) -> Optional[Job]:
    """
    Replace a job's fields if it belongs to the owner.

    The owner column is never part of the update.

    Returns:
        Updated Job instance if found and owned, None otherwise
    """
    updated = _owned(db, job_id, owner_id).update(
        {
            Job.title: job_data.title,
            Job.company: job_data.company,
            Job.status: job_data.status,
            Job.description: job_data.description,
            Job.notes: job_data.notes,
            Job.deadline: job_data.deadline,
        },
        synchronize_session=False,
    )
    db.commit()

    if not updated:
        return None
    return get_for_owner(db, job_id, owner_id)


def delete_for_owner(db: Session, job_id: str, owner_id: str) -> bool:
    """
    Delete a job if it belongs to the owner.

    Returns:
        True if deleted, False if not found or not owned
    """
    deleted = _owned(db, job_id, owner_id).delete(synchronize_session=False)
    db.commit()

    return deleted > 0
