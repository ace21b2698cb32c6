import logging
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import AuthContext, get_auth_context
from app.core.errors import InternalError, NotFound
from app.crud import job as job_crud
from app.schemas.job import JobRequest, JobResponse
from app.schemas.user import MessageResponse

router = APIRouter(prefix="/jobs", tags=["Jobs"])
logger = logging.getLogger(__name__)


@router.post("", status_code=201, response_model=JobResponse)
def create_job(
    request: JobRequest,
    auth: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db)
):
    """
    Create a new job application owned by the caller.
    """
    try:
        new_job = job_crud.create(db, request, owner_id=auth.user_id)
    except Exception as e:
        db.rollback()
        logger.error(f"Error creating job for user {auth.user_id}: {e}")
        raise InternalError("Failed to create job", details=str(e))

    logger.info(f"Created job {new_job.id}: {new_job.title} for user {auth.user_id}")
    return new_job


@router.get("", response_model=List[JobResponse])
def list_jobs(
    auth: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db)
):
    """
    List the caller's jobs. Other users' jobs are never included.
    """
    try:
        return job_crud.get_multi_by_owner(db, auth.user_id)
    except Exception as e:
        logger.error(f"Error listing jobs for user {auth.user_id}: {e}")
        raise InternalError("Failed to fetch jobs", details=str(e))


@router.get("/{job_id}", response_model=JobResponse)
def get_job(
    job_id: str,
    auth: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db)
):
    """
    Retrieve one of the caller's jobs.

    Returns 404 both when the job does not exist and when another user owns it.
    """
    try:
        job = job_crud.get_for_owner(db, job_id, auth.user_id)
    except Exception as e:
        logger.error(f"Error fetching job {job_id}: {e}")
        raise InternalError("Failed to fetch job", details=str(e))

    if not job:
        raise NotFound("Job not found")

    return job


@router.put("/{job_id}", response_model=JobResponse)
def update_job(
    job_id: str,
    request: JobRequest,
    auth: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db)
):
    """
    Replace the fields of one of the caller's jobs. The owner never changes.
    """
    try:
        job = job_crud.update_for_owner(db, job_id, auth.user_id, request)
    except Exception as e:
        db.rollback()
        logger.error(f"Error updating job {job_id}: {e}")
        raise InternalError("Failed to update job", details=str(e))

    if not job:
        raise NotFound("Job not found")

    logger.info(f"Updated job {job_id} for user {auth.user_id}")
    return job


@router.delete("/{job_id}", response_model=MessageResponse)
def delete_job(
    job_id: str,
    auth: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db)
):
    """
    Delete one of the caller's jobs.
    """
    try:
        deleted = job_crud.delete_for_owner(db, job_id, auth.user_id)
    except Exception as e:
        db.rollback()
        logger.error(f"Error deleting job {job_id}: {e}")
        raise InternalError("Failed to delete job", details=str(e))

    if not deleted:
        raise NotFound("Job not found")

    logger.info(f"Deleted job {job_id}")
    return MessageResponse(message="Job deleted")
