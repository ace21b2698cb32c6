"""
User endpoints: signup, login, and account management.

Implements JWT-based stateless authentication:
- POST /users: Create new user account (public)
- POST /login: Authenticate and receive a JWT (public)
- GET /users: List all users
- PUT /users/{user_id}: Update a user's name and email
- DELETE /users/{user_id}: Delete a user and their jobs
- GET /protected: Echo the caller's token claims
"""

import logging
from typing import List
from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import AuthContext, get_auth_context, get_token_issuer
from app.core.errors import InternalError, InvalidCredentials
from app.core.security import TokenIssuer, get_password_hash, verify_password
from app.crud import user as user_crud
from app.schemas.user import (
    UserRequest,
    UserListQuery,
    LoginRequest,
    TokenResponse,
    UserResponse,
    MessageResponse,
)

router = APIRouter(tags=["Users"])
logger = logging.getLogger(__name__)


@router.post("/users", status_code=201, response_model=UserResponse)
def create_user(
    request: UserRequest,
    db: Session = Depends(get_db)
):
    """
    Register a new user account.

    The password is stored only as a bcrypt hash and never returned.
    """
    try:
        new_user = user_crud.create(
            db,
            email=request.email,
            hashed_password=get_password_hash(request.password),
            name=request.name,
        )
    except Exception as e:
        db.rollback()
        logger.error(f"Error creating user {request.email}: {e}")
        raise InternalError("Failed to create user", details=str(e))

    logger.info(f"New user registered: {new_user.email} (id: {new_user.id})")
    return new_user


@router.get("/users", response_model=List[UserResponse])
def list_users(
    auth: AuthContext = Depends(get_auth_context),
    query: UserListQuery = Depends(),
    db: Session = Depends(get_db)
):
    """
    List every registered user.

    `page` and `limit` are validated but not applied.
    """
    try:
        return user_crud.get_multi(db)
    except Exception as e:
        logger.error(f"Error listing users: {e}")
        raise InternalError("Failed to fetch users", details=str(e))


@router.put("/users/{user_id}", response_model=UserResponse)
def update_user(
    request: UserRequest,
    auth: AuthContext = Depends(get_auth_context),
    user_id: str = Path(..., min_length=1),
    db: Session = Depends(get_db)
):
    """
    Update a user's email and display name.

    The request body uses the signup schema; its password is not applied.
    """
    try:
        updated_user = user_crud.update(db, user_id, email=request.email, name=request.name)
    except Exception as e:
        db.rollback()
        logger.error(f"Error updating user {user_id}: {e}")
        raise InternalError("Failed to update user", details=str(e))

    if updated_user is None:
        logger.warning(f"Update requested for unknown user {user_id}")
        raise InternalError("Failed to update user", details=f"No user with id {user_id}")

    logger.info(f"User {user_id} updated by {auth.user_id}")
    return updated_user


@router.delete("/users/{user_id}", response_model=MessageResponse)
def delete_user(
    auth: AuthContext = Depends(get_auth_context),
    user_id: str = Path(..., min_length=1),
    db: Session = Depends(get_db)
):
    """
    Delete a user account and all of its jobs.
    """
    try:
        deleted = user_crud.delete(db, user_id)
    except Exception as e:
        db.rollback()
        logger.error(f"Error deleting user {user_id}: {e}")
        raise InternalError("Failed to delete user", details=str(e))

    if not deleted:
        logger.warning(f"Delete requested for unknown user {user_id}")
        raise InternalError("Failed to delete user", details=f"No user with id {user_id}")

    logger.info(f"User {user_id} deleted by {auth.user_id}")
    return MessageResponse(message="User deleted")


@router.post("/login", response_model=TokenResponse)
def login(
    request: LoginRequest,
    db: Session = Depends(get_db),
    issuer: TokenIssuer = Depends(get_token_issuer)
):
    """
    Authenticate user and return a JWT valid for one hour.

    Unknown email and wrong password give the same 401 response.
    """
    try:
        user = user_crud.get_by_email(db, request.email)
        authenticated = user is not None and verify_password(request.password, user.hashed_password)
        token = issuer.issue(user.id) if authenticated else None
    except Exception as e:
        logger.error(f"Error during login for {request.email}: {e}")
        raise InternalError("Failed to login", details=str(e))

    if not authenticated:
        logger.info(f"Failed login attempt for {request.email}")
        raise InvalidCredentials()

    logger.info(f"User logged in: {user.email}")
    return TokenResponse(token=token)


@router.get("/protected")
def protected(auth: AuthContext = Depends(get_auth_context)):
    """Confirm the bearer token is accepted and show its claims."""
    return {"message": "This is a protected route", "user": auth.claims}
