"""
CRUD operations for User model.

User lookups here are not owner-scoped: any authenticated caller may list,
update or delete any account.
"""

from typing import List, Optional
from sqlalchemy.orm import Session
from app.models.user import User


def create(db: Session, email: str, hashed_password: str, name: Optional[str] = None) -> User:
    """
    Create a new user.

    Args:
        db: Database session
        email: Unique login email
        hashed_password: Already-hashed password, never plaintext
        name: Optional display name

    Returns:
        Created User instance with id
    """
    db_user = User(email=email, hashed_password=hashed_password, name=name)

    db.add(db_user)
    db.commit()
    db.refresh(db_user)

    return db_user


def get_by_id(db: Session, user_id: str) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def get_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email).first()


def get_multi(db: Session) -> List[User]:
    """Retrieve every user, oldest first."""
    return db.query(User).order_by(User.created_at).all()


def update(db: Session, user_id: str, email: str, name: Optional[str]) -> Optional[User]:
    """
    Update a user's email and display name.

    Returns:
        Updated User instance if found, None otherwise
    """
    db_user = get_by_id(db, user_id)
    if not db_user:
        return None

    db_user.email = email
    db_user.name = name

    db.commit()
    db.refresh(db_user)

    return db_user


def delete(db: Session, user_id: str) -> bool:
    """
    Delete a user and, through the ORM cascade, all of their jobs.

    Returns:
        True if deleted, False if not found
    """
    db_user = get_by_id(db, user_id)
    if not db_user:
        return False

    db.delete(db_user)
    db.commit()

    return True
