"""
User Repository - Data access layer for identities
"""
from typing import Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from atams.db import BaseRepository
from app.models.user import User


class UserRepository(BaseRepository[User]):
    def __init__(self):
        super().__init__(User)

    def get_by_email(self, db: Session, email: str) -> Optional[User]:
        """Get user by email including tombstoned rows using ORM"""
        return db.query(User).filter(User.u_email == email).first()

    def get_active_by_email(self, db: Session, email: str) -> Optional[User]:
        """Get non-tombstoned user by email using ORM"""
        return db.query(User).filter(
            User.u_email == email,
            User.u_deleted_at.is_(None)
        ).first()

    def create_user(self, db: Session, email: str, password_hash: str) -> Optional[User]:
        """
        Insert a new identity.
        Returns None if the email is already taken (unique constraint hit by a
        concurrent registration).
        """
        try:
            return self.create(db, {"u_email": email, "u_password_hash": password_hash})
        except IntegrityError:
            db.rollback()
            return None

    def reactivate(self, db: Session, user_id: int, password_hash: str) -> bool:
        """
        Clear the tombstone and replace the hash in one statement, keeping u_id.
        Returns False when the row is no longer tombstoned (a concurrent
        registration reactivated it first).
        """
        updated = db.query(User).filter(
            User.u_id == user_id,
            User.u_deleted_at.isnot(None)
        ).update(
            {User.u_password_hash: password_hash, User.u_deleted_at: None},
            synchronize_session=False
        )
        db.commit()
        return updated == 1

    def set_password_hash(self, db: Session, user: User, password_hash: str) -> User:
        return self.update(db, user, {"u_password_hash": password_hash})
