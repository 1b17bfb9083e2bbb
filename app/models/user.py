"""
User Model - Registered identities keyed by email
"""
import enum

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from atams.db import Base


class CredentialState(str, enum.Enum):
    """Lifecycle of an identity row: active, or tombstoned awaiting reactivation"""
    ACTIVE = "active"
    TOMBSTONED = "tombstoned"


class User(Base):
    """User model - Table: users"""
    __tablename__ = "users"

    u_id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    u_email = Column(String(255), nullable=False, unique=True, index=True)
    u_password_hash = Column(String(255), nullable=False)
    u_deleted_at = Column(DateTime, nullable=True)  # Tombstone marker
    u_created_at = Column(DateTime, server_default=func.now(), nullable=False)
    u_updated_at = Column(DateTime, onupdate=func.now(), nullable=True)

    @property
    def state(self) -> CredentialState:
        if self.u_deleted_at is None:
            return CredentialState.ACTIVE
        return CredentialState.TOMBSTONED
