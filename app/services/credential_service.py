"""
Credential Service - Registration, password verification and account lifecycle
"""
from dataclasses import dataclass
from typing import Optional

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError
from sqlalchemy.orm import Session

from app.repositories.user_repository import UserRepository
from app.models.user import CredentialState
from app.schemas.auth import Identity
from app.core.exceptions import ValidationException
from atams.exceptions import (
    ConflictException,
    NotFoundException,
    UnauthorizedException
)
from atams.logging import get_logger

logger = get_logger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


@dataclass(frozen=True)
class RegisterResult:
    email: str
    reactivated: bool


class CredentialService:
    def __init__(self, password_hasher: Optional[PasswordHasher] = None) -> None:
        self.repo = UserRepository()
        self.hasher = password_hasher or PasswordHasher()
        # Verified against when the email is unknown, so both paths cost one argon2 run
        self.dummy_hash = self.hasher.hash("attendance-ledger-unknown-identity")

    def _hash(self, password: str) -> str:
        return self.hasher.hash(password)

    def _password_matches(self, stored_hash: str, password: str) -> bool:
        """Constant-time comparison is done by argon2 itself"""
        try:
            return self.hasher.verify(stored_hash, password)
        except VerifyMismatchError:
            return False
        except (VerificationError, InvalidHashError):
            logger.warning("Stored password hash could not be verified")
            return False

    def register(self, db: Session, email: str, password: str) -> RegisterResult:
        """
        Register a new identity, or reactivate a tombstoned one

        Args:
            db: Database session
            email: Email address (surrounding whitespace is trimmed)
            password: Plain password (surrounding whitespace is trimmed)

        Returns:
            RegisterResult: email and whether an old identity was reactivated

        Raises:
            ValidationException: Empty email or password
            ConflictException: An active identity already uses the email
        """
        email = (email or "").strip()
        password = (password or "").strip()
        if not email or not password:
            raise ValidationException("Email and password cannot be empty")

        existing = self.repo.get_by_email(db, email)
        state = existing.state if existing else None

        if state == CredentialState.ACTIVE:
            raise ConflictException("User already exists")

        if state == CredentialState.TOMBSTONED:
            if not self.repo.reactivate(db, existing.u_id, self._hash(password)):
                # Another registration reactivated the row after our lookup
                logger.info("Concurrent reactivation lost", extra={'extra_data': {'email': email}})
                raise ConflictException("User already exists")
            logger.info(
                "Identity reactivated",
                extra={'extra_data': {'email': email, 'user_id': existing.u_id}}
            )
            return RegisterResult(email=email, reactivated=True)

        user = self.repo.create_user(db, email, self._hash(password))
        if user is None:
            # Lost a race against a concurrent registration for the same email
            raise ConflictException("User already exists")

        logger.info("Identity registered", extra={'extra_data': {'email': email, 'user_id': user.u_id}})
        return RegisterResult(email=email, reactivated=False)

    def verify(self, db: Session, email: str, password: str) -> Identity:
        """
        Verify credentials of an active identity

        Raises:
            UnauthorizedException: Unknown, tombstoned, or wrong password
        """
        email = (email or "").strip()
        password = (password or "").strip()
        if not email or not password:
            raise UnauthorizedException(INVALID_CREDENTIALS)

        user = self.repo.get_active_by_email(db, email)
        stored_hash = user.u_password_hash if user else self.dummy_hash
        if not self._password_matches(stored_hash, password) or not user:
            logger.info("Login rejected", extra={'extra_data': {'email': email}})
            raise UnauthorizedException(INVALID_CREDENTIALS)

        if self.hasher.check_needs_rehash(user.u_password_hash):
            self.repo.set_password_hash(db, user, self._hash(password))

        logger.info("Login succeeded", extra={'extra_data': {'email': email, 'user_id': user.u_id}})
        return Identity.model_validate(user)

    def change_password(self, db: Session, email: str, old_password: str, new_password: str) -> None:
        """
        Replace the password after re-verifying the old one

        Raises:
            NotFoundException: Identity no longer active
            UnauthorizedException: Old password is wrong
            ValidationException: New password is empty
        """
        user = self.repo.get_active_by_email(db, email)
        if not user:
            raise NotFoundException("User not found")

        if not self._password_matches(user.u_password_hash, (old_password or "").strip()):
            raise UnauthorizedException("Old password is incorrect")

        new_password = (new_password or "").strip()
        if not new_password:
            raise ValidationException("New password cannot be empty")

        self.repo.set_password_hash(db, user, self._hash(new_password))
        logger.info("Password changed", extra={'extra_data': {'email': email}})

    def tombstone(self, db: Session, email: str) -> None:
        """
        Soft-delete an identity so a later registration can reactivate it.
        Tokens already issued stay valid until they expire.
        """
        user = self.repo.get_active_by_email(db, email)
        if not user:
            raise NotFoundException("User not found")

        self.repo.soft_delete(db, user.u_id, deleted_at_field="u_deleted_at")
        logger.info("Identity tombstoned", extra={'extra_data': {'email': email, 'user_id': user.u_id}})
