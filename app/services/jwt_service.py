"""
JWT Service for session token issuance and validation
"""
import jwt
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from app.core.config import SESSION_ALGORITHMS
from app.core.exceptions import InvalidTokenException
from atams.logging import get_logger

logger = get_logger(__name__)

REQUIRED_CLAIMS = ("email", "iat", "exp")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class IssuedToken:
    token: str
    expires_at: datetime
    expires_in: int  # Seconds


class JwtService:
    def __init__(
        self,
        secret: bytes,
        algorithm: str = "HS256",
        ttl: timedelta = timedelta(hours=6),
        clock: Optional[Callable[[], datetime]] = None
    ) -> None:
        if algorithm not in SESSION_ALGORITHMS:
            raise ValueError(f"Unsupported session token algorithm: {algorithm}")
        if not secret:
            raise ValueError("Session token secret is empty")
        self.secret = secret
        self.algorithm = algorithm
        self.ttl = ttl
        self.clock = clock or utc_now

    def issue(self, email: str) -> IssuedToken:
        """
        Issue a signed session token for an identity

        Returns:
            IssuedToken: token string, expiry instant and lifetime in seconds
        """
        now = self.clock()
        exp = now + self.ttl

        payload = {
            "email": email,
            "iat": int(now.timestamp()),
            "exp": int(exp.timestamp())
        }

        token = jwt.encode(payload, self.secret, algorithm=self.algorithm)

        return IssuedToken(
            token=token,
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            expires_in=int(self.ttl.total_seconds())
        )

    def verify(self, token: str) -> str:
        """
        Verify a session token and return its identity claim

        Args:
            token: JWT string from the Authorization header

        Returns:
            str: The email claim

        Raises:
            InvalidTokenException: malformed, wrong algorithm, bad signature,
                missing claims or expired (now >= exp)
        """
        if not isinstance(token, str) or not token:
            raise InvalidTokenException("Token is required")

        try:
            header = jwt.get_unverified_header(token)
        except jwt.InvalidTokenError:
            raise InvalidTokenException("Malformed token")

        # Exactly one accepted algorithm, compared before any key is used
        if header.get("alg") != self.algorithm:
            raise InvalidTokenException("Unexpected signing algorithm")

        try:
            # Expiry is checked below against the injected clock, without leeway
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"verify_exp": False, "verify_iat": False, "require": list(REQUIRED_CLAIMS)}
            )
        except jwt.MissingRequiredClaimError as e:
            raise InvalidTokenException(f"Missing required claim: {e.claim}")
        except jwt.InvalidTokenError as e:
            raise InvalidTokenException(f"Invalid token: {str(e)}")

        email = payload["email"]
        if not isinstance(email, str) or not email:
            raise InvalidTokenException("Invalid identity claim")

        exp = payload["exp"]
        if not isinstance(exp, (int, float)) or isinstance(exp, bool):
            raise InvalidTokenException("Invalid expiry claim")

        if self.clock().timestamp() >= exp:
            raise InvalidTokenException("Token expired")

        return email
