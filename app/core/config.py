import base64
import binascii

from pydantic import Field, field_validator
from atams import AtamsBaseSettings

# Symmetric MACs accepted for session tokens
SESSION_ALGORITHMS = ("HS256", "HS384", "HS512")
MIN_SESSION_SECRET_BYTES = 32


class Settings(AtamsBaseSettings):
    """
    Application Settings

    Inherits from AtamsBaseSettings which includes:
    - DATABASE_URL (required)
    - DB_POOL_SIZE, DB_MAX_OVERFLOW, DB_POOL_RECYCLE, DB_POOL_TIMEOUT, DB_POOL_PRE_PING
    - ENCRYPTION_ENABLED, ENCRYPTION_KEY, ENCRYPTION_IV (response encryption)
    - LOGGING_ENABLED, LOG_LEVEL, LOG_TO_FILE, LOG_FILE_PATH
    - CORS_ORIGINS, CORS_ALLOW_CREDENTIALS, CORS_ALLOW_METHODS, CORS_ALLOW_HEADERS
    - RATE_LIMIT_ENABLED, RATE_LIMIT_REQUESTS, RATE_LIMIT_WINDOW
    - DEBUG

    All settings can be overridden via .env file or by redefining them here.
    Settings are validated once, when the application is created; a missing or
    malformed SESSION_SECRET aborts startup.
    """
    APP_NAME: str = "Attendance Ledger"
    APP_VERSION: str = "1.0.0"
    API_PREFIX: str = "/api/v1"

    # Atlas SSO is not used, the base class still requires an app code
    ATLAS_APP_CODE: str = "ATTENDANCE_LEDGER"

    # Create tables on startup (disable when migrations own the schema)
    AUTO_CREATE_TABLES: bool = True

    # Session token settings
    SESSION_SECRET: str
    SESSION_ALGORITHM: str = "HS256"
    SESSION_TTL_HOURS: int = Field(default=6, ge=6, le=24)

    # Password hashing (argon2id)
    PASSWORD_HASH_TIME_COST: int = Field(default=3, ge=1)
    PASSWORD_HASH_MEMORY_COST: int = Field(default=65536, ge=8)
    PASSWORD_HASH_PARALLELISM: int = Field(default=4, ge=1)

    @field_validator("SESSION_SECRET")
    @classmethod
    def validate_session_secret(cls, v: str) -> str:
        """SESSION_SECRET is base64 and must decode to a usable HMAC key"""
        v = v.strip()
        if not v:
            raise ValueError("SESSION_SECRET is required")
        try:
            decoded = base64.b64decode(v, validate=True)
        except (binascii.Error, ValueError):
            raise ValueError("SESSION_SECRET must be valid base64")
        if len(decoded) < MIN_SESSION_SECRET_BYTES:
            raise ValueError(
                f"SESSION_SECRET must decode to at least {MIN_SESSION_SECRET_BYTES} bytes"
            )
        return v

    @field_validator("SESSION_ALGORITHM")
    @classmethod
    def validate_session_algorithm(cls, v: str) -> str:
        if v not in SESSION_ALGORITHMS:
            raise ValueError(f"SESSION_ALGORITHM must be one of {', '.join(SESSION_ALGORITHMS)}")
        return v

    @property
    def session_secret_bytes(self) -> bytes:
        return base64.b64decode(self.SESSION_SECRET, validate=True)

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")
