"""
Domain exceptions

Extends the atams exception family so the atams exception handlers translate
every outcome to its HTTP status code and error envelope.
"""
from typing import Optional, Dict, Any

from atams.exceptions import BadRequestException, UnauthorizedException


class ValidationException(BadRequestException):
    """400 - Malformed or empty input"""

    def __init__(self, message: str = "Invalid input", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class AlreadyStartedException(BadRequestException):
    """400 - Start time already recorded for the day"""

    def __init__(self, message: str = "Start time already recorded", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class NotStartedException(BadRequestException):
    """400 - End requested before a start time exists"""

    def __init__(self, message: str = "Start time not recorded yet", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class AlreadyEndedException(BadRequestException):
    """400 - End time already recorded for the day"""

    def __init__(self, message: str = "End time already recorded", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class InvalidTokenException(UnauthorizedException):
    """
    401 - Session token rejected (bad signature, wrong algorithm, malformed, expired)

    Raised by JwtService only. The auth gate replaces it with a generic
    UnauthorizedException so validation detail never reaches the client.
    """

    def __init__(self, message: str = "Invalid token", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
