from typing import Any, Dict, Optional
from fastapi import status

class BaseAPIException(Exception):
    """
    Parent class for every custom error in the application.
    Keeps the error payload the same for the HTML pages and the JSON API.
    """
    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)

# =========================================================
# 1. COMMON ERRORS
# =========================================================

class BadRequestException(BaseAPIException):
    """400: malformed request (unknown action, missing id...)"""
    def __init__(self, message: str = "Bad Request", details: dict = None):
        super().__init__(
            message=message,
            code="BAD_REQUEST",
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details
        )

class NotFoundException(BaseAPIException):
    """404: resource not found"""
    def __init__(self, message: str = "Resource not found"):
        super().__init__(
            message=message,
            code="NOT_FOUND",
            status_code=status.HTTP_404_NOT_FOUND
        )

# =========================================================
# 2. STUDENT / STORAGE ERRORS
# =========================================================

class StudentNotFoundError(NotFoundException):
    def __init__(self, student_id: int):
        self.student_id = student_id
        super().__init__(message=f"Student {student_id} not found")
        self.code = "STUDENT_NOT_FOUND"

class StorageUnavailableError(BaseAPIException):
    """
    503: the database cannot be reached (refused connection, timeout,
    exhausted pool).
    """
    def __init__(self, message: str = "Database is unavailable", details: dict = None):
        super().__init__(
            message=message,
            code="STORAGE_UNAVAILABLE",
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            details=details
        )

class StorageError(BaseAPIException):
    """
    500: the database was reached but the statement failed
    (constraint violation, bad SQL, ...). ``details`` carries the cause.
    """
    def __init__(self, message: str = "Database operation failed", details: dict = None):
        super().__init__(
            message=message,
            code="STORAGE_ERROR",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details
        )
