from typing import Optional, Any

class UserHubError(Exception):
    """
    Base exception for UserHub application.
    """
    def __init__(self, message: str, code: str = "INTERNAL_ERROR", status_code: int = 500, details: Optional[Any] = None):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)

class ValidationError(UserHubError):
    """
    Raised when a request body cannot be turned into a user record.
    """
    def __init__(self, message: str = "Validation error", details: Optional[Any] = None):
        super().__init__(message, code="VALIDATION_ERROR", status_code=400, details=details)

class NotFoundError(UserHubError):
    """
    Raised when no record exists for the requested id.
    """
    def __init__(self, message: str = "User not found", details: Optional[Any] = None):
        super().__init__(message, code="NOT_FOUND", status_code=404, details=details)

class StorageError(UserHubError):
    """
    Raised when MongoDB is unreachable or rejects the operation.
    """
    def __init__(self, message: str = "Storage error", details: Optional[Any] = None):
        super().__init__(message, code="STORAGE_ERROR", status_code=500, details=details)
