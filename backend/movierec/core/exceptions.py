from fastapi import status


class BaseAppException(Exception):
    """Base exception for application"""
    error_code = "INTERNAL_ERROR"

    def __init__(self, message: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self):
        """Return error response as dictionary with error code"""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "status_code": self.status_code
        }


class NotFoundException(BaseAppException):
    """Raised when a movie or search term does not exist upstream or locally"""
    error_code = "NOT_FOUND"

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, status.HTTP_404_NOT_FOUND)


class AlreadyExistsException(BaseAppException):
    """Raised when a resource already exists"""
    error_code = "ALREADY_EXISTS"

    def __init__(self, message: str = "Resource already exists"):
        super().__init__(message, status.HTTP_409_CONFLICT)


class ValidationException(BaseAppException):
    """Raised when caller input is rejected"""
    error_code = "BAD_REQUEST"

    def __init__(self, message: str = "Invalid request"):
        super().__init__(message, status.HTTP_400_BAD_REQUEST)


class ExternalServiceException(BaseAppException):
    """Raised when the external catalog is unreachable or answers garbage"""
    error_code = "EXTERNAL_API_ERROR"

    def __init__(self, message: str = "External API error"):
        super().__init__(message, status.HTTP_502_BAD_GATEWAY)


class InternalException(BaseAppException):
    """Raised on local persistence failures"""
    error_code = "INTERNAL_ERROR"

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message, status.HTTP_500_INTERNAL_SERVER_ERROR)


class DeadlineExceededException(BaseAppException):
    """Raised when the caller's deadline fires or the operation is cancelled"""
    error_code = "DEADLINE_EXCEEDED"

    def __init__(self, message: str = "Deadline exceeded"):
        super().__init__(message, status.HTTP_504_GATEWAY_TIMEOUT)
