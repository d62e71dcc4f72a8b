from typing import Any, Dict, List, Optional


class ConsoleException(Exception):
    """
    This is the base exception for all console exceptions
    """
    def __init__(self, message: str, status_code: int):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message, self.status_code)

class ConsoleDBException(ConsoleException):
    """
    This is the exception for all database exceptions
    """
    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message=message, status_code=status_code)

class ConsoleServiceException(ConsoleException):
    """
    This is the exception for all service exceptions
    """
    def __init__(self, message: str):
        super().__init__(message=message, status_code=500)

class NotFoundException(ConsoleException):
    """
    This is the exception when a record is not found for the current tenant
    """
    def __init__(self, message: str):
        super().__init__(message=message, status_code=404)

class ValidationException(ConsoleException):
    """
    This is the exception for request validation errors.
    Each entry in errors is {"path": ..., "message": ..., "type": ...}
    """
    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        self.errors = errors or []
        super().__init__(message=message, status_code=400)

class UnauthorizedException(ConsoleException):
    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message=message, status_code=401)

class ForbiddenException(ConsoleException):
    def __init__(self, message: str):
        super().__init__(message=message, status_code=403)

class ConflictException(ConsoleException):
    def __init__(self, message: str):
        super().__init__(message=message, status_code=409)

class FlowDataCorruptedException(ConsoleException):
    """
    Raised when stored nodes/edges of a flow cannot be parsed back into lists
    """
    MESSAGE = "Unable to parse flow data. The flow may be corrupted."

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail
        super().__init__(message=self.MESSAGE, status_code=422)
