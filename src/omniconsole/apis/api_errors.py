from fastapi.exceptions import HTTPException

# Utils
from omniconsole.utils.log_utils import LogUtil

# Exceptions
from omniconsole.exceptions.console_exception import ConsoleException, ValidationException


def http_error(log_util: LogUtil, service_name: str, action: str, error: Exception) -> HTTPException:
    """
    Convert an error raised while handling a request into the HTTPException the
    global handler renders. Unexpected errors become a generic 500.
    """
    if isinstance(error, ValidationException):
        log_util.warning(service_name=service_name, message=f"Rejected while {action}: {error.message} {error.errors}")
        return HTTPException(status_code=error.status_code, detail={"message": error.message, "errors": error.errors})
    if isinstance(error, ConsoleException):
        if error.status_code >= 500:
            log_util.error(service_name=service_name, message=f"Error {action}: {error.message}")
        else:
            log_util.info(service_name=service_name, message=f"{error.status_code} while {action}: {error.message}")
        return HTTPException(status_code=error.status_code, detail=error.message)
    log_util.error(service_name=service_name, message=f"Error {action}: {error}")
    return HTTPException(status_code=500, detail=f"Error {action}")
