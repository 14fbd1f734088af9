from typing import Any, Optional


INVALID_PARAMETERS = "INVALID_PARAMETERS"
RECORD_NOT_FOUND = "RECORD_NOT_FOUND"
NAME_EXISTS = "NAME_EXISTS"
DATABASE_ERROR = "DATABASE_ERROR"
INTERNAL_ERROR = "INTERNAL_ERROR"
ENUM_NOT_FOUND = "ENUM_NOT_FOUND"

ERROR_MESSAGES = {
    INVALID_PARAMETERS: "Invalid parameters",
    RECORD_NOT_FOUND: "Record not found",
    NAME_EXISTS: "Name already exists",
    DATABASE_ERROR: "Database operation failed",
    INTERNAL_ERROR: "Internal server error",
    ENUM_NOT_FOUND: "Enum not found",
}


class ApiError(Exception):
    """Error raised by services and rendered as a failure envelope."""

    def __init__(
        self,
        err_code: str,
        message: Optional[str] = None,
        status_code: int = 400,
        data: Any = None,
    ) -> None:
        self.err_code = err_code
        self.message = message or ERROR_MESSAGES.get(err_code, "Unknown error")
        self.status_code = status_code
        self.data = data
        super().__init__(self.message)


def invalid(message: str) -> ApiError:
    return ApiError(INVALID_PARAMETERS, message, status_code=400)


def not_found(entity: str) -> ApiError:
    return ApiError(RECORD_NOT_FOUND, f"{entity} not found", status_code=404)


class TransportError(RuntimeError):
    """Raised by HTTP helpers when the admin API cannot be reached or refuses a call."""
