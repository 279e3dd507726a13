"""Domain exceptions raised by services and mapped to HTTP responses by the web layer."""


class HoopMetricsError(Exception):
    """Base class for application errors."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnauthorizedError(HoopMetricsError):
    """Caller identity is missing or unknown."""

    status_code = 401


class NotFoundError(HoopMetricsError):
    """Referenced row is absent or not owned by the caller."""

    status_code = 404


class ConflictError(HoopMetricsError):
    """Request conflicts with the current state (e.g. duplicate active plan)."""

    status_code = 400


class AITrainerError(HoopMetricsError):
    """The AI model call failed or returned unparsable content."""

    status_code = 500
    retryable = False


class AIResponseInvalidError(AITrainerError):
    """The AI model returned JSON that does not match the expected schema."""

    status_code = 502
    retryable = True

    def __init__(self, message: str, errors: list | None = None):
        super().__init__(message)
        self.errors = errors or []
