"""Error kinds raised by the survey services.

Routers let these propagate; the application exception handler maps
``status_code`` onto the HTTP response.
"""


class SurveyGenieError(RuntimeError):
    """Base exception for service errors."""

    status_code = 500
    default_message = "Internal Server Error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class BadRequestError(SurveyGenieError):
    """Raised when input is malformed or an update set is empty."""

    status_code = 400
    default_message = "Bad Request"


ValidationError = BadRequestError


class UnauthorizedError(SurveyGenieError):
    """Raised when credentials are missing, invalid or for another user."""

    status_code = 401
    default_message = "Unauthorized"


class ForbiddenError(SurveyGenieError):
    """Raised when an authenticated user may not perform an action."""

    status_code = 403
    default_message = "Forbidden"


class NotFoundError(SurveyGenieError):
    """Raised when a referenced entity does not exist."""

    status_code = 404
    default_message = "Not Found"


class StoreError(SurveyGenieError):
    """Raised when a store failure aborts an aggregate transaction.

    The original cause is appended to the message and chained as
    ``__cause__``.
    """

    status_code = 500
    default_message = "Store operation failed"

    def __init__(self, message: str | None = None, cause: BaseException | None = None):
        if cause is not None:
            message = f"{message or self.default_message} {cause}".strip()
        super().__init__(message)
        self.cause = cause
