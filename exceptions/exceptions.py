"""
Custom exceptions for the NUI intercept logger.

They are used across:

  - runtime/agents/
  - runtime/api/
  - runtime/auth/

Placing them at the project root (exceptions/) avoids circular imports and
keeps exception types consistent across modules.
"""


class MissingFieldError(Exception):
    """
    Raised when a request omits a field the operation cannot run without
    (e.g. `resource` on /log, or `server` on /clear in server-scoped storage).

    The HTTP layer maps it to a 400 `{error}` response.
    """

    def __init__(self, field, message=None):
        self.field = field
        msg = message or f"{field.capitalize()} name is required."
        super().__init__(msg)


class InvalidPayloadError(Exception):
    """
    Raised when a request body cannot be used as a log record, e.g. it is
    not valid JSON or it is a JSON array instead of an object.
    """

    def __init__(self, details=None):
        self.details = details or "Request body must be a JSON object."
        super().__init__(self.details)


class AuthRedirect(Exception):
    """
    Raised by the PIN gate when a request does not carry the shared secret.

    The app turns it into a redirect to the login page rather than an
    error status; a missing cookie and a wrong cookie look the same.
    """

    def __init__(self, location="/login"):
        self.location = location
        super().__init__(f"Authentication required, redirecting to {location}")
