"""
Error taxonomy for the user service.

Every error carries the HTTP status and the client-facing message. The API
layer renders any UserServiceError as {"error": message}; nothing else about
the exception (driver detail, traceback) reaches the client.

    InvalidJSONBody     400  body missing, malformed or wrong shape
    EmptyName           400  name blank after trimming
    InvalidEmailFormat  400  email does not match local@domain.tld
    InvalidUserID       400  path id not a positive integer
    UserNotFound        404  no row with that id
    StorageError        500  anything below the repository
"""


class UserServiceError(Exception):
    """Base class for errors that map directly onto an HTTP response."""

    status_code: int = 500
    message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class InvalidJSONBody(UserServiceError):
    status_code = 400
    message = "Invalid JSON body"


class EmptyName(UserServiceError):
    status_code = 400
    message = "Name cannot be empty"


class InvalidEmailFormat(UserServiceError):
    status_code = 400
    message = "Invalid email format"


class InvalidUserID(UserServiceError):
    status_code = 400
    message = "Invalid user ID"


class UserNotFound(UserServiceError):
    status_code = 404
    message = "User not found"


class StorageError(UserServiceError):
    """
    Failure below the repository (connectivity, driver, constraint violation).

    The message is a generic per-operation string safe to show to clients.
    The underlying exception is chained via ``raise ... from exc`` and logged
    by the repository before raising.
    """

    status_code = 500
    message = "Internal server error"
