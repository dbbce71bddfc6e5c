"""Error taxonomy shared by the services.

Every error carries the HTTP status it maps to and a message that is safe to
show to clients. The handlers in ``app.main`` turn them into responses.
"""


class AppError(Exception):
    status_code = 500
    detail = "Internal server error"

    def __init__(self, detail: str = None):
        super().__init__(detail or self.detail)
        if detail:
            self.detail = detail


class ValidationError(AppError):
    status_code = 400
    detail = "Invalid request"


class Unauthorized(AppError):
    status_code = 401
    detail = "Authorization token is required"


class InvalidCredentials(Unauthorized):
    detail = "Invalid credentials"


class NotFound(AppError):
    status_code = 404
    detail = "Not found"


class ListNotFound(NotFound):
    detail = "List not found"


class MovieNotInList(NotFound):
    detail = "Movie not found in the list"


class MovieNotFound(NotFound):
    detail = "Movie not found!"


class Conflict(AppError):
    status_code = 409
    detail = "Already exists"


class UsernameTaken(Conflict):
    detail = "Username already exists"


class ListNameTaken(Conflict):
    detail = "A list with this name already exists"


class Internal(AppError):
    pass


class ProviderUnavailable(Internal):
    """OMDb could not be reached or answered with a non-200 status."""
