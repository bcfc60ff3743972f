class ServiceError(Exception):
    """Base error for the student and mark services.

    ``status_code`` is the HTTP status the API layer answers with.
    """

    status_code = 500

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class InvalidArgument(ServiceError):
    status_code = 400


class NotFound(ServiceError):
    status_code = 404


# Reported as 400, the status the marks UI already expects for duplicates
class Conflict(ServiceError):
    status_code = 400


class Internal(ServiceError):
    status_code = 500
