"""
Error taxonomy for the second brain API.

Every error carries the HTTP status it is reported with and a
human-readable message. The exception handler in `main` renders them as
`{"message": ...}` bodies.
"""
from fastapi import status


class BrainError(Exception):
    """Base class for errors translated to an HTTP response."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Server Error!"

    def __init__(self, message=None):
        self.message = message or self.message
        super().__init__(self.message)


class ValidationError(BrainError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid input."


class Unauthenticated(BrainError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Unauthorized"


class MissingToken(Unauthenticated):
    message = "Token Missing"


class InvalidToken(Unauthenticated):
    message = "Invalid Token"


class InvalidCredentials(BrainError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "Invalid Credentials"


class NotFound(BrainError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not Found!"


# Username collisions are reported as a server error, not a 409.
class DuplicateError(BrainError):
    message = "User Already Exist"


class StoreError(BrainError):
    message = "Server Error!"
