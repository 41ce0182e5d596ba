"""
Domain errors for the admin backend.

Every error carries a user-safe message and the HTTP status it maps to.
The exception handlers in app.main render them as
{"status": message, "status_code": code}.
"""
from fastapi import status


class CricketAdminError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal Server Error"

    def __init__(self, message: str = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class DuplicateIdentity(CricketAdminError):
    status_code = status.HTTP_409_CONFLICT
    message = "Identity already exists"


class NotFound(CricketAdminError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


class AdminNotFound(NotFound):
    message = "Admin not found"


class PlayerNotFound(NotFound):
    message = "Player not found"


class TeamNotFound(NotFound):
    message = "Team not found"


class MatchNotFound(NotFound):
    message = "Match not found"


class InvalidMatch(CricketAdminError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "A match needs two different teams"


class ValidationFailed(CricketAdminError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Validation Error"


class InvalidSquad(ValidationFailed):
    message = "Invalid squad"


class InvalidStatusTransition(ValidationFailed):
    message = "Invalid match status transition"


class Unauthorized(CricketAdminError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid authentication credentials"


class InvalidCredentials(Unauthorized):
    # Same text for unknown username and wrong password
    message = "Incorrect username/password provided. Please retry"


class TokenInvalid(Unauthorized):
    message = "Invalid authentication credentials"


class TokenExpired(Unauthorized):
    message = "Token has expired, please log in again"


class StoreFailure(CricketAdminError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Internal Server Error"
