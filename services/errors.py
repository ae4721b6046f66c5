"""
Error taxonomy shared by services, stores and API routes
"""


class QuizError(Exception):
    """
    Base error with a stable machine-readable kind.

    Every error raised by the services carries:
    - kind: stable identifier returned to clients
    - message: human readable explanation
    - status_code: HTTP status the API layer maps it to
    """

    kind = "QuizError"
    status_code = 500

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message or self.kind

    def to_dict(self) -> dict:
        return {"success": False, "error": self.kind, "message": self.message}


class ValidationError(QuizError):
    """Malformed or missing input"""
    kind = "ValidationError"
    status_code = 422


class InvalidInputError(ValidationError):
    """Input that is well formed but cannot be graded (e.g. empty question set)"""
    kind = "InvalidInput"


class NotFoundError(QuizError):
    kind = "NotFound"
    status_code = 404


class UnauthenticatedError(QuizError):
    kind = "Unauthenticated"
    status_code = 401


class ForbiddenError(QuizError):
    kind = "Forbidden"
    status_code = 403


class ConflictError(QuizError):
    kind = "Conflict"
    status_code = 409


class InvalidCredentialsError(QuizError):
    """Same error for unknown email and wrong password"""
    kind = "InvalidCredentials"
    status_code = 400


class StoreError(QuizError):
    """Underlying persistence failure"""
    kind = "StoreError"
    status_code = 500
