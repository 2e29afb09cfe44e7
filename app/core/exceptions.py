"""
Domain errors surfaced to API callers.

Every error carries a ``kind`` (rendered verbatim to the client) and an HTTP status.
The handlers in ``app.main`` turn them into ``{"error": {"kind", "message"}}``.
"""


class SwarshError(Exception):
    kind = "Error"
    status_code = 500

    def __init__(self, message: str = None):
        self.message = message or self.default_message()
        super().__init__(self.message)

    def default_message(self) -> str:
        return "Unexpected error"

    def to_dict(self) -> dict:
        return {"error": {"kind": self.kind, "message": self.message}}


class ValidationError(SwarshError):
    """Malformed or missing input."""
    kind = "ValidationError"
    status_code = 400

    def default_message(self) -> str:
        return "Invalid input"


class UnauthorizedError(SwarshError):
    """No active session, or bad credentials."""
    kind = "UnauthorizedError"
    status_code = 401

    def default_message(self) -> str:
        return "Not logged in"


class NotFoundError(SwarshError):
    kind = "NotFoundError"
    status_code = 404

    def default_message(self) -> str:
        return "Not found"


class InvalidTokenError(SwarshError):
    """Invite token unknown or already consumed."""
    kind = "InvalidTokenError"
    status_code = 400

    def default_message(self) -> str:
        return "Invalid or used invite token"


class ConflictError(SwarshError):
    kind = "ConflictError"
    status_code = 409

    def default_message(self) -> str:
        return "User already exists"


class StorageError(SwarshError):
    kind = "StorageError"
    status_code = 500

    def default_message(self) -> str:
        return "Storage failure"
