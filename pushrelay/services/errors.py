"""Service-level errors; each carries the HTTP status the API maps it to."""


class RelayError(Exception):
    """Base class for errors raised by account, subscription and push services."""

    status_code = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidInputError(RelayError):
    """Malformed or missing fields."""

    status_code = 400


class UnauthorizedError(RelayError):
    """Bad, missing or expired credentials."""

    status_code = 401


class ForbiddenError(RelayError):
    """Valid credentials, insufficient role."""

    status_code = 403


class NotFoundError(RelayError):
    """Target user or subscription absent."""

    status_code = 404


class ConflictError(RelayError):
    """Username or email already taken."""

    status_code = 409


class GoneError(RelayError):
    """Push service reported the subscription expired; it has been cleared."""

    status_code = 410


class DeliveryError(RelayError):
    """Push delivery failed for a reason other than an expired subscription."""

    status_code = 500
