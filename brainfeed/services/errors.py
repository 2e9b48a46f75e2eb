"""Service-layer errors; translated to HTTP responses by the registered exception handlers."""


class ServiceError(Exception):
    """Base for expected failures of a content operation."""

    status_code = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NotFoundError(ServiceError):
    """Entity is absent, or hidden from the caller by the visibility rule."""

    status_code = 404


class ConflictError(ServiceError):
    """Write collides with existing state (duplicate slug, article already decided)."""

    status_code = 409


class SlugTakenError(ConflictError):
    """Submitted slug is already used by another article; reported as invalid input."""

    status_code = 400


class InvalidInputError(ServiceError):
    """Input is malformed or references unknown entities."""

    status_code = 400


class AuthorizationError(ServiceError):
    """Caller lacks the capability; reason is 'unauthorized' (no session) or 'forbidden'."""

    def __init__(self, message: str, reason: str) -> None:
        self.reason = reason
        super().__init__(message)

    @property
    def status_code(self) -> int:  # type: ignore[override]
        return 401 if self.reason == "unauthorized" else 403
