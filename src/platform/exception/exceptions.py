class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    def __init__(self, message: str, status_code: int) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class DomainError(CustomBaseError):
    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class ValidationError(DomainError):
    """Malformed input, fixable by the client."""

    def __init__(self, message: str) -> None:
        super().__init__(message, 400)


class InsufficientInventoryError(DomainError):
    """Not enough stock left; transient, retry after refreshing availability."""

    def __init__(self, message: str) -> None:
        super().__init__(message, 409)


class NotEligibleError(DomainError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 422)


class RefundWindowClosedError(DomainError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 422)


class InvalidStateTransitionError(DomainError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 409)


class AlreadyUsedError(InvalidStateTransitionError):
    pass


class NotYetValidError(DomainError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 422)


class BusyError(CustomBaseError):
    """Lock could not be taken in time; safe to retry with backoff."""

    def __init__(self, message: str) -> None:
        super().__init__(message, 503)


class ForbiddenError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 403)


class NotFoundError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class ConflictError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 409)
