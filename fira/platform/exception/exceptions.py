class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    def __init__(self, message: str, status_code: int) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class DomainError(CustomBaseError):
    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class UnauthenticatedError(CustomBaseError):
    def __init__(self, message: str = 'Authentication required') -> None:
        super().__init__(message, 401)


class ForbiddenError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 403)


class NotFoundError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class ConflictError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 409)


class InvalidStateError(ConflictError):
    """Operation not allowed from the entity's current status."""


class AlreadyUsedError(InvalidStateError):
    pass


class AlreadyCancelledError(InvalidStateError):
    pass


class CapacityExceededError(ConflictError):
    pass


class SignatureMismatchError(CustomBaseError):
    """Gateway callback signature did not match the configured secret."""

    def __init__(self, message: str = 'Invalid payment signature') -> None:
        super().__init__(message, 400)


class ConfigurationMissingError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 503)


class PaymentGatewayError(CustomBaseError):
    """Payment gateway rejected the call or could not be reached."""

    def __init__(self, message: str) -> None:
        super().__init__(message, 502)
