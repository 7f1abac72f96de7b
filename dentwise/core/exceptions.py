"""Custom application exceptions."""


class AppException(Exception):
    """Base application exception."""

    def __init__(self, message: str, status_code: int = 500):
        """Initialize exception with message and status code."""
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class NotAuthenticatedException(AppException):
    """Raised when no caller identity is available."""

    def __init__(self, message: str = "Authentication required"):
        """Initialize with 401 status code."""
        super().__init__(message, status_code=401)


class InvalidInputException(AppException):
    """Raised when required request fields are missing or malformed."""

    def __init__(self, message: str = "Invalid input"):
        """Initialize with 400 status code."""
        super().__init__(message, status_code=400)


class NotFoundException(AppException):
    """Resource not found exception."""

    def __init__(self, message: str = "Resource not found"):
        """Initialize with 404 status code."""
        super().__init__(message, status_code=404)


class SlotTakenException(AppException):
    """Raised when the practitioner already has an active booking for the slot."""

    def __init__(self, message: str = "This time slot is already booked"):
        """Initialize with 409 status code."""
        super().__init__(message, status_code=409)


class InvalidStatusTransitionException(AppException):
    """Raised when an appointment cannot move from its current status."""

    def __init__(self, current: str, requested: str):
        """Initialize with 409 status code."""
        self.current = current
        self.requested = requested
        super().__init__(
            f"Cannot change appointment status from {current} to {requested}",
            status_code=409,
        )


class BookingFailedException(AppException):
    """Booking could not be persisted."""

    def __init__(self, message: str = "Failed to book appointment. Please try again later."):
        """Initialize with 500 status code."""
        super().__init__(message, status_code=500)


class UpdateFailedException(AppException):
    """Appointment update could not be persisted."""

    def __init__(self, message: str = "Failed to update appointment"):
        """Initialize with 500 status code."""
        super().__init__(message, status_code=500)


class QueryFailedException(AppException):
    """Appointment listing could not be read."""

    def __init__(self, message: str = "Failed to fetch appointments"):
        """Initialize with 500 status code."""
        super().__init__(message, status_code=500)


class IdentityProviderException(AppException):
    """The external identity provider could not supply a profile."""

    def __init__(self, message: str = "Identity provider unavailable"):
        """Initialize with 502 status code."""
        super().__init__(message, status_code=502)


class ServiceUnavailableException(AppException):
    """A required integration is not configured."""

    def __init__(self, message: str = "Service unavailable"):
        """Initialize with 503 status code."""
        super().__init__(message, status_code=503)
