"""
Domain error taxonomy.

Every error is recoverable at the request boundary: the API layer maps
``status_code`` onto the HTTP response and the unit of work rolls back.
"""


class RentalError(Exception):
    """Base class for all business-rule failures."""

    status_code = 500

    def __init__(self, message: str = ""):
        super().__init__(message or self.__class__.__name__)
        self.message = message or self.__class__.__name__


class NotFound(RentalError):
    """A referenced entity does not exist."""

    status_code = 404


class Unauthorized(RentalError):
    """The caller lacks the required role or ownership."""

    status_code = 403


class InvalidAmount(RentalError):
    status_code = 400


class InvalidRange(RentalError):
    status_code = 400


class Unavailable(RentalError):
    """The vehicle is not bookable."""

    status_code = 400


class InvalidTransition(RentalError):
    """A booking status change violates the state machine."""

    status_code = 409


class DuplicateUsername(RentalError):
    status_code = 400


class InvalidCredentials(RentalError):
    status_code = 400


class PaymentFailed(RentalError):
    """The payment provider rejected or could not process the request."""

    status_code = 502


class NotReviewable(RentalError):
    """The booking is not completed or already carries a review."""

    status_code = 409
