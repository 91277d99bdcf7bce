# Custom exceptions
# Every error the API reports is a FinTrackError; the exception handler in main.py
# renders it as {"message": ...} with the status code carried on the instance.

import logging
from contextlib import contextmanager

logger = logging.getLogger(__name__)

NOT_AUTHORIZED = "Not Authorized"


class FinTrackError(Exception):
    """Base class for errors that map onto an HTTP response.

    Attributes:
        message: text returned to the client in the ``message`` field
        status_code: HTTP status of the response
    """
    status_code = 500
    default_message = "Server Error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(FinTrackError):
    status_code = 400
    default_message = "Invalid request"


class MissingFieldsError(ValidationError):
    default_message = "All fields are required."


class ConflictError(FinTrackError):
    status_code = 400
    default_message = "Conflict"


class EmailTakenError(ConflictError):
    default_message = "Email already in use."


class AuthError(FinTrackError):
    status_code = 401
    default_message = NOT_AUTHORIZED


class InvalidCredentialsError(AuthError):
    default_message = "Invalid credentials"


class TokenError(AuthError):
    """Token could not be accepted. Subclasses only differ for logging."""


class InvalidTokenError(TokenError):
    pass


class ExpiredTokenError(TokenError):
    pass


class MalformedTokenError(TokenError):
    pass


class UnknownTokenSubjectError(AuthError):
    """Token verified, but the user it names does not exist any more."""


class NotFoundError(FinTrackError):
    status_code = 404
    default_message = "Not found"


class InternalError(FinTrackError):
    status_code = 500


@contextmanager
def internal_errors(message: str = "Server Error"):
    """Convert anything that is not a FinTrackError into an InternalError.

    Used around service calls in route handlers so that store, hashing and
    token library failures reach the client as a generic 500.
    """
    try:
        yield
    except FinTrackError:
        raise
    except Exception as e:
        logger.exception(f"{message}: {e}")
        raise InternalError(message) from e
