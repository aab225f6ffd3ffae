"""Domain-level exceptions.

Services raise these errors to express business rule violations.
The API error boundary maps each class to an HTTP status code.
"""


class DomainError(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainError):
    """Input violates a business validation rule."""


class MissingCredentialsError(ValidationError):
    """Login attempted without an email or a password."""


class DuplicateError(ValidationError):
    """Entity with the same unique key already exists."""


class InvalidOrExpiredTokenError(DomainError):
    """Password reset token is unknown, already redeemed, or expired."""


class AuthenticationError(DomainError):
    """Caller could not be authenticated."""


class NoSuchUserError(AuthenticationError):
    """No account matches the supplied email."""


class WrongPasswordError(AuthenticationError):
    """Supplied password does not match the stored hash."""


class PasswordTooShortError(AuthenticationError):
    """New password does not meet the minimum length."""


class PasswordTooLongError(AuthenticationError):
    """New password is longer than bcrypt can hash."""


class InvalidTokenError(AuthenticationError):
    """Session token signature is invalid or the token has expired."""


class PermissionDeniedError(DomainError):
    """Caller lacks permission for the requested action."""


class NotFoundError(DomainError):
    """Requested entity does not exist."""


class DeliveryFailedError(DomainError):
    """Outbound notification could not be delivered."""


class DatabaseUnavailableError(DomainError):
    """Persistence layer is not reachable."""


class EmailDeliveryError(Exception):
    """Raised by EmailSender adapters when a message cannot be sent."""
