"""Auth service — registration, login and password lifecycle business logic.

Pure business logic with no HTTP dependencies.
Raises domain errors that the API error boundary maps to HTTP status codes.
Session tokens are issued by the route layer once a call here succeeds.
"""

import logging
from collections.abc import Callable

from pydantic import EmailStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from domain.model.errors import (
    DeliveryFailedError,
    EmailDeliveryError,
    MissingCredentialsError,
    NoSuchUserError,
    NotFoundError,
    PasswordTooLongError,
    PasswordTooShortError,
    ValidationError,
    WrongPasswordError,
)
from domain.model.user import ROLE_USER, SELF_ASSIGNABLE_ROLES, User
from port.email_sender import EmailSender
from port.user_repository import UserRepository
from services.password_hasher import MAX_PASSWORD_BYTES, exceeds_bcrypt_limit, hash_password, verify_password
from services.reset_tokens import ResetTokenManager

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
MAX_NAME_LENGTH = 50

_email_adapter = TypeAdapter(EmailStr)

RESET_EMAIL_SUBJECT = 'Password reset token'


def normalize_email(email: str | None) -> str:
    return (email or '').strip().lower()


def _validate_name(name: str | None) -> str:
    name = (name or '').strip()
    if not name:
        raise ValidationError("Please add a name")
    if len(name) > MAX_NAME_LENGTH:
        raise ValidationError(f"Name can not be more than {MAX_NAME_LENGTH} characters")
    return name


def _validate_email(email: str | None) -> str:
    email = normalize_email(email)
    if not email:
        raise ValidationError("Please add an email")
    try:
        _email_adapter.validate_python(email)
    except PydanticValidationError:
        raise ValidationError("Please add a valid email") from None
    return email


def _validate_new_password(password: str | None) -> str:
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password should not be less than {MIN_PASSWORD_LENGTH} characters")
    if exceeds_bcrypt_limit(password):
        raise ValidationError(f"Password can not be more than {MAX_PASSWORD_BYTES} bytes")
    return password


def register(repo: UserRepository, name: str, email: str, password: str, role: str | None = None) -> User:
    """Register a new user.

    Raises:
        ValidationError: a required field is missing or malformed, or the role is not self-assignable
        DuplicateError: email already registered
    """
    name = _validate_name(name)
    email = _validate_email(email)
    password = _validate_new_password(password)
    role = role or ROLE_USER
    if role not in SELF_ASSIGNABLE_ROLES:
        raise ValidationError(f"Role must be one of: {', '.join(SELF_ASSIGNABLE_ROLES)}")

    user = repo.create(name=name, email=email, password_hash=hash_password(password), role=role)
    logger.info("User registered", extra={"userId": user.id, "role": role})
    return user


def authenticate(repo: UserRepository, email: str | None, password: str | None) -> User:
    """Check login credentials and return the matching user.

    Raises:
        MissingCredentialsError: email or password not supplied
        NoSuchUserError: no account for email
        WrongPasswordError: password does not match
    """
    if not email or not password:
        raise MissingCredentialsError("Please provide an email and password")

    user = repo.get_by_email(normalize_email(email))
    if not user:
        logger.warning("Login failed: unknown email")
        raise NoSuchUserError("Such user does not exist")

    if not verify_password(password, user.password_hash):
        logger.warning("Login failed: wrong password", extra={"userId": user.id})
        raise WrongPasswordError("Password is wrong")

    logger.info("User logged in", extra={"userId": user.id})
    return user


def get_current_user(repo: UserRepository, user_id: str) -> User:
    user = repo.get_by_id(user_id)
    if not user:
        raise NotFoundError("User not found")
    return user


def forgot_password(
    repo: UserRepository,
    reset_tokens: ResetTokenManager,
    sender: EmailSender,
    email: str | None,
    build_reset_url: Callable[[str], str],
) -> User:
    """Issue a reset token for email and deliver its URL.

    If delivery fails the pending reset is cleared again before the error
    is raised, so an undeliverable token never stays redeemable.

    Raises:
        NotFoundError: no account for email
        DeliveryFailedError: the email could not be sent
    """
    user = repo.get_by_email(normalize_email(email))
    if not user:
        raise NotFoundError("There is no such user")

    token = reset_tokens.request_reset(user)
    message = (
        "You are receiving this email because you (or someone else) has requested "
        f"the reset of a password. Please make a PUT request to:\n\n{build_reset_url(token)}"
    )
    try:
        sender.send(to=user.email, subject=RESET_EMAIL_SUBJECT, message=message)
    except EmailDeliveryError as e:
        logger.error("Reset email could not be sent", extra={"userId": user.id, "error": str(e)[:200]})
        reset_tokens.cancel(user)
        raise DeliveryFailedError("Email could not be sent") from e

    return user


def reset_password(reset_tokens: ResetTokenManager, token: str, password: str | None) -> User:
    """Redeem a reset token with a new password.

    Raises:
        ValidationError: new password too short or too long
        InvalidOrExpiredTokenError: token unknown, redeemed, or expired
    """
    password = _validate_new_password(password)
    return reset_tokens.redeem(token, password)


def update_details(repo: UserRepository, user_id: str, name: str | None = None, email: str | None = None) -> User:
    """Update non-sensitive profile fields; fields left as None are unchanged.

    Raises:
        ValidationError: a supplied field is malformed
        DuplicateError: the new email belongs to another account
        NotFoundError: user no longer exists
    """
    name = _validate_name(name) if name is not None else None
    email = _validate_email(email) if email is not None else None

    user = repo.update_details(user_id, name=name, email=email)
    if not user:
        raise NotFoundError("User not found")
    return user


def update_password(repo: UserRepository, user_id: str, current_password: str | None, new_password: str | None) -> User:
    """Change a password after checking the current one.

    Raises:
        NotFoundError: user no longer exists
        WrongPasswordError: current_password does not verify
        PasswordTooShortError: new_password shorter than MIN_PASSWORD_LENGTH
        PasswordTooLongError: new_password longer than MAX_PASSWORD_BYTES in UTF-8
    """
    user = get_current_user(repo, user_id)

    if not verify_password(current_password, user.password_hash):
        raise WrongPasswordError("Current password is wrong")
    if not new_password or len(new_password) < MIN_PASSWORD_LENGTH:
        raise PasswordTooShortError(f"Password should not be less than {MIN_PASSWORD_LENGTH} characters")
    if exceeds_bcrypt_limit(new_password):
        raise PasswordTooLongError(f"Password can not be more than {MAX_PASSWORD_BYTES} bytes")

    user.password_hash = hash_password(new_password)
    repo.update_password(user.id, user.password_hash)
    logger.info("Password updated", extra={"userId": user.id})
    return user
