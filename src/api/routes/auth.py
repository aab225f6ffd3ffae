"""Authentication routes (register, login, password lifecycle, logout)."""

import logging

from fastapi import APIRouter, Depends, Request, Response

from api.dependencies import (
    get_email_sender,
    get_reset_tokens,
    get_settings,
    get_token_issuer,
    get_user_repo,
)
from api.models import (
    DataMessageResponse,
    ForgotPasswordRequest,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    ResetPasswordRequest,
    TokenResponse,
    UpdateDetailsRequest,
    UpdatePasswordRequest,
    UserEnvelope,
    UserResponse,
)
from api.security import clear_token_cookie, protect, set_token_cookie
from domain.model.user import User
from port.email_sender import EmailSender
from port.user_repository import UserRepository
from services import auth_service
from services.reset_tokens import ResetTokenManager
from services.session_tokens import SessionTokenIssuer
from utils.config import AuthSettings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


def _send_token_response(
    user: User,
    response: Response,
    issuer: SessionTokenIssuer,
    settings: AuthSettings,
) -> TokenResponse:
    """Issue a session token, set it as a cookie and return it in the body."""
    token = issuer.issue(user.id)
    set_token_cookie(response, token, settings)
    return TokenResponse(token=token)


@router.post("/register", response_model=TokenResponse)
def register(
    body: RegisterRequest,
    response: Response,
    repo: UserRepository = Depends(get_user_repo),
    issuer: SessionTokenIssuer = Depends(get_token_issuer),
    settings: AuthSettings = Depends(get_settings),
):
    """Register a user and start a session."""
    user = auth_service.register(repo, name=body.name, email=body.email, password=body.password, role=body.role)
    return _send_token_response(user, response, issuer, settings)


@router.post("/login", response_model=TokenResponse)
def login(
    body: LoginRequest,
    response: Response,
    repo: UserRepository = Depends(get_user_repo),
    issuer: SessionTokenIssuer = Depends(get_token_issuer),
    settings: AuthSettings = Depends(get_settings),
):
    user = auth_service.authenticate(repo, body.email, body.password)
    return _send_token_response(user, response, issuer, settings)


@router.get("/me", response_model=UserEnvelope)
def get_me(current_user: User = Depends(protect)):
    """Return the logged-in user."""
    return UserEnvelope(data=UserResponse.from_domain(current_user))


@router.post("/forgotpassword", response_model=DataMessageResponse)
def forgot_password(
    body: ForgotPasswordRequest,
    request: Request,
    repo: UserRepository = Depends(get_user_repo),
    reset_tokens: ResetTokenManager = Depends(get_reset_tokens),
    sender: EmailSender = Depends(get_email_sender),
):
    """Email a one-time password reset link."""
    def build_reset_url(token: str) -> str:
        return str(request.url_for("reset_password", resettoken=token))

    auth_service.forgot_password(repo, reset_tokens, sender, body.email, build_reset_url)
    return DataMessageResponse(data="Email sent")


@router.put("/resetpassword/{resettoken}", response_model=TokenResponse)
def reset_password(
    resettoken: str,
    body: ResetPasswordRequest,
    response: Response,
    reset_tokens: ResetTokenManager = Depends(get_reset_tokens),
    issuer: SessionTokenIssuer = Depends(get_token_issuer),
    settings: AuthSettings = Depends(get_settings),
):
    """Redeem a reset token and start a fresh session."""
    user = auth_service.reset_password(reset_tokens, resettoken, body.password)
    return _send_token_response(user, response, issuer, settings)


@router.put("/updatedetails", response_model=UserEnvelope)
def update_details(
    body: UpdateDetailsRequest,
    current_user: User = Depends(protect),
    repo: UserRepository = Depends(get_user_repo),
):
    user = auth_service.update_details(repo, current_user.id, name=body.name, email=body.email)
    return UserEnvelope(data=UserResponse.from_domain(user))


@router.put("/updatepassword", response_model=TokenResponse)
def update_password(
    body: UpdatePasswordRequest,
    response: Response,
    current_user: User = Depends(protect),
    repo: UserRepository = Depends(get_user_repo),
    issuer: SessionTokenIssuer = Depends(get_token_issuer),
    settings: AuthSettings = Depends(get_settings),
):
    user = auth_service.update_password(repo, current_user.id, body.currentPassword, body.newPassword)
    return _send_token_response(user, response, issuer, settings)


@router.get("/logout", response_model=MessageResponse)
def logout(
    response: Response,
    current_user: User = Depends(protect),
    settings: AuthSettings = Depends(get_settings),
):
    """Clear the session cookie. The token itself stays valid until it expires."""
    clear_token_cookie(response, settings)
    logger.info("User logged out", extra={"userId": current_user.id})
    return MessageResponse(message="You successfully logged out")
