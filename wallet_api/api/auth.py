from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from wallet_api.database import get_db
from wallet_api.services.password_reset_service import PasswordResetService
from wallet_api.schemas.pagination import MessageResponse
from wallet_api.schemas.password import ForgotPasswordRequest, ResetPasswordRequest

# Create router
router = APIRouter(tags=["Password Reset"])


@router.post("/forgot-password", response_model=MessageResponse)
async def forgot_password(
        request: ForgotPasswordRequest,
        db: Session = Depends(get_db),
):
    """
    Send a password reset link to the user's email.

    Flow:
    1. User submits their email.
    2. Server stores a single-use reset token with an expiry.
    3. Server mails a link carrying the token.
    4. User follows the link and posts to /reset-password.

    :param request:
    :param db:
    :return: Confirmation message
    """
    PasswordResetService.send_reset_link(db, request.email)
    return MessageResponse(message="Password reset link sent to your email")


@router.post("/reset-password", response_model=MessageResponse)
async def reset_password(
        request: ResetPasswordRequest,
        db: Session = Depends(get_db),
):
    """
    Reset the user's password using the token from the reset link.

    Returns 400 "Invalid token" if the token is unknown, expired or already used.
    """
    PasswordResetService.reset_password(db, request.token, request.email, request.password)
    return MessageResponse(message="Password reset successfully")
