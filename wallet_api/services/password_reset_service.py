import logging
from datetime import datetime, timedelta
from urllib.parse import urlencode
from sqlalchemy.orm import Session
from fastapi import HTTPException, status
from wallet_api.core.config import get_settings
from wallet_api.core.errors import FieldValidationError
from wallet_api.core.security import generate_reset_token, hash_token
from wallet_api.models.password_reset import PasswordResetToken
from wallet_api.services.auth_service import AuthService
from wallet_api.services.mail_service import MailService
from wallet_api.services.user_service import UserService

settings = get_settings()
logger = logging.getLogger(__name__)


class PasswordResetService:
    """
    Service layer for the forgot-password / reset-password flow.

    Flow:
    1. User asks for a reset link with their email.
    2. Server stores the hash of a random token (with an expiry) and mails the plain token.
    3. User posts the token back with a new password.
    4. Server checks the token (exists, matches email, not expired, not used),
       sets the password and marks the token used.
    """

    @staticmethod
    def build_reset_link(token: str, email: str) -> str:
        query = urlencode({"token": token, "email": email})
        return f"{settings.PASSWORD_RESET_URL}?{query}"

    @staticmethod
    def create_reset_token(db: Session, email: str) -> str:
        """
        Store a new reset token for an email, replacing any earlier ones.

        :param db: Database session
        :param email: Email the token is issued for
        :return: Plain token (only ever sent by mail)
        """
        db.query(PasswordResetToken).filter(
            PasswordResetToken.email == email
        ).delete(synchronize_session=False)

        plain_token = generate_reset_token()
        reset_token = PasswordResetToken(
            email=email,
            token_hash=hash_token(plain_token),
            expires_at=datetime.utcnow() + timedelta(minutes=settings.PASSWORD_RESET_EXPIRE_MINUTES),
        )

        db.add(reset_token)
        db.commit()

        return plain_token

    @staticmethod
    def send_reset_link(db: Session, email: str) -> None:
        """
        Issue a reset token and mail the reset link.

        :raises: FieldValidationError if no user has this email
        :raises: HTTPException 400 if the link could not be delivered
        """
        user = UserService.get_user_by_email(db, email)
        if not user:
            raise FieldValidationError("email", "The selected email is invalid.")

        plain_token = PasswordResetService.create_reset_token(db, user.email)
        link = PasswordResetService.build_reset_link(plain_token, user.email)

        if not MailService.send_password_reset_link(user.email, link):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Unable to send reset link"
            )

        logger.info("Password reset link sent to user %s", user.id)

    @staticmethod
    def reset_password(db: Session, token: str, email: str, new_password: str) -> None:
        """
        Consume a reset token and set the new password.

        The token is single-use: it is marked used before the password is
        saved, and all of the user's bearer tokens are revoked.

        :raises: HTTPException 400 if the token is unknown, expired, used or for another email
        """
        invalid_token = HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid token"
        )

        reset_token = db.query(PasswordResetToken).filter(
            PasswordResetToken.token_hash == hash_token(token)
        ).first()

        if not reset_token or reset_token.email != email:
            raise invalid_token

        if reset_token.is_used() or reset_token.is_expired():
            raise invalid_token

        user = UserService.get_user_by_email(db, email)
        if not user:
            raise invalid_token

        reset_token.used_at = datetime.utcnow()
        UserService.set_password(db, user, new_password)
        AuthService.revoke_all_tokens(db, user)

        logger.info("User %s reset their password", user.id)
