import logging
from datetime import datetime, timedelta
from sqlalchemy.orm import Session
from fastapi import HTTPException, status
from wallet_api.core.config import get_settings
from wallet_api.core.security import (
    create_access_token,
    decode_access_token,
    generate_token_id,
    verify_password,
)
from wallet_api.models.access_token import AccessToken
from wallet_api.models.user import User
from wallet_api.services.user_service import UserService
from typing import Optional, Tuple

settings = get_settings()
logger = logging.getLogger(__name__)


class AuthService:
    """
    Service layer for bearer token issuance and credential checks.
    """

    @staticmethod
    def issue_token(db: Session, user: User, name: str = "auth_token") -> Tuple[AccessToken, str]:
        """
        Issue a new bearer token for a user.

        :param db: Database session
        :param user: User the token is issued to
        :param name: Friendly name for the token
        :return: Tuple of (AccessToken row, encoded JWT)
        """
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
        jti = generate_token_id()

        access_token = AccessToken(
            user_id=user.id,
            name=name,
            jti=jti,
            expires_at=datetime.utcnow() + expires_delta,
        )

        db.add(access_token)
        db.commit()
        db.refresh(access_token)

        encoded = create_access_token(
            data={"sub": str(user.id), "jti": jti},
            expires_delta=expires_delta,
        )

        return access_token, encoded

    @staticmethod
    def authenticate(db: Session, email: str, password: str) -> Optional[User]:
        """
        Check an email/password pair.

        :return: User if the credentials match, None otherwise
        """
        user = UserService.get_user_by_email(db, email)
        if not user or not verify_password(password, user.password):
            return None
        return user

    @staticmethod
    def login(db: Session, email: str, password: str) -> Tuple[User, str]:
        """
        Authenticate a user and issue a bearer token.

        :param db: Database session
        :param email: Email address
        :param password: Plain password
        :return: Tuple of (User, encoded token)
        :raises: HTTPException 401 if the credentials are wrong (no token is issued)
        """
        user = AuthService.authenticate(db, email, password)
        if not user:
            logger.info("Failed login attempt")
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid credentials"
            )

        _, token = AuthService.issue_token(db, user)
        logger.info("User %s logged in", user.id)

        return user, token

    @staticmethod
    def resolve_token(db: Session, token: str) -> Optional[Tuple[User, AccessToken]]:
        """
        Resolve a bearer token to its user.

        :param db: Database session
        :param token: Encoded JWT from the Authorization header
        :return: Tuple of (User, AccessToken) if the token is valid, None otherwise
        """
        payload = decode_access_token(token)
        if payload is None:
            return None

        jti = payload.get("jti")
        user_id = payload.get("sub")
        if not jti or not user_id:
            return None

        access_token = db.query(AccessToken).filter(AccessToken.jti == jti).first()
        if not access_token or not access_token.is_usable():
            return None

        if str(access_token.user_id) != str(user_id):
            return None

        user = UserService.get_user_by_id(db, access_token.user_id)
        if user is None:
            return None

        # Update last used timestamp
        access_token.last_used_at = datetime.utcnow()
        db.commit()

        return user, access_token

    @staticmethod
    def revoke_token(db: Session, access_token: AccessToken) -> None:
        access_token.is_revoked = True
        db.commit()
        logger.info("Revoked token %s of user %s", access_token.id, access_token.user_id)

    @staticmethod
    def revoke_all_tokens(db: Session, user: User) -> int:
        """
        Revoke every active token of a user.

        :return: Number of tokens revoked
        """
        count = db.query(AccessToken).filter(
            AccessToken.user_id == user.id,
            AccessToken.is_revoked == False
        ).update({AccessToken.is_revoked: True}, synchronize_session=False)
        db.commit()

        return count

    @staticmethod
    def change_password(db: Session, user: User, current_password: str, new_password: str) -> User:
        """
        Change a user's password after checking the current one.

        :raises: HTTPException 400 if the current password is wrong
        """
        if not verify_password(current_password, user.password):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Current password is incorrect"
            )

        user = UserService.set_password(db, user, new_password)
        logger.info("User %s changed their password", user.id)

        return user
