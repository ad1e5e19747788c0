import logging
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from fastapi import HTTPException, status
from wallet_api.core.errors import FieldValidationError
from wallet_api.core.security import hash_password
from wallet_api.models.user import User
from wallet_api.schemas.user import UserRegisterRequest, UserUpdateRequest
from wallet_api.services.pagination import paginate
from typing import Optional

logger = logging.getLogger(__name__)

EMAIL_TAKEN = "The email has already been taken."


class UserService:
    """
    Service layer for user-related operations.
    Separates business logic from route handlers.
    """

    @staticmethod
    def get_user_by_email(db: Session, email: str) -> Optional[User]:
        """
        Find a user by email.
        :param db: Database session
        :param email: User's email address
        :return: User object if found, None otherwise
        """
        return db.query(User).filter(User.email == email).first()

    @staticmethod
    def get_user_by_id(db: Session, user_id: int) -> Optional[User]:
        """
        Find a user by their ID.
        :param db: Database session
        :param user_id: User's ID
        :return: User object if found, None otherwise
        """
        return db.query(User).filter(User.id == user_id).first()

    @staticmethod
    def get_user_or_404(db: Session, user_id: int) -> User:
        user = UserService.get_user_by_id(db, user_id)
        if not user:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User not found."
            )
        return user

    @staticmethod
    def list_users(db: Session, page: int = 1, per_page: int = 15) -> dict:
        query = db.query(User).order_by(User.id.asc())
        return paginate(query, page, per_page)

    @staticmethod
    def search_users(
            db: Session,
            search: Optional[str] = None,
            role: Optional[str] = None,
            page: int = 1,
            per_page: int = 10
    ) -> dict:
        """
        Search users by name or email with an optional role filter.

        :param db: Database session
        :param search: Substring matched against name OR email
        :param role: Exact role to filter on
        :param page: Page number
        :param per_page: Users per page
        :return: Paginated result dict
        """
        query = db.query(User)

        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(User.name.ilike(pattern), User.email.ilike(pattern)))

        if role:
            query = query.filter(User.role == role)

        return paginate(query.order_by(User.id.asc()), page, per_page)

    @staticmethod
    def create_user(db: Session, user_data: UserRegisterRequest) -> User:
        """
        Create a new user in the database with a hashed password.
        :param db: Database session
        :param user_data: Registration data
        :return: Newly created user object
        :raises: FieldValidationError if the email is already registered
        """
        if UserService.get_user_by_email(db, user_data.email):
            raise FieldValidationError("email", EMAIL_TAKEN)

        db_user = User(
            name=user_data.name,
            email=user_data.email,
            password=hash_password(user_data.password),
        )

        db.add(db_user)
        try:
            db.commit()
        except IntegrityError:
            # Another request registered the same email in between
            db.rollback()
            raise FieldValidationError("email", EMAIL_TAKEN)

        db.refresh(db_user) # Refresh to get the ID and timestamps
        logger.info("Registered user %s", db_user.id)

        return db_user

    @staticmethod
    def update_user(db: Session, user: User, user_data: UserUpdateRequest) -> User:
        """
        Apply a partial update to a user.
        :param db: Database session
        :param user: User to update
        :param user_data: Fields to change (unset fields are left alone)
        :return: Updated user object
        :raises: FieldValidationError if the new email belongs to another user
        """
        changes = user_data.model_dump(exclude_unset=True, exclude_none=True)

        if "email" in changes:
            owner = UserService.get_user_by_email(db, changes["email"])
            if owner and owner.id != user.id:
                raise FieldValidationError("email", EMAIL_TAKEN)

        if "password" in changes:
            changes["password"] = hash_password(changes["password"])

        for field, value in changes.items():
            setattr(user, field, value)

        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise FieldValidationError("email", EMAIL_TAKEN)

        db.refresh(user)
        return user

    @staticmethod
    def delete_user(db: Session, user: User) -> None:
        """
        Delete a user. Their wallets and transactions stay, with user_id set to NULL.
        """
        user_id = user.id
        db.delete(user)
        db.commit()
        logger.info("Deleted user %s", user_id)

    @staticmethod
    def set_password(db: Session, user: User, new_password: str) -> User:
        user.password = hash_password(new_password)
        db.commit()
        db.refresh(user)
        return user
