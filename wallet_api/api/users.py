from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.orm import Session
from wallet_api.database import get_db
from wallet_api.middleware.auth import get_current_user
from wallet_api.models.user import User
from wallet_api.services.auth_service import AuthService
from wallet_api.services.user_service import UserService
from wallet_api.schemas.pagination import MessageResponse
from wallet_api.schemas.user import (
    ChangePasswordRequest,
    LoginRequest,
    LoginResponse,
    UserEnvelope,
    UserPage,
    UserRegisterRequest,
    UserResponse,
    UserUpdateRequest,
)
from typing import Optional

# Create router
router = APIRouter(prefix="/users", tags=["Users"])


@router.post("/register", response_model=UserEnvelope, status_code=status.HTTP_201_CREATED)
async def register(
        request: UserRegisterRequest,
        db: Session = Depends(get_db),
):
    """
    Register a new user account.

    Rules:
    - Email must be unique.
    - Password must be at least 8 characters (stored hashed).

    :param request:
    :param db:
    :return: The created user
    """
    user = UserService.create_user(db, request)
    return UserEnvelope(user=UserResponse.model_validate(user))


@router.post("/login", response_model=LoginResponse)
async def login(
        request: LoginRequest,
        db: Session = Depends(get_db),
):
    """
    Authenticate with email and password and receive a bearer token.

    :param request:
    :param db:
    :return: Bearer token and the user
    """
    user, token = AuthService.login(db, request.email, request.password)

    return LoginResponse(
        token=token,
        user=UserResponse.model_validate(user),
        token_type="Bearer"
    )


@router.api_route("/logout", methods=["GET", "POST", "PUT", "PATCH", "DELETE"], response_model=MessageResponse)
async def logout(
        request: Request,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db),
):
    """
    Revoke the bearer token used for this request.
    """
    AuthService.revoke_token(db, request.state.access_token)
    return MessageResponse(message="Logged out successfully")


@router.get("", response_model=UserPage)
async def list_users(
        page: int = Query(1, ge=1),
        per_page: int = Query(15, ge=1, le=100),
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db),
):
    """
    List all users, paginated.
    """
    return UserService.list_users(db, page=page, per_page=per_page)


@router.get("/search", response_model=UserPage)
async def search_users(
        query: Optional[str] = Query(None, description="Matched against name or email"),
        role: Optional[str] = Query(None, description="Exact role, e.g. admin or user"),
        page: int = Query(1, ge=1),
        per_page: int = Query(10, ge=1, le=100),
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db),
):
    """
    Search users by name or email, optionally filtered by role.
    """
    return UserService.search_users(db, search=query, role=role, page=page, per_page=per_page)


@router.put("/change-password", response_model=MessageResponse)
async def change_password(
        request: ChangePasswordRequest,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db),
):
    """
    Change the authenticated user's password.

    Returns 400 if the current password is wrong; the stored password is left untouched.
    """
    AuthService.change_password(db, current_user, request.current_password, request.new_password)
    return MessageResponse(message="Password changed successfully")


@router.get("/{user_id}", response_model=UserEnvelope)
async def get_user(
        user_id: int,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db),
):
    user = UserService.get_user_or_404(db, user_id)
    return UserEnvelope(user=UserResponse.model_validate(user))


@router.put("/{user_id}", response_model=UserEnvelope)
async def update_user(
        user_id: int,
        request: UserUpdateRequest,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db),
):
    """
    Partially update a user. The email must stay unique across other users.
    """
    user = UserService.get_user_or_404(db, user_id)
    user = UserService.update_user(db, user, request)
    return UserEnvelope(user=UserResponse.model_validate(user))


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
        user_id: int,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db),
):
    user = UserService.get_user_or_404(db, user_id)
    UserService.delete_user(db, user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
