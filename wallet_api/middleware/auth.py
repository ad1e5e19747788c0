from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from typing import Optional
from wallet_api.database import get_db
from wallet_api.services.auth_service import AuthService
from wallet_api.models.user import User

# HTTP Bearer authentication scheme for Swagger UI.
# auto_error is off so a missing header gives the same 401 as a bad token.
security = HTTPBearer(auto_error=False)


async def get_current_user(
        request: Request,
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
        db: Session = Depends(get_db)
) -> User:
    """
    Dependency to get the current authenticated user from the bearer token.

    The access token row is stored on `request.state.access_token` so
    logout can revoke exactly the token that was used.

    :param request: Incoming request
    :param credentials: HTTP Bearer token from Authorization header
    :param db: Database session
    :return: User object if token is valid
    :raises: HTTPException if token is missing, invalid, revoked or expired
    """
    # Create credentials exception
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthenticated.",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if credentials is None:
        raise credentials_exception

    resolved = AuthService.resolve_token(db, credentials.credentials)
    if resolved is None:
        raise credentials_exception

    user, access_token = resolved
    request.state.access_token = access_token

    return user
