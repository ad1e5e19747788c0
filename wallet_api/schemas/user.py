from pydantic import BaseModel, EmailStr, Field, validator
from datetime import datetime
from typing import List, Optional
from wallet_api.schemas.pagination import PaginatedResponse


class UserBase(BaseModel):
    """
    Base user schema with common fields.
    """
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr

    @validator('name', pre=True)
    def strip_name(cls, v):
        """Surrounding whitespace is not part of the name"""
        return v.strip() if isinstance(v, str) else v


class UserRegisterRequest(UserBase):
    """
    Schema for registering a new user.
    """
    password: str = Field(..., min_length=8)


class UserUpdateRequest(BaseModel):
    """
    Schema for a partial user update. Only the fields sent are changed.
    """
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=8)

    @validator('name', pre=True)
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class ChangePasswordRequest(BaseModel):
    """
    Schema for changing the authenticated user's password.
    """
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=8)
    new_password_confirmation: str

    @validator('new_password_confirmation')
    def passwords_match(cls, v, values):
        """Confirmation must repeat the new password"""
        if 'new_password' in values and v != values['new_password']:
            raise ValueError("The new password confirmation does not match.")
        return v


class UserResponse(BaseModel):
    """
    Schema for user responses (what we send to the client).
    The password hash is never part of it.
    """
    id: int
    name: str
    email: str
    role: str
    email_verified_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        """
        Pydantic config to work with SQLAlchemy models.
        This allows us to return ORM objects directly.
        """
        from_attributes = True


class UserEnvelope(BaseModel):
    user: UserResponse


class LoginResponse(BaseModel):
    """
    Schema for a successful login.
    """
    token: str
    user: UserResponse
    token_type: str = "Bearer"


class UserPage(PaginatedResponse):
    data: List[UserResponse]
