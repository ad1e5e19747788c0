from pydantic import BaseModel, EmailStr, Field, validator


class ForgotPasswordRequest(BaseModel):
    """
    Schema for requesting a password reset link.
    """
    email: EmailStr


class ResetPasswordRequest(BaseModel):
    """
    Schema for consuming a password reset token.
    """
    token: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=8)
    password_confirmation: str

    @validator('password_confirmation')
    def passwords_match(cls, v, values):
        """Confirmation must repeat the password"""
        if 'password' in values and v != values['password']:
            raise ValueError("The password confirmation does not match.")
        return v
