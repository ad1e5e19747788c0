from sqlalchemy import Column, Integer, String, DateTime
from datetime import datetime
from wallet_api.database import Base


class PasswordResetToken(Base):
    """
    Password reset token model.

    Only the SHA256 hash of the token is stored; the plain token travels in
    the reset link. A token can be used once and only before `expires_at`.
    """
    __tablename__ = "password_reset_tokens"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), nullable=False, index=True)
    token_hash = Column(String(64), unique=True, nullable=False, index=True)
    expires_at = Column(DateTime, nullable=False)
    used_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f"<PasswordResetToken {self.email}>"

    def is_expired(self) -> bool:
        return datetime.utcnow() > self.expires_at

    def is_used(self) -> bool:
        return self.used_at is not None
