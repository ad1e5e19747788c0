from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Boolean
from sqlalchemy.orm import relationship
from datetime import datetime
from wallet_api.database import Base


class AccessToken(Base):
    """
    Access token model - one row per issued bearer token.

    The bearer JWT carries the row's `jti`; a token only authenticates
    while its row exists, is not revoked and has not expired. Logging out
    revokes the row, so the JWT stops working before its `exp`.

    Relationships:
    - One access token belongs to one user.
    """
    __tablename__ = "access_tokens"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey('users.id', ondelete="CASCADE"), nullable=False, index=True)

    name = Column(String(100), nullable=False, default="auth_token")
    jti = Column(String(64), unique=True, nullable=False, index=True)

    expires_at = Column(DateTime, nullable=False, index=True)
    is_revoked = Column(Boolean, default=False, nullable=False)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow)
    last_used_at = Column(DateTime, nullable=True)

    # Relationships
    user = relationship("User", back_populates="access_tokens")

    def __repr__(self):
        return f"<AccessToken {self.name} - user {self.user_id}>"

    def is_expired(self) -> bool:
        """
        Check if the token has expired.

        :return: True if expired, False otherwise
        """
        return datetime.utcnow() > self.expires_at

    def is_usable(self) -> bool:
        return not self.is_revoked and not self.is_expired()
