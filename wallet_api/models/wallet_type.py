from sqlalchemy import Column, Integer, String, Numeric, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime
from wallet_api.database import Base


class WalletType(Base):
    """
    Wallet type model - a product category for wallets (savings, current, ...).

    Relationships:
    - One wallet type can have many wallets.
    """
    __tablename__ = "wallet_types"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    description = Column(String(255), nullable=True)
    status = Column(String(50), nullable=False, default="active", index=True)
    min_balance = Column(Numeric(12, 2), nullable=False, default=0)
    interest_rate = Column(Numeric(8, 2), nullable=False, default=1)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    wallets = relationship("Wallet", back_populates="wallet_type")

    def __repr__(self):
        return f"<WalletType {self.name} ({self.status})>"
