from sqlalchemy import Column, Integer, String, Numeric, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from wallet_api.database import Base


class Wallet(Base):
    """
    Wallet model - a balance held in one currency.

    Both parents are optional: deleting the owning user or the wallet type
    leaves the wallet in place with the foreign key set to NULL.

    Relationships:
    - One wallet belongs to one user.
    - One wallet belongs to one wallet type.
    - One wallet can have many transactions.
    """
    __tablename__ = "wallets"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer,
        ForeignKey('users.id', ondelete="SET NULL", onupdate="CASCADE"),
        nullable=True,
        index=True,
    )
    wallet_type_id = Column(
        Integer,
        ForeignKey('wallet_types.id', ondelete="SET NULL", onupdate="CASCADE"),
        nullable=True,
        index=True,
    )
    name = Column(String(255), nullable=True, index=True)
    currency = Column(String(10), nullable=False, default="NGN")
    balance = Column(Numeric(12, 2), nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    user = relationship("User", back_populates="wallets")
    wallet_type = relationship("WalletType", back_populates="wallets")
    transactions = relationship("Transaction", back_populates="wallet")

    def __repr__(self):
        return f"<Wallet {self.id} - Balance: {self.balance} {self.currency}>"
