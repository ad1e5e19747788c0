from sqlalchemy import Column, ForeignKey, Integer, String, Numeric, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime
from wallet_api.database import Base
import enum


class TransactionType(str, enum.Enum):
    """
    Common transaction types. The column itself is a free-form string.
    """
    DEPOSIT = 'deposit'
    WITHDRAWAL = 'withdrawal'
    TRANSFER = 'transfer'


class TransactionStatus(str, enum.Enum):
    """
    Common transaction statuses. The column itself is a free-form string.
    """
    PENDING = 'pending'
    COMPLETED = 'completed'
    FAILED = 'failed'


class Transaction(Base):
    """
    Transaction model - records a movement of money against a wallet.

    Transactions are plain records: nothing here recomputes the wallet
    balance or checks that the currency matches the wallet's.
    """
    __tablename__ = 'transactions'

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey('users.id', ondelete="SET NULL"), nullable=True, index=True)
    wallet_id = Column(Integer, ForeignKey('wallets.id', ondelete="SET NULL"), nullable=True, index=True)

    # Transaction details
    amount = Column(Numeric(12, 2), nullable=False)
    type = Column(String(50), nullable=False, default=TransactionType.DEPOSIT.value, index=True)
    status = Column(String(50), nullable=False, default=TransactionStatus.COMPLETED.value, index=True)
    description = Column(String(255), nullable=True)
    currency = Column(String(10), nullable=False, default="NGN")

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    user = relationship('User', back_populates='transactions')
    wallet = relationship('Wallet', back_populates='transactions')

    def __repr__(self):
        return f"<Transaction {self.type} - {self.amount} - {self.status}>"
