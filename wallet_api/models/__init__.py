"""
Models package initialization.

This file imports all models so SQLAlchemy can discover them
and create the corresponding database tables.
"""

from wallet_api.models.user import User
from wallet_api.models.wallet_type import WalletType
from wallet_api.models.wallet import Wallet
from wallet_api.models.transaction import Transaction, TransactionType, TransactionStatus
from wallet_api.models.access_token import AccessToken
from wallet_api.models.password_reset import PasswordResetToken

__all__ = [
    "User",
    "WalletType",
    "Wallet",
    "Transaction",
    "TransactionType",
    "TransactionStatus",
    "AccessToken",
    "PasswordResetToken",
]
