from pydantic import BaseModel, Field
from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from wallet_api.schemas.pagination import PaginatedResponse


class TransactionCreateRequest(BaseModel):
    """
    Schema for recording a transaction.

    Only the amount is required; everything else falls back to the
    column defaults (deposit / completed / NGN).
    """
    amount: Decimal = Field(..., max_digits=12, decimal_places=2)
    user_id: Optional[int] = None
    wallet_id: Optional[int] = None
    type: Optional[str] = Field(None, min_length=1, max_length=50)
    status: Optional[str] = Field(None, min_length=1, max_length=50)
    description: Optional[str] = Field(None, max_length=255)
    currency: Optional[str] = Field(None, min_length=1, max_length=10)


class TransactionUpdateRequest(BaseModel):
    """
    Schema for a partial transaction update.
    """
    amount: Optional[Decimal] = Field(None, max_digits=12, decimal_places=2)
    user_id: Optional[int] = None
    wallet_id: Optional[int] = None
    type: Optional[str] = Field(None, min_length=1, max_length=50)
    status: Optional[str] = Field(None, min_length=1, max_length=50)
    description: Optional[str] = Field(None, max_length=255)
    currency: Optional[str] = Field(None, min_length=1, max_length=10)


class TransactionResponse(BaseModel):
    """
    Schema for transaction responses (what we send to the client).
    """
    id: int
    user_id: Optional[int] = None
    wallet_id: Optional[int] = None
    amount: float
    type: str
    status: str
    description: Optional[str] = None
    currency: str
    created_at: datetime
    updated_at: datetime

    class Config:
        """
        Pydantic config to work with SQLAlchemy models.
        This allows us to return ORM objects directly.
        """
        from_attributes = True


class TransactionEnvelope(BaseModel):
    message: str
    data: TransactionResponse


class TransactionPage(PaginatedResponse):
    data: List[TransactionResponse]
