from pydantic import BaseModel, Field, validator
from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from wallet_api.schemas.pagination import PaginatedResponse


class WalletCreateRequest(BaseModel):
    """
    Schema for creating a wallet.
    """
    name: str = Field(..., min_length=1, max_length=255)
    balance: Decimal = Field(..., max_digits=12, decimal_places=2)
    currency: str = Field("NGN", min_length=1, max_length=10)
    user_id: Optional[int] = None
    wallet_type_id: Optional[int] = None

    class Config:
        str_strip_whitespace = True

    @validator('currency')
    def normalize_currency(cls, v):
        """Currency codes are stored upper case"""
        return v.strip().upper()


class WalletUpdateRequest(BaseModel):
    """
    Schema for a partial wallet update. Only the fields sent are changed.
    """
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    balance: Optional[Decimal] = Field(None, max_digits=12, decimal_places=2)
    currency: Optional[str] = Field(None, min_length=1, max_length=10)
    user_id: Optional[int] = None
    wallet_type_id: Optional[int] = None

    class Config:
        str_strip_whitespace = True

    @validator('currency')
    def normalize_currency(cls, v):
        """Currency codes are stored upper case"""
        return v.strip().upper() if v is not None else v


class WalletTypeSummary(BaseModel):
    """
    The wallet type as embedded in a wallet payload.
    """
    id: int
    name: str
    status: str

    class Config:
        from_attributes = True


class WalletResponse(BaseModel):
    """
    Schema for wallet responses (what we send to the client).
    """
    id: int
    name: Optional[str] = None
    user_id: Optional[int] = None
    wallet_type_id: Optional[int] = None
    balance: float
    currency: str
    wallet_type: Optional[WalletTypeSummary] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        """
        Pydantic config to work with SQLAlchemy models.
        This allows us to return ORM objects directly.
        """
        from_attributes = True


class WalletEnvelope(BaseModel):
    message: str
    wallet: WalletResponse


class WalletPage(PaginatedResponse):
    data: List[WalletResponse]
