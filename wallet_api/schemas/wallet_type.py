from pydantic import BaseModel, Field
from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from wallet_api.schemas.pagination import PaginatedResponse


class WalletTypeCreateRequest(BaseModel):
    """
    Schema for creating a wallet type.
    """
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=255)
    status: str = Field("active", min_length=1, max_length=50)
    min_balance: Decimal = Field(Decimal("0"), ge=0, max_digits=12, decimal_places=2)
    interest_rate: Decimal = Field(Decimal("1"), ge=0, max_digits=8, decimal_places=2)

    class Config:
        str_strip_whitespace = True


class WalletTypeUpdateRequest(BaseModel):
    """
    Schema for a partial wallet type update.
    """
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=255)
    status: Optional[str] = Field(None, min_length=1, max_length=50)
    min_balance: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
    interest_rate: Optional[Decimal] = Field(None, ge=0, max_digits=8, decimal_places=2)

    class Config:
        str_strip_whitespace = True


class WalletTypeResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    status: str
    min_balance: float
    interest_rate: float
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class WalletTypePage(PaginatedResponse):
    data: List[WalletTypeResponse]
