from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session
from wallet_api.database import get_db
from wallet_api.middleware.auth import get_current_user
from wallet_api.services.wallet_type_service import WalletTypeService
from wallet_api.schemas.wallet_type import (
    WalletTypeCreateRequest,
    WalletTypePage,
    WalletTypeResponse,
    WalletTypeUpdateRequest,
)
from typing import Optional

# Create router
router = APIRouter(prefix="/wallet-types", tags=["Wallet Types"], dependencies=[Depends(get_current_user)])


@router.get("", response_model=WalletTypePage)
async def list_wallet_types(
        page: int = Query(1, ge=1),
        per_page: int = Query(10, ge=1, le=100),
        db: Session = Depends(get_db),
):
    return WalletTypeService.list_wallet_types(db, page=page, per_page=per_page)


@router.post("", response_model=WalletTypeResponse, status_code=status.HTTP_201_CREATED)
async def create_wallet_type(
        request: WalletTypeCreateRequest,
        db: Session = Depends(get_db),
):
    wallet_type = WalletTypeService.create_wallet_type(db, request)
    return WalletTypeResponse.model_validate(wallet_type)


@router.get("/search", response_model=WalletTypePage)
async def search_wallet_types(
        query: Optional[str] = Query(None, description="Matched against name or description"),
        status_filter: Optional[str] = Query(None, alias="status"),
        sort: str = Query("created_at", description="Column to sort by"),
        order: str = Query("desc", description="asc or desc"),
        page: int = Query(1, ge=1),
        per_page: int = Query(10, ge=1, le=100),
        db: Session = Depends(get_db),
):
    """
    Search wallet types.

    All filters are optional; without any, every wallet type is returned
    newest first.
    """
    return WalletTypeService.search_wallet_types(
        db,
        search=query,
        wallet_status=status_filter,
        sort=sort,
        order=order,
        page=page,
        per_page=per_page,
    )


@router.get("/{wallet_type_id}", response_model=WalletTypeResponse)
async def get_wallet_type(
        wallet_type_id: int,
        db: Session = Depends(get_db),
):
    wallet_type = WalletTypeService.get_wallet_type_or_404(db, wallet_type_id)
    return WalletTypeResponse.model_validate(wallet_type)


@router.put("/{wallet_type_id}", response_model=WalletTypeResponse)
async def update_wallet_type(
        wallet_type_id: int,
        request: WalletTypeUpdateRequest,
        db: Session = Depends(get_db),
):
    wallet_type = WalletTypeService.get_wallet_type_or_404(db, wallet_type_id)
    wallet_type = WalletTypeService.update_wallet_type(db, wallet_type, request)
    return WalletTypeResponse.model_validate(wallet_type)


@router.delete("/{wallet_type_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_wallet_type(
        wallet_type_id: int,
        db: Session = Depends(get_db),
):
    """
    Delete a wallet type. Wallets of this type are kept and lose their type.
    """
    wallet_type = WalletTypeService.get_wallet_type_or_404(db, wallet_type_id)
    WalletTypeService.delete_wallet_type(db, wallet_type)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
