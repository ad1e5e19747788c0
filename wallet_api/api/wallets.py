from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session
from wallet_api.database import get_db
from wallet_api.middleware.auth import get_current_user
from wallet_api.services.wallet_service import WalletService
from wallet_api.schemas.wallet import (
    WalletCreateRequest,
    WalletEnvelope,
    WalletPage,
    WalletResponse,
    WalletUpdateRequest,
)

# Create router
router = APIRouter(prefix="/wallets", tags=["Wallets"], dependencies=[Depends(get_current_user)])


@router.get("", response_model=WalletPage)
async def list_wallets(
        page: int = Query(1, ge=1),
        per_page: int = Query(15, ge=1, le=100),
        db: Session = Depends(get_db),
):
    """
    List all wallets, paginated.
    """
    return WalletService.list_wallets(db, page=page, per_page=per_page)


@router.post("", response_model=WalletEnvelope, status_code=status.HTTP_201_CREATED)
async def create_wallet(
        request: WalletCreateRequest,
        db: Session = Depends(get_db),
):
    """
    Create a wallet.

    Requires a name and a numeric balance. Currency defaults to NGN.
    user_id and wallet_type_id are optional but must exist when given.
    """
    wallet = WalletService.create_wallet(db, request)
    return WalletEnvelope(
        message="Wallet created successfully",
        wallet=WalletResponse.model_validate(wallet)
    )


@router.get("/search", response_model=WalletPage)
async def search_wallets(
        query: str = Query(..., min_length=1, description="Matched against the wallet name"),
        page: int = Query(1, ge=1),
        per_page: int = Query(15, ge=1, le=100),
        db: Session = Depends(get_db),
):
    """
    Search wallets by name. The query is required and may not be empty.
    """
    return WalletService.search_wallets(db, search=query, page=page, per_page=per_page)


@router.get("/{wallet_id}", response_model=WalletResponse)
async def get_wallet(
        wallet_id: int,
        db: Session = Depends(get_db),
):
    wallet = WalletService.get_wallet_or_404(db, wallet_id)
    return WalletResponse.model_validate(wallet)


@router.put("/{wallet_id}", response_model=WalletEnvelope)
async def update_wallet(
        wallet_id: int,
        request: WalletUpdateRequest,
        db: Session = Depends(get_db),
):
    wallet = WalletService.get_wallet_or_404(db, wallet_id)
    wallet = WalletService.update_wallet(db, wallet, request)
    return WalletEnvelope(
        message="Wallet updated successfully",
        wallet=WalletResponse.model_validate(wallet)
    )


@router.delete("/{wallet_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_wallet(
        wallet_id: int,
        db: Session = Depends(get_db),
):
    wallet = WalletService.get_wallet_or_404(db, wallet_id)
    WalletService.delete_wallet(db, wallet)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
