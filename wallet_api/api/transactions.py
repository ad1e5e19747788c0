from datetime import date
from decimal import Decimal
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session
from wallet_api.database import get_db
from wallet_api.middleware.auth import get_current_user
from wallet_api.services.transaction_service import TransactionService
from wallet_api.schemas.transaction import (
    TransactionCreateRequest,
    TransactionEnvelope,
    TransactionPage,
    TransactionResponse,
    TransactionUpdateRequest,
)
from typing import Optional

# Create router
router = APIRouter(prefix="/transactions", tags=["Transactions"], dependencies=[Depends(get_current_user)])


@router.get("", response_model=TransactionPage)
async def list_transactions(
        page: int = Query(1, ge=1),
        per_page: int = Query(15, ge=1, le=100),
        db: Session = Depends(get_db),
):
    return TransactionService.list_transactions(db, page=page, per_page=per_page)


@router.post("", response_model=TransactionEnvelope, status_code=status.HTTP_201_CREATED)
async def create_transaction(
        request: TransactionCreateRequest,
        db: Session = Depends(get_db),
):
    transaction = TransactionService.create_transaction(db, request)
    return TransactionEnvelope(
        message="Transaction created successfully",
        data=TransactionResponse.model_validate(transaction)
    )


@router.get("/search", response_model=TransactionPage)
async def search_transactions(
        id: Optional[int] = Query(None, description="Exact transaction ID"),
        min_amount: Optional[Decimal] = Query(None),
        max_amount: Optional[Decimal] = Query(None),
        start_date: Optional[date] = Query(None, description="Created on or after (YYYY-MM-DD)"),
        end_date: Optional[date] = Query(None, description="Created on or before (YYYY-MM-DD)"),
        status_filter: Optional[str] = Query(None, alias="status"),
        type: Optional[str] = Query(None),
        description: Optional[str] = Query(None, description="Substring of the description"),
        sort_by: str = Query("created_at"),
        sort_order: str = Query("desc"),
        page: int = Query(1, ge=1),
        per_page: int = Query(15, ge=1, le=100),
        db: Session = Depends(get_db),
):
    """
    Search transactions.

    Filters (all optional, applied only when present):
    - id, min_amount / max_amount, start_date / end_date
    - status, type (exact match)
    - description (substring)

    Sorted by sort_by / sort_order, newest first by default.
    """
    return TransactionService.search_transactions(
        db,
        transaction_id=id,
        min_amount=min_amount,
        max_amount=max_amount,
        start_date=start_date,
        end_date=end_date,
        transaction_status=status_filter,
        transaction_type=type,
        description=description,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        per_page=per_page,
    )


@router.get("/{transaction_id}", response_model=TransactionEnvelope)
async def get_transaction(
        transaction_id: int,
        db: Session = Depends(get_db),
):
    transaction = TransactionService.get_transaction_or_404(db, transaction_id)
    return TransactionEnvelope(
        message="Transaction retrieved successfully",
        data=TransactionResponse.model_validate(transaction)
    )


@router.put("/{transaction_id}", response_model=TransactionEnvelope)
async def update_transaction(
        transaction_id: int,
        request: TransactionUpdateRequest,
        db: Session = Depends(get_db),
):
    transaction = TransactionService.get_transaction_or_404(db, transaction_id)
    transaction = TransactionService.update_transaction(db, transaction, request)
    return TransactionEnvelope(
        message="Transaction updated successfully",
        data=TransactionResponse.model_validate(transaction)
    )


@router.delete("/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_transaction(
        transaction_id: int,
        db: Session = Depends(get_db),
):
    transaction = TransactionService.get_transaction_or_404(db, transaction_id)
    TransactionService.delete_transaction(db, transaction)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
