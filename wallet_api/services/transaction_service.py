import logging
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from sqlalchemy.orm import Session
from fastapi import HTTPException, status
from wallet_api.core.errors import FieldValidationError
from wallet_api.models.transaction import Transaction
from wallet_api.models.user import User
from wallet_api.models.wallet import Wallet
from wallet_api.schemas.transaction import TransactionCreateRequest, TransactionUpdateRequest
from wallet_api.services.pagination import apply_sort, paginate, DEFAULT_SORT_FIELD, DEFAULT_SORT_ORDER
from typing import Optional

logger = logging.getLogger(__name__)

SORTABLE_FIELDS = ("id", "amount", "type", "status", "currency", "created_at", "updated_at")

# Columns that may not be NULL; sending null for them in an update is ignored
REQUIRED_COLUMNS = ("amount", "type", "status", "currency")


class TransactionService:
    """
    Service layer for transaction records.
    """

    @staticmethod
    def _check_references(db: Session, data: dict) -> None:
        user_id = data.get("user_id")
        if user_id is not None and not db.query(User.id).filter(User.id == user_id).first():
            raise FieldValidationError("user_id", "The selected user id is invalid.")

        wallet_id = data.get("wallet_id")
        if wallet_id is not None and not db.query(Wallet.id).filter(Wallet.id == wallet_id).first():
            raise FieldValidationError("wallet_id", "The selected wallet id is invalid.")

    @staticmethod
    def get_transaction_by_id(db: Session, transaction_id: int) -> Optional[Transaction]:
        """
        Get a transaction by its ID.
        :param db: Database session
        :param transaction_id: Transaction ID
        :return: Transaction object if found, None otherwise
        """
        return db.query(Transaction).filter(Transaction.id == transaction_id).first()

    @staticmethod
    def get_transaction_or_404(db: Session, transaction_id: int) -> Transaction:
        transaction = TransactionService.get_transaction_by_id(db, transaction_id)
        if not transaction:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Transaction not found."
            )
        return transaction

    @staticmethod
    def list_transactions(db: Session, page: int = 1, per_page: int = 15) -> dict:
        query = db.query(Transaction).order_by(Transaction.id.asc())
        return paginate(query, page, per_page)

    @staticmethod
    def search_transactions(
            db: Session,
            transaction_id: Optional[int] = None,
            min_amount: Optional[Decimal] = None,
            max_amount: Optional[Decimal] = None,
            start_date: Optional[date] = None,
            end_date: Optional[date] = None,
            transaction_status: Optional[str] = None,
            transaction_type: Optional[str] = None,
            description: Optional[str] = None,
            sort_by: str = DEFAULT_SORT_FIELD,
            sort_order: str = DEFAULT_SORT_ORDER,
            page: int = 1,
            per_page: int = 15
    ) -> dict:
        """
        Search transactions. Every filter is only applied when given.

        Date bounds are whole calendar days: end_date includes the entire day.

        :return: Paginated result dict
        """
        query = db.query(Transaction)

        if transaction_id is not None:
            query = query.filter(Transaction.id == transaction_id)

        if min_amount is not None:
            query = query.filter(Transaction.amount >= min_amount)
        if max_amount is not None:
            query = query.filter(Transaction.amount <= max_amount)

        if start_date is not None:
            query = query.filter(Transaction.created_at >= datetime.combine(start_date, time.min))
        if end_date is not None:
            query = query.filter(Transaction.created_at < datetime.combine(end_date + timedelta(days=1), time.min))

        if transaction_status:
            query = query.filter(Transaction.status == transaction_status)

        if transaction_type:
            query = query.filter(Transaction.type == transaction_type)

        if description:
            query = query.filter(Transaction.description.ilike(f"%{description}%"))

        query = apply_sort(query, Transaction, sort_by, sort_order, SORTABLE_FIELDS, "sort_by", "sort_order")
        return paginate(query, page, per_page)

    @staticmethod
    def create_transaction(db: Session, transaction_data: TransactionCreateRequest) -> Transaction:
        """
        Record a transaction. Fields left out take the column defaults.
        """
        data = transaction_data.model_dump(exclude_none=True)
        TransactionService._check_references(db, data)

        transaction = Transaction(**data)

        db.add(transaction)
        db.commit()
        db.refresh(transaction)
        logger.info("Created transaction %s", transaction.id)

        return transaction

    @staticmethod
    def update_transaction(db: Session, transaction: Transaction, transaction_data: TransactionUpdateRequest) -> Transaction:
        changes = transaction_data.model_dump(exclude_unset=True)
        changes = {
            field: value for field, value in changes.items()
            if value is not None or field not in REQUIRED_COLUMNS
        }
        TransactionService._check_references(db, changes)

        for field, value in changes.items():
            setattr(transaction, field, value)

        db.commit()
        db.refresh(transaction)

        return transaction

    @staticmethod
    def delete_transaction(db: Session, transaction: Transaction) -> None:
        transaction_id = transaction.id
        db.delete(transaction)
        db.commit()
        logger.info("Deleted transaction %s", transaction_id)
