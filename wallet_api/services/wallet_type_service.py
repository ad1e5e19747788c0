import logging
from sqlalchemy import or_
from sqlalchemy.orm import Session
from fastapi import HTTPException, status
from wallet_api.models.wallet_type import WalletType
from wallet_api.schemas.wallet_type import WalletTypeCreateRequest, WalletTypeUpdateRequest
from wallet_api.services.pagination import apply_sort, paginate, DEFAULT_SORT_FIELD, DEFAULT_SORT_ORDER
from typing import Optional

logger = logging.getLogger(__name__)

SORTABLE_FIELDS = ("id", "name", "status", "min_balance", "interest_rate", "created_at", "updated_at")


class WalletTypeService:
    """
    Service layer for wallet type operations.
    """

    @staticmethod
    def get_wallet_type_by_id(db: Session, wallet_type_id: int) -> Optional[WalletType]:
        return db.query(WalletType).filter(WalletType.id == wallet_type_id).first()

    @staticmethod
    def get_wallet_type_or_404(db: Session, wallet_type_id: int) -> WalletType:
        wallet_type = WalletTypeService.get_wallet_type_by_id(db, wallet_type_id)
        if not wallet_type:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Wallet type not found."
            )
        return wallet_type

    @staticmethod
    def list_wallet_types(db: Session, page: int = 1, per_page: int = 10) -> dict:
        query = db.query(WalletType).order_by(WalletType.id.asc())
        return paginate(query, page, per_page)

    @staticmethod
    def search_wallet_types(
            db: Session,
            search: Optional[str] = None,
            wallet_status: Optional[str] = None,
            sort: str = DEFAULT_SORT_FIELD,
            order: str = DEFAULT_SORT_ORDER,
            page: int = 1,
            per_page: int = 10
    ) -> dict:
        """
        Search wallet types. Every filter is only applied when given.

        :param db: Database session
        :param search: Substring matched against name OR description
        :param wallet_status: Exact status to filter on
        :param sort: Column to sort by
        :param order: "asc" or "desc"
        :param page: Page number
        :param per_page: Wallet types per page
        :return: Paginated result dict
        """
        query = db.query(WalletType)

        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(WalletType.name.ilike(pattern), WalletType.description.ilike(pattern)))

        if wallet_status:
            query = query.filter(WalletType.status == wallet_status)

        query = apply_sort(query, WalletType, sort, order, SORTABLE_FIELDS)
        return paginate(query, page, per_page)

    @staticmethod
    def create_wallet_type(db: Session, wallet_type_data: WalletTypeCreateRequest) -> WalletType:
        wallet_type = WalletType(**wallet_type_data.model_dump())

        db.add(wallet_type)
        db.commit()
        db.refresh(wallet_type)
        logger.info("Created wallet type %s", wallet_type.id)

        return wallet_type

    @staticmethod
    def update_wallet_type(db: Session, wallet_type: WalletType, wallet_type_data: WalletTypeUpdateRequest) -> WalletType:
        """
        Apply a partial update. Only `description` may be cleared with null.
        """
        changes = wallet_type_data.model_dump(exclude_unset=True)
        for field, value in changes.items():
            if value is None and field != "description":
                continue
            setattr(wallet_type, field, value)

        db.commit()
        db.refresh(wallet_type)

        return wallet_type

    @staticmethod
    def delete_wallet_type(db: Session, wallet_type: WalletType) -> None:
        """
        Delete a wallet type. Wallets of this type are kept with wallet_type_id set to NULL.
        """
        wallet_type_id = wallet_type.id
        db.delete(wallet_type)
        db.commit()
        logger.info("Deleted wallet type %s", wallet_type_id)
