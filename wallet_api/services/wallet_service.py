import logging
from sqlalchemy.orm import Session, joinedload
from fastapi import HTTPException, status
from wallet_api.core.errors import FieldValidationError
from wallet_api.models.user import User
from wallet_api.models.wallet import Wallet
from wallet_api.models.wallet_type import WalletType
from wallet_api.schemas.wallet import WalletCreateRequest, WalletUpdateRequest
from wallet_api.services.pagination import apply_sort, paginate, DEFAULT_SORT_FIELD, DEFAULT_SORT_ORDER
from typing import Optional

logger = logging.getLogger(__name__)


class WalletService:
    """
    Service layer for wallet-related operations.

    Every read loads the wallet type together with the wallet, so routers
    never trigger a lazy load while serializing.
    """

    @staticmethod
    def _base_query(db: Session):
        return db.query(Wallet).options(joinedload(Wallet.wallet_type))

    @staticmethod
    def _check_references(db: Session, data: dict) -> None:
        """
        Make sure referenced user and wallet type exist.
        :raises: FieldValidationError naming the first bad reference
        """
        user_id = data.get("user_id")
        if user_id is not None and not db.query(User.id).filter(User.id == user_id).first():
            raise FieldValidationError("user_id", "The selected user id is invalid.")

        wallet_type_id = data.get("wallet_type_id")
        if wallet_type_id is not None and not db.query(WalletType.id).filter(WalletType.id == wallet_type_id).first():
            raise FieldValidationError("wallet_type_id", "The selected wallet type id is invalid.")

    @staticmethod
    def get_wallet_by_id(db: Session, wallet_id: int) -> Optional[Wallet]:
        """
        Get a wallet by its ID.
        :param db:
        :param wallet_id:
        :return: Wallet object if found, None otherwise
        """
        return WalletService._base_query(db).filter(Wallet.id == wallet_id).first()

    @staticmethod
    def get_wallet_or_404(db: Session, wallet_id: int) -> Wallet:
        wallet = WalletService.get_wallet_by_id(db, wallet_id)
        if not wallet:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Wallet not found."
            )
        return wallet

    @staticmethod
    def list_wallets(db: Session, page: int = 1, per_page: int = 15) -> dict:
        query = WalletService._base_query(db).order_by(Wallet.id.asc())
        return paginate(query, page, per_page)

    @staticmethod
    def search_wallets(db: Session, search: str, page: int = 1, per_page: int = 15) -> dict:
        """
        Substring search on wallet name, newest first.

        :param db: Database session
        :param search: Required search term; blank after trimming is rejected
        :param page: Page number
        :param per_page: Wallets per page
        :return: Paginated result dict
        """
        search = search.strip()
        if not search:
            raise FieldValidationError("query", "The query field is required.")

        query = WalletService._base_query(db).filter(Wallet.name.ilike(f"%{search}%"))
        query = apply_sort(query, Wallet, DEFAULT_SORT_FIELD, DEFAULT_SORT_ORDER, [DEFAULT_SORT_FIELD])
        return paginate(query, page, per_page)

    @staticmethod
    def create_wallet(db: Session, wallet_data: WalletCreateRequest) -> Wallet:
        """
        Create a wallet.
        :param db: Database session
        :param wallet_data: Validated wallet fields
        :return: Newly created wallet object
        """
        data = wallet_data.model_dump()
        WalletService._check_references(db, data)

        wallet = Wallet(**data)

        db.add(wallet)
        db.commit()
        logger.info("Created wallet %s", wallet.id)

        return WalletService.get_wallet_by_id(db, wallet.id)

    @staticmethod
    def update_wallet(db: Session, wallet: Wallet, wallet_data: WalletUpdateRequest) -> Wallet:
        """
        Apply a partial update to a wallet.

        Sending user_id or wallet_type_id as null detaches the wallet.
        """
        changes = wallet_data.model_dump(exclude_unset=True)
        for field in ("name", "balance", "currency"):
            if field in changes and changes[field] is None:
                del changes[field]

        WalletService._check_references(db, changes)

        for field, value in changes.items():
            setattr(wallet, field, value)

        db.commit()

        return WalletService.get_wallet_by_id(db, wallet.id)

    @staticmethod
    def delete_wallet(db: Session, wallet: Wallet) -> None:
        wallet_id = wallet.id
        db.delete(wallet)
        db.commit()
        logger.info("Deleted wallet %s", wallet_id)
