import math
from typing import Any, Dict, Iterable
from sqlalchemy.orm import Query
from wallet_api.core.errors import FieldValidationError

DEFAULT_SORT_FIELD = "created_at"
DEFAULT_SORT_ORDER = "desc"


def apply_sort(
        query: Query,
        model,
        sort_field: str,
        sort_order: str,
        allowed_fields: Iterable[str],
        sort_param: str = "sort",
        order_param: str = "order"
) -> Query:
    """
    Order a query by a whitelisted column.

    Ties are broken by the primary key in the same direction so that
    consecutive pages never overlap.

    :param query: Query to order
    :param model: ORM model the columns belong to
    :param sort_field: Column name requested by the client
    :param sort_order: "asc" or "desc"
    :param allowed_fields: Column names clients may sort by
    :param sort_param: Request parameter the field came from (for error messages)
    :param order_param: Request parameter the direction came from
    :return: Ordered query
    :raises: FieldValidationError if the field or direction is not allowed
    """
    allowed_fields = list(allowed_fields)
    if sort_field not in allowed_fields:
        raise FieldValidationError(
            sort_param,
            f"Cannot sort by '{sort_field}'. Allowed fields: {', '.join(allowed_fields)}."
        )

    order = sort_order.lower()
    if order not in ("asc", "desc"):
        raise FieldValidationError(order_param, "Sort order must be 'asc' or 'desc'.")

    column = getattr(model, sort_field)
    if order == "desc":
        return query.order_by(column.desc(), model.id.desc())
    return query.order_by(column.asc(), model.id.asc())


def paginate(query: Query, page: int, per_page: int) -> Dict[str, Any]:
    """
    Run a query one page at a time.

    :param query: Filtered and ordered query
    :param page: 1-based page number
    :param per_page: Rows per page
    :return: Dict with data, current_page, last_page, per_page and total
    """
    total = query.order_by(None).count()
    items = query.limit(per_page).offset((page - 1) * per_page).all()

    return {
        "data": items,
        "current_page": page,
        "last_page": max(1, math.ceil(total / per_page)),
        "per_page": per_page,
        "total": total,
    }
