from pydantic import BaseModel


class PaginatedResponse(BaseModel):
    """
    Pagination metadata shared by every list and search endpoint.

    Subclasses add a typed `data` field.
    """
    current_page: int
    last_page: int
    per_page: int
    total: int


class MessageResponse(BaseModel):
    """
    Schema for plain message responses.
    """
    message: str
