"""
Order list schemas.
"""

from typing import Optional

from pydantic import Field

from models.base import RecordSchema
from models.mercuriale import ProductRecord, SourceTag


SOURCE_FIELD = "source"
SOURCE_COLUMN = "Source"

OrderEntry = ProductRecord


class AddToOrderRequest(RecordSchema):
    """
    Add a product to the order list.

    `code` is kept verbatim, padding included, so it matches the record.
    `source` defaults to the active mercuriale.
    """
    code: str = Field(..., min_length=1, description="Product code (Code Produit)")
    source: Optional[SourceTag] = Field(None, description="Mercuriale the product comes from")


class OrderResponse(RecordSchema):
    """Order list as rendered: columns start with Source."""
    columns: list[str]
    entries: list[OrderEntry]
    count: int
    can_export: bool
    placeholder: Optional[str] = None
