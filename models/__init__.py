"""
Pydantic models and record types.
"""

from models.base import BaseSchema, RecordSchema
from models.mercuriale import (
    CODE_FIELD,
    LABEL_FIELD,
    SOURCE_LABELS,
    Dataset,
    ProductRecord,
    SourceTag,
    SourceInfo,
    SourceListResponse,
    SetSourceRequest,
    SearchResponse,
    parse_source,
)
from models.order import (
    SOURCE_FIELD,
    SOURCE_COLUMN,
    OrderEntry,
    AddToOrderRequest,
    OrderResponse,
)

__all__ = [
    # Base
    "BaseSchema",
    "RecordSchema",

    # Mercuriales
    "CODE_FIELD",
    "LABEL_FIELD",
    "SOURCE_LABELS",
    "Dataset",
    "ProductRecord",
    "SourceTag",
    "SourceInfo",
    "SourceListResponse",
    "SetSourceRequest",
    "SearchResponse",
    "parse_source",

    # Order
    "SOURCE_FIELD",
    "SOURCE_COLUMN",
    "OrderEntry",
    "AddToOrderRequest",
    "OrderResponse",
]
