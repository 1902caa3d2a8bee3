"""
Business logic services.

Each service handles one step of the order flow.
"""

from services.dataset_service import DatasetService, MercurialeStore
from services.search_service import search, result_columns, search_placeholder
from services.order_service import OrderList
from services.export_service import (
    ExportService,
    get_export_service,
    build_order_csv,
    write_order_csv,
)
from services.session_service import (
    OrderSession,
    get_order_session,
    reset_order_session,
)

__all__ = [
    "DatasetService",
    "MercurialeStore",
    "search",
    "result_columns",
    "search_placeholder",
    "OrderList",
    "ExportService",
    "get_export_service",
    "build_order_csv",
    "write_order_csv",
    "OrderSession",
    "get_order_session",
    "reset_order_session",
]
