"""
Order list API routes: add, remove, view and CSV download.
"""

from fastapi import APIRouter
from fastapi.responses import Response
import structlog

from models.mercuriale import SourceTag
from models.order import AddToOrderRequest, OrderResponse
from routes.errors import handle_error
from services.export_service import CSV_MEDIA_TYPE
from services.session_service import get_order_session

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/order", tags=["Order"])


@router.get("", response_model=OrderResponse)
async def get_order():
    """Current order list, in insertion order."""
    try:
        return get_order_session().order_state()
    except Exception as e:
        return handle_error(e)


@router.post("/items", response_model=OrderResponse, status_code=201)
async def add_item(data: AddToOrderRequest):
    """
    Add a product to the order list.

    Unknown codes are ignored and the unchanged list is returned.

    Raises:
        409: Product from this mercuriale already in the list
    """
    try:
        session = get_order_session()
        session.add(data.code, data.source)
        return session.order_state()
    except Exception as e:
        return handle_error(e)


@router.delete("/items/{source}/{code:path}", response_model=OrderResponse)
async def remove_item(source: SourceTag, code: str):
    """
    Remove a product from the order list. No-op if absent.

    `code` may contain slashes (e.g. 12/50).
    """
    try:
        session = get_order_session()
        session.remove(code, source)
        return session.order_state()
    except Exception as e:
        return handle_error(e)


@router.get("/export")
async def export_order():
    """
    Download the order list as a CSV file.

    Raises:
        409: Order list is empty
    """
    try:
        session = get_order_session()
        content = session.export()
    except Exception as e:
        return handle_error(e)

    logger.info("order_export_downloaded", bytes=len(content))
    return Response(
        content=content,
        media_type=CSV_MEDIA_TYPE,
        headers={
            "Content-Disposition": f'attachment; filename="{session.settings.export_filename}"'
        },
    )
