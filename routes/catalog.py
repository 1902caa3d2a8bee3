"""
Catalog API routes: source selector and search.
"""

from fastapi import APIRouter, Query

from models.mercuriale import SearchResponse, SetSourceRequest, SourceListResponse
from routes.errors import handle_error
from services.session_service import get_order_session

router = APIRouter(prefix="/api/catalog", tags=["Catalog"])


@router.get("/sources", response_model=SourceListResponse)
async def list_sources():
    """
    List the mercuriales with their record counts and the active one.

    Raises:
        503: Mercuriales not loaded
    """
    try:
        return get_order_session().sources()
    except Exception as e:
        return handle_error(e)


@router.put("/source", response_model=SearchResponse)
async def set_source(data: SetSourceRequest):
    """
    Switch the searchable mercuriale.

    Returns an empty search state: the query and results are cleared.
    The order list is unchanged.
    """
    try:
        return get_order_session().set_source(data.source)
    except Exception as e:
        return handle_error(e)


@router.get("/search", response_model=SearchResponse)
async def search_catalog(
    q: str = Query("", description="Code or label fragment (2 characters minimum)")
):
    """
    Search the active mercuriale by product code or label.

    Queries shorter than 2 characters return no results and a placeholder.
    """
    try:
        return get_order_session().search(q)
    except Exception as e:
        return handle_error(e)
