"""
Order session — application state and command functions.

Owns the loaded mercuriales, the active source and the order list. The
HTTP routes and the CLI drive the session; nothing else holds state.
"""

import asyncio
from typing import Optional

import structlog

from config import Settings, get_settings
from exceptions import DataUnavailableError, DatasetLoadError
from models.mercuriale import (
    SOURCE_LABELS,
    Dataset,
    SearchResponse,
    SourceInfo,
    SourceListResponse,
    SourceTag,
    parse_source,
)
from models.order import SOURCE_COLUMN, OrderEntry, OrderResponse
from services.dataset_service import DatasetService, MercurialeStore
from services.export_service import get_export_service
from services.order_service import EMPTY_ORDER_PLACEHOLDER, OrderList
from services.search_service import result_columns, search, search_placeholder

logger = structlog.get_logger(__name__)


class OrderSession:
    """
    One user session: load → search → select → accumulate → export.

    Until `load()` succeeds (or after it failed) every command raises
    DataUnavailableError. A failed load is not retried.
    """

    def __init__(
        self,
        store: Optional[MercurialeStore] = None,
        settings: Optional[Settings] = None
    ):
        self.settings = settings or get_settings()
        self.store = store
        self.load_error: Optional[DatasetLoadError] = None
        self.active_source = SourceTag(self.settings.default_source)
        self.order = OrderList()

    # ===================
    # LOAD
    # ===================

    @property
    def is_ready(self) -> bool:
        return self.store is not None

    async def load(self, service: Optional[DatasetService] = None) -> MercurialeStore:
        """
        Load the mercuriales into the session.

        Datasets are loaded once: a loaded session returns its store
        unchanged, and a failed one raises its original error again.

        Raises:
            DatasetLoadError: If any mercuriale fails; the session stays
                non-interactive
        """
        if self.store is not None:
            logger.debug("session_already_loaded")
            return self.store
        if self.load_error is not None:
            raise self.load_error

        service = service or DatasetService(self.settings)
        try:
            self.store = await service.load()
        except DatasetLoadError as e:
            self.load_error = e
            logger.error(
                "session_load_failed",
                source=e.source,
                reason=e.reason
            )
            raise

        self.set_source(self.active_source)
        return self.store

    def load_sync(self, service: Optional[DatasetService] = None) -> MercurialeStore:
        """Blocking variant of load() for scripts."""
        return asyncio.run(self.load(service))

    def _require_store(self) -> MercurialeStore:
        if self.store is None:
            raise DataUnavailableError(self.load_error.reason if self.load_error else None)
        return self.store

    # ===================
    # SOURCE SELECTOR
    # ===================

    @property
    def active_dataset(self) -> Dataset:
        return self._require_store().get(self.active_source)

    def set_source(self, source: SourceTag) -> SearchResponse:
        """
        Switch the searchable mercuriale.

        The order list is untouched. Returns the cleared search state the
        presentation layer shows after a switch.
        """
        store = self._require_store()
        self.active_source = parse_source(source)
        logger.info("active_source_changed", source=self.active_source.value)

        return SearchResponse(
            source=self.active_source,
            columns=result_columns(store.get(self.active_source)),
            placeholder=search_placeholder(self.active_source),
        )

    def sources(self) -> SourceListResponse:
        counts = self._require_store().counts()
        return SourceListResponse(
            active=self.active_source,
            sources=[
                SourceInfo(source=source, label=SOURCE_LABELS[source], count=count)
                for source, count in counts.items()
            ],
        )

    # ===================
    # SEARCH
    # ===================

    def search(self, query: str) -> SearchResponse:
        """Search the active mercuriale."""
        dataset = self.active_dataset
        results = search(query, dataset, min_length=self.settings.min_query_length)

        logger.debug(
            "search_completed",
            source=self.active_source.value,
            query=query,
            count=len(results)
        )

        return SearchResponse(
            source=self.active_source,
            query=query or "",
            columns=result_columns(dataset),
            results=results,
            placeholder=None if results else search_placeholder(self.active_source),
        )

    # ===================
    # ORDER LIST
    # ===================

    def add(self, product_code: str, source: Optional[SourceTag] = None) -> Optional[OrderEntry]:
        """
        Add a product to the order list.

        Args:
            product_code: Code Produit
            source: Mercuriale to take it from (defaults to the active one)

        Returns:
            New entry, or None when the code is not in that mercuriale

        Raises:
            OrderEntryExistsError: If (code, source) is already listed
        """
        source = parse_source(source) if source else self.active_source
        dataset = self._require_store().get(source)
        return self.order.add(product_code, source, dataset)

    def remove(self, product_code: str, source: SourceTag) -> int:
        self._require_store()
        return self.order.remove(product_code, parse_source(source))

    def columns(self) -> list[str]:
        return self.order.columns()

    def order_state(self) -> OrderResponse:
        """Order list as rendered, columns prefixed with Source."""
        self._require_store()
        return OrderResponse(
            columns=[SOURCE_COLUMN, *self.order.columns()],
            entries=self.order.entries,
            count=len(self.order),
            can_export=not self.order.is_empty,
            placeholder=EMPTY_ORDER_PLACEHOLDER if self.order.is_empty else None,
        )

    # ===================
    # EXPORT
    # ===================

    def export(self) -> bytes:
        """
        Order list as CSV bytes.

        Raises:
            EmptyOrderError: If the list is empty
        """
        self._require_store()
        return get_export_service().build_csv(self.order.entries, self.order.columns())


# Singleton instance for convenience
_order_session: Optional[OrderSession] = None


def get_order_session() -> OrderSession:
    """Get or create the process OrderSession."""
    global _order_session
    if _order_session is None:
        _order_session = OrderSession()
    return _order_session


def reset_order_session(session: Optional[OrderSession] = None) -> OrderSession:
    """Replace the process OrderSession (new empty one if not given)."""
    global _order_session
    _order_session = session or OrderSession()
    return _order_session
