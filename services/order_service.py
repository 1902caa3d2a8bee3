"""
Order list — products picked from the mercuriales, tagged by source.

An entry is identified by its stringified product code and its source tag;
that pair is unique within the list. Entries are never edited: add appends
a new merged dict and remove rebuilds the list without the matches.
"""

from typing import Iterable, Optional

import structlog

from exceptions import OrderEntryExistsError
from models.mercuriale import CODE_FIELD, ProductRecord, SourceTag
from models.order import SOURCE_FIELD, OrderEntry
from utils.text_utils import stringify_value

logger = structlog.get_logger(__name__)

EMPTY_ORDER_PLACEHOLDER = "Aucun article ajouté pour le moment."


def entry_code(record: ProductRecord) -> str:
    """Product code as compared for identity."""
    return stringify_value(record.get(CODE_FIELD))


def order_columns(entries: Iterable[ProductRecord]) -> list[str]:
    """Fields of all entries, without `source`, in first-seen order."""
    seen: dict[str, None] = {}
    for entry in entries:
        for key in entry:
            if key != SOURCE_FIELD:
                seen.setdefault(key, None)
    return list(seen)


def find_record(product_code: str, dataset: Iterable[ProductRecord]) -> Optional[ProductRecord]:
    """First record whose stringified code equals `product_code`."""
    code = stringify_value(product_code)
    for record in dataset:
        if entry_code(record) == code:
            return record
    return None


class OrderList:
    """
    Accumulator of (record, source) pairs.

    Insertion order is display and export order.
    """

    def __init__(self):
        self._entries: list[OrderEntry] = []

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def is_empty(self) -> bool:
        return not self._entries

    @property
    def entries(self) -> list[OrderEntry]:
        """Copies of the entries, in insertion order."""
        return [dict(entry) for entry in self._entries]

    def contains(self, product_code: str, source: SourceTag) -> bool:
        code = stringify_value(product_code)
        source = SourceTag(source).value
        return any(
            entry_code(entry) == code and entry[SOURCE_FIELD] == source
            for entry in self._entries
        )

    # ===================
    # WRITE OPERATIONS
    # ===================

    def add(
        self,
        product_code: str,
        source: SourceTag,
        dataset: Iterable[ProductRecord]
    ) -> Optional[OrderEntry]:
        """
        Add a product from `dataset` to the list.

        Args:
            product_code: Code Produit, as shown in the results
            source: Mercuriale the product comes from
            dataset: Records of that mercuriale

        Returns:
            The new entry, or None if no record has this code

        Raises:
            OrderEntryExistsError: If (code, source) is already in the list
        """
        code = stringify_value(product_code)
        source = SourceTag(source)

        if self.contains(code, source):
            logger.info("order_entry_duplicate", code=code, source=source.value)
            raise OrderEntryExistsError(code, source.value)

        record = find_record(code, dataset)
        if record is None:
            logger.debug("order_entry_lookup_miss", code=code, source=source.value)
            return None

        entry = {**record, SOURCE_FIELD: source.value}
        self._entries.append(entry)

        logger.info(
            "order_entry_added",
            code=code,
            source=source.value,
            count=len(self._entries)
        )
        return dict(entry)

    def remove(self, product_code: str, source: SourceTag) -> int:
        """
        Remove the entries matching (code, source). No-op if absent.

        Returns:
            Number of entries removed
        """
        code = stringify_value(product_code)
        source = SourceTag(source).value

        kept = [
            entry for entry in self._entries
            if not (entry_code(entry) == code and entry[SOURCE_FIELD] == source)
        ]
        removed = len(self._entries) - len(kept)
        self._entries = kept

        if removed:
            logger.info("order_entry_removed", code=code, source=source, count=len(kept))
        return removed

    def clear(self) -> None:
        self._entries = []

    # ===================
    # COLUMNS
    # ===================

    def columns(self) -> list[str]:
        """
        Union of the entries' fields, without `source`, in first-seen order.

        Recomputed on each call since entries come from mercuriales with
        different fields.
        """
        return order_columns(self._entries)
