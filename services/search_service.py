"""
Search filter — substring match on product code or label.
"""

from typing import Iterable, Optional

from config import get_settings
from models.mercuriale import (
    CODE_FIELD,
    LABEL_FIELD,
    SOURCE_LABELS,
    Dataset,
    ProductRecord,
    SourceTag,
)
from utils.text_utils import normalize_query, stringify_value


def matches(record: ProductRecord, needle: str) -> bool:
    """True if the lower-cased code or label contains `needle`."""
    code = stringify_value(record.get(CODE_FIELD)).lower()
    label = stringify_value(record.get(LABEL_FIELD)).lower()
    return needle in code or needle in label


def search(
    query: str,
    dataset: Iterable[ProductRecord],
    min_length: Optional[int] = None
) -> list[ProductRecord]:
    """
    Filter a mercuriale by code or label.

    A query shorter than `min_length` once trimmed returns nothing; callers
    show the placeholder in that case, not "no matches".

    Args:
        query: Raw user input
        dataset: Active mercuriale
        min_length: Shortest query that triggers a search
            (default: min_query_length setting)

    Returns:
        Matching records, in dataset order
    """
    if min_length is None:
        min_length = get_settings().min_query_length

    needle = normalize_query(query)
    if len(needle) < min_length:
        return []
    return [record for record in dataset if matches(record, needle)]


def result_columns(dataset: Dataset) -> list[str]:
    """Results table headers: the fields of the first record of the dataset."""
    if not dataset.records:
        return []
    return list(dataset.records[0].keys())


def search_placeholder(source: SourceTag) -> str:
    """Text shown instead of results while the query is too short."""
    label = SOURCE_LABELS[SourceTag(source)]
    return f'Commencez à taper pour rechercher dans la mercuriale "{label}".'
