"""
Mercuriale (supplier price list) types and catalog schemas.

Records are kept as plain ordered dicts: the three mercuriales do not share
a schema, so only the two fields used for search are named here.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from pydantic import Field

from exceptions import UnknownSourceError
from models.base import BaseSchema, RecordSchema


CODE_FIELD = "Code Produit"
LABEL_FIELD = "Libellé produit"

Scalar = Union[str, int, float, bool, None]
ProductRecord = dict[str, Scalar]


class SourceTag(str, Enum):
    """Mercuriales, in load order."""
    FOLKESTONE = "folkestone"
    VENDOME = "vendome"
    WASHINGTON = "washington"


SOURCE_LABELS = {
    SourceTag.FOLKESTONE: "Folkestone",
    SourceTag.VENDOME: "Vendôme",
    SourceTag.WASHINGTON: "Washington",
}


@dataclass(frozen=True)
class Dataset:
    """One loaded mercuriale. Never mutated after load."""
    source: SourceTag
    records: tuple[ProductRecord, ...] = ()

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)

    @property
    def label(self) -> str:
        return SOURCE_LABELS[self.source]


# ===================
# API SCHEMAS
# ===================

class SourceInfo(BaseSchema):
    """A mercuriale as shown in the source selector."""
    source: SourceTag
    label: str
    count: int = Field(..., ge=0, description="Number of records loaded")


class SourceListResponse(BaseSchema):
    """Source selector state."""
    active: SourceTag
    sources: list[SourceInfo]


class SetSourceRequest(BaseSchema):
    """Switch the searchable mercuriale."""
    source: SourceTag


class SearchResponse(RecordSchema):
    """
    Search results for the active mercuriale.

    `placeholder` is set when there is nothing to show, either because the
    query is too short or because nothing matched.
    """
    source: SourceTag
    query: str = ""
    columns: list[str] = Field(default_factory=list)
    results: list[ProductRecord] = Field(default_factory=list)
    placeholder: Optional[str] = None


def parse_source(value) -> SourceTag:
    """
    Source tag from user input.

    Raises:
        UnknownSourceError: If the value names no mercuriale
    """
    try:
        return SourceTag(value)
    except ValueError:
        raise UnknownSourceError(str(value)) from None
