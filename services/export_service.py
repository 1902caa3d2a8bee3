"""
Export service — Generate the order CSV file.

Semicolon-delimited, UTF-8 with a byte-order mark so spreadsheet
applications pick the right charset. First column is the source mercuriale,
then the union of all product fields in first-seen order.
"""

from pathlib import Path
from typing import Optional, Sequence, Union

import structlog

from config import Settings, get_settings
from exceptions import EmptyOrderError
from models.order import SOURCE_COLUMN, SOURCE_FIELD, OrderEntry
from services.order_service import order_columns
from utils.text_utils import stringify_value

logger = structlog.get_logger(__name__)

CSV_MEDIA_TYPE = "text/csv;charset=utf-8"
CSV_DELIMITER = ";"
CSV_LINE_SEPARATOR = "\n"
BOM = "\ufeff"


def escape_cell(value) -> str:
    """
    Format one CSV cell.

    'He said "hi"; bye' -> '"He said ""hi""; bye"'
    None -> ''
    """
    cell = stringify_value(value).replace('"', '""')
    if CSV_DELIMITER in cell or '"' in cell or "\n" in cell:
        cell = f'"{cell}"'
    return cell


class ExportService:
    """Service for generating order export files."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    def build_csv_text(
        self,
        entries: Sequence[OrderEntry],
        columns: Optional[Sequence[str]] = None,
    ) -> str:
        """
        Build the CSV document, BOM included.

        Args:
            entries: Order entries, in export order
            columns: Product columns (computed from entries if omitted)

        Returns:
            CSV text: header + one line per entry, no trailing newline

        Raises:
            EmptyOrderError: If there are no entries
        """
        if not entries:
            raise EmptyOrderError()

        if columns is None:
            columns = order_columns(entries)

        header = CSV_DELIMITER.join([SOURCE_COLUMN, *columns])

        rows = []
        for entry in entries:
            cells = [escape_cell(entry.get(SOURCE_FIELD))]
            cells.extend(escape_cell(entry.get(column)) for column in columns)
            rows.append(CSV_DELIMITER.join(cells))

        return BOM + CSV_LINE_SEPARATOR.join([header, *rows])

    def build_csv(
        self,
        entries: Sequence[OrderEntry],
        columns: Optional[Sequence[str]] = None,
    ) -> bytes:
        """Build the CSV document as UTF-8 bytes."""
        content = self.build_csv_text(entries, columns).encode("utf-8")

        logger.info(
            "order_csv_generated",
            rows=len(entries),
            bytes=len(content)
        )
        return content

    def write_csv(
        self,
        entries: Sequence[OrderEntry],
        destination: Union[str, Path],
        columns: Optional[Sequence[str]] = None,
    ) -> Path:
        """
        Write the CSV document to a file.

        A directory destination receives a file named after the
        `export_filename` setting (ma_commande.csv by default).

        Returns:
            Path written
        """
        path = Path(destination)
        if path.is_dir():
            path = path / self.settings.export_filename

        path.write_bytes(self.build_csv(entries, columns))
        logger.info("order_csv_written", path=str(path))
        return path


# Singleton instance
_export_service: Optional[ExportService] = None


def get_export_service() -> ExportService:
    """Get singleton ExportService instance."""
    global _export_service
    if _export_service is None:
        _export_service = ExportService()
    return _export_service


def build_order_csv(entries: Sequence[OrderEntry]) -> bytes:
    """Export order entries as CSV bytes."""
    return get_export_service().build_csv(entries)


def write_order_csv(entries: Sequence[OrderEntry], destination: Union[str, Path]) -> Path:
    """Export order entries to a file."""
    return get_export_service().write_csv(entries, destination)
