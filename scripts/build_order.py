#!/usr/bin/env python3
"""
Build an order from the command line and write it as CSV.

Loads the three mercuriales, optionally prints search results, adds the
given product codes and writes the order CSV (ma_commande.csv by default).

Usage:
    python scripts/build_order.py --search pain                       # Search Folkestone
    python scripts/build_order.py --source vendome --search beurre    # Search another mercuriale
    python scripts/build_order.py --code A1 --code B2 --output out/   # Export Folkestone codes
    python scripts/build_order.py --code vendome:V10 --code A1        # Mix mercuriales
    python scripts/build_order.py --data-dir ./data --code A1         # Custom data directory
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

from config import get_settings
from config.logging import configure_logging
from exceptions import AppError
from models.mercuriale import SourceTag
from services.export_service import ExportService
from services.session_service import OrderSession
from utils.text_utils import stringify_value


def parse_code(value: str, default_source: SourceTag) -> tuple[str, SourceTag]:
    """'vendome:V10' -> ('V10', vendome); 'A1' -> ('A1', default_source)."""
    prefix, sep, code = value.partition(":")
    if sep and prefix in {s.value for s in SourceTag}:
        return code, SourceTag(prefix)
    return value, default_source


def print_results(session: OrderSession, query: str) -> None:
    response = session.search(query)
    if not response.results:
        if len(query.strip()) < session.settings.min_query_length:
            print(response.placeholder)
        else:
            print(f'Aucun résultat pour "{query}".')
        return

    print(" | ".join(response.columns))
    for record in response.results:
        print(" | ".join(stringify_value(record.get(column)) for column in response.columns))
    print(f"\n{len(response.results)} résultat(s)")


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Search the mercuriales and export an order as CSV."
    )
    parser.add_argument(
        "--source",
        choices=[s.value for s in SourceTag],
        default=None,
        help="Active mercuriale (default from settings)"
    )
    parser.add_argument(
        "--search",
        default=None,
        help="Print records whose code or label contains this text"
    )
    parser.add_argument(
        "--code",
        action="append",
        default=[],
        help="Product code to add; prefix with 'source:' to pick another mercuriale"
    )
    parser.add_argument(
        "--output",
        default=None,
        help="CSV file or directory to write (default: export_filename setting)"
    )
    parser.add_argument(
        "--data-dir",
        default=None,
        help="Directory holding the mercuriale JSON files"
    )
    args = parser.parse_args()

    settings = get_settings()
    if args.data_dir:
        settings = settings.model_copy(update={"data_dir": Path(args.data_dir)})
    configure_logging(settings)

    session = OrderSession(settings=settings)
    try:
        session.load_sync()
    except AppError as e:
        print(f"{e.message} ({e.details.get('reason')})", file=sys.stderr)
        return 1

    if args.source:
        session.set_source(SourceTag(args.source))

    if args.search is not None:
        print_results(session, args.search)

    if not args.code:
        return 0

    for value in args.code:
        code, source = parse_code(value, session.active_source)
        try:
            entry = session.add(code, source)
        except AppError as e:
            print(f"  ! {e.message}", file=sys.stderr)
            continue
        if entry is None:
            print(f"  ? {code} introuvable dans la mercuriale {source.value}", file=sys.stderr)
        else:
            print(f"  + {source.value} {code}")

    if session.order.is_empty:
        print("Aucun article ajouté, pas de fichier écrit.", file=sys.stderr)
        return 1

    output = args.output or settings.export_filename
    path = ExportService(settings).write_csv(session.order.entries, output)
    print(f"\n{len(session.order)} article(s) écrits dans {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
