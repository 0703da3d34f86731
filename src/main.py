# src/main.py — v3
"""CLI entry point — summarize and fingerprint commands.

Usage:
    docdigest summarize <cells.json> [options]
    docdigest fingerprint <cells.json>

The cells file holds a JSON array of objects with ``id``, ``content``,
``structuralScore`` (or ``structural_score``) and ``isHeader`` (or
``is_header``), in document order.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import TypeAdapter, ValidationError

from docdigest.core.models import SemanticCell
from docdigest.version import __version__

if TYPE_CHECKING:
    from docdigest.config.settings import Settings
    from docdigest.core.models import AnalysisOutcome

logger = logging.getLogger(__name__)

_CELLS_ADAPTER = TypeAdapter(list[SemanticCell])


class CellFileError(Exception):
    """Raised when the cells file cannot be read or validated."""


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        return asyncio.run(args.func(args))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="docdigest",
        description=f"docdigest v{__version__} — document summary and keyword extraction",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- summarize ---
    p_sum = subparsers.add_parser(
        "summarize", help="Summarize a document and extract keywords",
    )
    p_sum.add_argument("cells", type=Path, help="Path to cells JSON file")
    p_sum.add_argument(
        "--no-cache", action="store_true",
        help="Bypass the analysis cache",
    )
    p_sum.add_argument(
        "--format", dest="output_format", choices=("json", "text"), default="text",
        help="Output format (default: text)",
    )
    p_sum.set_defaults(func=_cmd_summarize)

    # --- fingerprint ---
    p_fp = subparsers.add_parser(
        "fingerprint", help="Print the cache fingerprint of a document",
    )
    p_fp.add_argument("cells", type=Path, help="Path to cells JSON file")
    p_fp.set_defaults(func=_cmd_fingerprint)

    return parser


def load_cells(path: Path) -> list[SemanticCell]:
    """Read and validate a cells JSON file.

    Raises:
        CellFileError: Missing file, invalid JSON or invalid cell records.
    """
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise CellFileError(f"Cannot read {path}: {e}") from e
    try:
        return _CELLS_ADAPTER.validate_json(raw)
    except ValidationError as e:
        raise CellFileError(f"Invalid cells file {path}: {e}") from e


async def _cmd_summarize(args: argparse.Namespace) -> int:
    """Run the summary pipeline on a cells file."""
    from docdigest.config.settings import load_settings
    from docdigest.summary.service import SummaryAndKeywordsService

    overrides: dict[str, object] = {}
    if args.no_cache:
        overrides["cache_enabled"] = False
    settings = load_settings(**overrides)
    _setup_logging(args.verbose, settings)

    cells = load_cells(args.cells)
    logger.info("Summarizing %s (%d cells)", args.cells.name, len(cells))

    service = SummaryAndKeywordsService.from_settings(settings)
    outcome = await service.analyze(cells)

    if args.output_format == "json":
        print(outcome.model_dump_json(indent=2))
    else:
        _print_outcome(outcome)
    return 0


async def _cmd_fingerprint(args: argparse.Namespace) -> int:
    """Print the document fingerprint."""
    from docdigest.cache.fingerprint import compute_document_hash

    _setup_logging(args.verbose)
    cells = load_cells(args.cells)
    fingerprint = compute_document_hash(cells)
    if fingerprint is None:
        logger.error("Document is empty, no fingerprint")
        return 1
    print(fingerprint)
    return 0


def _print_outcome(outcome: AnalysisOutcome) -> None:
    """Print a human-readable view of an AnalysisOutcome."""
    result = outcome.result
    print(f"Path:      {outcome.path}")
    print(f"Summary:   {result.summary.strip()}")
    print(f"Keywords:  {', '.join(result.keywords)}")
    for keyword, locations in result.keyword_locations.items():
        cells = ", ".join(
            f"{loc.cell_id}@{loc.position} ({loc.relevance_score:.2f})"
            for loc in locations
        )
        print(f"  {keyword}: {cells or '-'}")


def _setup_logging(verbose: bool, settings: Settings | None = None) -> None:
    """Configure logging for CLI usage."""
    from docdigest.logging.logger import setup_logging

    if settings is None:
        setup_logging(level="DEBUG" if verbose else "WARNING", log_format="text")
    else:
        setup_logging(
            level="DEBUG" if verbose else settings.log_level,
            log_format=settings.log_format,
            log_file=settings.log_file,
            rotation=settings.log_rotation,
            retention=settings.log_retention,
        )
    # Quiet noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


if __name__ == "__main__":
    sys.exit(main())
