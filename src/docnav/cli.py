"""Command-line entrypoint.

Responsibilities (and nothing more):
- Configure structlog
- Load the input file (converting Markdown through markdown-it-py)
- Print the outline markup, or the document with heading ids assigned
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import structlog

from docnav import __version__
from docnav.config import Settings
from docnav.converter import MARKDOWN_SUFFIXES, markdown_to_html
from docnav.document import HtmlDocument
from docnav.errors import DocNavError, ErrorCode
from docnav.pipeline import generate_outline

log = structlog.get_logger()


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------


def _setup_logging(settings: Settings) -> None:
    """Configure structlog. Called once at startup before any log statements."""
    log_level = logging.getLevelNamesMapping()[settings.logging.level]

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if settings.logging.format == "json":
        processors = [*shared_processors, structlog.processors.JSONRenderer()]
    else:
        processors = [*shared_processors, structlog.dev.ConsoleRenderer()]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        # Logs go to stderr, stdout carries the generated markup
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


# ---------------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------------


def load_html(path: Path) -> str:
    """Read ``path`` as HTML, rendering Markdown files first."""
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise DocNavError(
            code=ErrorCode.DOCUMENT_UNREADABLE,
            message=f"Cannot read {path}: {exc}",
            suggestion="Pass an existing UTF-8 encoded HTML or Markdown file.",
        ) from exc

    if path.suffix.lower() in MARKDOWN_SUFFIXES:
        return markdown_to_html(text)
    return text


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docnav",
        description="Generate a navigable heading outline for an HTML or Markdown document.",
    )
    parser.add_argument("path", type=Path, help="HTML or Markdown (.md) file")
    parser.add_argument(
        "--numbered",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Number sibling items (overrides outline.numbered from the config file)",
    )
    parser.add_argument("--max-depth", type=int, choices=range(1, 7), help="Deepest outline level rendered")
    parser.add_argument(
        "--annotate",
        action="store_true",
        help="Print the document with heading ids assigned instead of the outline",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    settings = Settings()
    overrides: dict[str, object] = {}
    if args.numbered is not None:
        overrides["numbered"] = args.numbered
    if args.max_depth is not None:
        overrides["max_depth"] = args.max_depth
    if overrides:
        settings = settings.model_copy(
            update={"outline": settings.outline.model_copy(update=overrides)}
        )

    _setup_logging(settings)

    try:
        html = load_html(args.path)
    except DocNavError as exc:
        log.error("cli_error", code=exc.code, message=exc.message, suggestion=exc.suggestion)
        return 1

    document = HtmlDocument.from_html(html)
    result = generate_outline(document, settings)
    log.info("cli_done", path=str(args.path), headings=len(result.records), annotate=args.annotate)

    sys.stdout.write((document.to_html() if args.annotate else result.html) + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
