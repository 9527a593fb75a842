"""End-to-end statement extraction.

  pages -> fragments -> lines -> raw records -> classified, sorted ledger

Each call owns all of its intermediate state, so independent documents can be
parsed concurrently without locking. Errors:

  DocumentUnreadableError   the decoder could not read the document
  NoTransactionsFoundError  the document was read but yielded no transactions
"""

from __future__ import annotations

import logging
from typing import AsyncIterable, Iterable, List, Tuple

from .categorize import Classifier
from .config import EngineConfig
from .fragments import collect_fragments, iter_pdf_pages
from .ledger import Transaction, assemble_ledger
from .lines import reconstruct_lines
from .pdf_parser import parse_lines

logger = logging.getLogger(__name__)


def extract_ledger(
    pages: Iterable[Iterable], config: EngineConfig | None = None
) -> Tuple[Transaction, ...]:
    """Extract the ordered ledger from per-page positioned fragments."""
    config = config or EngineConfig()
    fragments = collect_fragments(pages)
    lines = reconstruct_lines(fragments, tolerance=config.line_tolerance)
    result = parse_lines(lines, config)
    return assemble_ledger(result.records, Classifier(config.classifier))


async def aextract_ledger(
    pages: AsyncIterable[Iterable], config: EngineConfig | None = None
) -> Tuple[Transaction, ...]:
    """Like ``extract_ledger`` but awaits each page from an async source."""
    collected: List[Iterable] = []
    async for page in pages:
        collected.append(list(page))
    return extract_ledger(collected, config)


def parse_bank_statement(
    pdf_file, config: EngineConfig | None = None
) -> Tuple[Transaction, ...]:
    """Read a PDF statement (path or binary file object) into a ledger."""
    ledger = extract_ledger(iter_pdf_pages(pdf_file), config)
    logger.info("Extracted %d transaction(s) from statement", len(ledger))
    return ledger


__all__ = ["extract_ledger", "aextract_ledger", "parse_bank_statement"]
