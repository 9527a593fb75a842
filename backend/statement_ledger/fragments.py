"""Positioned text fragments and the pdfplumber-backed page source."""

from __future__ import annotations

import logging
import math
from typing import Iterable, Iterator, List, NamedTuple

import pdfplumber

from .errors import DocumentUnreadableError

logger = logging.getLogger(__name__)


class PositionedFragment(NamedTuple):
    """One span of text; ``y`` grows upward so the top of a page is largest."""

    text: str
    x: float
    y: float
    page: int


def _is_well_formed(frag) -> bool:
    try:
        text, x, y, page = frag
    except (TypeError, ValueError):
        return False
    if not isinstance(text, str):
        return False
    for coord in (x, y):
        if isinstance(coord, bool) or not isinstance(coord, (int, float)):
            return False
        if not math.isfinite(coord):
            return False
    return isinstance(page, int) and not isinstance(page, bool)


def collect_fragments(pages: Iterable[Iterable]) -> List[PositionedFragment]:
    """Concatenate per-page fragments in page order, dropping malformed ones."""
    out: List[PositionedFragment] = []
    dropped = 0
    for page in pages:
        for frag in page:
            if not _is_well_formed(frag):
                dropped += 1
                logger.debug("Dropping malformed fragment: %r", frag)
                continue
            out.append(PositionedFragment(*frag))
    if dropped:
        logger.info("Dropped %d malformed fragment(s)", dropped)
    return out


def iter_pdf_pages(pdf_file) -> Iterator[List[PositionedFragment]]:
    """Yield one fragment list per page of a PDF, in page order.

    ``pdf_file`` is anything ``pdfplumber.open`` accepts (path or binary file
    object). Decoder failures surface as ``DocumentUnreadableError``.
    """
    try:
        pdf = pdfplumber.open(pdf_file)
    except Exception as e:
        raise DocumentUnreadableError(f"Unable to open document: {e}") from e
    with pdf:
        for p_idx, page in enumerate(pdf.pages):
            try:
                words = page.extract_words() or []
            except Exception as e:
                raise DocumentUnreadableError(
                    f"Unable to read page {p_idx + 1}: {e}"
                ) from e
            height = float(page.height)
            yield [
                PositionedFragment(
                    w.get("text"),
                    w.get("x0"),
                    None if w.get("bottom") is None else height - w["bottom"],
                    p_idx,
                )
                for w in words
            ]


__all__ = ["PositionedFragment", "collect_fragments", "iter_pdf_pages"]
