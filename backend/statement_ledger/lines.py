"""Cluster positioned fragments into reading-order lines of text."""

from __future__ import annotations

import logging
from typing import Iterable, List, NamedTuple, Tuple

from .fragments import PositionedFragment
from .utils import normalize_space

logger = logging.getLogger(__name__)


class ReconstructedLine(NamedTuple):
    parts: Tuple[str, ...]
    y: float
    page: int

    @property
    def text(self) -> str:
        return " ".join(self.parts)


def _finish(group: List[PositionedFragment]) -> ReconstructedLine | None:
    parts = tuple(
        s for s in (normalize_space(f.text) for f in sorted(group, key=lambda f: f.x)) if s
    )
    if not parts:
        return None
    return ReconstructedLine(parts, group[0].y, group[0].page)


def reconstruct_lines(
    fragments: Iterable[PositionedFragment], tolerance: float = 3.0
) -> List[ReconstructedLine]:
    """Group fragments into visual rows, top-to-bottom and page by page.

    A fragment joins the open line when it is on the same page and within
    ``tolerance`` of the line's *first* fragment, so a long row cannot drift.
    Whitespace-only lines are dropped.
    """
    ordered = sorted(fragments, key=lambda f: (f.page, -f.y, f.x))
    lines: List[ReconstructedLine] = []
    group: List[PositionedFragment] = []
    for frag in ordered:
        if group and (
            frag.page != group[0].page or abs(group[0].y - frag.y) >= tolerance
        ):
            line = _finish(group)
            if line is not None:
                lines.append(line)
            group = []
        group.append(frag)
    if group:
        line = _finish(group)
        if line is not None:
            lines.append(line)
    logger.debug("Reconstructed %d line(s) from %d fragment(s)", len(lines), len(ordered))
    return lines


__all__ = ["ReconstructedLine", "reconstruct_lines"]
