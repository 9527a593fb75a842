"""Transaction block parser.

Consumes reconstructed lines and emits raw transaction records. A line that
starts with a date is an *anchor*: it closes the open draft (committing it
when it has both a date and an amount) and opens a new one. Lines between two
anchors form the block body, which is resolved into fields by one of two
strategies:

  * ``FIXED_OFFSET``      source, destination, detail, notes, amount, balance
                          on consecutive lines (regular statement layout);
  * ``CONTENT_SNIFFING``  fields claimed by what the lines look like, used when
                          the fixed layout does not yield a parseable amount.

The chosen strategy is recorded per block so callers can see how a document
was read.
"""

from __future__ import annotations

import logging
from collections import Counter
from datetime import date
from enum import Enum
from typing import Dict, Iterable, List, NamedTuple, Optional, Tuple, Union

from .config import EngineConfig
from .constants import (
    BALANCE_MARKER_RX,
    DETAIL_VOCAB_RX,
    HEADER_NOISE_RX,
    TIME_ONLY_RX,
)
from .lines import ReconstructedLine
from .utils import (
    MonthContext,
    ParsedAmount,
    is_amount_line,
    is_numeric_only,
    is_sign_prefixed_token,
    looks_like_money,
    match_date_anchor,
    normalize_amount,
    normalize_space,
    parse_month_header,
)

logger = logging.getLogger(__name__)


class Strategy(str, Enum):
    FIXED_OFFSET = "fixed_offset"
    CONTENT_SNIFFING = "content_sniffing"


class ParserState(Enum):
    SCANNING = "scanning"
    COLLECTING = "collecting"


class RawTransactionRecord(NamedTuple):
    date: date
    amount: ParsedAmount
    balance: Optional[float]
    description: str
    source: str
    destination: str
    notes: str
    strategy: Strategy
    line_index: int


class BlockOutcome(NamedTuple):
    date: date
    strategy: Strategy
    committed: bool
    line_index: int


class ParseResult(NamedTuple):
    records: Tuple[RawTransactionRecord, ...]
    outcomes: Tuple[BlockOutcome, ...]
    skipped: Tuple[str, ...]

    @property
    def strategy_counts(self) -> Dict[Strategy, int]:
        return dict(Counter(o.strategy for o in self.outcomes if o.committed))


class DraftTransaction:
    """Mutable accumulator for one candidate transaction."""

    def __init__(self, anchor_date: date, line_index: int):
        self.date: Optional[date] = anchor_date
        self.line_index = line_index
        self.body: List[str] = []
        self.amount: Optional[ParsedAmount] = None
        self.balance: Optional[float] = None
        self.description = ""
        self.source = ""
        self.destination = ""
        self.notes = ""
        self.strategy: Optional[Strategy] = None
        self._closed = False

    def fill(self, strategy: Strategy, fields: Dict[str, object]) -> None:
        self.strategy = strategy
        for name, value in fields.items():
            setattr(self, name, value)

    def is_committable(self) -> bool:
        return self.date is not None and self.amount is not None

    def commit(self) -> RawTransactionRecord:
        if self._closed:
            raise RuntimeError("draft already closed")
        if not self.is_committable():
            raise ValueError("draft needs both a date and an amount to commit")
        self._closed = True
        return RawTransactionRecord(
            date=self.date,
            amount=self.amount,
            balance=self.balance,
            description=self.description,
            source=self.source,
            destination=self.destination,
            notes=self.notes,
            strategy=self.strategy or Strategy.CONTENT_SNIFFING,
            line_index=self.line_index,
        )

    def discard(self) -> None:
        self._closed = True
        self.body = []


def is_noise_line(text: str) -> bool:
    return any(rx.match(text) for rx in HEADER_NOISE_RX) or bool(
        BALANCE_MARKER_RX.match(text)
    )


def split_anchor_remainder(rest: str) -> List[str]:
    """Split text trailing a date into a text line plus trailing money tokens."""
    tokens = rest.split()
    trailing: List[str] = []
    while tokens and len(trailing) < 2 and looks_like_money(tokens[-1]):
        trailing.append(tokens.pop())
    trailing.reverse()
    head = " ".join(tokens).strip()
    return ([head] if head else []) + trailing


def fixed_offset_fields(
    body: List[str],
) -> Optional[Tuple[Dict[str, object], List[str]]]:
    """Read the body as a regular six-line block, or None if it does not fit.

    The four text columns must not hold a figure: an empty column shifts the
    amount up a line and would otherwise read the balance as the amount.
    """
    if len(body) < 5 or any(is_amount_line(text) for text in body[:4]):
        return None
    amount = normalize_amount(body[4])
    if amount is None:
        return None
    fields: Dict[str, object] = {
        "source": body[0],
        "destination": body[1],
        "description": body[2],
        "notes": body[3],
        "amount": amount,
    }
    consumed = 5
    if len(body) > 5 and is_numeric_only(body[5]):
        fields["balance"] = normalize_amount(body[5]).value
        consumed = 6
    return fields, body[consumed:]


def sniffed_fields(
    body: List[str], min_note_length: int
) -> Tuple[Dict[str, object], List[str]]:
    """Claim fields by content: amount (+balance), detail, source, notes."""
    fields: Dict[str, object] = {}
    claimed: set[int] = set()

    for i, text in enumerate(body):
        amount = normalize_amount(text)
        if amount is None:
            continue
        fields["amount"] = amount
        claimed.add(i)
        if i + 1 < len(body) and is_numeric_only(body[i + 1]):
            fields["balance"] = normalize_amount(body[i + 1]).value
            claimed.add(i + 1)
        break

    for i, text in enumerate(body):
        if i not in claimed and DETAIL_VOCAB_RX.search(text):
            fields["description"] = text
            claimed.add(i)
            break

    for i, text in enumerate(body):
        if i in claimed or is_amount_line(text) or is_sign_prefixed_token(text):
            continue
        fields["source"] = text
        claimed.add(i)
        break

    for i, text in enumerate(body):
        if i not in claimed and len(text) > min_note_length:
            fields["notes"] = text
            claimed.add(i)
            break

    return fields, [t for i, t in enumerate(body) if i not in claimed]


class BlockParser:
    """SCANNING/COLLECTING state machine over reconstructed lines."""

    def __init__(self, config: EngineConfig | None = None):
        self.config = config or EngineConfig()
        self.state = ParserState.SCANNING
        self.context: Optional[MonthContext] = None
        self.draft: Optional[DraftTransaction] = None
        self._records: List[RawTransactionRecord] = []
        self._outcomes: List[BlockOutcome] = []
        self._skipped: List[str] = []
        self._index = 0

    def feed(self, line: Union[ReconstructedLine, str]) -> None:
        text = normalize_space(line.text if isinstance(line, ReconstructedLine) else line)
        if not text:
            return
        index = self._index
        self._index += 1
        if is_noise_line(text):
            self._skipped.append(text)
            return
        ctx = parse_month_header(text)
        if ctx is not None:
            self.context = ctx
            return
        anchor = match_date_anchor(text, self.context)
        if anchor is not None:
            if BALANCE_MARKER_RX.match(anchor.remainder):
                self._skipped.append(text)
                return
            self._flush()
            self.draft = DraftTransaction(anchor.date, index)
            self.draft.body.extend(split_anchor_remainder(anchor.remainder))
            self.state = ParserState.COLLECTING
        elif self.state is ParserState.COLLECTING:
            # A time printed on its own row belongs to the anchor.
            if not self.draft.body and TIME_ONLY_RX.match(text):
                return
            self.draft.body.append(text)
        else:
            self._skipped.append(text)

    def finish(self) -> ParseResult:
        self._flush()
        self.state = ParserState.SCANNING
        result = ParseResult(
            tuple(self._records), tuple(self._outcomes), tuple(self._skipped)
        )
        logger.info(
            "Parsed %d block(s): %d committed %s, %d discarded, %d line(s) skipped",
            len(result.outcomes),
            len(result.records),
            {s.value: n for s, n in result.strategy_counts.items()},
            len(result.outcomes) - len(result.records),
            len(result.skipped),
        )
        return result

    def _flush(self) -> None:
        draft = self.draft
        if draft is None:
            return
        self.draft = None
        body = list(draft.body)
        fixed = fixed_offset_fields(body)
        if fixed is not None:
            strategy = Strategy.FIXED_OFFSET
            fields, leftover = fixed
        else:
            strategy = Strategy.CONTENT_SNIFFING
            fields, leftover = sniffed_fields(body, self.config.min_note_length)
        draft.fill(strategy, fields)
        if leftover:
            logger.debug("Unclaimed block line(s) for %s: %r", draft.date, leftover)
            self._skipped.extend(leftover)
        committed = draft.is_committable()
        if committed:
            self._records.append(draft.commit())
        else:
            logger.debug("Discarding draft dated %s: no amount found", draft.date)
            draft.discard()
        self._outcomes.append(
            BlockOutcome(draft.date, strategy, committed, draft.line_index)
        )


def parse_lines(
    lines: Iterable[Union[ReconstructedLine, str]], config: EngineConfig | None = None
) -> ParseResult:
    """Run the block parser over an ordered line sequence."""
    parser = BlockParser(config)
    for line in lines:
        parser.feed(line)
    return parser.finish()


__all__ = [
    "Strategy",
    "ParserState",
    "RawTransactionRecord",
    "BlockOutcome",
    "ParseResult",
    "DraftTransaction",
    "BlockParser",
    "parse_lines",
    "fixed_offset_fields",
    "sniffed_fields",
    "split_anchor_remainder",
    "is_noise_line",
]
