"""Final transaction model and ledger assembly."""

from __future__ import annotations

import logging
import datetime as dt
from typing import Iterable, List, Optional, Sequence, Tuple
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

from .categorize import Classifier, ExpenditureType, TransactionType
from .errors import NoTransactionsFoundError
from .pdf_parser import RawTransactionRecord

logger = logging.getLogger(__name__)


class Transaction(BaseModel):
    """One ledger entry. ``amount`` > 0 is money in, < 0 money out."""

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    date: dt.date
    amount: float
    # Running balance as printed on the statement; never recomputed.
    balance: Optional[float] = None
    description: str = ""
    source: str = ""
    destination: str = ""
    notes: str = ""
    type: TransactionType
    project: Optional[str] = None
    expenditure_type: Optional[ExpenditureType] = None


def _is_degenerate(record: RawTransactionRecord) -> bool:
    return record.amount.value == 0 and record.amount.explicit_sign is None


def _signed_amount(value: float, tx_type: TransactionType) -> float:
    # Interest and tax keep the printed sign, so a negative tax row has
    # amount < 0 with no expenditure type; only expenses are CAPEX/OPEX.
    if tx_type is TransactionType.INCOME:
        return abs(value)
    if tx_type is TransactionType.EXPENSE:
        return -abs(value)
    return value


def build_transaction(
    record: RawTransactionRecord, classifier: Classifier
) -> Transaction:
    cls = classifier.classify(
        record.description, record.notes, record.source, sign=record.amount.sign
    )
    return Transaction(
        date=record.date,
        amount=_signed_amount(record.amount.value, cls.type),
        balance=record.balance,
        description=record.description,
        source=record.source,
        destination=record.destination,
        notes=record.notes,
        type=cls.type,
        project=cls.project,
        expenditure_type=cls.expenditure_type,
    )


def sort_ledger(transactions: Iterable[Transaction]) -> Tuple[Transaction, ...]:
    """Stable chronological sort; same-day entries keep their given order."""
    return tuple(sorted(transactions, key=lambda t: t.date))


def assemble_ledger(
    records: Sequence[RawTransactionRecord], classifier: Classifier | None = None
) -> Tuple[Transaction, ...]:
    """Turn committed records (in commit order) into the final ledger.

    Raises ``NoTransactionsFoundError`` when nothing survives, since an empty
    result would be indistinguishable from a statement with no activity.
    """
    classifier = classifier or Classifier()
    transactions: List[Transaction] = []
    for record in records:
        if _is_degenerate(record):
            logger.debug("Dropping zero-amount record dated %s", record.date)
            continue
        transactions.append(build_transaction(record, classifier))
    if not transactions:
        raise NoTransactionsFoundError()
    ledger = sort_ledger(transactions)
    logger.info(
        "Assembled ledger: %d transaction(s) from %s to %s",
        len(ledger),
        ledger[0].date,
        ledger[-1].date,
    )
    return ledger


# ---------------- Post-extraction helpers ---------------- #
def reassign_project(
    transactions: Sequence[Transaction], transaction_id: UUID, project: str | None
) -> Tuple[Transaction, ...]:
    """Return a copy of the ledger with one transaction moved to ``project``."""
    out: List[Transaction] = []
    found = False
    for t in transactions:
        if t.id == transaction_id:
            t = t.model_copy(update={"project": project or None})
            found = True
        out.append(t)
    if not found:
        raise KeyError(transaction_id)
    return tuple(out)


def find_balance_mismatches(
    transactions: Sequence[Transaction], tolerance: float = 0.01
) -> list[dict]:
    """Find rows whose stated balance differs from previous balance + amount.

    Diagnostic only: the ledger itself is never adjusted.
    """
    mismatches: list[dict] = []
    last_balance: Optional[float] = None
    for t in transactions:
        if t.balance is None:
            continue
        if last_balance is not None:
            expected = round(last_balance + t.amount, 2)
            provided = round(t.balance, 2)
            if abs(expected - provided) > tolerance:
                mismatches.append(
                    {
                        "id": t.id,
                        "date": t.date,
                        "description": t.description,
                        "amount": t.amount,
                        "prev_balance": last_balance,
                        "expected_balance": expected,
                        "provided_balance": provided,
                        "delta": round(provided - expected, 2),
                    }
                )
        last_balance = t.balance
    if mismatches:
        logger.warning("Found %d stated-balance mismatch(es)", len(mismatches))
    return mismatches


__all__ = [
    "Transaction",
    "build_transaction",
    "sort_ledger",
    "assemble_ledger",
    "reassign_project",
    "find_balance_mismatches",
]
