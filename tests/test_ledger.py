from datetime import date
from uuid import uuid4

import pytest
from pydantic import ValidationError

from statement_ledger.categorize import ExpenditureType, TransactionType
from statement_ledger.errors import NoTransactionsFoundError
from statement_ledger.ledger import (
    assemble_ledger,
    find_balance_mismatches,
    reassign_project,
    sort_ledger,
)
from statement_ledger.pdf_parser import RawTransactionRecord, Strategy
from statement_ledger.utils import ParsedAmount, df_to_records, ledger_to_frame


def _record(day, amount, description="", notes="", source="", balance=None, sign=None, idx=0):
    return RawTransactionRecord(
        date=date(2024, 1, day),
        amount=ParsedAmount(amount, sign),
        balance=balance,
        description=description,
        source=source,
        destination="",
        notes=notes,
        strategy=Strategy.CONTENT_SNIFFING,
        line_index=idx,
    )


def test_sort_is_chronological_and_stable_for_ties(classifier):
    records = [
        _record(2, -10.0, "a", sign=-1),
        _record(1, -20.0, "b", sign=-1),
        _record(2, -30.0, "c", sign=-1),
        _record(1, -40.0, "d", sign=-1),
    ]
    ledger = assemble_ledger(records, classifier)
    assert [t.description for t in ledger] == ["b", "d", "a", "c"]
    assert sort_ledger(ledger) == ledger


def test_each_transaction_gets_a_unique_id(classifier):
    ledger = assemble_ledger([_record(1, 5.0, sign=1), _record(1, 5.0, sign=1)], classifier)
    assert len({t.id for t in ledger}) == 2


def test_empty_input_is_a_distinct_failure(classifier):
    with pytest.raises(NoTransactionsFoundError, match="no transactions found"):
        assemble_ledger([], classifier)


def test_zero_amount_without_sign_is_dropped(classifier):
    with pytest.raises(NoTransactionsFoundError):
        assemble_ledger([_record(1, 0.0)], classifier)
    ledger = assemble_ledger([_record(1, 0.0), _record(2, 0.0, sign=1)], classifier)
    assert len(ledger) == 1
    assert ledger[0].date == date(2024, 1, 2)


def test_amount_sign_follows_resolved_type(classifier):
    ledger = assemble_ledger(
        [
            _record(1, -100.0, "Incoming Transfer", sign=-1),
            _record(2, 200.0, "Outgoing Transfer"),
            _record(3, 300.0, "Interest"),
            _record(4, -5.0, "Account fee", sign=-1),
        ],
        classifier,
    )
    income, expense, interest, fee = ledger
    assert income.type is TransactionType.INCOME and income.amount == 100.0
    assert expense.type is TransactionType.EXPENSE and expense.amount == -200.0
    assert interest.type is TransactionType.INTEREST and interest.amount == 300.0
    assert fee.type is TransactionType.EXPENSE and fee.amount == -5.0
    for t in ledger:
        assert (t.expenditure_type is not None) == (t.type is TransactionType.EXPENSE)


def test_balance_is_carried_not_computed(classifier):
    ledger = assemble_ledger(
        [_record(1, -100.0, sign=-1, balance=42.0), _record(2, -1.0, sign=-1)],
        classifier,
    )
    assert ledger[0].balance == 42.0
    assert ledger[1].balance is None


def test_transactions_are_immutable(classifier):
    (t,) = assemble_ledger([_record(1, -1.0, sign=-1)], classifier)
    with pytest.raises(ValidationError):
        t.project = "Other"


def test_reassign_project_returns_new_ledger(classifier):
    ledger = assemble_ledger(
        [_record(1, -1.0, "Outgoing Transfer VPS", sign=-1), _record(2, 1.0, sign=1)],
        classifier,
    )
    target = ledger[1]
    updated = reassign_project(ledger, target.id, "Redesign Project")
    assert updated[1].project == "Redesign Project"
    assert updated[1].id == target.id
    assert ledger[1].project is None
    assert updated[0] == ledger[0]
    cleared = reassign_project(updated, target.id, "")
    assert cleared[1].project is None
    with pytest.raises(KeyError):
        reassign_project(ledger, uuid4(), "X")


def test_find_balance_mismatches(classifier):
    ledger = assemble_ledger(
        [
            _record(1, 1000.0, sign=1, balance=1000.0),
            _record(2, -100.0, sign=-1, balance=900.0),
            _record(3, -50.0, sign=-1),
            _record(4, -100.0, sign=-1, balance=750.0),
        ],
        classifier,
    )
    mismatches = find_balance_mismatches(ledger)
    assert len(mismatches) == 1
    m = mismatches[0]
    assert m["date"] == date(2024, 1, 4)
    assert m["expected_balance"] == 800.0
    assert m["provided_balance"] == 750.0
    assert m["delta"] == -50.0
    # Stated figures are reported, never rewritten.
    assert ledger[3].balance == 750.0


def test_frame_and_records_export(classifier):
    ledger = assemble_ledger(
        [
            _record(1, -500000.0, "Outgoing Transfer VPS Renewal", sign=-1),
            _record(2, 10.0, "Incoming Transfer", sign=1, balance=10.0),
        ],
        classifier,
    )
    df = ledger_to_frame(ledger)
    assert list(df["type"]) == ["expense", "income"]
    records = df_to_records(df)
    assert records[0]["date"] == "2024-01-01"
    assert records[0]["id"] == str(ledger[0].id)
    assert records[0]["expenditure_type"] == ExpenditureType.CAPEX.value
    assert records[0]["balance"] is None
    assert records[1]["expenditure_type"] is None
    assert records[1]["balance"] == 10.0
    assert df_to_records(ledger_to_frame([])) == []


def test_negative_tax_keeps_sign_without_expenditure_type(classifier):
    (tax,) = assemble_ledger([_record(1, -15.0, "Withholding Tax", sign=-1)], classifier)
    assert tax.type is TransactionType.TAX
    assert tax.amount == -15.0
    assert tax.expenditure_type is None
