import pytest

from statement_ledger.categorize import (
    Classifier,
    ExpenditureType,
    TransactionType,
)
from statement_ledger.config import ClassifierConfig


def test_vocabulary_overrides_negative_sign(classifier):
    result = classifier.classify("Incoming Transfer from PT Maju", sign=-1)
    assert result.type is TransactionType.INCOME
    assert result.expenditure_type is None


@pytest.mark.parametrize(
    "description, sign, expected",
    [
        ("Outgoing Transfer", 1, TransactionType.EXPENSE),
        ("Interest credited", -1, TransactionType.INTEREST),
        ("Tax on interest", None, TransactionType.INTEREST),
        ("Withholding Tax", 1, TransactionType.TAX),
        ("Taxi ride", -1, TransactionType.EXPENSE),
        ("Card purchase", 1, TransactionType.INCOME),
        ("Card purchase", -1, TransactionType.EXPENSE),
        ("Card purchase", None, TransactionType.TRANSFER),
        ("", None, TransactionType.TRANSFER),
    ],
)
def test_type_precedence(classifier, description, sign, expected):
    assert classifier.classify_type(description, sign) is expected


def test_project_scans_notes_before_description_before_source(classifier):
    assert (
        classifier.match_project("VPS upgrade", "Codenito retainer", "Watzap")
        == "VPS Infrastructure"
    )
    assert classifier.match_project("", "Codenito retainer", "Watzap") == "Codenito Core"
    assert classifier.match_project("", "", "watzap bot") == "WatZap Project"
    assert classifier.match_project("", "", "") is None


def test_project_keyword_table_order_breaks_ties_within_a_field(classifier):
    # "CLA" precedes "VPS" in the table, and matches as a plain substring.
    assert classifier.match_project("VPS for Claudia", "", "") == "Client CLA"


def test_expenditure_capex_then_opex(classifier):
    assert classifier.categorize_expenditure("New domain", "") is ExpenditureType.CAPEX
    assert (
        classifier.categorize_expenditure("", "Monthly subscription")
        is ExpenditureType.OPEX
    )
    # CAPEX is checked across both fields before OPEX is considered.
    assert (
        classifier.categorize_expenditure("team food", "license renewal")
        is ExpenditureType.CAPEX
    )


def test_unmatched_expense_defaults_to_opex():
    strict = Classifier(ClassifierConfig(capex_keywords=(), opex_keywords=()))
    result = strict.classify("Outgoing Transfer", notes="Office chairs", sign=-1)
    assert result.type is TransactionType.EXPENSE
    assert result.expenditure_type is ExpenditureType.OPEX


def test_expenditure_only_for_expenses(classifier):
    income = classifier.classify("Incoming Transfer", notes="VPS resale", sign=1)
    transfer = classifier.classify("Move funds", notes="VPS", sign=None)
    assert income.expenditure_type is None
    assert transfer.type is TransactionType.TRANSFER
    assert transfer.expenditure_type is None
    assert transfer.project == "VPS Infrastructure"


def test_independent_classifiers_use_their_own_tables():
    a = Classifier(ClassifierConfig(project_keywords={"ALPHA": "Project A"}))
    b = Classifier(ClassifierConfig(project_keywords={"ALPHA": "Project B"}))
    assert a.match_project("alpha launch", "", "") == "Project A"
    assert b.match_project("alpha launch", "", "") == "Project B"
    assert Classifier().match_project("alpha launch", "", "") is None


def test_end_to_end_vps_classification(classifier):
    result = classifier.classify("Outgoing Transfer VPS Renewal", "", "", sign=-1)
    assert result.type is TransactionType.EXPENSE
    assert result.project == "VPS Infrastructure"
    assert result.expenditure_type is ExpenditureType.CAPEX
