"""Reconstruct a chronologically ordered transaction ledger from bank statements."""

from .categorize import Classification, Classifier, ExpenditureType, TransactionType
from .config import ClassifierConfig, EngineConfig, configure_logging, load_config
from .errors import (
    ConfigurationError,
    DocumentUnreadableError,
    NoTransactionsFoundError,
    StatementLedgerError,
)
from .fragments import PositionedFragment
from .ledger import (
    Transaction,
    assemble_ledger,
    find_balance_mismatches,
    reassign_project,
)
from .lines import ReconstructedLine, reconstruct_lines
from .pdf_parser import ParseResult, Strategy, parse_lines
from .statement import aextract_ledger, extract_ledger, parse_bank_statement
from .utils import df_to_records, ledger_to_frame, normalize_amount, parse_date

__all__ = [
    "Classification",
    "Classifier",
    "ClassifierConfig",
    "ConfigurationError",
    "DocumentUnreadableError",
    "EngineConfig",
    "ExpenditureType",
    "NoTransactionsFoundError",
    "ParseResult",
    "PositionedFragment",
    "ReconstructedLine",
    "StatementLedgerError",
    "Strategy",
    "Transaction",
    "TransactionType",
    "aextract_ledger",
    "assemble_ledger",
    "configure_logging",
    "df_to_records",
    "extract_ledger",
    "find_balance_mismatches",
    "ledger_to_frame",
    "load_config",
    "normalize_amount",
    "parse_bank_statement",
    "parse_date",
    "parse_lines",
    "reassign_project",
    "reconstruct_lines",
]
