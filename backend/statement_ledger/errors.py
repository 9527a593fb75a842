"""Exception types raised by the statement ledger engine."""

from __future__ import annotations


class StatementLedgerError(Exception):
    """Base class for every error surfaced to callers."""


class DocumentUnreadableError(StatementLedgerError):
    """The document decoder could not read the statement at all."""


class NoTransactionsFoundError(StatementLedgerError):
    """A full pass over the document produced an empty ledger."""

    def __init__(self, message: str | None = None):
        super().__init__(
            message
            or "no transactions found; verify this is a supported statement format"
        )


class ConfigurationError(StatementLedgerError):
    """A configuration file or value could not be loaded."""


__all__ = [
    "StatementLedgerError",
    "DocumentUnreadableError",
    "NoTransactionsFoundError",
    "ConfigurationError",
]
