"""Heuristic transaction classification.

Three independent decisions are made for every transaction:

  1. Type          income / expense / transfer / interest / tax
  2. Project       keyword -> project-name table (first hit wins)
  3. Expenditure   CAPEX / OPEX, for expenses only (default OPEX)

Precedence for the type: detail vocabulary ("Incoming Transfer", "Outgoing
Transfer", "Interest", "Tax") beats the amount's sign; the sign beats the
``transfer`` fallback used when nothing else is known.

Keyword tables come from an immutable ``ClassifierConfig`` handed to the
``Classifier`` at construction; matching is a case-insensitive substring test.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import List, NamedTuple, Optional, Pattern, Tuple

from .config import ClassifierConfig


class TransactionType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"
    TRANSFER = "transfer"
    INTEREST = "interest"
    TAX = "tax"


class ExpenditureType(str, Enum):
    CAPEX = "CAPEX"
    OPEX = "OPEX"


class TypeRule(NamedTuple):
    type: TransactionType
    pattern: Pattern


# Evaluated top to bottom; first match wins.
TYPE_RULES: List[TypeRule] = [
    TypeRule(TransactionType.INCOME, re.compile(r"\bINCOMING\s+TRANSFER\b", re.I)),
    TypeRule(TransactionType.EXPENSE, re.compile(r"\bOUTGOING\s+TRANSFER\b", re.I)),
    TypeRule(TransactionType.INTEREST, re.compile(r"\bINTEREST\b", re.I)),
    TypeRule(TransactionType.TAX, re.compile(r"\bTAX\b", re.I)),
]


class Classification(NamedTuple):
    type: TransactionType
    project: Optional[str]
    expenditure_type: Optional[ExpenditureType]


def _upper(text: str | None) -> str:
    return text.upper() if isinstance(text, str) else ""


class Classifier:
    def __init__(self, config: ClassifierConfig | None = None):
        self.config = config or ClassifierConfig()
        self._projects: Tuple[Tuple[str, str], ...] = tuple(
            (kw.upper(), name)
            for kw, name in self.config.project_keywords.items()
            if kw.strip()
        )
        self._capex = tuple(k.upper() for k in self.config.capex_keywords if k.strip())
        self._opex = tuple(k.upper() for k in self.config.opex_keywords if k.strip())

    def classify_type(
        self, description: str, sign: int | None = None
    ) -> TransactionType:
        for rule in TYPE_RULES:
            if rule.pattern.search(description or ""):
                return rule.type
        if sign is not None and sign > 0:
            return TransactionType.INCOME
        if sign is not None and sign < 0:
            return TransactionType.EXPENSE
        return TransactionType.TRANSFER

    def match_project(self, notes: str, description: str, source: str) -> str | None:
        """Scan notes, then description, then source; first keyword hit wins."""
        for field in (notes, description, source):
            up = _upper(field)
            if not up:
                continue
            for keyword, project in self._projects:
                if keyword in up:
                    return project
        return None

    def categorize_expenditure(self, notes: str, description: str) -> ExpenditureType:
        fields = [_upper(notes), _upper(description)]
        for keywords, category in (
            (self._capex, ExpenditureType.CAPEX),
            (self._opex, ExpenditureType.OPEX),
        ):
            for up in fields:
                if any(k in up for k in keywords):
                    return category
        # Every expense carries an expenditure type.
        return ExpenditureType.OPEX

    def classify(
        self,
        description: str,
        notes: str = "",
        source: str = "",
        sign: int | None = None,
    ) -> Classification:
        """Classify one transaction.

        ``sign`` is +1/-1 when the amount carried sign information (explicit
        prefix or a negative value) and None otherwise.
        """
        tx_type = self.classify_type(description, sign)
        project = self.match_project(notes, description, source)
        expenditure = (
            self.categorize_expenditure(notes, description)
            if tx_type is TransactionType.EXPENSE
            else None
        )
        return Classification(tx_type, project, expenditure)


__all__ = [
    "TransactionType",
    "ExpenditureType",
    "Classification",
    "Classifier",
    "TYPE_RULES",
]
