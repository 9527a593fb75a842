"""Shared fixtures: in-memory pages of positioned fragments.

Statements are described as rows of text; cells within a row are separated by
``" | "`` and laid out left to right. Rows run top to bottom, so each one gets
a lower ``y`` than the previous (``y`` grows upward as in PDF space).
"""

from __future__ import annotations

from typing import Callable, List, Sequence

import pytest

from statement_ledger import ClassifierConfig, Classifier, EngineConfig, PositionedFragment


def build_page(
    rows: Sequence[str], page: int = 0, top: float = 800.0, step: float = 20.0
) -> List[PositionedFragment]:
    frags: List[PositionedFragment] = []
    for r, row in enumerate(rows):
        y = top - r * step
        for c, cell in enumerate(row.split(" | ")):
            frags.append(PositionedFragment(cell, 40.0 + 110.0 * c, y, page))
    return frags


@pytest.fixture
def make_page() -> Callable[..., List[PositionedFragment]]:
    return build_page


@pytest.fixture
def config() -> EngineConfig:
    return EngineConfig()


@pytest.fixture
def classifier() -> Classifier:
    return Classifier(ClassifierConfig())


@pytest.fixture
def fixed_layout_rows() -> List[str]:
    """Two regular seven-line transaction blocks under a month header."""
    return [
        "Account Statement",
        "March 2024",
        "Date & Time | Source/Destination | Transaction Details | Notes | Amount | Balance",
        "15 Mar 2024 | 09:12",
        "PT Codenito Indonesia",
        "Bank Jago",
        "Incoming Transfer",
        "Invoice CODENITO sprint 3",
        "+12.500.000",
        "15.000.000",
        "16 Mar 2024 | 10:00",
        "Budi Santoso",
        "Hostinger",
        "Outgoing Transfer",
        "Hostinger domain renewal",
        "-250.000",
        "14.750.000",
        "Page 1 of 1",
    ]
