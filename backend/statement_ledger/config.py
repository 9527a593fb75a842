"""Static, swappable configuration for the extraction engine.

Keyword tables and tuning constants live in immutable pydantic models that are
passed into the components which need them. Nothing here is module-level
mutable state, so independent parses (or tests) can run side by side with
different settings.

Configuration via environment variables:
  STATEMENT_LEDGER_CONFIG=path.json  -> JSON file overriding any field below
  STATEMENT_LEDGER_LOG_LEVEL=DEBUG   -> level used by ``configure_logging``

File format (every key optional):
    {
      "line_tolerance": 3.0,
      "min_note_length": 3,
      "classifier": {
        "project_keywords": {"VPS": "VPS Infrastructure"},
        "capex_keywords": ["VPS", "DOMAIN"],
        "opex_keywords": ["SUBSCRIPTION"]
      }
    }
"""

from __future__ import annotations

import json
import logging
import os
from typing import Dict, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigurationError

CONFIG_ENV_VAR = "STATEMENT_LEDGER_CONFIG"
LOG_LEVEL_ENV_VAR = "STATEMENT_LEDGER_LOG_LEVEL"

DEFAULT_PROJECT_KEYWORDS: Dict[str, str] = {
    "CLA": "Client CLA",
    "UI UX": "UI/UX Design",
    "REDESIGN": "Redesign Project",
    "VPS": "VPS Infrastructure",
    "CODENITO": "Codenito Core",
    "GOOGLE WORKSPACE": "Workspace",
    "WATZAP": "WatZap Project",
    "HOSTINGER": "Web Hosting",
}
DEFAULT_CAPEX_KEYWORDS: Tuple[str, ...] = ("VPS", "DOMAIN", "LICENSE", "HOSTING")
DEFAULT_OPEX_KEYWORDS: Tuple[str, ...] = (
    "WORKSPACE",
    "SUBSCRIPTION",
    "SALARY",
    "JOKI",
    "TRANSPORT",
    "FOOD",
)


class ClassifierConfig(BaseModel):
    """Keyword tables used by the classifier (insertion order is precedence)."""

    model_config = ConfigDict(frozen=True)

    project_keywords: Dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_PROJECT_KEYWORDS)
    )
    capex_keywords: Tuple[str, ...] = DEFAULT_CAPEX_KEYWORDS
    opex_keywords: Tuple[str, ...] = DEFAULT_OPEX_KEYWORDS


class EngineConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    # Vertical distance (points) under which two fragments share a line.
    line_tolerance: float = Field(3.0, gt=0)
    # Content sniffing only takes a notes line longer than this.
    min_note_length: int = Field(3, ge=0)
    classifier: ClassifierConfig = Field(default_factory=ClassifierConfig)


def load_config(path: str | None = None) -> EngineConfig:
    """Load configuration from ``path`` or ``$STATEMENT_LEDGER_CONFIG``.

    With neither set the defaults are returned. A named file that is missing,
    is not JSON, or does not validate raises ``ConfigurationError``.
    """
    use_path = path or os.environ.get(CONFIG_ENV_VAR)
    if not use_path:
        return EngineConfig()
    try:
        with open(use_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Cannot read config file {use_path!r}: {e}") from e
    try:
        return EngineConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid config file {use_path!r}: {e}") from e


def configure_logging(level: int | str | None = None) -> None:
    """Configure root logging for host processes that embed the engine.

    Library modules only create loggers; calling this is left to entrypoints.
    """
    if level is None:
        level = os.getenv(LOG_LEVEL_ENV_VAR, "INFO")
    if isinstance(level, str):
        level = level.strip().upper()
    logging.basicConfig(level=level)


__all__ = [
    "ClassifierConfig",
    "EngineConfig",
    "load_config",
    "configure_logging",
    "DEFAULT_PROJECT_KEYWORDS",
    "DEFAULT_CAPEX_KEYWORDS",
    "DEFAULT_OPEX_KEYWORDS",
]
