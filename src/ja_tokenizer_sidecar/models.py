"""Data models for the tokenizer sidecar."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple


PROTOCOL_VERSION = 1

FEATURE_NAMES: Tuple[str, ...] = (
    "pos",
    "pos2",
    "pos3",
    "pos4",
    "inflection_type",
    "inflection_form",
    "lemma_reading",
    "lemma",
    "expression",
    "reading",
    "expression_base",
    "reading_base",
)

# Record type sent back for ``parse_text``: ``source`` plus named features.
Record = Dict[str, Optional[str]]


class Category(enum.Enum):
    """Character class used to split a line into runs."""

    WORD = "word"
    WHITESPACE = "whitespace"


@dataclass(frozen=True)
class Run:
    """Maximal substring of a line whose characters share one category.

    Attributes
    ----------
    text:
        The substring, never empty.
    category:
        Category shared by every character of ``text``.
    """

    text: str
    category: Category


@dataclass(frozen=True)
class AnalyzerToken:
    """One unit emitted by a morphological analyzer.

    Attributes
    ----------
    surface:
        Surface form as it appears in the analyzed text.
    raw_feature:
        Comma separated feature line produced by the dictionary.
    """

    surface: str
    raw_feature: str


def dummy_record(source: str) -> Record:
    """Return the placeholder record emitted for whitespace runs."""

    record: Record = {"source": source}
    for name in FEATURE_NAMES:
        record[name] = None
    return record


def version_payload() -> Dict[str, Any]:
    return {"version": PROTOCOL_VERSION}
