"""Shared fixtures for the sidecar tests."""

from typing import Dict, List

import pytest

from ja_tokenizer_sidecar.models import AnalyzerToken
from ja_tokenizer_sidecar.pipeline import TokenizationPipeline


class FakeAnalyzer:
    """In-memory analyzer that records every call.

    Known inputs return the tokens registered in ``table``; anything else
    becomes a single proper-noun token.
    """

    def __init__(self, table: Dict[str, List[AnalyzerToken]] = None):
        self.table = table or {}
        self.calls: List[str] = []

    def tokenize(self, text):
        self.calls.append(text)
        if text in self.table:
            return list(self.table[text])
        return [AnalyzerToken(text, f"名詞,固有名詞,*,*,*,*,*-{text}")]


@pytest.fixture
def analyzer():
    return FakeAnalyzer(
        {
            "今日は": [
                AnalyzerToken("今日", "名詞,副詞可能,*,*,*,*,きょう-今日"),
                AnalyzerToken("は", "助詞,係助詞,*,*,*,*,は-は"),
            ],
            "。": [],
        }
    )


@pytest.fixture
def pipeline(analyzer):
    return TokenizationPipeline(analyzer)
