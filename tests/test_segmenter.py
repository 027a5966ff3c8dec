"""Tests for the word/whitespace segmenter."""

import pytest

from ja_tokenizer_sidecar.models import Category, Run
from ja_tokenizer_sidecar.segmenter import categorize, segment


LINES = [
    "",
    "a",
    " ",
    "Hello world",
    "  leading and trailing  ",
    "日本語　のテキスト",
    "tab\tseparated\t\tvalues",
    "\u00a0nbsp\u2009thin",
]


@pytest.mark.parametrize("line", LINES)
def test_runs_reassemble_line(line):
    runs = list(segment(line))
    assert "".join(run.text for run in runs) == line
    assert all(run.text for run in runs)
    for left, right in zip(runs, runs[1:]):
        assert left.category is not right.category


@pytest.mark.parametrize("line", LINES)
def test_run_characters_share_category(line):
    for run in segment(line):
        assert {categorize(char) for char in run.text} == {run.category}


def test_hello_world():
    assert list(segment("Hello world")) == [
        Run("Hello", Category.WORD),
        Run(" ", Category.WHITESPACE),
        Run("world", Category.WORD),
    ]


def test_ideographic_space_is_whitespace():
    assert [run.category for run in segment("東京　大阪")] == [
        Category.WORD,
        Category.WHITESPACE,
        Category.WORD,
    ]


def test_empty_line_yields_nothing():
    assert list(segment("")) == []


def test_segmentation_restarts_per_call():
    first = list(segment("a b"))
    second = list(segment("a b"))
    assert first == second
