"""Split a line of text into alternating word and whitespace runs."""

from __future__ import annotations

from typing import Iterator

from .models import Category, Run


def categorize(char: str) -> Category:
    """Return the run category of a single character."""

    return Category.WHITESPACE if char.isspace() else Category.WORD


def segment(line: str) -> Iterator[Run]:
    """Yield maximal same-category runs of ``line`` from left to right.

    Joining the ``text`` of every yielded run reproduces ``line`` exactly, no
    run is empty and two consecutive runs never share a category. Each call
    starts a fresh scan.
    """

    start = 0
    current = None
    for index, char in enumerate(line):
        category = categorize(char)
        if current is None:
            current = category
        elif category is not current:
            yield Run(text=line[start:index], category=current)
            start = index
            current = category
    if current is not None:
        yield Run(text=line[start:], category=current)
