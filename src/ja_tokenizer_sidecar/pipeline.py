"""Tokenization pipeline: segmentation, analysis and feature mapping."""

from __future__ import annotations

import logging
import time
from typing import List

from .analyzers import Analyzer
from .features import map_token
from .models import Category, Record, Run, dummy_record
from .segmenter import segment


LOGGER = logging.getLogger(__name__)


class TokenizationPipeline:
    """Turn text into an ordered list of word and dummy records.

    The pipeline owns no state besides the analyzer it is given. Lines are
    handled top to bottom and runs in segmentation order; records are never
    reordered or deduplicated.
    """

    def __init__(self, analyzer: Analyzer) -> None:
        self._analyzer = analyzer

    def parse_text(self, text: str) -> List[Record]:
        """Process ``text`` and return the records of all its lines."""

        start = time.perf_counter()
        LOGGER.info("event=parse_text status=starting text_len=%d", len(text))
        records: List[Record] = []
        lines = text.splitlines()
        for line in lines:
            for run in segment(line):
                records.extend(self._process_run(run))
        elapsed_ms = (time.perf_counter() - start) * 1000.0
        LOGGER.info(
            "event=parse_text status=finished lines=%d records=%d latency_ms=%.2f",
            len(lines),
            len(records),
            elapsed_ms,
        )
        return records

    def _process_run(self, run: Run) -> List[Record]:
        if run.category is Category.WHITESPACE or not run.text.strip():
            return [dummy_record(run.text)]
        try:
            tokens = self._analyzer.tokenize(run.text)
        except Exception as exc:  # noqa: BLE001
            LOGGER.exception(
                "event=tokenize status=error run_len=%d error=%s",
                len(run.text),
                exc.__class__.__name__,
            )
            raise
        return [map_token(token) for token in tokens]
