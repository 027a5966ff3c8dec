"""Morphological analyzer backends.

The sidecar only needs one capability from an analyzer: turn a run of text
into an ordered list of :class:`AnalyzerToken`. Two backends implement it:

- :class:`VibratoAnalyzer` loads a (optionally zstd-compressed) vibrato
  dictionary once at construction time.
- :class:`GinzaAnalyzer` wraps a spaCy/GiNZA pipeline, loaded lazily on the
  first call, and renders each token as a dictionary-style feature line.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import List, Optional, Protocol, Union

import spacy
import vibrato
import zstandard
from spacy.language import Language
from spacy.tokens import Token

from .errors import AnalyzerLoadError
from .features import FIELD_SEPARATOR, SUB_FIELD_SEPARATOR, WILDCARD
from .models import AnalyzerToken


LOGGER = logging.getLogger(__name__)

BACKENDS = ("vibrato", "ginza")


class Analyzer(Protocol):
    """Capability interface consumed by the tokenization pipeline."""

    def tokenize(self, text: str) -> List[AnalyzerToken]:
        ...


def read_dictionary(path: Union[str, Path]) -> bytes:
    """Return the raw bytes of a vibrato dictionary.

    Files ending in ``.zst`` are decompressed with zstandard; anything else
    is read as-is.
    """

    path = Path(path)
    try:
        with path.open("rb") as fp:
            if path.suffix != ".zst":
                return fp.read()
            dctx = zstandard.ZstdDecompressor()
            with dctx.stream_reader(fp) as reader:
                return reader.read()
    except (OSError, zstandard.ZstdError) as exc:
        raise AnalyzerLoadError(f"cannot read dictionary {path}: {exc}") from exc


class VibratoAnalyzer:
    """Dictionary-backed analyzer built on vibrato.

    The underlying tokenizer keeps per-call state, so one instance must not
    be shared between concurrent callers.
    """

    def __init__(self, dictionary_path: Union[str, Path], ignore_space: bool = True) -> None:
        self._dictionary_path = str(dictionary_path)
        start = time.perf_counter()
        LOGGER.info("event=load_dictionary status=starting path=%s", self._dictionary_path)
        dict_data = read_dictionary(dictionary_path)
        try:
            self._tokenizer = vibrato.Vibrato(dict_data, ignore_space=ignore_space)
        except Exception as exc:  # noqa: BLE001
            LOGGER.exception(
                "event=load_dictionary status=error path=%s error=%s",
                self._dictionary_path,
                exc.__class__.__name__,
            )
            raise AnalyzerLoadError(
                f"cannot build tokenizer from {self._dictionary_path}: {exc}"
            ) from exc
        elapsed_ms = (time.perf_counter() - start) * 1000.0
        LOGGER.info(
            "event=load_dictionary status=finished path=%s bytes=%d latency_ms=%.2f",
            self._dictionary_path,
            len(dict_data),
            elapsed_ms,
        )

    def tokenize(self, text: str) -> List[AnalyzerToken]:
        return [
            AnalyzerToken(surface=token.surface(), raw_feature=token.feature())
            for token in self._tokenizer.tokenize(text)
        ]


def _feature_value(value: Optional[str]) -> str:
    if not value:
        return WILDCARD
    return value.replace(FIELD_SEPARATOR, "_").replace(SUB_FIELD_SEPARATOR, "_")


class GinzaAnalyzer:
    """Analyzer backed by a spaCy pipeline with a lazy-loaded model."""

    def __init__(self, model_name: str = "ja_ginza_electra") -> None:
        self._model_name = model_name
        self._nlp: Optional[Language] = None

    @property
    def nlp(self) -> Language:
        """Return a lazy-loaded spaCy pipeline instance."""

        if self._nlp is None:
            start = time.perf_counter()
            LOGGER.info("event=load_model status=starting model=%s", self._model_name)
            try:
                self._nlp = spacy.load(self._model_name)
            except Exception as exc:  # noqa: BLE001
                LOGGER.exception(
                    "event=load_model status=error model=%s error=%s",
                    self._model_name,
                    exc.__class__.__name__,
                )
                raise AnalyzerLoadError(
                    f"cannot load spaCy model {self._model_name}: {exc}"
                ) from exc
            finally:
                elapsed_ms = (time.perf_counter() - start) * 1000.0
                LOGGER.info(
                    "event=load_model status=finished model=%s latency_ms=%.2f",
                    self._model_name,
                    elapsed_ms,
                )
        return self._nlp

    def tokenize(self, text: str) -> List[AnalyzerToken]:
        return [
            AnalyzerToken(surface=token.orth_, raw_feature=self.render_feature(token))
            for token in self.nlp(text)
            if not token.is_space
        ]

    @staticmethod
    def render_feature(token: Token) -> str:
        """Render a spaCy token as a twelve sub-field feature line.

        Dashes and commas inside values are replaced so that every value
        occupies exactly one sub-field.
        """

        pos_parts = [part for part in token.tag_.split(SUB_FIELD_SEPARATOR) if part]
        pos_parts = (pos_parts + [WILDCARD] * 4)[:4]

        inflection = (token.morph.get("Inflection") or [""])[0]
        inflection_type, _, inflection_form = inflection.partition(";")
        reading = (token.morph.get("Reading") or [""])[0]

        fields = [_feature_value(part) for part in pos_parts]
        fields.append(_feature_value(inflection_type))
        fields.append(_feature_value(inflection_form))
        fields.append(WILDCARD + SUB_FIELD_SEPARATOR + _feature_value(token.lemma_))
        fields.append(_feature_value(token.orth_))
        fields.append(_feature_value(reading))
        fields.append(_feature_value(token.norm_))
        fields.append(WILDCARD)
        return FIELD_SEPARATOR.join(fields)


def create_analyzer(
    backend: str,
    dictionary_path: Union[str, Path, None] = None,
    model_name: str = "ja_ginza_electra",
) -> Analyzer:
    """Construct the analyzer selected by ``backend``."""

    if backend == "vibrato":
        if dictionary_path is None:
            raise AnalyzerLoadError("the vibrato backend requires a dictionary path")
        return VibratoAnalyzer(dictionary_path)
    if backend == "ginza":
        return GinzaAnalyzer(model_name)
    raise AnalyzerLoadError(f"unknown analyzer backend: {backend!r}")
