"""Runtime configuration of the sidecar process."""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass
from typing import Optional, Sequence

from .analyzers import BACKENDS


DICTIONARY_ENV = "JA_TOKENIZER_DICT"
DEFAULT_DICTIONARY = "system.dic.zst"
DEFAULT_MODEL = "ja_ginza_electra"
DEFAULT_LOG_FILE = "output.log"
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@dataclass
class SidecarConfig:
    """Settings resolved from the command line and environment.

    Attributes
    ----------
    backend:
        Analyzer backend name, one of ``BACKENDS``.
    dictionary:
        Path of the vibrato dictionary, compressed with zstd or not.
    model:
        spaCy model name used by the ``ginza`` backend.
    log_file:
        Diagnostic log, opened in append mode for the process lifetime.
    log_level:
        Name of the logging level.
    strict:
        Abort the session on malformed requests instead of replying with an
        error object.
    """

    backend: str = "vibrato"
    dictionary: str = DEFAULT_DICTIONARY
    model: str = DEFAULT_MODEL
    log_file: str = DEFAULT_LOG_FILE
    log_level: str = "DEBUG"
    strict: bool = False

    @classmethod
    def from_args(cls, argv: Optional[Sequence[str]] = None) -> "SidecarConfig":
        args = build_parser().parse_args(argv)
        return cls(
            backend=args.backend,
            dictionary=args.dictionary,
            model=args.model,
            log_file=args.log_file,
            log_level=args.log_level,
            strict=args.strict,
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Japanese tokenizer sidecar speaking length-prefixed JSON on stdio"
    )
    parser.add_argument(
        "--backend",
        default="vibrato",
        choices=BACKENDS,
        help="Morphological analyzer backend",
    )
    parser.add_argument(
        "--dictionary",
        default=os.environ.get(DICTIONARY_ENV, DEFAULT_DICTIONARY),
        help=f"vibrato dictionary file, .zst compressed or raw (env {DICTIONARY_ENV})",
    )
    parser.add_argument(
        "--model",
        default=DEFAULT_MODEL,
        help="spaCy model for the ginza backend (e.g., ja_ginza_electra)",
    )
    parser.add_argument(
        "--log-file",
        default=DEFAULT_LOG_FILE,
        help="Append-only diagnostic log file",
    )
    parser.add_argument(
        "--log-level",
        default="DEBUG",
        choices=LOG_LEVELS,
        help="Logging level",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Terminate on malformed requests instead of replying with an error",
    )
    return parser
