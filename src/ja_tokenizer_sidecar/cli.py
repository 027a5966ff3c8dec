"""Process entry point for the tokenizer sidecar."""

from __future__ import annotations

import faulthandler
import logging
import sys
from typing import BinaryIO, Optional, Sequence

from .analyzers import create_analyzer
from .config import SidecarConfig
from .errors import AnalyzerLoadError, SidecarError
from .framing import MessageFramer
from .pipeline import TokenizationPipeline
from .server import SessionDispatcher


LOGGER = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_SESSION_ERROR = 1
EXIT_STARTUP_ERROR = 2


def setup_logging(config: SidecarConfig) -> logging.Handler:
    """Route all log records to the append-only diagnostic file.

    stdout carries the protocol, so nothing is logged to the console.
    """

    handler = logging.FileHandler(config.log_file, mode="a", encoding="utf-8")
    handler.setFormatter(
        logging.Formatter("[%(asctime)s %(levelname)s %(name)s] %(message)s")
    )
    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(getattr(logging, config.log_level.upper(), logging.DEBUG))
    faulthandler.enable(file=handler.stream)
    return handler


def run(
    config: SidecarConfig,
    reader: Optional[BinaryIO] = None,
    writer: Optional[BinaryIO] = None,
) -> int:
    """Build the analyzer and serve one session; return the exit status."""

    reader = reader if reader is not None else sys.stdin.buffer
    writer = writer if writer is not None else sys.stdout.buffer

    LOGGER.info(
        "event=startup status=starting backend=%s strict=%s",
        config.backend,
        config.strict,
    )
    try:
        analyzer = create_analyzer(config.backend, config.dictionary, config.model)
    except AnalyzerLoadError:
        LOGGER.exception("event=startup status=error")
        return EXIT_STARTUP_ERROR

    dispatcher = SessionDispatcher(
        MessageFramer(reader, writer),
        TokenizationPipeline(analyzer),
        strict=config.strict,
    )
    try:
        dispatcher.serve_forever()
    except SidecarError as exc:
        LOGGER.exception("event=session status=error error=%s", exc.__class__.__name__)
        return EXIT_SESSION_ERROR
    return EXIT_OK


def main(argv: Optional[Sequence[str]] = None) -> None:
    config = SidecarConfig.from_args(argv)
    setup_logging(config)
    LOGGER.info("Beginning...")
    sys.exit(run(config))


if __name__ == "__main__":
    main()
