"""Parent-side helper that drives a sidecar subprocess."""

from __future__ import annotations

import itertools
import logging
import subprocess
import sys
from typing import Any, Dict, List, Optional, Sequence

from .errors import FramingError, RequestError
from .framing import END_OF_STREAM, MessageFramer
from .models import Record


LOGGER = logging.getLogger(__name__)


class SidecarClient:
    """Spawn the sidecar and exchange framed requests with it.

    Intended to be used as a context manager; closing the client closes the
    child's stdin, which is the sidecar's shutdown signal.

    Parameters
    ----------
    args:
        Extra command-line arguments passed to ``python -m ja_tokenizer_sidecar``.
    python:
        Interpreter used to start the child. Defaults to ``sys.executable``.
    """

    def __init__(self, args: Sequence[str] = (), python: Optional[str] = None) -> None:
        command = [python or sys.executable, "-m", "ja_tokenizer_sidecar", *args]
        LOGGER.info("event=spawn status=starting command=%s", " ".join(command))
        self._proc = subprocess.Popen(
            command,
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE,
        )
        self._framer = MessageFramer(self._proc.stdout, self._proc.stdin)
        self._sequence = itertools.count()

    def __enter__(self) -> "SidecarClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def request(self, action: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """Send one request and return the ``data`` of its response."""

        sequence = next(self._sequence)
        message: Dict[str, Any] = {"action": action, "sequence": sequence}
        if params is not None:
            message["params"] = params
        self._framer.send(message)
        response = self._framer.receive()
        if response is END_OF_STREAM:
            raise FramingError(f"sidecar exited with status {self._proc.poll()}")
        if response.get("sequence") != sequence:
            raise FramingError(
                f"response sequence {response.get('sequence')!r} != {sequence!r}"
            )
        if "error" in response:
            error = response["error"]
            raise RequestError(error.get("code", "unknown"), error.get("message", ""))
        return response["data"]

    def get_version(self) -> int:
        return self.request("get_version")["version"]

    def parse_text(self, text: str) -> List[Record]:
        return self.request("parse_text", {"text": text})

    def close(self, timeout: float = 5.0) -> int:
        """Close the child's stdin and wait for it to exit."""

        if self._proc.stdin and not self._proc.stdin.closed:
            self._proc.stdin.close()
        returncode = self._proc.wait(timeout=timeout)
        if self._proc.stdout:
            self._proc.stdout.close()
        LOGGER.info("event=spawn status=finished returncode=%d", returncode)
        return returncode
