"""Request dispatching for the sidecar session."""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping

from .errors import RequestError
from .framing import END_OF_STREAM, MessageFramer
from .models import version_payload
from .pipeline import TokenizationPipeline


LOGGER = logging.getLogger(__name__)

ACTION_GET_VERSION = "get_version"
ACTION_PARSE_TEXT = "parse_text"


class SessionDispatcher:
    """Answer framed requests one at a time until the peer closes the stream.

    Parameters
    ----------
    framer:
        Transport used to receive requests and send responses.
    pipeline:
        Tokenization pipeline holding the session's analyzer.
    strict:
        When true, a malformed request raises :class:`RequestError` and ends
        the session. Otherwise an error response is sent and serving goes on.
    """

    def __init__(
        self,
        framer: MessageFramer,
        pipeline: TokenizationPipeline,
        strict: bool = False,
    ) -> None:
        self._framer = framer
        self._pipeline = pipeline
        self._strict = strict

    def serve_forever(self) -> int:
        """Serve requests until end of stream and return how many were answered."""

        LOGGER.info("event=session status=starting strict=%s", self._strict)
        answered = 0
        while True:
            message = self._framer.receive()
            if message is END_OF_STREAM:
                break
            LOGGER.debug("event=receive message=%s", message)
            self._framer.send(self.handle(message))
            answered += 1
        LOGGER.info("event=session status=closed answered=%d", answered)
        return answered

    def handle(self, message: Any) -> Dict[str, Any]:
        """Build the response for one decoded request."""

        sequence = message.get("sequence") if isinstance(message, Mapping) else None
        try:
            return {"sequence": sequence, "data": self._dispatch(message)}
        except RequestError as exc:
            if self._strict:
                LOGGER.error("event=dispatch status=error code=%s message=%s", exc.code, exc)
                raise
            LOGGER.warning("event=dispatch status=rejected code=%s message=%s", exc.code, exc)
            return {
                "sequence": sequence,
                "error": {"code": exc.code, "message": exc.message},
            }

    def _dispatch(self, message: Any) -> Any:
        if not isinstance(message, Mapping):
            raise RequestError(
                "invalid_request",
                f"request must be a JSON object, got {type(message).__name__}",
            )
        action = message.get("action")
        if action == ACTION_GET_VERSION:
            return version_payload()
        if action == ACTION_PARSE_TEXT:
            return self._pipeline.parse_text(_require_text(message))
        raise RequestError("unknown_action", f"unknown action: {action!r}")


def _require_text(message: Mapping[str, Any]) -> str:
    params = message.get("params")
    if not isinstance(params, Mapping):
        raise RequestError("invalid_params", "parse_text requires a 'params' object")
    text = params.get("text")
    if not isinstance(text, str):
        raise RequestError("invalid_params", "parse_text requires a string 'params.text'")
    return text
