"""Exception types raised by the tokenizer sidecar."""

from __future__ import annotations


class SidecarError(Exception):
    """Base class for all sidecar errors."""


class FramingError(SidecarError):
    """A message could not be read from or written to the byte stream."""


class AnalyzerLoadError(SidecarError):
    """The morphological analyzer could not be constructed at startup."""


class RequestError(SidecarError):
    """A decoded request does not have the expected shape.

    Attributes
    ----------
    code:
        Short machine-readable error code sent back to the peer.
    """

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
