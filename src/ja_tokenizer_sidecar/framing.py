"""Length-prefixed JSON framing over a binary duplex stream.

Every message on the wire is a 4-byte unsigned big-endian length followed by
exactly that many bytes of UTF-8 encoded JSON. There is no padding and no
checksum. The peer signals shutdown by closing the stream between messages.
"""

from __future__ import annotations

import json
import logging
import struct
from typing import Any, BinaryIO

from .errors import FramingError


LOGGER = logging.getLogger(__name__)

_LENGTH = struct.Struct(">I")
MAX_PAYLOAD_BYTES = 2**32 - 1


class _EndOfStream:
    """Sentinel type returned by :meth:`MessageFramer.receive` on clean EOF."""

    def __repr__(self) -> str:
        return "END_OF_STREAM"


END_OF_STREAM = _EndOfStream()


def encode_message(value: Any) -> bytes:
    """Serialize ``value`` into a single framed message."""

    try:
        payload = json.dumps(
            value, ensure_ascii=False, separators=(",", ":")
        ).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise FramingError(f"value is not JSON serializable: {exc}") from exc
    if len(payload) > MAX_PAYLOAD_BYTES:
        raise FramingError(
            f"payload of {len(payload)} bytes does not fit a 32-bit length prefix"
        )
    return _LENGTH.pack(len(payload)) + payload


def decode_payload(payload: bytes) -> Any:
    """Decode the body of one framed message."""

    try:
        text = payload.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise FramingError(f"payload is not valid UTF-8: {exc}") from exc
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise FramingError(f"payload is not valid JSON: {exc}") from exc


class MessageFramer:
    """Synchronous reader/writer of framed JSON messages.

    Parameters
    ----------
    reader:
        Binary stream messages are read from (usually ``sys.stdin.buffer``).
    writer:
        Binary stream messages are written to (usually ``sys.stdout.buffer``).
    """

    def __init__(self, reader: BinaryIO, writer: BinaryIO) -> None:
        self._reader = reader
        self._writer = writer

    def _read_exact(self, size: int) -> bytes:
        chunks = []
        remaining = size
        while remaining > 0:
            chunk = self._reader.read(remaining)
            if not chunk:
                break
            chunks.append(chunk)
            remaining -= len(chunk)
        return b"".join(chunks)

    def receive(self) -> Any:
        """Read one message.

        Returns
        -------
        Any
            The decoded JSON value, or ``END_OF_STREAM`` when the stream was
            closed before any byte of a new message arrived.

        Raises
        ------
        FramingError
            On a truncated prefix or payload, invalid UTF-8 or invalid JSON.
        """

        header = self._read_exact(_LENGTH.size)
        if not header:
            return END_OF_STREAM
        if len(header) < _LENGTH.size:
            raise FramingError(
                f"stream ended inside length prefix ({len(header)} of "
                f"{_LENGTH.size} bytes)"
            )
        (length,) = _LENGTH.unpack(header)
        payload = self._read_exact(length)
        if len(payload) < length:
            raise FramingError(
                f"stream ended inside payload ({len(payload)} of {length} bytes)"
            )
        LOGGER.debug("event=receive bytes=%d", length)
        return decode_payload(payload)

    def send(self, value: Any) -> None:
        """Write one message and flush the underlying stream."""

        frame = encode_message(value)
        try:
            self._writer.write(frame)
            self._writer.flush()
        except OSError as exc:
            raise FramingError(f"could not write message: {exc}") from exc
        LOGGER.debug("event=send bytes=%d", len(frame) - _LENGTH.size)
