"""Message boundary detection for delimiter-less JSON streams.

unixctl peers write JSON objects back to back with nothing in between, and
the stdlib ``json`` module cannot decode incrementally from a socket. The
scanner below tracks bracket depth and string/escape state over raw bytes
to find where one top-level value ends, leaving any following bytes for the
next message. Multi-byte UTF-8 sequences never contain ASCII bytes, so
scanning bytes instead of text is safe.
"""

from __future__ import annotations

from unixctl.exceptions import SerializeError

_WHITESPACE = frozenset(b" \t\r\n")
_OPENERS = frozenset(b"{[")
_CLOSERS = frozenset(b"}]")
_QUOTE = ord('"')
_BACKSLASH = ord("\\")


class JsonValueScanner:
    """Split a byte stream into complete top-level JSON objects or arrays.

    Scanning state is kept between ``feed`` calls, so each byte is examined
    once no matter how the stream is chunked.
    """

    def __init__(self) -> None:
        self._buffer = bytearray()
        self._reset()

    def _reset(self) -> None:
        self._pos = 0
        self._start: int | None = None
        self._depth = 0
        self._in_string = False
        self._escaped = False

    def feed(self, data: bytes) -> None:
        """Append received bytes."""
        self._buffer.extend(data)

    @property
    def has_partial(self) -> bool:
        """Whether part of an unfinished value is buffered."""
        return bool(self._buffer.strip())

    def next_value(self) -> bytes | None:
        """Return the raw bytes of the next complete value, or None if incomplete.

        Raises:
            SerializeError: a value starts with something other than ``{`` or ``[``.
        """
        buf = self._buffer
        while self._pos < len(buf):
            byte = buf[self._pos]
            if self._start is None:
                if byte in _WHITESPACE:
                    self._pos += 1
                    continue
                if byte not in _OPENERS:
                    raise SerializeError(
                        f"expected '{{' or '[' at start of message, got {bytes([byte])!r}"
                    )
                self._start = self._pos

            if self._in_string:
                if self._escaped:
                    self._escaped = False
                elif byte == _BACKSLASH:
                    self._escaped = True
                elif byte == _QUOTE:
                    self._in_string = False
            elif byte == _QUOTE:
                self._in_string = True
            elif byte in _OPENERS:
                self._depth += 1
            elif byte in _CLOSERS:
                self._depth -= 1
                if self._depth == 0:
                    end = self._pos + 1
                    value = bytes(buf[self._start:end])
                    del buf[:end]
                    self._reset()
                    return value
            self._pos += 1
        return None


__all__ = ["JsonValueScanner"]
