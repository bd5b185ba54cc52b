"""Line buffering for streamed process output."""

from __future__ import annotations

import codecs

NEWLINE = "\n"


class LineBuffer:
    """Accumulate streamed chunks and hand back complete newline-terminated lines.

    Byte chunks go through an incremental decoder, so a multi-byte character split
    across two chunks is decoded once both halves have arrived.
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
        self._current = ""

    def append(self, chunk: bytes | str) -> list[str]:
        if isinstance(chunk, bytes):
            chunk = self._decoder.decode(chunk)
        self._current += chunk

        lines: list[str] = []
        while True:
            newline_index = self._current.find(NEWLINE)
            if newline_index == -1:
                break
            lines.append(self._current[: newline_index + 1])
            self._current = self._current[newline_index + 1 :]
        return lines

    def flush(self) -> str | None:
        """Return whatever partial line is left and reset the buffer."""

        self._current += self._decoder.decode(b"", final=True)
        remainder, self._current = self._current, ""
        return remainder or None
