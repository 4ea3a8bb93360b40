"""Append-only output buffer."""

from __future__ import annotations

from tokenweave.errors import EncodingError
from tokenweave.tokens import Position


class Emitter:
    """Collects output pieces and joins them once at the end."""

    def __init__(self) -> None:
        self._parts: list[str] = []
        self._size = 0

    def emit(self, text: str, position: Position | None = None) -> None:
        """Append *text* verbatim.

        *position* only locates the text in error messages.
        """
        try:
            text.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise EncodingError(
                f"text {text!r} is not valid UTF-8: {exc.reason}", position
            ) from exc
        self._parts.append(text)
        self._size += len(text)

    def __len__(self) -> int:
        return self._size

    def getvalue(self) -> str:
        return "".join(self._parts)
