"""Error types with formatted source context."""

from __future__ import annotations

from tokenweave.tokens import Position


def _snippet(message: str, position: Position, source: str, filename: str) -> str:
    # Only "\n" breaks lines, as in the lexer
    lines = source.split("\n")
    line_idx = position.line - 1
    col = position.column

    # Build the source line (strip a CRLF remainder for display)
    if 0 <= line_idx < len(lines):
        source_line = lines[line_idx].rstrip("\r")
    else:
        source_line = ""

    # Underline at least 1 char, but stay within line
    underline_len = max(1, min(2, len(source_line) - col))

    pad = " " * col
    carets = "^" * underline_len

    line_num = str(position.line)
    gutter_width = len(line_num) + 1

    blank_gutter = " " * gutter_width + "|"
    line_gutter = f"{line_num:>{gutter_width - 1}} |"

    return (
        f"error: {message}\n"
        f"{' ' * gutter_width}--> {filename}:{position.line}:{col}\n"
        f"{blank_gutter}\n"
        f"{line_gutter} {source_line}\n"
        f"{blank_gutter} {pad}{carets}"
    )


class LexError(Exception):
    """Raised on the first tokenizing error, with position and source context."""

    def __init__(self, message: str, position: Position, source: str) -> None:
        self.message = message
        self.position = position
        self.source = source
        super().__init__(self.format())

    def format(self, filename: str = "<input>") -> str:
        return _snippet(self.message, self.position, self.source, filename)


class ReconstructError(Exception):
    """Base class for failures while rebuilding source text from a token tree.

    ``position`` is where the walk stopped, when known. ``source`` is only
    available when the caller attaches it (see ``with_source``); the core
    never sees the original text.
    """

    def __init__(
        self,
        message: str,
        position: Position | None = None,
        source: str | None = None,
    ) -> None:
        self.message = message
        self.position = position
        self.source = source
        super().__init__(self.format())

    def format(self, filename: str = "<input>") -> str:
        if self.position is None:
            return f"error: {self.message}"
        if self.source is None:
            return (
                f"error: {self.message}\n"
                f"  --> {filename}:{self.position.line}:{self.position.column}"
            )
        return _snippet(self.message, self.position, self.source, filename)

    def with_source(self, source: str) -> ReconstructError:
        """Return a copy of this error carrying *source* for context display."""
        return type(self)(self.message, self.position, source)


class NoSpanInfo(ReconstructError):
    """A token or delimiter has no usable position metadata."""


class SpanInconsistent(ReconstructError):
    """Positions violate document order."""


class EncodingError(ReconstructError):
    """A token's text cannot be represented as UTF-8."""
