"""Round-trip fidelity checks: compare a reconstruction with its source."""

from __future__ import annotations

import difflib
from dataclasses import dataclass

from tokenweave.lexer import tokenize
from tokenweave.reconstruct import reconstruct
from tokenweave.tokens import Position


@dataclass(frozen=True, slots=True)
class Divergence:
    """First place where a reconstruction differs from the expected text."""

    position: Position
    expected_line: str
    actual_line: str


def roundtrip(source: str, filename: str = "<input>") -> str:
    """Tokenize *source* and rebuild it from the token tree."""
    return reconstruct(tokenize(source, filename))


def expected_text(source: str) -> str:
    """The text a faithful reconstruction of *source* reproduces.

    Reconstruction starts at the first token and stops after the last, so
    surrounding whitespace is not part of it.
    """
    return source.strip()


def verify(source: str, filename: str = "<input>") -> Divergence | None:
    """Return the first divergence between *source* and its round trip, if any.

    Positions are relative to ``expected_text(source)``. Comments, tabs,
    carriage returns and trailing spaces are the usual causes of divergence.
    """
    return first_divergence(expected_text(source), roundtrip(source, filename))


def first_divergence(expected: str, actual: str) -> Divergence | None:
    if expected == actual:
        return None

    expected_lines = expected.split("\n")
    actual_lines = actual.split("\n")
    for idx, (exp, act) in enumerate(zip(expected_lines, actual_lines)):
        if exp != act:
            return Divergence(Position(idx + 1, _common_prefix_len(exp, act)), exp, act)

    # Every shared line matches, so one text has extra lines
    idx = min(len(expected_lines), len(actual_lines))
    exp = expected_lines[idx] if idx < len(expected_lines) else ""
    act = actual_lines[idx] if idx < len(actual_lines) else ""
    return Divergence(Position(idx + 1, 0), exp, act)


def unified_diff(expected: str, actual: str, filename: str = "<input>") -> str:
    """Return a unified diff from *expected* to *actual*."""
    diff = "\n".join(
        difflib.unified_diff(
            expected.split("\n"),
            actual.split("\n"),
            fromfile=filename,
            tofile=f"{filename} (reconstructed)",
            lineterm="",
        )
    )
    return diff + "\n" if diff else ""


def _common_prefix_len(a: str, b: str) -> int:
    n = 0
    for x, y in zip(a, b):
        if x != y:
            break
        n += 1
    return n
