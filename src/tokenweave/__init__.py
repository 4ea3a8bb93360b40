"""Whitespace-faithful source reconstruction from token trees."""

from __future__ import annotations

from tokenweave.reconstruct import reconstruct

__version__ = "0.1.0"

__all__ = ["reconstruct", "roundtrip"]


def roundtrip(source: str, filename: str = "<input>") -> str:
    """Tokenize source text and rebuild it from the token tree."""
    from tokenweave.verify import roundtrip as _roundtrip

    return _roundtrip(source, filename)
