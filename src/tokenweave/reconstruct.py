"""Entry point: rebuild source text from a token tree."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from tokenweave.emit import Emitter
from tokenweave.gaps import SpanTracker
from tokenweave.tokens import Node
from tokenweave.walker import TreeWalker, first_start

logger = logging.getLogger(__name__)


def reconstruct(stream: Iterable[Node]) -> str:
    """Return the source text of *stream* with its original whitespace.

    The output begins at the first token, so whitespace before it is not
    reproduced. Raises a ReconstructError subclass on the first node whose
    position data cannot be used; no partial output is returned.
    """
    nodes = tuple(stream)
    start = first_start(nodes)
    if start is None:
        return ""

    emitter = Emitter()
    walker = TreeWalker(SpanTracker(start), emitter)
    walker.walk(nodes)

    logger.debug("reconstructed %d nodes into %d characters", walker.visited, len(emitter))
    return emitter.getvalue()
