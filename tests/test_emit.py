"""Test the output buffer."""

import pytest

from tokenweave.emit import Emitter
from tokenweave.errors import EncodingError
from tokenweave.tokens import Position


class TestEmitter:
    def test_empty(self):
        e = Emitter()
        assert e.getvalue() == ""
        assert len(e) == 0

    def test_verbatim(self):
        e = Emitter()
        e.emit('"a\\n"')
        e.emit(" ")
        e.emit("é")
        assert e.getvalue() == '"a\\n" é'
        assert len(e) == 7

    def test_lone_surrogate_rejected(self):
        e = Emitter()
        with pytest.raises(EncodingError) as exc_info:
            e.emit("\ud800", Position(2, 3))
        assert exc_info.value.position == Position(2, 3)
        assert e.getvalue() == ""
