"""Minimal LSP server for tokenweave: round-trip diagnostics only."""

from __future__ import annotations

from lsprotocol.types import (
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    Position,
    PublishDiagnosticsParams,
    Range,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer

from tokenweave import tokens
from tokenweave.errors import LexError, ReconstructError
from tokenweave.verify import expected_text, first_divergence, roundtrip

server = LanguageServer(
    "tokenweave-lsp", "0.1.0", text_document_sync_kind=TextDocumentSyncKind.Full
)


def _leading_offset(source: str) -> tokens.Position:
    """Where expected_text(source) begins within source."""
    stripped = source[: len(source) - len(source.lstrip())]
    line = 1 + stripped.count("\n")
    column = len(stripped) - (stripped.rfind("\n") + 1)
    return tokens.Position(line, column)


def _diagnostic(
    pos: tokens.Position, message: str, severity: DiagnosticSeverity
) -> Diagnostic:
    # Lines are 1-based, columns already 0-based
    line = pos.line - 1
    return Diagnostic(
        range=Range(
            start=Position(line=line, character=pos.column),
            end=Position(line=line, character=pos.column + 1),
        ),
        message=message,
        severity=severity,
        source="tokenweave",
    )


def _validate(ls: LanguageServer, uri: str) -> None:
    """Round-trip the document and publish diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    source = doc.source
    filename = uri.rsplit("/", 1)[-1] if "/" in uri else uri
    diagnostics: list[Diagnostic] = []

    try:
        actual = roundtrip(source, filename)
    except LexError as exc:
        diagnostics.append(_diagnostic(exc.position, exc.message, DiagnosticSeverity.Error))
    except ReconstructError as exc:
        pos = exc.position or tokens.Position(1, 0)
        diagnostics.append(_diagnostic(pos, exc.message, DiagnosticSeverity.Error))
    else:
        divergence = first_divergence(expected_text(source), actual)
        if divergence is not None:
            # Map back from stripped-text coordinates to document coordinates
            offset = _leading_offset(source)
            pos = divergence.position
            if pos.line == 1:
                pos = tokens.Position(offset.line, offset.column + pos.column)
            else:
                pos = tokens.Position(offset.line + pos.line - 1, pos.column)
            diagnostics.append(
                _diagnostic(
                    pos,
                    "reconstruction diverges from source",
                    DiagnosticSeverity.Information,
                )
            )

    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


def main() -> None:
    server.start_io()
