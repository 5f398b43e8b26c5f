"""Minimal LSP server for expression files, diagnostics only.

A document holds one expression per line; blank lines are skipped.
"""

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

from intcalc import __version__
from intcalc.errors import CalcError, EvalError
from intcalc.evaluator import EvalOptions, Evaluator
from intcalc.lexer import Lexer, expression_lines

server = LanguageServer("intcalc-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full)

# Trailing tokens on a line are always a mistake in a document
_OPTIONS = EvalOptions(strict=True)


def _diagnostic(exc: CalcError) -> Diagnostic:
    # Arithmetic failures are well-formed input, so they only warn
    severity = DiagnosticSeverity.Warning if isinstance(exc, EvalError) else DiagnosticSeverity.Error
    return Diagnostic(
        range=Range(
            start=Position(line=exc.span.start.line - 1, character=exc.span.start.column - 1),
            end=Position(line=exc.span.end.line - 1, character=exc.span.end.column - 1),
        ),
        message=exc.message,
        severity=severity,
        source="intcalc",
    )


def _validate(ls: LanguageServer, uri: str) -> None:
    """Evaluate every expression line and publish diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    source = doc.source
    filename = uri.rsplit("/", 1)[-1] if "/" in uri else uri
    diagnostics: list[Diagnostic] = []

    for start, end in expression_lines(source):
        try:
            Evaluator(Lexer(source, filename, start, end), _OPTIONS).evaluate()
        except CalcError as exc:
            diagnostics.append(_diagnostic(exc))

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
