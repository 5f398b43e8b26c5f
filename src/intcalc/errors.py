"""Error types with formatted source context."""

from __future__ import annotations

from enum import Enum

from intcalc.tokens import Span, split_lines


class ErrorKind(Enum):
    """Which rule an evaluation violated."""

    INVALID_CHARACTER = "invalid character"
    UNEXPECTED_TOKEN = "unexpected token"
    TOKEN_MISMATCH = "token mismatch"
    TRAILING_INPUT = "trailing input"
    DEPTH_LIMIT = "depth limit"
    DIVISION_BY_ZERO = "division by zero"
    INTEGER_OVERFLOW = "integer overflow"


class CalcError(Exception):
    """Base for every evaluation failure, with kind, span and source context."""

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        span: Span,
        source: str,
        filename: str = "<expr>",
    ) -> None:
        self.kind = kind
        self.message = message
        self.span = span
        self.source = source
        self.filename = filename
        super().__init__(self.format())

    def format(self, filename: str | None = None) -> str:
        """Render the message, a file:line:col pointer and the offending line.

        Spans produced by the lexer never cross a line break, except the
        zero-width EOF span, so one caret line is always enough.
        """
        if filename is None:
            filename = self.filename
        start, end = self.span.start, self.span.end

        lines = split_lines(self.source)
        text = lines[start.line - 1] if start.line <= len(lines) else ""
        if end.line == start.line:
            width = end.column - start.column
        else:
            width = len(text) - start.column + 1
        marker = " " * (start.column - 1) + "^" * max(1, width)

        num = str(start.line)
        gutter = " " * len(num)
        return "\n".join(
            [
                f"error: {self.message}",
                f"{gutter} --> {filename}:{start.line}:{start.column}",
                f"{gutter} |",
                f"{num} | {text}",
                f"{gutter} | {marker}",
            ]
        )


class LexError(CalcError):
    """Raised on the first character that starts no token."""


class ParseError(CalcError):
    """Raised on the first grammar violation."""


class EvalError(CalcError):
    """Raised on arithmetic failures: division by zero, overflow."""
