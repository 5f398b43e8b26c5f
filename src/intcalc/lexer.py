"""Expression lexer: produces tokens one at a time, on demand."""

from __future__ import annotations

from collections.abc import Iterator

from intcalc.errors import ErrorKind, LexError
from intcalc.tokens import (
    LINE_BREAK,
    SINGLE_CHAR_TOKENS,
    Position,
    Span,
    Token,
    TokenType,
    is_digit,
)


class Lexer:
    """Pull tokens from expression source text.

    The cursor only moves forward and always rests between tokens. Once the
    input is exhausted every call to next_token() returns EOF.

    *start* and *end* restrict scanning to a slice of *source* (one line of
    a larger document, say) while positions stay relative to the whole text.
    """

    def __init__(
        self,
        source: str,
        filename: str = "<expr>",
        start: int = 0,
        end: int | None = None,
    ) -> None:
        self._source = source
        self._filename = filename
        self._pos = start
        self._end = len(source) if end is None else min(end, len(source))
        self._line = 1
        line_start = 0
        for m in LINE_BREAK.finditer(source, 0, start):
            self._line += 1
            line_start = m.end()
        self._col = start - line_start + 1

    @property
    def source(self) -> str:
        return self._source

    @property
    def filename(self) -> str:
        return self._filename

    def next_token(self) -> Token:
        """Return the next token and advance past it."""
        self._skip_ws()

        start = self._current_pos()
        if self._pos >= self._end:
            return Token(TokenType.EOF, None, "", Span(start, start))

        ch = self._peek()

        if is_digit(ch):
            return self._lex_number()

        tt = SINGLE_CHAR_TOKENS.get(ch)
        if tt is None:
            raise self._error(f"invalid character found: {ch!r}", start)
        self._advance()
        return Token(tt, None, ch, Span(start, self._current_pos()))

    # ------------------------------------------------------------------
    # Position helpers
    # ------------------------------------------------------------------

    def _current_pos(self) -> Position:
        return Position(self._line, self._col, self._pos)

    def _peek(self) -> str:
        if self._pos < self._end:
            return self._source[self._pos]
        return ""

    def _advance(self) -> str:
        ch = self._source[self._pos]
        self._pos += 1
        # \r\n counts once, on the \n
        if ch == "\n" or (ch == "\r" and self._source[self._pos : self._pos + 1] != "\n"):
            self._line += 1
            self._col = 1
        else:
            self._col += 1
        return ch

    def _error(self, message: str, start: Position) -> LexError:
        end = Position(start.line, start.column + 1, start.offset + 1)
        return LexError(
            ErrorKind.INVALID_CHARACTER, message, Span(start, end), self._source, self._filename
        )

    # ------------------------------------------------------------------
    # Token scanners
    # ------------------------------------------------------------------

    def _skip_ws(self) -> None:
        while self._pos < self._end and self._peek().isspace():
            self._advance()

    def _lex_number(self) -> Token:
        start = self._current_pos()
        chars = []
        while self._pos < self._end and is_digit(self._peek()):
            chars.append(self._advance())
        text = "".join(chars)
        span = Span(start, self._current_pos())
        try:
            value = int(text)
        except ValueError:
            # Past the interpreter's int string-conversion digit limit
            raise LexError(
                ErrorKind.INTEGER_OVERFLOW,
                f"number literal too long ({len(text)} digits)",
                span,
                self._source,
                self._filename,
            ) from None
        return Token(TokenType.NUMBER, value, text, span)


def tokenize(source: str, filename: str = "<expr>") -> Iterator[Token]:
    """Lazily yield the tokens of *source*, ending with a single EOF."""
    lexer = Lexer(source, filename)
    while True:
        tok = lexer.next_token()
        yield tok
        if tok.type == TokenType.EOF:
            return


def expression_lines(source: str) -> Iterator[tuple[int, int]]:
    """Yield (start, end) offsets of every non-blank line in *source*.

    Used where a document holds one expression per line. Lines end at
    LF, CRLF or CR only, matching the lexer's line count; other vertical
    whitespace (form feed, say) stays inside the line. End offsets exclude
    the terminator.
    """
    pos = 0
    for m in LINE_BREAK.finditer(source):
        if source[pos : m.start()].strip():
            yield pos, m.start()
        pos = m.end()
    if source[pos:].strip():
        yield pos, len(source)
