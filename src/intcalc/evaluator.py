"""Recursive descent evaluator: parses tokens and computes the result in one pass."""

from __future__ import annotations

import sys
from dataclasses import dataclass

from intcalc.errors import ErrorKind, EvalError, ParseError
from intcalc.lexer import Lexer
from intcalc.tokens import Span, Token, TokenType, describe_type


# factor -> expression -> term per parenthesis level
_FRAMES_PER_LEVEL = 3
# Headroom for the caller's own stack
_FRAME_RESERVE = 250


def depth_ceiling() -> int:
    """Deepest parenthesis nesting that fits under the interpreter's recursion limit."""
    return max(0, (sys.getrecursionlimit() - _FRAME_RESERVE) // _FRAMES_PER_LEVEL)


@dataclass(frozen=True, slots=True)
class EvalOptions:
    """Knobs for a single evaluation."""

    strict: bool = False  # reject tokens after a complete expression
    bits: int | None = 64  # signed integer width, None for unbounded
    max_depth: int = 64  # parenthesis nesting limit

    def __post_init__(self) -> None:
        if self.bits is not None and self.bits < 2:
            raise ValueError(f"bits must be at least 2, got {self.bits}")
        if self.max_depth < 0:
            raise ValueError(f"max_depth must not be negative, got {self.max_depth}")
        if self.max_depth > depth_ceiling():
            raise ValueError(
                f"max_depth must be at most {depth_ceiling()}, got {self.max_depth}"
            )


class Evaluator:
    """Evaluate the expression produced by *lexer*.

    Grammar (lowest precedence first):

        expression := term (('+' | '-') term)*
        term       := factor (('*' | '/') factor)*
        factor     := NUMBER | '(' expression ')'

    The evaluator is the lexer's only consumer and holds exactly one token
    of lookahead. The first token is pulled here, so a bad first character
    fails at construction.
    """

    def __init__(self, lexer: Lexer, options: EvalOptions | None = None) -> None:
        self._lexer = lexer
        self._options = options or EvalOptions()
        self._depth = 0
        if self._options.bits is None:
            self._min = self._max = None
        else:
            self._min = -(1 << (self._options.bits - 1))
            self._max = (1 << (self._options.bits - 1)) - 1
        self._current = lexer.next_token()

    @property
    def current_token(self) -> Token:
        return self._current

    def evaluate(self) -> int:
        """Evaluate one expression starting at the current lookahead."""
        result = self._expression()
        if self._options.strict and self._current.type != TokenType.EOF:
            raise self._parse_error(
                ErrorKind.TRAILING_INPUT,
                f"unexpected {self._current.describe()} after complete expression",
                self._current.span,
            )
        return result

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def _eat(self, tt: TokenType) -> Token:
        """Consume the lookahead if it has type *tt*, else fail.

        Only the type is compared; a NUMBER expectation accepts any value.
        """
        tok = self._current
        if tok.type != tt:
            raise self._parse_error(
                ErrorKind.TOKEN_MISMATCH,
                f"expected {describe_type(tt)}, found {tok.describe()}",
                tok.span,
            )
        self._current = self._lexer.next_token()
        return tok

    # ------------------------------------------------------------------
    # Grammar rules
    # ------------------------------------------------------------------

    def _expression(self) -> int:
        result = self._term()

        while True:
            op = self._current
            if op.type == TokenType.PLUS:
                self._eat(TokenType.PLUS)
                result = self._check(result + self._term(), op.span)
            elif op.type == TokenType.MINUS:
                self._eat(TokenType.MINUS)
                result = self._check(result - self._term(), op.span)
            else:
                break

        return result

    def _term(self) -> int:
        result = self._factor()

        while True:
            op = self._current
            if op.type == TokenType.STAR:
                self._eat(TokenType.STAR)
                result = self._check(result * self._factor(), op.span)
            elif op.type == TokenType.SLASH:
                self._eat(TokenType.SLASH)
                divisor = self._factor()
                if divisor == 0:
                    raise EvalError(
                        ErrorKind.DIVISION_BY_ZERO,
                        "division by zero",
                        op.span,
                        self._lexer.source,
                        self._lexer.filename,
                    )
                result = self._check(_trunc_div(result, divisor), op.span)
            else:
                break

        return result

    def _factor(self) -> int:
        tok = self._current

        if tok.type == TokenType.NUMBER:
            self._eat(TokenType.NUMBER)
            return self._check(tok.value, tok.span)

        if tok.type == TokenType.LPAREN:
            if self._depth >= self._options.max_depth:
                raise self._parse_error(
                    ErrorKind.DEPTH_LIMIT,
                    f"parenthesis nesting limit ({self._options.max_depth}) exceeded",
                    tok.span,
                )
            self._eat(TokenType.LPAREN)
            self._depth += 1
            result = self._expression()
            self._eat(TokenType.RPAREN)
            self._depth -= 1
            return result

        raise self._parse_error(
            ErrorKind.UNEXPECTED_TOKEN,
            f"unexpected token: {tok.describe()}",
            tok.span,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _check(self, value: int, span: Span) -> int:
        """Apply the overflow policy: out-of-range values are an error."""
        if self._min is not None and not self._min <= value <= self._max:
            raise EvalError(
                ErrorKind.INTEGER_OVERFLOW,
                f"integer overflow: {value} does not fit in {self._options.bits} bits",
                span,
                self._lexer.source,
                self._lexer.filename,
            )
        return value

    def _parse_error(self, kind: ErrorKind, message: str, span: Span) -> ParseError:
        return ParseError(kind, message, span, self._lexer.source, self._lexer.filename)


def _trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def evaluate(source: str, filename: str = "<expr>", options: EvalOptions | None = None) -> int:
    """Tokenize and evaluate *source*, returning the integer result."""
    return Evaluator(Lexer(source, filename), options).evaluate()
