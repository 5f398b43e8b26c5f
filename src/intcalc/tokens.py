"""Token types, data structures, and character classification helpers."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum, auto


class TokenType(Enum):
    NUMBER = auto()  # run of decimal digits, value is the int

    # Operators (single-character)
    PLUS = auto()  # +
    MINUS = auto()  # -
    STAR = auto()  # *
    SLASH = auto()  # /

    # Grouping
    LPAREN = auto()  # (
    RPAREN = auto()  # )

    EOF = auto()


# Single-character token table
SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
}

_TYPE_TEXT = {tt: ch for ch, tt in SINGLE_CHAR_TOKENS.items()}


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based character offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Span:
    """Source range from start to end position."""

    start: Position
    end: Position


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexer token.

    Equality looks only at the type and the numeric value, so two tokens
    read from different places in the source compare equal.
    """

    type: TokenType
    value: int | None
    raw: str = field(compare=False)
    span: Span = field(compare=False)

    def describe(self) -> str:
        """Human-readable form for error messages."""
        if self.type == TokenType.NUMBER:
            return f"number {self.value}"
        if self.type == TokenType.EOF:
            return "end of input"
        return f"'{self.raw}'"


def describe_type(tt: TokenType) -> str:
    """Human-readable form of a token type (for 'expected ...' messages)."""
    if tt == TokenType.NUMBER:
        return "a number"
    if tt == TokenType.EOF:
        return "end of input"
    return f"'{_TYPE_TEXT[tt]}'"


# Line terminators, the same set LSP clients count
LINE_BREAK = re.compile(r"\r\n|\r|\n")


def split_lines(source: str) -> list[str]:
    """Split *source* on LINE_BREAK only; form feeds and the like stay in the line."""
    return LINE_BREAK.split(source)


def is_digit(ch: str) -> bool:
    """Return True if ch is an ASCII decimal digit."""
    return "0" <= ch <= "9"
