"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from intcalc.evaluator import EvalOptions, evaluate
from intcalc.lexer import tokenize
from intcalc.tokens import Token, TokenType


@pytest.fixture
def lex():
    """Return a helper that tokenizes source and returns tokens (excluding EOF)."""

    def _lex(source: str) -> list[Token]:
        # Strip trailing EOF for convenience
        return [t for t in tokenize(source) if t.type != TokenType.EOF]

    return _lex


@pytest.fixture
def calc():
    """Return a helper that evaluates source, with EvalOptions as keywords."""

    def _calc(source: str, **options) -> int:
        return evaluate(source, "test.calc", EvalOptions(**options))

    return _calc


def assert_types(tokens: list[Token], expected: list[TokenType]) -> None:
    """Assert that the token types match the expected list."""
    actual = [t.type for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_values(tokens: list[Token], expected: list[int | None]) -> None:
    """Assert that the token values match the expected list."""
    actual = [t.value for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"
