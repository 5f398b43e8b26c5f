"""Integer arithmetic expression evaluator."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from intcalc.evaluator import EvalOptions

__version__ = "0.1.0"


def evaluate(
    source: str,
    filename: str = "<expr>",
    options: EvalOptions | None = None,
) -> int:
    """Tokenize, parse, and evaluate an expression to an int."""
    from intcalc.evaluator import evaluate as _evaluate

    return _evaluate(source, filename, options)
