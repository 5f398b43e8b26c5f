"""Command-line interface for intcalc."""

from __future__ import annotations

import argparse
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TextIO

from intcalc.errors import CalcError, ErrorKind
from intcalc.evaluator import EvalOptions

CONFIG_NAME = "intcalc.toml"

# Failures reported with exit code 2 rather than 1
_ARITHMETIC_KINDS = frozenset({ErrorKind.DIVISION_BY_ZERO, ErrorKind.INTEGER_OVERFLOW})


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    expression: str | None
    input_file: Path | None
    eval_options: EvalOptions
    dump_tokens: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="intcalc",
        description="Evaluate integer arithmetic expressions",
    )
    src = p.add_mutually_exclusive_group()
    src.add_argument(
        "expression",
        nargs="?",
        help="Expression to evaluate (default: read one line from stdin)",
    )
    src.add_argument(
        "-f",
        "--file",
        metavar="FILE",
        help="Evaluate every non-blank line of FILE",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help=f"Config file (default: auto-discover {CONFIG_NAME})",
    )
    p.add_argument(
        "--strict",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Reject input left over after a complete expression",
    )
    p.add_argument(
        "--bits",
        type=int,
        default=None,
        metavar="N",
        help="Signed integer width for overflow checks, 0 for unbounded (default: 64)",
    )
    p.add_argument(
        "--max-depth",
        type=int,
        default=None,
        metavar="N",
        help="Parenthesis nesting limit (default: 64)",
    )
    p.add_argument("--tokens", action="store_true", help="Dump tokens to stderr")
    return p


def load_config(config_path: Path | None, search_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else search_dir / CONFIG_NAME

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_options(args: argparse.Namespace, search_dir: Path | None = None) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: defaults < config file < CLI flags.
    """
    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, search_dir if search_dir is not None else Path("."))

    defaults = EvalOptions()
    strict = defaults.strict
    bits: int | None = defaults.bits
    max_depth = defaults.max_depth

    cfg_eval = config.get("eval")
    if isinstance(cfg_eval, dict):
        cfg_strict = cfg_eval.get("strict")
        if isinstance(cfg_strict, bool):
            strict = cfg_strict
        cfg_bits = cfg_eval.get("bits")
        if isinstance(cfg_bits, int) and not isinstance(cfg_bits, bool):
            bits = cfg_bits
        cfg_depth = cfg_eval.get("max_depth")
        if isinstance(cfg_depth, int) and not isinstance(cfg_depth, bool):
            max_depth = cfg_depth

    if args.strict is not None:
        strict = args.strict
    if args.bits is not None:
        bits = args.bits
    if args.max_depth is not None:
        max_depth = args.max_depth

    if bits == 0:
        bits = None

    try:
        eval_options = EvalOptions(strict=strict, bits=bits, max_depth=max_depth)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc

    return CliOptions(
        expression=args.expression,
        input_file=Path(args.file) if args.file else None,
        eval_options=eval_options,
        dump_tokens=args.tokens,
    )


def run(options: CliOptions, stdin: TextIO | None = None) -> list[int]:
    """Evaluate the selected input and return the results in order.

    Raises the first CalcError encountered; later lines are not evaluated.
    """
    from intcalc.debug import dump_tokens
    from intcalc.evaluator import Evaluator
    from intcalc.lexer import Lexer, expression_lines

    if options.input_file is not None:
        source = options.input_file.read_text(encoding="utf-8")
        filename = str(options.input_file)
        spans = list(expression_lines(source))
    else:
        if options.expression is not None:
            source = options.expression
        else:
            source = (stdin if stdin is not None else sys.stdin).readline()
        filename = "<expr>"
        spans = [(0, len(source))]

    if options.dump_tokens:
        dump_tokens(source, filename, file=sys.stderr)

    results = []
    for start, end in spans:
        lexer = Lexer(source, filename, start, end)
        results.append(Evaluator(lexer, options.eval_options).evaluate())
    return results


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
        print(f"error: invalid config file: {exc}", file=sys.stderr)
        return 2

    try:
        results = run(options)
    except (OSError, UnicodeDecodeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except CalcError as exc:
        print(exc.format(), file=sys.stderr)
        return 2 if exc.kind in _ARITHMETIC_KINDS else 1

    for value in results:
        print(f"Result: {value}")

    return 0
