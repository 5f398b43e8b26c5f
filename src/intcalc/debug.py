"""--tokens token stream dump to stderr."""

from __future__ import annotations

import sys
from typing import TextIO

from intcalc.lexer import tokenize
from intcalc.tokens import Token, TokenType


def dump_tokens(source: str, filename: str = "<expr>", *, file: TextIO = sys.stderr) -> None:
    """Print one line per token of *source* to *file*.

    Stops at the first invalid character, letting its LexError propagate.
    """
    file.write(f"Tokens {filename}\n")
    for tok in tokenize(source, filename):
        _dump_token(tok, file)


def _dump_token(tok: Token, f: TextIO) -> None:
    start = tok.span.start
    loc = f"{start.line}:{start.column}"
    if tok.type == TokenType.NUMBER:
        f.write(f"  {loc:<7} NUMBER({tok.value})\n")
    elif tok.type == TokenType.EOF:
        f.write(f"  {loc:<7} EOF\n")
    else:
        f.write(f"  {loc:<7} {tok.type.name}({tok.raw!r})\n")
