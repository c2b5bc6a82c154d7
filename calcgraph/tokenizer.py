"""Tokenizer — turns a raw expression string into a flat list of Tokens.

Scans left to right with a single pending buffer. Numerals (digits, ``.``,
an exponent ``e`` with optional sign, and a leading unary ``-``) accumulate
in the buffer; ``<name>`` markers accumulate verbatim until ``>``. Glyphs
for constants resolve to NUMBER tokens on the spot, with an implicit ``*``
inserted when they directly follow a value (``2π`` → ``2 * π``).

No semantic validation happens here: anything the evaluator cannot use
comes out as a SYMBOL token and is rejected during reduction.
"""

from __future__ import annotations

import math
from typing import Optional

from calcgraph.models import CLOSE_PAREN, OPEN_PAREN, OPERATORS, Token, TokenKind

PI_GLYPH = "π"
EULER_GLYPH = "ℯ"
ANSWER_GLYPH = "Ⓐ"
VARIABLE = "x"

_DIGITS = "0123456789"


def parse_number(text: str) -> Optional[float]:
    """Parse a numeral or a formatted result (``nan``/``inf`` included); None if malformed."""
    try:
        return float(text)
    except ValueError:
        return None


def _starts_value(tokens: list[Token]) -> bool:
    """True when a ``-`` at this point would begin a number rather than subtract."""
    if not tokens:
        return True
    last = tokens[-1]
    return not (last.is_number or last.kind == TokenKind.CLOSE_PAREN)


def _implies_multiplication(tokens: list[Token]) -> bool:
    """True when a constant glyph here needs an inferred ``*`` before it."""
    if not tokens:
        return False
    last = tokens[-1]
    return last.kind not in (TokenKind.OPERATOR, TokenKind.FUNCTION, TokenKind.OPEN_PAREN)


def _flush(buffer: str, tokens: list[Token]) -> None:
    if not buffer:
        return
    if buffer.startswith("<"):
        # Unterminated marker
        tokens.append(Token.symbol(buffer))
    elif buffer == "-":
        tokens.append(Token.operator("-"))
    else:
        value = parse_number(buffer)
        tokens.append(Token.number(value) if value is not None else Token.symbol(buffer))


def _extends_numeral(char: str, buffer: str) -> bool:
    """Whether ``char`` continues the numeral currently in ``buffer``."""
    if char in _DIGITS or char == ".":
        return True
    if char == "e":
        return any(c in _DIGITS for c in buffer) and "e" not in buffer
    if char in "+-":
        return buffer.endswith("e") and any(c in _DIGITS for c in buffer)
    return False


def tokenize(
    expression: str,
    x_value: Optional[float] = None,
    answer: str = "0",
) -> list[Token]:
    """Split ``expression`` into tokens.

    Args:
        expression: Raw input, e.g. ``"2π + <sqrt>(x-1)"``.
        x_value: Substitution for the free variable ``x``. ``None`` makes
            ``x`` NaN, i.e. the expression is a plotting template.
        answer: Result text of the latest calculation, used for the answer
            glyph. Read once here; evaluation never consults history again.

    Returns:
        Ordered token list, freshly allocated for this call.
    """
    constants = {
        PI_GLYPH: math.pi,
        EULER_GLYPH: math.e,
        ANSWER_GLYPH: parse_number(answer),
        VARIABLE: math.nan if x_value is None else float(x_value),
    }

    tokens: list[Token] = []
    buffer = ""

    for char in expression:
        if buffer.startswith("<"):
            if char == ">":
                tokens.append(Token.function(buffer[1:]))
                buffer = ""
            else:
                buffer += char
            continue

        if buffer and _extends_numeral(char, buffer):
            buffer += char
            continue
        if not buffer and (char in _DIGITS or char == "."):
            buffer = char
            continue

        _flush(buffer, tokens)
        buffer = ""

        if char == "-" and _starts_value(tokens):
            buffer = "-"
        elif char == "<":
            buffer = "<"
        elif char in constants:
            value = constants[char]
            if _implies_multiplication(tokens):
                tokens.append(Token.operator("*"))
            tokens.append(Token.number(value) if value is not None else Token.symbol(answer))
        elif char in OPERATORS:
            tokens.append(Token.operator(char))
        elif char == "(":
            tokens.append(OPEN_PAREN)
        elif char == ")":
            tokens.append(CLOSE_PAREN)
        elif not char.isspace():
            tokens.append(Token.symbol(char))

    _flush(buffer, tokens)
    return tokens
