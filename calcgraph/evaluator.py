"""Evaluator — reduces a token list to a single number.

Each pass of the outer loop performs exactly one reduction, trying in order:

1. innermost parenthesised group (rightmost ``(`` and the next ``)``),
   evaluated recursively and substituted as one number
2. rightmost elementary function applied to the number after it
3. rightmost unary ``-`` folded into the number after it
4. binary operator: first ``^``, else first ``*``/``/``, else first ``+``/``-``

Every reduction shortens the list, so the loop always terminates. When no
reduction applies and more than one token is left, the expression is
malformed. All failures raise EvaluationError; NaN and infinity are results.
"""

from __future__ import annotations

import math
from typing import Callable, Optional

from calcgraph.models import OPERATORS, ErrorKind, EvaluationError, Token, TokenKind
from calcgraph.tokenizer import tokenize

_TIERS = (("^",), ("*", "/"), ("+", "-"))


def _reciprocal(value: float) -> float:
    if value == 0:
        return math.copysign(math.inf, value)
    return 1.0 / value


def _sqrt(value: float) -> float:
    return math.sqrt(value) if value >= 0 else math.nan


def _periodic(fn: Callable[[float], float]) -> Callable[[float], float]:
    """Wrap a trig function so infinite input gives NaN instead of raising."""
    def apply(value: float) -> float:
        if math.isinf(value):
            return math.nan
        return fn(value)
    return apply


_sin = _periodic(math.sin)
_cos = _periodic(math.cos)
_tan = _periodic(math.tan)

_FUNCTIONS: dict[str, Callable[[float], float]] = {
    "sqrt": _sqrt,
    "sin": _sin,
    "cos": _cos,
    "tan": _tan,
    "csc": lambda v: _reciprocal(_sin(v)),
    "sec": lambda v: _reciprocal(_cos(v)),
    "cot": lambda v: _reciprocal(_tan(v)),
}


def _is_odd_integer(value: float) -> bool:
    return value.is_integer() and value % 2 == 1


def _power(base: float, exponent: float) -> float:
    """``base ** exponent`` with IEEE results where math.pow would raise."""
    try:
        return math.pow(base, exponent)
    except OverflowError:
        if base < 0 and _is_odd_integer(exponent):
            return -math.inf
        return math.inf
    except ValueError:
        # Zero to a negative power, or a negative base to a fractional power
        if base == 0:
            return math.copysign(math.inf, base) if _is_odd_integer(exponent) else math.inf
        return math.nan


def _operate(left: float, symbol: str, right: float) -> float:
    if symbol == "+":
        return left + right
    if symbol == "-":
        return left - right
    if symbol == "*":
        return left * right
    if symbol == "/":
        if right == 0:
            raise EvaluationError(ErrorKind.DIVISION_BY_ZERO)
        return left / right
    if symbol == "^":
        return _power(left, right)
    raise EvaluationError(ErrorKind.INVALID_OPERATOR, symbol)


def _is_unary_minus(tokens: list[Token], index: int) -> bool:
    """A ``-`` is unary at the start or after an operator, ``(`` or function."""
    if not tokens[index].is_operator("-"):
        return False
    if index == 0:
        return True
    return tokens[index - 1].kind in (TokenKind.OPERATOR, TokenKind.OPEN_PAREN, TokenKind.FUNCTION)


def _resolve_parentheses(tokens: list[Token]) -> bool:
    opens = [i for i, t in enumerate(tokens) if t.kind == TokenKind.OPEN_PAREN]
    if not opens:
        if any(t.kind == TokenKind.CLOSE_PAREN for t in tokens):
            raise EvaluationError(ErrorKind.UNMATCHED_CLOSE_PAREN)
        return False

    start = opens[-1]
    end = next((i for i in range(start + 1, len(tokens)) if tokens[i].kind == TokenKind.CLOSE_PAREN), None)
    if end is None:
        raise EvaluationError(ErrorKind.UNMATCHED_OPEN_PAREN)

    if end == start + 1:
        # An empty group contributes no operand at all
        del tokens[start:end + 1]
        return True

    value = _reduce(tokens[start + 1:end])
    if start > 0 and _is_unary_minus(tokens, start - 1):
        tokens[start - 1:end + 1] = [Token.number(-value)]
    else:
        tokens[start:end + 1] = [Token.number(value)]
    return True


def _apply_function(tokens: list[Token]) -> bool:
    index = next((i for i in range(len(tokens) - 1, -1, -1) if tokens[i].kind == TokenKind.FUNCTION), None)
    if index is None:
        return False

    name = tokens[index].value
    fn = _FUNCTIONS.get(name)
    if fn is None:
        raise EvaluationError(ErrorKind.INVALID_OPERATOR, f"<{name}>")
    if index == len(tokens) - 1:
        raise EvaluationError(ErrorKind.MISSING_FUNCTION_ARGUMENT, f"<{name}>")

    arg = tokens[index + 1]
    if arg.is_number:
        value, span = arg.value, 2
    elif _is_unary_minus(tokens, index + 1) and index + 2 < len(tokens) and tokens[index + 2].is_number:
        value, span = -tokens[index + 2].value, 3
    else:
        raise EvaluationError(ErrorKind.INVALID_FUNCTION_ARGUMENT, f"<{name}> {arg}")

    tokens[index:index + span] = [Token.number(fn(value))]
    return True


def _fold_negation(tokens: list[Token]) -> bool:
    for index in range(len(tokens) - 2, -1, -1):
        if not tokens[index].is_operator("-") or not tokens[index + 1].is_number:
            continue
        if index == 0 or not tokens[index - 1].is_number:
            tokens[index:index + 2] = [Token.number(-tokens[index + 1].value)]
            return True
    return False


def _select_operator(tokens: list[Token]) -> Optional[int]:
    for tier in _TIERS:
        for i, t in enumerate(tokens):
            if t.is_operator(*tier):
                return i
    return None


def _apply_operator(tokens: list[Token]) -> bool:
    index = _select_operator(tokens)
    if index is None:
        return False

    symbol = tokens[index].value
    if index == 0 or index == len(tokens) - 1:
        raise EvaluationError(ErrorKind.MISSING_OPERAND, symbol)
    left, right = tokens[index - 1], tokens[index + 1]
    if not (left.is_number and right.is_number):
        raise EvaluationError(ErrorKind.MISSING_OPERAND, f"{left} {symbol} {right}")

    tokens[index - 1:index + 2] = [Token.number(_operate(left.value, symbol, right.value))]
    return True


def _is_unrecognized(token: Token) -> bool:
    if token.kind == TokenKind.SYMBOL:
        return True
    return token.kind == TokenKind.OPERATOR and token.value not in OPERATORS


def _reduce(tokens: list[Token]) -> float:
    tks = list(tokens)

    while len(tks) > 1:
        if (
            _resolve_parentheses(tks)
            or _apply_function(tks)
            or _fold_negation(tks)
            or _apply_operator(tks)
        ):
            continue

        stray = next((t for t in tks if _is_unrecognized(t)), None)
        if stray is not None:
            raise EvaluationError(ErrorKind.INVALID_OPERATOR, str(stray))
        raise EvaluationError(ErrorKind.NOT_ENOUGH_OPERATORS, " ".join(str(t) for t in tks))

    if not tks:
        return 0.0  # empty expression
    if not tks[0].is_number:
        raise EvaluationError(ErrorKind.INVALID_RESULT, str(tks[0]))
    return tks[0].value


def format_number(value: float) -> str:
    """Shortest text that parses back to ``value``; integral values lose ``.0``."""
    if value == 0:
        return "0"
    text = repr(float(value))
    if text.endswith(".0"):
        text = text[:-2]
    return text


def evaluate_tokens(tokens: list[Token]) -> str:
    """Reduce a token list to its formatted numeric result.

    The input list is not modified.

    Raises:
        EvaluationError: if the tokens do not form a valid expression.
    """
    return format_number(_reduce(tokens))


def evaluate(expression: str, x: Optional[float] = None, answer: str = "0") -> str:
    """Evaluate an expression string.

    Args:
        expression: Input in the core notation (``<sqrt>``, ``π``, ``ℯ``, ``Ⓐ``, ``x``).
        x: Value substituted for ``x``; ``None`` substitutes NaN.
        answer: Snapshot of the latest result text for the answer glyph.

    Returns:
        The result as text, e.g. ``"3"``, ``"0.5"``, ``"nan"``. An empty
        expression evaluates to ``"0"``.

    Raises:
        EvaluationError: with the specific ErrorKind on malformed input or
            division by zero.
    """
    return evaluate_tokens(tokenize(expression, x_value=x, answer=answer))
