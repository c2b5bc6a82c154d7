"""Translate between typed input and the evaluator's notation.

People type ``sqrt(2) * pi``; the evaluator expects ``<sqrt>(2) * π``.
``normalize`` does that translation and ``prettify`` goes the other way
for display.
"""

from __future__ import annotations

import re

from calcgraph.models import FUNCTIONS
from calcgraph.tokenizer import ANSWER_GLYPH, EULER_GLYPH, PI_GLYPH

# Function words not already wrapped in a <marker>
_FUNCTION_RE = re.compile(r"(?<![<A-Za-z_])(" + "|".join(FUNCTIONS) + r")(?![>A-Za-z_])")
_PI_RE = re.compile(r"(?<![A-Za-z_<])pi(?![A-Za-z_>])")
_ANSWER_RE = re.compile(r"(?<![A-Za-z_<])ans(?![A-Za-z_>])")
# A lone "e" is Euler's number; "1e5" keeps its exponent marker
_EULER_RE = re.compile(r"(?<![\w.<])e(?![\w>])")
_MARKER_RE = re.compile(r"<(" + "|".join(FUNCTIONS) + r")>")

_INPUT_SYMBOLS = {
    "**": "^",
    "×": "*",
    "·": "*",
    "÷": "/",
    "−": "-",
}

_DISPLAY_SYMBOLS = {
    "*": "×",
    "/": "÷",
}


def normalize(text: str) -> str:
    """Convert typed input into evaluator notation."""
    for typed, symbol in _INPUT_SYMBOLS.items():
        text = text.replace(typed, symbol)
    text = _FUNCTION_RE.sub(r"<\1>", text)
    text = _PI_RE.sub(PI_GLYPH, text)
    text = _ANSWER_RE.sub(ANSWER_GLYPH, text)
    return _EULER_RE.sub(EULER_GLYPH, text)


def prettify(text: str) -> str:
    """Render evaluator notation for display."""
    text = _MARKER_RE.sub(lambda m: "√" if m.group(1) == "sqrt" else m.group(1), text)
    text = text.replace(ANSWER_GLYPH, "ans")
    for symbol, glyph in _DISPLAY_SYMBOLS.items():
        text = text.replace(symbol, glyph)
    return text
