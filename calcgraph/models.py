"""Data models for the calcgraph calculator.

TokenKind, Token, ErrorKind, EvaluationError, HistoryEntry, History — the
typed structures that flow through tokenizer → evaluator → CLI.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Optional, Union


class TokenKind(str, Enum):
    """Lexical categories produced by the tokenizer."""

    NUMBER = "number"
    OPERATOR = "operator"
    OPEN_PAREN = "("
    CLOSE_PAREN = ")"
    FUNCTION = "function"
    SYMBOL = "symbol"


OPERATORS = ("+", "-", "*", "/", "^")

FUNCTIONS = ("sqrt", "sin", "cos", "tan", "csc", "sec", "cot")


@dataclass(frozen=True)
class Token:
    """One atomic lexical unit.

    ``value`` is a float for NUMBER tokens, the operator symbol for OPERATOR
    tokens, the bare function name (``sqrt``) for FUNCTION tokens and the raw
    text for parentheses and SYMBOL tokens.
    """

    kind: TokenKind
    value: Union[float, str]

    @classmethod
    def number(cls, value: float) -> Token:
        return cls(TokenKind.NUMBER, float(value))

    @classmethod
    def operator(cls, symbol: str) -> Token:
        return cls(TokenKind.OPERATOR, symbol)

    @classmethod
    def function(cls, name: str) -> Token:
        return cls(TokenKind.FUNCTION, name)

    @classmethod
    def symbol(cls, text: str) -> Token:
        return cls(TokenKind.SYMBOL, text)

    @property
    def is_number(self) -> bool:
        return self.kind == TokenKind.NUMBER

    def is_operator(self, *symbols: str) -> bool:
        """True for an OPERATOR token, optionally restricted to ``symbols``."""
        if self.kind != TokenKind.OPERATOR:
            return False
        return not symbols or self.value in symbols

    def __str__(self) -> str:
        if self.kind == TokenKind.FUNCTION:
            return f"<{self.value}>"
        return str(self.value)


OPEN_PAREN = Token(TokenKind.OPEN_PAREN, "(")
CLOSE_PAREN = Token(TokenKind.CLOSE_PAREN, ")")


class ErrorKind(str, Enum):
    """Distinguishable evaluation failures."""

    UNMATCHED_OPEN_PAREN = "unmatched-open-paren"
    UNMATCHED_CLOSE_PAREN = "unmatched-close-paren"
    MISSING_FUNCTION_ARGUMENT = "missing-function-argument"
    INVALID_FUNCTION_ARGUMENT = "invalid-function-argument"
    MISSING_OPERAND = "missing-operand"
    INVALID_OPERATOR = "invalid-operator"
    DIVISION_BY_ZERO = "division-by-zero"
    NOT_ENOUGH_OPERATORS = "not-enough-operators"
    INVALID_RESULT = "invalid-result"


_ERROR_MESSAGES = {
    ErrorKind.UNMATCHED_OPEN_PAREN: "missing closing parenthesis ')'",
    ErrorKind.UNMATCHED_CLOSE_PAREN: "missing opening parenthesis '('",
    ErrorKind.MISSING_FUNCTION_ARGUMENT: "function is missing its argument",
    ErrorKind.INVALID_FUNCTION_ARGUMENT: "function argument is not a number",
    ErrorKind.MISSING_OPERAND: "operator is missing an operand",
    ErrorKind.INVALID_OPERATOR: "unrecognized operator or function",
    ErrorKind.DIVISION_BY_ZERO: "division by zero",
    ErrorKind.NOT_ENOUGH_OPERATORS: "not enough operators",
    ErrorKind.INVALID_RESULT: "expression does not reduce to a number",
}


class EvaluationError(ValueError):
    """Raised when an expression cannot be reduced to a number."""

    def __init__(self, kind: ErrorKind, detail: str = "") -> None:
        self.kind = kind
        self.detail = detail
        message = _ERROR_MESSAGES[kind]
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


@dataclass
class HistoryEntry:
    """A single completed calculation."""

    expression: str
    result: str
    timestamp: str = ""

    def to_dict(self) -> dict:
        return {
            "expression": self.expression,
            "result": self.result,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, d: dict) -> HistoryEntry:
        return cls(
            expression=d.get("expression", ""),
            result=d.get("result", "0"),
            timestamp=d.get("timestamp", ""),
        )


@dataclass
class History:
    """Append-only record of calculations, oldest first.

    The evaluator never reads this directly; callers pass ``last_answer`` in
    as a snapshot when an expression may contain the answer placeholder.
    """

    entries: list[HistoryEntry] = field(default_factory=list)

    @property
    def last_answer(self) -> str:
        """Result text of the most recent calculation, ``"0"`` when empty."""
        if not self.entries:
            return "0"
        return self.entries[-1].result

    def record(self, expression: str, result: str) -> HistoryEntry:
        """Append a calculation stamped with the current UTC time."""
        entry = HistoryEntry(
            expression=expression,
            result=result,
            timestamp=datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ"),
        )
        self.entries.append(entry)
        return entry

    def __len__(self) -> int:
        return len(self.entries)

    def to_dict(self) -> dict:
        return {"entries": [e.to_dict() for e in self.entries]}

    @classmethod
    def from_dict(cls, d: dict) -> History:
        return cls(entries=[HistoryEntry.from_dict(e) for e in d.get("entries", [])])

    def save(self, path: Path) -> None:
        """Write the history as JSON, creating parent directories."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")

    @classmethod
    def load(cls, path: Optional[Path]) -> History:
        """Load history from JSON. Missing or unreadable files yield an empty history."""
        if path is None or not path.exists():
            return cls()
        try:
            return cls.from_dict(json.loads(path.read_text(encoding="utf-8")))
        except (json.JSONDecodeError, OSError):
            return cls()
