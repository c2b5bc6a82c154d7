"""Graph sampling — evaluates an ``x`` template across a domain.

The plotting surface is someone else's job; this module only produces the
points. Each sample is an independent evaluation, so a failure at one x
value never affects its neighbours.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from calcgraph.evaluator import evaluate_tokens
from calcgraph.models import EvaluationError
from calcgraph.tokenizer import tokenize


@dataclass(frozen=True)
class GraphDomain:
    """Visible window and sampling density."""

    x_min: float = -10.0
    x_max: float = 10.0
    y_min: float = -10.0
    y_max: float = 10.0
    resolution: int = 100

    def __post_init__(self) -> None:
        if self.x_max <= self.x_min:
            raise ValueError(f"x_max ({self.x_max}) must be greater than x_min ({self.x_min})")
        if self.y_max <= self.y_min:
            raise ValueError(f"y_max ({self.y_max}) must be greater than y_min ({self.y_min})")
        if self.resolution < 1:
            raise ValueError(f"resolution must be at least 1, got {self.resolution}")

    @property
    def step(self) -> float:
        return (self.x_max - self.x_min) / self.resolution

    def x_values(self) -> list[float]:
        """``resolution + 1`` evenly spaced values from x_min through x_max."""
        return [self.x_min + i * self.step for i in range(self.resolution)] + [self.x_max]


@dataclass(frozen=True)
class GraphPoint:
    """One sample. ``y`` is None when the expression failed to evaluate."""

    x: float
    y: Optional[float]

    @property
    def failed(self) -> bool:
        return self.y is None

    def visible(self, domain: GraphDomain) -> bool:
        if self.y is None or not math.isfinite(self.y):
            return False
        return domain.y_min <= self.y <= domain.y_max


def sample(expression: str, domain: Optional[GraphDomain] = None, answer: str = "0") -> list[GraphPoint]:
    """Evaluate ``expression`` at every x value of ``domain``.

    ``answer`` is a single snapshot shared by every sample of this run.
    """
    domain = domain or GraphDomain()
    points = []
    for x in domain.x_values():
        try:
            y: Optional[float] = float(evaluate_tokens(tokenize(expression, x_value=x, answer=answer)))
        except EvaluationError:
            y = None
        points.append(GraphPoint(x=x, y=y))
    return points
