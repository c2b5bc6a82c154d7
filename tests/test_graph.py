"""Tests for graph sampling."""

import math

import pytest

from calcgraph.graph import GraphDomain, GraphPoint, sample


# --- Domain ---

def test_default_domain_samples():
    domain = GraphDomain()
    xs = domain.x_values()
    assert len(xs) == 101
    assert xs[0] == -10
    assert xs[-1] == 10
    assert domain.step == pytest.approx(0.2)


def test_custom_resolution():
    xs = GraphDomain(x_min=0, x_max=1, resolution=4).x_values()
    assert xs == pytest.approx([0, 0.25, 0.5, 0.75, 1])


@pytest.mark.parametrize("kwargs", [
    {"x_min": 1, "x_max": 1},
    {"y_min": 5, "y_max": -5},
    {"resolution": 0},
])
def test_invalid_domain(kwargs):
    with pytest.raises(ValueError):
        GraphDomain(**kwargs)


# --- Sampling ---

def test_sample_parabola():
    points = sample("x^2", GraphDomain(x_min=-2, x_max=2, resolution=4))
    assert [p.x for p in points] == pytest.approx([-2, -1, 0, 1, 2])
    assert [p.y for p in points] == pytest.approx([4, 1, 0, 1, 4])


def test_sample_failure_is_isolated():
    points = sample("1/x", GraphDomain(x_min=-1, x_max=1, resolution=2))
    assert points[0].y == pytest.approx(-1)
    assert points[1].failed
    assert points[2].y == pytest.approx(1)


def test_sample_math_error_is_nan():
    points = sample("<sqrt>x", GraphDomain(x_min=-1, x_max=1, resolution=2))
    assert math.isnan(points[0].y)
    assert not points[0].failed
    assert points[2].y == pytest.approx(1)


def test_sample_uses_answer_snapshot():
    points = sample("xⒶ", GraphDomain(x_min=0, x_max=1, resolution=1), answer="3")
    assert [p.y for p in points] == pytest.approx([0, 3])


def test_sample_is_repeatable():
    domain = GraphDomain(resolution=10)
    assert sample("<sin>x", domain) == sample("<sin>x", domain)


# --- Visibility ---

def test_point_visibility():
    domain = GraphDomain(y_min=-1, y_max=1)
    assert GraphPoint(0, 0.5).visible(domain)
    assert not GraphPoint(0, 2).visible(domain)
    assert not GraphPoint(0, None).visible(domain)
    assert not GraphPoint(0, math.nan).visible(domain)
    assert not GraphPoint(0, math.inf).visible(domain)
