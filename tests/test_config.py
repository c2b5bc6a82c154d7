"""Tests for environment-driven configuration."""

from pathlib import Path

import pytest

from calcgraph import config


def test_history_path_default(monkeypatch):
    monkeypatch.delenv("CALCGRAPH_HOME", raising=False)
    assert config.history_path() == Path.home() / ".calcgraph" / "history.json"


def test_history_path_override(monkeypatch, tmp_path):
    monkeypatch.setenv("CALCGRAPH_HOME", str(tmp_path))
    assert config.history_path() == tmp_path / "history.json"


@pytest.mark.parametrize("raw,expected", [
    ("", 100),
    ("50", 50),
    ("abc", 100),
    ("0", 100),
])
def test_default_resolution(monkeypatch, raw, expected):
    monkeypatch.setenv("CALCGRAPH_RESOLUTION", raw)
    assert config.default_resolution() == expected


@pytest.mark.parametrize("raw,expected", [
    ("-5,5", (-5.0, 5.0)),
    ("0,2.5", (0.0, 2.5)),
    ("5,-5", (-10.0, 10.0)),
    ("1", (-10.0, 10.0)),
    ("a,b", (-10.0, 10.0)),
])
def test_default_domain(raw, expected):
    assert config.default_domain(raw) == expected


def test_default_domain_from_env(monkeypatch):
    monkeypatch.setenv("CALCGRAPH_DOMAIN", "-1,1")
    assert config.default_domain() == (-1.0, 1.0)
