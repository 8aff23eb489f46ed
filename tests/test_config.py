"""
Tests for environment parsing helpers in config.
"""

import config


def test_parse_int(monkeypatch):
    monkeypatch.setenv("WHEEL_TEST_INT", "42")
    assert config._parse_int("WHEEL_TEST_INT", 7) == 42


def test_parse_int_invalid_falls_back(monkeypatch):
    monkeypatch.setenv("WHEEL_TEST_INT", "lots")
    assert config._parse_int("WHEEL_TEST_INT", 7) == 7


def test_parse_float(monkeypatch):
    monkeypatch.setenv("WHEEL_TEST_FLOAT", "-35.5")
    assert config._parse_float("WHEEL_TEST_FLOAT", 1.0) == -35.5


def test_parse_float_missing(monkeypatch):
    monkeypatch.delenv("WHEEL_TEST_FLOAT", raising=False)
    assert config._parse_float("WHEEL_TEST_FLOAT", 1.0) == 1.0


def test_parse_bool(monkeypatch):
    for raw, expected in [("1", True), ("TRUE", True), ("on", True), ("0", False), ("no", False)]:
        monkeypatch.setenv("WHEEL_TEST_BOOL", raw)
        assert config._parse_bool("WHEEL_TEST_BOOL", not expected) is expected


def test_defaults_are_sane():
    assert 0 <= config.WHEEL_POINTER_ANGLE < 360
    assert config.WHEEL_DRAG_CAPTURE_MS > 0
    assert 0 < config.WHEEL_RADIUS <= 1
