"""
Tests for easing curves.
"""

import pytest

from utils.easing import EASING_FUNCTIONS, ease_sin_out, get_easing


@pytest.mark.parametrize("name", sorted(EASING_FUNCTIONS))
def test_easing_endpoints(name):
    easing = EASING_FUNCTIONS[name]
    assert easing(0) == pytest.approx(0, abs=1e-3)
    assert easing(1) == pytest.approx(1)


@pytest.mark.parametrize("name", sorted(EASING_FUNCTIONS))
def test_easing_is_monotonic(name):
    easing = EASING_FUNCTIONS[name]
    values = [easing(i / 50) for i in range(51)]
    assert all(a <= b for a, b in zip(values, values[1:]))


def test_sin_out_midpoint():
    assert ease_sin_out(0.5) == pytest.approx(0.7071067811865476)


def test_get_easing():
    assert get_easing("sin_out") is ease_sin_out


def test_get_easing_unknown():
    with pytest.raises(ValueError, match="bounce"):
        get_easing("bounce")
