import math

import pytest

from proximity import (
    EDGE_BLEND_FACTOR,
    ItemTransform,
    compute_edge_margin,
    compute_transform,
    compute_value,
    lerp,
)


def test_no_hover_returns_base():
    for index in range(6):
        assert compute_value(None, index, 52, 55) == 52


def test_hovered_item_gets_peak():
    assert compute_value(3, 3, 52, 55) == pytest.approx(55)
    assert compute_value(0, 0, 0, -11) == pytest.approx(-11)


def test_neighbour_uses_exponential_decay():
    expected = 52 + (55 - 52) * math.exp(-1)
    assert compute_value(2, 3, 52, 55) == pytest.approx(expected)


def test_symmetric_in_distance():
    for distance in range(1, 5):
        left = compute_value(5, 5 - distance, 52, 55)
        right = compute_value(5, 5 + distance, 52, 55)
        assert left == pytest.approx(right)


def test_decreases_toward_base_with_distance():
    values = [compute_value(0, index, 52, 55) for index in range(8)]
    for nearer, farther in zip(values, values[1:]):
        assert farther < nearer
        assert farther > 52


def test_negative_peak_lift_decays_toward_zero():
    lifts = [compute_value(0, index, 0.0, -11) for index in range(4)]
    assert lifts[0] == pytest.approx(-11)
    assert lifts[1] > lifts[0]
    assert lifts[3] < 0


def test_lerp():
    assert lerp(68, 30, 0) == 68
    assert lerp(68, 30, 1) == 30
    assert lerp(0, 10, 0.5) == 5


def test_edge_margin_regular_slot():
    assert compute_edge_margin(0, 5, 68, 30) == 68
    assert compute_edge_margin(3, 5, 68, 30) == 68


def test_edge_margin_last_slot_is_blended():
    assert EDGE_BLEND_FACTOR == 0.2
    assert compute_edge_margin(4, 5, 68, 30) == pytest.approx(60.4)


def test_transform_hovered_item():
    transform = compute_transform(1, 1, 52, 55, -11, 68)
    assert isinstance(transform, ItemTransform)
    assert transform.size == pytest.approx(55)
    assert transform.lift == pytest.approx(-11)
    assert transform.icon_scale == pytest.approx(55 / 68)


def test_transform_without_hover():
    transform = compute_transform(None, 4, 52, 55, -11, 68)
    assert transform.size == 52
    assert transform.lift == 0.0
    assert transform.icon_scale == pytest.approx(52 / 68)


def test_transform_zero_divider_keeps_icon_scale():
    assert compute_transform(None, 0, 52, 55, -11, 0).icon_scale == 1.0
