from __future__ import annotations

import pytest

from lunge_counter.vision.lunge import (
    ANGLE_TOLERANCE,
    TARGET_ANGLE,
    calculate_progress,
    is_lunge_position,
)


def test_is_lunge_position_at_target():
    assert is_lunge_position(90.0, 90.0)


def test_is_lunge_position_outside_tolerance():
    assert not is_lunge_position(50.0, 130.0)


def test_is_lunge_position_just_inside_edge():
    edge = TARGET_ANGLE + ANGLE_TOLERANCE - 0.1
    assert is_lunge_position(edge, edge)
    low_edge = TARGET_ANGLE - ANGLE_TOLERANCE + 0.1
    assert is_lunge_position(low_edge, low_edge)


def test_is_lunge_position_just_outside_edge():
    out = TARGET_ANGLE + ANGLE_TOLERANCE + 0.1
    assert not is_lunge_position(out, out)
    assert not is_lunge_position(out, TARGET_ANGLE)
    assert not is_lunge_position(TARGET_ANGLE, out)


def test_is_lunge_position_boundary_is_exclusive():
    boundary = TARGET_ANGLE + ANGLE_TOLERANCE
    assert not is_lunge_position(boundary, TARGET_ANGLE)
    assert not is_lunge_position(TARGET_ANGLE, TARGET_ANGLE - ANGLE_TOLERANCE)


def test_is_lunge_position_one_angle_in_tolerance_is_enough_only_with_both():
    inside = TARGET_ANGLE + ANGLE_TOLERANCE - 0.1
    assert is_lunge_position(TARGET_ANGLE, inside)
    assert not is_lunge_position(TARGET_ANGLE + ANGLE_TOLERANCE + 0.1, inside)


@pytest.mark.parametrize(
    "angle, expected",
    [
        (TARGET_ANGLE, 1.0),
        (TARGET_ANGLE + ANGLE_TOLERANCE / 2, 0.5),
        (TARGET_ANGLE - ANGLE_TOLERANCE / 2, 0.5),
        (TARGET_ANGLE + ANGLE_TOLERANCE, 0.0),
        (TARGET_ANGLE + ANGLE_TOLERANCE + 10, 0.0),
        (TARGET_ANGLE - ANGLE_TOLERANCE - 10, 0.0),
        (180.0, 0.0),
    ],
)
def test_calculate_progress(angle, expected):
    assert calculate_progress(angle) == pytest.approx(expected, abs=0.01)


def test_calculate_progress_never_negative():
    assert calculate_progress(359.0) == 0.0
