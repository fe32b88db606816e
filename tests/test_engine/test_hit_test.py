"""Tests for pointer -> label hit testing."""

from __future__ import annotations

import numpy as np
import pytest

from hoverreveal.engine.hit_test import DisplayRect, locate, pointer_to_normalized, pointer_to_pixel


@pytest.fixture
def labels():
    arr = np.zeros((10, 10), dtype=np.uint32)
    arr[4, 4] = 7
    arr[9, 9] = 3
    return arr


def test_identity_scale(labels):
    rect = DisplayRect(left=0, top=0, width=10, height=10)
    assert locate(4.5, 4.5, rect, labels) == 7
    assert locate(4.0, 4.0, rect, labels) == 7
    assert locate(3.99, 4.0, rect, labels) == 0


def test_scaled_and_offset_surface(labels):
    # Displayed at 2x, offset by (100, 50)
    rect = DisplayRect(left=100, top=50, width=20, height=20)
    assert pointer_to_pixel(109, 58, rect, 10, 10) == (4, 4)
    assert locate(109, 58, rect, labels) == 7
    assert locate(119.9, 69.9, rect, labels) == 3


def test_scale_recomputed_per_call(labels):
    small = DisplayRect(left=0, top=0, width=10, height=10)
    large = DisplayRect(left=0, top=0, width=40, height=40)
    assert locate(4.5, 4.5, small, labels) == 7
    assert locate(4.5, 4.5, large, labels) == 0
    assert locate(18, 18, large, labels) == 7


def test_shrunk_surface(labels):
    rect = DisplayRect(left=0, top=0, width=5, height=5)
    assert locate(2.2, 2.2, rect, labels) == 7


@pytest.mark.parametrize("x, y", [(-0.1, 5), (5, -0.1), (10, 5), (5, 10), (1e9, 1e9)])
def test_outside_surface_is_no_component(labels, x, y):
    rect = DisplayRect(left=0, top=0, width=10, height=10)
    assert pointer_to_pixel(x, y, rect, 10, 10) is None
    assert locate(x, y, rect, labels) == 0


def test_outside_regardless_of_contents():
    full = np.ones((10, 10), dtype=np.uint32)
    rect = DisplayRect(left=10, top=10, width=10, height=10)
    assert locate(5, 5, rect, full) == 0
    assert locate(25, 15, rect, full) == 0


@pytest.mark.parametrize("width, height", [(0, 10), (10, 0), (-10, 10)])
def test_degenerate_rect(labels, width, height):
    rect = DisplayRect(left=0, top=0, width=width, height=height)
    assert locate(1, 1, rect, labels) == 0
    assert pointer_to_normalized(1, 1, rect) is None


def test_non_finite_pointer(labels):
    rect = DisplayRect(left=0, top=0, width=10, height=10)
    assert locate(float("nan"), 1, rect, labels) == 0


def test_pointer_to_normalized():
    rect = DisplayRect(left=100, top=50, width=200, height=100)
    assert pointer_to_normalized(150, 75, rect) == (0.25, 0.25)
