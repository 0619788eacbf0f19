"""Test the 2D affine transform pipeline.

Tests for src.raster_core.transforms:
    - Each step in isolation (scale, rotate, reflect X/Y, shear, translate)
    - Shear uses simultaneous pre-shear coordinates
    - apply_transform identity, reflection involution, worked example
    - Step order is fixed (scale before rotate, reflect before shear)
    - NaN propagation, zero-scale collapse, purity
    - transform_vertices (numpy batch) agrees with the scalar path

Run:
    pytest tests/test_transforms.py -v
"""

import dataclasses
import math

import numpy as np
import pytest

from src.raster_core.transforms import (
    IDENTITY,
    TransformParams,
    apply_transform,
    reflect_x,
    reflect_y,
    rotate_2d,
    scale_2d,
    shear_2d,
    transform_polygon,
    transform_vertices,
    translate_2d,
)


POINTS = [(0.0, 0.0), (1.0, 0.0), (-3.5, 2.25), (1e6, -1e-6), (-0.0, 7.0), (123.456, -654.321)]


# ============================================================================
# INDIVIDUAL STEPS
# ============================================================================

def test_scale_2d():
    assert scale_2d((2.0, -3.0), 2.0, 0.5) == (4.0, -1.5)


def test_translate_2d():
    assert translate_2d((2.0, -3.0), 10.0, 1.0) == (12.0, -2.0)


def test_rotate_2d_quarter_turn():
    x, y = rotate_2d((1.0, 0.0), 90.0)
    assert x == pytest.approx(0.0, abs=1e-12)
    assert y == pytest.approx(1.0)


def test_rotate_2d_negative_angle():
    x, y = rotate_2d((0.0, 2.0), -90.0)
    assert x == pytest.approx(2.0)
    assert y == pytest.approx(0.0, abs=1e-12)


def test_reflections():
    assert reflect_x((3.0, 4.0)) == (3.0, -4.0)
    assert reflect_y((3.0, 4.0)) == (-3.0, 4.0)


def test_shear_is_simultaneous():
    assert shear_2d((1.0, 1.0), 1.0, 0.0) == (2.0, 1.0)
    # sequential update would give (2, 3)
    assert shear_2d((1.0, 1.0), 1.0, 1.0) == (2.0, 2.0)


# ============================================================================
# COMPOSITION
# ============================================================================

@pytest.mark.parametrize("p", POINTS)
def test_identity_params(p):
    assert apply_transform(p, IDENTITY) == p
    assert apply_transform(p, TransformParams()) == p


@pytest.mark.parametrize("p", POINTS)
def test_reflect_x_involution(p):
    params = TransformParams(reflect_x=True)
    assert apply_transform(apply_transform(p, params), params) == p


@pytest.mark.parametrize("p", POINTS)
def test_reflect_y_involution(p):
    params = TransformParams(reflect_y=True)
    assert apply_transform(apply_transform(p, params), params) == p


def test_worked_example_scale_rotate_translate():
    params = TransformParams(scale_x=2.0, scale_y=2.0, rotation_degrees=90.0, translate_x=10.0)
    x, y = apply_transform((1.0, 0.0), params)
    assert x == pytest.approx(10.0)
    assert y == pytest.approx(2.0)


def test_scale_happens_before_rotation():
    params = TransformParams(scale_x=2.0, scale_y=1.0, rotation_degrees=90.0)
    x, y = apply_transform((1.0, 0.0), params)
    # rotating first would leave (0, 1)
    assert x == pytest.approx(0.0, abs=1e-12)
    assert y == pytest.approx(2.0)


def test_reflection_happens_before_shear():
    params = TransformParams(reflect_y=True, shear_y=1.0)
    # reflect → (-1, 0), shear → (-1, -1); shearing first would give (-1, 1)
    assert apply_transform((1.0, 0.0), params) == (-1.0, -1.0)


def test_translation_is_last():
    params = TransformParams(scale_x=3.0, scale_y=3.0, translate_x=1.0, translate_y=1.0)
    assert apply_transform((1.0, 1.0), params) == (4.0, 4.0)


def test_double_reflection_is_half_turn():
    both = apply_transform((3.0, 4.0), TransformParams(reflect_x=True, reflect_y=True))
    turned = apply_transform((3.0, 4.0), TransformParams(rotation_degrees=180.0))
    assert both == (-3.0, -4.0)
    assert turned == pytest.approx(both)


def test_zero_scale_collapses_to_translation():
    params = TransformParams(scale_x=0.0, scale_y=0.0, rotation_degrees=33.0,
                             shear_x=0.5, translate_x=7.0, translate_y=-2.0)
    for p in POINTS:
        x, y = apply_transform(p, params)
        assert x == pytest.approx(7.0)
        assert y == pytest.approx(-2.0)


def test_nan_propagates():
    x, y = apply_transform((float("nan"), 1.0), IDENTITY)
    # rotation mixes the axes, so y picks up the NaN too
    assert math.isnan(x)
    assert math.isnan(y)


def test_apply_transform_is_pure():
    params = TransformParams(scale_x=1.8, scale_y=1.8, rotation_degrees=42.0,
                             reflect_y=True, shear_x=0.9, shear_y=0.4,
                             translate_x=300.0, translate_y=520.0)
    first = apply_transform((22.0, 0.0), params)
    second = apply_transform((22.0, 0.0), params)
    assert first == second


def test_params_are_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        IDENTITY.scale_x = 2.0


def test_transform_polygon_preserves_order():
    params = TransformParams(translate_x=1.0)
    assert transform_polygon([(0.0, 0.0), (1.0, 0.0), (0.0, 1.0)], params) == [
        (1.0, 0.0), (2.0, 0.0), (1.0, 1.0)
    ]


# ============================================================================
# BATCHED
# ============================================================================

@pytest.mark.parametrize("params", [
    IDENTITY,
    TransformParams(scale_x=1.8, scale_y=1.8, rotation_degrees=-37.5,
                    reflect_y=True, shear_x=0.9, shear_y=0.4,
                    translate_x=250.0, translate_y=515.0),
    TransformParams(reflect_x=True, reflect_y=True, shear_x=-2.0, translate_y=3.0),
])
def test_transform_vertices_matches_scalar(params):
    pts = np.array(POINTS)
    batched = transform_vertices(pts, params)
    scalar = np.array([apply_transform(tuple(p), params) for p in pts])
    assert batched.shape == (len(POINTS), 2)
    np.testing.assert_allclose(batched, scalar, rtol=1e-12, atol=1e-9)


def test_transform_vertices_empty():
    out = transform_vertices(np.zeros((0, 2)), IDENTITY)
    assert out.shape == (0, 2)
