"""2D affine transforms without any built-in transform primitive.

Provides:
    - Individual steps: scale_2d, rotate_2d, reflect_x, reflect_y, shear_2d,
      translate_2d
    - TransformParams: immutable bundle of every step's parameters
    - apply_transform: the fixed Scale → Rotate → Reflect → Shear → Translate
      composition used to place shapes defined in local coordinates
    - transform_vertices: numpy-batched apply_transform for vertex arrays

Order is part of the contract. Scale and rotation act about the local
origin, so a shape is sized and oriented before it is mirrored, sheared and
finally moved to its world position. Reordering changes results.

Identity parameters are plain values (scale 1, angle 0, shear 0, no
reflection, no translation); there is no separate on/off switch per step.
NaN and inf propagate through unchanged; nothing is validated here.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List, Tuple

import numpy as np

Point = Tuple[float, float]


@dataclass(frozen=True, slots=True)
class TransformParams:
    """Parameters for one ``apply_transform`` call.

    Parameters
    ----------
    scale_x, scale_y : float
        Per-axis scale factors (1.0 = unchanged).
    rotation_degrees : float
        Counter-clockwise rotation about the origin, in degrees.
    reflect_x : bool
        Mirror across the X axis (negate y).
    reflect_y : bool
        Mirror across the Y axis (negate x).
    shear_x, shear_y : float
        Shear factors: x' = x + shear_x*y, y' = y + shear_y*x.
    translate_x, translate_y : float
        Final offset in world units.
    """

    scale_x: float = 1.0
    scale_y: float = 1.0
    rotation_degrees: float = 0.0
    reflect_x: bool = False
    reflect_y: bool = False
    shear_x: float = 0.0
    shear_y: float = 0.0
    translate_x: float = 0.0
    translate_y: float = 0.0


IDENTITY = TransformParams()


def translate_2d(p: Point, tx: float, ty: float) -> Point:
    return (p[0] + tx, p[1] + ty)


def scale_2d(p: Point, sx: float, sy: float) -> Point:
    return (p[0] * sx, p[1] * sy)


def rotate_2d(p: Point, angle_degrees: float) -> Point:
    """Rotate counter-clockwise about the origin."""
    rad = math.radians(angle_degrees)
    c, s = math.cos(rad), math.sin(rad)
    return (p[0] * c - p[1] * s, p[0] * s + p[1] * c)


def reflect_x(p: Point) -> Point:
    """Mirror across the X axis."""
    return (p[0], -p[1])


def reflect_y(p: Point) -> Point:
    """Mirror across the Y axis."""
    return (-p[0], p[1])


def shear_2d(p: Point, shx: float, shy: float) -> Point:
    """Shear using the pre-shear x and y for both outputs."""
    x, y = p
    return (x + shx * y, y + shy * x)


def apply_transform(p: Point, params: TransformParams) -> Point:
    """Map a local-space point to world space.

    Parameters
    ----------
    p : Point
        Local (x, y)
    params : TransformParams
        Step parameters

    Returns
    -------
    Point
        World (x, y)

    Notes
    -----
    Steps, in order:
        1. scale_2d(scale_x, scale_y)
        2. rotate_2d(rotation_degrees)
        3. reflect_x if reflect_x, then reflect_y if reflect_y
        4. shear_2d(shear_x, shear_y)
        5. translate_2d(translate_x, translate_y)
    """
    p = scale_2d(p, params.scale_x, params.scale_y)
    p = rotate_2d(p, params.rotation_degrees)
    if params.reflect_x:
        p = reflect_x(p)
    if params.reflect_y:
        p = reflect_y(p)
    p = shear_2d(p, params.shear_x, params.shear_y)
    return translate_2d(p, params.translate_x, params.translate_y)


def transform_polygon(vertices: Iterable[Point], params: TransformParams) -> List[Point]:
    """Apply ``apply_transform`` to every vertex, preserving order."""
    return [apply_transform(v, params) for v in vertices]


def transform_vertices(vertices: np.ndarray, params: TransformParams) -> np.ndarray:
    """Batched ``apply_transform`` over an (N, 2) array.

    Parameters
    ----------
    vertices : np.ndarray
        Local vertices, shape (N, 2)
    params : TransformParams
        Step parameters

    Returns
    -------
    np.ndarray
        World vertices, shape (N, 2), float64

    Notes
    -----
    Same step order as ``apply_transform``; results agree with the scalar
    path to float64 precision.
    """
    pts = np.asarray(vertices, dtype=np.float64).reshape(-1, 2)
    x = pts[:, 0] * params.scale_x
    y = pts[:, 1] * params.scale_y

    rad = math.radians(params.rotation_degrees)
    c, s = math.cos(rad), math.sin(rad)
    x, y = x * c - y * s, x * s + y * c

    if params.reflect_x:
        y = -y
    if params.reflect_y:
        x = -x

    x, y = x + params.shear_x * y, y + params.shear_y * x

    return np.stack([x + params.translate_x, y + params.translate_y], axis=1)
