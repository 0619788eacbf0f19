"""Raster primitives and affine transforms.

Modules:
    - rasterizer: DDA / Bresenham lines, midpoint circles → pixel sequences
    - transforms: scale, rotate, reflect, shear, translate and their fixed
      composition
    - canvas: numpy RGB surface the pixel sequences are marked on
    - scene: config-driven composition (wires, kite, lines, circles)

Convenience imports:
    from src.raster_core import line_bresenham, apply_transform, TransformParams
"""

from .rasterizer import circle_midpoint, line_bresenham, line_dda, octant_points
from .transforms import (
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

__all__ = [
    'circle_midpoint',
    'line_bresenham',
    'line_dda',
    'octant_points',
    'IDENTITY',
    'TransformParams',
    'apply_transform',
    'reflect_x',
    'reflect_y',
    'rotate_2d',
    'scale_2d',
    'shear_2d',
    'transform_polygon',
    'transform_vertices',
    'translate_2d',
]
