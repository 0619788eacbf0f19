"""Test the pixel canvas.

Tests for src.raster_core.canvas:
    - Construction validation (size, point size)
    - Bottom-left storage vs top-left export (to_array flip)
    - Point size squares, off-surface pixels dropped and counted
    - Even-odd polygon fill at pixel centers
    - PNG export round trip through Pillow

Run:
    pytest tests/test_canvas.py -v
"""

import numpy as np
import PIL.Image
import pytest

from src.raster_core.canvas import PixelCanvas
from src.raster_core.rasterizer import circle_midpoint, line_bresenham


WHITE = (255, 255, 255)
RED = (255, 0, 0)


@pytest.fixture
def canvas():
    """Small black canvas, 1 px points."""
    return PixelCanvas(8, 6)


# ============================================================================
# CONSTRUCTION
# ============================================================================

@pytest.mark.parametrize("w,h", [(0, 5), (5, 0), (-1, 3)])
def test_invalid_size_rejected(w, h):
    with pytest.raises(ValueError, match="Canvas size must be positive"):
        PixelCanvas(w, h)


def test_invalid_point_size_rejected():
    with pytest.raises(ValueError, match="point_size"):
        PixelCanvas(4, 4, point_size=0)


def test_background_fill():
    c = PixelCanvas(3, 2, background=(10, 20, 30))
    assert c.pixels.shape == (2, 3, 3)
    assert c.pixels.dtype == np.uint8
    assert np.all(c.pixels == np.array([10, 20, 30], dtype=np.uint8))


# ============================================================================
# PLOTTING
# ============================================================================

def test_plot_uses_bottom_left_origin(canvas):
    assert canvas.plot(0, 0, RED)
    assert tuple(canvas.pixels[0, 0]) == RED
    img = canvas.to_array()
    # bottom row of the exported image
    assert tuple(img[canvas.height - 1, 0]) == RED
    assert tuple(img[0, 0]) == (0, 0, 0)


def test_plot_off_surface(canvas):
    assert not canvas.plot(-1, 0, RED)
    assert not canvas.plot(0, canvas.height, RED)
    assert not canvas.plot(canvas.width, 2, RED)
    assert not np.any(canvas.pixels)


def test_plot_pixels_counts_only_visible(canvas):
    drawn = canvas.plot_pixels([(0, 0), (1, 1), (-5, 2), (100, 100), (1, 1)], WHITE)
    assert drawn == 3
    assert tuple(canvas.pixels[1, 1]) == WHITE


def test_plot_pixels_line(canvas):
    pixels = line_bresenham(0, 0, 7, 5)
    assert canvas.plot_pixels(pixels, WHITE) == len(pixels)
    for x, y in pixels:
        assert tuple(canvas.pixels[y, x]) == WHITE


def test_point_size_two_marks_square():
    c = PixelCanvas(6, 6, point_size=2)
    c.plot(2, 2, RED)
    marked = np.argwhere(np.all(c.pixels == RED, axis=2))
    assert {tuple(p) for p in marked} == {(2, 2), (2, 3), (3, 2), (3, 3)}


def test_point_size_three_is_centered():
    c = PixelCanvas(6, 6, point_size=3)
    c.plot(2, 2, RED)
    marked = np.argwhere(np.all(c.pixels == RED, axis=2))
    assert len(marked) == 9
    assert marked.min(axis=0).tolist() == [1, 1]
    assert marked.max(axis=0).tolist() == [3, 3]


def test_large_point_partially_visible():
    c = PixelCanvas(4, 4, point_size=3)
    assert c.plot(0, 0, RED)
    assert np.all(c.pixels[0:2, 0:2] == RED)


def test_empty_circle_draws_nothing(canvas):
    assert canvas.plot_pixels(circle_midpoint(3, 3, 0), WHITE) == 0
    assert not np.any(canvas.pixels)


def test_clear_restores_background():
    c = PixelCanvas(4, 4, background=(1, 2, 3))
    c.plot(1, 1, RED)
    c.clear()
    assert np.all(c.pixels == np.array([1, 2, 3], dtype=np.uint8))


# ============================================================================
# POLYGON FILL
# ============================================================================

def test_fill_square():
    c = PixelCanvas(8, 8)
    filled = c.fill_polygon([(0, 0), (4, 0), (4, 4), (0, 4)], RED)
    assert filled == 16
    assert np.all(c.pixels[0:4, 0:4] == RED)
    assert not np.any(c.pixels[4:, :])
    assert not np.any(c.pixels[:, 4:])


def test_fill_triangle_inside_bbox():
    c = PixelCanvas(20, 20)
    filled = c.fill_polygon([(2.0, 2.0), (18.0, 2.0), (10.0, 16.0)], RED)
    marked = np.argwhere(np.all(c.pixels == RED, axis=2))
    assert filled == len(marked) > 0
    assert marked[:, 0].min() >= 2 and marked[:, 0].max() <= 15
    assert marked[:, 1].min() >= 2 and marked[:, 1].max() <= 17
    # centroid row is fully covered around the apex column
    assert tuple(c.pixels[6, 10]) == RED


def test_fill_clipped_to_canvas():
    c = PixelCanvas(4, 4)
    filled = c.fill_polygon([(-10, -10), (10, -10), (10, 10), (-10, 10)], RED)
    assert filled == 16
    assert np.all(c.pixels == RED)


@pytest.mark.parametrize("verts", [
    [],
    [(0, 0), (3, 3)],
    [(0, 0), (3, float('nan')), (3, 0)],
])
def test_fill_degenerate(verts):
    c = PixelCanvas(4, 4)
    assert c.fill_polygon(verts, RED) == 0
    assert not np.any(c.pixels)


# ============================================================================
# EXPORT
# ============================================================================

def test_save_png_roundtrip(tmp_path):
    c = PixelCanvas(5, 3, background=(0, 0, 255))
    c.plot(4, 2, RED)  # top-right in image order
    out = c.save(tmp_path / "nested" / "canvas.png")

    assert out.exists()
    img = np.asarray(PIL.Image.open(out).convert("RGB"))
    assert img.shape == (3, 5, 3)
    assert tuple(img[0, 4]) == RED
    assert tuple(img[2, 0]) == (0, 0, 255)
    assert not list(tmp_path.glob("nested/*.tmp*"))
