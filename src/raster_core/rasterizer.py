"""Integer rasterization of lines and circles.

Provides:
    - DDA line drawing (floating per-step increments, no error correction)
    - Bresenham line drawing (integer decision variable, four slope regimes)
    - Midpoint circle drawing (integer decision variable, 8-way symmetry)

Used by:
    - Scene layer: wires, fishing lines, festival bulbs
    - Canvas: every emitted pixel is marked as-is on the surface
    - Tests: pixel-exact reference sequences

All functions are pure: they return a fresh list of (x, y) integer pixels in
scan order and never touch a drawing surface. Coordinates are in pixels,
bottom-left origin, +Y up (same frame as the canvas).

No input is rejected. Non-finite coordinates and negative radii produce an
empty sequence; callers bound the work (e.g. huge radii) themselves.
"""

import math
from typing import List, Tuple

Pixel = Tuple[int, int]


def _round_half_away(v: float) -> int:
    """Round to nearest integer, ties away from zero (C ``round``).

    Python's builtin ``round`` is banker's rounding, which would pull every
    other .5 sample of a DDA line the wrong way.
    """
    if v >= 0.0:
        return int(math.floor(v + 0.5))
    return -int(math.floor(-v + 0.5))


def _all_finite(*values: float) -> bool:
    return all(math.isfinite(v) for v in values)


def line_dda(x1: int, y1: int, x2: int, y2: int) -> List[Pixel]:
    """Rasterize a line with the Digital Differential Analyzer.

    Parameters
    ----------
    x1, y1 : int
        Start point (px)
    x2, y2 : int
        End point (px)

    Returns
    -------
    List[Pixel]
        ``max(|dx|, |dy|) + 1`` pixels from start to end, or exactly one
        pixel when the endpoints coincide

    Notes
    -----
    Increments are ``dx/steps`` and ``dy/steps``; the float accumulator is
    advanced after each emission and rounded half-away-from-zero. Error
    accumulates over long lines; no correction is applied.

    Swapping the endpoints yields the reversed sequence only when the
    increments are exact in binary floating point (dyadic steps such as
    1/2 or 1/4). Otherwise the accumulated error can land a .5 tie on
    opposite sides in the two directions, and the pixel sets differ:
    (0,0)->(-12,-2) emits (-3,-1) where (-12,-2)->(0,0) emits (-3,0).
    """
    if not _all_finite(x1, y1, x2, y2):
        return []

    xdif = float(x2) - float(x1)
    ydif = float(y2) - float(y1)
    steps = int(max(abs(xdif), abs(ydif)))

    if steps == 0:
        return [(int(x1), int(y1))]

    xinc = xdif / steps
    yinc = ydif / steps

    pixels = []
    x, y = float(x1), float(y1)
    for _ in range(steps + 1):
        pixels.append((_round_half_away(x), _round_half_away(y)))
        x += xinc
        y += yinc
    return pixels


def line_bresenham(x1: int, y1: int, x2: int, y2: int) -> List[Pixel]:
    """Rasterize a line with Bresenham's integer algorithm.

    Parameters
    ----------
    x1, y1 : int
        First endpoint (px)
    x2, y2 : int
        Second endpoint (px)

    Returns
    -------
    List[Pixel]
        ``|dominant delta| + 1`` pixels in the regime's canonical direction

    Notes
    -----
    Vertical lines are emitted bottom to top. Otherwise the slope
    m = dy/dx picks one of four regimes, each with its own decision
    recurrence (step branch when pk >= 0):

        0 <= m <= 1    start at smaller x, x += 1, maybe y += 1
        m > 1          start at smaller y, y += 1, maybe x += 1
        -1 <= m < 0    start at smaller x, x += 1, maybe y -= 1
        m < -1         start at larger y,  y -= 1, maybe x += 1

    Because the endpoints are normalized first, (A, B) and (B, A) give the
    same pixel set in the same order; the result is never the reverse of
    the other call.
    """
    if not _all_finite(x1, y1, x2, y2):
        return []
    x1, y1, x2, y2 = int(x1), int(y1), int(x2), int(y2)

    if x1 == x2:
        ys, ye = min(y1, y2), max(y1, y2)
        return [(x1, y) for y in range(ys, ye + 1)]

    m = (y2 - y1) / (x2 - x1)

    if abs(m) <= 1.0 and x1 > x2:
        x1, y1, x2, y2 = x2, y2, x1, y1
    if m > 1.0 and y1 > y2:
        x1, y1, x2, y2 = x2, y2, x1, y1
    if m < -1.0 and y1 < y2:
        x1, y1, x2, y2 = x2, y2, x1, y1

    if 0.0 <= m <= 1.0:
        return _bresenham_gentle_rising(x1, y1, x2, y2)
    if m > 1.0:
        return _bresenham_steep_rising(x1, y1, x2, y2)
    if m >= -1.0:
        return _bresenham_gentle_falling(x1, y1, x2, y2)
    return _bresenham_steep_falling(x1, y1, x2, y2)


def _bresenham_gentle_rising(x1: int, y1: int, x2: int, y2: int) -> List[Pixel]:
    dx, dy = x2 - x1, y2 - y1
    pk = 2 * dy - dx
    x, y = x1, y1
    pixels = []
    for _ in range(dx + 1):
        pixels.append((x, y))
        if pk < 0:
            x += 1
            pk += 2 * dy
        else:
            x += 1
            y += 1
            pk += 2 * dy - 2 * dx
    return pixels


def _bresenham_steep_rising(x1: int, y1: int, x2: int, y2: int) -> List[Pixel]:
    dx, dy = x2 - x1, y2 - y1
    pk = 2 * dx - dy
    x, y = x1, y1
    pixels = []
    for _ in range(dy + 1):
        pixels.append((x, y))
        if pk < 0:
            y += 1
            pk += 2 * dx
        else:
            x += 1
            y += 1
            pk += 2 * dx - 2 * dy
    return pixels


def _bresenham_gentle_falling(x1: int, y1: int, x2: int, y2: int) -> List[Pixel]:
    dx, fall = x2 - x1, y1 - y2
    pk = 2 * fall - dx
    x, y = x1, y1
    pixels = []
    for _ in range(dx + 1):
        pixels.append((x, y))
        if pk < 0:
            x += 1
            pk += 2 * fall
        else:
            x += 1
            y -= 1
            pk += 2 * fall - 2 * dx
    return pixels


def _bresenham_steep_falling(x1: int, y1: int, x2: int, y2: int) -> List[Pixel]:
    dx, fall = x2 - x1, y1 - y2
    pk = 2 * dx - fall
    x, y = x1, y1
    pixels = []
    for _ in range(fall + 1):
        pixels.append((x, y))
        if pk < 0:
            y -= 1
            pk += 2 * dx
        else:
            x += 1
            y -= 1
            pk += 2 * dx - 2 * fall
    return pixels


def circle_midpoint(cx: int, cy: int, r: int) -> List[Pixel]:
    """Rasterize a circle outline with the midpoint algorithm.

    Parameters
    ----------
    cx, cy : int
        Center (px)
    r : int
        Radius (px), expected >= 0

    Returns
    -------
    List[Pixel]
        Eight pixels per octant step; empty for r <= 0

    Notes
    -----
    Walks one octant from (0, r) while x < y with p0 = 1 - r:
        p < 0  → x += 1,          p += 2x + 3
        p >= 0 → x += 1, y -= 1,  p += 2x - 2y + 5
    and expands every step through ``octant_points``. Points on the octant
    boundary (x == y) are never reached by the loop, so radius 0 gives an
    empty sequence rather than the center pixel.
    """
    if not _all_finite(cx, cy, r):
        return []
    cx, cy, r = int(cx), int(cy), int(r)

    x, y = 0, r
    p = 1 - r
    pixels: List[Pixel] = []
    while x < y:
        pixels.extend(octant_points(cx, cy, x, y))
        if p < 0:
            x += 1
            p += 2 * x + 3
        else:
            x += 1
            y -= 1
            p += 2 * x - 2 * y + 5
    return pixels


def octant_points(cx: int, cy: int, x: int, y: int) -> List[Pixel]:
    """Expand one octant offset into its eight symmetric pixels.

    Order: (x,y) (y,x) (-x,y) (-y,x) (-x,-y) (-y,-x) (x,-y) (y,-x).
    Coincident pixels (x == 0 or x == y) are kept.
    """
    return [
        (cx + x, cy + y),
        (cx + y, cy + x),
        (cx - x, cy + y),
        (cx - y, cy + x),
        (cx - x, cy - y),
        (cx - y, cy - x),
        (cx + x, cy - y),
        (cx + y, cy - x),
    ]
