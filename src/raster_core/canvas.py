"""Pixel canvas that rasterizer output is marked on.

The rasterizer only returns pixel sequences; this surface owns the image.
The world is orthographic with a bottom-left origin (+Y up), and every
pixel is drawn as a square point of configurable size.

Storage:
    - (H, W, 3) uint8 numpy array, row index == world y (row 0 = bottom)
    - to_array() flips to image order (row 0 = top) for export

Out-of-surface pixels are dropped silently here; the rasterizer itself does
no clipping.
"""

import logging
import math
from pathlib import Path
from typing import Iterable, Sequence, Tuple, Union

import numpy as np

from src.utils import fs

logger = logging.getLogger(__name__)

Color = Tuple[int, int, int]


class PixelCanvas:
    """RGB raster surface with bottom-left origin.

    Attributes
    ----------
    width, height : int
        Surface size in pixels
    point_size : int
        Edge length of the square marked for each pixel (>= 1)
    pixels : np.ndarray
        (height, width, 3) uint8 storage, row 0 = bottom
    """

    def __init__(
        self,
        width: int,
        height: int,
        background: Color = (0, 0, 0),
        point_size: int = 1
    ):
        """Create a cleared canvas.

        Raises
        ------
        ValueError
            If width, height or point_size is not positive
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas size must be positive, got {width}x{height}")
        if point_size < 1:
            raise ValueError(f"point_size must be >= 1, got {point_size}")

        self.width = int(width)
        self.height = int(height)
        self.point_size = int(point_size)
        self.background = tuple(background)
        self.pixels = np.empty((self.height, self.width, 3), dtype=np.uint8)
        self.clear()

    def clear(self) -> None:
        self.pixels[:] = np.asarray(self.background, dtype=np.uint8)

    def _point_span(self, v: int, limit: int) -> Tuple[int, int]:
        # square centered on v; even sizes extend one more pixel up/right
        lo = v - (self.point_size - 1) // 2
        hi = lo + self.point_size
        return max(lo, 0), min(hi, limit)

    def plot(self, x: int, y: int, color: Color) -> bool:
        """Mark one point; returns False when it lies fully off-surface."""
        x0, x1 = self._point_span(x, self.width)
        y0, y1 = self._point_span(y, self.height)
        if x0 >= x1 or y0 >= y1:
            return False
        self.pixels[y0:y1, x0:x1] = color
        return True

    def plot_pixels(self, pixels: Iterable[Tuple[int, int]], color: Color) -> int:
        """Mark a pixel sequence.

        Parameters
        ----------
        pixels : Iterable[Tuple[int, int]]
            Rasterizer output, in any order; duplicates are harmless
        color : Color
            8-bit RGB

        Returns
        -------
        int
            Number of pixels that landed on the surface
        """
        drawn = 0
        total = 0
        for x, y in pixels:
            total += 1
            if self.plot(x, y, color):
                drawn += 1
        if drawn < total:
            logger.debug("Dropped %d of %d pixels outside %dx%d canvas",
                         total - drawn, total, self.width, self.height)
        return drawn

    def fill_polygon(self, vertices: Sequence[Tuple[float, float]], color: Color) -> int:
        """Fill a simple polygon with even-odd scanlines.

        Parameters
        ----------
        vertices : Sequence[Tuple[float, float]]
            World-space vertices (float), closed implicitly
        color : Color
            8-bit RGB

        Returns
        -------
        int
            Number of pixels filled

        Notes
        -----
        A pixel (x, y) is inside when its center (x + 0.5, y + 0.5) is.
        Fewer than 3 vertices, or any non-finite vertex, fills nothing.
        """
        pts = np.asarray(vertices, dtype=np.float64).reshape(-1, 2)
        if len(pts) < 3 or not np.all(np.isfinite(pts)):
            return 0

        y_lo = max(int(math.floor(pts[:, 1].min())), 0)
        y_hi = min(int(math.ceil(pts[:, 1].max())), self.height - 1)
        nxt = np.roll(pts, -1, axis=0)

        filled = 0
        for row in range(y_lo, y_hi + 1):
            yc = row + 0.5
            ya, yb = pts[:, 1], nxt[:, 1]
            crosses = ((ya <= yc) & (yb > yc)) | ((yb <= yc) & (ya > yc))
            if not np.any(crosses):
                continue
            xa, xb = pts[crosses, 0], nxt[crosses, 0]
            t = (yc - ya[crosses]) / (yb[crosses] - ya[crosses])
            xs = np.sort(xa + t * (xb - xa))
            for left, right in zip(xs[0::2], xs[1::2]):
                # pixel centers in [left, right)
                c0 = max(int(math.ceil(left - 0.5)), 0)
                c1 = min(int(math.ceil(right - 0.5)), self.width)
                if c1 > c0:
                    self.pixels[row, c0:c1] = color
                    filled += c1 - c0
        return filled

    def to_array(self) -> np.ndarray:
        """Return a copy in image order (row 0 = top)."""
        return np.flipud(self.pixels).copy()

    def save(self, path: Union[str, Path]) -> Path:
        """Write the canvas as an image (format from extension), atomically."""
        path = Path(path)
        fs.atomic_save_image(self.to_array(), path)
        logger.debug("Saved %dx%d canvas to %s", self.width, self.height, path)
        return path
