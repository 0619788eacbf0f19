"""Scene layer: composes rasterizer and transform calls onto a canvas.

Provides:
    - Line algorithm registry (dda, bresenham) and polyline rasterization
    - Sagging wire vertices with midpoint-circle bulbs
    - Kite: diamond in local space (plus an off-center sticker and tail)
      placed by the affine pipeline, with
      TransformToggles deriving its TransformParams from a flight position
    - render_scene(): SceneV1 config → PixelCanvas
    - render_to_file(): YAML in, PNG + metadata sidecar out (used by
      scripts/render_scene.py)

The core modules (rasterizer, transforms) never import from here.

Kite defaults follow the 1400x800 village scene: a 1.8x scale,
a ±60° sway, mirroring across the Y axis and a (0.90, 0.40) shear, each
switched on by its toggle.
"""

from __future__ import annotations

import logging
import math
import time
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

from src.raster_core.canvas import Color, PixelCanvas
from src.raster_core.rasterizer import Pixel, circle_midpoint, line_bresenham, line_dda
from src.raster_core.transforms import Point, TransformParams, transform_polygon
from src.utils import fs, validators

logger = logging.getLogger(__name__)

LineFn = Callable[[int, int, int, int], List[Pixel]]

ALGORITHMS: Dict[str, LineFn] = {
    "dda": line_dda,
    "bresenham": line_bresenham,
}

SCENE_WIDTH = 1400
KITE_BASE_Y = 520.0

# local space, centered on the bridle point
KITE_VERTICES: Tuple[Point, ...] = (
    (0.0, 28.0),    # top
    (22.0, 0.0),    # right
    (0.0, -28.0),   # bottom
    (-22.0, 0.0),   # left
)
KITE_STICK: Tuple[Point, Point] = ((-20.0, 0.0), (20.0, 0.0))
# off-axis parts, so a reflection across Y shows up even on a symmetric diamond
KITE_STICKER: Tuple[Point, ...] = ((8.0, 10.0), (16.0, 10.0), (16.0, 2.0), (8.0, 2.0))
KITE_TAIL: Tuple[Point, Point] = ((10.0, -28.0), (20.0, -75.0))


def rasterize_line(algorithm: str, x1: int, y1: int, x2: int, y2: int) -> List[Pixel]:
    """Dispatch to a registered line algorithm.

    Raises
    ------
    ValueError
        If the algorithm name is unknown
    """
    try:
        fn = ALGORITHMS[algorithm]
    except KeyError:
        raise ValueError(
            f"Unknown line algorithm '{algorithm}', expected one of {sorted(ALGORITHMS)}"
        ) from None
    return fn(x1, y1, x2, y2)


def rasterize_polyline(
    points: Sequence[Point],
    algorithm: str = "dda",
    closed: bool = False
) -> List[Pixel]:
    """Rasterize consecutive segments of a polyline.

    Parameters
    ----------
    points : Sequence[Point]
        Float vertices; each is truncated toward zero before rasterizing
    algorithm : str
        "dda" or "bresenham"
    closed : bool
        Also connect the last vertex back to the first

    Returns
    -------
    List[Pixel]
        Concatenated segment sequences; shared vertices appear twice

    Notes
    -----
    A single vertex yields one pixel; no vertices yield nothing.
    """
    pts = [(int(x), int(y)) for x, y in points]
    if not pts:
        return []
    if len(pts) == 1:
        return rasterize_line(algorithm, *pts[0], *pts[0])

    if closed:
        pts = pts + [pts[0]]

    pixels: List[Pixel] = []
    for (x1, y1), (x2, y2) in zip(pts[:-1], pts[1:]):
        pixels.extend(rasterize_line(algorithm, x1, y1, x2, y2))
    return pixels


def sag_wire(
    start_x: float,
    end_x: float,
    y: float,
    sag: float = 6.0,
    segments: int = 6
) -> List[Point]:
    """Vertices of a wire hanging between two poles.

    y(t) = y + sag * sin(pi * t) for t = i / segments, i = 0..segments.
    A positive sag bows upward in the +Y-up frame, matching the festival
    light strings this is drawn for.
    """
    if segments < 1:
        raise ValueError(f"segments must be >= 1, got {segments}")
    points = []
    for i in range(segments + 1):
        t = i / segments
        points.append((start_x + t * (end_x - start_x), y + sag * math.sin(t * math.pi)))
    return points


# ============================================================================
# KITE
# ============================================================================

@dataclass(frozen=True, slots=True)
class TransformToggles:
    """Which kite effects are visible; each maps to one TransformParams field.

    Toggles never gate the pipeline itself: an "off" effect is simply its
    identity value in the derived parameters.
    """

    scale: bool = False
    rotate: bool = False
    reflect: bool = False
    shear: bool = False

    @classmethod
    def all_on(cls) -> "TransformToggles":
        return cls(scale=True, rotate=True, reflect=True, shear=True)

    @classmethod
    def parse(cls, spec: str) -> "TransformToggles":
        """Build from a comma list such as "scale,shear" ("all" / "none" allowed).

        Raises
        ------
        ValueError
            On an unknown toggle name
        """
        names = [s.strip().lower() for s in spec.split(",") if s.strip()]
        if names == ["all"]:
            return cls.all_on()
        if names in ([], ["none"]):
            return cls()
        known = {"scale", "rotate", "reflect", "shear"}
        unknown = [n for n in names if n not in known]
        if unknown:
            raise ValueError(f"Unknown toggles {unknown}, expected any of {sorted(known)}")
        return cls(**{n: True for n in names})


def kite_params(
    position: float,
    toggles: TransformToggles,
    scene_width: float = SCENE_WIDTH,
    base_y: float = KITE_BASE_Y
) -> TransformParams:
    """Derive the kite's transform for a flight position.

    Parameters
    ----------
    position : float
        Animation position (advances ~1 per frame)
    toggles : TransformToggles
        Enabled effects
    scene_width : float
        Scene width in px; the kite wraps every scene_width + 200
    base_y : float
        Altitude the kite bobs around

    Returns
    -------
    TransformParams
        scale 1.8 | rotation sin(0.02*pos)*60° | reflect across Y |
        shear (0.90, 0.40), each only when toggled, plus the flight offset
    """
    return TransformParams(
        scale_x=1.8 if toggles.scale else 1.0,
        scale_y=1.8 if toggles.scale else 1.0,
        rotation_degrees=math.sin(position * 0.02) * 60.0 if toggles.rotate else 0.0,
        reflect_x=False,
        reflect_y=toggles.reflect,
        shear_x=0.90 if toggles.shear else 0.0,
        shear_y=0.40 if toggles.shear else 0.0,
        translate_x=math.fmod(position, scene_width + 200.0) - 100.0,
        translate_y=base_y + 15.0 * math.sin(position * 0.03),
    )


def params_from_config(cfg: validators.TransformParamsV1) -> TransformParams:
    return TransformParams(
        scale_x=cfg.scale[0],
        scale_y=cfg.scale[1],
        rotation_degrees=cfg.rotation_degrees,
        reflect_x=cfg.reflect_x,
        reflect_y=cfg.reflect_y,
        shear_x=cfg.shear[0],
        shear_y=cfg.shear[1],
        translate_x=cfg.translate[0],
        translate_y=cfg.translate[1],
    )


def draw_kite(
    canvas: PixelCanvas,
    params: TransformParams,
    right_color: Color = (255, 64, 64),
    left_color: Color = (64, 166, 255),
    outline_color: Color = (20, 20, 20),
    stick_color: Color = (242, 217, 64),
    sticker_color: Color = (26, 242, 77)
) -> Dict[str, int]:
    """Draw the kite: two colored halves, a Bresenham outline, a cross stick,
    a sticker on the right half and a tail hanging off-center.

    The halves use different colors and the sticker and tail sit right of
    the centerline, so a reflection is visible at a glance. The tail shares
    the stick color.

    Returns
    -------
    Dict[str, int]
        Pixels drawn per part ("fill", "outline", "stick", "sticker", "tail")
    """
    top, right, bottom, left = transform_polygon(KITE_VERTICES, params)
    fill = canvas.fill_polygon([top, right, bottom], right_color)
    fill += canvas.fill_polygon([top, bottom, left], left_color)

    outline = canvas.plot_pixels(
        rasterize_polyline([top, right, bottom, left], "bresenham", closed=True),
        outline_color
    )
    stick = canvas.plot_pixels(
        rasterize_polyline(transform_polygon(KITE_STICK, params), "bresenham"),
        stick_color
    )
    sticker = canvas.fill_polygon(transform_polygon(KITE_STICKER, params), sticker_color)
    tail = canvas.plot_pixels(
        rasterize_polyline(transform_polygon(KITE_TAIL, params), "bresenham"),
        stick_color
    )
    return {"fill": fill, "outline": outline, "stick": stick, "sticker": sticker, "tail": tail}


# ============================================================================
# SCENE
# ============================================================================

def draw_wire(canvas: PixelCanvas, wire: validators.WireV1) -> Dict[str, int]:
    """Draw a sagging wire and a bulb at each of its vertices."""
    points = sag_wire(wire.start_x, wire.end_x, wire.y, wire.sag, wire.segments)
    drawn = canvas.plot_pixels(rasterize_polyline(points, wire.algorithm), wire.color)

    bulbs = 0
    for i, (x, y) in enumerate(points):
        color = wire.bulb_colors[(i + wire.phase) % len(wire.bulb_colors)]
        bulbs += canvas.plot_pixels(circle_midpoint(int(x), int(y), wire.bulb_radius), color)
    return {"wire": drawn, "bulbs": bulbs}


def render_scene(
    scene: validators.SceneV1,
    kite_position: Optional[float] = None,
    toggles: Optional[TransformToggles] = None
) -> Tuple[PixelCanvas, Dict[str, int]]:
    """Rasterize every primitive of a validated scene.

    Parameters
    ----------
    scene : validators.SceneV1
        Validated scene config
    kite_position : float, optional
        Overrides scene.kite.position
    toggles : TransformToggles, optional
        Overrides scene.kite.toggles (ignored when the kite has an explicit
        transform)

    Returns
    -------
    Tuple[PixelCanvas, Dict[str, int]]
        Canvas and per-category pixel counts

    Notes
    -----
    Draw order: circles, lines, wires, kite (later items paint over).
    """
    c = scene.canvas
    canvas = PixelCanvas(c.width, c.height, c.background, c.point_size)
    counts = {"circles": 0, "lines": 0, "wires": 0, "bulbs": 0, "kite": 0}

    for circle in scene.circles:
        counts["circles"] += canvas.plot_pixels(
            circle_midpoint(circle.center[0], circle.center[1], circle.radius), circle.color
        )

    for line in scene.lines:
        counts["lines"] += canvas.plot_pixels(
            rasterize_line(line.algorithm, *line.start, *line.end), line.color
        )

    for wire in scene.wires:
        drawn = draw_wire(canvas, wire)
        counts["wires"] += drawn["wire"]
        counts["bulbs"] += drawn["bulbs"]

    if scene.kite is not None:
        kite = scene.kite
        if kite.transform is not None:
            params = params_from_config(kite.transform)
        else:
            if toggles is None:
                toggles = TransformToggles(**kite.toggles.model_dump())
            position = kite.position if kite_position is None else kite_position
            params = kite_params(position, toggles, scene_width=c.width, base_y=0.65 * c.height)
        logger.debug("Kite params: %s", params)
        drawn = draw_kite(canvas, params, kite.right_color, kite.left_color,
                          kite.outline_color, kite.stick_color, kite.sticker_color)
        counts["kite"] = sum(drawn.values())

    return canvas, counts


def render_to_file(
    config_path: Union[str, Path],
    output_path: Union[str, Path],
    kite_position: Optional[float] = None,
    toggles: Optional[TransformToggles] = None
) -> Dict[str, object]:
    """Load a scene file, render it and write PNG + metadata YAML.

    Parameters
    ----------
    config_path : Union[str, Path]
        scene.v1 YAML
    output_path : Union[str, Path]
        Image path; metadata goes next to it with a .yaml suffix
    kite_position : float, optional
        Overrides the configured kite position
    toggles : TransformToggles, optional
        Overrides the configured kite toggles

    Returns
    -------
    Dict[str, object]
        Metadata written to the sidecar

    Raises
    ------
    FileNotFoundError
        If the config file is missing
    ValueError
        If the config fails validation
    RuntimeError
        If the image or sidecar cannot be written
    """
    scene = validators.load_scene_config(config_path)
    output_path = Path(output_path)

    t0 = time.perf_counter()
    canvas, counts = render_scene(scene, kite_position=kite_position, toggles=toggles)
    elapsed = time.perf_counter() - t0
    canvas.save(output_path)

    metadata = {
        "scene": scene.name,
        "config": str(config_path),
        "image": str(output_path),
        "size": [canvas.width, canvas.height],
        "pixels": counts,
        "render_seconds": round(elapsed, 6),
    }
    if toggles is not None:
        metadata["toggles"] = asdict(toggles)
    fs.atomic_yaml_dump(metadata, output_path.with_suffix(".yaml"))

    logger.info("Rendered scene '%s' (%d px) to %s in %.3fs",
                scene.name, sum(counts.values()), output_path, elapsed)
    return metadata
