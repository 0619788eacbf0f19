"""YAML schema validation for scene files.

Provides centralized validation of scene configs using pydantic:
    - Canvas (scene.v1 `canvas`): size, background, point size
    - Primitives: lines (dda | bresenham), circles, sagging wires with bulbs
    - Kite: toggle-derived or explicit affine transform parameters

Lowest layer: nothing here imports src.raster_core. The rasterizer and
transform core never validate their inputs; range checks
(non-negative radius, positive canvas, known algorithm names) happen here,
once, when a file is loaded.

Units:
    - Geometry: pixels, bottom-left origin, +Y up
    - Angles: degrees
    - Colors: 8-bit RGB triples

Usage:
    from src.utils import validators

    scene = validators.load_scene_config("configs/scene_demo.v1.yaml")
    for line in scene.lines:
        print(line.algorithm, line.start, line.end)
"""

from pathlib import Path
from typing import Annotated, List, Optional, Tuple, Union

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

LINE_ALGORITHMS = ("dda", "bresenham")


def _check_rgb(v: Tuple[int, int, int]) -> Tuple[int, int, int]:
    for channel in v:
        if not 0 <= channel <= 255:
            raise ValueError(f"Color channels must be in [0, 255], got {tuple(v)}")
    return v


RGB = Annotated[Tuple[int, int, int], AfterValidator(_check_rgb)]


# ============================================================================
# TRANSFORM
# ============================================================================

class TransformParamsV1(BaseModel):
    """Explicit affine parameters (identity by default)."""
    model_config = ConfigDict(extra='forbid')

    scale: Tuple[float, float] = Field((1.0, 1.0), description="(sx, sy)")
    rotation_degrees: float = Field(0.0, description="Counter-clockwise, degrees")
    reflect_x: bool = Field(False, description="Mirror across the X axis")
    reflect_y: bool = Field(False, description="Mirror across the Y axis")
    shear: Tuple[float, float] = Field((0.0, 0.0), description="(shx, shy)")
    translate: Tuple[float, float] = Field((0.0, 0.0), description="(tx, ty) in px")


class TogglesV1(BaseModel):
    """Which demo effects the kite shows."""
    model_config = ConfigDict(extra='forbid')

    scale: bool = False
    rotate: bool = False
    reflect: bool = False
    shear: bool = False


# ============================================================================
# PRIMITIVES
# ============================================================================

class LineV1(BaseModel):
    """Straight segment rasterized with a named algorithm."""
    model_config = ConfigDict(extra='forbid')

    algorithm: str = Field("bresenham", description="'dda' or 'bresenham'")
    start: Tuple[int, int]
    end: Tuple[int, int]
    color: RGB = (255, 255, 255)

    @field_validator('algorithm')
    @classmethod
    def validate_algorithm(cls, v: str) -> str:
        if v not in LINE_ALGORITHMS:
            raise ValueError(f"Unknown line algorithm '{v}', expected one of {LINE_ALGORITHMS}")
        return v


class CircleV1(BaseModel):
    """Midpoint circle outline."""
    model_config = ConfigDict(extra='forbid')

    center: Tuple[int, int]
    radius: int = Field(..., ge=0, description="Radius in px (0 draws nothing)")
    color: RGB = (255, 255, 255)


class WireV1(BaseModel):
    """Sagging wire drawn as DDA segments, with a bulb at every vertex."""
    model_config = ConfigDict(extra='forbid')

    start_x: float
    end_x: float
    y: float
    sag: float = Field(6.0, description="Sine sag amplitude in px")
    segments: int = Field(6, ge=1)
    algorithm: str = "dda"
    color: RGB = (204, 204, 204)
    bulb_radius: int = Field(3, ge=0)
    bulb_colors: List[RGB] = Field(
        default_factory=lambda: [(255, 77, 77), (77, 255, 77), (255, 255, 77)]
    )
    phase: int = Field(0, ge=0, description="Color cycle offset for the bulbs")

    @field_validator('algorithm')
    @classmethod
    def validate_algorithm(cls, v: str) -> str:
        if v not in LINE_ALGORITHMS:
            raise ValueError(f"Unknown line algorithm '{v}', expected one of {LINE_ALGORITHMS}")
        return v

    @field_validator('bulb_colors')
    @classmethod
    def validate_bulb_colors(cls, v: List[RGB]) -> List[RGB]:
        if not v:
            raise ValueError("bulb_colors must contain at least one color")
        return v


class KiteV1(BaseModel):
    """Kite placed by the affine pipeline.

    Either `transform` is given explicitly, or the parameters are derived
    from `position` and `toggles` at render time.
    """
    model_config = ConfigDict(extra='forbid')

    position: float = Field(0.0, description="Animation position along the flight path")
    toggles: TogglesV1 = Field(default_factory=TogglesV1)
    transform: Optional[TransformParamsV1] = None
    right_color: RGB = (255, 64, 64)
    left_color: RGB = (64, 166, 255)
    outline_color: RGB = (20, 20, 20)
    stick_color: RGB = (242, 217, 64)
    sticker_color: RGB = (26, 242, 77)


class CanvasV1(BaseModel):
    """Drawing surface."""
    model_config = ConfigDict(extra='forbid')

    width: int = Field(..., gt=0, le=16384)
    height: int = Field(..., gt=0, le=16384)
    background: RGB = (0, 0, 0)
    point_size: int = Field(1, ge=1, le=16)


# ============================================================================
# SCENE SCHEMA V1
# ============================================================================

class SceneV1(BaseModel):
    """Complete scene file (scene.v1)."""
    model_config = ConfigDict(extra='forbid', populate_by_name=True)

    schema_version: str = Field("scene.v1", alias="schema", description="Schema version")
    name: str = Field("scene", min_length=1)
    canvas: CanvasV1
    lines: List[LineV1] = Field(default_factory=list)
    circles: List[CircleV1] = Field(default_factory=list)
    wires: List[WireV1] = Field(default_factory=list)
    kite: Optional[KiteV1] = None

    @field_validator('schema_version')
    @classmethod
    def validate_schema(cls, v: str) -> str:
        if v != "scene.v1":
            raise ValueError(f"Expected schema 'scene.v1', got '{v}'")
        return v

    @model_validator(mode='after')
    def validate_max_radius(self) -> 'SceneV1':
        """Bound circle and bulb work to the canvas so a typo can't stall the renderer."""
        limit = 2 * max(self.canvas.width, self.canvas.height)
        for i, circle in enumerate(self.circles):
            if circle.radius > limit:
                raise ValueError(
                    f"circles[{i}].radius={circle.radius} exceeds {limit} "
                    f"(twice the largest canvas dimension)"
                )
        for i, wire in enumerate(self.wires):
            if wire.bulb_radius > limit:
                raise ValueError(
                    f"wires[{i}].bulb_radius={wire.bulb_radius} exceeds {limit} "
                    f"(twice the largest canvas dimension)"
                )
        return self


# ============================================================================
# PUBLIC API
# ============================================================================

def load_scene_config(path: Union[str, Path]) -> SceneV1:
    """Load and validate a scene file from YAML.

    Parameters
    ----------
    path : Union[str, Path]
        Path to a scene.v1 YAML file

    Returns
    -------
    SceneV1
        Validated scene

    Raises
    ------
    FileNotFoundError
        If path doesn't exist
    ValueError
        If the content is empty or fails validation (message names the file
        and the offending fields)
    """
    from . import fs

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Scene config not found: {path}")

    data = fs.load_yaml(path)
    if not isinstance(data, dict):
        raise ValueError(f"Scene config at {path} must be a mapping, got {type(data).__name__}")
    try:
        return SceneV1(**data)
    except ValidationError as e:
        raise ValueError(f"Scene config validation failed at {path}: {e}") from e
