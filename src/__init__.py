"""Village Raster: from-scratch raster primitives for a 2D procedural scene.

This package contains the integer line/circle rasterizers, the 2D affine
transform pipeline, and the small scene layer that marks their output on a
pixel canvas.

Architecture layers (strict one-way dependency):
    scripts/ → src/raster_core/scene → src/raster_core/{canvas,rasterizer,transforms} → src/utils/

Key invariants:
    - Rasterizers and transforms are pure: no I/O, no globals, no clipping
    - Pixel frame is bottom-left origin, +Y up (orthographic 2D world)
    - Transform order is fixed: scale → rotate → reflect → shear → translate
    - YAML-only configs, validated once at load time
"""

__version__ = "1.0.0"
