#!/usr/bin/env python3
"""Render a scene file to PNG.

CLI tool that loads a scene.v1 YAML, rasterizes its lines, circles, wires
and kite onto a pixel canvas, and writes the image plus a metadata sidecar
(same stem, .yaml) with per-category pixel counts.

Usage:
    # Default demo scene
    python scripts/render_scene.py --config configs/scene_demo.v1.yaml --output outputs/scene.png

    # Kite with every effect on, a few frames into its flight
    python scripts/render_scene.py --config configs/scene_demo.v1.yaml \
        --output outputs/kite_all.png --toggles all --kite-position 240

    # Only shear and reflection
    python scripts/render_scene.py --config configs/scene_demo.v1.yaml \
        --output outputs/kite_shear.png --toggles shear,reflect

Outputs:
    - <output>.png: rendered canvas (top-left image origin)
    - <output>.yaml: scene name, size, pixel counts, render time
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.raster_core.scene import TransformToggles, render_to_file
from src.utils import logging_config

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a scene.v1 YAML file to an image",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument(
        '--config',
        type=str,
        default='configs/scene_demo.v1.yaml',
        help='Scene YAML, default: configs/scene_demo.v1.yaml'
    )
    parser.add_argument(
        '--output',
        type=str,
        default='outputs/scene.png',
        help='Output image path, default: outputs/scene.png'
    )
    parser.add_argument(
        '--kite-position',
        type=float,
        default=None,
        help='Override the kite flight position'
    )
    parser.add_argument(
        '--toggles',
        type=str,
        default=None,
        help='Kite effects: comma list of scale,rotate,reflect,shear, or all/none'
    )
    parser.add_argument(
        '--log-level',
        type=str,
        default='INFO',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Logging level, default: INFO'
    )
    parser.add_argument(
        '--log-file',
        type=str,
        default=None,
        help='Optional log file (JSON lines)'
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    logging_config.setup_logging(
        log_level=args.log_level,
        log_file=args.log_file,
        json=args.log_file is not None,
        quiet_libs=["PIL"],
        context={"app": "render_scene"}
    )
    logging_config.install_excepthook()

    try:
        toggles = TransformToggles.parse(args.toggles) if args.toggles is not None else None
        metadata = render_to_file(
            args.config,
            args.output,
            kite_position=args.kite_position,
            toggles=toggles
        )
    except (FileNotFoundError, ValueError, RuntimeError) as e:
        logger.error("Render failed: %s", e)
        return 1

    logger.info("Pixels: %s", metadata["pixels"])
    return 0


if __name__ == '__main__':
    sys.exit(main())
