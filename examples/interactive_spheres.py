#!/usr/bin/env python3
"""Interactive sphere renderer with keyboard camera movement.

Opens a Taichi GGUI window on the default scene. Frames keep
accumulating while the camera is still; moving resets the image.

Usage:
    python -m examples.interactive_spheres [--width W] [--height H] [--scale S]

Controls:
    W / S   move forward / backward
    D / A   move right / left
    P       save a PNG
    Escape  quit
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Ensure the project root is in the Python path for direct execution
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

import taichi as ti  # noqa: E402


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="Interactive sphere path tracer.")
    parser.add_argument("--width", type=int, default=80, help="Render width in pixels (default: 80)")
    parser.add_argument("--height", type=int, default=60, help="Render height in pixels (default: 60)")
    parser.add_argument("--scale", type=int, default=8, help="Window size multiplier (default: 8)")
    parser.add_argument("--seed", type=int, default=0, help="Master random seed (default: 0)")
    parser.add_argument("--verbose", action="store_true", help="Log per-frame timings")
    return parser.parse_args()


def main() -> int:
    """Main entry point for the interactive renderer.

    Returns:
        Exit code (0 for success, non-zero for error).
    """
    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    ti.init(arch=ti.cpu)

    from src.spheretracer.preview.interactive import InteractivePreview
    from src.spheretracer.scene.presets import create_default_scene

    if not InteractivePreview.is_display_available():
        print("Error: No display available. Cannot run interactive preview.")
        return 1

    preview = InteractivePreview(
        create_default_scene(),
        args.width,
        args.height,
        window_res=(args.width * args.scale, args.height * args.scale),
        seed=args.seed,
    )

    print("Starting interactive rendering...")
    print("  - W/S: forward/backward, A/D: left/right")
    print("  - P: save the current image as a PNG")
    print("  - Escape or close the window to exit")

    try:
        preview.run()
    except KeyboardInterrupt:
        print("\nInterrupted by user.")
    finally:
        preview.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
