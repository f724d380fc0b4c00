#!/usr/bin/env python3
"""Render a sphere scene to a PNG file.

Renders the default eight-sphere scene (or a scene loaded from JSON) a
number of times and averages the frames, then tone maps and saves the
result.

Usage:
    python -m examples.render_spheres [options]

Options:
    --width WIDTH       Image width in pixels (default: 160)
    --height HEIGHT     Image height in pixels (default: 120)
    --frames FRAMES     Number of frames to average (default: 4)
    --seed SEED         Master random seed (default: 0)
    --scene PATH        JSON scene file (default: built-in scene)
    --max-depth DEPTH   Bounce cap, or "none" for no cap; 0 renders direct
                        emission only (default: 64)
    --specular          Ignore diffuseness (perfect mirrors/refractors)
    --output OUTPUT     Output file path (default: spheres.png)
    --show              Show the result in a Matplotlib window
    --verbose           Log per-frame timings
    --quiet             Suppress progress output

Example:
    python -m examples.render_spheres --width 320 --height 240 --frames 16
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from pathlib import Path

# Ensure the project root is in the Python path for direct execution
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

import taichi as ti  # noqa: E402


def parse_max_depth(value: str) -> int | None:
    """Parse --max-depth: a non-negative integer or "none"."""
    if value.strip().lower() == "none":
        return None
    try:
        depth = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer or 'none', got {value!r}") from None
    if depth < 0:
        raise argparse.ArgumentTypeError(f"max depth must be non-negative, got {depth}")
    return depth


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments (sys.argv when argv is None)."""
    parser = argparse.ArgumentParser(
        description="Render a sphere scene with the path tracer.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--width", type=int, default=160, help="Image width in pixels (default: 160)")
    parser.add_argument("--height", type=int, default=120, help="Image height in pixels (default: 120)")
    parser.add_argument("--frames", type=int, default=4, help="Number of frames to average (default: 4)")
    parser.add_argument("--seed", type=int, default=0, help="Master random seed (default: 0)")
    parser.add_argument("--scene", type=str, default=None, help="JSON scene file (default: built-in scene)")
    parser.add_argument(
        "--max-depth",
        type=parse_max_depth,
        default=64,
        help="Bounce cap, or 'none' for no cap; 0 renders direct emission only (default: 64)",
    )
    parser.add_argument("--specular", action="store_true", help="Ignore diffuseness")
    parser.add_argument("--output", type=str, default="spheres.png", help="Output file path (default: spheres.png)")
    parser.add_argument("--show", action="store_true", help="Show the result in a Matplotlib window")
    parser.add_argument("--verbose", action="store_true", help="Log per-frame timings")
    parser.add_argument("--quiet", action="store_true", help="Suppress progress output")
    return parser.parse_args(argv)


def render_spheres(
    width: int = 160,
    height: int = 120,
    num_frames: int = 4,
    seed: int = 0,
    scene_path: str | None = None,
    max_depth: int | None = 64,
    specular: bool = False,
    output_path: str = "spheres.png",
    show: bool = False,
    quiet: bool = False,
) -> Path:
    """Render a scene, save it, and return the output path."""
    from src.spheretracer.core.integrator import RenderSettings
    from src.spheretracer.core.progressive import ProgressiveRenderer
    from src.spheretracer.preview.display import show_preview
    from src.spheretracer.preview.export import save_png
    from src.spheretracer.scene.model import Scene
    from src.spheretracer.scene.presets import create_default_scene

    if scene_path is not None:
        scene = Scene.from_dict(json.loads(Path(scene_path).read_text()))
    else:
        scene = create_default_scene()

    settings = RenderSettings(max_depth=max_depth, glossy=not specular)
    renderer = ProgressiveRenderer(scene, width, height, seed=seed, settings=settings)

    if not quiet:
        print(f"Rendering {len(scene.objects)} objects at {width}x{height}, {num_frames} frames...")

    start_time = time.time()

    def progress_callback(current: int, target: int) -> None:
        if not quiet:
            elapsed = time.time() - start_time
            print(
                f"\r  Progress: {current}/{target} frames - {elapsed:.1f}s elapsed",
                end="",
                flush=True,
            )

    renderer.render(num_frames=num_frames, callback=progress_callback)

    if not quiet:
        print()

    output_file = save_png(renderer.get_image_numpy(), output_path, tone_map="reinhard", gamma=2.2)

    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {time.time() - start_time:.2f}s")

    if show:
        show_preview(renderer)

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    ti.init(arch=ti.cpu)

    try:
        render_spheres(
            width=args.width,
            height=args.height,
            num_frames=args.frames,
            seed=args.seed,
            scene_path=args.scene,
            max_depth=args.max_depth,
            specular=args.specular,
            output_path=args.output,
            show=args.show,
            quiet=args.quiet,
        )
        return 0
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
