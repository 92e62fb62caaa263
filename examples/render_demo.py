#!/usr/bin/env python3
"""Render the demo scene.

This script renders one of the demo scenes with the chosen renderer, sampling
pixels on a thread pool, and saves the tone-mapped result as a PNG.

Usage:
    python examples/render_demo.py [options]

Options:
    --renderer NAME         onoff, flat, pointlight or pathtracer (default: pathtracer)
    --width WIDTH           Image width in pixels (default: 320)
    --height HEIGHT         Image height in pixels (default: 240)
    --orthogonal            Use an orthogonal camera
    --camera-position X Y Z Camera position (default: -3 0 0)
    --camera-orientation X Y Z
                            Rotation about the origin in degrees (default: 0 0 0)
    --screen-distance D     Perspective screen distance (default: 2)
    --samples-per-side N    Antialiasing grid size, 0 disables it (default: 0)
    --n N                   Path tracer rays per hit (default: 10)
    --max-depth N           Path tracer maximum depth (default: 2)
    --roulette-depth N      Path tracer Russian roulette depth (default: 3)
    --seed SEED             Seed of the per-pixel generators (default: 42)
    --workers N             Rendering threads (default: 1)
    --tone-map METHOD       none, reinhard, exposure or luminosity (default: luminosity)
    --exposure VALUE        Exposure or target luminosity (default: 0.18)
    --gamma VALUE           Gamma correction (default: 2.2)
    --output OUTPUT         Output file path (default: demo.png)
    --quiet                 Suppress progress output
    --verbose               Log debug messages

Example:
    python examples/render_demo.py --renderer pathtracer --width 160 --height 120 --workers 8
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

from raytracer.core.image import HdrImage
from raytracer.preview.export import save_png
from raytracer.render.image_tracer import ImageTracer
from raytracer.scene.demo import RENDERER_NAMES, create_demo_camera, create_demo_renderer

logger = logging.getLogger("render_demo")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the demo scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--renderer",
        choices=RENDERER_NAMES,
        default="pathtracer",
        help="Renderer to use (default: pathtracer)",
    )
    parser.add_argument("--width", type=int, default=320, help="Image width in pixels (default: 320)")
    parser.add_argument("--height", type=int, default=240, help="Image height in pixels (default: 240)")
    parser.add_argument("--orthogonal", action="store_true", help="Use an orthogonal camera")
    parser.add_argument(
        "--camera-position",
        type=float,
        nargs=3,
        default=[-3.0, 0.0, 0.0],
        metavar=("X", "Y", "Z"),
        help="Camera position (default: -3 0 0)",
    )
    parser.add_argument(
        "--camera-orientation",
        type=float,
        nargs=3,
        default=[0.0, 0.0, 0.0],
        metavar=("X", "Y", "Z"),
        help="Camera rotation about the origin in degrees (default: 0 0 0)",
    )
    parser.add_argument(
        "--screen-distance",
        type=float,
        default=2.0,
        help="Perspective screen distance (default: 2)",
    )
    parser.add_argument(
        "--samples-per-side",
        type=int,
        default=0,
        help="Antialiasing grid size, 0 disables it (default: 0)",
    )
    parser.add_argument("--n", type=int, default=10, help="Path tracer rays per hit (default: 10)")
    parser.add_argument("--max-depth", type=int, default=2, help="Path tracer maximum depth (default: 2)")
    parser.add_argument(
        "--roulette-depth",
        type=int,
        default=3,
        help="Path tracer Russian roulette depth (default: 3)",
    )
    parser.add_argument("--seed", type=int, default=42, help="Per-pixel generator seed (default: 42)")
    parser.add_argument("--workers", type=int, default=1, help="Rendering threads (default: 1)")
    parser.add_argument(
        "--tone-map",
        choices=["none", "reinhard", "exposure", "luminosity"],
        default="luminosity",
        help="Tone mapping method (default: luminosity)",
    )
    parser.add_argument(
        "--exposure",
        type=float,
        default=0.18,
        help="Exposure, or target luminosity for 'luminosity' (default: 0.18)",
    )
    parser.add_argument("--gamma", type=float, default=2.2, help="Gamma correction (default: 2.2)")
    parser.add_argument(
        "--output",
        type=str,
        default="demo.png",
        help="Output file path (default: demo.png)",
    )
    parser.add_argument("--quiet", action="store_true", help="Suppress progress output")
    parser.add_argument("--verbose", action="store_true", help="Log debug messages")
    return parser.parse_args(argv)


def render_demo(args: argparse.Namespace) -> Path:
    """Render the demo scene and save it to file.

    Args:
        args: Parsed command-line options.

    Returns:
        Path to the saved image file.
    """
    renderer = create_demo_renderer(
        args.renderer,
        n=args.n,
        max_depth=args.max_depth,
        roulette_depth=args.roulette_depth,
    )
    camera = create_demo_camera(
        args.width,
        args.height,
        orthogonal=args.orthogonal,
        position=tuple(args.camera_position),
        orientation_deg=tuple(args.camera_orientation),
        screen_distance=args.screen_distance,
    )
    image = HdrImage(args.width, args.height)
    tracer = ImageTracer(image, camera, samples_per_side=args.samples_per_side, seed=args.seed)

    start_time = time.time()

    def progress_callback(current: int, total: int) -> None:
        if not args.quiet:
            elapsed = time.time() - start_time
            rows_per_sec = current / elapsed if elapsed > 0 else 0
            print(
                f"\r  Progress: {current}/{total} rows "
                f"({current / total * 100:.1f}%) - {rows_per_sec:.1f} rows/s",
                end="",
                flush=True,
            )

    tracer.fire_all_rays(renderer, workers=args.workers, callback=progress_callback)

    if not args.quiet:
        print()  # Newline after progress

    output_file = Path(args.output)
    save_png(
        image,
        output_file,
        tone_map=args.tone_map,
        gamma=args.gamma,
        exposure=args.exposure,
    )
    logger.info("Saved %s in %.2fs", output_file.absolute(), time.time() - start_time)
    return output_file


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        render_demo(args)
        return 0
    except (ValueError, OSError) as e:
        logger.error("Error: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
