#!/usr/bin/env python3
"""Render one of the demo scenes.

This script demonstrates end-to-end rendering with tinytracer. It builds a
demo scene, wraps it in a RayTracer and renders it with the progressive
renderer, either adaptively (repeated passes concentrating on noisy pixels)
or with a fixed number of samples per pixel.

Usage:
    python -m examples.render_demo_scene [options]

Options:
    --scene SCENE       "landscape" or "spheres" (default: landscape)
    --width WIDTH       Image width in pixels (default: 400)
    --height HEIGHT     Image height in pixels (default: 300)
    --mode MODE         "adaptive" or "fixed" (default: adaptive)
    --passes PASSES     Adaptive passes to render (default: 64)
    --samples SAMPLES   Samples per pixel in fixed mode (default: 8)
    --bounces BOUNCES   Maximum bounce chain length (default: 16)
    --seed SEED         Random seed for scene and sampling (default: random)
    --output OUTPUT     Output file path (default: demo_scene.png)
    --quiet             Suppress progress output

Example:
    python -m examples.render_demo_scene --width 160 --height 120 --passes 32
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

import numpy as np
import taichi as ti


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a tinytracer demo scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--scene",
        choices=("landscape", "spheres"),
        default="landscape",
        help="Scene to render (default: landscape)",
    )
    parser.add_argument(
        "--width",
        type=int,
        default=400,
        help="Image width in pixels (default: 400)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=300,
        help="Image height in pixels (default: 300)",
    )
    parser.add_argument(
        "--mode",
        choices=("adaptive", "fixed"),
        default="adaptive",
        help="Sampling mode (default: adaptive)",
    )
    parser.add_argument(
        "--passes",
        type=int,
        default=64,
        help="Adaptive passes to render (default: 64)",
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=8,
        help="Samples per pixel in fixed mode (default: 8)",
    )
    parser.add_argument(
        "--bounces",
        type=int,
        default=16,
        help="Maximum bounce chain length (default: 16)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for scene and sampling (default: random)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="demo_scene.png",
        help="Output file path (default: demo_scene.png)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args()


def render_demo_scene(
    scene_name: str = "landscape",
    width: int = 400,
    height: int = 300,
    mode: str = "adaptive",
    num_passes: int = 64,
    samples_per_pixel: int = 8,
    max_bounces: int = 16,
    seed: int | None = None,
    output_path: str = "demo_scene.png",
    quiet: bool = False,
) -> Path:
    """Render a demo scene and save it to file.

    Args:
        scene_name: "landscape" or "spheres".
        width: Image width in pixels.
        height: Image height in pixels.
        mode: "adaptive" or "fixed".
        num_passes: Number of adaptive passes.
        samples_per_pixel: Samples per pixel in fixed mode.
        max_bounces: Maximum bounce chain length.
        seed: Random seed, or None for a random one.
        output_path: Output file path (PNG).
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    from tinytracer.core.progressive import ProgressiveRenderer
    from tinytracer.core.raytracer import RayTracer
    from tinytracer.core.settings import RenderMode, RenderSettings
    from tinytracer.preview.export import save_png
    from tinytracer.scene.demo import create_demo_scene, create_three_spheres_scene

    rng = np.random.default_rng(seed)

    if not quiet:
        print(f"Creating {scene_name} scene ({width}x{height})...")

    if scene_name == "spheres":
        scene = create_three_spheres_scene()
    else:
        scene = create_demo_scene(rng)

    settings = RenderSettings(
        max_bounces=max_bounces,
        samples_per_pixel=samples_per_pixel,
        mode=RenderMode.FIXED if mode == "fixed" else RenderMode.ADAPTIVE,
    )
    tracer = RayTracer(scene, settings, rng)
    renderer = ProgressiveRenderer(tracer, width, height)

    start_time = time.time()

    if settings.mode == RenderMode.FIXED:
        if not quiet:
            print(f"Rendering {samples_per_pixel} samples per pixel...")
        renderer.render_fixed()
    else:
        if not quiet:
            print(f"Rendering {num_passes} adaptive passes...")

        def progress_callback(current: int, target: int) -> None:
            if not quiet:
                elapsed = time.time() - start_time
                progress_pct = (current / target) * 100 if target > 0 else 0
                passes_per_sec = current / elapsed if elapsed > 0 else 0
                print(
                    f"\r  Progress: {current}/{target} passes "
                    f"({progress_pct:.1f}%) - {passes_per_sec:.2f} passes/s",
                    end="",
                    flush=True,
                )

        renderer.render(num_passes, callback=progress_callback)

        if not quiet:
            print()  # Newline after progress

    # Save the image
    output_file = Path(output_path)
    save_png(renderer, str(output_file))

    total_time = time.time() - start_time
    if not quiet:
        counts = renderer.get_sample_counts_numpy()
        print(f"Samples per pixel: min {counts.min()}, mean {counts.mean():.1f}, max {counts.max()}")
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {total_time:.2f}s")

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()

    # Tracing runs in Python; the CPU backend is enough for the render target
    ti.init(arch=ti.cpu)

    try:
        render_demo_scene(
            scene_name=args.scene,
            width=args.width,
            height=args.height,
            mode=args.mode,
            num_passes=args.passes,
            samples_per_pixel=args.samples,
            max_bounces=args.bounces,
            seed=args.seed,
            output_path=args.output,
            quiet=args.quiet,
        )
        return 0
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
