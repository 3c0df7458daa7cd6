"""Command-line interface for prime_spiral3d."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace

from prime_spiral3d.config import SpiralConfig, load_config, save_config
from prime_spiral3d.visualization.spirals import MODE_DESCRIPTIONS, SpiralMode

logger = logging.getLogger("prime_spiral3d")


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Set up console logging for the package."""
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    if verbose:
        console_handler.setFormatter(logging.Formatter(
            '%(asctime)s | %(levelname)-8s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
    else:
        console_handler.setFormatter(logging.Formatter('%(message)s'))
    logger.addHandler(console_handler)

    return logger


def build_config(args: argparse.Namespace) -> SpiralConfig:
    """Effective config: the --config file (or defaults) overridden by flags."""
    config = load_config(args.config) if args.config else SpiralConfig()

    overrides = {
        "mode": args.mode,
        "max_n": args.max_n,
        "dot_size": args.dot_size,
        "animation_speed": args.speed,
        "width": args.width,
        "height": args.height,
        "show_all_numbers": args.all_numbers,
        "show_axes": args.axes,
        "perspective": args.perspective,
        "animate": args.animate,
    }
    config = replace(config, **{k: v for k, v in overrides.items() if v is not None})

    config = config.with_params(
        step_angle=args.step_angle,
        radius=args.radius,
        pitch=args.pitch,
        a=args.a,
        b=args.b,
        c=args.c,
        block_size=args.block_size,
        layer_radius=args.layer_radius,
    )

    if args.save_config:
        path = save_config(config, args.save_config)
        print(f"Config saved to {path}")

    return config


def cmd_render(args: argparse.Namespace) -> int:
    """Render a spiral snapshot to an image file."""
    from prime_spiral3d.core.sieve import sieve
    from prime_spiral3d.visualization.projection import CameraState, clamp_zoom
    from prime_spiral3d.visualization.renderer import save_scene
    from prime_spiral3d.visualization.scene import build_scene, scene_statistics
    from prime_spiral3d.visualization.spirals import generate_points

    config = build_config(args)
    print(f"Rendering {config.mode} spiral: max_n={config.max_n}, size={config.width}x{config.height}")

    points = generate_points(config.mode, config.max_n, config.params_for_mode())
    primes = sieve(config.max_n)
    camera = CameraState(args.rotation_x, args.rotation_y, clamp_zoom(args.zoom))
    viewport = config.viewport()

    scene = build_scene(points, primes, camera, viewport, config.filters())
    title = args.title if args.title is not None else f"{config.mode.capitalize()} Spiral - Prime Numbers"

    output = save_scene(
        scene,
        viewport,
        args.output,
        dpi=args.dpi,
        title=title or None,
        stats=scene_statistics(config.max_n, primes),
    )

    print(f"Saved to {output}")
    return 0


def cmd_stats(args: argparse.Namespace) -> int:
    """Print prime count and density for the integers 1..N."""
    from prime_spiral3d.core.sieve import sieve
    from prime_spiral3d.visualization.scene import scene_statistics
    from prime_spiral3d.visualization.spirals import layer_statistics

    config = build_config(args)
    stats = scene_statistics(config.max_n, sieve(config.max_n))

    print(f"Total numbers: {stats.total}")
    print(f"Primes: {stats.prime_count}")
    print(f"Density: {stats.density * 100:.1f}%")

    if args.layers:
        block_size = config.layered.block_size
        print(f"\nLayer statistics (block size {block_size}):")
        print(f"{'Layer':>5} {'Start':>8} {'End':>8} {'Size':>6} {'Primes':>7} {'Density':>8}")
        for s in layer_statistics(config.max_n, block_size):
            print(f"{s['layer']:>5} {s['start']:>8} {s['end']:>8} {s['size']:>6} {s['primes']:>7} {s['density']:>8.4f}")

    return 0


def cmd_view(args: argparse.Namespace) -> int:
    """Open the interactive viewer."""
    from prime_spiral3d.visualization.viewer import SpiralViewer

    config = build_config(args)
    print(MODE_DESCRIPTIONS[SpiralMode(config.mode)])
    print("Drag to rotate, scroll to zoom, 'a' to animate, 'r' to reset")

    SpiralViewer(config).show()
    return 0


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", default=None, help="JSON config file")
    parser.add_argument("--save-config", default=None, help="Write the effective config to this file")
    parser.add_argument("--mode", choices=[m.value for m in SpiralMode], default=None, help="Spiral mode")
    parser.add_argument("--max-n", type=int, default=None, help="Maximum integer")
    parser.add_argument("--step-angle", type=float, default=None, help="Angle step per integer (radians)")
    parser.add_argument("--radius", type=float, default=None, help="Helix radius")
    parser.add_argument("--pitch", type=float, default=None, help="Helix pitch")
    parser.add_argument("--a", type=float, default=None, help="Conical base radius")
    parser.add_argument("--b", type=float, default=None, help="Conical radius growth")
    parser.add_argument("--c", type=float, default=None, help="Conical height growth")
    parser.add_argument("--block-size", type=int, default=None, help="Layered block size")
    parser.add_argument("--layer-radius", type=float, default=None, help="Layered ring radius")
    parser.add_argument("--dot-size", type=float, default=None, help="Dot radius in pixels")
    parser.add_argument("--speed", type=float, default=None, help="Animation speed")
    parser.add_argument("--width", type=int, default=None, help="Viewport width in pixels")
    parser.add_argument("--height", type=int, default=None, help="Viewport height in pixels")
    parser.add_argument("--all-numbers", action="store_true", default=None, help="Show composites too")
    parser.add_argument("--axes", action="store_true", default=None, help="Show reference axes")
    parser.add_argument("--perspective", dest="perspective", action="store_true", default=None,
                        help="Perspective projection")
    parser.add_argument("--orthographic", dest="perspective", action="store_false", default=None,
                        help="Orthographic projection")
    parser.add_argument("--animate", action="store_true", default=None, help="Start auto-rotating")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="prime-spiral3d",
        description="3D prime spiral visualization",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    render_parser = subparsers.add_parser("render", help="Render a snapshot (PNG, SVG, PDF)")
    _add_common_arguments(render_parser)
    render_parser.add_argument("--rotation-x", type=float, default=0.0, help="Rotation about X (radians)")
    render_parser.add_argument("--rotation-y", type=float, default=0.0, help="Rotation about Y (radians)")
    render_parser.add_argument("--zoom", type=float, default=1.0, help="Zoom factor (0.1 - 5)")
    render_parser.add_argument("--dpi", type=int, default=100, help="Output resolution")
    render_parser.add_argument("--title", default=None, help="Title text ('' for none)")
    render_parser.add_argument("--output", "-o", default="prime-spirals.svg", help="Output file")

    stats_parser = subparsers.add_parser("stats", help="Print prime statistics")
    _add_common_arguments(stats_parser)
    stats_parser.add_argument("--layers", action="store_true", help="Per-layer table for the layered mode")

    view_parser = subparsers.add_parser("view", help="Open the interactive viewer")
    _add_common_arguments(view_parser)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    setup_logging(args.verbose)

    commands = {
        "render": cmd_render,
        "stats": cmd_stats,
        "view": cmd_view,
    }

    try:
        return commands[args.command](args)
    except (ValueError, OSError) as e:
        logger.error("Error: %s", e)
        return 2


if __name__ == "__main__":
    sys.exit(main())
