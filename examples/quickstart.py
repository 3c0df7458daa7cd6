"""Quick start example for prime_spiral3d.

Run this script to render one snapshot per spiral mode and print the
prime statistics.
"""

from pathlib import Path


def main():
    print("Prime Spiral 3D - Quick Start Demo")
    print("=" * 50)

    output_dir = Path("output")
    output_dir.mkdir(exist_ok=True)

    from prime_spiral3d.core.sieve import sieve
    from prime_spiral3d.visualization.projection import CameraState, Viewport
    from prime_spiral3d.visualization.renderer import save_scene
    from prime_spiral3d.visualization.scene import SceneFilters, build_scene, scene_statistics
    from prime_spiral3d.visualization.spirals import MODE_DESCRIPTIONS, SpiralMode, generate_points

    max_n = 2000
    primes = sieve(max_n)
    stats = scene_statistics(max_n, primes)

    print(f"\n1. Sieved 1..{max_n}")
    print(f"   Primes: {stats.prime_count}")
    print(f"   Density: {stats.density * 100:.1f}%")

    print("\n2. Rendering each spiral mode...")
    viewport = Viewport(800, 600)
    camera = CameraState(rotation_x=0.6, rotation_y=0.3)
    filters = SceneFilters(show_axes=True)

    for mode in SpiralMode:
        points = generate_points(mode, max_n)
        scene = build_scene(points, primes, camera, viewport, filters)
        path = save_scene(scene, viewport, output_dir / f"{mode.value}.png", stats=stats)
        print(f"   {MODE_DESCRIPTIONS[mode]}")
        print(f"     {len(scene)} dots -> {path}")

    print("\n3. Layer statistics (layered mode, block size 200)...")
    from prime_spiral3d.visualization.spirals import layer_statistics

    for s in layer_statistics(max_n, 200)[:5]:
        print(f"   layer {s['layer']}: {s['primes']:>3} primes ({s['density']:.3f})")

    print("\nDone! Try the interactive viewer with:")
    print("   prime-spiral3d view --mode conical --animate")


if __name__ == "__main__":
    main()
