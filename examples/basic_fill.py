"""
Basic Sink Filling Example

This example demonstrates:
1. Generating a synthetic DEM with pits
2. Filling depressions with the priority-flood engine
3. Inspecting run statistics
4. Saving the filled grid and a report figure

Run from the project root:
    python examples/basic_fill.py
"""

import sys
from pathlib import Path

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import numpy as np

from sinkfill import PriorityFloodEngine, save_grid
from sinkfill.io.synthetic import generate_sample_dem


def main():
    print("=" * 60)
    print("DEM SINK FILLING - EXAMPLE")
    print("=" * 60)

    # =========================================================================
    # Step 1: Generate a DEM
    # =========================================================================
    print("\n[1] Generating sample DEM...")

    dem = generate_sample_dem(
        shape=(120, 160),        # rows x cols
        base_elevation=100.0,    # Base elevation ~100m
        hill_height=8.0,         # Hills up to 8m high
        noise_scale=1.5,         # Some surface variation
        pit_count=25,            # Depressions to fill
        pit_depth=4.0,
        seed=42,                 # Reproducible results
    )

    print(f"   Shape: {dem.shape[0]} x {dem.shape[1]}")
    print(f"   Z range: {dem.min():.1f} to {dem.max():.1f}")

    # =========================================================================
    # Step 2: Fill depressions
    # =========================================================================
    print("\n[2] Filling depressions (epsilon = 0.001)...")

    engine = PriorityFloodEngine(
        dem,
        epsilon=0.001,
        progress_interval=5000,
        progress_callback=lambda i, p, q: print(f"   {i:>7,} iterations  P={p:<6} Q={q}"),
    )
    result = engine.run()

    # =========================================================================
    # Step 3: Results
    # =========================================================================
    print("\n[3] Results")
    print(result.summary())

    depth = result.filled - dem
    row, col = np.unravel_index(np.argmax(depth), depth.shape)
    print(f"\n   Deepest fill at row {row}, col {col}: {depth[row, col]:.3f}")

    # =========================================================================
    # Step 4: Save outputs
    # =========================================================================
    output_dir = Path(__file__).parent / "output"
    output_dir.mkdir(exist_ok=True)

    print("\n[4] Saving outputs...")
    path = save_grid(result.filled, output_dir / "filled_dem.npy")
    print(f"   Filled grid: {path}")

    try:
        from sinkfill.utils.visualization import plot_fill, save_report

        save_report(plot_fill(dem, result), str(output_dir / "fill_report.png"))
        print(f"   Report: {output_dir / 'fill_report.png'}")
    except ImportError:
        print("   (matplotlib not installed, skipping report)")

    print("\n" + "=" * 60)
    print("Example complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
