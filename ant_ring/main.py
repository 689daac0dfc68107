#!/usr/bin/env python3
"""
Ant Ring Simulation

Ants walk around a closed loop and bounce off each other on contact. This
runs the animation loop headless with a fixed frame time and exports the
interpolated ant positions of every frame.

Usage:
    python -m ant_ring.main [--config configs/looping.yaml] [options]

Examples:
    python -m ant_ring.main
    python -m ant_ring.main --config configs/fixed.yaml --frames 2000
    python -m ant_ring.main --population 8 --no-csv --quiet
    python -m ant_ring.main --config configs/looping.yaml --seed 42
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from ant_ring.config import SimulationConfig, load_config
from ant_ring.model.engine import SimulationEngine
from ant_ring.export.csv_writer import CSVWriter
from ant_ring.export.reporter import Reporter


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Ant Ring Collision Simulation',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python -m ant_ring.main
    python -m ant_ring.main --config configs/fixed.yaml --frames 2000
    python -m ant_ring.main --population 8 --no-csv --quiet
    python -m ant_ring.main --config configs/looping.yaml --seed 42
        """
    )

    parser.add_argument('--config', type=Path, default=None,
                        help='Path to YAML configuration file '
                             '(default: built-in settings)')

    # Optional overrides
    parser.add_argument('--frames', type=int, default=None,
                        help='Override number of frames to simulate')
    parser.add_argument('--dt', type=float, default=None,
                        help='Override seconds per frame')
    parser.add_argument('--population', type=int, default=None,
                        help='Override number of ants')
    parser.add_argument('--out-dir', type=Path, default=Path('./output'),
                        help='Output directory for exports (default: ./output)')

    # Export toggles
    parser.add_argument('--csv', dest='csv', action='store_true', default=None,
                        help='Enable CSV export (default)')
    parser.add_argument('--no-csv', dest='csv', action='store_false',
                        help='Disable CSV export')

    parser.add_argument('--quiet', action='store_true', default=False,
                        help='Suppress stdout output')

    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed for reproducibility')

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    # Load configuration
    try:
        if args.config is not None:
            config = load_config(args.config)
        else:
            config = SimulationConfig()

        # Apply CLI overrides
        if args.frames is not None:
            config.frames = args.frames
        if args.dt is not None:
            config.dt = args.dt
        if args.population is not None:
            config.engine.population = args.population
            if len(config.engine.layout) != args.population:
                config.engine.layout = []
        config.validate()
    except FileNotFoundError:
        print(f"Error: Configuration file not found: {args.config}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    if args.csv is not None:
        config.csv_enabled = args.csv
    config.quiet = args.quiet
    if args.seed is not None:
        config.seed = args.seed
    config.out_dir = args.out_dir

    # Initialize engine
    if not config.quiet:
        print(f"Initializing simulation...")
        print(f"  Ants: {config.engine.population}")
        print(f"  Speed: {config.engine.speed}")
        print(f"  Auto cycle: {config.engine.auto_cycle}")
        print(f"  Frames: {config.frames} x {config.dt}s")

    engine = SimulationEngine(config.engine, seed=config.seed)

    # Initialize exporters
    csv_writer = None
    if config.csv_enabled:
        csv_writer = CSVWriter(config.out_dir / 'ant_trace.csv')
        csv_writer.open()

    reporter = Reporter(str(args.config) if args.config else None, config.seed)

    # Main animation loop
    if not config.quiet:
        print(f"\nRunning simulation...")

    # Initial zero-length tick computes the first collision
    engine.tick(0.0)
    final_snapshot = engine.frame_snapshot()
    try:
        for _ in range(config.frames):
            engine.tick(config.dt)
            snapshot = engine.frame_snapshot()
            final_snapshot = snapshot

            if csv_writer:
                csv_writer.append(snapshot)

            reporter.update(snapshot)

            # Progress indicator
            if not config.quiet and snapshot.frame % 100 == 0:
                collisions = int(snapshot.metrics.get('collisions', 0))
                print(f"  Frame {snapshot.frame}: t={snapshot.global_time:.3f}, "
                      f"{collisions} collisions")

    except KeyboardInterrupt:
        if not config.quiet:
            print("\nSimulation interrupted by user.")

    # Cleanup and final exports
    if csv_writer:
        csv_writer.close()
        if not config.quiet:
            print(f"\nCSV saved: {config.out_dir / 'ant_trace.csv'}")

    # Print summary report
    if not config.quiet:
        report = reporter.generate_summary(
            final_snapshot,
            config.out_dir,
            config.csv_enabled
        )
        print(report)

    return 0


if __name__ == '__main__':
    sys.exit(main())
