#!/usr/bin/env python3
"""
Cooperative Dual Snake Simulation

Two heuristic snakes share one food cell on an 18x18 walled board. This
driver ticks the engine headlessly and exports what happened.

Usage:
    python -m coop_snake.main --config configs/default.yaml [options]

Examples:
    python -m coop_snake.main --config configs/default.yaml
    python -m coop_snake.main --config configs/default.yaml --tick-ms 180
    python -m coop_snake.main --config configs/default.yaml --no-csv --quiet
    python -m coop_snake.main --config configs/default.yaml --seed 42
"""

import argparse
import sys
import time
from pathlib import Path
from typing import List, Optional

from .config import TICK_SPEED_MS, load_config
from .model.engine import SimulationEngine
from .export.csv_writer import CSVWriter
from .export.reporter import Reporter


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Cooperative Dual Snake Simulation',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python -m coop_snake.main --config configs/default.yaml
    python -m coop_snake.main --config configs/default.yaml --tick-ms 180
    python -m coop_snake.main --config configs/default.yaml --no-csv --quiet
    python -m coop_snake.main --config configs/default.yaml --seed 42
        """
    )

    # Required arguments
    parser.add_argument('--config', type=Path, required=True,
                        help='Path to YAML configuration file')

    # Optional overrides
    parser.add_argument('--steps', type=int, default=None,
                        help='Override number of ticks to run')
    parser.add_argument('--tick-ms', type=int, default=None,
                        help=f'Delay between ticks in ms (interactive speed: {TICK_SPEED_MS})')
    parser.add_argument('--out-dir', type=Path, default=None,
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
        config = load_config(args.config)
    except FileNotFoundError:
        print(f"Error: Configuration file not found: {args.config}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    # Apply CLI overrides
    if args.steps is not None:
        config.max_steps = args.steps
    if args.tick_ms is not None:
        config.tick_ms = args.tick_ms
    if args.csv is not None:
        config.csv_enabled = args.csv
    config.quiet = args.quiet
    if args.seed is not None:
        config.seed = args.seed
    if args.out_dir is not None:
        config.out_dir = args.out_dir

    if config.max_steps < 0 or config.tick_ms < 0:
        print("Error: --steps and --tick-ms must be non-negative", file=sys.stderr)
        return 1

    # Initialize engine
    if not config.quiet:
        print(f"Initializing simulation...")
        print(f"  Board: {config.board_size}x{config.board_size}")
        print(f"  Ticks: {config.max_steps}")
        print(f"  Tick interval: {config.tick_ms} ms")

    engine = SimulationEngine(config)

    # Initialize exporters
    csv_writer = None
    if config.csv_enabled:
        csv_writer = CSVWriter(config.out_dir / 'simulation_log.csv')
        csv_writer.open()

    reporter = Reporter(str(args.config), config.seed)

    # Main simulation loop
    if not config.quiet:
        print(f"\nRunning simulation...")

    try:
        while not engine.is_finished():
            state = engine.step()

            if csv_writer:
                csv_writer.append(state)

            reporter.update(state, engine.last_collision)

            # Progress indicator
            if (not config.quiet and config.progress_every
                    and engine.current_step % config.progress_every == 0):
                scores = ", ".join(f"{a.id.value} {a.score}" for a in state.agents)
                resets = sum(engine.resets.values())
                print(f"  Tick {engine.current_step}: {scores}, {resets} resets")

            if config.tick_ms:
                time.sleep(config.tick_ms / 1000.0)

    except KeyboardInterrupt:
        if not config.quiet:
            print("\nSimulation interrupted by user.")
    finally:
        if csv_writer:
            csv_writer.close()

    if csv_writer and not config.quiet:
        print(f"\nCSV saved: {config.out_dir / 'simulation_log.csv'}")

    # Print summary report
    if not config.quiet and config.report_enabled:
        report = reporter.generate_summary(
            engine.state,
            config.out_dir,
            config.csv_enabled,
        )
        print(report)

    return 0


if __name__ == '__main__':
    sys.exit(main())
