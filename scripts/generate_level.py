#!/usr/bin/env python3
"""
Arrow Blast - Level Generation Script

Generate random, ammo-balanced levels and save them as JSON.

Usage:
    python scripts/generate_level.py                                # One level from the config seed
    python scripts/generate_level.py --seed 7 --count 10 --output levels/
    python scripts/generate_level.py --cols 8 --rows 10 --fill 0.6 --max-arrows 20
"""
import sys
import argparse
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from arrow_blast.generator import LevelGenerator, ammo_balance, is_balanced, is_clearable
from arrow_blast.levels import save_level
from arrow_blast.utils import configure_logging, load_config


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Arrow Blast - Generate levels",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/generate_level.py
  python scripts/generate_level.py --seed 7 --count 10 --output levels/
  python scripts/generate_level.py --cols 8 --rows 10 --fill 0.6 --max-arrows 20
"""
    )

    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Override YAML config file (merged over config/default.yaml)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="First level seed (default: generator.seed from config)"
    )
    parser.add_argument(
        "--count",
        type=int,
        default=1,
        help="Number of levels to generate, with consecutive seeds (default: 1)"
    )
    parser.add_argument(
        "-o", "--output",
        type=str,
        default="levels",
        help="Output directory (default: levels)"
    )
    parser.add_argument("--width", type=int, default=None, help="Wall width")
    parser.add_argument("--height", type=int, default=None, help="Minimum wall height")
    parser.add_argument("--rows", type=int, default=None, help="Arrow grid rows")
    parser.add_argument("--cols", type=int, default=None, help="Arrow grid columns")
    parser.add_argument("--fill", type=float, default=None, help="Target arrow-grid fill fraction")
    parser.add_argument("--max-arrows", type=int, default=None, help="Stop after this many arrows")
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Minimal output"
    )

    return parser.parse_args()


def print_balance(blueprint) -> None:
    """Print the per-color block/ammo table of a level."""
    print(f"  {'Color':<8} {'Blocks':>7} {'Ammo':>7}")
    for color, (blocks, ammo) in ammo_balance(blueprint).items():
        marker = "" if blocks == ammo else "  <-- mismatch"
        print(f"  {color.name:<8} {blocks:>7} {ammo:>7}{marker}")


def main():
    """Main entry point."""
    args = parse_args()

    try:
        config = load_config(args.config)
    except FileNotFoundError as e:
        print(f"Error: {e}")
        sys.exit(1)

    if args.quiet:
        config.logging.level = "WARNING"
    configure_logging(config.logging)

    level = config.level
    if args.width is not None:
        level.wall_width = args.width
    if args.height is not None:
        level.wall_height = args.height
    if args.rows is not None:
        level.grid_rows = args.rows
    if args.cols is not None:
        level.grid_cols = args.cols
    if args.fill is not None:
        config.generator.fill_fraction = args.fill
    if args.max_arrows is not None:
        config.generator.max_arrows = args.max_arrows

    try:
        generator = LevelGenerator(config.generator)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    first_seed = args.seed if args.seed is not None else config.generator.seed
    output_dir = Path(args.output)

    for seed in range(first_seed, first_seed + args.count):
        blueprint = generator.generate(
            seed, level.wall_width, level.wall_height, level.grid_rows, level.grid_cols
        )
        path = save_level(blueprint, output_dir / f"{blueprint.name}.json")

        if args.quiet:
            continue

        report = generator.last_report
        print("=" * 60)
        print(f"Level {blueprint.name} -> {path}")
        print(f"Arrows: {report.arrows_placed}  Cells: {report.cells_filled}/{report.target_cells}"
              f"  Blocks: {report.blocks_placed}  Wall: {blueprint.width}x{blueprint.height}")
        print(f"Stop reason: {report.stop_reason}")
        print(f"Balanced: {is_balanced(blueprint)}  Clearable: {is_clearable(blueprint)}")
        print_balance(blueprint)

    if not args.quiet:
        print("=" * 60)


if __name__ == "__main__":
    main()
