#!/usr/bin/env python3
"""
CLI: List the tile specs a seed produces, and optionally export a single tile.
Usage:
  python scripts/tile_info.py --seed 100 --count 8
  python scripts/tile_info.py --name "my poster" --count 4 --json
  python scripts/tile_info.py --seed 100 --export 2 --size 640 -o tile.png
"""
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

import argparse
import json

from artgrid.config import load_config
from artgrid.procedural import GridExporter, generate_tile_specs
from artgrid.procedural.data.palettes import PALETTE_NAMES
from artgrid.random_utils import hash_seed, seed_from_string
from artgrid.workflow_utils import configure_logging


def main() -> int:
    parser = argparse.ArgumentParser(description="Show tile specs for a seed; optionally export one tile.")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--seed", type=int, help="Base seed.")
    group.add_argument("--name", type=str, help="Derive the base seed from text.")
    parser.add_argument("--count", type=int, default=16, help="Number of tiles (default: 16).")
    parser.add_argument("--palette", choices=PALETTE_NAMES, default="Cool")
    parser.add_argument("--complexity", type=int, default=4)
    parser.add_argument("--designer", action="store_true")
    parser.add_argument("--json", action="store_true", help="Print specs as JSON lines.")
    parser.add_argument("--export", type=int, default=None, metavar="INDEX", help="Export tile INDEX as PNG.")
    parser.add_argument("--time", "-t", type=float, default=0.0)
    parser.add_argument("--size", type=int, default=None, help="Exported tile edge in pixels.")
    parser.add_argument("--output", "-o", type=Path, default=None)
    parser.add_argument("--config", type=Path, default=None)
    args = parser.parse_args()

    configure_logging("WARNING")
    base_seed = args.seed if args.seed is not None else seed_from_string(args.name)
    specs = generate_tile_specs(
        args.count,
        {
            "seed": base_seed,
            "palette": args.palette,
            "complexity": args.complexity,
            "designer_mode": args.designer,
        },
    )

    for spec in specs:
        if args.json:
            print(json.dumps({**spec.to_dict(), "hash": hash_seed(spec.seed)}))
        else:
            print(f"{spec.index:>3}  {spec.label:<16} seed={spec.seed:<12} #{hash_seed(spec.seed):<6}  {spec.id}")

    if args.export is not None:
        if not 0 <= args.export < len(specs):
            print(f"Tile index {args.export} out of range (0-{len(specs) - 1})", file=sys.stderr)
            return 1
        exporter = GridExporter(config=load_config(args.config))
        path = exporter.export_tile_png(specs[args.export], args.output, time=args.time, size=args.size)
        print(f"Done. Tile: {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
