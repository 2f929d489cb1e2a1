#!/usr/bin/env python3
"""
CLI: Render a grid of generative tiles to PNG, a collectible card, an animated clip, or a live-updating preview.
Usage:
  python scripts/render_grid.py --seed 42
  python scripts/render_grid.py --seed 42 --cols 3 --palette Neon --complexity 7 -o grid.png
  python scripts/render_grid.py --query "seed=42&cols=4&palette=Warm&designer=1"
  python scripts/render_grid.py --seed 7 --clip -o grid.gif --duration 3
  python scripts/render_grid.py --surprise --live -o preview.png
  python scripts/render_grid.py --settings my-grid.json --card
"""
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

import argparse
from dataclasses import replace

from artgrid.config import load_config
from artgrid.procedural import GridExporter
from artgrid.procedural.data.palettes import PALETTE_NAMES
from artgrid.random_utils import hash_seed
from artgrid.settings import (
    load_settings,
    regenerate,
    save_settings,
    settings_from_config,
    settings_from_query,
    settings_to_query,
    surprise_settings,
)
from artgrid.workflow_utils import StopSignal, configure_logging, log_event


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Render a seeded grid of generative art tiles (PNG, collectible card, GIF/MP4 clip or live preview)."
    )
    parser.add_argument("--seed", type=int, default=None, help="Base seed (tile i uses seed + i). Default: fresh seed.")
    parser.add_argument("--cols", type=int, default=None, help="Grid columns; grid holds cols x cols tiles.")
    parser.add_argument("--palette", choices=PALETTE_NAMES, default=None, help="Color palette.")
    parser.add_argument("--complexity", type=int, default=None, help="Detail level 0-10.")
    parser.add_argument("--designer", action="store_true", help="Calmer, UI-friendly variant of every pattern.")
    parser.add_argument("--speed", type=float, default=None, help="Animation speed multiplier (0.25-3).")
    parser.add_argument(
        "--query",
        type=str,
        default=None,
        help="Settings as a share-link query string (seed, cols, palette, complexity, live, designer).",
    )
    parser.add_argument("--surprise", action="store_true", help="Randomize grid size, palette, complexity, speed and seed.")
    parser.add_argument("--time", "-t", type=float, default=0.0, help="Animation time in seconds for still output.")
    parser.add_argument("--output", "-o", type=Path, default=None, help="Output path (default: output/<prefix>-<seed>-<timestamp>).")
    parser.add_argument("--card", action="store_true", help="Write the grid framed as a collectible card (PNG).")
    parser.add_argument("--clip", action="store_true", help="Write an animated clip (.gif or .mp4) instead of a still.")
    parser.add_argument("--duration", "-d", type=float, default=None, help="Clip duration in seconds.")
    parser.add_argument("--live", action="store_true", help="Keep re-rendering the output file until interrupted.")
    parser.add_argument("--frames", type=int, default=None, help="Stop live preview after this many frames.")
    parser.add_argument(
        "--settings",
        type=Path,
        default=None,
        help="Saved settings JSON: loaded as the starting point if present, rewritten with the final settings.",
    )
    parser.add_argument("--config", type=Path, default=None, help="Path to config YAML (default: config/default.yaml).")
    parser.add_argument("--log-level", default="INFO", help="Logging level (default: INFO).")
    args = parser.parse_args()

    configure_logging(args.log_level)
    config = load_config(args.config)

    settings = settings_from_config(config)
    if args.settings:
        settings = load_settings(args.settings, base=settings)
    if args.query:
        settings = settings_from_query(args.query, base=settings)
    overrides = {
        "seed": args.seed,
        "grid_size": args.cols,
        "palette": args.palette,
        "complexity": args.complexity,
        "animation_speed": args.speed,
    }
    if args.designer:
        overrides["designer_mode"] = True
    settings = replace(settings, **{k: v for k, v in overrides.items() if v is not None})

    if args.surprise:
        settings = surprise_settings(settings)
    if not settings.seed:
        settings = regenerate(settings)

    if args.settings:
        save_settings(args.settings, settings)

    print(f"Seed: {settings.seed} (#{hash_seed(settings.seed)})  Share: ?{settings_to_query(settings)}")

    exporter = GridExporter(config=config)
    if args.live:
        stop = StopSignal().install()
        frames = exporter.run_live(settings, args.output, frames=args.frames, should_stop=stop)
        log_event("live_preview", frames=frames, seed=settings.seed, interrupted=stop.requested)
        return 0

    if args.card:
        path = exporter.export_card(settings, args.output, time=args.time)
    elif args.clip:
        path = exporter.export_clip(settings, args.output, args.duration)
    else:
        path = exporter.export_png(settings, args.output, time=args.time)
    log_event(
        "export",
        path=path,
        seed=settings.seed,
        tiles=settings.tile_count,
        palette=settings.palette,
        complexity=settings.complexity,
    )
    print(f"Done. Image: {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
