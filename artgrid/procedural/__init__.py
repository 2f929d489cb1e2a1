# Procedural tile engine: seeded generators, tile specs, animation time and grid export

from ..random_utils import create_rng, generate_seed, hash_seed, seed_from_string
from .canvas import Canvas
from .generators import PATTERN_TYPES, draw_pattern
from .generator import GridExporter
from .motion import AnimationClock, FrameScheduler
from .renderer import render_grid, render_tile
from .schema import GridSettings, RenderOptions, TileSpec
from .tiles import build_tile_specs, generate_tile_specs

__all__ = [
    "create_rng",
    "generate_seed",
    "hash_seed",
    "seed_from_string",
    "Canvas",
    "PATTERN_TYPES",
    "draw_pattern",
    "GridExporter",
    "AnimationClock",
    "FrameScheduler",
    "render_grid",
    "render_tile",
    "GridSettings",
    "RenderOptions",
    "TileSpec",
    "build_tile_specs",
    "generate_tile_specs",
]
