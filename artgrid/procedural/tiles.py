"""
Tile-spec generation: count + shared options → ordered TileSpecs.
Order is the grid layout (row-major); types cycle pixel → wave → fractal → diagonal → grain.
"""
from typing import Any

from ..random_utils import generate_seed
from .data.palettes import DEFAULT_PALETTE, resolve_palette_name
from .generators import PATTERN_TYPES
from .schema import DEFAULT_COMPLEXITY, GridSettings, TileSpec, clamp_complexity

TYPE_LABELS: dict[str, str] = {
    "pixel": "Moving Lights",
    "wave": "Waveform",
    "fractal": "Light Rays",
    "diagonal": "Diagonal Strata",
    "grain": "Soft Grain",
}


def get_type_label(pattern_type: str) -> str:
    return TYPE_LABELS.get(pattern_type, pattern_type)


def generate_tile_specs(count: int = 12, options: dict[str, Any] | None = None) -> list[TileSpec]:
    """
    Exactly `count` specs. With a base seed, tile i gets seed base + i (reproducible);
    without one, each tile draws an independent fresh seed.
    """
    opts = options or {}
    base_seed = opts.get("seed")
    palette = resolve_palette_name(opts.get("palette", DEFAULT_PALETTE))
    complexity = clamp_complexity(opts.get("complexity", DEFAULT_COMPLEXITY))
    designer_mode = bool(opts.get("designer_mode", opts.get("designerMode", False)))

    specs: list[TileSpec] = []
    for i in range(max(0, int(count))):
        tile_seed = int(base_seed) + i if base_seed else generate_seed()
        pattern_type = PATTERN_TYPES[i % len(PATTERN_TYPES)]
        specs.append(
            TileSpec(
                id=f"{pattern_type}-{tile_seed}-{i}",
                type=pattern_type,
                seed=tile_seed,
                label=get_type_label(pattern_type),
                palette=palette,
                complexity=complexity,
                designer_mode=designer_mode,
                index=i,
            )
        )
    return specs


def build_tile_specs(settings: GridSettings) -> list[TileSpec]:
    """One spec per grid cell (grid_size ** 2) with the grid's shared style."""
    return generate_tile_specs(
        settings.tile_count,
        {
            "seed": settings.seed,
            "palette": settings.palette,
            "complexity": settings.complexity,
            "designer_mode": settings.designer_mode,
        },
    )
