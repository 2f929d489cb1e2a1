"""
Grid renderer: tile specs + time → pixels.
One canvas per tile, drawn through the pattern router, then laid out row-major on a background.
"""
import logging
from typing import Sequence

import numpy as np

from .canvas import Canvas
from .data.palettes import hex_to_rgb
from .generators import draw_pattern
from .schema import TileSpec

logger = logging.getLogger(__name__)

DEFAULT_TILE_SIZE = 320
DEFAULT_GAP = 16
DEFAULT_BACKGROUND = "#0f172a"


def render_tile(spec: TileSpec, time: float = 0.0, size: int = DEFAULT_TILE_SIZE) -> Canvas:
    """Draw one tile at time t on a fresh square canvas."""
    canvas = Canvas(size, size)
    draw_pattern(canvas, size, size, spec.type, spec.render_options(time))
    return canvas


def grid_dimensions(count: int, cols: int, tile_size: int, gap: int) -> tuple[int, int, int]:
    """(rows, width, height) of a grid holding count tiles in cols columns."""
    cols = max(1, int(cols))
    rows = max(1, -(-max(0, count) // cols))
    width = cols * tile_size + (cols - 1) * gap
    height = rows * tile_size + (rows - 1) * gap
    return rows, width, height


def render_grid(
    specs: Sequence[TileSpec],
    cols: int,
    *,
    tile_size: int = DEFAULT_TILE_SIZE,
    gap: int = DEFAULT_GAP,
    time: float = 0.0,
    background: str = DEFAULT_BACKGROUND,
) -> "np.ndarray":
    """
    Render every spec and compose them into one (H, W, 3) uint8 frame.
    Tiles fill rows left to right in spec order.
    """
    cols = max(1, int(cols))
    _, width, height = grid_dimensions(len(specs), cols, tile_size, gap)
    frame = np.empty((height, width, 3), dtype=np.float64)
    frame[:, :] = hex_to_rgb(background)

    for i, spec in enumerate(specs):
        row, col = divmod(i, cols)
        x0 = col * (tile_size + gap)
        y0 = row * (tile_size + gap)
        tile = render_tile(spec, time, tile_size).to_array().astype(np.float64)
        alpha = tile[..., 3:4] / 255.0
        region = frame[y0:y0 + tile_size, x0:x0 + tile_size]
        region[:] = tile[..., :3] * alpha + region * (1.0 - alpha)

    logger.debug("Rendered %d tiles (%dx%d) at t=%.3f", len(specs), width, height, time)
    return np.clip(np.rint(frame), 0, 255).astype(np.uint8)
