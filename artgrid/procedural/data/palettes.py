"""
Color palettes used by every pattern generator.
Each palette is exactly 5 hex colors: index 0 is the background, 1-4 are cycled foreground colors.
"""
from types import MappingProxyType

DEFAULT_PALETTE = "Cool"

PALETTES: "MappingProxyType[str, tuple[str, ...]]" = MappingProxyType({
    "Warm": ("#1a1a2e", "#ff6b6b", "#ffa726", "#ffcc80", "#ffe0b2"),
    "Cool": ("#0f172a", "#06b6d4", "#0ea5e9", "#3b82f6", "#6366f1"),
    "Neon": ("#0a0a0a", "#ff0080", "#00ff80", "#8000ff", "#ff8000"),
    "Pastel": ("#f8f9fa", "#ffb3ba", "#bae1ff", "#baffc9", "#ffffba"),
    "Monochrome": ("#1f2937", "#4b5563", "#6b7280", "#9ca3af", "#d1d5db"),
})

PALETTE_NAMES: tuple[str, ...] = tuple(PALETTES)


def hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    """Convert '#RRGGBB' or 'RRGGBB' to (r, g, b). Handles shorthand '#RGB' too."""
    h = hex_color.strip().lstrip("#")
    if len(h) == 3:
        h = "".join(c * 2 for c in h)
    if len(h) != 6:
        raise ValueError(f"Invalid hex color: {hex_color!r}")
    return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)


def resolve_palette_name(name: str | None) -> str:
    """Known palette name, or the default for anything else."""
    return name if name in PALETTES else DEFAULT_PALETTE


def get_palette(name: str | None) -> tuple[str, ...]:
    return PALETTES[resolve_palette_name(name)]
