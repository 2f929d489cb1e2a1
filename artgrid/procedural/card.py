"""
Collectible card: the rendered grid framed with its seed badge, pattern summary and generation settings.
Text is drawn with Pillow on an RGBA overlay, then composited over a diagonal slate gradient.
"""
import datetime
from typing import Sequence

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from ..random_utils import FALLBACK_SEED, hash_seed
from .data.palettes import hex_to_rgb
from .schema import GridSettings

PADDING = 32
ART_PADDING = 16
MIN_CARD_WIDTH = 480

TITLE = "Generative Art Grid"
SUBTITLE = "Digital Collectible"
EDITION = "1/1 Unique"
FOOTER_LEFT = "Generative Art Collection"
FOOTER_RIGHT = "v1.0"

_WHITE = (255, 255, 255, 255)
_MUTED = (148, 163, 184, 255)
_LABEL = (100, 116, 139, 255)
_CHIP_BG = (30, 41, 59, 255)
_CHIP_FG = (203, 213, 225, 255)
_DESIGNER_BG = (19, 78, 74, 255)
_DESIGNER_FG = (94, 234, 212, 255)
_DIVIDER = (51, 65, 85, 255)
_BORDER = (54, 65, 84, 255)  # slate-400 at 20% over #1e293b

_SANS_FONTS = ("arial.ttf", "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf", "DejaVuSans.ttf")
_MONO_FONTS = ("cour.ttf", "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf", "DejaVuSansMono.ttf")


def _load_font(size: int, mono: bool = False):
    for name in _MONO_FONTS if mono else _SANS_FONTS:
        try:
            return ImageFont.truetype(name, size)
        except (OSError, IOError):
            continue
    return ImageFont.load_default()


def _text_size(draw: ImageDraw.ImageDraw, text: str, font) -> tuple[int, int]:
    left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
    return right - left, bottom - top


def _diagonal_gradient(width: int, height: int, stops: Sequence[tuple[float, str]]) -> Image.Image:
    """135° gradient (top-left → bottom-right) through hex color stops."""
    ys, xs = np.mgrid[0:height, 0:width].astype(np.float64)
    t = (xs + ys) / max(1.0, float(width + height - 2))
    offsets = [o for o, _ in stops]
    colors = np.array([hex_to_rgb(c) for _, c in stops], dtype=np.float64)
    rgb = np.stack([np.interp(t, offsets, colors[:, ch]) for ch in range(3)], axis=-1)
    alpha = np.full((height, width, 1), 255.0)
    return Image.fromarray(np.rint(np.concatenate([rgb, alpha], axis=-1)).astype(np.uint8))


def pattern_summary(labels: Sequence[str]) -> str:
    """First two distinct pattern labels joined with ' + ', then '+N' for the rest (at most three considered)."""
    distinct = list(dict.fromkeys(labels))[:3]
    text = " + ".join(distinct[:2])
    if len(distinct) > 2:
        text += f" +{len(distinct) - 2}"
    return text


def format_created(created: datetime.datetime) -> str:
    return f"{created:%b} {created.day}, {created:%Y}, {created:%I:%M %p}"


def settings_chips(settings: GridSettings) -> list[tuple[str, bool]]:
    """(text, highlighted) chips for the settings row; designer mode is the highlighted one."""
    chips = [
        (f"{settings.grid_size}×{settings.grid_size} Grid", False),
        (f"{settings.palette} Palette", False),
        (f"Complexity {settings.complexity}/10", False),
    ]
    if settings.designer_mode:
        chips.append(("Designer Mode", True))
    chips.append((f"{settings.animation_speed:g}x Speed", False))
    return chips


def render_card(
    grid: "np.ndarray",
    settings: GridSettings,
    *,
    pattern_labels: Sequence[str] = (),
    created: datetime.datetime | None = None,
) -> Image.Image:
    """
    Compose an RGB card around a rendered (H, W, 3) grid frame.
    Card width follows the grid (never below MIN_CARD_WIDTH); height follows the content.
    """
    created = created or datetime.datetime.now()
    seed = settings.seed or FALLBACK_SEED
    art = Image.fromarray(grid).convert("RGBA")

    width = max(MIN_CARD_WIDTH, art.width + 2 * (PADDING + ART_PADDING))
    inner = width - 2 * PADDING
    # generous scratch height; cropped to the content below
    overlay = Image.new("RGBA", (width, art.height + 800), (0, 0, 0, 0))
    draw = ImageDraw.Draw(overlay)

    title_font = _load_font(24)
    body_font = _load_font(14)
    small_font = _load_font(12)
    mono_font = _load_font(12, mono=True)
    value_mono = _load_font(14, mono=True)

    # header + seed badge
    y = PADDING
    draw.text((PADDING, y), TITLE, font=title_font, fill=_WHITE)
    draw.text((PADDING, y + 32), SUBTITLE, font=body_font, fill=_MUTED)
    badge_text = f"#{hash_seed(seed)}"
    bw, bh = _text_size(draw, badge_text, mono_font)
    badge_w, badge_h = bw + 24, bh + 16
    bx = width - PADDING - badge_w
    badge = _diagonal_gradient(badge_w, badge_h, [(0.0, "#6366f1"), (1.0, "#8b5cf6")])
    mask = Image.new("L", (badge_w, badge_h), 0)
    ImageDraw.Draw(mask).rounded_rectangle((0, 0, badge_w - 1, badge_h - 1), radius=8, fill=255)
    overlay.paste(badge, (bx, y), mask)
    draw.text((bx + 12, y + 8), badge_text, font=mono_font, fill=_WHITE)
    y += 64

    # artwork
    box_h = art.height + 2 * ART_PADDING
    draw.rounded_rectangle((PADDING, y, PADDING + inner - 1, y + box_h - 1), radius=12, fill=(0, 0, 0, 51))
    overlay.paste(art, ((width - art.width) // 2, y + ART_PADDING))
    y += box_h + 24

    # metadata: two rows of label/value pairs
    col2 = PADDING + inner // 2 + 8
    rows = [
        (("PATTERN", pattern_summary(pattern_labels), body_font), ("SEED", f"#{str(seed)[:8]}", value_mono)),
        (("CREATED", format_created(created), body_font), ("EDITION", EDITION, body_font)),
    ]
    for row in rows:
        for x, (label, value, font) in zip((PADDING, col2), row):
            draw.text((x, y), label, font=small_font, fill=_LABEL)
            draw.text((x, y + 18), value, font=font, fill=_WHITE)
        y += 56

    # generation settings chips, wrapped to the inner width
    draw.line((PADDING, y, PADDING + inner, y), fill=_DIVIDER, width=1)
    y += 16
    draw.text((PADDING, y), "GENERATION SETTINGS", font=small_font, fill=_LABEL)
    y += 24
    x = PADDING
    chip_h = 24
    for text, highlighted in settings_chips(settings):
        tw, _ = _text_size(draw, text, small_font)
        chip_w = tw + 16
        if x > PADDING and x + chip_w > PADDING + inner:
            x = PADDING
            y += chip_h + 8
        bg, fg = (_DESIGNER_BG, _DESIGNER_FG) if highlighted else (_CHIP_BG, _CHIP_FG)
        draw.rounded_rectangle((x, y, x + chip_w, y + chip_h), radius=4, fill=bg)
        draw.text((x + 8, y + 5), text, font=small_font, fill=fg)
        x += chip_w + 8
    y += chip_h + 16

    # footer
    draw.text((PADDING, y), FOOTER_LEFT, font=small_font, fill=_LABEL)
    fw, _ = _text_size(draw, FOOTER_RIGHT, small_font)
    draw.text((width - PADDING - fw, y), FOOTER_RIGHT, font=small_font, fill=_LABEL)
    height = y + 16 + PADDING

    card = _diagonal_gradient(width, height, [(0.0, "#1e293b"), (0.5, "#0f172a"), (1.0, "#1e293b")])
    card.alpha_composite(overlay.crop((0, 0, width, height)))
    ImageDraw.Draw(card).rounded_rectangle(
        (0, 0, width - 1, height - 1), radius=16, outline=_BORDER, width=1
    )
    return card.convert("RGB")
