"""
Pattern generators: (surface, width, height, options) → painted frame.
Every generator seeds its own Mulberry32 from options.seed, fills palette[0] first and
derives all motion from options.time, so the same options always give the same pixels.

- designer_mode: fewer/calmer elements, lower alpha, no high-variance random branches
- complexity (0-10): element count, density, size
- time (seconds): phase, oscillation and drift via trig functions
"""
import logging
import math
from typing import Any, Callable

from ..random_utils import create_rng
from .canvas import LIGHTER, Canvas, rgba
from .data.palettes import get_palette
from .schema import RenderOptions

logger = logging.getLogger(__name__)

PATTERN_TYPES: tuple[str, ...] = ("pixel", "wave", "fractal", "diagonal", "grain")
DEFAULT_PATTERN = "pixel"

WHITE = "#ffffff"
BLACK = "#000000"

Options = RenderOptions | dict[str, Any] | None


def _resolve_options(options: Options, default_seed: int) -> RenderOptions:
    if options is None:
        return RenderOptions.create(seed=default_seed)
    if isinstance(options, RenderOptions):
        return RenderOptions.create(
            seed=options.seed,
            palette=options.palette,
            complexity=options.complexity,
            designer_mode=options.designer_mode,
            time=options.time,
        )
    return RenderOptions.from_dict(options, default_seed=default_seed)


def _fill_background(surface: Canvas, w: int, h: int, colors: tuple[str, ...]) -> None:
    surface.fill_rect(0, 0, w, h, rgba(colors[0]))


def _accent(colors: tuple[str, ...], i: int) -> str:
    """Foreground color cycled by index over palette entries 1-4."""
    return colors[1 + (i % (len(colors) - 1))]


# ---------- Moving Lights ----------

def draw_pixel_noise(surface: Canvas, w: int, h: int, options: Options = None) -> None:
    """Orbiting light sources with additive glow and core washes, plus ambient particles."""
    opts = _resolve_options(options, default_seed=1)
    rng = create_rng(opts.seed)
    colors = get_palette(opts.palette)
    c, t, designer = opts.complexity, opts.time, opts.designer_mode

    _fill_background(surface, w, h, colors)

    light_count = 2 + c if designer else 3 + math.floor(rng() * c)

    for i in range(max(0, light_count)):
        # Base positions stay within the central 60%
        base_x = (rng() * 0.6 + 0.2) * w
        base_y = (rng() * 0.6 + 0.2) * h

        radius = 20 + c * 5 if designer else 30 + rng() * 50
        speed = 0.3 if designer else 0.2 + rng() * 0.4
        phase = rng() * math.pi * 2

        light_x = base_x + math.cos(t * speed + phase + i) * radius
        light_y = base_y + math.sin(t * speed * 0.7 + phase + i * 1.3) * radius

        max_radius = 80 + c * 10 if designer else 100 + rng() * 80
        intensity = 0.3 if designer else 0.4 + rng() * 0.3
        color = _accent(colors, i)

        surface.fill_radial_gradient(
            light_x, light_y, max_radius,
            [
                (0.0, rgba(color, intensity)),
                (0.3, rgba(color, intensity * 0.6)),
                (0.6, rgba(color, intensity * 0.2)),
                (1.0, rgba(color, 0)),
            ],
            rect=(0, 0, w, h),
            composite=LIGHTER,
        )
        surface.fill_radial_gradient(
            light_x, light_y, max_radius * 0.2,
            [
                (0.0, rgba(WHITE, intensity * 0.3)),
                (0.5, rgba(color, intensity * 0.5)),
                (1.0, rgba(color, 0)),
            ],
            rect=(0, 0, w, h),
            composite=LIGHTER,
        )

    if not designer and w > 0 and h > 0:
        particle_count = 20 + c * 5
        for i in range(particle_count):
            px = (rng() * w + math.sin(t * 0.5 + i) * 20) % w
            py = (rng() * h + math.cos(t * 0.3 + i) * 15) % h
            size = 1 + rng() * 2
            alpha = 0.1 + math.sin(t + i) * 0.05
            surface.fill_circle(px, py, size, rgba(_accent(colors, i), alpha))


# ---------- Waveform ----------

def draw_waveform(surface: Canvas, w: int, h: int, options: Options = None) -> None:
    """Horizontal sine strokes whose phase advances with time; vignette outside designer mode."""
    opts = _resolve_options(options, default_seed=2)
    rng = create_rng(opts.seed)
    colors = get_palette(opts.palette)
    c, t, designer = opts.complexity, opts.time, opts.designer_mode

    _fill_background(surface, w, h, colors)

    lines = max(3, c) if designer else 4 + math.floor(rng() * c)
    amplitude_base = 8 + c * 2 if designer else 12 + rng() * (c * 4)

    for i in range(max(0, lines)):
        freq = 0.008 + c * 0.001 if designer else 0.004 + rng() * 0.02
        amp = amplitude_base * (0.6 + rng() * 1.4) * (1 + i / lines * 0.5)
        offset_y = (h / (lines + 1)) * (i + 1) + (rng() - 0.5) * (15 if designer else 30)
        stroke = 1 + c * 0.2 if designer else 1.2 + rng() * 3

        phase_shift = t * 0.3 + rng() * math.pi * 2 + i

        ys = [offset_y + math.sin(x * freq + phase_shift) * amp for x in range(int(w) + 1)]
        alpha = 0.6 if designer else 0.9
        surface.stroke_curve(ys, stroke, rgba(_accent(colors, i), alpha))

    if not designer:
        surface.fill_linear_gradient(
            0, 0, 0, h,
            [
                (0.0, rgba(BLACK, 0.05)),
                (0.6, rgba(BLACK, 0)),
                (1.0, rgba(BLACK, 0.15)),
            ],
            rect=(0, 0, w, h),
        )


# ---------- Light Rays ----------

def draw_fractal(surface: Canvas, w: int, h: int, options: Options = None) -> None:
    """
    Light rays from the center toward an orbiting target point.
    Each ray: lengthwise-gradient ellipse, bright core, radial glow and a pulsing target highlight.
    """
    opts = _resolve_options(options, default_seed=3)
    rng = create_rng(opts.seed)
    colors = get_palette(opts.palette)
    c, t, designer = opts.complexity, opts.time, opts.designer_mode

    _fill_background(surface, w, h, colors)

    ray_count = 1 + c // 3 if designer else 1 + math.floor(rng() * 3)
    center_x = w * 0.5
    center_y = h * 0.5

    for r in range(ray_count):
        target_x = center_x + math.sin(t * 0.8 + r * 2) * (w * 0.3)
        target_y = center_y + math.cos(t * 0.6 + r * 1.5) * (h * 0.3)

        ray_length = 80 + c * 10 if designer else 100 + rng() * 60
        ray_width = 3 + c if designer else 4 + rng() * 6
        intensity = 0.6 if designer else 0.7 + rng() * 0.3

        angle = math.atan2(target_y - center_y, target_x - center_x)
        color = _accent(colors, r)

        surface.fill_ellipse(
            center_x, center_y, ray_length * 0.5, ray_width * 0.5, angle,
            stops=[
                (0.0, rgba(color, 0)),
                (0.3, rgba(color, intensity * 0.8)),
                (0.7, rgba(color, intensity)),
                (1.0, rgba(color, 0)),
            ],
        )
        # Bright core
        surface.fill_ellipse(
            center_x, center_y, ray_length * 0.5, ray_width * 0.2, angle,
            color=rgba(WHITE, intensity * 0.4),
        )

        surface.fill_radial_gradient(
            center_x, center_y, ray_length * 0.8,
            [
                (0.0, rgba(color, intensity * 0.2)),
                (0.5, rgba(color, intensity * 0.1)),
                (1.0, rgba(color, 0)),
            ],
            rect=(0, 0, w, h),
        )

        pulse_radius = 8 + math.sin(t * 3 + r) * 4
        surface.fill_radial_gradient(
            target_x, target_y, pulse_radius,
            [
                (0.0, rgba(WHITE, 0.8)),
                (0.3, rgba(color, 0.6)),
                (1.0, rgba(color, 0)),
            ],
            rect=(0, 0, w, h),
        )

    # Connector particles
    if not designer and c > 5:
        for i in range(8):
            px = w * 0.5 + math.sin(t + i * 0.8) * 40
            py = h * 0.5 + math.cos(t * 0.8 + i) * 40
            size = 2 + math.sin(t * 2 + i) * 1
            surface.fill_circle(px, py, size, rgba(colors[2], 0.3))


# ---------- Diagonal Strata ----------

def draw_diagonal_strata(surface: Canvas, w: int, h: int, options: Options = None) -> None:
    """Soft translucent bands at a slowly oscillating angle, rotated about the center."""
    opts = _resolve_options(options, default_seed=4)
    rng = create_rng(opts.seed)
    colors = get_palette(opts.palette)
    c, t, designer = opts.complexity, opts.time, opts.designer_mode

    _fill_background(surface, w, h, colors)

    stripes = c + 2 if designer else 3 + math.floor(rng() * c)
    angle = 45 if designer else 30 + rng() * 60  # degrees
    if stripes <= 0:
        return
    stripe_width = (max(w, h) * 1.4) / stripes
    rotation = math.radians(angle + math.sin(t * 0.2) * 5)

    for i in range(stripes):
        x = -w * 0.5 + i * stripe_width
        color = _accent(colors, i)
        alpha = 0.2 + i * 0.1 if designer else 0.4 + rng() * 0.4
        surface.fill_rotated_rect(
            x, -h * 0.5, stripe_width, h * 2,
            rotation, (w / 2, h / 2),
            [
                (0.0, rgba(color, 0)),
                (0.5, rgba(color, alpha)),
                (1.0, rgba(color, 0)),
            ],
        )


# ---------- Soft Grain ----------

def draw_soft_grain(surface: Canvas, w: int, h: int, options: Options = None) -> None:
    """Small translucent dots with a subtle wobble; designer mode adds a radial overlay."""
    opts = _resolve_options(options, default_seed=5)
    rng = create_rng(opts.seed)
    colors = get_palette(opts.palette)
    c, t, designer = opts.complexity, opts.time, opts.designer_mode

    _fill_background(surface, w, h, colors)

    grain_density = c * 100 if designer else c * 200
    grain_size = 1 if designer else 1 + rng() * 2

    for i in range(max(0, grain_density)):
        x = rng() * w
        y = rng() * h
        color = colors[1 + math.floor(rng() * (len(colors) - 1))]

        anim_x = x + math.sin(t * 0.5 + i * 0.1) * 2
        anim_y = y + math.cos(t * 0.3 + i * 0.15) * 2

        alpha = 0.1 + rng() * 0.2 if designer else 0.2 + rng() * 0.4
        surface.fill_circle(anim_x, anim_y, grain_size, rgba(color, alpha))

    if designer:
        surface.fill_radial_gradient(
            w / 2, h / 2, max(w, h) * 0.7,
            [
                (0.0, rgba(WHITE, 0.02)),
                (1.0, rgba(BLACK, 0.05)),
            ],
            rect=(0, 0, w, h),
        )


# ---------- Router ----------

GENERATORS: dict[str, Callable[[Canvas, int, int, Options], None]] = {
    "pixel": draw_pixel_noise,
    "wave": draw_waveform,
    "fractal": draw_fractal,
    "diagonal": draw_diagonal_strata,
    "grain": draw_soft_grain,
}


def get_generator(pattern_type: str) -> Callable[[Canvas, int, int, Options], None]:
    """Generator for a type tag; unknown tags get the moving-lights generator."""
    fn = GENERATORS.get(pattern_type)
    if fn is None:
        logger.debug("Unknown pattern type %r, using %s", pattern_type, DEFAULT_PATTERN)
        return GENERATORS[DEFAULT_PATTERN]
    return fn


def draw_pattern(surface: Canvas, w: int, h: int, pattern_type: str, options: Options = None) -> None:
    """Paint one frame of pattern_type onto surface. Never raises for unknown types or palettes."""
    get_generator(pattern_type)(surface, int(w), int(h), options)
