"""
Canvas-like RGBA raster the pattern generators paint on.
Backed by numpy (premultiplied color + alpha), with source-over and additive compositing,
linear/radial gradients, anti-aliased circles/ellipses and curve strokes. Pillow is used for export.
"""
import math
from typing import Sequence

import numpy as np

from .data.palettes import hex_to_rgb

Color = tuple[float, float, float, float]  # r, g, b in 0-255; a in 0-1
Stops = Sequence[tuple[float, Color]]

SOURCE_OVER = "source-over"
LIGHTER = "lighter"


def rgba(hex_color: str, alpha: float = 1.0) -> Color:
    """Hex color + alpha → (r, g, b, a). Alpha is clamped to [0, 1]."""
    r, g, b = hex_to_rgb(hex_color)
    return (float(r), float(g), float(b), max(0.0, min(1.0, float(alpha))))


def _stop_channels(stops: Stops) -> tuple["np.ndarray", list["np.ndarray"]]:
    """Offsets and premultiplied (r, g, b, a) channels for np.interp."""
    offsets = np.array([float(o) for o, _ in stops], dtype=np.float64)
    premul = np.array(
        [(c[0] * c[3], c[1] * c[3], c[2] * c[3], c[3]) for _, c in stops],
        dtype=np.float64,
    )
    return offsets, [premul[:, k] for k in range(4)]


def _sample_stops(t: "np.ndarray", stops: Stops) -> tuple["np.ndarray", "np.ndarray"]:
    """Evaluate a gradient at t (clamped to the end stops). Returns (premul rgb, alpha)."""
    offsets, channels = _stop_channels(stops)
    rgb = np.stack([np.interp(t, offsets, channels[k]) for k in range(3)], axis=-1)
    alpha = np.interp(t, offsets, channels[3])
    return rgb, alpha


class Canvas:
    """
    Fixed-size RGBA surface, initially fully transparent.
    Pixel (x, y) is sampled at its center (x + 0.5, y + 0.5).
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = max(0, int(width))
        self.height = max(0, int(height))
        self._rgb = np.zeros((self.height, self.width, 3), dtype=np.float64)  # premultiplied
        self._alpha = np.zeros((self.height, self.width), dtype=np.float64)

    # ---- region helpers ----------------------------------------------------

    def _region(self, x0: float, y0: float, x1: float, y1: float) -> tuple[int, int, int, int] | None:
        ix0 = max(0, int(math.floor(x0)))
        iy0 = max(0, int(math.floor(y0)))
        ix1 = min(self.width, int(math.ceil(x1)))
        iy1 = min(self.height, int(math.ceil(y1)))
        if ix1 <= ix0 or iy1 <= iy0:
            return None
        return ix0, iy0, ix1, iy1

    @staticmethod
    def _grid(region: tuple[int, int, int, int]) -> tuple["np.ndarray", "np.ndarray"]:
        ix0, iy0, ix1, iy1 = region
        x = np.arange(ix0, ix1, dtype=np.float64) + 0.5
        y = np.arange(iy0, iy1, dtype=np.float64) + 0.5
        return np.meshgrid(x, y)

    def _composite(
        self,
        region: tuple[int, int, int, int],
        src_rgb: "np.ndarray",
        src_alpha: "np.ndarray",
        composite: str = SOURCE_OVER,
    ) -> None:
        """Blend premultiplied source into region."""
        ix0, iy0, ix1, iy1 = region
        dst_rgb = self._rgb[iy0:iy1, ix0:ix1]
        dst_a = self._alpha[iy0:iy1, ix0:ix1]
        if composite == LIGHTER:
            dst_rgb += src_rgb
            dst_a += src_alpha
            np.clip(dst_rgb, 0.0, 255.0, out=dst_rgb)
            np.clip(dst_a, 0.0, 1.0, out=dst_a)
        else:
            keep = 1.0 - src_alpha
            dst_rgb *= keep[..., None]
            dst_rgb += src_rgb
            dst_a *= keep
            dst_a += src_alpha

    def _paint_coverage(
        self,
        region: tuple[int, int, int, int],
        coverage: "np.ndarray",
        color: Color,
        composite: str = SOURCE_OVER,
    ) -> None:
        a = coverage * float(color[3])
        rgb = a[..., None] * np.array(color[:3], dtype=np.float64)
        self._composite(region, rgb, a, composite)

    def _paint_gradient(
        self,
        region: tuple[int, int, int, int],
        t: "np.ndarray",
        stops: Stops,
        coverage: "np.ndarray | None" = None,
        composite: str = SOURCE_OVER,
    ) -> None:
        rgb, a = _sample_stops(t, stops)
        if coverage is not None:
            rgb *= coverage[..., None]
            a = a * coverage
        self._composite(region, rgb, a, composite)

    def _rect_coverage(self, region, x: float, y: float, w: float, h: float) -> "np.ndarray":
        """Fractional pixel coverage of an axis-aligned rectangle."""
        ix0, iy0, ix1, iy1 = region
        px = np.arange(ix0, ix1, dtype=np.float64)
        py = np.arange(iy0, iy1, dtype=np.float64)
        cx = np.clip(np.minimum(px + 1, x + w) - np.maximum(px, x), 0.0, 1.0)
        cy = np.clip(np.minimum(py + 1, y + h) - np.maximum(py, y), 0.0, 1.0)
        return cy[:, None] * cx[None, :]

    # ---- drawing operations -----------------------------------------------

    def fill_rect(self, x: float, y: float, w: float, h: float, color: Color, composite: str = SOURCE_OVER) -> None:
        if w <= 0 or h <= 0:
            return
        region = self._region(x, y, x + w, y + h)
        if region is None:
            return
        self._paint_coverage(region, self._rect_coverage(region, x, y, w, h), color, composite)

    def fill_linear_gradient(
        self,
        x0: float,
        y0: float,
        x1: float,
        y1: float,
        stops: Stops,
        rect: tuple[float, float, float, float] | None = None,
        composite: str = SOURCE_OVER,
    ) -> None:
        """Fill rect (default whole canvas) with a gradient running from (x0, y0) to (x1, y1)."""
        dx, dy = x1 - x0, y1 - y0
        length_sq = dx * dx + dy * dy
        if length_sq <= 0:
            return
        rx, ry, rw, rh = rect if rect is not None else (0, 0, self.width, self.height)
        region = self._region(rx, ry, rx + rw, ry + rh)
        if region is None:
            return
        xx, yy = self._grid(region)
        t = ((xx - x0) * dx + (yy - y0) * dy) / length_sq
        self._paint_gradient(region, t, stops, self._rect_coverage(region, rx, ry, rw, rh), composite)

    def fill_radial_gradient(
        self,
        cx: float,
        cy: float,
        radius: float,
        stops: Stops,
        rect: tuple[float, float, float, float] | None = None,
        composite: str = SOURCE_OVER,
    ) -> None:
        """Fill rect (default whole canvas) with a gradient from (cx, cy) out to radius."""
        if radius <= 0:
            return
        rx, ry, rw, rh = rect if rect is not None else (0, 0, self.width, self.height)
        region = self._region(rx, ry, rx + rw, ry + rh)
        if region is None:
            return
        xx, yy = self._grid(region)
        t = np.hypot(xx - cx, yy - cy) / radius
        self._paint_gradient(region, t, stops, self._rect_coverage(region, rx, ry, rw, rh), composite)

    def fill_ellipse(
        self,
        cx: float,
        cy: float,
        rx: float,
        ry: float,
        angle: float = 0.0,
        color: Color | None = None,
        stops: Stops | None = None,
        composite: str = SOURCE_OVER,
    ) -> None:
        """
        Anti-aliased ellipse rotated by angle (radians). Paint with a flat color, or with
        stops running along the major axis from -rx to +rx.
        """
        if rx <= 0 or ry <= 0:
            return
        reach = max(rx, ry) + 1.0
        region = self._region(cx - reach, cy - reach, cx + reach, cy + reach)
        if region is None:
            return
        xx, yy = self._grid(region)
        c, s = math.cos(angle), math.sin(angle)
        dx, dy = xx - cx, yy - cy
        u = dx * c + dy * s
        v = -dx * s + dy * c
        f = (u / rx) ** 2 + (v / ry) ** 2 - 1.0
        grad = 2.0 * np.hypot(u / (rx * rx), v / (ry * ry))
        coverage = np.clip(0.5 - f / np.maximum(grad, 1e-9), 0.0, 1.0)
        if stops is not None:
            t = (u + rx) / (2.0 * rx)
            self._paint_gradient(region, t, stops, coverage, composite)
        elif color is not None:
            self._paint_coverage(region, coverage, color, composite)

    def fill_circle(self, cx: float, cy: float, r: float, color: Color, composite: str = SOURCE_OVER) -> None:
        self.fill_ellipse(cx, cy, r, r, 0.0, color=color, composite=composite)

    def stroke_curve(self, ys: Sequence[float], width: float, color: Color, composite: str = SOURCE_OVER) -> None:
        """
        Stroke a polyline through (x, ys[x]) for x = 0, 1, 2, ...
        Coverage uses the perpendicular distance from each pixel center to the curve.
        """
        ys = np.asarray(ys, dtype=np.float64)
        if ys.size < 2 or width <= 0:
            return
        half = width / 2.0
        xs = np.arange(ys.size, dtype=np.float64)
        region = self._region(0, ys.min() - half - 1, xs[-1], ys.max() + half + 1)
        if region is None:
            return
        xx, yy = self._grid(region)
        col_x = xx[0]
        curve_y = np.interp(col_x, xs, ys)
        slope = np.interp(col_x, xs, np.gradient(ys))
        dist = np.abs(yy - curve_y[None, :]) / np.sqrt(1.0 + slope * slope)[None, :]
        coverage = np.clip(half + 0.5 - dist, 0.0, 1.0)
        self._paint_coverage(region, coverage, color, composite)

    def fill_rotated_rect(
        self,
        x: float,
        y: float,
        w: float,
        h: float,
        angle: float,
        origin: tuple[float, float],
        stops: Stops,
        composite: str = SOURCE_OVER,
    ) -> None:
        """
        Fill the rect (x, y, w, h), given in a frame rotated by angle (radians) about origin,
        with a gradient running across its width.
        """
        if w <= 0 or h <= 0:
            return
        region = self._region(0, 0, self.width, self.height)
        if region is None:
            return
        xx, yy = self._grid(region)
        ox, oy = origin
        c, s = math.cos(angle), math.sin(angle)
        dx, dy = xx - ox, yy - oy
        lx = dx * c + dy * s + ox
        ly = -dx * s + dy * c + oy
        inside_x = np.clip(np.minimum(lx - x, x + w - lx) + 0.5, 0.0, 1.0)
        inside_y = np.clip(np.minimum(ly - y, y + h - ly) + 0.5, 0.0, 1.0)
        t = (lx - x) / w
        self._paint_gradient(region, t, stops, inside_x * inside_y, composite)

    # ---- output --------------------------------------------------------------

    def to_array(self) -> "np.ndarray":
        """(H, W, 4) uint8 straight-alpha RGBA."""
        alpha = self._alpha
        safe = np.where(alpha > 0, alpha, 1.0)
        rgb = np.where(alpha[..., None] > 0, self._rgb / safe[..., None], 0.0)
        out = np.empty((self.height, self.width, 4), dtype=np.uint8)
        out[..., :3] = np.clip(np.rint(rgb), 0, 255).astype(np.uint8)
        out[..., 3] = np.clip(np.rint(alpha * 255.0), 0, 255).astype(np.uint8)
        return out

    def to_rgb_array(self) -> "np.ndarray":
        return self.to_array()[..., :3]

    def to_image(self):
        """Pillow RGBA image of the current pixels."""
        from PIL import Image

        return Image.fromarray(self.to_array())

    def copy(self) -> "Canvas":
        other = Canvas(self.width, self.height)
        other._rgb = self._rgb.copy()
        other._alpha = self._alpha.copy()
        return other
