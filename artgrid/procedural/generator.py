"""
Grid exporter: settings → PNG still, collectible card, animated clip, or a live-updating preview file.
Export sits outside the engine: it only calls the deterministic renderer and writes what it returns.
"""
import datetime
import logging
from pathlib import Path
from typing import Any, Callable

from ..config import get_output_dir, resolve_render_config
from .card import render_card
from .motion import AnimationClock, FrameScheduler
from .renderer import DEFAULT_BACKGROUND, DEFAULT_GAP, DEFAULT_TILE_SIZE, render_grid, render_tile
from .schema import GridSettings, TileSpec
from .tiles import build_tile_specs

logger = logging.getLogger(__name__)

CLIP_SUFFIXES = (".gif", ".mp4")


def _timestamp() -> str:
    return datetime.datetime.now().strftime("%Y-%m-%d-%H-%M")


class GridExporter:
    """
    Renders a whole grid (or one tile) and writes it to disk.
    Still images and collectible cards via Pillow; GIF via Pillow; MP4 via imageio (+ imageio-ffmpeg).
    """

    def __init__(
        self,
        tile_size: int = DEFAULT_TILE_SIZE,
        gap: int = DEFAULT_GAP,
        fps: int = 24,
        config: dict[str, Any] | None = None,
    ):
        cfg = config or {}
        render = resolve_render_config(cfg)
        self.tile_size = int(render.get("tile_size", tile_size) or tile_size)
        gap_cfg = render.get("gap")
        self.gap = int(gap if gap_cfg is None else gap_cfg)
        self.background = render.get("background") or DEFAULT_BACKGROUND
        self.fps = float(cfg.get("animation", {}).get("fps", fps) or fps)
        if self.fps <= 0:
            self.fps = float(fps)
        self._config = cfg

    def _output_path(self, path: Path | None, name: str, suffix: str) -> Path:
        if path is None:
            path = get_output_dir(self._config) / name
        path = Path(path)
        if path.suffix == "":
            path = path.with_suffix(suffix)
        path.parent.mkdir(parents=True, exist_ok=True)
        return path

    def render(self, settings: GridSettings, time: float = 0.0, specs: list[TileSpec] | None = None):
        """(H, W, 3) uint8 frame of the grid at time."""
        specs = specs if specs is not None else build_tile_specs(settings)
        return render_grid(
            specs,
            settings.grid_size,
            tile_size=self.tile_size,
            gap=self.gap,
            time=time,
            background=self.background,
        )

    def export_png(self, settings: GridSettings, path: Path | None = None, *, time: float = 0.0) -> Path:
        from PIL import Image

        prefix = self._config.get("output", {}).get("filename_prefix", "generative-artwork")
        out = self._output_path(path, f"{prefix}-{settings.seed}-{_timestamp()}", ".png")
        Image.fromarray(self.render(settings, time)).save(out)
        logger.info("Exported grid (%d tiles, seed=%s) → %s", settings.tile_count, settings.seed, out)
        return out

    def export_card(
        self,
        settings: GridSettings,
        path: Path | None = None,
        *,
        time: float = 0.0,
        created: datetime.datetime | None = None,
    ) -> Path:
        """Grid at time framed as a collectible card (seed badge, patterns, settings)."""
        specs = build_tile_specs(settings)
        out = self._output_path(path, f"generative-card-{settings.seed}-{_timestamp()}", ".png")
        card = render_card(
            self.render(settings, time, specs),
            settings,
            pattern_labels=[spec.label for spec in specs],
            created=created,
        )
        card.save(out)
        logger.info("Exported card %dx%d (seed=%s) → %s", card.width, card.height, settings.seed, out)
        return out

    def export_tile_png(
        self,
        spec: TileSpec,
        path: Path | None = None,
        *,
        time: float = 0.0,
        size: int | None = None,
    ) -> Path:
        date = datetime.date.today().isoformat()
        out = self._output_path(path, f"generative-art-{spec.type}-{spec.seed}-{date}", ".png")
        render_tile(spec, time, size or self.tile_size).to_image().save(out)
        logger.info("Exported tile %s → %s", spec.id, out)
        return out

    def export_clip(
        self,
        settings: GridSettings,
        path: Path | None = None,
        duration_seconds: float | None = None,
    ) -> Path:
        """
        Animated grid. Frame i is rendered at t = i / fps * animation_speed.
        Tile specs are fixed for the whole clip so only time varies between frames.
        """
        if duration_seconds is None:
            duration_seconds = float(self._config.get("animation", {}).get("duration_seconds", 4.0))
        prefix = self._config.get("output", {}).get("filename_prefix", "generative-artwork")
        out = self._output_path(path, f"{prefix}-{settings.seed}-{_timestamp()}", ".gif")
        suffix = out.suffix.lower()
        if suffix not in CLIP_SUFFIXES:
            raise ValueError(f"Unsupported clip format {out.suffix!r}; use one of {CLIP_SUFFIXES}")

        specs = build_tile_specs(settings)
        num_frames = max(1, int(duration_seconds * self.fps))
        frame_times = [i / self.fps * settings.animation_speed for i in range(num_frames)]

        if suffix == ".gif":
            self._write_gif(out, settings, specs, frame_times)
        else:
            self._write_mp4(out, settings, specs, frame_times)
        logger.info("Exported %d-frame clip (seed=%s) → %s", num_frames, settings.seed, out)
        return out

    def _write_gif(self, out: Path, settings: GridSettings, specs, frame_times: list[float]) -> None:
        from PIL import Image

        frames = [Image.fromarray(self.render(settings, t, specs)) for t in frame_times]
        frames[0].save(
            out,
            save_all=True,
            append_images=frames[1:],
            duration=int(round(1000 / self.fps)),
            loop=0,
        )

    def _write_mp4(self, out: Path, settings: GridSettings, specs, frame_times: list[float]) -> None:
        try:
            import imageio
        except ImportError:
            raise ImportError(
                "MP4 export needs 'imageio' to write video. "
                "Install with: pip install imageio imageio-ffmpeg"
            ) from None

        writer = imageio.get_writer(str(out), fps=self.fps, codec="libx264", quality=8)
        try:
            for t in frame_times:
                writer.append_data(self.render(settings, t, specs))
        finally:
            writer.close()

    def run_live(
        self,
        settings: GridSettings,
        path: Path | None = None,
        *,
        frames: int | None = None,
        should_stop: Callable[[], bool] | None = None,
    ) -> int:
        """
        Re-render the grid into path on every scheduler tick while the clock plays.
        Returns the number of frames written.
        """
        from PIL import Image

        out = self._output_path(path, "live-preview", ".png")
        specs = build_tile_specs(settings)
        clock = AnimationClock(playing=True, speed=settings.animation_speed)
        scheduler = FrameScheduler(clock, fps=self.fps)
        written = 0

        def on_frame(t: float) -> None:
            nonlocal written
            Image.fromarray(self.render(settings, t, specs)).save(out)
            written += 1

        unsubscribe = scheduler.subscribe(on_frame)
        try:
            scheduler.run(frames, should_stop=should_stop)
        finally:
            unsubscribe()
            clock.pause()
        logger.info("Live preview stopped after %d frames (t=%.2fs)", written, clock.elapsed)
        return written
