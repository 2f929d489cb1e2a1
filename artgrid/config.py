"""
YAML config for the grid: render size, default grid settings, clip timing, output location.
Lookup order for the file: explicit path, $ARTGRID_CONFIG, config/default.yaml.
"""
import logging
import os
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "ARTGRID_CONFIG"


def _project_root() -> Path:
    return Path(__file__).resolve().parent.parent


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    if config_path is None:
        config_path = os.environ.get(CONFIG_ENV_VAR) or _project_root() / "config" / "default.yaml"
    path = Path(config_path)
    if not path.exists():
        logger.debug("No config at %s; using built-in defaults", path)
        return _defaults()
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config {path} must be a mapping of sections, got {type(data).__name__}")
    return _merge(_defaults(), data)


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Section-wise merge: override keys win, missing keys keep defaults."""
    out = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            out[key] = {**out[key], **value}
        else:
            out[key] = value
    return out


# Tile edge length in pixels per quality preset
_QUALITY_PRESETS: dict[str, int] = {
    "draft": 160,
    "standard": 320,
    "high": 640,
}


def _defaults() -> dict[str, Any]:
    return {
        "render": {
            "tile_size": 320,
            "gap": 16,
            "background": "#0f172a",
            "quality": None,
        },
        "grid": {
            "grid_size": 4,
            "palette": "Cool",
            "complexity": 4,
            "animation_speed": 1.0,
            "designer_mode": False,
        },
        "animation": {"fps": 24, "duration_seconds": 4.0},
        "output": {"dir": "output", "filename_prefix": "generative-artwork"},
    }


def resolve_render_config(config: dict[str, Any]) -> dict[str, Any]:
    """Resolve render config: quality preset overrides tile_size if set."""
    out = dict(config.get("render", {}))
    quality = out.get("quality")
    if quality and quality in _QUALITY_PRESETS:
        out["tile_size"] = _QUALITY_PRESETS[quality]
    return out


def get_output_dir(config: dict[str, Any]) -> Path:
    """Output directory; relative paths are taken from the project root."""
    p = Path(config.get("output", {}).get("dir") or "output").expanduser()
    return p if p.is_absolute() else _project_root() / p
