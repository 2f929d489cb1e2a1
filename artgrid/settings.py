"""
Grid settings as plain data: query-string and JSON round-trips, "surprise me", regeneration.
The engine accepts these values without validation beyond clamping and palette fallback.
"""
import json
import logging
import random
import re
import secrets
from dataclasses import replace
from pathlib import Path
from typing import Any, Mapping
from urllib.parse import parse_qsl, urlencode

from .procedural.data.palettes import PALETTE_NAMES
from .procedural.schema import GridSettings
from .random_utils import MAX_GENERATED_SEED, generate_seed

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

# camelCase blob keys ↔ GridSettings fields
_JSON_KEYS: dict[str, str] = {
    "gridSize": "grid_size",
    "palette": "palette",
    "complexity": "complexity",
    "animationSpeed": "animation_speed",
    "isAnimating": "is_animating",
    "designerMode": "designer_mode",
    "seed": "seed",
}


def _as_dict(settings: GridSettings) -> dict[str, Any]:
    return {field: getattr(settings, field) for field in _JSON_KEYS.values()}


def settings_from_config(config: dict[str, Any]) -> GridSettings:
    """GridSettings from the `grid` section of a loaded config."""
    grid = dict(config.get("grid", {}))
    known = {k: v for k, v in grid.items() if k in _JSON_KEYS.values()}
    return GridSettings(**known)


def _parse_int(params: Mapping[str, str], key: str) -> int | None:
    """Leading decimal integer of the param ("12abc" → 12, " -3" → -3); None when there is none."""
    raw = params.get(key)
    if raw is None:
        return None
    m = _LEADING_INT.match(str(raw))
    if m is None:
        logger.warning("Ignoring non-integer query param %s=%r", key, raw)
        return None
    return int(m.group(1))


def settings_from_query(query: str | Mapping[str, str], base: GridSettings | None = None) -> GridSettings:
    """
    Apply query params (seed, cols, palette, complexity, live, designer) over base.
    `live` and `designer` are true only when "1".
    """
    if isinstance(query, str):
        params = dict(parse_qsl(query.lstrip("?"), keep_blank_values=True))
    else:
        params = dict(query)
    values = _as_dict(base or GridSettings())

    seed = _parse_int(params, "seed")
    if seed is not None:
        values["seed"] = seed
    cols = _parse_int(params, "cols")
    if cols is not None:
        values["grid_size"] = cols
    if "palette" in params:
        values["palette"] = params["palette"]
    complexity = _parse_int(params, "complexity")
    if complexity is not None:
        values["complexity"] = complexity
    if "live" in params:
        values["is_animating"] = params["live"] == "1"
    if "designer" in params:
        values["designer_mode"] = params["designer"] == "1"
    return GridSettings(**values)


def settings_to_query(settings: GridSettings) -> str:
    params: list[tuple[str, Any]] = []
    if settings.seed:
        params.append(("seed", settings.seed))
    params.append(("cols", settings.grid_size))
    params.append(("palette", settings.palette))
    params.append(("complexity", settings.complexity))
    if settings.is_animating:
        params.append(("live", "1"))
    if settings.designer_mode:
        params.append(("designer", "1"))
    return urlencode(params)


def settings_to_json(settings: GridSettings) -> str:
    return json.dumps({key: getattr(settings, field) for key, field in _JSON_KEYS.items()})


def settings_from_json(blob: str | None, base: GridSettings | None = None) -> GridSettings:
    """Saved blob merged over base (defaults when None); unreadable blobs give base unchanged."""
    base = base or GridSettings()
    values = _as_dict(base)
    if not blob:
        return base
    try:
        data = json.loads(blob)
    except json.JSONDecodeError as e:
        logger.warning("Saved settings are not valid JSON (%s); using defaults", e)
        return base
    if not isinstance(data, dict):
        logger.warning("Saved settings blob is %s, not an object; using defaults", type(data).__name__)
        return base
    for key, field in _JSON_KEYS.items():
        if key in data:
            values[field] = data[key]
    try:
        return GridSettings(**values)
    except (TypeError, ValueError) as e:
        logger.warning("Saved settings rejected (%s); using defaults", e)
        return base


def load_settings(path: Path, base: GridSettings | None = None) -> GridSettings:
    """Settings saved at path merged over base; a missing file gives base."""
    path = Path(path)
    if not path.exists():
        logger.debug("No saved settings at %s", path)
        return base or GridSettings()
    return settings_from_json(path.read_text(encoding="utf-8"), base=base)


def save_settings(path: Path, settings: GridSettings) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(settings_to_json(settings), encoding="utf-8")
    return path


def surprise_settings(base: GridSettings, rng: random.Random | None = None) -> GridSettings:
    """Random grid size (2-8), palette, complexity (0-10), speed (0.25-3x) and a fresh seed."""
    r = rng or secrets.SystemRandom()
    return replace(
        base,
        grid_size=2 + int(r.random() * 7),
        palette=PALETTE_NAMES[int(r.random() * len(PALETTE_NAMES))],
        complexity=int(r.random() * 11),
        animation_speed=0.25 + r.random() * 2.75,
        seed=r.randrange(MAX_GENERATED_SEED) if rng is not None else generate_seed(),
    )


def regenerate(settings: GridSettings) -> GridSettings:
    """Same settings, new seed: the whole batch of tiles is replaced."""
    return replace(settings, seed=generate_seed())

