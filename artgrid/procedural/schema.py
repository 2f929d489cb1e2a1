"""
Render options, tile specs and grid settings.
Plain data passed into the engine at call time; the engine never reads ambient state.
"""
from dataclasses import asdict, dataclass
from typing import Any

from .data.palettes import DEFAULT_PALETTE, resolve_palette_name

MIN_COMPLEXITY = 0
MAX_COMPLEXITY = 10
DEFAULT_COMPLEXITY = 4

MIN_GRID_SIZE = 1
MAX_GRID_SIZE = 12
MIN_SPEED = 0.25
MAX_SPEED = 3.0


def clamp_complexity(value: Any) -> int:
    """Integer complexity in [0, 10]. Unparseable values fall back to the default."""
    try:
        c = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return DEFAULT_COMPLEXITY
    return max(MIN_COMPLEXITY, min(MAX_COMPLEXITY, c))


def _flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


@dataclass(frozen=True)
class RenderOptions:
    """Everything that, together with the pattern type, determines one frame."""
    seed: int = 1
    palette: str = DEFAULT_PALETTE
    complexity: int = DEFAULT_COMPLEXITY
    designer_mode: bool = False
    time: float = 0.0

    @classmethod
    def create(
        cls,
        *,
        seed: int = 1,
        palette: str | None = DEFAULT_PALETTE,
        complexity: Any = DEFAULT_COMPLEXITY,
        designer_mode: Any = False,
        time: float = 0.0,
    ) -> "RenderOptions":
        """Normalised options: complexity clamped, palette resolved, time >= 0."""
        try:
            t = max(0.0, float(time))
        except (TypeError, ValueError):
            t = 0.0
        return cls(
            seed=int(seed),
            palette=resolve_palette_name(palette),
            complexity=clamp_complexity(complexity),
            designer_mode=_flag(designer_mode),
            time=t,
        )

    @classmethod
    def from_dict(cls, d: dict[str, Any], *, default_seed: int = 1) -> "RenderOptions":
        """Accepts camelCase (designerMode) or snake_case keys. Missing seed → default_seed."""
        designer = d.get("designer_mode", d.get("designerMode", False))
        seed = d.get("seed")
        return cls.create(
            seed=default_seed if seed is None else seed,
            palette=d.get("palette", DEFAULT_PALETTE),
            complexity=d.get("complexity", DEFAULT_COMPLEXITY),
            designer_mode=designer,
            time=d.get("time", 0.0) or 0.0,
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class TileSpec:
    """One grid cell: pattern type, seed, label and the shared style options."""
    id: str
    type: str
    seed: int
    label: str
    palette: str = DEFAULT_PALETTE
    complexity: int = DEFAULT_COMPLEXITY
    designer_mode: bool = False
    index: int = 0

    def render_options(self, time: float = 0.0) -> RenderOptions:
        return RenderOptions.create(
            seed=self.seed,
            palette=self.palette,
            complexity=self.complexity,
            designer_mode=self.designer_mode,
            time=time,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize for logging and export metadata."""
        return asdict(self)


@dataclass
class GridSettings:
    """Grid-level settings as owned by the UI layer; round-trips via settings.py."""
    grid_size: int = 4
    palette: str = DEFAULT_PALETTE
    complexity: int = DEFAULT_COMPLEXITY
    animation_speed: float = 1.0
    is_animating: bool = False
    designer_mode: bool = False
    seed: int | None = None

    def __post_init__(self) -> None:
        self.grid_size = max(MIN_GRID_SIZE, min(MAX_GRID_SIZE, int(self.grid_size)))
        self.palette = resolve_palette_name(self.palette)
        self.complexity = clamp_complexity(self.complexity)
        self.animation_speed = max(MIN_SPEED, min(MAX_SPEED, float(self.animation_speed)))
        self.is_animating = _flag(self.is_animating)
        self.designer_mode = _flag(self.designer_mode)
        if self.seed is not None:
            self.seed = int(self.seed)

    @property
    def tile_count(self) -> int:
        return self.grid_size * self.grid_size
