"""
Seeded random for rendering, plus entropy-backed seed generation.
Mulberry32 is deterministic and platform independent; `secrets` is only used to originate new seeds.
"""
import secrets

_MASK32 = 0xFFFFFFFF

# Shown in place of a missing/zero seed so display hashes never fail
FALLBACK_SEED = 123456789

MAX_GENERATED_SEED = 1_000_000_000


def _imul(a: int, b: int) -> int:
    """32-bit wrapping multiply (JavaScript Math.imul semantics, unsigned result)."""
    return (a * b) & _MASK32


class Mulberry32:
    """
    Small 32-bit state PRNG. Each call advances the state by a fixed odd increment
    and mixes it with two xor-shift/multiply rounds. Output is a float in [0, 1).
    One instance belongs to one draw call; never share it between tiles or frames.
    """

    __slots__ = ("state",)

    def __init__(self, seed: int) -> None:
        self.state = int(seed) & _MASK32

    def next(self) -> float:
        self.state = (self.state + 0x6D2B79F5) & _MASK32
        t = self.state
        r = _imul(t ^ (t >> 15), t | 1)
        r ^= (r + _imul(r ^ (r >> 7), r | 61)) & _MASK32
        return ((r ^ (r >> 14)) & _MASK32) / 4294967296.0

    __call__ = next


def create_rng(seed: int) -> Mulberry32:
    """Return a fresh generator for seed (reduced modulo 2**32)."""
    return Mulberry32(seed)


def generate_seed() -> int:
    """Fresh, unrepeatable seed in [0, 1e9). Not for use inside rendering."""
    return secrets.randbelow(MAX_GENERATED_SEED)


def _string_hash(text: str) -> int:
    """Polynomial hash h = h*31 + unit over UTF-16 code units, wrapped to a signed 32-bit integer."""
    data = text.encode("utf-16-le", "surrogatepass")
    h = 0
    for i in range(0, len(data), 2):
        h = (h * 31 + (data[i] | data[i + 1] << 8)) & _MASK32
    if h & 0x80000000:
        h -= 0x100000000
    return h


def hash_seed(seed: int | None) -> str:
    """Short uppercase hex hash of a seed for display (6 chars max). Collisions are fine."""
    if not seed:
        seed = FALLBACK_SEED
    return format(abs(_string_hash(str(seed))), "X")[:6]


def seed_from_string(text: str) -> int:
    """Seed from a user-supplied label. Empty string → 0."""
    if not text:
        return 0
    return abs(_string_hash(text))
