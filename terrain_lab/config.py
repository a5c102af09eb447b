# terrain_lab/config.py
from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Optional

# ---- Tunables (overridable via environment variables) -----------------------
GRASS_COST = 1.0
MUD_COST = 10.0

WIDTH     = int(os.getenv("TERRAIN_WIDTH", "10"))
HEIGHT    = int(os.getenv("TERRAIN_HEIGHT", "10"))
MUD_PROB  = float(os.getenv("TERRAIN_MUD_PROB", "0.3"))   # chance a free cell is mud
WA_W      = float(os.getenv("WASTAR_W", "1.5"))           # weighted A* weight
_SEED     = os.getenv("TERRAIN_SEED")                     # unset -> fresh map every run
SEED: Optional[int] = int(_SEED) if _SEED not in (None, "") else None


@dataclass(frozen=True)
class TerrainConfig:
    """Everything needed to build a random terrain map and run the search on it."""
    width: int = WIDTH
    height: int = HEIGHT
    mud_probability: float = MUD_PROB
    seed: Optional[int] = SEED
    weight: float = WA_W

    def __post_init__(self):
        if self.width < 1 or self.height < 1:
            raise ValueError(f"Map must be at least 1x1, got {self.width}x{self.height}")
        if not 0.0 <= self.mud_probability <= 1.0:
            raise ValueError(f"mud_probability must be in [0, 1], got {self.mud_probability!r}")

    @classmethod
    def from_env(cls, **overrides) -> "TerrainConfig":
        """Read the environment now (not at import time), then apply non-None overrides."""
        seed = os.getenv("TERRAIN_SEED")
        cfg = cls(
            width=int(os.getenv("TERRAIN_WIDTH", str(WIDTH))),
            height=int(os.getenv("TERRAIN_HEIGHT", str(HEIGHT))),
            mud_probability=float(os.getenv("TERRAIN_MUD_PROB", str(MUD_PROB))),
            seed=int(seed) if seed not in (None, "") else None,
            weight=float(os.getenv("WASTAR_W", str(WA_W))),
        )
        return replace(cfg, **{k: v for k, v in overrides.items() if v is not None})
