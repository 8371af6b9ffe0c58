"""
Run configuration for quadart.

Config files are YAML with two sections:

    engine:
      area_power: 0.2          # score = error * area ** area_power
      min_size: 4              # width or height <= min_size -> excluded
      steps: 500
      exclusion_sentinel: -9999
    output:
      snapshot_every: 0        # dump the canvas every k steps (0 = off)
      frames_dir: null

Missing engine keys fall back to env vars, then defaults:
  QUADART_STEPS       (default 500)
  QUADART_MIN_SIZE    (default 4)
  QUADART_AREA_POWER  (default 0.2)
"""
from __future__ import annotations
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from quadart.utils import env_float, env_int

__all__ = ["ApproxConfig", "load_config"]

DEFAULT_AREA_POWER = 0.2
DEFAULT_MIN_SIZE = 4
DEFAULT_STEPS = 500
DEFAULT_SENTINEL = -9999.0


@dataclass(frozen=True)
class ApproxConfig:
    area_power: float = DEFAULT_AREA_POWER
    min_size: int = DEFAULT_MIN_SIZE
    steps: int = DEFAULT_STEPS
    exclusion_sentinel: float = DEFAULT_SENTINEL
    snapshot_every: int = 0
    frames_dir: Optional[Path] = None

    def __post_init__(self):
        if self.steps < 0:
            raise ValueError(f"engine.steps must be >= 0, got {self.steps}")
        # min_size 1 would leave 2-px leaves Eligible but unsplittable
        if self.min_size < 2:
            raise ValueError(f"engine.min_size must be >= 2, got {self.min_size}")
        if self.area_power < 0:
            raise ValueError(f"engine.area_power must be >= 0, got {self.area_power}")
        # genuine scores are error * area ** p >= 0
        if self.exclusion_sentinel >= 0:
            raise ValueError(
                f"engine.exclusion_sentinel must be negative, got {self.exclusion_sentinel}")
        if self.snapshot_every < 0:
            raise ValueError(f"output.snapshot_every must be >= 0, got {self.snapshot_every}")

    @classmethod
    def from_dict(cls, cfg: Dict[str, Any] | None) -> "ApproxConfig":
        cfg = cfg or {}
        eng = cfg.get("engine", {}) or {}
        out = cfg.get("output", {}) or {}
        if not isinstance(eng, dict) or not isinstance(out, dict):
            raise ValueError("config sections 'engine' and 'output' must be mappings")

        def pick(key, env_key, read_env, default):
            if key in eng and eng[key] is not None:
                return eng[key]
            return read_env(env_key, default=default)

        frames_dir = out.get("frames_dir")
        sentinel = eng.get("exclusion_sentinel")
        return cls(
            area_power=float(pick("area_power", "QUADART_AREA_POWER", env_float, DEFAULT_AREA_POWER)),
            min_size=int(pick("min_size", "QUADART_MIN_SIZE", env_int, DEFAULT_MIN_SIZE)),
            steps=int(pick("steps", "QUADART_STEPS", env_int, DEFAULT_STEPS)),
            exclusion_sentinel=float(sentinel if sentinel is not None else DEFAULT_SENTINEL),
            snapshot_every=int(out.get("snapshot_every", 0) or 0),
            frames_dir=Path(frames_dir) if frames_dir else None,
        )

    def with_overrides(self, **kw) -> "ApproxConfig":
        """Copy with every non-None keyword applied (CLI flags)."""
        kw = {k: v for k, v in kw.items() if v is not None}
        if "frames_dir" in kw:
            kw["frames_dir"] = Path(kw["frames_dir"])
        return replace(self, **kw)


def load_config(cfg_path: Path | None) -> dict:
    if cfg_path is None:
        return {}
    with open(cfg_path, "r") as f:
        cfg = yaml.safe_load(f) or {}
    if not isinstance(cfg, dict):
        raise ValueError(f"{cfg_path}: top level of config must be a mapping")
    return cfg
