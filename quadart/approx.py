# quadart/approx.py
from __future__ import annotations

from pathlib import Path
from typing import Tuple

import numpy as np
from tqdm.auto import tqdm

from quadart.config import ApproxConfig
from quadart.core import tiles_exactly
from quadart.io import load_image_rgb, save_image
from quadart.partition import QuadtreeEngine
from quadart.utils import debug, env_flag, now_s


def _snapshot_hook(cfg: ApproxConfig, pbar):
    frames = cfg.frames_dir if cfg.snapshot_every > 0 else None
    if frames is not None:
        frames.mkdir(parents=True, exist_ok=True)
    check = env_flag("QUADART_DEBUG")

    def hook(i: int, engine: QuadtreeEngine):
        pbar.update(1)
        if frames is not None and i % cfg.snapshot_every == 0:
            p = frames / f"{i:05d}.png"
            save_image(p, engine.canvas)
            debug(f"snapshot step={i} -> {p}")
        if check:
            h, w = engine.image.shape[:2]
            assert tiles_exactly((q.region for q in engine.leaves), w, h), f"tiling broken at step {i}"
    return hook


def approximate(img: np.ndarray, cfg: ApproxConfig | None = None,
                progress: bool | None = None) -> Tuple[np.ndarray, QuadtreeEngine]:
    """Run the decomposition on an in-memory image; returns (canvas, engine)."""
    cfg = cfg or ApproxConfig()
    if progress is None:
        progress = not env_flag("QUADART_NOPROGRESS")
    engine = QuadtreeEngine(img, cfg)
    with tqdm(total=cfg.steps, desc="quadart", unit="step",
              disable=not progress) as pbar:
        engine.run(callback=_snapshot_hook(cfg, pbar))
    return engine.canvas, engine


def approximate_image(inp: Path, outp: Path, cfg: dict | ApproxConfig | None = None) -> QuadtreeEngine:
    if not isinstance(cfg, ApproxConfig):
        cfg = ApproxConfig.from_dict(cfg)
    img = load_image_rgb(inp)
    h, w = img.shape[:2]

    print(f"[QUADART] approx {w}x{h} steps={cfg.steps} min_size={cfg.min_size} "
          f"area_power={cfg.area_power} snapshots={cfg.snapshot_every or 'off'}")

    t0 = now_s()
    canvas, engine = approximate(img, cfg)
    t1 = now_s()
    save_image(Path(outp), canvas)

    print(f"[QUADART] done steps={engine.steps_done} leaves={len(engine)} "
          f"t={t1 - t0:.3f}s -> {outp}")
    return engine
