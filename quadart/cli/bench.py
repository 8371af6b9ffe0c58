# quadart/cli/bench.py
from __future__ import annotations
import argparse
import time
from pathlib import Path
from typing import List

from tqdm.auto import tqdm

from quadart.approx import approximate
from quadart.config import ApproxConfig, load_config
from quadart.io import load_image_rgb, save_image
from quadart.distortion import psnr, ssim
from quadart.utils import env_flag

def _is_image(p: Path) -> bool:
    return p.suffix.lower() in {".png", ".jpg", ".jpeg", ".bmp", ".tif", ".tiff"}

def _gather_inputs(root: Path) -> List[Path]:
    if root.is_file() and _is_image(root):
        return [root]
    return sorted(p for p in root.rglob("*") if _is_image(p) and ".quad" not in p.name)

def main():
    ap = argparse.ArgumentParser(description="quadart bench: approximate + metrics")
    ap.add_argument("input", type=str, help="image file or directory")
    ap.add_argument("--config", type=str, default=None, help="path to config.yaml")
    ap.add_argument("--steps", type=int, nargs="+", default=None,
                    help="one or more step counts to compare (default: config steps)")
    ap.add_argument("--metric-on", type=str, default="y", choices=["y", "rgb"], help="run SSIM on: y or rgb")
    ap.add_argument("--keep", action="store_true", help="write <name>.quad<N>.png next to each input")
    args = ap.parse_args()

    root = Path(args.input)
    base = ApproxConfig.from_dict(load_config(Path(args.config)) if args.config else {})
    step_counts = args.steps or [base.steps]

    tasks = _gather_inputs(root)
    if not tasks:
        print("No images found.")
        return 0

    rows = []
    for src in tqdm(tasks, desc="quadart bench", unit="img", disable=env_flag("QUADART_NOPROGRESS")):
        ref = load_image_rgb(src)
        h, w = ref.shape[:2]
        for n in step_counts:
            cfg = base.with_overrides(steps=n, snapshot_every=0)
            t0 = time.perf_counter()
            canvas, engine = approximate(ref, cfg, progress=False)
            t1 = time.perf_counter()

            rows.append({
                "name": src.name,
                "WxH": f"{w}x{h}",
                "steps": engine.steps_done,
                "leaves": len(engine),
                "PSNR(dB)": round(psnr(ref, canvas), 3),
                "SSIM": round(ssim(ref, canvas, on=args.metric_on), 5),
                "t(s)": round(t1 - t0, 4),
            })
            if args.keep:
                save_image(src.with_name(f"{src.stem}.quad{n}.png"), canvas)

    print("\n=== quadart bench summary ===")
    hdr = ["name", "WxH", "steps", "leaves", "PSNR(dB)", "SSIM", "t(s)"]
    colw = {h: max(len(h), max((len(str(r[h])) for r in rows), default=0)) for h in hdr}
    line = " | ".join(h.ljust(colw[h]) for h in hdr)
    print(line)
    print("-" * len(line))
    for r in rows:
        print(" | ".join(str(r[h]).ljust(colw[h]) for h in hdr))
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
