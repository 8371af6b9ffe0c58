import argparse
from pathlib import Path
from quadart.approx import approximate_image
from quadart.config import ApproxConfig, load_config

def main():
    p = argparse.ArgumentParser(description="Approximate an image with flat-colored quads")
    p.add_argument("input")
    p.add_argument("output")
    p.add_argument("--config", default=None, help="path to config.yaml")
    p.add_argument("--steps", type=int, default=None, help="subdivision steps (overrides config)")
    p.add_argument("--frames-dir", default=None, help="write canvas snapshots here")
    p.add_argument("--snapshot-every", type=int, default=None, help="snapshot every k steps")
    args = p.parse_args()

    cfg = ApproxConfig.from_dict(load_config(Path(args.config)) if args.config else {})
    cfg = cfg.with_overrides(steps=args.steps, frames_dir=args.frames_dir,
                             snapshot_every=args.snapshot_every)
    if args.frames_dir and args.snapshot_every is None and cfg.snapshot_every == 0:
        cfg = cfg.with_overrides(snapshot_every=1)
    approximate_image(Path(args.input), Path(args.output), cfg)
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
