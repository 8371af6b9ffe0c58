import sys
import numpy as np
import pytest
from pathlib import Path
from quadart.approx import approximate, approximate_image
from quadart.config import ApproxConfig
from quadart.io import load_image_rgb, save_image
from quadart.cli import approx as approx_cli

@pytest.fixture(autouse=True)
def _quiet(monkeypatch):
    monkeypatch.setenv("QUADART_NOPROGRESS", "1")

def _gradient(h, w):
    yy, xx = np.mgrid[0:h, 0:w]
    img = np.stack([xx * 255 // (w - 1), yy * 255 // (h - 1), (xx + yy) % 256], axis=-1)
    return img.astype(np.uint8)

def test_roundtrip(tmp_path: Path):
    h, w = 48, 64
    img = _gradient(h, w)
    src = tmp_path / "in.png"
    out = tmp_path / "out.png"
    frames = tmp_path / "frames"
    save_image(src, img)
    engine = approximate_image(src, out, {"engine": {"steps": 20},
                                          "output": {"snapshot_every": 5, "frames_dir": str(frames)}})
    assert engine.steps_done == 20
    assert len(engine) == 61
    rec = load_image_rgb(out)
    assert rec.shape == img.shape
    assert sorted(p.name for p in frames.iterdir()) == ["00005.png", "00010.png", "00015.png", "00020.png"]
    assert np.array_equal(load_image_rgb(frames / "00020.png"), rec)

def test_jpeg_output(tmp_path: Path):
    src = tmp_path / "in.png"
    save_image(src, _gradient(20, 20))
    out = tmp_path / "out.jpg"
    approximate_image(src, out, ApproxConfig(steps=3))
    assert load_image_rgb(out).shape == (20, 20, 3)

def test_in_memory_matches_engine():
    img = _gradient(30, 30)
    canvas, engine = approximate(img, ApproxConfig(steps=4))
    assert canvas is engine.canvas
    assert engine.steps_done == 4

def test_debug_mode_checks_tiling(monkeypatch, capsys):
    monkeypatch.setenv("QUADART_DEBUG", "1")
    _, engine = approximate(_gradient(24, 24), ApproxConfig(steps=6))
    assert engine.steps_done == 6
    assert "run done steps=6" in capsys.readouterr().out

def test_missing_input(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        approximate_image(tmp_path / "nope.png", tmp_path / "out.png", {})

def test_garbage_input(tmp_path: Path):
    bad = tmp_path / "bad.png"
    bad.write_bytes(b"definitely not an image")
    with pytest.raises(ValueError):
        approximate_image(bad, tmp_path / "out.png", {})

def test_truncated_input(tmp_path: Path):
    full = tmp_path / "full.png"
    rng = np.random.default_rng(0)
    save_image(full, rng.integers(0, 256, size=(64, 64, 3), dtype=np.uint8))
    data = full.read_bytes()
    cut = tmp_path / "cut.png"
    cut.write_bytes(data[:len(data) // 2])
    with pytest.raises(ValueError):
        load_image_rgb(cut)

def test_cli_config_frames_dir_respects_snapshot_off(tmp_path: Path, monkeypatch):
    src = tmp_path / "in.png"
    frames = tmp_path / "f"
    save_image(src, _gradient(16, 16))
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text(f"engine:\n  steps: 4\noutput:\n  snapshot_every: 0\n  frames_dir: {frames}\n")
    monkeypatch.setattr(sys, "argv", ["quadart-approx", str(src), str(tmp_path / "out.png"),
                                      "--config", str(cfg)])
    assert approx_cli.main() == 0
    assert not frames.exists()

def test_cli(tmp_path: Path, monkeypatch):
    src = tmp_path / "in.png"
    out = tmp_path / "out.png"
    frames = tmp_path / "f"
    save_image(src, _gradient(32, 40))
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text("engine:\n  steps: 50\n")
    monkeypatch.setattr(sys, "argv", ["quadart-approx", str(src), str(out), "--config", str(cfg),
                                      "--steps", "3", "--frames-dir", str(frames)])
    assert approx_cli.main() == 0
    assert load_image_rgb(out).shape == (32, 40, 3)
    assert len(list(frames.glob("*.png"))) == 3
