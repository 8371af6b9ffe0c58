from pathlib import Path
import pytest
from quadart.config import ApproxConfig, load_config

def test_defaults(monkeypatch):
    for k in ("QUADART_STEPS", "QUADART_MIN_SIZE", "QUADART_AREA_POWER"):
        monkeypatch.delenv(k, raising=False)
    cfg = ApproxConfig.from_dict({})
    assert cfg == ApproxConfig()
    assert (cfg.area_power, cfg.min_size, cfg.steps, cfg.exclusion_sentinel) == (0.2, 4, 500, -9999.0)

def test_env_fallback_and_file_precedence(monkeypatch):
    monkeypatch.setenv("QUADART_STEPS", "42")
    monkeypatch.setenv("QUADART_MIN_SIZE", "6")
    cfg = ApproxConfig.from_dict({"engine": {"min_size": 2}})
    assert cfg.steps == 42
    assert cfg.min_size == 2

def test_load_yaml(tmp_path: Path):
    p = tmp_path / "cfg.yaml"
    p.write_text(
        "engine:\n  steps: 12\n  area_power: 0.3\n"
        "output:\n  snapshot_every: 3\n  frames_dir: frames\n")
    cfg = ApproxConfig.from_dict(load_config(p))
    assert cfg.steps == 12
    assert cfg.area_power == pytest.approx(0.3)
    assert cfg.snapshot_every == 3
    assert cfg.frames_dir == Path("frames")
    assert load_config(None) == {}

def test_overrides_skip_none():
    cfg = ApproxConfig(steps=5).with_overrides(steps=None, min_size=8, frames_dir="out")
    assert cfg.steps == 5
    assert cfg.min_size == 8
    assert cfg.frames_dir == Path("out")

@pytest.mark.parametrize("bad", [
    {"engine": {"steps": -1}},
    {"engine": {"min_size": 0}},
    {"engine": {"min_size": 1}},
    {"engine": {"area_power": -0.1}},
    {"engine": {"exclusion_sentinel": 0}},
    {"output": {"snapshot_every": -2}},
    {"engine": [1, 2]},
])
def test_invalid(bad):
    with pytest.raises(ValueError):
        ApproxConfig.from_dict(bad)

def test_bad_env(monkeypatch):
    monkeypatch.setenv("QUADART_STEPS", "many")
    with pytest.raises(ValueError):
        ApproxConfig.from_dict({})

def test_null_keys_fall_back_to_defaults(tmp_path: Path, monkeypatch):
    monkeypatch.delenv("QUADART_STEPS", raising=False)
    p = tmp_path / "cfg.yaml"
    p.write_text("engine:\n  steps: null\n  exclusion_sentinel: null\n")
    cfg = ApproxConfig.from_dict(load_config(p))
    assert cfg.steps == 500
    assert cfg.exclusion_sentinel == -9999.0
