import os
import time


def now_s():
    return time.perf_counter()


def env_flag(key: str) -> bool:
    return os.environ.get(key, "").strip() not in ("", "0")


def env_int(*keys, default=None):
    for k in keys:
        v = os.environ.get(k)
        if v and str(v).strip():
            try:
                return int(v)
            except ValueError:
                raise ValueError(f"{k}={v!r} is not an integer")
    return default


def env_float(*keys, default=None):
    for k in keys:
        v = os.environ.get(k)
        if v and str(v).strip():
            try:
                return float(v)
            except ValueError:
                raise ValueError(f"{k}={v!r} is not a number")
    return default


def debug(msg: str) -> None:
    if env_flag("QUADART_DEBUG"):
        print(f"[QUADART] {msg}")
