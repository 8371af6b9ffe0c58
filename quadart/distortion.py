from __future__ import annotations
import numpy as np

from quadart.partition import LUMA_WEIGHTS


def _to_eval_space(img: np.ndarray, on: str = "y") -> np.ndarray:
    """uint8 RGB[A] -> float32 in [0, 1], luma only when on='y'."""
    x = np.asarray(img)[..., :3].astype(np.float32) / 255.0
    if (on or "y").lower().startswith("y"):
        wr, wg, wb = LUMA_WEIGHTS
        return (wr * x[..., 0] + wg * x[..., 1] + wb * x[..., 2])[..., None]
    return x


def _gaussian_kernel1d(size: int, sigma: float = 1.5) -> np.ndarray:
    r = (size - 1) // 2
    x = np.arange(-r, r + 1, dtype=np.float64)
    k = np.exp(-(x * x) / (2.0 * sigma * sigma))
    return (k / k.sum()).astype(np.float32)


def _blur(img: np.ndarray, k1d: np.ndarray) -> np.ndarray:
    """Separable filter with edge padding; img is H x W x C."""
    H, W, _ = img.shape
    r = (len(k1d) - 1) // 2
    if r == 0:
        return img
    pad = np.pad(img, ((r, r), (0, 0), (0, 0)), mode="edge")
    tmp = sum(k1d[i] * pad[i:i+H] for i in range(len(k1d)))
    pad = np.pad(tmp, ((0, 0), (r, r), (0, 0)), mode="edge")
    return sum(k1d[j] * pad[:, j:j+W] for j in range(len(k1d)))


def psnr(ref: np.ndarray, out: np.ndarray) -> float:
    if ref.shape[:2] != out.shape[:2]:
        raise ValueError(f"shape mismatch {ref.shape[:2]} vs {out.shape[:2]}")
    a = np.asarray(ref)[..., :3].astype(np.float64)
    b = np.asarray(out)[..., :3].astype(np.float64)
    mse = float(np.mean((a - b) ** 2))
    if mse == 0.0:
        return float("inf")
    return 10.0 * np.log10(255.0 ** 2 / mse)


def ssim(ref: np.ndarray, out: np.ndarray, on: str = "y", win_size: int = 11,
         k1: float = 0.01, k2: float = 0.03) -> float:
    if ref.shape[:2] != out.shape[:2]:
        raise ValueError(f"shape mismatch {ref.shape[:2]} vs {out.shape[:2]}")
    X = _to_eval_space(ref, on)
    Y = _to_eval_space(out, on)
    H, W = X.shape[:2]

    k = max(1, min(win_size, H, W))
    if k % 2 == 0:
        k -= 1
    win = _gaussian_kernel1d(k)

    c1, c2 = k1 ** 2, k2 ** 2
    mu_x, mu_y = _blur(X, win), _blur(Y, win)
    sxx = _blur(X * X, win) - mu_x * mu_x
    syy = _blur(Y * Y, win) - mu_y * mu_y
    sxy = _blur(X * Y, win) - mu_x * mu_y

    num = (2.0 * mu_x * mu_y + c1) * (2.0 * sxy + c2)
    den = (mu_x * mu_x + mu_y * mu_y + c1) * (sxx + syy + c2)
    val = float(np.mean(num / den))
    return max(0.0, min(1.0, val))
