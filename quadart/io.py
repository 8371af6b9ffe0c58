import numpy as np
from PIL import Image
from pathlib import Path

_NO_ALPHA = {".jpg", ".jpeg", ".bmp"}


def load_image_rgb(path: Path) -> np.ndarray:
    """Decode an image file into an H x W x 3 uint8 array."""
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"input image not found: {path}")
    # UnidentifiedImageError and truncated-data errors are both OSError
    try:
        with Image.open(path) as im:
            rgb = im.convert("RGB")
    except OSError as exc:
        raise ValueError(f"not a decodable image: {path}") from exc
    return np.asarray(rgb, dtype=np.uint8).copy()


def check_source(img: np.ndarray) -> np.ndarray:
    if img.dtype != np.uint8 or img.ndim != 3 or img.shape[2] < 3:
        raise ValueError(
            f"expected uint8 H x W x C image with C >= 3, got {img.dtype} {img.shape}")
    if img.shape[0] == 0 or img.shape[1] == 0:
        raise ValueError(f"empty image {img.shape}")
    return img


def make_canvas(img: np.ndarray) -> np.ndarray:
    """RGBA copy of the source with alpha forced opaque."""
    h, w = img.shape[:2]
    canvas = np.empty((h, w, 4), dtype=np.uint8)
    canvas[..., :3] = img[..., :3]
    canvas[..., 3] = 255
    return canvas


def save_image(path: Path, canvas: np.ndarray) -> None:
    path = Path(path)
    # mode is inferred from the trailing axis: 3 -> RGB, 4 -> RGBA
    im = Image.fromarray(np.ascontiguousarray(canvas, dtype=np.uint8))
    if im.mode == "RGBA" and path.suffix.lower() in _NO_ALPHA:
        im = im.convert("RGB")
    im.save(path)
