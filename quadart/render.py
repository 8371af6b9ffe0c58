import numpy as np

BORDER_COLOR = (0, 0, 0, 255)


def render(canvas: np.ndarray, quad, border_color=BORDER_COLOR) -> None:
    """Paint the quad's interior with its color and its 1-px boundary black."""
    r = quad.region
    rows, cols = r.slices()
    depth = canvas.shape[2]
    block = canvas[rows, cols]
    block[...] = np.asarray(quad.color[:depth], dtype=np.uint8)
    edge = np.asarray(border_color[:depth], dtype=np.uint8)
    block[0, :] = edge
    block[-1, :] = edge
    block[:, 0] = edge
    block[:, -1] = edge
