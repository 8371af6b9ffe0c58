import math
from typing import NamedTuple

import numpy as np

from quadart.core import Region, DegenerateRegionError


class ChannelStat(NamedTuple):
    average: int
    error: float


def channel_histogram(image: np.ndarray, region: Region, channel: int) -> np.ndarray:
    rows, cols = region.slices()
    v = image[rows, cols, channel].ravel()
    return np.bincount(v.astype(np.int64), minlength=256)[:256]


def estimate(image: np.ndarray, region: Region, channel: int) -> ChannelStat:
    """
    Mean and population standard deviation of one channel over a region,
    both computed from its 256-bucket histogram.
    """
    hist = channel_histogram(image, region, channel).astype(np.float64)
    num = float(hist.sum())
    if num <= 0:
        raise DegenerateRegionError(f"empty histogram for {region}")

    levels = np.arange(256, dtype=np.float64)
    avg = float(np.dot(levels, hist)) / num
    err = math.sqrt(float(np.dot(hist, (levels - avg) ** 2)) / num)
    return ChannelStat(min(255, int(avg)), err)
