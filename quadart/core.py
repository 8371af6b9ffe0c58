from __future__ import annotations
import numpy as np
from dataclasses import dataclass
from typing import Iterable, Tuple


class DegenerateRegionError(AssertionError):
    """Raised when a region would be empty or inverted."""


@dataclass(frozen=True)
class Region:
    """Inclusive pixel bounds [left, right] x [top, bottom]."""
    left: int
    right: int
    top: int
    bottom: int

    def __post_init__(self):
        if self.left < 0 or self.top < 0:
            raise DegenerateRegionError(f"negative bounds in {self}")
        if self.right < self.left or self.bottom < self.top:
            raise DegenerateRegionError(f"inverted region {self}")

    @classmethod
    def full(cls, width: int, height: int) -> "Region":
        return cls(0, int(width) - 1, 0, int(height) - 1)

    @property
    def width(self) -> int:
        return self.right - self.left + 1

    @property
    def height(self) -> int:
        return self.bottom - self.top + 1

    @property
    def splittable(self) -> bool:
        # cx - 1 >= left needs right >= left + 2
        return self.width >= 3 and self.height >= 3

    def slices(self) -> Tuple[slice, slice]:
        """(rows, cols) slices for indexing an H x W [x C] array."""
        return slice(self.top, self.bottom + 1), slice(self.left, self.right + 1)


def calc_area(region: Region) -> int:
    return (region.right - region.left + 1) * (region.bottom - region.top + 1)


def split(region: Region) -> Tuple[Region, Region, Region, Region]:
    """TL, TR, BL, BR children around the floor-division center."""
    if not region.splittable:
        raise DegenerateRegionError(
            f"cannot split {region.width}x{region.height} region {region}")
    cx = (region.left + region.right) // 2
    cy = (region.top + region.bottom) // 2
    return (
        Region(region.left, cx - 1, region.top, cy - 1),
        Region(cx, region.right, region.top, cy - 1),
        Region(region.left, cx - 1, cy, region.bottom),
        Region(cx, region.right, cy, region.bottom),
    )


def tiles_exactly(regions: Iterable[Region], width: int, height: int) -> bool:
    """True if the regions cover the width x height image once per pixel."""
    cover = np.zeros((int(height), int(width)), dtype=np.int32)
    for r in regions:
        if r.right >= width or r.bottom >= height:
            return False
        rows, cols = r.slices()
        cover[rows, cols] += 1
    return bool(np.all(cover == 1))
