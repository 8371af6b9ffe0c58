"""
Best-first quadtree decomposition for quadart.

Exports:
- score_quad(image, region, cfg) -> Quad
- QuadtreeEngine(image, cfg, canvas=None): owns the active leaves and the canvas.

Each step pops the leaf with the highest priority, splits it into TL, TR, BL, BR
children, scores and renders each child, and pushes them back. Leaves at or
below cfg.min_size in either dimension are Excluded: they rank below every
Eligible leaf but are still picked once nothing else is left.
"""
from __future__ import annotations
import heapq
import itertools
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

import numpy as np

from quadart.config import ApproxConfig, DEFAULT_SENTINEL
from quadart.core import Region, calc_area, split
from quadart.features import estimate
from quadart.io import check_source, make_canvas
from quadart.render import render
from quadart.utils import debug

__all__ = ["Priority", "Quad", "score_quad", "QuadtreeEngine", "LUMA_WEIGHTS"]

LUMA_WEIGHTS = (0.2989, 0.587, 0.114)


@dataclass(frozen=True, order=True)
class Priority:
    """Eligible(score) or Excluded; Excluded sorts below any Eligible."""
    eligible: bool
    score: float = 0.0

    @classmethod
    def of(cls, score: float) -> "Priority":
        return cls(True, float(score))

    @classmethod
    def excluded(cls) -> "Priority":
        return cls(False, 0.0)


@dataclass(frozen=True)
class Quad:
    region: Region
    color: Tuple[int, int, int, int]
    error: float
    priority: Priority
    sentinel: float = DEFAULT_SENTINEL

    @property
    def score(self) -> float:
        return self.priority.score if self.priority.eligible else self.sentinel


def score_quad(image: np.ndarray, region: Region, cfg: ApproxConfig | None = None) -> Quad:
    cfg = cfg or ApproxConfig()
    stats = [estimate(image, region, c) for c in range(3)]
    err = sum(w * s.error for w, s in zip(LUMA_WEIGHTS, stats))
    color = (stats[0].average, stats[1].average, stats[2].average, 255)

    if region.width <= cfg.min_size or region.height <= cfg.min_size:
        prio = Priority.excluded()
    else:
        prio = Priority.of(err * float(calc_area(region)) ** cfg.area_power)
    return Quad(region, color, err, prio, cfg.exclusion_sentinel)


class QuadtreeEngine:
    """
    Greedy best-first refinement over an implicit quadtree.

    The heap holds every leaf that can still be split; leaves narrower than
    3 px in either dimension move to `_final` and stay part of the tiling.
    With min_size >= 2 those leaves are always Excluded, so skipping them
    never passes over an Eligible leaf.
    """

    def __init__(self, image: np.ndarray, cfg: ApproxConfig | None = None,
                 canvas: np.ndarray | None = None):
        self.image = check_source(image)
        self.cfg = cfg or ApproxConfig()
        h, w = image.shape[:2]
        if canvas is None:
            canvas = make_canvas(image)
        elif canvas.shape[:2] != (h, w):
            raise ValueError(f"canvas {canvas.shape[:2]} does not match image {(h, w)}")
        self.canvas = canvas

        self._heap: List[tuple] = []
        self._final: List[Quad] = []
        self._seq = itertools.count()
        self.steps_done = 0

        self.root = self._add(Region.full(w, h))

    def _add(self, region: Region) -> Quad:
        quad = score_quad(self.image, region, self.cfg)
        render(self.canvas, quad)
        if region.splittable:
            p = quad.priority
            # max-heap on (eligible, score); ties go to the earliest insert
            heapq.heappush(self._heap, (-int(p.eligible), -p.score, next(self._seq), quad))
        else:
            self._final.append(quad)
        return quad

    def __len__(self) -> int:
        return len(self._heap) + len(self._final)

    @property
    def leaves(self) -> List[Quad]:
        return [item[-1] for item in self._heap] + list(self._final)

    def peek(self) -> Optional[Quad]:
        return self._heap[0][-1] if self._heap else None

    def step(self) -> Optional[Quad]:
        """Split the highest-priority leaf; None when nothing is splittable."""
        if not self._heap:
            return None
        parent = heapq.heappop(self._heap)[-1]
        for child in split(parent.region):
            self._add(child)
        self.steps_done += 1
        return parent

    def run(self, steps: int | None = None,
            callback: Callable[[int, "QuadtreeEngine"], None] | None = None) -> int:
        n = self.cfg.steps if steps is None else int(steps)
        done = 0
        for i in range(n):
            if self.step() is None:
                print(f"[QUADART] no splittable leaves left after {self.steps_done} steps; stopping")
                break
            done += 1
            if callback is not None:
                callback(i + 1, self)
        debug(f"run done steps={done} leaves={len(self)}")
        return done
