"""Grid setup from heat sources, down-sampling and PPM image output."""

from __future__ import annotations

from functools import lru_cache
from typing import Iterable, TextIO

import numpy as np

from heatsolve.params import HeatSource


def _edge_heat(dist: np.ndarray, source: HeatSource) -> np.ndarray:
    heat = np.zeros_like(dist)
    hot = dist <= source.range
    with np.errstate(divide="ignore", invalid="ignore"):
        heat[hot] = (source.range - dist[hot]) / source.range * source.temp
    return heat


def initialize_grid(resolution: int, sources: Iterable[HeatSource]) -> np.ndarray:
    """Return a zeroed ``(resolution+2)``-square grid with source heat on its border."""
    if resolution < 0:
        raise ValueError(f"resolution must be non-negative, got {resolution}")
    n = resolution + 2
    u = np.zeros((n, n))
    coords = np.arange(n) / (n - 1)
    inner = coords[1:-1]
    for src in sources:
        u[0, :] += _edge_heat(np.sqrt((coords - src.posx) ** 2 + src.posy**2), src)
        u[-1, :] += _edge_heat(np.sqrt((coords - src.posx) ** 2 + (1 - src.posy) ** 2), src)
        u[1:-1, 0] += _edge_heat(np.sqrt(src.posx**2 + (inner - src.posy) ** 2), src)
        u[1:-1, -1] += _edge_heat(np.sqrt((1 - src.posx) ** 2 + (inner - src.posy) ** 2), src)
    return u


def coarsen(uold: np.ndarray, newx: int, newy: int) -> np.ndarray:
    """Sample ``uold`` onto a ``newy`` x ``newx`` grid by taking every n-th point.

    Only the top-left part is filled; the last row and column stay zero.
    """
    if newx < 1 or newy < 1:
        raise ValueError(f"target size must be positive, got {newx}x{newy}")
    oldy, oldx = uold.shape
    stepx, stopx = (oldx // newx, newx) if oldx > newx else (1, oldx)
    stepy, stopy = (oldy // newy, newy) if oldy > newy else (1, oldy)
    rows = max(stopy - 1, 0)
    cols = max(stopx - 1, 0)
    unew = np.zeros((newy, newx))
    unew[:rows, :cols] = uold[: rows * stepy : stepy, : cols * stepx : stepx]
    return unew


@lru_cache(maxsize=None)
def color_table() -> tuple[tuple[int, int, int], ...]:
    """Return the 1024-entry colour ramp, from blue (cold) to red (hot)."""
    hot_first = (
        [(255, i, 0) for i in range(256)]
        + [(255 - i, 255, 0) for i in range(256)]
        + [(0, 255, i) for i in range(256)]
        + [(0, 255 - i, 255) for i in range(256)]
    )
    return tuple(reversed(hot_first))


def write_image(stream: TextIO, u: np.ndarray) -> None:
    """Write ``u`` as a plain-text PPM image scaled between its minimum and maximum.

    A field with no variation is drawn entirely in the coldest colour.
    """
    sizey, sizex = u.shape
    stream.write(f"P3\n{sizex} {sizey}\n255\n")
    if u.size == 0:
        return
    lo = float(u.min())
    hi = float(u.max())
    span = hi - lo
    if span > 0:
        index = np.minimum(np.trunc(1024.0 * (u - lo) / span).astype(int), 1023)
    else:
        index = np.zeros(u.shape, dtype=int)
    table = color_table()
    for row in index.tolist():
        stream.write("".join("%d %d %d  " % table[k] for k in row) + "\n")