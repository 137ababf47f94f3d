"""Jacobi and Gauss-Seidel relaxation steps on a grid with fixed borders."""

from __future__ import annotations

import numpy as np


def _check_grid(u: np.ndarray) -> None:
    if u.ndim != 2:
        raise ValueError(f"grid must be two-dimensional, got shape {u.shape}")


def _gauss_sweep(u: np.ndarray) -> float:
    _check_grid(u)
    sizey, sizex = u.shape
    if sizey < 3 or sizex < 3:
        return 0.0
    total = 0.0
    for i in range(1, sizey - 1):
        old = u[i, 1:-1].tolist()
        right = u[i, 2:].tolist()
        top = u[i - 1, 1:-1].tolist()
        bottom = u[i + 1, 1:-1].tolist()
        left = float(u[i, 0])
        updated = []
        for current, r, t, b in zip(old, right, top, bottom):
            left = 0.25 * (left + r + t + b)
            updated.append(left)
            diff = left - current
            total += diff * diff
        u[i, 1:-1] = updated
    return total


def residual_gauss(u: np.ndarray) -> float:
    """Do one in-place Gauss-Seidel sweep and return the sum of squared changes."""
    return _gauss_sweep(u)


def relax_gauss(u: np.ndarray) -> None:
    """Do one in-place Gauss-Seidel sweep."""
    _gauss_sweep(u)


def _jacobi_stencil(u: np.ndarray, utmp: np.ndarray) -> np.ndarray | None:
    _check_grid(u)
    if u.shape != utmp.shape:
        raise ValueError(f"grid shapes differ: {u.shape} and {utmp.shape}")
    if u.shape[0] < 3 or u.shape[1] < 3:
        return None
    utmp[1:-1, 1:-1] = 0.25 * (u[1:-1, :-2] + u[1:-1, 2:] + u[:-2, 1:-1] + u[2:, 1:-1])
    return utmp[1:-1, 1:-1]


def residual_jacobi(u: np.ndarray, utmp: np.ndarray) -> float:
    """Write one Jacobi step of ``u`` into ``utmp`` and return the sum of squared changes."""
    inner = _jacobi_stencil(u, utmp)
    if inner is None:
        return 0.0
    diff = inner - u[1:-1, 1:-1]
    return float(np.sum(diff * diff))


def relax_jacobi(u: np.ndarray, utmp: np.ndarray) -> None:
    """Write one Jacobi step of ``u`` into the interior of ``utmp``."""
    _jacobi_stencil(u, utmp)