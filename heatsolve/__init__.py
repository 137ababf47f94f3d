"""Iterative Jacobi and Gauss-Seidel solver for heat distribution on a plate."""

__version__ = "0.1.0"
__all__ = ["params", "relax", "grid", "cli"]