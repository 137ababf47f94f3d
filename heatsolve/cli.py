"""Command-line driver: run the heat solver over a range of resolutions."""

from __future__ import annotations

import math
import sys
import time
from dataclasses import dataclass, field
from typing import Iterator, Sequence, TextIO

import numpy as np

from heatsolve.grid import coarsen, initialize_grid, write_image
from heatsolve.params import Algorithm, InputError, Params, format_params, read_input
from heatsolve.relax import residual_gauss, residual_jacobi

TOLERANCE = 0.000005
DEFAULT_RESULT_FILE = "heat.ppm"


def wtime() -> float:
    """Return the wall-clock time in seconds."""
    return time.time()


@dataclass
class ExperimentResult:
    """Outcome of solving at one resolution."""

    resolution: int
    runtime: float
    flop: float
    residual: float
    iterations: int
    grid: np.ndarray = field(repr=False, compare=False)

    @property
    def gflop(self) -> float:
        return self.flop / 1e9

    @property
    def floprate(self) -> float:
        """Throughput in MFlop/s."""
        if self.runtime > 0:
            return self.flop / self.runtime / 1e6
        return math.nan if self.flop == 0 else math.inf


def solve(u: np.ndarray, algorithm: Algorithm, maxiter: int) -> tuple[float, int]:
    """Relax ``u`` in place until converged or ``maxiter`` is reached (0: no limit).

    Returns the last residual and the number of iterations done.
    """
    algorithm = Algorithm(algorithm)
    uhelp = u.copy() if algorithm is Algorithm.JACOBI else None
    iterations = 0
    while True:
        if uhelp is not None:
            if iterations % 2 == 0:
                residual = residual_jacobi(u, uhelp)
            else:
                residual = residual_jacobi(uhelp, u)
        else:
            residual = residual_gauss(u)
        iterations += 1
        if residual < TOLERANCE:
            break
        if maxiter > 0 and iterations >= maxiter:
            break
    if uhelp is not None and iterations % 2 == 1:
        u[...] = uhelp
    return residual, iterations


def run_experiments(params: Params, log: TextIO | None = None) -> Iterator[ExperimentResult]:
    """Solve at every resolution of ``params`` and yield one result per run."""
    for resolution in params.resolutions():
        u = initialize_grid(resolution, params.sources)
        if log is not None:
            log.write("Resolution: %5u\r" % resolution)
        start = wtime()
        residual, iterations = solve(u, params.algorithm, params.maxiter)
        runtime = wtime() - start
        result = ExperimentResult(
            resolution=resolution,
            runtime=runtime,
            flop=iterations * 7.0 * resolution * resolution,
            residual=residual,
            iterations=iterations,
            grid=u,
        )
        if log is not None:
            log.write(
                "Resolution: %5u, Time: %04.3f (%3.3f GFlop => %6.2f MFlop/s, "
                "residual %f, %d iterations)\n"
                % (resolution, runtime, result.gflop, result.floprate, residual, iterations)
            )
        yield result


def format_results(results: Sequence[ExperimentResult]) -> str:
    """Render one ``resolution; time; MFlop/s`` line per experiment."""
    return "".join(
        "%5d; %5.3f; %5.3f\n" % (r.resolution, r.runtime, r.floprate) for r in results
    )


def _usage(prog: str) -> str:
    return "Usage: %s <input file> [result file]\n\n" % prog


def main(argv: Sequence[str] | None = None) -> int:
    """Run the solver from the command line and return the exit status."""
    prog = "heat"
    args = list(sys.argv[1:] if argv is None else argv)
    err = sys.stderr
    if not args:
        err.write(_usage(prog))
        return 1

    in_name = args[0]
    out_name = args[1] if len(args) >= 2 else DEFAULT_RESULT_FILE

    try:
        infile = open(in_name, "r", encoding="utf-8")
    except OSError:
        err.write('\nError: Cannot open "%s" for reading.\n\n' % in_name)
        err.write(_usage(prog))
        return 1

    with infile:
        try:
            resfile = open(out_name, "w", encoding="ascii")
        except OSError:
            err.write('\nError: Cannot open "%s" for writing.\n\n' % out_name)
            err.write(_usage(prog))
            return 1
        with resfile:
            try:
                params = read_input(infile)
            except InputError:
                err.write("\nError: Error parsing input file.\n\n")
                err.write(_usage(prog))
                return 1

            err.write(format_params(params))
            params.visres = 1024

            results = list(run_experiments(params, err))
            sys.stdout.write(format_results(results))

            size = params.visres + 2
            write_image(resfile, coarsen(results[-1].grid, size, size))
    return 0


if __name__ == "__main__":
    sys.exit(main())