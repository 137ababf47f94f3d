"""Solver configuration and the plain-text input format that describes it."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Iterator

_UNSIGNED_LIMIT = 2**32
_INT = re.compile(r"\s*([+-]?\d+)")
_FLOAT = re.compile(
    r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)


class InputError(ValueError):
    """Raised when an input file cannot be parsed."""


class Algorithm(IntEnum):
    """Relaxation scheme used by the solver."""

    JACOBI = 0
    GAUSS = 1

    @property
    def label(self) -> str:
        return "Jacobi" if self is Algorithm.JACOBI else "Gauss-Jacobi"


@dataclass(frozen=True)
class HeatSource:
    """A circular heat source acting on the boundary of the unit square."""

    posx: float
    posy: float
    range: float
    temp: float


@dataclass
class Params:
    """Algorithmic parameters of a series of experiments."""

    maxiter: int
    initial_res: int
    max_res: int
    res_step_size: int
    algorithm: Algorithm
    sources: tuple[HeatSource, ...] = ()
    visres: int = 1024

    def resolutions(self) -> Iterator[int]:
        """Yield the inner resolutions to run, always at least the initial one."""
        res = self.initial_res
        while True:
            yield res
            if res + self.res_step_size > self.max_res:
                return
            res += self.res_step_size


def _scan(line: str, pattern: re.Pattern[str], count: int, what: str) -> list[str]:
    values = []
    pos = 0
    for _ in range(count):
        match = pattern.match(line, pos)
        if match is None:
            raise InputError(f"cannot parse {what} from {line.rstrip()!r}")
        values.append(match.group(1))
        pos = match.end()
    return values


def _lines(stream: Iterable[str]) -> Iterator[str]:
    yield from stream


def read_input(stream: Iterable[str]) -> Params:
    """Parse solver parameters from a text stream of numbers, one field per line."""
    lines = _lines(stream)

    def next_line(what: str) -> str:
        try:
            return next(lines)
        except StopIteration:
            raise InputError(f"unexpected end of input, expected {what}") from None

    def unsigned(what: str) -> int:
        (token,) = _scan(next_line(what), _INT, 1, what)
        value = int(token)
        if value < 0 or value >= _UNSIGNED_LIMIT:
            raise InputError(f"{what} must be a non-negative integer, got {value}")
        return value

    maxiter = unsigned("maximum iterations")
    initial_res = unsigned("initial resolution")
    max_res = unsigned("maximum resolution")
    res_step_size = unsigned("resolution step size")

    (token,) = _scan(next_line("algorithm"), _INT, 1, "algorithm")
    try:
        algorithm = Algorithm(int(token))
    except ValueError:
        raise InputError(f"unknown algorithm {token}") from None

    numsrcs = unsigned("number of heat sources")
    sources = []
    for index in range(numsrcs):
        what = f"heat source {index + 1}"
        posx, posy, reach, temp = (float(v) for v in _scan(next_line(what), _FLOAT, 4, what))
        sources.append(HeatSource(posx, posy, reach, temp))

    return Params(
        maxiter=maxiter,
        initial_res=initial_res,
        max_res=max_res,
        res_step_size=res_step_size,
        algorithm=algorithm,
        sources=tuple(sources),
    )


def format_params(params: Params) -> str:
    """Render a human-readable summary of the parameters."""
    lines = [
        "Resolutions       : (%u, %u, ... %u)"
        % (params.initial_res, params.initial_res + params.res_step_size, params.max_res),
        "Iterations        : %u" % params.maxiter,
        "Algorithm         : %d (%s)" % (int(params.algorithm), params.algorithm.label),
        "Num. Heat sources : %u" % len(params.sources),
    ]
    lines.extend(
        "  %2d: (%2.2f, %2.2f) %2.2f %2.2f " % (number, src.posx, src.posy, src.range, src.temp)
        for number, src in enumerate(params.sources, start=1)
    )
    return "".join(line + "\n" for line in lines)