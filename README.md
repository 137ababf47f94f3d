# heatsolve

heatsolve computes how heat spreads across a square plate. Heat sources act on
the plate's border, and the steady-state temperature of the inner points is
found by repeated relaxation with either the Jacobi or the Gauss-Seidel method.
The solver runs a series of resolutions, reports how long each one took and how
many floating-point operations per second it reached, and writes the temperature
field of the last resolution as a colour PPM image.

## Installation

```
pip install .
```

numpy is the only runtime dependency.

## Usage

```
heatsolve <input file> [result file]
```

The result image goes to `heat.ppm` unless you name another file. The
parameters and the progress of each resolution are printed on standard error.
When all resolutions are done, standard output gets one line per resolution in
the form

```
resolution; seconds; MFlop/s
```

The exit status is 0 on success and 1 when no input file is given, a file
cannot be opened, or the input file cannot be parsed.

The image is plain-text PPM (`P3`), 1026 × 1026 pixels. The field is sampled
down by taking every n-th point from the top-left corner (no averaging), and the
last row and column of the image are left at zero. Colours run from blue
(coldest) to red (hottest), scaled between the field's minimum and maximum; a
field with no variation is drawn entirely in the coldest colour.

### Input file

Every value goes on its own line, in this order:

1. maximum number of iterations (`0` means no limit; the solver then stops only
   when the residual falls below 0.000005)
2. first resolution (inner points per side)
3. largest resolution
4. step between resolutions
5. algorithm: `0` for Jacobi, `1` for Gauss-Seidel
6. number of heat sources
7. one line per source: `posx posy range temperature`

The first resolution is always run; further ones are added in steps as long as
they do not exceed the largest resolution.

Example:

```
25000
100
300
100
0
2
0.0 0.0 1.0 2.5
0.5 1.0 1.0 2.5
```

## Using it from Python

```python
import sys
from heatsolve.params import read_input, format_params
from heatsolve.cli import run_experiments, format_results

with open("test.dat") as stream:
    params = read_input(stream)

sys.stderr.write(format_params(params))
results = list(run_experiments(params, sys.stderr))
print(format_results(results), end="")
```

`run_experiments` is a generator yielding one `ExperimentResult` per resolution
(with `resolution`, `runtime`, `flop`, `residual`, `iterations`, the solved
`grid`, and the derived `gflop` and `floprate`). `read_input` raises
`InputError` (a `ValueError`) when the input cannot be parsed.

Lower-level pieces:

- `heatsolve.params`: `Params` (with `resolutions()`), `HeatSource`,
  `Algorithm`, `read_input`, `format_params`, `InputError`
- `heatsolve.grid`: `initialize_grid`, `coarsen`, `color_table`,
  `write_image`
- `heatsolve.relax`: `residual_jacobi`, `relax_jacobi`, `residual_gauss`,
  `relax_gauss`, working in place on two-dimensional numpy arrays
- `heatsolve.cli`: `solve`, `wtime`, `ExperimentResult`, `run_experiments`,
  `format_results`, `main`

## What it does not do

heatsolve runs in a single process. It does not split the plate across several
processes or machines, and it has no parallel or distributed mode.

## Running the tests

```
pip install .[test]
pytest
```