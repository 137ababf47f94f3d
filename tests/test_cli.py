import io

import numpy as np
import pytest

from heatsolve.cli import (
    ExperimentResult,
    format_results,
    main,
    run_experiments,
    solve,
    wtime,
)
from heatsolve.grid import initialize_grid
from heatsolve.params import Algorithm, HeatSource, Params
from heatsolve.relax import residual_jacobi

SOURCE = HeatSource(0.0, 0.0, 1.0, 2.5)


def _params(**overrides):
    values = dict(
        maxiter=25,
        initial_res=6,
        max_res=14,
        res_step_size=4,
        algorithm=Algorithm.JACOBI,
        sources=(SOURCE,),
    )
    values.update(overrides)
    return Params(**values)


def test_wtime_advances():
    first = wtime()
    second = wtime()
    assert second >= first


def test_solve_zero_grid_converges_at_once():
    u = np.zeros((5, 5))
    residual, iterations = solve(u, Algorithm.GAUSS, 100)
    assert iterations == 1
    assert residual == 0.0


@pytest.mark.parametrize("algorithm", [Algorithm.JACOBI, Algorithm.GAUSS])
def test_solve_stops_at_maxiter(algorithm):
    u = initialize_grid(10, [SOURCE])
    _, iterations = solve(u, algorithm, 3)
    assert iterations == 3


@pytest.mark.parametrize("algorithm", [Algorithm.JACOBI, Algorithm.GAUSS])
def test_solve_keeps_border(algorithm):
    u = initialize_grid(8, [SOURCE])
    before = u.copy()
    solve(u, algorithm, 7)
    assert np.array_equal(u[0], before[0])
    assert np.array_equal(u[-1], before[-1])
    assert np.array_equal(u[:, 0], before[:, 0])
    assert np.array_equal(u[:, -1], before[:, -1])


def test_solve_single_jacobi_step_lands_in_u():
    u = initialize_grid(6, [SOURCE])
    expected = u.copy()
    scratch = u.copy()
    residual_expected = residual_jacobi(expected, scratch)
    residual, iterations = solve(u, Algorithm.JACOBI, 1)
    assert iterations == 1
    assert residual == pytest.approx(residual_expected)
    assert np.allclose(u, scratch)


def test_jacobi_and_gauss_converge_to_same_field():
    a = initialize_grid(6, [SOURCE])
    b = a.copy()
    res_a, _ = solve(a, Algorithm.JACOBI, 0)
    res_b, _ = solve(b, Algorithm.GAUSS, 0)
    assert res_a < 0.000005
    assert res_b < 0.000005
    assert np.allclose(a, b, atol=1e-2)


def test_run_experiments_covers_resolutions():
    params = _params()
    log = io.StringIO()
    results = list(run_experiments(params, log))
    assert [r.resolution for r in results] == list(params.resolutions())
    for r in results:
        assert r.grid.shape == (r.resolution + 2, r.resolution + 2)
        assert r.flop == r.iterations * 7.0 * r.resolution * r.resolution
        assert r.iterations <= params.maxiter
    assert log.getvalue().count("iterations)\n") == len(results)


def test_run_experiments_without_log():
    results = list(run_experiments(_params(initial_res=4, max_res=4), None))
    assert len(results) == 1
    assert results[0].resolution == 4


def test_format_results_line_format():
    result = ExperimentResult(
        resolution=10, runtime=2.0, flop=4e6, residual=0.0, iterations=1, grid=np.zeros((1, 1))
    )
    assert result.floprate == 2.0
    assert format_results([result]) == "   10; 2.000; 2.000\n"


def test_format_results_empty():
    assert format_results([]) == ""


def test_main_without_arguments(capsys):
    assert main([]) == 1
    assert "Usage:" in capsys.readouterr().err


def test_main_missing_input(tmp_path, capsys):
    assert main([str(tmp_path / "missing.dat"), str(tmp_path / "out.ppm")]) == 1
    assert "Cannot open" in capsys.readouterr().err


def test_main_bad_input(tmp_path, capsys):
    infile = tmp_path / "bad.dat"
    infile.write_text("abc\n")
    assert main([str(infile), str(tmp_path / "out.ppm")]) == 1
    assert "Error parsing input file" in capsys.readouterr().err


def test_main_writes_results_and_image(tmp_path, capsys):
    infile = tmp_path / "test.dat"
    infile.write_text("20\n8\n12\n4\n1\n1\n0.0 0.0 1.0 2.5\n")
    outfile = tmp_path / "out.ppm"
    assert main([str(infile), str(outfile)]) == 0
    out = capsys.readouterr().out.splitlines()
    assert [int(line.split(";")[0]) for line in out] == [8, 12]
    image = outfile.read_text()
    assert image.startswith("P3\n1026 1026\n255\n")
    assert len(image.splitlines()) == 3 + 1026