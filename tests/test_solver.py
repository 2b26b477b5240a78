# tests/test_solver.py
import math

import pytest

from probrng.core.solver import BisectionSolver, SolverConvergenceError


def test_identity_converges_within_tolerance(solver):
    x = solver.solve(lambda x: x, 5.3)
    assert abs(x - 5.3) <= solver.tol


def test_identity_target_five():
    solver = BisectionSolver(1e-6)
    assert solver.solve(lambda x: x, 5.0) == pytest.approx(5.0, abs=1e-6)


def test_exact_midpoint_returns_early():
    # first midpoint of (-10, 10) is 0
    assert BisectionSolver(1e-12).solve(lambda x: x, 0.0) == 0.0


def test_initial_bracket_kept_when_it_straddles_target(solver):
    assert solver.find_bracket(lambda x: x, 5.0) == (-10.0, 10.0)


@pytest.mark.parametrize("target,expected", [
    (25.0, (-10.0, 40.0)),
    (-25.0, (-40.0, 10.0)),
    (1000.0, (-10.0, 1280.0)),
])
def test_bracket_doubles_outward(solver, target, expected):
    assert solver.find_bracket(lambda x: x, target) == expected


def test_cubic_root(solver):
    assert solver.solve(lambda x: x ** 3, 8.0) == pytest.approx(2.0, abs=1e-7)


def test_root_far_outside_initial_bracket(solver):
    assert solver.solve(lambda x: x, 12345.678) == pytest.approx(12345.678, abs=1e-7)


def test_decreasing_function_after_negation(solver):
    # exp(-x) = 0.5  <=>  -exp(-x) = -0.5
    x = solver.solve(lambda x: -math.exp(-x), -0.5)
    assert x == pytest.approx(math.log(2.0), abs=1e-7)


def test_bounded_function_raises():
    solver = BisectionSolver(1e-8, max_expansions=20)
    with pytest.raises(SolverConvergenceError):
        solver.solve(math.atan, 2.0)


def test_constant_function_raises(solver):
    with pytest.raises(SolverConvergenceError):
        solver.find_bracket(lambda x: 0.0, -1.0)


def test_iteration_cap_raises():
    solver = BisectionSolver(1e-12, max_iterations=5)
    with pytest.raises(SolverConvergenceError):
        solver.solve(lambda x: x, 5.3)


def test_tolerance_below_float_spacing_still_terminates():
    solver = BisectionSolver(1e-300)
    assert solver.solve(lambda x: x, 1.0 / 3.0) == pytest.approx(1.0 / 3.0, abs=1e-15)


@pytest.mark.parametrize("target", [math.nan, math.inf, -math.inf])
def test_non_finite_target_raises(solver, target):
    with pytest.raises(ValueError):
        solver.solve(lambda x: x, target)


@pytest.mark.parametrize("tol", [0.0, -1e-3, math.nan])
def test_invalid_tolerance_raises(tol):
    with pytest.raises(ValueError):
        BisectionSolver(tol)


def test_invalid_caps_raise():
    with pytest.raises(ValueError):
        BisectionSolver(1e-8, max_expansions=0)
    with pytest.raises(TypeError):
        BisectionSolver(1e-8, max_iterations=2.5)


def test_nan_at_midpoint_raises(solver):
    # first midpoint of (-10, 10) is 0
    with pytest.raises(SolverConvergenceError, match="nan"):
        solver.solve(lambda x: x if x != 0 else math.nan, 5.0)


@pytest.mark.parametrize("bad", [math.nan, math.inf])
def test_non_finite_value_during_bracketing_raises(solver, bad):
    with pytest.raises(SolverConvergenceError):
        solver.find_bracket(lambda x: bad if x == 10.0 else x, 5.0)
