from __future__ import annotations

import logging
import math

from ..custom_types import Bracket, RealFunction
from ._utils import _require_int, _require_positive

__all__ = [
    "BisectionSolver",
    "SolverConvergenceError",
]

logger = logging.getLogger(__name__)

_INITIAL_BRACKET: Bracket = (-10.0, 10.0)


class SolverConvergenceError(RuntimeError):
    """Raised when bracketing or bisection exceeds its iteration cap, or the
    function returns a non-finite value."""


def _evaluate(func: RealFunction, x: float) -> float:
    value = float(func(x))
    if not math.isfinite(value):
        raise SolverConvergenceError(f"function returned {value!r} at x={x!r}")
    return value


class BisectionSolver:
    """Naive bisection solver for ``func(x) = target``.

    The function handed to the solver is assumed to be monotone increasing on
    the real line. Callers holding a decreasing function negate it (and the
    target) before solving.

    Attributes:
        tol: Width of the final bracket.
        max_expansions: Maximum number of doublings per bracket side.
        max_iterations: Maximum number of bisection steps.
    """

    def __init__(self, tol: float = 1e-8, *, max_expansions: int = 64, max_iterations: int = 200):
        """Initializes the solver.

        Args:
            tol: Positive convergence tolerance on the bracket width.
            max_expansions: Cap on the doublings of each bracket endpoint.
            max_iterations: Cap on the number of bisection steps.

        Raises:
            ValueError: If ``tol`` is not positive or a cap is below one.
        """
        self._tol = _require_positive("tol", tol)
        self._max_expansions = _require_int("max_expansions", max_expansions, minimum=1)
        self._max_iterations = _require_int("max_iterations", max_iterations, minimum=1)

    @property
    def tol(self) -> float:
        return self._tol

    @property
    def max_expansions(self) -> int:
        return self._max_expansions

    @property
    def max_iterations(self) -> int:
        return self._max_iterations

    def __repr__(self) -> str:
        return f"BisectionSolver(tol={self._tol!r})"

    def find_bracket(self, func: RealFunction, target: float) -> Bracket:
        """Finds ``(lower, upper)`` with ``func(lower) <= target <= func(upper)``.

        Starts from ``(-10, 10)`` and doubles each endpoint outward until it
        straddles the target.

        Args:
            func: Monotone increasing real function.
            target: Value to bracket.

        Returns:
            Bracket: The ``(lower, upper)`` pair.

        Raises:
            ValueError: If ``target`` is not finite.
            SolverConvergenceError: If either side needs more than
                ``max_expansions`` doublings, or ``func`` returns nan or inf.
        """
        target = float(target)
        if not math.isfinite(target):
            raise ValueError("target must be finite")

        lower, upper = _INITIAL_BRACKET
        lower = self._expand(func, lower, lambda value: value > target)
        upper = self._expand(func, upper, lambda value: value < target)

        logger.debug("bracket for target %r: [%r, %r]", target, lower, upper)
        return lower, upper

    def _expand(self, func: RealFunction, endpoint: float, outside) -> float:
        for _ in range(self._max_expansions):
            if not outside(_evaluate(func, endpoint)):
                return endpoint
            endpoint *= 2
            if not math.isfinite(endpoint):
                break
        else:
            if not outside(_evaluate(func, endpoint)):
                return endpoint
        raise SolverConvergenceError(
            f"bracket search did not converge after {self._max_expansions} expansions "
            f"(last endpoint {endpoint!r}); is the function monotone increasing?"
        )

    def solve(self, func: RealFunction, target: float) -> float:
        """Solves ``func(x) = target`` by bisection.

        Args:
            func: Monotone increasing real function.
            target: Value whose preimage is sought.

        Returns:
            float: The final midpoint, within ``tol`` of the root.

        Raises:
            ValueError: If ``target`` is not finite.
            SolverConvergenceError: If bracketing fails or bisection does not
                reach the tolerance within ``max_iterations`` steps, or if
                ``func`` returns nan or inf.
        """
        lower, upper = self.find_bracket(func, target)
        mid = 0.5 * lower + 0.5 * upper

        for iteration in range(self._max_iterations):
            if upper - lower <= self._tol:
                logger.debug("bisection converged after %d iterations", iteration)
                return mid

            value = _evaluate(func, mid)
            if value > target:
                upper = mid
            elif value < target:
                lower = mid
            else:
                return mid

            new_mid = 0.5 * lower + 0.5 * upper
            # tol below the float spacing at the root
            if new_mid == mid:
                return mid
            mid = new_mid

        if upper - lower <= self._tol:
            return mid
        raise SolverConvergenceError(
            f"bisection did not reach tol={self._tol!r} within {self._max_iterations} iterations"
        )
