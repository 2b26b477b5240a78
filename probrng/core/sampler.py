from __future__ import annotations

import logging
from typing import Optional

import numpy as np
from scipy.stats import bernoulli

from ..custom_types import Array, PRNG
from ._utils import _require_int
from .distributions import Distribution
from .solver import BisectionSolver

__all__ = [
    "Sampler",
    "SamplingError",
]

logger = logging.getLogger(__name__)

UINT_BITS = 64
UINT_MAX = (1 << UINT_BITS) - 1

# Above this level the 2 * accuracy bound on regenerations is no longer guaranteed.
DOCUMENTED_ACCURACY_LEVEL = 5
MAX_ACCURACY_LEVEL = 15


class SamplingError(RuntimeError):
    """Raised when no valid quantized probability is drawn within the retry cap."""


class Sampler:
    """Inverse-transform sampler over a quantized probability grid.

    Each draw builds a 64-bit unsigned integer from independent fair coin
    flips, maps it onto the grid ``{0, accuracy, 2*accuracy, ..., 1}`` and
    pushes the grid point through ``distribution.inv_cdf``. The result is
    rounded to the nearest multiple of ``accuracy``.

    The integer range is split into ``10**accuracy_level + 1`` segments of
    equal length ``segment_len``. The few integers past the last full
    segment would map above 1 and are redrawn; for levels up to 5 this
    happens with probability below ``2 * accuracy``.

    Seeding:
        Every sampler owns its own generator. Samplers built with the same
        ``seed`` yield identical sequences, while successive
        :meth:`generate` calls on one sampler continue the stream.

    Attributes:
        distribution: Distribution to sample from.
        solver: Solver handed to ``inv_cdf``; only used by distributions
            without a closed-form quantile.
        accuracy_level: Number of decimals kept in the output.
        accuracy: ``10 ** -accuracy_level``.
    """

    def __init__(
        self,
        distribution: Distribution,
        solver: Optional[BisectionSolver] = None,
        accuracy_level: int = 3,
        *,
        seed: Optional[int] = None,
        rng: Optional[PRNG] = None,
        max_regenerations: int = 1000,
    ):
        """Initializes a Sampler.

        Args:
            distribution: Distribution to sample from.
            solver: Bisection solver for numerical CDF inversion.
            accuracy_level: Positive integer, conventionally 1 to 5.
            seed: Seed for a fresh ``np.random.default_rng``; ignored when
                ``rng`` is given.
            rng: Random number generator. If ``None``, one is created from
                ``seed`` (system entropy when ``seed`` is also ``None``).
            max_regenerations: Cap on redraws of an out-of-range probability.

        Raises:
            TypeError: If ``distribution`` is not a Distribution.
            ValueError: If ``accuracy_level`` is outside
                ``[1, MAX_ACCURACY_LEVEL]`` or ``max_regenerations`` < 1.
        """
        if not isinstance(distribution, Distribution):
            raise TypeError("distribution must be a Distribution instance")
        level = _require_int("accuracy_level", accuracy_level, minimum=1)
        if level > MAX_ACCURACY_LEVEL:
            raise ValueError(f"accuracy_level must be <= {MAX_ACCURACY_LEVEL}")
        if level > DOCUMENTED_ACCURACY_LEVEL:
            logger.warning(
                "accuracy_level %d exceeds %d; regeneration rate is no longer bounded by 2 * accuracy",
                level, DOCUMENTED_ACCURACY_LEVEL,
            )

        self._dist = distribution
        self._solver = solver
        self._level = level
        self._grid_size = 10 ** level
        self._accuracy = 1.0 / self._grid_size
        self._segment_len = UINT_MAX // (self._grid_size + 1)
        self._max_regenerations = _require_int("max_regenerations", max_regenerations, minimum=1)
        self._rng = rng or np.random.default_rng(seed)
        self._coin = bernoulli(0.5)

    @property
    def distribution(self) -> Distribution:
        return self._dist

    @property
    def solver(self) -> Optional[BisectionSolver]:
        return self._solver

    @property
    def accuracy_level(self) -> int:
        return self._level

    @property
    def accuracy(self) -> float:
        return self._accuracy

    def random_bits(self) -> int:
        """Draws a uniform 64-bit unsigned integer, one fair coin flip per bit.

        Bits are shifted in most-significant first.
        """
        flips = self._coin.rvs(size=UINT_BITS, random_state=self._rng)
        value = 0
        for bit in flips:
            value = (value << 1) | int(bit)
        return value

    def random_probability(self) -> float:
        """Draws a probability from the grid ``{0, accuracy, ..., 1}``.

        Returns:
            float: ``segment_index * accuracy``.

        Raises:
            SamplingError: If every draw within ``max_regenerations`` retries
                fell past the last segment.
        """
        index = self.random_bits() // self._segment_len
        regenerations = 0
        while index > self._grid_size:
            if regenerations >= self._max_regenerations:
                raise SamplingError(
                    f"no probability <= 1 drawn after {self._max_regenerations} regenerations"
                )
            regenerations += 1
            logger.debug("segment index %d above grid, regenerating", index)
            index = self.random_bits() // self._segment_len
        return index / self._grid_size

    def sample(self) -> float:
        """Draws a single rounded value."""
        prob = self.random_probability()
        value = self._dist.inv_cdf(prob, self._solver)
        return float(np.round(value, self._level))

    def generate(self, n: int) -> Array[np.floating]:
        """Generates ``n`` samples in draw order.

        Args:
            n: Number of samples; non-negative integer.

        Returns:
            Array[np.floating]: Shape ``(n,)``, each entry a multiple of
            :attr:`accuracy` (or infinite at an unbounded support edge).

        Raises:
            TypeError: If ``n`` is not an integer.
            ValueError: If ``n`` is negative.
        """
        n = _require_int("n", n)
        out = np.empty(n, dtype=float)
        for i in range(n):
            out[i] = self.sample()
        logger.debug("generated %d samples from %r", n, self._dist)
        return out

    def __repr__(self) -> str:
        return (
            f"Sampler(distribution={self._dist!r}, solver={self._solver!r}, "
            f"accuracy_level={self._level})"
        )
