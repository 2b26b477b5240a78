"""
Configuration and wiring for probrng.

Collects the knobs of a sampling run (distribution name and parameters,
accuracy level, count, solver tolerance, seed) and builds the distribution,
solver and sampler from them.

Environment overrides, read when ``SamplerConfig.from_env`` is called:
    PROBRNG_TOLERANCE  solver tolerance (float)
    PROBRNG_SEED       integer seed for reproducible runs
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional

import numpy as np

from .core.distributions import (
    ChiSquareDistribution,
    Distribution,
    ExponentialDistribution,
    NormalDistribution,
    UniformDistribution,
)
from .core.sampler import Sampler
from .core.solver import BisectionSolver
from .custom_types import Array

__all__ = [
    "DEFAULT_TOLERANCE",
    "DEFAULT_ACCURACY_LEVEL",
    "MIN_ACCURACY_LEVEL",
    "MAX_ACCURACY_LEVEL",
    "MAX_COUNT",
    "DistributionFactory",
    "SamplerConfig",
]

DEFAULT_TOLERANCE = 1e-8
DEFAULT_ACCURACY_LEVEL = 3
MIN_ACCURACY_LEVEL = 1
MAX_ACCURACY_LEVEL = 5
MAX_COUNT = 1000

ENV_TOLERANCE = "PROBRNG_TOLERANCE"
ENV_SEED = "PROBRNG_SEED"


def _normalize_name(name: str) -> str:
    return "_".join(name.strip().lower().replace("-", " ").replace("_", " ").split())


class DistributionFactory:
    """Factory for creating distributions by name.

    Names are case-insensitive; spaces, hyphens and underscores are
    interchangeable, so ``"Chi-Square"``, ``"chi_square"`` and
    ``"chi square"`` all resolve to the same entry.

    Examples:
        DistributionFactory.create("uniform", lb=0, rb=1)
        DistributionFactory.create("Standard Normal")
        DistributionFactory.create("chi-square", dof=3)
        DistributionFactory.create("exponential", lam=0.5)
    """

    _REGISTRY: Mapping[str, type] = MappingProxyType({
        "uniform": UniformDistribution,
        "normal": NormalDistribution,
        "chi_square": ChiSquareDistribution,
        "exponential": ExponentialDistribution,
    })
    _ALIASES: Mapping[str, str] = MappingProxyType({
        "standard_normal": "normal",
        "gaussian": "normal",
        "chisquare": "chi_square",
        "chi2": "chi_square",
        "exp": "exponential",
    })
    # Parameters of the "standard" aliases are pinned.
    _FIXED_PARAMS: Mapping[str, Mapping[str, float]] = MappingProxyType({
        "standard_normal": MappingProxyType({"mu": 0.0, "sigma": 1.0}),
    })

    @classmethod
    def names(cls) -> list[str]:
        return sorted(cls._REGISTRY) + sorted(cls._ALIASES)

    @classmethod
    def resolve(cls, name: str) -> str:
        """Maps a user-facing name to its canonical registry key.

        Raises:
            ValueError: If the name is unknown.
        """
        key = _normalize_name(name)
        key = cls._ALIASES.get(key, key)
        if key not in cls._REGISTRY:
            raise ValueError(
                f"Unknown distribution: {name!r}. Known names: {', '.join(cls.names())}"
            )
        return key

    @classmethod
    def create(cls, name: str, **params: Any) -> Distribution:
        """Creates a distribution from its name and keyword parameters.

        Parameters left out fall back to the distribution's defaults.

        Raises:
            ValueError: If the name is unknown, a parameter is invalid, or a
                pinned parameter of a "standard" alias is overridden.
            TypeError: If a parameter name is not accepted by the distribution.
        """
        fixed = cls._FIXED_PARAMS.get(_normalize_name(name), {})
        for key, value in fixed.items():
            if key in params and float(params[key]) != value:
                raise ValueError(f"{name!r} requires {key}={value}")
        merged = {**params, **fixed}
        return cls._REGISTRY[cls.resolve(name)](**merged)


def _env_float(name: str) -> Optional[float]:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a float, got {raw!r}") from exc


def _env_int(name: str) -> Optional[int]:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


@dataclass(frozen=True)
class SamplerConfig:
    """Immutable description of one sampling run.

    Attributes:
        distribution: Distribution name understood by :class:`DistributionFactory`.
        params: Keyword parameters for the distribution.
        accuracy_level: Decimals kept in the output, ``MIN_ACCURACY_LEVEL`` to
            ``MAX_ACCURACY_LEVEL``.
        count: Number of samples, 0 to ``MAX_COUNT``.
        tol: Solver tolerance.
        seed: Optional seed for reproducible runs.
    """
    distribution: str = "uniform"
    params: Mapping[str, float] = field(default_factory=dict)
    accuracy_level: int = DEFAULT_ACCURACY_LEVEL
    count: int = 10
    tol: float = DEFAULT_TOLERANCE
    seed: Optional[int] = None

    @classmethod
    def from_env(cls, **overrides: Any) -> "SamplerConfig":
        """Builds a config, letting ``PROBRNG_*`` variables fill unset fields.

        Explicit keyword arguments win over the environment.
        """
        values: dict[str, Any] = {}
        tol = _env_float(ENV_TOLERANCE)
        if tol is not None:
            values["tol"] = tol
        seed = _env_int(ENV_SEED)
        if seed is not None:
            values["seed"] = seed
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def validate(self) -> "SamplerConfig":
        """Checks the run-level ranges.

        Distribution parameters are validated by the distribution itself in
        :meth:`build_distribution`.

        Raises:
            ValueError: On an unknown distribution or an out-of-range field.
        """
        DistributionFactory.resolve(self.distribution)
        if not MIN_ACCURACY_LEVEL <= self.accuracy_level <= MAX_ACCURACY_LEVEL:
            raise ValueError(
                f"accuracy_level must be in [{MIN_ACCURACY_LEVEL}, {MAX_ACCURACY_LEVEL}], "
                f"got {self.accuracy_level}"
            )
        if not 0 <= self.count <= MAX_COUNT:
            raise ValueError(f"count must be in [0, {MAX_COUNT}], got {self.count}")
        if not self.tol > 0:
            raise ValueError(f"tol must be > 0, got {self.tol}")
        return self

    def build_distribution(self) -> Distribution:
        return DistributionFactory.create(self.distribution, **dict(self.params))

    def build_solver(self) -> BisectionSolver:
        return BisectionSolver(self.tol)

    def build_sampler(self) -> Sampler:
        self.validate()
        return Sampler(
            self.build_distribution(),
            self.build_solver(),
            self.accuracy_level,
            seed=self.seed,
        )

    def run(self) -> Array[np.floating]:
        """Validates, wires the components together and draws ``count`` samples."""
        return self.build_sampler().generate(self.count)
