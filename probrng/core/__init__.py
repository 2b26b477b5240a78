from .distributions import (
    Distribution,
    ContinuousDistribution,
    UniformDistribution,
    NormalDistribution,
    ChiSquareDistribution,
    ExponentialDistribution,
    incomplete_lower_gamma,
    regularized_lower_gamma,
)
from .solver import BisectionSolver, SolverConvergenceError
from .sampler import Sampler, SamplingError
