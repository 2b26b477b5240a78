from probrng.core.distributions import (
    Distribution,
    ContinuousDistribution,
    UniformDistribution,
    NormalDistribution,
    ChiSquareDistribution,
    ExponentialDistribution,
)
from probrng.core.solver import BisectionSolver, SolverConvergenceError
from probrng.core.sampler import Sampler, SamplingError
from probrng.config import DistributionFactory, SamplerConfig

__version__ = "0.1.0"
