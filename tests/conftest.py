import pytest
import numpy as np

from probrng.core.distributions import (
    UniformDistribution,
    NormalDistribution,
    ChiSquareDistribution,
    ExponentialDistribution,
)
from probrng.core.solver import BisectionSolver


@pytest.fixture
def rng():
    return np.random.default_rng(42)

@pytest.fixture
def solver():
    return BisectionSolver(1e-8)

@pytest.fixture
def uniform():
    return UniformDistribution(0.0, 1.0)

@pytest.fixture
def normal():
    return NormalDistribution(mu=1.5, sigma=2.5)

@pytest.fixture
def chi_square():
    return ChiSquareDistribution(dof=3)

@pytest.fixture
def exponential():
    return ExponentialDistribution(lam=0.5)

@pytest.fixture(params=["uniform", "normal", "chi_square", "exponential"])
def any_distribution(request):
    return request.getfixturevalue(request.param)
