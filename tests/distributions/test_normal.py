import math
import unittest

import numpy as np
from scipy.stats import norm

from probrng.core.distributions import NormalDistribution
from probrng.core.solver import BisectionSolver
from probrng.core.sampler import Sampler


class TestNormal(unittest.TestCase):

    def setUp(self):
        self.mu = 1.5
        self.sigma = 2.5
        self.dist = NormalDistribution(mu=self.mu, sigma=self.sigma)
        self.solver = BisectionSolver(1e-9)

    def test_parameters(self):
        self.assertEqual(self.dist.mu, self.mu)
        self.assertEqual(self.dist.sigma, self.sigma)
        self.assertEqual(self.dist.support, (-math.inf, math.inf))

    def test_density_shapes(self):
        scalar = 0.0
        arr1d = np.linspace(-1, 1, 5)           # shape (5,)
        arr2d = arr1d.reshape(5, 1)             # shape (5,1)

        for fn in (self.dist.density, self.dist.log_density):
            self.assertEqual(fn(scalar).shape, ())
            self.assertEqual(fn(arr1d).shape, (5,))
            self.assertEqual(fn(arr2d).shape, (5, 1))

    def test_cdf_matches_scipy(self):
        for x in (-3.0, 0.0, 1.5, 3.0, 8.0):
            expected = norm.cdf(x, loc=self.mu, scale=self.sigma)
            self.assertAlmostEqual(self.dist.cdf(x), expected, places=12)

    def test_cdf_value_range(self):
        cdf = np.array([self.dist.cdf(x) for x in (-3.0, 0.0, 3.0)])
        self.assertTrue(np.all(cdf > 0.0))
        self.assertTrue(np.all(cdf < 1.0))

    def test_inv_cdf_round_trip(self):
        for p in (0.01, 0.25, 0.5, 0.75, 0.99):
            x = self.dist.inv_cdf(p, self.solver)
            self.assertAlmostEqual(self.dist.cdf(x), p, places=8)

    def test_inv_cdf_invalid_probability(self):
        self.assertTrue(math.isnan(self.dist.inv_cdf(-0.1, self.solver)))
        self.assertTrue(math.isnan(self.dist.inv_cdf(1.1, self.solver)))

    def test_sample_statistics(self):
        sampler = Sampler(self.dist, self.solver, accuracy_level=3, seed=123)
        xs = sampler.generate(400)
        self.assertTrue(np.all(np.isfinite(xs)))
        # grid points 0 and 1 map to the far tails; use robust statistics
        q1, median, q3 = np.percentile(xs, [25, 50, 75])
        np.testing.assert_allclose(median, self.mu, atol=0.5)
        np.testing.assert_allclose((q3 - q1) / (2 * norm.ppf(0.75)), self.sigma, atol=0.5)

    def test_inv_cdf_endpoints_are_finite(self):
        for p in (0.0, 1.0):
            self.assertTrue(math.isfinite(self.dist.inv_cdf(p, self.solver)))


if __name__ == "__main__":
    unittest.main()
