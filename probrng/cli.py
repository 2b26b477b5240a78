"""
Command-line interface for probrng.

Draws samples from a named distribution and prints them on one line:

    probrng --distribution normal --mu 1 --sigma 2 --accuracy 3 --count 10
    probrng --interactive
"""

import argparse
import logging
import sys
from typing import Callable, Optional, Sequence

import numpy as np

from . import config as rng_config
from .config import DistributionFactory, SamplerConfig
from .core.sampler import SamplingError
from .core.solver import SolverConvergenceError

logger = logging.getLogger(__name__)

_PARAM_FLAGS = ("lb", "rb", "mu", "sigma", "dof", "lam")


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="probrng",
        description="Inverse-transform random number generator for continuous distributions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Ten standard normal draws with three decimals
  probrng --distribution "standard normal" --accuracy 3 --count 10

  # Reproducible chi-square draws
  probrng --distribution chi-square --dof 4 --count 5 --seed 123

  # Prompt for the settings
  probrng --interactive
        """,
    )
    parser.add_argument(
        "--distribution", "-d",
        type=str,
        default=None,
        help=f"Distribution name ({', '.join(DistributionFactory.names())})",
    )
    parser.add_argument(
        "--accuracy", "-a",
        type=int,
        default=rng_config.DEFAULT_ACCURACY_LEVEL,
        help=(
            f"Decimal places kept, {rng_config.MIN_ACCURACY_LEVEL}-{rng_config.MAX_ACCURACY_LEVEL} "
            f"(default: {rng_config.DEFAULT_ACCURACY_LEVEL})"
        ),
    )
    parser.add_argument(
        "--count", "-n",
        type=int,
        default=10,
        help=f"Number of random numbers, 1-{rng_config.MAX_COUNT} (default: 10)",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible output")
    parser.add_argument(
        "--tol",
        type=float,
        default=None,
        help=f"Bisection solver tolerance (default: {rng_config.DEFAULT_TOLERANCE})",
    )

    params = parser.add_argument_group("distribution parameters")
    params.add_argument("--lb", type=float, default=None, help="Uniform lower bound")
    params.add_argument("--rb", type=float, default=None, help="Uniform upper bound")
    params.add_argument("--mu", type=float, default=None, help="Normal mean")
    params.add_argument("--sigma", type=float, default=None, help="Normal standard deviation")
    params.add_argument("--dof", type=float, default=None, help="Chi-square degrees of freedom")
    params.add_argument("--lam", type=float, default=None, help="Exponential rate")

    parser.add_argument(
        "--interactive", "-i",
        action="store_true",
        help="Prompt for distribution, accuracy and count",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def prompt_settings(input_func: Callable[[str], str] = input) -> dict:
    """Ask for distribution, accuracy level and count on the console.

    Raises:
        ValueError: If accuracy or count is not an integer.
    """
    print("Starting random number generator!")
    name = input_func("Type of distribution (Uniform, Standard Normal, Chi-Square, Exponential): ")
    accuracy = input_func(
        f"Level of accuracy ({rng_config.MIN_ACCURACY_LEVEL}~{rng_config.MAX_ACCURACY_LEVEL}): "
    )
    count = input_func(f"Number of random numbers (1~{rng_config.MAX_COUNT}): ")
    try:
        return {
            "distribution": name.strip(),
            "accuracy_level": int(accuracy.strip()),
            "count": int(count.strip()),
        }
    except ValueError as exc:
        raise ValueError("Invalid input! accuracy and count must be integers.") from exc


def format_samples(samples: np.ndarray, accuracy_level: int) -> str:
    # rounding keeps the sign of -0.0
    return ", ".join(f"{value + 0.0:.{accuracy_level}f}" for value in samples)


def _config_from_args(args: argparse.Namespace, input_func: Callable[[str], str]) -> SamplerConfig:
    if args.interactive or args.distribution is None:
        settings = prompt_settings(input_func)
    else:
        settings = {
            "distribution": args.distribution,
            "accuracy_level": args.accuracy,
            "count": args.count,
        }
    params = {
        name: getattr(args, name)
        for name in _PARAM_FLAGS
        if getattr(args, name) is not None
    }
    return SamplerConfig.from_env(params=params, tol=args.tol, seed=args.seed, **settings)


def main(argv: Optional[Sequence[str]] = None, input_func: Callable[[str], str] = input) -> int:
    """Main entry point. Returns the process exit status."""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        cfg = _config_from_args(args, input_func)
        if cfg.count < 1:
            raise ValueError("Input out of range! count must be at least 1.")
        samples = cfg.run()
    except (ValueError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except (SolverConvergenceError, SamplingError) as exc:
        logger.error("sampling failed: %s", exc)
        return 1

    print(format_samples(samples, cfg.accuracy_level))
    return 0


if __name__ == "__main__":
    sys.exit(main())
