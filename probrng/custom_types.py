# custom_types.py
"""
Type aliases shared across probrng.

We generally follow the conventions:
- Annotate scalar math with `float`
- Annotate array output with `Array`
- Annotate callables inverted by the solver with `RealFunction`
"""
from __future__ import annotations
from typing import Callable, TypeAlias
from numpy.random import Generator as NumpyRNG

from numpy.typing import (
    NDArray as NumpyArray,
    ArrayLike as NumpyArrayLike
)


Array = NumpyArray
ArrayLike: TypeAlias = NumpyArrayLike
PRNG: TypeAlias = NumpyRNG
RealFunction: TypeAlias = Callable[[float], float]
Bracket: TypeAlias = tuple[float, float]
