import math
import numbers


def _is_valid_probability(prob: float) -> bool:
    """Checks whether ``prob`` lies in the closed unit interval.

    NaN compares false against both bounds, so it is rejected as well.

    Args:
        prob (float): Candidate probability.

    Returns:
        bool: ``True`` if ``0 <= prob <= 1``.
    """
    return 0.0 <= prob <= 1.0


def _require_positive(name: str, value: float) -> float:
    """Casts ``value`` to float and ensures it is finite and strictly positive.

    Args:
        name (str): Parameter name used in the error message.
        value (float): Value to validate.

    Returns:
        float: The validated value.

    Raises:
        ValueError: If the value is not finite or not > 0.
    """
    value = float(value)
    if not math.isfinite(value) or value <= 0:
        raise ValueError(f"{name} must be > 0")
    return value


def _require_finite(name: str, value: float) -> float:
    value = float(value)
    if not math.isfinite(value):
        raise ValueError(f"{name} must be finite")
    return value


def _require_int(name: str, value: int, *, minimum: int = 0) -> int:
    """Validates an integer argument such as a sample count or accuracy level.

    ``bool`` is rejected even though it subclasses ``int``.

    Args:
        name (str): Parameter name used in the error message.
        value (int): Value to validate.
        minimum (int, optional): Smallest accepted value. Defaults to 0.

    Returns:
        int: The validated value as a plain ``int``.

    Raises:
        TypeError: If ``value`` is not an integer.
        ValueError: If ``value`` is below ``minimum``.
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise TypeError(f"{name} must be an integer, got {type(value).__name__}")
    value = int(value)
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}")
    return value
