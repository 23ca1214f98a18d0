# easing.py

"""
Progression functions for tweens.

Each function maps normalized elapsed time ``x`` in ``[0, 1]`` to a normalized
progression in ``[0, 1]``. Inputs outside the domain are clamped to the
boundary values, so ``f(x) == 0`` for ``x <= 0`` and ``f(x) == 1`` for
``x >= 1``.
"""

import math
from typing import Callable

ProgressionFn = Callable[[float], float]


def parametric_sine(k: float, m: float) -> ProgressionFn:
    """
    Sine based ease-in-out with adjustable steepness and horizontal bias.

    Args:
        k: Steepness. ``0`` gives a plain sine ease; larger values front-load
           the motion.
        m: Horizontal bias. Larger values move the inflection point earlier.

    Returns:
        Progression function.
    """
    def g(x: float) -> float:
        if x <= 0:
            return 0.0
        if x >= 1:
            return 1.0
        return 1 - math.pow(1 - x, 2 * (m + 1 / 2))

    def progression(x: float) -> float:
        if x <= 0:
            return 0.0
        if x >= 1:
            return 1.0
        return math.pow(
            0.5 + math.sin((g(x) - 0.5) * math.pi) / 2,
            math.pow(2 * (1 - x), k)
        )

    return progression


def parametric_ease_out(k: float) -> ProgressionFn:
    """
    Polynomial ease-out.

    Args:
        k: Slope. Larger values decelerate harder towards the end.

    Returns:
        Progression function.
    """
    def progression(x: float) -> float:
        if x <= 0:
            return 0.0
        if x >= 1:
            return 1.0
        return 1 - math.pow(1 - x, 2 * (k + 1 / 2))

    return progression


def linear(x: float) -> float:
    if x <= 0:
        return 0.0
    if x >= 1:
        return 1.0
    return x


CURVES = {
    'sine': parametric_sine,
    'ease_out': parametric_ease_out,
}


def curve_from_dict(data: dict) -> ProgressionFn:
    """
    Build a progression function from a config entry.

    Args:
        data: ``{"curve": "sine", "k": 0, "m": 0.29}`` or
              ``{"curve": "ease_out", "k": 0.55}``. ``"linear"`` takes no
              parameters.

    Returns:
        Progression function.

    Raises:
        ValueError: If the curve name or its parameters are not recognized.
    """
    params = dict(data)
    name = params.pop('curve', None)
    if name == 'linear' and not params:
        return linear
    if name not in CURVES:
        raise ValueError(f"Unknown easing curve: {name!r}")
    try:
        return CURVES[name](**params)
    except TypeError as e:
        raise ValueError(f"Invalid parameters for easing curve {name!r}: {e}") from e


DEFAULT_PROGRESSION_FN = parametric_sine(0, 0.29)
DEFAULT_CONTINUATION_FN = parametric_ease_out(0.55)
