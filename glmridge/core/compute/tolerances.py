"""
Tolerance tiers for numerical validation.

Defines precision expectations used by the test suite when comparing an
analytic gradient against a finite-difference estimate, and when
comparing fitted weights against a closed-form or reference optimum.
"""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


# Central finite differences on a smooth convex objective
GRADIENT_CHECK = ToleranceTier(
    rtol=1e-5,
    atol=1e-4,
    name='gradient_check',
    description='Analytic gradient vs central finite differences',
)

# Two calls that share the same forward pass must agree exactly
EXACT = ToleranceTier(
    rtol=1e-12,
    atol=1e-14,
    name='exact',
    description='Same arithmetic on the same inputs',
)

# Weights recovered by an iterative optimizer
OPTIMIZER = ToleranceTier(
    rtol=1e-3,
    atol=1e-4,
    name='optimizer',
    description='Iterative optimizer solution vs known optimum',
)


def finite_difference_gradient(fun, w, h: float = 1e-6):
    """
    Central finite-difference estimate of the gradient of fun at w.

    Args:
        fun: Scalar function of a 1-D float array
        w: Point of evaluation
        h: Step size

    Returns:
        Gradient estimate with the same shape as w
    """
    w = np.asarray(w, dtype=np.float64)
    grad = np.zeros_like(w)
    for i in range(w.shape[0]):
        step = np.zeros_like(w)
        step[i] = h
        grad[i] = (fun(w + step) - fun(w - step)) / (2.0 * h)
    return grad
