"""
Gradient-based minimization via scipy.optimize.minimize.

The objective is passed with ``jac=True``: one call returns both the
loss and its gradient, so models compute the forward pass once per
candidate weight vector.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass
from typing import Any, Callable, Literal

import numpy as np
from numpy.typing import NDArray
from scipy import optimize

from glmridge.core.result import Result
from glmridge.core.compute.timing import Timer
from glmridge.core.exceptions import ConvergenceError, NumericalError


OptimizerMethod = Literal['L-BFGS-B', 'BFGS', 'CG']

DEFAULT_METHOD: OptimizerMethod = 'L-BFGS-B'
DEFAULT_TOL = 1e-6
DEFAULT_MAX_ITER = 1000

_METHODS = ('L-BFGS-B', 'BFGS', 'CG')

Objective = Callable[
    [NDArray[np.floating[Any]]],
    tuple[float, NDArray[np.floating[Any]]],
]


@dataclass(frozen=True)
class OptimizationParams:
    """
    Parameter payload for a single minimization run.

    Attributes:
        x: Optimal weight vector w*
        fun: Objective value at w*
        grad_norm: Max-abs gradient at w*, or None if unavailable
        n_iter: Optimizer iterations
        converged: Whether the optimizer reported success
    """
    x: NDArray[np.floating[Any]]
    fun: float
    grad_norm: float | None
    n_iter: int
    converged: bool


def _options(method: str, tol: float, max_iter: int) -> dict[str, Any]:
    if method == 'L-BFGS-B':
        return {'maxiter': max_iter, 'gtol': tol, 'ftol': tol * 1e-6}
    return {'maxiter': max_iter, 'gtol': tol}


def minimize(
    objective: Objective,
    w0: NDArray[np.floating[Any]],
    *,
    method: OptimizerMethod = DEFAULT_METHOD,
    tol: float = DEFAULT_TOL,
    max_iter: int = DEFAULT_MAX_ITER,
    strict: bool = False,
    stacklevel: int = 2,
) -> Result[OptimizationParams]:
    """
    Minimize a smooth objective starting from w0.

    Args:
        objective: Callable returning ``(loss, gradient)`` for a weight vector
        w0: Initial weight vector
        method: scipy method name ('L-BFGS-B', 'BFGS', 'CG')
        tol: Gradient tolerance
        max_iter: Maximum optimizer iterations
        strict: Raise ConvergenceError instead of warning on non-convergence
        stacklevel: Passed to warnings.warn; callers wrapping minimize add
            their own frames so the warning points at user code

    Returns:
        Result[OptimizationParams] with w* and run diagnostics

    Raises:
        ValueError: If method is unknown or tol/max_iter are invalid
        NumericalError: If the optimizer returns non-finite weights or loss
        ConvergenceError: If strict and the optimizer did not converge
    """
    if method not in _METHODS:
        raise ValueError(
            f"Unknown optimizer method: {method!r}. Valid methods: {', '.join(_METHODS)}"
        )
    if not tol > 0:
        raise ValueError(f"tol must be positive, got {tol}")
    if max_iter < 1:
        raise ValueError(f"max_iter must be at least 1, got {max_iter}")

    timer = Timer()
    timer.start()
    warnings_list: list[str] = []

    with timer.section('setup'):
        x0 = np.array(w0, dtype=np.float64, copy=True)
        options = _options(method, tol, max_iter)

    with timer.section('optimization'):
        with np.errstate(over='ignore'):
            opt_result = optimize.minimize(
                objective,
                x0,
                jac=True,
                method=method,
                options=options,
            )

    x = np.asarray(opt_result.x, dtype=np.float64)
    fun = float(opt_result.fun)
    if not (np.all(np.isfinite(x)) and np.isfinite(fun)):
        raise NumericalError(
            f"Optimizer returned non-finite solution (loss={fun}, "
            f"finite weights={bool(np.all(np.isfinite(x)))})"
        )

    grad_norm = None
    if getattr(opt_result, 'jac', None) is not None:
        grad_norm = float(np.max(np.abs(opt_result.jac))) if x.size else 0.0

    converged = bool(opt_result.success)
    n_iter = int(getattr(opt_result, 'nit', 0))
    message = str(getattr(opt_result, 'message', ''))

    if not converged:
        error = ConvergenceError(
            method, n_iter, tol, grad_norm=grad_norm, reason=message,
        )
        if strict:
            raise error
        warnings_list.append(str(error))
        warnings.warn(str(error), RuntimeWarning, stacklevel=stacklevel)

    timer.stop()

    params = OptimizationParams(
        x=x,
        fun=fun,
        grad_norm=grad_norm,
        n_iter=n_iter,
        converged=converged,
    )

    return Result(
        params=params,
        info={
            'method': method,
            'tol': tol,
            'max_iter': max_iter,
            'objective_value': fun,
            'n_function_evals': int(getattr(opt_result, 'nfev', 0)),
            'n_gradient_evals': int(getattr(opt_result, 'njev', 0)),
            'message': message,
        },
        timing=timer.result(),
        backend_name=f"scipy_{method.lower()}",
        warnings=tuple(warnings_list),
    )
