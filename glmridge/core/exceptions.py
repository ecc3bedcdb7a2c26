"""
Errors raised by glmridge.

Every error derives from GLMRidgeError. Bad caller input surfaces as
ValidationError (DimensionError for shape problems); the remaining
classes describe model state or optimizer outcomes and keep the
numbers that explain them as attributes.
"""


class GLMRidgeError(Exception):
    """Root of every error raised by glmridge."""


class ValidationError(GLMRidgeError):
    """
    Caller input was rejected.

    Examples: a negative lambda_, a logistic target that does not hold
    exactly two distinct labels, a Poisson target with fractional counts.
    """


class DimensionError(ValidationError):
    """An array has the wrong number of dimensions, rows or columns."""


class NotFittedError(GLMRidgeError):
    """
    A fitted-only operation was called on an untrained model.

    Attributes:
        model_name: Class name of the model
        operation: Name of the method or property that was called
    """

    def __init__(self, model_name: str, operation: str):
        self.model_name = model_name
        self.operation = operation
        super().__init__(
            f"Called {operation} on a {model_name} that is not trained yet; "
            "call fit first"
        )


class NumericalError(GLMRidgeError):
    """The optimizer produced a NaN or infinite loss or weight vector."""


class ConvergenceError(GLMRidgeError):
    """
    The optimizer stopped before meeting its gradient tolerance.

    Raised only for ``strict=True`` fits; a lenient fit emits a
    RuntimeWarning carrying the same text.

    Attributes:
        method: scipy method name
        iterations: Iterations completed
        grad_norm: Max-abs gradient at the returned weights, if known
        tol: Gradient tolerance that was requested
        reason: scipy's termination message
    """

    def __init__(
        self,
        method: str,
        iterations: int,
        tol: float,
        grad_norm: float | None = None,
        reason: str = '',
    ):
        self.method = method
        self.iterations = iterations
        self.tol = tol
        self.grad_norm = grad_norm
        self.reason = reason
        detail = '' if grad_norm is None else f" (max |grad| {grad_norm:.3g}, tol {tol:g})"
        super().__init__(
            f"{method} did not converge after {iterations} iterations{detail}: {reason}"
        )
