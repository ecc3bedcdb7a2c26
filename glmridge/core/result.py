"""
Result envelope returned by the optimizer and kept on fitted models.

A fitted model exposes it as ``model.result``: the optimizer payload
(OptimizationParams) in ``params``, with run metadata, timings and any
non-fatal warnings beside it.
"""

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

P = TypeVar('P')


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Frozen record of one optimizer run.

    Attributes:
        params: Payload, an OptimizationParams for model fits
        info: Run metadata (method, tol, max_iter, evaluation counts, scipy message)
        timing: Seconds per phase from Timer.result(), or None
        backend_name: Optimizer identifier, e.g. 'scipy_l-bfgs-b'
        warnings: Messages of warnings emitted during the run
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = ()

    def has_warning(self, substring: str) -> bool:
        return any(substring in message for message in self.warnings)
