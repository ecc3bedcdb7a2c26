"""
Inverse link functions and per-observation negative log-likelihoods.

Each Link defines:
- g⁻¹(η) → μ  (inverse link, the model's mean)
- nll(η, y)  (negative log-likelihood of one observation, up to a
  constant in y, written in terms of η so that no log of μ is taken)

Writing the likelihood in η keeps it finite where μ underflows to 0 or
saturates at 1; the value is algebraically identical to the μ form.

References:
    McCullagh, P., & Nelder, J. A. (1989). Generalized Linear Models (2nd ed.)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
import numpy as np
from numpy.typing import NDArray

# exp(±500) is finite in float64
_ETA_CLIP = 500.0


class Link(ABC):
    """Inverse link plus the matching unit negative log-likelihood."""

    @abstractmethod
    def linkinv(self, eta: NDArray) -> NDArray:
        """g⁻¹(η) → μ."""
        ...

    @abstractmethod
    def nll(self, eta: NDArray, y: NDArray) -> NDArray:
        """Elementwise -log p(y | η), dropping terms free of η."""
        ...

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class LogitLink(Link):
    """Logit link: μ = sigmoid(η). Bernoulli likelihood."""

    def linkinv(self, eta: NDArray) -> NDArray:
        eta = np.clip(eta, -_ETA_CLIP, _ETA_CLIP)
        return 1.0 / (1.0 + np.exp(-eta))

    def nll(self, eta: NDArray, y: NDArray) -> NDArray:
        # -[y log σ(η) + (1-y) log(1-σ(η))] = log(1 + e^η) - y η
        return np.logaddexp(0.0, eta) - y * eta


class LogLink(Link):
    """Log link: μ = exp(η). Poisson likelihood."""

    def linkinv(self, eta: NDArray) -> NDArray:
        eta = np.clip(eta, -_ETA_CLIP, _ETA_CLIP)
        return np.exp(eta)

    def nll(self, eta: NDArray, y: NDArray) -> NDArray:
        """
        -(y log μ - μ) with log μ = η.

        Past the clip exp(η) is continued linearly, so d nll / dη equals
        linkinv(η) - y for every η and the gradient stays consistent.
        """
        eta_c = np.clip(eta, -_ETA_CLIP, _ETA_CLIP)
        return np.exp(eta_c) * (1.0 + eta - eta_c) - y * eta


def poisson_deviance(y: NDArray, mu: NDArray) -> float:
    """Mean Poisson deviance: 2 * mean[y log(y/μ) - (y - μ)], 0 log 0 = 0."""
    mu = np.maximum(mu, 1e-10)
    with np.errstate(divide='ignore', invalid='ignore'):
        term = np.where(y > 0, y * np.log(y / mu), 0.0)
    return 2.0 * float(np.mean(term - (y - mu)))
