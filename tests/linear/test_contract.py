"""
Tests for the fitting contract shared by both models.

Covers properties that hold for LogisticRegression and
PoissonRegression alike:
    - analytic gradient matches finite differences (primary correctness)
    - evaluate() == (loss(), loss_grad())
    - the intercept is excluded from the ridge penalty
    - lambda_ validation at construction
    - copy-on-fit immutability
    - structural conformance to LinearModel
"""

import dataclasses

import numpy as np
import pytest
from scipy.optimize import check_grad

from glmridge.core.protocols import LinearModel
from glmridge.core.exceptions import DimensionError, NotFittedError, ValidationError
from glmridge.core.compute.tolerances import (
    EXACT,
    GRADIENT_CHECK,
    finite_difference_gradient,
)
from glmridge.linear import LogisticRegression, PoissonRegression


MODELS = [LogisticRegression, PoissonRegression]
LAMBDAS = [0.0, 0.1, 2.5]


@pytest.fixture(params=["logistic", "poisson"])
def model_and_data(request, binary_data, count_data):
    """(model class, X, y) for each model on matching data."""
    if request.param == "logistic":
        X, y, _ = binary_data
        return LogisticRegression, X, y
    X, y, _ = count_data
    return PoissonRegression, X, y


# =====================================================================
# Gradient correctness
# =====================================================================

class TestGradient:

    @pytest.mark.parametrize("lambda_", LAMBDAS)
    def test_matches_central_differences(self, model_and_data, rng, lambda_):
        cls, X, y = model_and_data
        model = cls(lambda_=lambda_)
        for _ in range(3):
            w = 0.5 * rng.standard_normal(X.shape[1])
            numeric = finite_difference_gradient(lambda v: model.loss(v, X, y), w)
            np.testing.assert_allclose(
                model.loss_grad(w, X, y), numeric,
                rtol=GRADIENT_CHECK.rtol, atol=GRADIENT_CHECK.atol,
            )

    @pytest.mark.parametrize("lambda_", LAMBDAS)
    def test_scipy_check_grad(self, model_and_data, lambda_):
        cls, X, y = model_and_data
        model = cls(lambda_=lambda_)
        w = np.array([0.2, -0.3, 0.4])
        err = check_grad(
            lambda v: model.loss(v, X, y),
            lambda v: model.loss_grad(v, X, y),
            w,
        )
        assert err < GRADIENT_CHECK.atol

    def test_gradient_vanishes_at_fitted_optimum(self, model_and_data):
        cls, X, y = model_and_data
        fitted = cls(lambda_=0.5).fit(X, y)
        grad = fitted.loss_grad(fitted.weights, X, y)
        assert np.max(np.abs(grad)) < 1e-4


# =====================================================================
# evaluate / loss / loss_grad consistency
# =====================================================================

class TestEvaluate:

    @pytest.mark.parametrize("lambda_", LAMBDAS)
    def test_evaluate_matches_separate_calls(self, model_and_data, rng, lambda_):
        cls, X, y = model_and_data
        model = cls(lambda_=lambda_)
        w = rng.standard_normal(X.shape[1])
        value, grad = model.evaluate(w, X, y)
        assert value == pytest.approx(model.loss(w, X, y), rel=EXACT.rtol)
        np.testing.assert_allclose(
            grad, model.loss_grad(w, X, y), rtol=EXACT.rtol, atol=EXACT.atol
        )

    def test_loss_is_finite_float(self, model_and_data, rng):
        cls, X, y = model_and_data
        value = cls(lambda_=1.0).loss(3.0 * rng.standard_normal(X.shape[1]), X, y)
        assert isinstance(value, float)
        assert np.isfinite(value)

    def test_repeated_calls_are_pure(self, model_and_data):
        cls, X, y = model_and_data
        model = cls(lambda_=0.3)
        w = np.array([0.1, 0.2, -0.1])
        g1 = model.loss_grad(w, X, y)
        model.loss(np.zeros(3), X, y)
        g2 = model.loss_grad(w, X, y)
        np.testing.assert_array_equal(g1, g2)

    def test_does_not_modify_weights(self, model_and_data):
        cls, X, y = model_and_data
        w = np.array([0.1, 0.2, -0.1])
        before = w.copy()
        cls(lambda_=1.0).evaluate(w, X, y)
        np.testing.assert_array_equal(w, before)

    def test_weight_length_mismatch(self, model_and_data):
        cls, X, y = model_and_data
        with pytest.raises(DimensionError, match="w has 2 entries"):
            cls().loss(np.zeros(2), X, y)

    def test_row_mismatch(self, model_and_data):
        cls, X, y = model_and_data
        with pytest.raises(DimensionError, match="Inconsistent lengths"):
            cls().loss_grad(np.zeros(3), X, y[:-1])


# =====================================================================
# Ridge penalty
# =====================================================================

class TestRidgePenalty:

    def test_penalty_term(self, model_and_data):
        cls, X, y = model_and_data
        w = np.array([3.0, 0.4, -0.2])
        diff = cls(lambda_=2.0).loss(w, X, y) - cls().loss(w, X, y)
        assert diff == pytest.approx(0.5 * 2.0 * (0.4 ** 2 + 0.2 ** 2), rel=1e-10)

    def test_intercept_not_penalized(self, model_and_data):
        cls, X, y = model_and_data
        w = np.array([1.5, 0.0, 0.0])
        assert cls(lambda_=100.0).loss(w, X, y) == pytest.approx(cls().loss(w, X, y))

    def test_intercept_gradient_independent_of_lambda(self, model_and_data):
        cls, X, y = model_and_data
        w = np.array([0.7, -0.4, 0.9])
        g0 = cls().loss_grad(w, X, y)
        g1 = cls(lambda_=5.0).loss_grad(w, X, y)
        assert g1[0] == pytest.approx(g0[0], rel=1e-12)
        np.testing.assert_allclose(g1[1:] - g0[1:], 5.0 * w[1:], rtol=1e-10)

    def test_ridge_shrinks_coefficients(self, model_and_data):
        cls, X, y = model_and_data
        loose = cls(lambda_=0.0).fit(X, y)
        tight = cls(lambda_=10.0).fit(X, y)
        assert np.linalg.norm(tight.coefficients) < np.linalg.norm(loose.coefficients)


# =====================================================================
# Construction and lifecycle
# =====================================================================

class TestLifecycle:

    @pytest.mark.parametrize("cls", MODELS)
    def test_default_lambda_is_zero(self, cls):
        model = cls()
        assert model.lambda_ == 0.0
        assert not model.is_fitted

    @pytest.mark.parametrize("cls", MODELS)
    def test_positional_lambda(self, cls):
        assert cls(1.5).lambda_ == 1.5

    @pytest.mark.parametrize("cls", MODELS)
    @pytest.mark.parametrize("bad", [-1e-9, -1.0, np.nan, np.inf])
    def test_bad_lambda_rejected(self, cls, bad):
        with pytest.raises(ValidationError, match="lambda_"):
            cls(lambda_=bad)

    def test_fit_returns_new_instance(self, model_and_data):
        cls, X, y = model_and_data
        model = cls(lambda_=0.1)
        fitted = model.fit(X, y)
        assert fitted is not model
        assert fitted.is_fitted
        assert not model.is_fitted
        assert fitted.lambda_ == model.lambda_

    def test_refit_replaces_weights(self, model_and_data):
        cls, X, y = model_and_data
        first = cls().fit(X, y)
        second = first.fit(X[:150], y[:150])
        assert second is not first
        assert not np.allclose(first.weights, second.weights)
        np.testing.assert_array_equal(first.weights, cls().fit(X, y).weights)

    def test_frozen(self, model_and_data):
        cls, X, y = model_and_data
        fitted = cls().fit(X, y)
        with pytest.raises(dataclasses.FrozenInstanceError):
            fitted.lambda_ = 3.0

    def test_weights_read_only(self, model_and_data):
        cls, X, y = model_and_data
        fitted = cls().fit(X, y)
        with pytest.raises(ValueError):
            fitted.weights[0] = 10.0

    def test_with_weights_copies(self):
        w = np.array([0.5, -1.0])
        model = LogisticRegression(lambda_=0.2).with_weights(w)
        w[0] = 99.0
        assert model.intercept == 0.5
        assert model.lambda_ == 0.2
        assert model.result is None

    def test_intercept_and_coefficients(self, model_and_data):
        cls, X, y = model_and_data
        fitted = cls().fit(X, y)
        assert fitted.intercept == fitted.weights[0]
        np.testing.assert_array_equal(fitted.coefficients, fitted.weights[1:])

    @pytest.mark.parametrize("cls", MODELS)
    @pytest.mark.parametrize("attr", ["weights", "intercept", "coefficients"])
    def test_unfitted_accessors(self, cls, attr):
        with pytest.raises(NotFittedError):
            getattr(cls(), attr)

    @pytest.mark.parametrize("cls", MODELS)
    def test_repr(self, cls):
        assert repr(cls(0.5)) == f"{cls.__name__}(lambda_=0.5, fitted=False)"


# =====================================================================
# Fit diagnostics and configuration
# =====================================================================

class TestFitDiagnostics:

    def test_result_attached(self, model_and_data):
        cls, X, y = model_and_data
        fitted = cls(lambda_=0.1).fit(X, y)
        assert fitted.result is not None
        assert fitted.result.params.converged
        assert fitted.result.info['method'] == 'L-BFGS-B'
        np.testing.assert_array_equal(fitted.result.params.x, fitted.weights)

    @pytest.mark.parametrize("method", ["BFGS", "CG"])
    def test_methods_agree(self, model_and_data, method):
        cls, X, y = model_and_data
        reference = cls(lambda_=0.1).fit(X, y)
        other = cls(lambda_=0.1).fit(X, y, method=method)
        np.testing.assert_allclose(other.weights, reference.weights, atol=1e-3)

    def test_max_iter_warning(self, model_and_data):
        cls, X, y = model_and_data
        with pytest.warns(RuntimeWarning, match="did not converge"):
            fitted = cls().fit(X, y, max_iter=1)
        assert fitted.result.has_warning("did not converge")

    def test_warning_points_at_caller(self, model_and_data):
        cls, X, y = model_and_data
        with pytest.warns(RuntimeWarning, match="did not converge") as record:
            cls().fit(X, y, max_iter=1)
        ours = [r for r in record if "did not converge" in str(r.message)]
        assert ours
        assert all(r.filename == __file__ for r in ours)


# =====================================================================
# Shared protocol
# =====================================================================

class TestProtocol:

    @pytest.mark.parametrize("cls", MODELS)
    def test_satisfies_linear_model(self, cls):
        assert isinstance(cls(), LinearModel)

    def test_no_shared_base_class(self):
        assert LogisticRegression.__mro__[1] is object
        assert PoissonRegression.__mro__[1] is object
