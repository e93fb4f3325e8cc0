"""Blind M2M4 SNR estimation."""

from __future__ import annotations

import math
from decimal import Decimal

import pytest

np = pytest.importorskip("numpy")

from sigstat import (  # noqa: E402
	NoEstimateError,
	SnrEstimate,
	first_four_moments,
	m2m4_snr_estimator,
	m2m4_snr_estimator_db,
	mean_invariant_oracle_snr_db,
	override_settings,
)
from sigstat.stats import quadratic_roots  # noqa: E402

N = 500_000


@pytest.fixture(scope="module")
def sinusoid():
	k = np.arange(N)
	return 5.0 * np.sin(2 * np.pi * 100 * k / N)


@pytest.fixture(scope="module")
def rng():
	return np.random.default_rng(18)


def test_quadratic_roots():
	assert quadratic_roots(1.0, -3.0, 2.0) == (1.0, 2.0)
	assert quadratic_roots(1.0, 0.0, 1.0) is None
	assert quadratic_roots(0.0, 2.0, -4.0) == (2.0, 2.0)
	assert quadratic_roots(0.0, 0.0, 1.0) is None

	small, large = quadratic_roots(1.0, -1e8, 1.0)
	assert math.isclose(small, 1e-8, rel_tol=1e-12)
	assert math.isclose(large, 1e8, rel_tol=1e-12)


def test_m2m4_sinusoid_in_gaussian_noise(sinusoid, rng):
	noise = rng.normal(size=N)
	estimate = m2m4_snr_estimator(sinusoid + noise)

	assert estimate.available
	expected = mean_invariant_oracle_snr_db(sinusoid, noise)
	assert abs(estimate.db - expected) < 0.2
	assert m2m4_snr_estimator_db(sinusoid + noise) == estimate.db


def test_m2m4_sinusoid_in_uniform_noise(sinusoid, rng):
	noise = rng.uniform(-1.0, 1.0, size=N)
	x = sinusoid + noise
	estimate = m2m4_snr_estimator(x, 1.5, 1.8)

	assert estimate.available
	assert abs(estimate.db - mean_invariant_oracle_snr_db(sinusoid, noise)) < 0.2

	with override_settings(noise_kurtosis=1.8):
		assert m2m4_snr_estimator(x).ratio == estimate.ratio


def test_m2m4_root_satisfies_moment_equations(rng):
	n = 20_000
	k = np.arange(n)
	x = 3.0 * np.sin(2 * np.pi * 50 * k / n) + rng.normal(scale=0.8, size=n)
	ka, kw = 1.5, 3.0

	estimate = m2m4_snr_estimator(x, ka, kw)
	assert estimate.available

	_, m2, _, m4 = first_four_moments(x)
	s = estimate.ratio * m2 / (1 + estimate.ratio)
	w = m2 - s
	assert s > 0 and w > 0
	assert math.isclose(ka * s * s + 6 * s * w + kw * w * w, m4, rel_tol=1e-9)


def test_m2m4_iterator_matches_array(rng):
	x = rng.normal(size=3000) + np.sign(rng.normal(size=3000)) * 2.0
	with override_settings(block_size=256):
		assert m2m4_snr_estimator(iter(x.tolist()), 1.0).ratio == m2m4_snr_estimator(x.tolist(), 1.0).ratio


def test_m2m4_without_admissible_root():
	data = [0] * 9 + [10]
	estimate = m2m4_snr_estimator(data)

	assert not estimate.available
	assert not estimate
	assert estimate.db is None
	with pytest.raises(NoEstimateError):
		estimate.require()
	with pytest.raises(NoEstimateError):
		m2m4_snr_estimator_db(data)


def test_m2m4_constant_input_is_noise_free():
	estimate = m2m4_snr_estimator([2.0, 2.0, 2.0])
	assert estimate.available
	assert math.isinf(estimate.ratio)
	assert math.isinf(estimate.db)


def test_m2m4_argument_checks():
	with pytest.raises(ValueError):
		m2m4_snr_estimator([1.0, 2.0], 0.0, 3.0)
	with pytest.raises(ValueError):
		m2m4_snr_estimator([1.0, 2.0], 1.5, -1.0)
	with pytest.raises(ValueError):
		m2m4_snr_estimator([])
	with pytest.raises(TypeError):
		m2m4_snr_estimator([1j, 2.0, -1j])


def test_m2m4_decimal_tracks_float_result(rng):
	n = 20_000
	k = np.arange(n)
	x = 3.0 * np.sin(2 * np.pi * 50 * k / n) + rng.normal(scale=0.8, size=n)

	as_float = m2m4_snr_estimator(x)
	as_decimal = m2m4_snr_estimator([Decimal(repr(v)) for v in x.tolist()])

	assert as_float.available
	assert isinstance(as_decimal.ratio, Decimal)
	assert math.isclose(float(as_decimal.ratio), float(as_float.ratio), rel_tol=1e-9)


def test_snr_estimate_value_object():
	estimate = SnrEstimate(100.0)
	assert estimate
	assert math.isclose(estimate.db, 20.0)
	assert math.isclose(estimate.require(), 20.0)


def test_m2m4_takes_the_larger_signal_power():
	# M2 = 1 and M4 = 1.25 with both kurtoses 1 leave S**2 - S + 1/16 = 0,
	# whose roots (1 +- sqrt(3/4)) / 2 both lie in (0, M2)
	a, b = math.sqrt(0.5), math.sqrt(1.5)
	estimate = m2m4_snr_estimator([a, -a, b, -b], 1.0, 1.0)

	root = math.sqrt(0.75)
	assert math.isclose(estimate.ratio, (1 + root) / (1 - root), rel_tol=1e-9)
