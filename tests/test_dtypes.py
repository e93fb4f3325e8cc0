"""Every estimator across the supported sample types."""

from __future__ import annotations

import math
from decimal import Decimal

import pytest

np = pytest.importorskip("numpy")

from sigstat import (  # noqa: E402
	absolute_gini_coefficient,
	absolute_median,
	first_four_moments,
	hoyer_sparsity,
	oracle_snr,
	shannon_entropy,
)

VALUES = [0, -3, 1, 4, -2]  # magnitudes 0, 3, 1, 4, 2

# sample dtype -> dtype of the result
REAL_TYPES = {
	"float32": "float32",
	"float64": "float64",
	"longdouble": "longdouble",
	"int8": "float64",
	"int32": "float64",
	"int64": "float64",
}
COMPLEX_TYPES = {
	"complex64": "float32",
	"complex128": "float64",
}
ALL_TYPES = sorted(REAL_TYPES) + sorted(COMPLEX_TYPES) + ["decimal"]


def _samples(values, dtype):
	if dtype == "decimal":
		return [Decimal(v) for v in values]
	if dtype in COMPLEX_TYPES:
		# pure imaginary keeps the modulus exact
		return np.array([v * 1j for v in values], dtype=dtype)
	return np.array(values, dtype=dtype)


def _check_type(result, dtype):
	if dtype == "decimal":
		assert isinstance(result, Decimal)
	else:
		expected = {**REAL_TYPES, **COMPLEX_TYPES}[dtype]
		assert np.asarray(result).dtype == np.dtype(expected)


def _tolerance(dtype):
	return 1e-6 if dtype in ("float32", "complex64") else 1e-12


@pytest.mark.parametrize("dtype", ALL_TYPES)
def test_absolute_median_by_type(dtype):
	result = absolute_median(_samples(VALUES, dtype))
	assert result == 2
	_check_type(result, dtype)


@pytest.mark.parametrize("dtype", ALL_TYPES)
def test_hoyer_sparsity_by_type(dtype):
	n = len(VALUES)
	expected = (math.sqrt(n) - 10 / math.sqrt(30)) / (math.sqrt(n) - 1)
	result = hoyer_sparsity(_samples(VALUES, dtype))
	assert math.isclose(float(result), expected, rel_tol=_tolerance(dtype))
	_check_type(result, dtype)


@pytest.mark.parametrize("dtype", ALL_TYPES)
def test_gini_by_type(dtype):
	# sorted magnitudes 0..4: sum((2i - n - 1) x_i) = 20, n * sum(x) = 50
	result = absolute_gini_coefficient(_samples(VALUES, dtype))
	assert math.isclose(float(result), 0.4, rel_tol=_tolerance(dtype))
	_check_type(result, dtype)


@pytest.mark.parametrize("dtype", ALL_TYPES)
def test_oracle_snr_by_type(dtype):
	signal = _samples(VALUES, dtype)
	noise = _samples([1, -1, 1, -1, 1], dtype)
	result = oracle_snr(signal, noise)
	assert result == 6
	_check_type(result, dtype)


@pytest.mark.parametrize("dtype", sorted(REAL_TYPES) + ["decimal"])
def test_shannon_entropy_by_type(dtype):
	weights = [abs(v) for v in VALUES]
	expected = -sum(v * math.log(v) for v in weights if v)
	result = shannon_entropy(_samples(weights, dtype))
	assert math.isclose(float(result), expected, rel_tol=_tolerance(dtype))
	_check_type(result, dtype)


@pytest.mark.parametrize("dtype", sorted(REAL_TYPES) + ["decimal"])
def test_first_four_moments_by_type(dtype):
	mean, m2, m3, m4 = first_four_moments(_samples(VALUES, dtype))
	assert mean == 0
	assert m2 == 6
	assert m3 == 6
	assert math.isclose(float(m4), 70.8, rel_tol=_tolerance(dtype))
	_check_type(m4, dtype)


@pytest.mark.parametrize("dtype", sorted(COMPLEX_TYPES))
def test_complex_samples_refuse_real_only_statistics(dtype):
	with pytest.raises(TypeError):
		shannon_entropy(_samples(VALUES, dtype))
	with pytest.raises(TypeError):
		first_four_moments(_samples(VALUES, dtype))
