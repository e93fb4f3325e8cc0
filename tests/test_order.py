"""Median magnitude and Gini coefficients."""

from __future__ import annotations

import math
from decimal import Decimal

import pytest

np = pytest.importorskip("numpy")

from sigstat import (  # noqa: E402
	absolute_gini_coefficient,
	absolute_median,
	override_settings,
	sample_absolute_gini_coefficient,
)


def test_absolute_median_odd_and_even():
	assert absolute_median([-1, 2, -3, 4, -5, 6, -7]) == 4.0
	assert absolute_median([1, -2, 3, -4]) == 2.5
	assert absolute_median([-9]) == 9.0


def test_absolute_median_does_not_reorder_input():
	arr = np.array([5.0, -1.0, 3.0, -8.0, 0.5])
	before = arr.copy()
	absolute_median(arr)
	np.testing.assert_array_equal(arr, before)


def test_absolute_median_complex_keeps_real_precision():
	data = np.array([3 + 4j, 0, -5j], dtype=np.complex64)
	result = absolute_median(data)
	assert result == 5.0
	assert result.dtype == np.float32


def test_absolute_median_integer_returns_float64():
	result = absolute_median(np.array([-2, 4, 7], dtype=np.int16))
	assert result == 4.0
	assert result.dtype == np.float64


def test_absolute_median_iterator_matches_list():
	data = [0.25, -7.5, 3.0, -1.0, 2.5, 9.0]
	with override_settings(block_size=4):
		assert absolute_median(iter(data)) == absolute_median(data)


def test_absolute_median_decimal():
	data = [Decimal("-1"), Decimal("4"), Decimal("7")]
	result = absolute_median(data)
	assert isinstance(result, Decimal)
	assert result == Decimal(4)

	even = absolute_median([Decimal("0.1"), Decimal("-0.2")])
	assert even == Decimal("0.15")


def test_absolute_median_empty_raises():
	with pytest.raises(ValueError):
		absolute_median([])


def test_gini_edge_values():
	assert absolute_gini_coefficient([1, -1, 1, -1]) == 0.0
	assert absolute_gini_coefficient([0, 0, 0]) == 0.0
	assert math.isclose(absolute_gini_coefficient([0, 0, 0, -1]), 0.75)
	assert math.isclose(sample_absolute_gini_coefficient([-1, 0, 0]), 1.0)


def test_gini_is_clone_invariant():
	v = [1.0, -2.0, 3.0, 7.0]
	assert math.isclose(absolute_gini_coefficient(v), absolute_gini_coefficient(v + v))


def test_gini_matches_mean_absolute_difference():
	rng = np.random.default_rng(7)
	x = rng.normal(size=200)
	mags = np.abs(x)
	expected = np.abs(mags[:, None] - mags[None, :]).sum() / (2 * mags.size * mags.sum())
	assert math.isclose(absolute_gini_coefficient(x), expected, rel_tol=1e-12)

	n = mags.size
	assert math.isclose(
		sample_absolute_gini_coefficient(x), expected * n / (n - 1), rel_tol=1e-12
	)


def test_gini_decimal_is_exact():
	result = absolute_gini_coefficient([Decimal("0"), Decimal("0"), Decimal("0"), Decimal("-1")])
	assert result == Decimal("0.75")


def test_sample_gini_needs_two_samples():
	with pytest.raises(ValueError):
		sample_absolute_gini_coefficient([1.0])


@pytest.mark.parametrize("seed", range(20))
def test_absolute_median_ignores_order(seed):
	rng = np.random.default_rng(seed)
	data = [-1, 2, -3, 4, -5, 6, -7]
	shuffled = rng.permutation(data).tolist()
	assert absolute_median(shuffled) == 4.0
	assert absolute_median(iter(shuffled)) == 4.0

	x = rng.normal(size=40)
	assert absolute_median(rng.permutation(x)) == absolute_median(x)


def test_absolute_median_of_large_integers():
	# float64 magnitudes are exact up to 2**53
	result = absolute_median(np.array([2 ** 53, -(2 ** 53 - 2), 5], dtype=np.int64))
	assert result == 2 ** 53 - 2
	assert result.dtype == np.float64

	big = 2 ** 60
	exact = absolute_median([Decimal(big + 1), big + 3, -(big + 5)])
	assert exact == Decimal(big + 3)
