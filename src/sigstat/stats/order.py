# src/sigstat/stats/order.py

from __future__ import annotations

from typing import Any, Tuple

from ..logutil import get_logger
from .coerce import Column, SignalLike, materialize_magnitudes
from .magnitude import SampleKind

from ..imports import numpy as np  # type: ignore

LOG = get_logger(__name__)

__all__ = ["absolute_median", "absolute_gini_coefficient", "sample_absolute_gini_coefficient"]


def absolute_median(data: SignalLike, *, column: Column = None) -> Any:
	"""
	Median of the magnitudes of *data*.

	Magnitudes are copied into an owned buffer and only the middle rank(s) are
	selected (``ndarray.partition``), so the input is never reordered. For an
	even count the two middle magnitudes are averaged. Decimal inputs are
	sorted instead, numpy has no selection routine for object arrays.

	:param data: Non-empty sequence of real, integer, complex or Decimal samples.
	:param column: Column selector when *data* is a DataFrame.
	:return: Median magnitude in the real-counterpart type of the samples
			 (``float32`` for ``complex64``, ``float64`` for integers, ...).
			 Integer magnitudes above ``2**53`` are rounded to ``float64``; pass
			 them as :class:`decimal.Decimal` (plain ints may be mixed in) for an
			 exact median.
	:raises ValueError: On empty input.
	"""
	kind, mags = materialize_magnitudes(data, column=column)
	n = mags.size
	mid = n // 2
	if n % 2:
		if kind.exact:
			mags.sort()
		else:
			mags.partition(mid)
		return mags[mid]

	if kind.exact:
		mags.sort()
	else:
		mags.partition((mid - 1, mid))
	return (mags[mid - 1] + mags[mid]) / kind.real(2)


def _sorted_magnitudes(data: SignalLike, column: Column) -> Tuple[SampleKind, "np.ndarray"]:
	kind, mags = materialize_magnitudes(data, column=column)
	mags.sort()
	return kind, mags


def _gini(kind: SampleKind, x: "np.ndarray", denominator_count: int) -> Any:
	"""``sum((2i - n - 1) x_i) / (denominator_count * sum(x))`` over sorted ``x``."""
	n = x.size
	total = kind.total(x)
	if total == 0:
		# every magnitude is zero, hence all equal
		return kind.real(0)
	weights = 2 * np.arange(1, n + 1) - n - 1
	weights = weights.astype(object) if kind.exact else weights.astype(kind.real_dtype)
	numerator = kind.total(weights * x)
	return numerator / (kind.real(denominator_count) * total)


def absolute_gini_coefficient(data: SignalLike, *, column: Column = None) -> Any:
	"""
	Gini coefficient of the magnitude distribution of *data*.

	With sorted magnitudes ``x_1 <= ... <= x_n``::

		G = sum((2i - n - 1) * x_i) / (n * sum(x_i))

	``G`` is 0 when all magnitudes are equal (including the all-zero signal),
	tends to 1 as the mass concentrates in one sample (a one-hot vector scores
	``(n - 1) / n``) and is invariant under cloning: ``G(v) == G(v ++ v)``.

	:param data: Non-empty sequence of samples; complex samples contribute their modulus.
	:param column: Column selector when *data* is a DataFrame.
	:return: Coefficient in [0, 1], in the real-counterpart type.
	"""
	kind, x = _sorted_magnitudes(data, column)
	return _gini(kind, x, x.size)


def sample_absolute_gini_coefficient(data: SignalLike, *, column: Column = None) -> Any:
	"""
	Bias-corrected Gini coefficient, ``n / (n - 1)`` times :func:`absolute_gini_coefficient`.

	Reaches exactly 1 for a one-hot vector of any length (``{-1, 0, 0} -> 1``)
	at the price of clone invariance.

	:raises ValueError: When fewer than two samples are given.
	"""
	kind, x = _sorted_magnitudes(data, column)
	if x.size < 2:
		raise ValueError("The sample Gini coefficient needs at least two samples.")
	return _gini(kind, x, x.size - 1)
