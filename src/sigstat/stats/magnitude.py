# src/sigstat/stats/magnitude.py
"""
Sample domains and the magnitude strategies the estimators are written against.

Every estimator works on a :class:`SampleKind`, resolved once per block from
the block's dtype. The kind knows how to turn raw samples into non-negative
magnitudes of its *real-counterpart* type and how to do the handful of scalar
operations (``sqrt``, ``log10``, ``ln``) in that type, so precision chosen by
the caller (``float32``, ``longdouble``, :class:`decimal.Decimal`) survives
every intermediate sum.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any

from ..imports import numpy as np  # type: ignore

__all__ = ["Domain", "SampleKind", "resolve_kind", "sqrt", "log10"]


class Domain(str, Enum):
	REAL = "real"
	INTEGER = "integer"
	COMPLEX = "complex"


def _to_decimal(value: Any) -> Decimal:
	if isinstance(value, Decimal):
		return value
	if isinstance(value, (int, np.integer)):
		return Decimal(int(value))
	return Decimal(repr(float(value)))


def sqrt(value: Any) -> Any:
	"""Square root of a real scalar in its own precision."""
	if isinstance(value, Decimal):
		return value.sqrt()
	return np.sqrt(value)


def log10(value: Any) -> Any:
	"""Base-10 logarithm of a positive real scalar in its own precision."""
	if isinstance(value, Decimal):
		return value.log10()
	return np.log10(value)


@dataclass(frozen=True)
class SampleKind:
	"""
	Magnitude strategy for one sample domain.

	:param domain: Real, integer or complex samples.
	:param dtype: Storage dtype of the sample blocks.
	:param real_dtype: Dtype of magnitudes and accumulators (``object`` for Decimal).
	:param exact: Arbitrary-precision samples (:class:`decimal.Decimal`).
	"""

	domain: Domain
	dtype: "np.dtype"
	real_dtype: "np.dtype"
	exact: bool = False

	def values(self, block: "np.ndarray") -> "np.ndarray":
		"""Raw samples promoted to the real-counterpart type."""
		if self.domain is Domain.COMPLEX:
			raise TypeError("Complex samples have no ordering; this statistic needs real values.")
		if self.exact:
			return np.array([_to_decimal(v) for v in block], dtype=object)
		if self.domain is Domain.INTEGER:
			return block.astype(self.real_dtype)
		return block

	def magnitudes(self, block: "np.ndarray") -> "np.ndarray":
		"""Absolute values (modulus for complex) as a new array."""
		if self.domain is Domain.COMPLEX:
			return np.abs(block).astype(self.real_dtype, copy=False)
		return np.abs(self.values(block))

	def squared_magnitudes(self, block: "np.ndarray") -> "np.ndarray":
		if self.domain is Domain.COMPLEX:
			re, im = block.real, block.imag
			return re * re + im * im
		x = self.values(block)
		return x * x

	def abs2(self, value: Any) -> Any:
		"""Squared modulus of a scalar of this kind."""
		if self.domain is Domain.COMPLEX:
			return value.real * value.real + value.imag * value.imag
		return value * value

	def real(self, value: Any) -> Any:
		"""Cast a Python or numpy number to the real-counterpart scalar type."""
		if self.exact:
			return _to_decimal(value)
		return self.real_dtype.type(value)

	def total(self, array: "np.ndarray") -> Any:
		"""Sum accumulated in the real-counterpart precision."""
		if self.exact:
			return sum(array.tolist(), Decimal(0))
		return np.sum(array, dtype=self.real_dtype)

	def mean(self, array: "np.ndarray") -> Any:
		"""Arithmetic mean; complex arrays keep their complex precision."""
		if self.exact:
			return sum(array.tolist(), Decimal(0)) / Decimal(array.size)
		return np.mean(array, dtype=array.dtype)

	def ln(self, array: "np.ndarray") -> "np.ndarray":
		"""Elementwise natural logarithm of strictly positive reals."""
		if self.exact:
			return np.array([v.ln() for v in array], dtype=object)
		return np.log(array)

	def sqrt(self, value: Any) -> Any:
		return sqrt(value)

	def log10(self, value: Any) -> Any:
		return log10(value)

	@property
	def inf(self) -> Any:
		return Decimal("Infinity") if self.exact else self.real_dtype.type(np.inf)

	def promote(self, other: "SampleKind") -> "SampleKind":
		"""
		Common real kind for a statistic that combines two inputs.

		:raises TypeError: When mixing Decimal with fixed-precision samples.
		"""
		if self.exact or other.exact:
			if self.exact and other.exact:
				return _exact_kind()
			raise TypeError("Cannot combine Decimal samples with fixed-precision samples.")
		rt = np.result_type(self.real_dtype, other.real_dtype)
		return SampleKind(Domain.REAL, rt, rt)

	def widen(self, other: "SampleKind") -> "SampleKind":
		"""
		Smallest kind that holds the samples of both *self* and *other*.

		Block-wise walks call this when a later block resolves to a different
		kind: integers widen to floats, complex or Decimal, floats widen to a
		longer float or to complex of the same precision.

		:raises TypeError: When Decimal samples meet floating or complex ones.
		"""
		if self == other:
			return self
		if self.exact or other.exact:
			narrow = other if self.exact else self
			if narrow.exact or narrow.domain is Domain.INTEGER:
				return _exact_kind()
			raise TypeError("Decimal samples only combine with integers, not with floating or complex samples.")
		real_dtype = np.result_type(self.real_dtype, other.real_dtype)
		domains = {self.domain, other.domain}
		if Domain.COMPLEX in domains:
			return SampleKind(Domain.COMPLEX, np.result_type(real_dtype, np.complex64), real_dtype)
		if Domain.REAL in domains:
			return SampleKind(Domain.REAL, real_dtype, real_dtype)
		return SampleKind(Domain.INTEGER, _integer_storage(self.dtype, other.dtype), real_dtype)

	def carry(self, value: Any) -> Any:
		"""
		Re-express a partial result reduced under a narrower kind.

		Fixed-precision scalars are left to numpy promotion. Only Decimal
		accumulators need converting, and ``Decimal(float)`` keeps every bit.
		"""
		if value is None or not self.exact or isinstance(value, Decimal):
			return value
		if isinstance(value, (int, np.integer)):
			return Decimal(int(value))
		return Decimal(float(value))

	def cast(self, magnitudes: "np.ndarray") -> "np.ndarray":
		"""Magnitudes computed under a narrower kind, converted to this kind's real type."""
		if self.exact:
			return np.array([self.carry(v) for v in magnitudes], dtype=object)
		return magnitudes.astype(self.real_dtype, copy=False)


_FLOAT64 = "float64"


def _exact_kind() -> SampleKind:
	return SampleKind(Domain.REAL, np.dtype(object), np.dtype(object), exact=True)


def _integer_storage(a: "np.dtype", b: "np.dtype") -> "np.dtype":
	# int64 with uint64 has no common integer dtype; Python ints hold both
	if a == b:
		return a
	if a.kind == "O" or b.kind == "O":
		return np.dtype(object)
	common = np.promote_types(a, b)
	return common if common.kind in "iub" else np.dtype(object)


def _resolve_object_kind(block: "np.ndarray") -> SampleKind:
	has_decimal = False
	for value in block:
		if isinstance(value, Decimal):
			if value.is_nan():
				raise ValueError("NaN samples are not supported.")
			has_decimal = True
		elif not isinstance(value, (int, np.integer)):
			raise TypeError(
				f"Unsupported sample type {type(value).__name__!r}; "
				"object arrays may only hold Decimal and int values."
			)
	if has_decimal:
		return _exact_kind()
	return SampleKind(Domain.INTEGER, np.dtype(object), np.dtype(_FLOAT64))


def resolve_kind(block: "np.ndarray") -> SampleKind:
	"""
	Pick the magnitude strategy for a 1-D sample block.

	* floating -> REAL in the same precision
	* complex -> COMPLEX with magnitudes in the matching real precision
	* integer/bool -> INTEGER with float64 magnitudes, exact up to ``2**53``;
	  larger int64 or Python-int magnitudes are rounded to the nearest double
	* object arrays of Decimal (ints allowed alongside) -> exact REAL
	* object arrays of int -> INTEGER

	:raises TypeError: For any other dtype.
	"""
	dtype = block.dtype
	code = dtype.kind
	if code == "f":
		return SampleKind(Domain.REAL, dtype, dtype)
	if code == "c":
		return SampleKind(Domain.COMPLEX, dtype, np.dtype(np.finfo(dtype).dtype))
	if code in "iub":
		return SampleKind(Domain.INTEGER, dtype, np.dtype(_FLOAT64))
	if code == "O":
		return _resolve_object_kind(block)
	raise TypeError(f"Unsupported sample dtype: {dtype!r}")
