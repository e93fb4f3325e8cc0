# src/sigstat/stats/moments.py
"""
One-pass central moments, folded block by block.

Each block is reduced with vectorised numpy sums around its own mean and then
merged into the running totals with the pairwise update of Chan et al.
(extended to third and fourth moments by Pebay, SAND2008-6212), which keeps
the result stable when the mean is large compared with the spread.
"""

from __future__ import annotations

from typing import Any, Optional, Tuple

from ..logutil import get_logger
from .coerce import Column, SignalLike, iter_blocks
from .magnitude import Domain, SampleKind, resolve_kind

from ..imports import numpy as np  # type: ignore

LOG = get_logger(__name__)

__all__ = ["MomentAccumulator", "first_four_moments"]


class MomentAccumulator:
	"""
	Running count, mean and central sums ``M2``, ``M3``, ``M4`` of a signal.

	The accumulator is transient: build one per statistic, feed it the blocks
	of one signal and read the moments back. ``order=2`` tracks only mean and
	``M2`` and also accepts complex samples (``M2`` is then ``sum |x - mean|^2``).

	>>> acc = MomentAccumulator()
	>>> for block in (np.array([1.0, 2.0]), np.array([3.0, 4.0])):
	...     acc.update(block)
	>>> float(acc.mean), float(acc.m2)
	(2.5, 1.25)
	"""

	def __init__(self, *, order: int = 4) -> None:
		if order not in (2, 4):
			raise ValueError(f"order must be 2 or 4, got {order}")
		self.order = order
		self.kind: Optional[SampleKind] = None
		self.count = 0
		self._mean: Any = None
		self._m2: Any = None
		self._m3: Any = None
		self._m4: Any = None

	def __repr__(self) -> str:
		return f"{self.__class__.__name__}(order={self.order}, count={self.count})"

	# --- Update ---
	def update(self, block: "np.ndarray", *, kind: Optional[SampleKind] = None) -> "MomentAccumulator":
		"""
		Fold one block of samples into the running moments.

		A block of a wider kind than the ones before it (floats after
		integers, Decimal after integers) widens the accumulator; a narrower
		block is converted to the accumulator's kind first.

		:param block: 1D array of samples.
		:param kind: Magnitude strategy of *block*; resolved from its dtype when omitted.
		:return: self.
		:raises TypeError: For complex samples when fourth moments are tracked,
						   or Decimal mixed with floating samples.
		"""
		block = np.asarray(block)
		if block.size == 0:
			return self
		kind = kind if kind is not None else resolve_kind(block)
		if kind.domain is Domain.COMPLEX and self.order == 4:
			raise TypeError("Fourth moments are only defined here for real samples.")
		self._widen(kind)
		if kind != self.kind:
			kind = self.kind
			block = block.astype(kind.dtype)

		x = block if kind.domain is Domain.COMPLEX else kind.values(block)
		mean = kind.mean(x)
		dev = x - mean
		d2 = kind.squared_magnitudes(dev) if kind.domain is Domain.COMPLEX else dev * dev
		m2 = kind.total(d2)
		m3 = m4 = None
		if self.order == 4:
			m3 = kind.total(d2 * dev)
			m4 = kind.total(d2 * d2)
		self._combine(x.size, mean, m2, m3, m4)
		return self

	def merge(self, other: "MomentAccumulator") -> "MomentAccumulator":
		"""Fold the state of another accumulator (same order) into this one."""
		if other.order != self.order:
			raise ValueError("Cannot merge accumulators of different order.")
		if other.count == 0:
			return self
		self._widen(other.kind)
		carry = self.kind.carry
		self._combine(other.count, carry(other._mean), carry(other._m2), carry(other._m3), carry(other._m4))
		return self

	def _widen(self, kind: SampleKind) -> None:
		if self.kind is None:
			self.kind = kind
			return
		wide = self.kind.widen(kind)
		if wide != self.kind:
			self._mean, self._m2, self._m3, self._m4 = (
				wide.carry(v) for v in (self._mean, self._m2, self._m3, self._m4)
			)
			self.kind = wide

	def _combine(self, nb: int, mean_b: Any, m2_b: Any, m3_b: Any, m4_b: Any) -> None:
		if self.count == 0:
			self.count, self._mean, self._m2, self._m3, self._m4 = nb, mean_b, m2_b, m3_b, m4_b
			return

		kind = self.kind
		na = self.count
		fa, fb, fn = kind.real(na), kind.real(nb), kind.real(na + nb)
		delta = mean_b - self._mean
		delta2 = kind.abs2(delta)

		mean = self._mean + delta * fb / fn
		m2 = self._m2 + m2_b + delta2 * fa * fb / fn
		if self.order == 4:
			m3 = (self._m3 + m3_b
				  + delta * delta2 * fa * fb * (fa - fb) / (fn * fn)
				  + 3 * delta * (fa * m2_b - fb * self._m2) / fn)
			m4 = (self._m4 + m4_b
				  + delta2 * delta2 * fa * fb * (fa * fa - fa * fb + fb * fb) / (fn * fn * fn)
				  + 6 * delta2 * (fa * fa * m2_b + fb * fb * self._m2) / (fn * fn)
				  + 4 * delta * (fa * m3_b - fb * self._m3) / fn)
			self._m3, self._m4 = m3, m4

		self.count = na + nb
		self._mean, self._m2 = mean, m2

	# --- Results ---
	def _require(self) -> SampleKind:
		if self.count == 0:
			raise ValueError("No samples accumulated.")
		return self.kind  # type: ignore[return-value]

	def _require_fourth(self) -> SampleKind:
		kind = self._require()
		if self.order != 4:
			raise ValueError("This accumulator only tracks moments up to order 2.")
		return kind

	@property
	def mean(self) -> Any:
		self._require()
		return self._mean

	@property
	def m2(self) -> Any:
		"""Population second central moment (biased variance)."""
		kind = self._require()
		return self._m2 / kind.real(self.count)

	variance = m2

	@property
	def m3(self) -> Any:
		kind = self._require_fourth()
		return self._m3 / kind.real(self.count)

	@property
	def m4(self) -> Any:
		kind = self._require_fourth()
		return self._m4 / kind.real(self.count)

	@property
	def skewness(self) -> Any:
		kind = self._require_fourth()
		m2 = self.m2
		return self.m3 / (m2 * kind.sqrt(m2))

	@property
	def kurtosis(self) -> Any:
		"""Non-excess kurtosis ``m4 / m2**2`` (3 for Gaussian samples)."""
		self._require_fourth()
		m2 = self.m2
		return self.m4 / (m2 * m2)


def first_four_moments(data: SignalLike, *, column: Column = None) -> Tuple[Any, Any, Any, Any]:
	"""
	Mean and population central moments of order 2, 3 and 4 in one pass.

	:param data: Non-empty sequence of real, integer or Decimal samples.
	:param column: Column selector when *data* is a DataFrame.
	:return: ``(mean, m2, m3, m4)`` in the real-counterpart type.
	:raises TypeError: For complex samples.
	"""
	acc = MomentAccumulator()
	for kind, block in iter_blocks(data, column=column):
		acc.update(block, kind=kind)
	LOG.debug("first_four_moments: n=%d", acc.count)
	return acc.mean, acc.m2, acc.m3, acc.m4
