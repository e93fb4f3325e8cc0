# src/sigstat/stats/sparsity.py

from __future__ import annotations

from typing import Any

from ..logutil import get_logger
from .coerce import Column, SignalLike, iter_blocks

LOG = get_logger(__name__)

__all__ = ["hoyer_sparsity"]


def hoyer_sparsity(data: SignalLike, *, column: Column = None) -> Any:
	"""
	Hoyer sparsity of the magnitudes of *data*.

	.. math::

		H = \\frac{\\sqrt{n} - \\lVert x \\rVert_1 / \\lVert x \\rVert_2}{\\sqrt{n} - 1}

	``H`` is 1 when exactly one sample is nonzero and 0 when all magnitudes are
	equal. The L1 norm and the squared L2 norm are accumulated in a single pass
	in the real-counterpart precision, so forward-only iterators are fine.

	:param data: Sequence of at least two samples, not all zero.
	:param column: Column selector when *data* is a DataFrame.
	:return: Sparsity in [0, 1]; ``float64`` for integer input, the matching
			 real type for complex input, Decimal for Decimal input.
	:raises ValueError: With fewer than two samples or an all-zero signal.
	"""
	n = 0
	l1 = l2sq = None
	kind = None
	for kind, block in iter_blocks(data, column=column):
		s1 = kind.total(kind.magnitudes(block))
		s2 = kind.total(kind.squared_magnitudes(block))
		l1 = s1 if l1 is None else kind.carry(l1) + s1
		l2sq = s2 if l2sq is None else kind.carry(l2sq) + s2
		n += block.size

	if n < 2:
		raise ValueError(f"Hoyer sparsity needs at least two samples, got {n}.")
	if l2sq == 0:
		raise ValueError("Hoyer sparsity is undefined for an all-zero signal.")

	root_n = kind.sqrt(kind.real(n))
	one = kind.real(1)
	h = (root_n - l1 / kind.sqrt(l2sq)) / (root_n - one)
	LOG.debug("hoyer_sparsity: n=%d l1=%s l2^2=%s -> %s", n, l1, l2sq, h)
	# clip rounding residue to [0, 1]
	return min(max(h, kind.real(0)), one)
