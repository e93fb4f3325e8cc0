# src/sigstat/stats/entropy.py

from __future__ import annotations

from typing import Any

from .coerce import Column, SignalLike, iter_blocks

__all__ = ["shannon_entropy"]


def shannon_entropy(data: SignalLike, *, column: Column = None) -> Any:
	"""
	Shannon entropy ``sum(-v * ln(v))`` of non-negative weights.

	The values are used as given: they are not normalised to a probability
	mass function, so ``n`` copies of ``0.5`` give ``n * ln(2) / 2``. Normalise
	upstream when a bounded entropy is wanted. Exact zeros contribute 0
	(the limit of ``v * ln(v)``). Single pass; iterators are fine.

	:param data: Non-empty sequence of real, integer or Decimal weights.
	:param column: Column selector when *data* is a DataFrame.
	:return: Entropy in nats, in the real-counterpart type of the weights.
	:raises ValueError: When any weight is negative.
	:raises TypeError: For complex samples.
	"""
	h = None
	for kind, block in iter_blocks(data, column=column):
		v = kind.values(block)
		if (v < 0).any():
			raise ValueError("Shannon entropy weights must be non-negative.")
		positive = v[v > 0]
		h = kind.real(0) if h is None else kind.carry(h)
		h = h - kind.total(positive * kind.ln(positive))
	return h
