# src/sigstat/stats/snr.py

from __future__ import annotations

from itertools import zip_longest
from typing import Any, Iterator, Tuple

from ..logutil import get_logger
from .coerce import SignalLike, iter_blocks
from .magnitude import SampleKind, log10
from .moments import MomentAccumulator

from ..imports import numpy as np  # type: ignore

LOG = get_logger(__name__)

__all__ = [
	"oracle_snr", "oracle_snr_db",
	"mean_invariant_oracle_snr", "mean_invariant_oracle_snr_db",
]

BlockPair = Tuple[SampleKind, "np.ndarray", SampleKind, "np.ndarray"]


def _lockstep(signal: SignalLike, noise: SignalLike) -> Iterator[BlockPair]:
	"""Walk two equally long signals block by block, each exactly once."""
	for left, right in zip_longest(iter_blocks(signal), iter_blocks(noise)):
		if left is None or right is None or left[1].size != right[1].size:
			raise ValueError("Signal and noise must have the same length.")
		yield left[0], left[1], right[0], right[1]


def _ratio(signal_kind: SampleKind, signal_power: Any, noise_kind: SampleKind, noise_power: Any) -> Any:
	kind = signal_kind.promote(noise_kind)
	if noise_power == 0:
		raise ValueError("Noise power is zero; the signal-to-noise ratio is undefined.")
	return kind.real(signal_power) / kind.real(noise_power)


def _db(ratio: Any) -> Any:
	return 10 * log10(ratio)


def oracle_snr(signal: SignalLike, noise: SignalLike) -> Any:
	"""
	Signal-to-noise power ratio with both components known.

	``sum |signal_i|**2 / sum |noise_i|**2``; integers are promoted to
	``float64`` and complex samples use their squared modulus.

	:param signal: Clean signal.
	:param noise: Noise realisation of the same length.
	:return: Linear power ratio in the wider of the two real types.
	:raises ValueError: On length mismatch, empty input or zero noise power.
	"""
	ps = pn = None
	sk = nk = None
	for sk, sblock, nk, nblock in _lockstep(signal, noise):
		s = sk.total(sk.squared_magnitudes(sblock))
		w = nk.total(nk.squared_magnitudes(nblock))
		ps = s if ps is None else sk.carry(ps) + s
		pn = w if pn is None else nk.carry(pn) + w
	return _ratio(sk, ps, nk, pn)


def oracle_snr_db(signal: SignalLike, noise: SignalLike) -> Any:
	"""``10 * log10(oracle_snr(signal, noise))``."""
	return _db(oracle_snr(signal, noise))


def mean_invariant_oracle_snr(signal: SignalLike, noise: SignalLike) -> Any:
	"""
	Oracle SNR after removing each component's own mean.

	``sum |s_i - mean(s)|**2 / sum |w_i - mean(w)|**2``. A DC offset in either
	component does not count as power, which matches what a blind moment
	estimator can see. Each input is still consumed in a single pass.

	:raises ValueError: On length mismatch, empty input or constant noise.
	"""
	sacc = MomentAccumulator(order=2)
	nacc = MomentAccumulator(order=2)
	for sk, sblock, nk, nblock in _lockstep(signal, noise):
		sacc.update(sblock, kind=sk)
		nacc.update(nblock, kind=nk)
	n = sacc.count
	LOG.debug("mean_invariant_oracle_snr: n=%d", n)
	return _ratio(sacc.kind, sacc.m2, nacc.kind, nacc.m2)


def mean_invariant_oracle_snr_db(signal: SignalLike, noise: SignalLike) -> Any:
	"""``10 * log10(mean_invariant_oracle_snr(signal, noise))``."""
	return _db(mean_invariant_oracle_snr(signal, noise))
