# src/sigstat/stats/m2m4.py
"""
Blind SNR estimation from second and fourth moments (M2M4).

Only the noisy mixture ``x = s + w`` is observed. For independent zero-mean
signal and noise with powers ``S`` and ``N`` and kurtoses ``ka`` and ``kw``::

	M2 = S + N
	M4 = ka * S**2 + 6 * S * N + kw * N**2

Eliminating ``N = M2 - S`` gives a quadratic in ``S``::

	(ka + kw - 6) S**2 + 2 M2 (3 - kw) S + kw M2**2 - M4 = 0

A root is usable when both powers come out positive, i.e. ``0 < S < M2``.
When both roots qualify the larger signal power is taken. Solving for ``N``
instead gives the roots ``M2 - S`` and no new candidates. Short records or a
kurtosis guess far from the truth can leave the quadratic without a usable
root; the estimator then reports that no estimate exists instead of returning
a meaningless number.

Reference: D. R. Pauluzzi and N. C. Beaulieu, "A comparison of SNR estimation
techniques for the AWGN channel", IEEE Trans. Commun. 48(10), 2000.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Tuple

from ..config.settings import get_settings
from ..logutil import get_logger
from .coerce import Column, SignalLike, iter_blocks
from .magnitude import log10, sqrt
from .moments import MomentAccumulator

LOG = get_logger(__name__)

__all__ = [
	"NoEstimateError", "SnrEstimate",
	"quadratic_roots", "m2m4_snr_estimator", "m2m4_snr_estimator_db",
]


class NoEstimateError(ArithmeticError):
	"""The moment equations have no root with positive signal and noise power."""


@dataclass(frozen=True)
class SnrEstimate:
	"""
	Outcome of a blind SNR estimate.

	:param ratio: Linear signal-to-noise power ratio, or ``None`` when the
				  moment equations gave no admissible root. Infinity means the
				  input was constant (no noise power at all).
	"""

	ratio: Optional[Any] = None

	@property
	def available(self) -> bool:
		return self.ratio is not None

	@property
	def db(self) -> Optional[Any]:
		"""``10 * log10(ratio)`` or ``None``."""
		if self.ratio is None:
			return None
		return 10 * log10(self.ratio)

	def require(self) -> Any:
		"""Return the estimate in decibels or raise :class:`NoEstimateError`."""
		if self.ratio is None:
			raise NoEstimateError(
				"M2M4 has no valid root for this input; the record may be too short "
				"or the kurtosis assumptions do not match the data."
			)
		return self.db

	def __bool__(self) -> bool:
		return self.available


def quadratic_roots(a: Any, b: Any, c: Any) -> Optional[Tuple[Any, Any]]:
	"""
	Real roots of ``a x**2 + b x + c`` in ascending order.

	Uses ``q = -(b + sign(b) sqrt(b**2 - 4ac)) / 2`` with roots ``q / a`` and
	``c / q`` so neither root suffers from cancellation. ``a == 0`` falls back
	to the linear root (returned twice).

	:return: ``(smaller, larger)`` or ``None`` when there is no real root.
	"""
	if a == 0:
		if b == 0:
			return None
		r = -c / b
		return r, r
	disc = b * b - 4 * a * c
	if disc < 0:
		return None
	root = sqrt(disc)
	q = -(b + root) / 2 if b >= 0 else -(b - root) / 2
	if q == 0:
		# b == 0 and disc == 0, hence c == 0
		return q, q
	r0, r1 = q / a, c / q
	return (r0, r1) if r0 <= r1 else (r1, r0)


def _split(roots: Optional[Tuple[Any, Any]], m2: Any) -> Optional[Tuple[Any, Any]]:
	"""First root ``r`` (larger one first) with ``0 < r < m2``, paired with ``m2 - r``."""
	if roots is None:
		return None
	for r in (roots[1], roots[0]):
		rest = m2 - r
		if r > 0 and rest > 0:
			return r, rest
	return None


def m2m4_snr_estimator(
		data: SignalLike,
		signal_kurtosis: Optional[float] = None,
		noise_kurtosis: Optional[float] = None,
		*,
		column: Column = None
) -> SnrEstimate:
	"""
	Blind SNR estimate of a real signal-plus-noise record.

	The sample mean is removed first (both components are assumed zero-mean),
	then the centred ``M2`` and ``M4`` are gathered in one pass and the moment
	equations are solved for the power split.

	:param data: The observed mixture (real, integer or Decimal samples).
	:param signal_kurtosis: Kurtosis of the clean signal (1.5 for a sinusoid,
							1 for constant-modulus symbols). Defaults to the
							``signal_kurtosis`` setting.
	:param noise_kurtosis: Kurtosis of the noise (3 for Gaussian, 1.8 for
						   uniform). Defaults to the ``noise_kurtosis`` setting.
	:param column: Column selector when *data* is a DataFrame.
	:return: :class:`SnrEstimate`; unavailable when no admissible root exists.
	:raises ValueError: On empty input or non-positive kurtosis.
	:raises TypeError: For complex samples.
	"""
	settings = get_settings()
	ka = settings.signal_kurtosis if signal_kurtosis is None else signal_kurtosis
	kw = settings.noise_kurtosis if noise_kurtosis is None else noise_kurtosis
	if not ka > 0:
		raise ValueError(f"The estimated signal kurtosis must be positive, got {ka!r}.")
	if not kw > 0:
		raise ValueError(f"The estimated noise kurtosis must be positive, got {kw!r}.")

	acc = MomentAccumulator()
	for kind, block in iter_blocks(data, column=column):
		acc.update(block, kind=kind)
	kind = acc.kind
	m2, m4 = acc.m2, acc.m4

	if m4 == 0:
		LOG.debug("m2m4: constant input, no noise power")
		return SnrEstimate(kind.inf)

	ka, kw = kind.real(ka), kind.real(kw)
	a = ka + kw - 6
	m2sq = m2 * m2

	split = _split(quadratic_roots(a, 2 * m2 * (3 - kw), kw * m2sq - m4), m2)
	if split is not None:
		s, n = split
		LOG.debug("m2m4: root S=%s N=%s (n=%d)", s, n, acc.count)
		return SnrEstimate(s / n)

	LOG.debug("m2m4: no admissible root (n=%d, m2=%s, m4=%s)", acc.count, m2, m4)
	return SnrEstimate(None)


def m2m4_snr_estimator_db(
		data: SignalLike,
		signal_kurtosis: Optional[float] = None,
		noise_kurtosis: Optional[float] = None,
		*,
		column: Column = None
) -> Any:
	"""
	:func:`m2m4_snr_estimator` in decibels.

	:raises NoEstimateError: When the moment equations have no admissible root.
	"""
	return m2m4_snr_estimator(data, signal_kurtosis, noise_kurtosis, column=column).require()
