# src/sigstat/stats/signalstat.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .coerce import Column, SignalLike, coerce_samples, is_forward_only
from .describe import describe_signal, describe_signals
from .entropy import shannon_entropy
from .m2m4 import SnrEstimate, m2m4_snr_estimator
from .moments import first_four_moments
from .order import absolute_gini_coefficient, absolute_median, sample_absolute_gini_coefficient
from .snr import mean_invariant_oracle_snr, mean_invariant_oracle_snr_db, oracle_snr, oracle_snr_db
from .sparsity import hoyer_sparsity

from ..imports import numpy as np  # type: ignore
from ..imports import pandas as pd  # type: ignore

__all__ = ["SignalStat"]


@dataclass
class SignalStat:
	"""
	Optional thin wrapper for stateful workflows.

	Examples
	--------
	>>> ss = SignalStat([-1, 2, -3, 4, -5, 6, -7])
	>>> float(ss.absolute_median())
	4.0
	>>> round(float(ss.hoyer_sparsity()), 3)
	0.17

	Notes
	-----
	- ``data`` may be anything the module-level functions accept. One-shot
	  iterators are drained into an array on construction so that every
	  method sees the same samples.
	- ``column`` selects the signal when ``data`` is a DataFrame.
	- If you prefer stateless usage, call module-level functions instead.
	"""

	data: SignalLike
	column: Column = None

	def __post_init__(self) -> None:
		if is_forward_only(self.data):
			_, self.data = coerce_samples(self.data)

	def vector(self) -> np.ndarray:
		"""Return the raw samples as an owned 1D ``np.ndarray``."""
		return coerce_samples(self.data, column=self.column)[1]

	# --- Order statistics ---
	def absolute_median(self) -> Any:
		"""Median magnitude."""
		return absolute_median(self.data, column=self.column)

	def gini(self, *, sample: bool = False) -> Any:
		"""Gini coefficient of the magnitudes (bias-corrected when ``sample``)."""
		if sample:
			return sample_absolute_gini_coefficient(self.data, column=self.column)
		return absolute_gini_coefficient(self.data, column=self.column)

	# --- Single-pass statistics ---
	def hoyer_sparsity(self) -> Any:
		return hoyer_sparsity(self.data, column=self.column)

	def shannon_entropy(self) -> Any:
		return shannon_entropy(self.data, column=self.column)

	def moments(self) -> Tuple[Any, Any, Any, Any]:
		"""``(mean, m2, m3, m4)`` with population central moments."""
		return first_four_moments(self.data, column=self.column)

	# --- SNR ---
	def oracle_snr(self, noise: SignalLike, *, db: bool = False, mean_invariant: bool = False) -> Any:
		"""
		SNR of the stored signal against a known noise realisation.

		:param noise: Noise samples of the same length.
		:param db: Return decibels instead of a power ratio.
		:param mean_invariant: Remove each component's mean first.
		"""
		signal = self.vector() if self.column is not None else self.data
		if mean_invariant:
			fn = mean_invariant_oracle_snr_db if db else mean_invariant_oracle_snr
		else:
			fn = oracle_snr_db if db else oracle_snr
		return fn(signal, noise)

	def m2m4_snr(
			self,
			signal_kurtosis: Optional[float] = None,
			noise_kurtosis: Optional[float] = None
	) -> SnrEstimate:
		"""Blind M2M4 estimate treating the stored data as signal plus noise."""
		return m2m4_snr_estimator(self.data, signal_kurtosis, noise_kurtosis, column=self.column)

	# --- Summaries ---
	def describe(self) -> Dict[str, float]:
		"""Return :func:`describe_signal` for the stored signal."""
		return describe_signal(self.data, column=self.column)

	def describe_table(self) -> pd.DataFrame:
		"""Return :func:`describe_signals` for every column of a stored DataFrame."""
		if not isinstance(self.data, pd.DataFrame):  # type: ignore[attr-defined]
			raise ValueError(
				f"describe_table requires a pandas DataFrame as `data`: {type(self.data)}"
			)
		return describe_signals(self.data)
