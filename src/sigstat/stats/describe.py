# src/sigstat/stats/describe.py

from __future__ import annotations

from typing import Any, Callable, Dict

from ..logutil import get_logger
from .coerce import Column, SignalLike, coerce_samples
from .m2m4 import m2m4_snr_estimator
from .moments import MomentAccumulator
from .order import absolute_gini_coefficient, absolute_median, sample_absolute_gini_coefficient
from .sparsity import hoyer_sparsity

from ..imports import pandas as pd  # type: ignore

LOG = get_logger(__name__)

__all__ = ["describe_signal", "describe_signals"]

NAN = float("nan")


def _guarded(name: str, fn: Callable[[], Any]) -> float:
	try:
		return float(fn())
	except (ValueError, TypeError) as exc:
		LOG.debug("describe_signal: %s undefined (%s)", name, exc)
		return NAN


def describe_signal(data: SignalLike, *, column: Column = None) -> Dict[str, float]:
	"""
	Summary statistics of one signal as plain floats.

	:param data: Signal samples (consumed once, then held in memory).
	:param column: Column name or index for DataFrame.
	:return: count, absolute_median, hoyer_sparsity, gini, sample_gini, mean,
			 variance, kurtosis, m2m4_snr_db. Statistics that are undefined
			 for the input (e.g. moments of complex samples, sparsity of a
			 single sample, no M2M4 root) are NaN.
	"""
	kind, x = coerce_samples(data, column=column)
	out: Dict[str, float] = {"count": float(x.size)}
	out["absolute_median"] = _guarded("absolute_median", lambda: absolute_median(x))
	out["hoyer_sparsity"] = _guarded("hoyer_sparsity", lambda: hoyer_sparsity(x))
	out["gini"] = _guarded("gini", lambda: absolute_gini_coefficient(x))
	out["sample_gini"] = _guarded("sample_gini", lambda: sample_absolute_gini_coefficient(x))

	acc = MomentAccumulator()
	try:
		acc.update(x, kind=kind)
	except TypeError as exc:
		LOG.debug("describe_signal: moments undefined (%s)", exc)
		out.update(mean=NAN, variance=NAN, kurtosis=NAN, m2m4_snr_db=NAN)
		return out

	out["mean"] = float(acc.mean)
	out["variance"] = float(acc.variance)
	out["kurtosis"] = _guarded("kurtosis", lambda: acc.kurtosis if acc.m2 != 0 else NAN)
	estimate = m2m4_snr_estimator(x)
	out["m2m4_snr_db"] = float(estimate.db) if estimate.available else NAN
	return out


def describe_signals(df: "pd.DataFrame") -> "pd.DataFrame":
	"""
	:func:`describe_signal` for every column of a DataFrame.

	:param df: One signal per column.
	:return: DataFrame indexed by statistic name with one column per signal.
	"""
	if not isinstance(df, pd.DataFrame):  # type: ignore[attr-defined]
		raise ValueError("describe_signals requires a pandas DataFrame as input")
	try:
		table = {label: describe_signal(df[label]) for label in df.columns}
	except Exception as exc:
		LOG.exception("describe_signals failed: %s", exc)
		raise
	result = pd.DataFrame(table, dtype=float)
	result.index = pd.Index(list(result.index), name="statistic")
	return result
