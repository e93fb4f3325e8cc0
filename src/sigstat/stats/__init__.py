# src/sigstat/stats/__init__.py
"""
Statistical estimators for one-dimensional signals, split by concern.
"""

from importlib import import_module
from typing import TYPE_CHECKING

__all__ = [
	# sample model
	"Domain", "SampleKind", "resolve_kind",
	"iter_blocks", "materialize_magnitudes", "coerce_samples",
	# order statistics
	"absolute_median", "absolute_gini_coefficient", "sample_absolute_gini_coefficient",
	# single pass
	"hoyer_sparsity", "shannon_entropy",
	"oracle_snr", "oracle_snr_db", "mean_invariant_oracle_snr", "mean_invariant_oracle_snr_db",
	# moments and blind SNR
	"MomentAccumulator", "first_four_moments",
	"SnrEstimate", "NoEstimateError", "quadratic_roots",
	"m2m4_snr_estimator", "m2m4_snr_estimator_db",
	# summaries
	"describe_signal", "describe_signals",
	# class
	"SignalStat",
]

_MOD_OF = {
	"Domain": "sigstat.stats.magnitude",
	"SampleKind": "sigstat.stats.magnitude",
	"resolve_kind": "sigstat.stats.magnitude",
	"iter_blocks": "sigstat.stats.coerce",
	"materialize_magnitudes": "sigstat.stats.coerce",
	"coerce_samples": "sigstat.stats.coerce",
	"absolute_median": "sigstat.stats.order",
	"absolute_gini_coefficient": "sigstat.stats.order",
	"sample_absolute_gini_coefficient": "sigstat.stats.order",
	"hoyer_sparsity": "sigstat.stats.sparsity",
	"shannon_entropy": "sigstat.stats.entropy",
	"oracle_snr": "sigstat.stats.snr",
	"oracle_snr_db": "sigstat.stats.snr",
	"mean_invariant_oracle_snr": "sigstat.stats.snr",
	"mean_invariant_oracle_snr_db": "sigstat.stats.snr",
	"MomentAccumulator": "sigstat.stats.moments",
	"first_four_moments": "sigstat.stats.moments",
	"SnrEstimate": "sigstat.stats.m2m4",
	"NoEstimateError": "sigstat.stats.m2m4",
	"quadratic_roots": "sigstat.stats.m2m4",
	"m2m4_snr_estimator": "sigstat.stats.m2m4",
	"m2m4_snr_estimator_db": "sigstat.stats.m2m4",
	"describe_signal": "sigstat.stats.describe",
	"describe_signals": "sigstat.stats.describe",
	"SignalStat": "sigstat.stats.signalstat",
}


def __getattr__(name: str):
	if name in _MOD_OF:
		mod = import_module(_MOD_OF[name])
		return getattr(mod, name)
	raise AttributeError(f"module 'sigstat.stats' has no attribute {name!r}")


if TYPE_CHECKING:
	from .magnitude import Domain, SampleKind, resolve_kind
	from .coerce import iter_blocks, materialize_magnitudes, coerce_samples
	from .order import absolute_median, absolute_gini_coefficient, sample_absolute_gini_coefficient
	from .sparsity import hoyer_sparsity
	from .entropy import shannon_entropy
	from .snr import oracle_snr, oracle_snr_db, mean_invariant_oracle_snr, mean_invariant_oracle_snr_db
	from .moments import MomentAccumulator, first_four_moments
	from .m2m4 import SnrEstimate, NoEstimateError, quadratic_roots, m2m4_snr_estimator, m2m4_snr_estimator_db
	from .describe import describe_signal, describe_signals
	from .signalstat import SignalStat
