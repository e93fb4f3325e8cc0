"""
SigStat: statistical estimators for one-dimensional signals.

Top-level API keeps imports lazy:

    from sigstat import SignalStat
    ss = SignalStat(samples)
    ss.m2m4_snr().db

    from sigstat import absolute_median, hoyer_sparsity
    absolute_median(iter(stream))

    from sigstat import override_settings
    with override_settings(block_size=4096):
        ...

    # numpy/pandas proxies stay under their own namespace
    from sigstat import imports
    df = imports.pandas.read_csv("file.csv")
"""

from importlib import import_module
from importlib.metadata import version, PackageNotFoundError as _PNF
from typing import TYPE_CHECKING

try:
	__version__ = version("sigstat")
except _PNF:
	__version__ = "0.0.0+local"

__all__ = [
	"__version__",
	# main facades
	"SignalStat", "configure_logging",
	"get_settings", "set_settings", "load_settings", "override_settings", "reset_settings",
	"ConfigError",
	# namespaces
	"imports", "config", "logutil", "stats",
	# estimators (lazy)
	"absolute_median", "absolute_gini_coefficient", "sample_absolute_gini_coefficient",
	"hoyer_sparsity", "shannon_entropy",
	"oracle_snr", "oracle_snr_db", "mean_invariant_oracle_snr", "mean_invariant_oracle_snr_db",
	"m2m4_snr_estimator", "m2m4_snr_estimator_db", "SnrEstimate", "NoEstimateError",
	"MomentAccumulator", "first_four_moments",
	"describe_signal", "describe_signals",
]

# --- lazy maps ---------------------------------------------------------------
_CONFIG_EXPORTS = {
	"get_settings", "set_settings", "load_settings", "override_settings", "reset_settings",
	"ConfigError",
}

_STATS_EXPORTS = {
	"SignalStat",
	"absolute_median", "absolute_gini_coefficient", "sample_absolute_gini_coefficient",
	"hoyer_sparsity", "shannon_entropy",
	"oracle_snr", "oracle_snr_db", "mean_invariant_oracle_snr", "mean_invariant_oracle_snr_db",
	"m2m4_snr_estimator", "m2m4_snr_estimator_db", "SnrEstimate", "NoEstimateError",
	"MomentAccumulator", "first_four_moments",
	"describe_signal", "describe_signals",
}


def __getattr__(name: str):
	if name == "configure_logging":
		return import_module("sigstat.logutil").configure_logging

	# --- namespaces (lazy) ---
	if name == "imports":
		return import_module("sigstat.imports")
	if name == "config":
		return import_module("sigstat.config")
	if name == "logutil":
		return import_module("sigstat.logutil")
	if name == "stats":
		return import_module("sigstat.stats")

	# --- lazy re-exports ---
	if name in _CONFIG_EXPORTS:
		return getattr(import_module("sigstat.config"), name)
	if name in _STATS_EXPORTS:
		return getattr(import_module("sigstat.stats"), name)

	raise AttributeError(f"module 'sigstat' has no attribute {name!r}")


# Help type-checkers without eager imports
if TYPE_CHECKING:
	from . import imports, config, logutil, stats  # noqa: F401
	from .logutil import configure_logging  # noqa: F401
	from .config import (  # noqa: F401
		ConfigError, get_settings, set_settings, load_settings, override_settings, reset_settings,
	)
	from .stats import (  # noqa: F401
		SignalStat,
		absolute_median, absolute_gini_coefficient, sample_absolute_gini_coefficient,
		hoyer_sparsity, shannon_entropy,
		oracle_snr, oracle_snr_db, mean_invariant_oracle_snr, mean_invariant_oracle_snr_db,
		m2m4_snr_estimator, m2m4_snr_estimator_db, SnrEstimate, NoEstimateError,
		MomentAccumulator, first_four_moments,
		describe_signal, describe_signals,
	)
