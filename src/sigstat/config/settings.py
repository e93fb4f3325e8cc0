from __future__ import annotations

import logging
import os
import threading
from contextlib import contextmanager
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Iterator, Mapping, Optional, Union

from .loader import load_config_files
from .schema import KeySpec, apply_defaults, validate_section

LOG = logging.getLogger(__name__)
PathLike = Union[str, Path]

SECTION = "sigstat"
ENV_VAR = "SIGSTAT_CONFIG"

DEFAULT_SCHEMA: Dict[str, KeySpec] = {
	"block_size": KeySpec(("int",), default=65536, minimum=1),
	"signal_kurtosis": KeySpec(("float", "int"), default=1.5, minimum=0, exclusive_minimum=True),
	"noise_kurtosis": KeySpec(("float", "int"), default=3.0, minimum=0, exclusive_minimum=True),
	"log_level": KeySpec(
		("str",), default="WARNING",
		choices=("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"),
	),
}


@dataclass(frozen=True)
class EstimatorSettings:
	"""
	Process-wide defaults for the estimators.

	:param block_size: Number of samples processed per vectorised block. Inputs
					   of any length are walked in blocks of this size, whether
					   they are random-access containers or one-shot iterators.
	:param signal_kurtosis: Default signal kurtosis for the M2M4 estimator
							(1.5 is a pure sinusoid).
	:param noise_kurtosis: Default noise kurtosis for the M2M4 estimator
						   (3.0 is Gaussian noise).
	:param log_level: Console level used by :func:`sigstat.configure_logging`
					  when no level is passed explicitly.
	"""

	block_size: int
	signal_kurtosis: float
	noise_kurtosis: float
	log_level: str

	@classmethod
	def from_mapping(cls, values: Mapping[str, Any]) -> "EstimatorSettings":
		"""Validate ``values`` against :data:`DEFAULT_SCHEMA` and fill in defaults."""
		section = apply_defaults({str(k).lower(): v for k, v in values.items()}, DEFAULT_SCHEMA)
		if isinstance(section.get("log_level"), str):
			section["log_level"] = section["log_level"].upper()
		validate_section(section, DEFAULT_SCHEMA, section=SECTION)
		return cls(**section)

	def replace(self, **changes: Any) -> "EstimatorSettings":
		"""Return a validated copy with ``changes`` applied."""
		return self.from_mapping({**asdict(self), **changes})


def default_settings() -> EstimatorSettings:
	return EstimatorSettings.from_mapping({})


def load_settings(*files: PathLike) -> EstimatorSettings:
	"""
	Build settings from INI/JSON files (later files override earlier ones).

	Only the ``[sigstat]`` section is read; other sections are left to their
	owners. The result is *not* installed, pass it to :func:`set_settings`.

	:param files: Settings file paths.
	:return: Validated settings.
	:raises ConfigError: On IO, parse or validation problems.
	"""
	data = load_config_files(files)
	settings = EstimatorSettings.from_mapping(data.get(SECTION, {}))
	LOG.info("Loaded estimator settings from %d file(s): %s", len(files), settings)
	return settings


_LOCK = threading.Lock()
_ACTIVE: Optional[EstimatorSettings] = None


def get_settings() -> EstimatorSettings:
	"""
	Return the active settings.

	On first use the file named by ``$SIGSTAT_CONFIG`` is loaded when set,
	otherwise schema defaults are used.
	"""
	global _ACTIVE
	current = _ACTIVE
	if current is not None:
		return current
	with _LOCK:
		if _ACTIVE is None:
			path = os.environ.get(ENV_VAR)
			_ACTIVE = load_settings(path) if path else default_settings()
		return _ACTIVE


def set_settings(settings: Optional[EstimatorSettings] = None, **overrides: Any) -> EstimatorSettings:
	"""
	Install new process-wide settings.

	:param settings: Complete settings object; defaults to the active settings.
	:param overrides: Individual fields to change on top of *settings*.
	:return: The installed settings.
	"""
	global _ACTIVE
	base = settings if settings is not None else get_settings()
	new = base.replace(**overrides) if overrides else base
	with _LOCK:
		_ACTIVE = new
	LOG.debug("Active estimator settings: %s", new)
	return new


def reset_settings() -> None:
	"""Forget the active settings so the next :func:`get_settings` reloads them."""
	global _ACTIVE
	with _LOCK:
		_ACTIVE = None


@contextmanager
def override_settings(**overrides: Any) -> Iterator[EstimatorSettings]:
	"""
	Temporarily change settings inside a ``with`` block.

	The override is process-wide, not thread-local.

	>>> with override_settings(block_size=16):
	...     hoyer_sparsity(samples)
	"""
	previous = get_settings()
	current = set_settings(previous, **overrides)
	try:
		yield current
	finally:
		set_settings(previous)


__all__ = [
	"SECTION",
	"ENV_VAR",
	"DEFAULT_SCHEMA",
	"EstimatorSettings",
	"default_settings",
	"load_settings",
	"get_settings",
	"set_settings",
	"reset_settings",
	"override_settings",
]
