from __future__ import annotations

import ast
import json
import logging
import configparser

from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Mapping, MutableMapping, Optional, Union

LOG = logging.getLogger(__name__)

PathLike = Union[str, Path]
Sections = Dict[str, Dict[str, Any]]

_NONE_WORDS = {"none", "null", "na", "n/a"}
_TRUE_WORDS = {"true", "yes", "on"}
_FALSE_WORDS = {"false", "no", "off"}


class ConfigError(Exception):
	"""Raised when a settings file cannot be read, parsed or validated."""


def parse_value(raw: str) -> Any:
	"""
	Turn the text of an INI value into a Python value.

	Python literals win (``4096``, ``1.8``, ``'text'``, ``[1, 2]``; tuples become
	lists). Otherwise ``none``/``null``/``na``/``n/a`` map to ``None``,
	``true``/``yes``/``on`` and ``false``/``no``/``off`` to booleans, and any
	other text is kept as the stripped string (``INFO`` stays ``"INFO"``).
	"""
	text = raw.strip()
	try:
		value = ast.literal_eval(text)
	except (ValueError, SyntaxError):
		word = text.lower()
		if word in _NONE_WORDS:
			return None
		if word in _TRUE_WORDS:
			return True
		if word in _FALSE_WORDS:
			return False
		return text
	return list(value) if isinstance(value, tuple) else value


def merge_dicts(base: MutableMapping[str, Dict[str, Any]], *layers: Mapping[str, Mapping[str, Any]]) -> MutableMapping[str, Dict[str, Any]]:
	"""
	Overlay *layers* onto *base* key by key inside each section; later layers win.

	:return: The mutated *base*.
	:raises ConfigError: When a layer holds a non-mapping section.
	"""
	for layer in layers:
		for section, values in layer.items():
			if not isinstance(values, Mapping):
				raise ConfigError(f"Section '{section}' must be a mapping, got {type(values).__name__}.")
			base.setdefault(section, {}).update(values)
	return base


# --- Single-file readers ---
def _read_ini(path: Path) -> Sections:
	parser = configparser.ConfigParser(interpolation=None)
	try:
		with path.open("r", encoding="utf-8") as fh:
			parser.read_file(fh)
	except (OSError, configparser.Error) as exc:
		raise ConfigError(f"Failed reading '{path}': {exc}") from exc
	return {
		section.lower(): {key.lower(): parse_value(value) for key, value in parser.items(section)}
		for section in parser.sections()
	}


def _read_json(path: Path) -> Sections:
	try:
		with path.open("r", encoding="utf-8") as fh:
			obj = json.load(fh)
	except (OSError, json.JSONDecodeError) as exc:
		raise ConfigError(f"Failed reading JSON '{path}': {exc}") from exc
	if not isinstance(obj, dict):
		raise ConfigError(f"Top-level JSON in '{path}' must be an object.")
	out: Sections = {}
	for section, values in obj.items():
		if not isinstance(values, dict):
			raise ConfigError(f"Section '{section}' in '{path}' must be an object.")
		out[str(section).lower()] = {str(k).lower(): v for k, v in values.items()}
	return out


_READERS: Dict[str, Callable[[Path], Sections]] = {
	".ini": _read_ini,
	".cfg": _read_ini,
	".conf": _read_ini,
	".json": _read_json,
}


def _load(files: Iterable[PathLike], reader: Optional[Callable[[Path], Sections]] = None) -> Sections:
	merged: Sections = {}
	for path_like in files:
		path = Path(path_like)
		read = reader or _READERS.get(path.suffix.lower())
		if read is None:
			raise ConfigError(f"Unsupported config file type '{path.suffix}': {path}")
		if not path.is_file():
			raise ConfigError(f"Missing config file: {path}")
		merge_dicts(merged, read(path))
		LOG.info("Loaded settings file: %s", path)
	return merged


def load_ini_files(files: Iterable[PathLike]) -> Sections:
	"""
	Read INI files in order (later files override earlier ones).

	Interpolation is off; section and key names are lowercased and values go
	through :func:`parse_value`.

	:return: ``section -> key -> value``.
	:raises ConfigError: On a missing or unparsable file.
	"""
	return _load(files, _read_ini)


def load_json_files(files: Iterable[PathLike]) -> Sections:
	"""
	Read JSON files shaped ``{"section": {"key": value}}`` in order, later files winning.

	:raises ConfigError: On IO/parse errors or a different shape.
	"""
	return _load(files, _read_json)


def load_config_files(files: Iterable[PathLike]) -> Sections:
	"""
	Read a mix of INI (``.ini``/``.cfg``/``.conf``) and JSON files, choosing by suffix.

	:return: Merged ``section -> key -> value``; later files win.
	:raises ConfigError: On unknown suffixes or any reader error.
	"""
	return _load(files)


__all__ = [
	"ConfigError",
	"parse_value",
	"merge_dicts",
	"load_ini_files",
	"load_json_files",
	"load_config_files",
]
