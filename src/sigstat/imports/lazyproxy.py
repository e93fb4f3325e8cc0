# src/sigstat/imports/lazyproxy.py

from __future__ import annotations

import importlib
from types import ModuleType
from typing import Any, Optional

__all__ = ["LazyModule", "lazy_module"]


class LazyModule:
	"""
	Proxy that imports a third-party module on first attribute access.

	Notes
	-----
	* ``numpy`` is a hard requirement of every estimator; ``pandas`` is only
	  touched when the caller hands in a ``Series``/``DataFrame`` or asks for a
	  tabular summary, so it can stay uninstalled.
	* :meth:`is_available` checks the import without raising, which lets
	  type-dispatch code ask "could this object be a pandas Series?" safely.
	* For type checkers use ``if TYPE_CHECKING: import numpy as np``.
	"""
	def __init__(
			self,
			name: str,
			*,
			install: Optional[str] = None,
			reason: Optional[str] = None
	) -> None:
		self._name = name
		self._mod: Optional[ModuleType] = None
		self._missing: Optional[BaseException] = None
		self._install = install
		self._reason = reason

	def _load(self) -> ModuleType:
		if self._mod is not None:
			return self._mod
		try:
			self._mod = importlib.import_module(self._name)
		except ImportError as exc:
			self._missing = exc
			parts = [f"Dependency module '{self._name}' is not installed."]
			if self._reason:
				parts.append(f"Needed for {self._reason}.")
			if self._install:
				parts.append(f"Install with '{self._install}'.")
			raise ImportError(" ".join(parts)) from exc
		return self._mod

	def is_available(self) -> bool:
		"""Return ``True`` when the module imports cleanly (cached after the first attempt)."""
		if self._mod is not None:
			return True
		if self._missing is not None:
			return False
		try:
			self._load()
		except ImportError:
			return False
		return True

	def __getattr__(self, item: str) -> Any:
		mod = self._load()
		try:
			return getattr(mod, item)
		except AttributeError:
			pass

		# fallback: submodule such as ``scipy.stats``
		full_name = f"{self._name}.{item}"
		try:
			submod = importlib.import_module(full_name)
		except ImportError as exc:
			raise AttributeError(
				f"Module {self._name!r} has no attribute {item!r} "
				f"and importing submodule {full_name!r} failed."
			) from exc

		setattr(mod, item, submod)
		return submod

	def __repr__(self) -> str:
		state = "not loaded" if self._mod is None else f"loaded={self._mod!r}"
		return f"<LazyModule name={self._name!r} {state}>"


def lazy_module(
		name: str, *, install: Optional[str] = None, reason: Optional[str] = None
) -> LazyModule:
	"""
	Create a lazy module proxy.

	:param name: Fully qualified module name.
	:param install: Optional installation hint for friendly ImportError.
	:param reason: Optional context why the dependency is needed.
	:return: :class:`LazyModule` instance.
	"""
	return LazyModule(name, install=install, reason=reason)
