# src/sigstat/logutil.py

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Iterator, Literal, Optional, Union

PathLike = Union[str, Path]

PACKAGE_LOGGER = "sigstat"
BRIEF_FORMAT = "[%(levelname)s] %(name)s: %(message)s"
FULL_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

LevelName = Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"]
LevelLike = Union[int, LevelName]


def _level_number(value: LevelLike, *, param_name: str) -> int:
	if isinstance(value, int):
		return value
	number = logging.getLevelName(str(value).upper())
	if not isinstance(number, int):
		raise ValueError(f"Unknown logging level name for {param_name}: {value}")
	return number


def _package_root() -> logging.Logger:
	root = logging.getLogger(PACKAGE_LOGGER)
	if not root.handlers:
		console = logging.StreamHandler()
		console.setFormatter(logging.Formatter(BRIEF_FORMAT))
		root.addHandler(console)
		root.setLevel(logging.WARNING)
		root.propagate = False
	return root


def _console_handlers(log: logging.Logger) -> Iterator[logging.Handler]:
	# FileHandler subclasses StreamHandler
	for handler in log.handlers:
		if isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler):
			yield handler


def _file_handler(path: Path, *, mode: str, rotate: bool, max_bytes: int, backup_count: int) -> logging.Handler:
	path.parent.mkdir(parents=True, exist_ok=True)
	if rotate:
		return RotatingFileHandler(
			path, mode=mode, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
		)
	return logging.FileHandler(path, mode=mode, encoding="utf-8")


def get_logger(name: str = PACKAGE_LOGGER) -> logging.Logger:
	"""
	Return a module logger under the shared ``sigstat`` hierarchy.

	The package root logger gets a single console handler the first time any
	module asks for a logger; child loggers (``sigstat.stats.order`` ...) carry
	no handlers of their own and propagate to it, so one call to
	:func:`configure_logging` controls the whole package.

	:param name: Logger name, usually ``__name__``.
	:return: The logger.
	"""
	_package_root()
	return logging.getLogger(name)


def configure_logging(
		*,
		console_level: Optional[LevelLike] = None,
		file_path: Optional[PathLike] = None,
		file_level: Optional[LevelLike] = None,
		mode: str = "w",
		rotate: bool = False,
		max_bytes: int = 2_000_000,
		backup_count: int = 3,
		formatter: Optional[logging.Formatter] = None,
		propagate: bool = False
) -> logging.Logger:
	"""
	Set levels and handlers of the ``sigstat`` package logger.

	Estimators only emit DEBUG records (block counts, chosen M2M4 roots,
	statistics that came out undefined in a summary), so lowering the level
	is the way to trace a computation.

	:param console_level: Level of the console handler. ``None`` takes
						  ``log_level`` from the active settings.
	:param file_path: Also write records to this file (parent dirs are created).
	:param file_level: Level of the file handler; the console level when ``None``.
	:param mode: File open mode, ``'w'`` or ``'a'``.
	:param rotate: Rotate the file at *max_bytes*, keeping *backup_count* copies.
	:param max_bytes: Rotation threshold per file.
	:param backup_count: Number of rotated backups.
	:param formatter: Formatter for every handler; timestamped by default.
	:param propagate: Pass records on to the root logger as well.
	:return: The package logger.
	"""
	if console_level is None:
		from .config.settings import get_settings
		console_level = get_settings().log_level

	console_value = _level_number(console_level, param_name="console_level")
	file_value = console_value if file_level is None else _level_number(file_level, param_name="file_level")

	log = _package_root()
	log.setLevel(min(console_value, file_value) if file_path else console_value)
	log.propagate = propagate

	fmt = formatter or logging.Formatter(FULL_FORMAT)
	for handler in _console_handlers(log):
		handler.setLevel(console_value)
		handler.setFormatter(fmt)

	if not file_path:
		return log

	path = Path(file_path)
	if any(getattr(h, "baseFilename", None) == str(path.resolve()) for h in log.handlers):
		return log
	handler = _file_handler(path, mode=mode, rotate=rotate, max_bytes=max_bytes, backup_count=backup_count)
	handler.setLevel(file_value)
	handler.setFormatter(fmt)
	log.addHandler(handler)
	return log


__all__ = ["PACKAGE_LOGGER", "get_logger", "configure_logging"]
