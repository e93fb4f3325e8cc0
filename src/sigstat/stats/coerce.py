# src/sigstat/stats/coerce.py
from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from itertools import islice
from typing import Any, List, Optional, Tuple, Union

from ..config.settings import get_settings
from ..logutil import get_logger
from ..imports import numpy as np  # type: ignore
from ..imports import pandas as pd  # type: ignore
from .magnitude import SampleKind, resolve_kind

LOG = get_logger(__name__)

__all__ = [
	"SignalLike", "Column",
	"iter_blocks", "materialize_magnitudes", "coerce_samples", "is_forward_only",
]

Column = Optional[Union[int, str]]
SignalLike = Union[Sequence[Any], Iterable[Any], "np.ndarray", "pd.Series", "pd.DataFrame"]  # type: ignore[name-defined]
Block = Tuple[SampleKind, "np.ndarray"]


# --- Container Helpers ---
def _is_pandas_df(obj: Any) -> bool:
	return pd.is_available() and isinstance(obj, pd.DataFrame)  # type: ignore[attr-defined]


def _is_pandas_series(obj: Any) -> bool:
	return pd.is_available() and isinstance(obj, pd.Series)  # type: ignore[attr-defined]


def _from_dataframe(df: "pd.DataFrame", column: Column) -> "np.ndarray":
	if df.shape[1] == 1 and column is None:
		return df.iloc[:, 0].to_numpy()
	if column is None:
		raise ValueError(
			f"DataFrame has {df.shape[1]} columns; please specify `column` (name or 0-based index)."
		)
	try:
		col = df.iloc[:, column] if isinstance(column, int) else df[column]
	except (KeyError, IndexError) as exc:
		LOG.error("Failed to select column %r: %s", column, exc)
		raise ValueError(f"Invalid column selector: {column!r}") from exc
	return col.to_numpy()


def _as_1d(a: "np.ndarray") -> "np.ndarray":
	if a.ndim == 0:
		raise ValueError("Scalar is not valid; expected a 1D sequence of samples.")
	if a.ndim > 1:
		raise ValueError(f"Expected 1D samples; got ndim={a.ndim}")
	if a.size == 0:
		raise ValueError("Empty sequence is not valid.")
	return a


def _holds_array(data: Any) -> bool:
	return isinstance(data, np.ndarray) or _is_pandas_series(data) or _is_pandas_df(data)


def _plain_samples(data: Any) -> bool:
	"""True for Python sequences and iterables, False for numpy/pandas containers."""
	if isinstance(data, (str, bytes, bytearray)):
		raise TypeError("Text is not a sequence of samples.")
	if _holds_array(data):
		return False
	if isinstance(data, Mapping):
		raise TypeError("Mappings are not sequences of samples; pass `.values()` explicitly.")
	if isinstance(data, Iterable):
		return True
	raise TypeError(f"Unsupported data type: {type(data)}")


def is_forward_only(data: Any) -> bool:
	"""
	True when *data* can only be walked once (iterators, generators, other plain iterables).

	Random-access inputs are numpy arrays, pandas objects and any
	:class:`collections.abc.Sequence` other than text.
	"""
	return _plain_samples(data) and not isinstance(data, Sequence)


def _random_access_array(data: Any, column: Column) -> "np.ndarray":
	if _is_pandas_df(data):
		return _as_1d(_from_dataframe(data, column))
	if column is not None:
		raise ValueError("`column` only applies to DataFrame inputs.")
	if _is_pandas_series(data):
		return _as_1d(data.to_numpy())
	return _as_1d(np.asarray(data))


# --- Blocks ---
def _array_blocks(data: Any, column: Column, block_size: int) -> Iterator[Block]:
	arr = _random_access_array(data, column)
	kind = resolve_kind(arr)
	for start in range(0, arr.size, block_size):
		yield kind, arr[start:start + block_size]


def _converted_blocks(data: Iterable[Any], block_size: int) -> Iterator[Block]:
	"""
	Convert Python samples to numpy one block at a time.

	Each block is resolved on its own. When a block needs a wider kind than
	the ones before it (an int stream meeting floats, float32 scalars meeting
	Python floats, ints meeting Decimals), the walk widens and that block and
	every later one are yielded under the wider kind. Blocks already yielded
	keep their narrower kind; consumers carry their partial results over with
	:meth:`SampleKind.carry`.
	"""
	it = iter(data)
	kind: Optional[SampleKind] = None
	while True:
		chunk = list(islice(it, block_size))
		if not chunk:
			break
		block = np.asarray(chunk)
		if block.ndim != 1:
			raise ValueError(f"Expected scalar samples; got items of shape {block.shape[1:]}")
		block_kind = resolve_kind(block)
		kind = block_kind if kind is None else kind.widen(block_kind)
		if block_kind != kind:
			LOG.debug("Block of %s/%s widened to %s/%s.", block_kind.domain.value, block_kind.dtype,
					  kind.domain.value, kind.dtype)
			block = block.astype(kind.dtype)
		yield kind, block


def iter_blocks(
		data: SignalLike,
		*,
		column: Column = None,
		block_size: Optional[int] = None
) -> Iterator[Block]:
	"""
	Walk a signal once, yielding ``(kind, block)`` pairs of at most *block_size* samples.

	Arrays, Series and DataFrame columns are sliced without copying. Python
	samples, whether a list or a one-shot iterator, are consumed exactly once
	and converted block by block, widening the kind when a later block needs
	it (see :func:`_converted_blocks`). A list and an iterator over the same
	elements therefore yield identical blocks, and statistics built on top
	agree bit for bit.

	:param data: Samples (see :data:`SignalLike`).
	:param column: Column selector when *data* is a DataFrame.
	:param block_size: Samples per block; defaults to the active settings.
	:return: Iterator of ``(SampleKind, np.ndarray)``.
	:raises ValueError: On empty, multi-dimensional or ambiguous input.
	:raises TypeError: On unsupported sample types, or Decimal samples mixed
					   with floating or complex ones.
	"""
	size = block_size if block_size is not None else get_settings().block_size
	if size < 1:
		raise ValueError(f"block_size must be a positive integer, got {size}")

	if _plain_samples(data):
		if column is not None:
			raise ValueError("`column` only applies to DataFrame inputs.")
		blocks = _converted_blocks(data, size)
	else:
		blocks = _array_blocks(data, column, size)

	count = 0
	for kind, block in blocks:
		count += 1
		yield kind, block
	if count == 0:
		raise ValueError("Empty sequence is not valid.")
	LOG.debug("Walked %d block(s) of up to %d samples.", count, size)


def materialize_magnitudes(
		data: SignalLike,
		*,
		column: Column = None
) -> Tuple[SampleKind, "np.ndarray"]:
	"""
	Copy the magnitudes of *data* into one owned, randomly accessible buffer.

	The buffer is always a fresh array, so callers may reorder it in place
	without touching the caller's samples.

	:return: ``(kind, magnitudes)`` under the widest kind the walk reached.
	"""
	parts: List[Block] = [(kind, kind.magnitudes(block)) for kind, block in iter_blocks(data, column=column)]
	kind = parts[-1][0]
	mags = [m if k == kind else kind.cast(m) for k, m in parts]
	return kind, mags[0] if len(mags) == 1 else np.concatenate(mags)


def coerce_samples(
		data: SignalLike,
		*,
		column: Column = None
) -> Tuple[SampleKind, "np.ndarray"]:
	"""
	Collect the raw samples of *data* into a single owned 1D array.

	:return: ``(kind, samples)`` in the storage dtype of the widest kind.
	"""
	parts: List[Block] = list(iter_blocks(data, column=column))
	kind = parts[-1][0]
	if len(parts) == 1:
		return kind, parts[0][1].copy()
	return kind, np.concatenate([block.astype(kind.dtype, copy=False) for _, block in parts])
