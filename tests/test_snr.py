"""Oracle SNR with known signal and noise."""

from __future__ import annotations

import math
from decimal import Decimal

import pytest

np = pytest.importorskip("numpy")

from sigstat import (  # noqa: E402
	mean_invariant_oracle_snr,
	mean_invariant_oracle_snr_db,
	oracle_snr,
	oracle_snr_db,
	override_settings,
)


def test_oracle_snr_ratio_and_db():
	signal = [10, -10, 10, -10]
	noise = [1, -1, 1, -1]
	assert oracle_snr(signal, noise) == 100.0
	assert math.isclose(oracle_snr_db(signal, noise), 20.0)


def test_oracle_snr_complex_uses_power():
	assert oracle_snr([3 + 4j], [1j]) == 25.0


def test_oracle_snr_keeps_float32():
	signal = np.full(4, 2.0, dtype=np.float32)
	noise = np.ones(4, dtype=np.float32)
	result = oracle_snr(signal, noise)
	assert result == 4.0
	assert result.dtype == np.float32


def test_oracle_snr_streams_both_inputs():
	rng = np.random.default_rng(11)
	s = rng.normal(size=101)
	w = rng.normal(scale=0.1, size=101)
	with override_settings(block_size=16):
		streamed = oracle_snr(iter(s.tolist()), iter(w.tolist()))
		direct = oracle_snr(s.tolist(), w.tolist())
	assert streamed == direct
	assert math.isclose(direct, (s * s).sum() / (w * w).sum(), rel_tol=1e-12)


def test_oracle_snr_length_mismatch():
	with pytest.raises(ValueError):
		oracle_snr([1.0, 2.0, 3.0], [1.0, 2.0])
	with pytest.raises(ValueError):
		oracle_snr(iter([1.0, 2.0]), [1.0, 2.0, 3.0])


def test_oracle_snr_zero_noise():
	with pytest.raises(ValueError):
		oracle_snr([1.0, 2.0], [0.0, 0.0])


def test_oracle_snr_decimal_is_exact():
	signal = [Decimal(10)] * 4
	noise = [Decimal(1)] * 4
	assert oracle_snr(signal, noise) == Decimal(100)
	assert oracle_snr_db(signal, noise) == Decimal(20)


def test_oracle_snr_refuses_mixed_precision_models():
	with pytest.raises(TypeError):
		oracle_snr([Decimal(1), Decimal(2)], [0.5, 0.25])


def test_mean_invariant_oracle_snr_ignores_offsets():
	signal = [11.0, 9.0, 11.0, 9.0]
	noise = [1.5, 0.5, 1.5, 0.5]
	assert mean_invariant_oracle_snr(signal, noise) == 4.0
	assert math.isclose(mean_invariant_oracle_snr_db(signal, noise), 10 * math.log10(4.0))
	assert oracle_snr(signal, noise) != 4.0


def test_mean_invariant_oracle_snr_complex():
	signal = [1 + 1j, -1 - 1j]
	noise = [0.5j, -0.5j]
	assert math.isclose(mean_invariant_oracle_snr(signal, noise), 8.0)


def test_mean_invariant_oracle_snr_constant_noise():
	with pytest.raises(ValueError):
		mean_invariant_oracle_snr([1.0, -1.0], [3.0, 3.0])


@pytest.mark.parametrize("length", [1, 2, 10, 100, 1000])
def test_unit_signal_against_single_impulse(length):
	signal = [1] * length
	noise = [1] + [0] * (length - 1)
	assert oracle_snr(signal, noise) == length
	assert oracle_snr(iter(signal), iter(noise)) == length
	assert math.isclose(oracle_snr_db(signal, noise), 10 * math.log10(length), abs_tol=1e-12)
