"""Tests for totpauth.core.config, totpauth.core.clock and totpauth.core.utils."""

import dataclasses
import time

import pytest

from totpauth.core.clock import Clock, FixedClock, SystemClock
from totpauth.core.config import Configuration, default_configuration
from totpauth.core.hashing import Algorithm, parse_algorithm
from totpauth.core.utils import (
    FormatError,
    decode_secret,
    encode_secret,
    format_code,
    is_digit_string,
    normalize_secret,
)


# ── Defaults ──────────────────────────────────────────────────────────────────

def test_default_configuration_values() -> None:
    config = default_configuration()
    assert isinstance(config.clock, SystemClock)
    assert config.tried_offsets == (0, -1)
    assert config.period == 30
    assert config.digits == 6
    assert config.algorithm == Algorithm.SHA1


def test_default_configuration_is_fresh() -> None:
    assert default_configuration() is not default_configuration()


def test_configuration_is_frozen() -> None:
    config = default_configuration()
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.digits = 8  # type: ignore[misc]


def test_replace_returns_new_value() -> None:
    config = default_configuration()
    derived = config.replace(digits=8, tried_offsets=[0, 1])
    assert derived.digits == 8
    assert derived.tried_offsets == (0, 1)
    assert config.digits == 6


def test_algorithm_accepts_names() -> None:
    assert Configuration(algorithm="sha256").algorithm is Algorithm.SHA256  # type: ignore[arg-type]
    assert parse_algorithm("SHA512") is Algorithm.SHA512


# ── Validation ────────────────────────────────────────────────────────────────

@pytest.mark.parametrize("digits", [0, 11, -6, True, 6.0])
def test_invalid_digits(digits) -> None:
    with pytest.raises(ValueError):
        Configuration(digits=digits)


@pytest.mark.parametrize("digits", [1, 6, 8, 10])
def test_valid_digits(digits: int) -> None:
    assert Configuration(digits=digits).digits == digits


@pytest.mark.parametrize("period", [0, -30, 1.5])
def test_invalid_period(period) -> None:
    with pytest.raises(ValueError):
        Configuration(period=period)


def test_invalid_offsets() -> None:
    with pytest.raises(ValueError, match="offsets"):
        Configuration(tried_offsets=(0, "1"))  # type: ignore[arg-type]


def test_invalid_algorithm() -> None:
    with pytest.raises(ValueError, match="algorithm"):
        Configuration(algorithm="MD5")  # type: ignore[arg-type]


def test_invalid_clock() -> None:
    with pytest.raises(ValueError, match="clock"):
        Configuration(clock=time.time)  # type: ignore[arg-type]


# ── Clocks ────────────────────────────────────────────────────────────────────

def test_fixed_clock() -> None:
    clock = FixedClock(1111111109)
    assert clock.now() == 1111111109.0
    assert clock == FixedClock(1111111109.0)


def test_system_clock_tracks_time() -> None:
    before = time.time()
    now = SystemClock().now()
    assert before <= now <= time.time()


# ── Utils ─────────────────────────────────────────────────────────────────────

def test_normalize_secret_strips_spaces() -> None:
    assert normalize_secret("JBSW Y3DP") == "JBSWY3DP"  # no padding needed here (len=8)


def test_normalize_secret_adds_padding() -> None:
    assert normalize_secret("nbuq") == "NBUQ===="


def test_decode_secret_roundtrip() -> None:
    raw = b"\x00\x01\x02\x03\x04\x05\x06\x07\x08\x09"
    assert decode_secret(encode_secret(raw)) == raw
    assert decode_secret(encode_secret(raw, padded=False)) == raw


def test_encode_secret_padding() -> None:
    assert encode_secret(b"hi") == "NBUQ===="
    assert encode_secret(b"hi", padded=False) == "NBUQ"


def test_decode_secret_invalid_raises() -> None:
    with pytest.raises(FormatError):
        decode_secret("!!!NOTBASE32!!!")


def test_format_code_pads() -> None:
    assert format_code(7081804, 8) == "07081804"
    assert format_code(0, 6) == "000000"


@pytest.mark.parametrize(
    "value,expected",
    [("123456", True), ("", False), ("12a", False), ("٣", False), (123, False)],
)
def test_is_digit_string(value, expected: bool) -> None:
    assert is_digit_string(value) is expected


def test_clock_subclass_must_implement_now() -> None:
    class _NoNow(Clock):
        pass

    with pytest.raises(TypeError):
        _NoNow()  # type: ignore[abstract]
