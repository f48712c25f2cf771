"""Conversions between register bytes and physical values."""

from __future__ import annotations

import math

from .errors import InvalidValueError
from .registers import ConsecutiveAlert, ConversionRate, DigitalFilter

_EXTENDED_OFFSET = 64
_LSB_STEP = 0.0625
_N_FACTOR_MIN = 0.950198
_N_FACTOR_MAX = 1.073837
_N_FACTOR_NUMERATOR = 1.008 * 2088.0
_N_FACTOR_BASE = 2088.0

_CONSECUTIVE_MASKS = {
    ConsecutiveAlert.ONE: (0b0000_0000, 0b0000_1110),
    ConsecutiveAlert.TWO: (0b0000_0010, 0b0000_1100),
    ConsecutiveAlert.THREE: (0b0000_0110, 0b0000_1000),
    ConsecutiveAlert.FOUR: (0b0000_1110, 0b0000_0000),
}

_CONSECUTIVE_CODES = {
    0: ConsecutiveAlert.ONE,
    1: ConsecutiveAlert.TWO,
    3: ConsecutiveAlert.THREE,
    7: ConsecutiveAlert.FOUR,
}


def _clamp(value, low, high):
    return max(low, min(high, value))


def _range(extended: bool) -> tuple[int, int]:
    return (-64, 191) if extended else (0, 127)


def _check_byte(raw: int) -> int:
    if not 0 <= raw <= 0xFF:
        raise InvalidValueError(f"register value out of byte range: {raw}")
    return raw


def decode_temp(raw: int, extended: bool) -> int:
    """Whole degrees Celsius from a temperature MSB register."""
    raw = _check_byte(raw)
    return raw - _EXTENDED_OFFSET if extended else raw


def encode_temp(value: int, extended: bool) -> int:
    """MSB register byte for whole degrees, clamped to the active range."""
    low, high = _range(extended)
    value = _clamp(int(value), low, high)
    return value + _EXTENDED_OFFSET if extended else value


def decode_precise(msb: int, lsb: int, extended: bool) -> float:
    """Degrees Celsius from an MSB/LSB register pair (0.0625 °C steps)."""
    _check_byte(msb)
    _check_byte(lsb)
    value = msb + (lsb >> 4) * _LSB_STEP
    return value - _EXTENDED_OFFSET if extended else value


def encode_precise(value: float, extended: bool) -> tuple[int, int]:
    """MSB/LSB register pair for a temperature, clamped to the active range."""
    if math.isnan(value):
        value = 0.0 if not extended else float(-_EXTENDED_OFFSET)
    low, high = _range(extended)
    value = float(_clamp(value, low, high))
    if extended:
        value += _EXTENDED_OFFSET
    msb = int(value)
    lsb = (int((value - msb) / _LSB_STEP) << 4) & 0xFF
    return msb, lsb


def encode_n_factor(neff: float) -> int:
    """N-factor correction register byte for an effective η-factor."""
    neff = _clamp(neff, _N_FACTOR_MIN, _N_FACTOR_MAX)
    nadjust = int(_N_FACTOR_NUMERATOR / neff - _N_FACTOR_BASE)
    nadjust = _clamp(nadjust, -128, 127)
    return nadjust & 0xFF


def decode_n_factor(raw: int) -> float:
    """Effective η-factor from the N-factor correction register byte."""
    raw = _check_byte(raw)
    nadjust = raw - 0x100 if raw & 0x80 else raw
    return _N_FACTOR_NUMERATOR / (_N_FACTOR_BASE + nadjust)


def decode_conversion_rate(raw: int) -> ConversionRate:
    """Conversion rate from the conversion rate register."""
    try:
        return ConversionRate(raw)
    except ValueError:
        raise InvalidValueError(f"invalid conversion rate value: {raw}") from None


def decode_consecutive_alert(raw: int) -> ConsecutiveAlert:
    """Consecutive alert count from the consecutive alert register."""
    code = (raw & 0b0000_1110) >> 1
    try:
        return _CONSECUTIVE_CODES[code]
    except KeyError:
        raise InvalidValueError(f"invalid consecutive alert value: {raw}") from None


def consecutive_alert_masks(consecutive: ConsecutiveAlert) -> tuple[int, int]:
    """The (set, clear) bit masks that select a consecutive alert count."""
    return _CONSECUTIVE_MASKS[ConsecutiveAlert(consecutive)]


def decode_digital_filter(raw: int) -> DigitalFilter:
    """Digital filter mode from the filter control register."""
    try:
        return DigitalFilter(raw & 0b0000_0011)
    except ValueError:
        raise InvalidValueError(f"invalid digital filter value: {raw}") from None


def encode_digital_filter(filter: DigitalFilter) -> int:
    """Filter control register byte for a digital filter mode."""
    return DigitalFilter(filter).value