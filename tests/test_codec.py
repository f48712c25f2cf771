import pytest

from tmp451.codec import (
    consecutive_alert_masks,
    decode_consecutive_alert,
    decode_conversion_rate,
    decode_digital_filter,
    decode_n_factor,
    decode_precise,
    decode_temp,
    encode_digital_filter,
    encode_n_factor,
    encode_precise,
    encode_temp,
)
from tmp451.errors import InvalidValueError
from tmp451.registers import ConsecutiveAlert, ConversionRate, DigitalFilter


def test_decode_temp_standard_is_identity():
    for raw in range(256):
        assert decode_temp(raw, False) == raw


def test_decode_temp_extended_offset():
    assert decode_temp(0, True) == -64
    assert decode_temp(64, True) == 0


def test_decode_temp_rejects_non_byte():
    with pytest.raises(InvalidValueError):
        decode_temp(256, False)


@pytest.mark.parametrize("extended, low, high", [(False, 0, 127), (True, -64, 191)])
def test_temp_round_trip(extended, low, high):
    for value in range(low, high + 1):
        assert decode_temp(encode_temp(value, extended), extended) == value


def test_encode_temp_clamps():
    assert encode_temp(500, False) == 127
    assert encode_temp(-5, False) == 0
    assert encode_temp(-500, True) == 0
    assert decode_temp(encode_temp(500, True), True) == 191


def test_decode_precise_ignores_low_nibble():
    assert decode_precise(10, 0x0F, False) == 10.0
    assert decode_precise(64, 0x0F, True) == 0.0


@pytest.mark.parametrize("extended, low, high", [(False, 0, 127), (True, -64, 191)])
def test_precise_round_trip(extended, low, high):
    steps = int((high - low) / 0.0625)
    for step in range(steps + 1):
        value = low + step * 0.0625
        msb, lsb = encode_precise(value, extended)
        assert 0 <= msb <= 0xFF
        assert lsb & 0x0F == 0
        assert decode_precise(msb, lsb, extended) == value


def test_encode_precise_truncates_to_step():
    msb, lsb = encode_precise(20.1, False)
    assert decode_precise(msb, lsb, False) == 20.0 + 0.0625


def test_encode_precise_clamps():
    assert encode_precise(1000.0, False) == encode_precise(127.0, False)
    assert encode_precise(-1000.0, True) == (0, 0)
    assert decode_precise(*encode_precise(-10.0, False), False) == 0.0


def test_n_factor_unity_point():
    assert encode_n_factor(1.008) == 0
    assert decode_n_factor(0) == pytest.approx(1.008)


def test_n_factor_clamps():
    assert encode_n_factor(0.5) == encode_n_factor(0.950198)
    assert encode_n_factor(2.0) == encode_n_factor(1.073837)


def test_n_factor_signed_register():
    # Negative adjustments raise the effective factor above 1.008.
    assert decode_n_factor(0xFF) > decode_n_factor(0) > decode_n_factor(0x01)


def test_n_factor_round_trip_within_one_step():
    neff = 0.951
    while neff < 1.073:
        assert abs(decode_n_factor(encode_n_factor(neff)) - neff) < 0.001
        neff += 0.003


def test_decode_conversion_rate():
    assert decode_conversion_rate(0) is ConversionRate.RATE_1_16HZ
    assert decode_conversion_rate(9) is ConversionRate.RATE_32HZ
    with pytest.raises(InvalidValueError):
        decode_conversion_rate(10)


@pytest.mark.parametrize(
    "consecutive, masks",
    [
        (ConsecutiveAlert.ONE, (0b0000_0000, 0b0000_1110)),
        (ConsecutiveAlert.TWO, (0b0000_0010, 0b0000_1100)),
        (ConsecutiveAlert.THREE, (0b0000_0110, 0b0000_1000)),
        (ConsecutiveAlert.FOUR, (0b0000_1110, 0b0000_0000)),
    ],
)
def test_consecutive_alert_masks(consecutive, masks):
    assert consecutive_alert_masks(consecutive) == masks


@pytest.mark.parametrize("consecutive", list(ConsecutiveAlert))
def test_consecutive_alert_masks_round_trip(consecutive):
    set_mask, clear_mask = consecutive_alert_masks(consecutive)
    for reg in range(256):
        updated = (reg | set_mask) & ~clear_mask & 0xFF
        assert decode_consecutive_alert(updated) is consecutive
        assert updated & 0xF1 == reg & 0xF1


def test_decode_consecutive_alert_invalid():
    with pytest.raises(InvalidValueError):
        decode_consecutive_alert(0b0000_0100)


def test_digital_filter_round_trip():
    for mode in DigitalFilter:
        assert decode_digital_filter(encode_digital_filter(mode)) is mode


def test_digital_filter_masks_upper_bits():
    assert decode_digital_filter(0xFC) is DigitalFilter.OFF
    assert encode_digital_filter(DigitalFilter.AVERAGE8) == 0b0000_0010


def test_digital_filter_invalid():
    with pytest.raises(InvalidValueError):
        decode_digital_filter(0b0000_0011)