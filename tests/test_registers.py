from dataclasses import FrozenInstanceError, fields

import pytest

from tmp451.registers import Config, ConversionRate, Register, Status


@pytest.mark.parametrize(
    "rate, ns",
    [
        (ConversionRate.RATE_1_16HZ, 16_000_000),
        (ConversionRate.RATE_1_8HZ, 8_000_000),
        (ConversionRate.RATE_1_4HZ, 4_000_000),
        (ConversionRate.RATE_1_2HZ, 2_000_000),
        (ConversionRate.RATE_1HZ, 1_000_000),
        (ConversionRate.RATE_2HZ, 500_000),
        (ConversionRate.RATE_4HZ, 250_000),
        (ConversionRate.RATE_8HZ, 125_000),
        (ConversionRate.RATE_16HZ, 62_500),
        (ConversionRate.RATE_32HZ, 31_250),
    ],
)
def test_one_shot_delay(rate, ns):
    assert rate.one_shot_delay_ns() == ns


@pytest.mark.parametrize(
    "slower, faster",
    [
        (ConversionRate.RATE_1_16HZ, ConversionRate.RATE_1_8HZ),
        (ConversionRate.RATE_1_8HZ, ConversionRate.RATE_1_4HZ),
        (ConversionRate.RATE_1_4HZ, ConversionRate.RATE_1_2HZ),
        (ConversionRate.RATE_1_2HZ, ConversionRate.RATE_1HZ),
        (ConversionRate.RATE_1HZ, ConversionRate.RATE_2HZ),
        (ConversionRate.RATE_2HZ, ConversionRate.RATE_4HZ),
        (ConversionRate.RATE_4HZ, ConversionRate.RATE_8HZ),
        (ConversionRate.RATE_8HZ, ConversionRate.RATE_16HZ),
        (ConversionRate.RATE_16HZ, ConversionRate.RATE_32HZ),
    ],
)
def test_delay_halves_as_rate_doubles(slower, faster):
    assert slower.one_shot_delay_ns() == 2 * faster.one_shot_delay_ns()


def test_conversion_rate_from_register_value():
    assert ConversionRate(8) is ConversionRate.RATE_16HZ
    assert int(ConversionRate.RATE_1_16HZ) == 0


def test_register_usable_as_byte():
    assert Register(0xFE) is Register.PRODUCT_ID
    assert int(Register.PRODUCT_ID) == 0xFE


@pytest.mark.parametrize(
    "mask, name",
    [
        (0x80, "busy"),
        (0x40, "local_temp_high_limit"),
        (0x20, "local_temp_low_limit"),
        (0x10, "remote_temp_high_limit"),
        (0x08, "remote_temp_low_limit"),
        (0x04, "open"),
        (0x02, "remote_therm_limit"),
        (0x01, "local_therm_limit"),
    ],
)
def test_status_single_bit(mask, name):
    status = Status.from_byte(mask)
    for field in fields(Status):
        assert getattr(status, field.name) is (field.name == name)


def test_status_all_and_none():
    assert Status.from_byte(0) == Status()
    full = Status.from_byte(0xFF)
    assert all(getattr(full, f.name) for f in fields(Status))


def test_status_is_frozen():
    status = Status.from_byte(0)
    with pytest.raises(FrozenInstanceError):
        status.busy = True
    assert status.busy is False


@pytest.mark.parametrize(
    "mask, name",
    [
        (0x80, "alert_mask"),
        (0x40, "sd_mode"),
        (0x20, "therm2_mode"),
        (0x04, "ext_range"),
    ],
)
def test_config_single_bit(mask, name):
    config = Config.from_byte(mask)
    for field in fields(Config):
        assert getattr(config, field.name) is (field.name == name)


def test_config_ignores_unused_bits():
    assert Config.from_byte(0x1B) == Config()
    assert Config.from_byte(0xFF) == Config(True, True, True, True)