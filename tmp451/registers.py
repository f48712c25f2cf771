"""Register map and register-level data types of the TMP451."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum

DEFAULT_ADDRESS = 0x4C
"""The sensor's usual I2C address."""

PRODUCT_ID = 0x55
"""Value of the product ID register on a TMP451."""


class Register(IntEnum):
    """Register addresses of the TMP451."""

    LOCAL_TEMP_MSB = 0x00
    REMOTE_TEMP_MSB = 0x01
    STATUS = 0x02
    CONFIGURATION_READ = 0x03
    CONVERSION_RATE_READ = 0x04
    LOCAL_TEMP_HIGH_LIMIT_MSB_READ = 0x05
    LOCAL_TEMP_LOW_LIMIT_MSB_READ = 0x06
    REMOTE_TEMP_HIGH_LIMIT_MSB_READ = 0x07
    REMOTE_TEMP_LOW_LIMIT_MSB_READ = 0x08
    CONFIGURATION_WRITE = 0x09
    CONVERSION_RATE_WRITE = 0x0A
    LOCAL_TEMP_HIGH_LIMIT_MSB_WRITE = 0x0B
    LOCAL_TEMP_LOW_LIMIT_MSB_WRITE = 0x0C
    REMOTE_TEMP_HIGH_LIMIT_MSB_WRITE = 0x0D
    REMOTE_TEMP_LOW_LIMIT_MSB_WRITE = 0x0E
    ONE_SHOT_START = 0x0F
    REMOTE_TEMP_LSB = 0x10
    REMOTE_TEMP_OFFSET_MSB = 0x11
    REMOTE_TEMP_OFFSET_LSB = 0x12
    REMOTE_TEMP_HIGH_LIMIT_LSB = 0x13
    REMOTE_TEMP_LOW_LIMIT_LSB = 0x14
    LOCAL_TEMP_LSB = 0x15
    REMOTE_TEMP_THERM_LIMIT_MSB = 0x19
    LOCAL_TEMP_THERM_LIMIT_MSB = 0x20
    THERM_HYSTERESIS_MSB = 0x21
    CONSECUTIVE_ALERT = 0x22
    NFACTOR_CORRECTION = 0x23
    DIGITAL_FILTER_CONTROL = 0x24
    PRODUCT_ID = 0xFE


class ConversionRate(IntEnum):
    """ADC conversion rates; the value is the register encoding."""

    RATE_1_16HZ = 0
    RATE_1_8HZ = 1
    RATE_1_4HZ = 2
    RATE_1_2HZ = 3
    RATE_1HZ = 4
    RATE_2HZ = 5
    RATE_4HZ = 6
    RATE_8HZ = 7
    RATE_16HZ = 8
    RATE_32HZ = 9

    def one_shot_delay_ns(self) -> int:
        """Nanoseconds to wait for a one-shot conversion at this rate."""
        return _ONE_SHOT_DELAY_NS[self]


_ONE_SHOT_DELAY_NS = {
    ConversionRate.RATE_1_16HZ: 16_000_000,
    ConversionRate.RATE_1_8HZ: 8_000_000,
    ConversionRate.RATE_1_4HZ: 4_000_000,
    ConversionRate.RATE_1_2HZ: 2_000_000,
    ConversionRate.RATE_1HZ: 1_000_000,
    ConversionRate.RATE_2HZ: 500_000,
    ConversionRate.RATE_4HZ: 250_000,
    ConversionRate.RATE_8HZ: 125_000,
    ConversionRate.RATE_16HZ: 62_500,
    ConversionRate.RATE_32HZ: 31_250,
}


@dataclass(frozen=True)
class Status:
    """Contents of the status register."""

    busy: bool = False
    local_temp_high_limit: bool = False
    local_temp_low_limit: bool = False
    remote_temp_high_limit: bool = False
    remote_temp_low_limit: bool = False
    open: bool = False
    remote_therm_limit: bool = False
    local_therm_limit: bool = False

    @classmethod
    def from_byte(cls, value: int) -> Status:
        """Decode a raw status register value."""
        return cls(
            busy=bool(value & 0x80),
            local_temp_high_limit=bool(value & 0x40),
            local_temp_low_limit=bool(value & 0x20),
            remote_temp_high_limit=bool(value & 0x10),
            remote_temp_low_limit=bool(value & 0x08),
            open=bool(value & 0x04),
            remote_therm_limit=bool(value & 0x02),
            local_therm_limit=bool(value & 0x01),
        )


@dataclass(frozen=True)
class Config:
    """Contents of the configuration register."""

    alert_mask: bool = False
    sd_mode: bool = False
    therm2_mode: bool = False
    ext_range: bool = False

    @classmethod
    def from_byte(cls, value: int) -> Config:
        """Decode a raw configuration register value."""
        return cls(
            alert_mask=bool(value & 0x80),
            sd_mode=bool(value & 0x40),
            therm2_mode=bool(value & 0x20),
            ext_range=bool(value & 0x04),
        )


class Pin6Mode(Enum):
    """Function of pin 6."""

    ALERT = "alert"
    THERM2 = "therm2"


class ConsecutiveAlert(Enum):
    """Consecutive out-of-limit measurements before ALERT is raised."""

    ONE = 1
    TWO = 2
    THREE = 3
    FOUR = 4


class DigitalFilter(Enum):
    """Digital filtering mode; the value is the register encoding."""

    OFF = 0
    AVERAGE4 = 1
    AVERAGE8 = 2