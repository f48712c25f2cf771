"""Blocking driver for the TMP451 remote and local temperature sensor."""

from __future__ import annotations

import time
from typing import Callable, Protocol

from . import codec
from .errors import I2cError, InvalidIdError, InvalidValueError, StateError, Tmp451Error
from .registers import (
    DEFAULT_ADDRESS,
    PRODUCT_ID,
    Config,
    ConsecutiveAlert,
    ConversionRate,
    DigitalFilter,
    Pin6Mode,
    Register,
    Status,
)

_ALERT_MASK = 0b1000_0000
_SHUTDOWN_BIT = 0b0100_0000
_THERM2_BIT = 0b0010_0000
_EXT_RANGE_BIT = 0b0000_0100
_SMB_TIMEOUT_BIT = 0b1000_0000


class _I2cBus(Protocol):
    def write(self, address: int, data: bytes) -> None: ...

    def write_read(self, address: int, data: bytes, length: int) -> bytes: ...


def _sleep_ns(ns: int) -> None:
    time.sleep(ns / 1_000_000_000)


class TMP451:
    """A TMP451 sensor on an I2C bus.

    The bus object needs ``write(address, data)`` and
    ``write_read(address, data, length) -> bytes``. Any exception it raises
    is reported as :class:`I2cError`.

    The driver starts in the standard range (0 to 127 °C) and in continuous
    conversion mode. Range and mode change through :meth:`set_extended_range`,
    :meth:`set_standard_range`, :meth:`set_shutdown` and
    :meth:`set_continuous`; operations that the current mode does not allow
    raise :class:`StateError`.
    """

    def __init__(self, i2c: _I2cBus, address: int = DEFAULT_ADDRESS) -> None:
        self._i2c = i2c
        self.address = address
        self._extended = False
        self._shutdown = False
        self._rate = ConversionRate.RATE_16HZ
        product_id = self._read(Register.PRODUCT_ID)
        if product_id != PRODUCT_ID:
            raise InvalidIdError(product_id)

    # ----------------------------------------------------------------- state

    @property
    def extended(self) -> bool:
        """True while the driver works in the extended range (-64 to 191 °C)."""
        return self._extended

    @property
    def shutdown(self) -> bool:
        """True while the device is in shutdown (one-shot) mode."""
        return self._shutdown

    # ------------------------------------------------------------ bus access

    def _read(self, reg: Register) -> int:
        try:
            data = self._i2c.write_read(self.address, bytes([int(reg)]), 1)
        except Tmp451Error:
            raise
        except Exception as exc:
            raise I2cError(exc) from exc
        return data[0]

    def _write(self, reg: Register, value: int) -> None:
        try:
            self._i2c.write(self.address, bytes([int(reg), value & 0xFF]))
        except Tmp451Error:
            raise
        except Exception as exc:
            raise I2cError(exc) from exc

    def _update(self, read_reg: Register, write_reg: Register, mask_set: int, mask_clear: int) -> None:
        current = self._read(read_reg)
        updated = (current | mask_set) & ~mask_clear & 0xFF
        if current != updated:
            self._write(write_reg, updated)

    def _update_config(self, mask_set: int, mask_clear: int) -> None:
        self._update(Register.CONFIGURATION_READ, Register.CONFIGURATION_WRITE, mask_set, mask_clear)

    def _read_precise(self, msb_reg: Register, lsb_reg: Register) -> float:
        msb = self._read(msb_reg)
        lsb = self._read(lsb_reg)
        return codec.decode_precise(msb, lsb, self._extended)

    def _write_precise(self, msb_reg: Register, lsb_reg: Register, value: float) -> None:
        msb, lsb = codec.encode_precise(float(value), self._extended)
        self._write(msb_reg, msb)
        self._write(lsb_reg, lsb)

    def _read_temp(self, reg: Register) -> int:
        return codec.decode_temp(self._read(reg), self._extended)

    def _write_temp(self, reg: Register, value: int) -> None:
        self._write(reg, codec.encode_temp(value, self._extended))

    # --------------------------------------------------------------- general

    def status(self) -> Status:
        """The current status."""
        return Status.from_byte(self._read(Register.STATUS))

    def config(self) -> Config:
        """The current configuration."""
        return Config.from_byte(self._read(Register.CONFIGURATION_READ))

    def conversion_rate(self) -> ConversionRate:
        """The conversion rate stored in the device."""
        return codec.decode_conversion_rate(self._read(Register.CONVERSION_RATE_READ))

    def set_conversion_rate(self, rate: ConversionRate) -> TMP451:
        """Set the conversion rate."""
        try:
            rate = ConversionRate(rate)
        except ValueError:
            raise InvalidValueError(f"invalid conversion rate: {rate!r}") from None
        self._write(Register.CONVERSION_RATE_WRITE, int(rate))
        self._rate = rate
        return self

    def enable_alert(self) -> None:
        """Enable the ALERT output."""
        self._update_config(0, _ALERT_MASK)

    def disable_alert(self) -> None:
        """Disable the ALERT output."""
        self._update_config(_ALERT_MASK, 0)

    def enable_smb_timeout(self) -> None:
        """Enable the SMBus time-out."""
        self._update(Register.CONSECUTIVE_ALERT, Register.CONSECUTIVE_ALERT, _SMB_TIMEOUT_BIT, 0)

    def disable_smb_timeout(self) -> None:
        """Disable the SMBus time-out."""
        self._update(Register.CONSECUTIVE_ALERT, Register.CONSECUTIVE_ALERT, 0, _SMB_TIMEOUT_BIT)

    def smb_timeout_enabled(self) -> bool:
        """True if the SMBus time-out is enabled."""
        return bool(self._read(Register.CONSECUTIVE_ALERT) & _SMB_TIMEOUT_BIT)

    def set_pin6_mode(self, mode: Pin6Mode) -> None:
        """Use pin 6 as the ALERT or as the second THERM output."""
        if Pin6Mode(mode) is Pin6Mode.ALERT:
            self._update_config(0, _THERM2_BIT)
        else:
            self._update_config(_THERM2_BIT, 0)

    def set_consecutive_alert(self, consecutive: ConsecutiveAlert) -> None:
        """Set how many out-of-limit measurements trigger ALERT."""
        mask_set, mask_clear = codec.consecutive_alert_masks(consecutive)
        self._update(Register.CONSECUTIVE_ALERT, Register.CONSECUTIVE_ALERT, mask_set, mask_clear)

    def consecutive_alert(self) -> ConsecutiveAlert:
        """How many out-of-limit measurements trigger ALERT."""
        return codec.decode_consecutive_alert(self._read(Register.CONSECUTIVE_ALERT))

    def set_hysteresis(self, hysteresis: int) -> None:
        """Set the THERM hysteresis value."""
        if not 0 <= hysteresis <= 0xFF:
            raise InvalidValueError(f"hysteresis out of byte range: {hysteresis}")
        self._write(Register.THERM_HYSTERESIS_MSB, hysteresis)

    def hysteresis(self) -> int:
        """The THERM hysteresis value."""
        return self._read(Register.THERM_HYSTERESIS_MSB)

    def set_n_factor(self, neff: float) -> None:
        """Set the η-factor correction."""
        self._write(Register.NFACTOR_CORRECTION, codec.encode_n_factor(neff))

    def n_factor(self) -> float:
        """The effective η-factor."""
        return codec.decode_n_factor(self._read(Register.NFACTOR_CORRECTION))

    def set_digital_filter(self, filter: DigitalFilter) -> None:
        """Set the digital filter mode."""
        self._write(Register.DIGITAL_FILTER_CONTROL, codec.encode_digital_filter(filter))

    def digital_filter(self) -> DigitalFilter:
        """The digital filter mode."""
        return codec.decode_digital_filter(self._read(Register.DIGITAL_FILTER_CONTROL))

    def release(self) -> _I2cBus:
        """Give back the underlying I2C bus."""
        return self._i2c

    # ------------------------------------------------------- range and mode

    def set_extended_range(self) -> TMP451:
        """Switch to the extended range (-64 to 191 °C)."""
        if self._extended:
            raise StateError("already in extended range")
        self._update_config(_EXT_RANGE_BIT, 0)
        self._extended = True
        return self

    def set_standard_range(self) -> TMP451:
        """Switch to the standard range (0 to 127 °C)."""
        if not self._extended:
            raise StateError("already in standard range")
        self._update_config(0, _EXT_RANGE_BIT)
        self._extended = False
        return self

    def set_shutdown(self) -> TMP451:
        """Put the device into shutdown; conversions stop running on their own."""
        if self._shutdown:
            raise StateError("already in shutdown mode")
        self._update_config(_SHUTDOWN_BIT, 0)
        self._shutdown = True
        return self

    def set_continuous(self) -> TMP451:
        """Put the device into continuous conversion mode."""
        if not self._shutdown:
            raise StateError("already in continuous mode")
        self._update_config(0, _SHUTDOWN_BIT)
        self._shutdown = False
        return self

    def wait_one_shot(self, delay: Callable[[int], None] | None = None) -> None:
        """Start a one-shot conversion and wait for it to finish.

        ``delay`` is called with the wait in nanoseconds; by default the
        calling thread sleeps.
        """
        if not self._shutdown:
            raise StateError("one-shot conversion needs shutdown mode")
        self._write(Register.ONE_SHOT_START, 0)
        (delay or _sleep_ns)(self._rate.one_shot_delay_ns())

    # ---------------------------------------------------------- temperatures

    def local_temp(self) -> int:
        """Local temperature in whole degrees Celsius."""
        return self._read_temp(Register.LOCAL_TEMP_MSB)

    def precise_local_temp(self) -> float:
        """Local temperature in degrees Celsius, 0.0625 °C resolution."""
        return self._read_precise(Register.LOCAL_TEMP_MSB, Register.LOCAL_TEMP_LSB)

    def remote_temp(self) -> int:
        """Remote temperature in whole degrees Celsius."""
        return self._read_temp(Register.REMOTE_TEMP_MSB)

    def precise_remote_temp(self) -> float:
        """Remote temperature in degrees Celsius, 0.0625 °C resolution."""
        return self._read_precise(Register.REMOTE_TEMP_MSB, Register.REMOTE_TEMP_LSB)

    def set_local_temp_high_limit(self, limit: int) -> None:
        """Set the local high limit, clamped to the active range."""
        self._write_temp(Register.LOCAL_TEMP_HIGH_LIMIT_MSB_WRITE, limit)

    def local_temp_high_limit(self) -> int:
        """The local high limit in whole degrees."""
        return self._read_temp(Register.LOCAL_TEMP_HIGH_LIMIT_MSB_READ)

    def set_local_temp_low_limit(self, limit: int) -> None:
        """Set the local low limit, clamped to the active range."""
        self._write_temp(Register.LOCAL_TEMP_LOW_LIMIT_MSB_WRITE, limit)

    def local_temp_low_limit(self) -> int:
        """The local low limit in whole degrees."""
        return self._read_temp(Register.LOCAL_TEMP_LOW_LIMIT_MSB_READ)

    def set_remote_temp_high_limit(self, limit: int) -> None:
        """Set the remote high limit, clamped to the active range."""
        self._write_temp(Register.REMOTE_TEMP_HIGH_LIMIT_MSB_WRITE, limit)

    def remote_temp_high_limit(self) -> int:
        """The remote high limit in whole degrees."""
        return self._read_temp(Register.REMOTE_TEMP_HIGH_LIMIT_MSB_READ)

    def set_remote_temp_low_limit(self, limit: int) -> None:
        """Set the remote low limit, clamped to the active range."""
        self._write_temp(Register.REMOTE_TEMP_LOW_LIMIT_MSB_WRITE, limit)

    def remote_temp_low_limit(self) -> int:
        """The remote low limit in whole degrees."""
        return self._read_temp(Register.REMOTE_TEMP_LOW_LIMIT_MSB_READ)

    def set_precise_remote_temp_high_limit(self, limit: float) -> None:
        """Set the remote high limit with 0.0625 °C resolution."""
        self._write_precise(
            Register.REMOTE_TEMP_HIGH_LIMIT_MSB_WRITE, Register.REMOTE_TEMP_HIGH_LIMIT_LSB, limit
        )

    def precise_remote_temp_high_limit(self) -> float:
        """The remote high limit with 0.0625 °C resolution."""
        return self._read_precise(
            Register.REMOTE_TEMP_HIGH_LIMIT_MSB_READ, Register.REMOTE_TEMP_HIGH_LIMIT_LSB
        )

    def set_precise_remote_temp_low_limit(self, limit: float) -> None:
        """Set the remote low limit with 0.0625 °C resolution."""
        self._write_precise(
            Register.REMOTE_TEMP_LOW_LIMIT_MSB_WRITE, Register.REMOTE_TEMP_LOW_LIMIT_LSB, limit
        )

    def precise_remote_temp_low_limit(self) -> float:
        """The remote low limit with 0.0625 °C resolution."""
        return self._read_precise(
            Register.REMOTE_TEMP_LOW_LIMIT_MSB_READ, Register.REMOTE_TEMP_LOW_LIMIT_LSB
        )

    def set_remote_temp_offset(self, offset: int) -> None:
        """Set the remote reading offset in whole degrees."""
        self._write_temp(Register.REMOTE_TEMP_OFFSET_MSB, offset)

    def remote_temp_offset(self) -> int:
        """The remote reading offset in whole degrees."""
        return self._read_temp(Register.REMOTE_TEMP_OFFSET_MSB)

    def set_precise_remote_temp_offset(self, offset: float) -> None:
        """Set the remote reading offset with 0.0625 °C resolution."""
        self._write_precise(Register.REMOTE_TEMP_OFFSET_MSB, Register.REMOTE_TEMP_OFFSET_LSB, offset)

    def precise_remote_temp_offset(self) -> float:
        """The remote reading offset with 0.0625 °C resolution."""
        return self._read_precise(Register.REMOTE_TEMP_OFFSET_MSB, Register.REMOTE_TEMP_OFFSET_LSB)

    def set_local_temp_therm_limit(self, limit: int) -> None:
        """Set the local THERM limit in whole degrees."""
        self._write_temp(Register.LOCAL_TEMP_THERM_LIMIT_MSB, limit)

    def local_temp_therm_limit(self) -> int:
        """The local THERM limit in whole degrees."""
        return self._read_temp(Register.LOCAL_TEMP_THERM_LIMIT_MSB)

    def set_remote_temp_therm_limit(self, limit: int) -> None:
        """Set the remote THERM limit in whole degrees."""
        self._write_temp(Register.REMOTE_TEMP_THERM_LIMIT_MSB, limit)

    def remote_temp_therm_limit(self) -> int:
        """The remote THERM limit in whole degrees."""
        return self._read_temp(Register.REMOTE_TEMP_THERM_LIMIT_MSB)