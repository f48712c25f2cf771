"""Asynchronous driver for the TMP451 remote and local temperature sensor."""

from __future__ import annotations

import asyncio
import inspect
from typing import Any, Awaitable, Callable, Protocol

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


class _AsyncI2cBus(Protocol):
    async def write(self, address: int, data: bytes) -> None: ...

    async def write_read(self, address: int, data: bytes, length: int) -> bytes: ...


async def _sleep_ns(ns: int) -> None:
    await asyncio.sleep(ns / 1_000_000_000)


class AsyncTMP451:
    """A TMP451 sensor on an asynchronous I2C bus.

    The bus object needs coroutine methods ``write(address, data)`` and
    ``write_read(address, data, length) -> bytes``. Any exception they raise
    is reported as :class:`I2cError`.

    Build instances with :meth:`create`, which checks the product ID. The
    driver starts in the standard range and in continuous conversion mode.
    """

    def __init__(self, i2c: _AsyncI2cBus, address: int = DEFAULT_ADDRESS) -> None:
        self._i2c = i2c
        self.address = address
        self._extended = False
        self._shutdown = False
        self._rate = ConversionRate.RATE_16HZ

    @classmethod
    async def create(cls, i2c: _AsyncI2cBus, address: int = DEFAULT_ADDRESS) -> AsyncTMP451:
        """Open the sensor at ``address`` and check that it is a TMP451."""
        sensor = cls(i2c, address)
        product_id = await sensor._read(Register.PRODUCT_ID)
        if product_id != PRODUCT_ID:
            raise InvalidIdError(product_id)
        return sensor

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

    async def _read(self, reg: Register) -> int:
        try:
            data = await self._i2c.write_read(self.address, bytes([int(reg)]), 1)
        except Tmp451Error:
            raise
        except Exception as exc:
            raise I2cError(exc) from exc
        return data[0]

    async def _write(self, reg: Register, value: int) -> None:
        try:
            await self._i2c.write(self.address, bytes([int(reg), value & 0xFF]))
        except Tmp451Error:
            raise
        except Exception as exc:
            raise I2cError(exc) from exc

    async def _update(
        self, read_reg: Register, write_reg: Register, mask_set: int, mask_clear: int
    ) -> None:
        current = await self._read(read_reg)
        updated = (current | mask_set) & ~mask_clear & 0xFF
        if current != updated:
            await self._write(write_reg, updated)

    async def _update_config(self, mask_set: int, mask_clear: int) -> None:
        await self._update(
            Register.CONFIGURATION_READ, Register.CONFIGURATION_WRITE, mask_set, mask_clear
        )

    async def _read_precise(self, msb_reg: Register, lsb_reg: Register) -> float:
        msb = await self._read(msb_reg)
        lsb = await self._read(lsb_reg)
        return codec.decode_precise(msb, lsb, self._extended)

    async def _write_precise(self, msb_reg: Register, lsb_reg: Register, value: float) -> None:
        msb, lsb = codec.encode_precise(float(value), self._extended)
        await self._write(msb_reg, msb)
        await self._write(lsb_reg, lsb)

    async def _read_temp(self, reg: Register) -> int:
        return codec.decode_temp(await self._read(reg), self._extended)

    async def _write_temp(self, reg: Register, value: int) -> None:
        await self._write(reg, codec.encode_temp(value, self._extended))

    # --------------------------------------------------------------- general

    async def status(self) -> Status:
        """The current status."""
        return Status.from_byte(await self._read(Register.STATUS))

    async def config(self) -> Config:
        """The current configuration."""
        return Config.from_byte(await self._read(Register.CONFIGURATION_READ))

    async def conversion_rate(self) -> ConversionRate:
        """The conversion rate stored in the device."""
        return codec.decode_conversion_rate(await self._read(Register.CONVERSION_RATE_READ))

    async def set_conversion_rate(self, rate: ConversionRate) -> AsyncTMP451:
        """Set the conversion rate."""
        try:
            rate = ConversionRate(rate)
        except ValueError:
            raise InvalidValueError(f"invalid conversion rate: {rate!r}") from None
        await self._write(Register.CONVERSION_RATE_WRITE, int(rate))
        self._rate = rate
        return self

    async def enable_alert(self) -> None:
        """Enable the ALERT output."""
        await self._update_config(0, _ALERT_MASK)

    async def disable_alert(self) -> None:
        """Disable the ALERT output."""
        await self._update_config(_ALERT_MASK, 0)

    async def enable_smb_timeout(self) -> None:
        """Enable the SMBus time-out."""
        await self._update(
            Register.CONSECUTIVE_ALERT, Register.CONSECUTIVE_ALERT, _SMB_TIMEOUT_BIT, 0
        )

    async def disable_smb_timeout(self) -> None:
        """Disable the SMBus time-out."""
        await self._update(
            Register.CONSECUTIVE_ALERT, Register.CONSECUTIVE_ALERT, 0, _SMB_TIMEOUT_BIT
        )

    async def smb_timeout_enabled(self) -> bool:
        """True if the SMBus time-out is enabled."""
        return bool(await self._read(Register.CONSECUTIVE_ALERT) & _SMB_TIMEOUT_BIT)

    async def set_pin6_mode(self, mode: Pin6Mode) -> None:
        """Use pin 6 as the ALERT or as the second THERM output."""
        if Pin6Mode(mode) is Pin6Mode.ALERT:
            await self._update_config(0, _THERM2_BIT)
        else:
            await self._update_config(_THERM2_BIT, 0)

    async def set_consecutive_alert(self, consecutive: ConsecutiveAlert) -> None:
        """Set how many out-of-limit measurements trigger ALERT."""
        mask_set, mask_clear = codec.consecutive_alert_masks(consecutive)
        await self._update(
            Register.CONSECUTIVE_ALERT, Register.CONSECUTIVE_ALERT, mask_set, mask_clear
        )

    async def consecutive_alert(self) -> ConsecutiveAlert:
        """How many out-of-limit measurements trigger ALERT."""
        return codec.decode_consecutive_alert(await self._read(Register.CONSECUTIVE_ALERT))

    async def set_hysteresis(self, hysteresis: int) -> None:
        """Set the THERM hysteresis value."""
        if not 0 <= hysteresis <= 0xFF:
            raise InvalidValueError(f"hysteresis out of byte range: {hysteresis}")
        await self._write(Register.THERM_HYSTERESIS_MSB, hysteresis)

    async def hysteresis(self) -> int:
        """The THERM hysteresis value."""
        return await self._read(Register.THERM_HYSTERESIS_MSB)

    async def set_n_factor(self, neff: float) -> None:
        """Set the η-factor correction."""
        await self._write(Register.NFACTOR_CORRECTION, codec.encode_n_factor(neff))

    async def n_factor(self) -> float:
        """The effective η-factor."""
        return codec.decode_n_factor(await self._read(Register.NFACTOR_CORRECTION))

    async def set_digital_filter(self, filter: DigitalFilter) -> None:
        """Set the digital filter mode."""
        await self._write(Register.DIGITAL_FILTER_CONTROL, codec.encode_digital_filter(filter))

    async def digital_filter(self) -> DigitalFilter:
        """The digital filter mode."""
        return codec.decode_digital_filter(await self._read(Register.DIGITAL_FILTER_CONTROL))

    def release(self) -> _AsyncI2cBus:
        """Give back the underlying I2C bus."""
        return self._i2c

    # ------------------------------------------------------- range and mode

    async def set_extended_range(self) -> AsyncTMP451:
        """Switch to the extended range (-64 to 191 °C)."""
        if self._extended:
            raise StateError("already in extended range")
        await self._update_config(_EXT_RANGE_BIT, 0)
        self._extended = True
        return self

    async def set_standard_range(self) -> AsyncTMP451:
        """Switch to the standard range (0 to 127 °C)."""
        if not self._extended:
            raise StateError("already in standard range")
        await self._update_config(0, _EXT_RANGE_BIT)
        self._extended = False
        return self

    async def set_shutdown(self) -> AsyncTMP451:
        """Put the device into shutdown; conversions stop running on their own."""
        if self._shutdown:
            raise StateError("already in shutdown mode")
        await self._update_config(_SHUTDOWN_BIT, 0)
        self._shutdown = True
        return self

    async def set_continuous(self) -> AsyncTMP451:
        """Put the device into continuous conversion mode."""
        if not self._shutdown:
            raise StateError("already in continuous mode")
        await self._update_config(0, _SHUTDOWN_BIT)
        self._shutdown = False
        return self

    async def wait_one_shot(
        self, delay: Callable[[int], Awaitable[Any] | Any] | None = None
    ) -> None:
        """Start a one-shot conversion and wait for it to finish.

        ``delay`` is called with the wait in nanoseconds and may return an
        awaitable; by default the task sleeps with :func:`asyncio.sleep`.
        """
        if not self._shutdown:
            raise StateError("one-shot conversion needs shutdown mode")
        await self._write(Register.ONE_SHOT_START, 0)
        result = (delay or _sleep_ns)(self._rate.one_shot_delay_ns())
        if inspect.isawaitable(result):
            await result

    # ---------------------------------------------------------- temperatures

    async def local_temp(self) -> int:
        """Local temperature in whole degrees Celsius."""
        return await self._read_temp(Register.LOCAL_TEMP_MSB)

    async def precise_local_temp(self) -> float:
        """Local temperature in degrees Celsius, 0.0625 °C resolution."""
        return await self._read_precise(Register.LOCAL_TEMP_MSB, Register.LOCAL_TEMP_LSB)

    async def remote_temp(self) -> int:
        """Remote temperature in whole degrees Celsius."""
        return await self._read_temp(Register.REMOTE_TEMP_MSB)

    async def precise_remote_temp(self) -> float:
        """Remote temperature in degrees Celsius, 0.0625 °C resolution."""
        return await self._read_precise(Register.REMOTE_TEMP_MSB, Register.REMOTE_TEMP_LSB)

    async def set_local_temp_high_limit(self, limit: int) -> None:
        """Set the local high limit, clamped to the active range."""
        await self._write_temp(Register.LOCAL_TEMP_HIGH_LIMIT_MSB_WRITE, limit)

    async def local_temp_high_limit(self) -> int:
        """The local high limit in whole degrees."""
        return await self._read_temp(Register.LOCAL_TEMP_HIGH_LIMIT_MSB_READ)

    async def set_local_temp_low_limit(self, limit: int) -> None:
        """Set the local low limit, clamped to the active range."""
        await self._write_temp(Register.LOCAL_TEMP_LOW_LIMIT_MSB_WRITE, limit)

    async def local_temp_low_limit(self) -> int:
        """The local low limit in whole degrees."""
        return await self._read_temp(Register.LOCAL_TEMP_LOW_LIMIT_MSB_READ)

    async def set_remote_temp_high_limit(self, limit: int) -> None:
        """Set the remote high limit, clamped to the active range."""
        await self._write_temp(Register.REMOTE_TEMP_HIGH_LIMIT_MSB_WRITE, limit)

    async def remote_temp_high_limit(self) -> int:
        """The remote high limit in whole degrees."""
        return await self._read_temp(Register.REMOTE_TEMP_HIGH_LIMIT_MSB_READ)

    async def set_remote_temp_low_limit(self, limit: int) -> None:
        """Set the remote low limit, clamped to the active range."""
        await self._write_temp(Register.REMOTE_TEMP_LOW_LIMIT_MSB_WRITE, limit)

    async def remote_temp_low_limit(self) -> int:
        """The remote low limit in whole degrees."""
        return await self._read_temp(Register.REMOTE_TEMP_LOW_LIMIT_MSB_READ)

    async def set_precise_remote_temp_high_limit(self, limit: float) -> None:
        """Set the remote high limit with 0.0625 °C resolution."""
        await self._write_precise(
            Register.REMOTE_TEMP_HIGH_LIMIT_MSB_WRITE, Register.REMOTE_TEMP_HIGH_LIMIT_LSB, limit
        )

    async def precise_remote_temp_high_limit(self) -> float:
        """The remote high limit with 0.0625 °C resolution."""
        return await self._read_precise(
            Register.REMOTE_TEMP_HIGH_LIMIT_MSB_READ, Register.REMOTE_TEMP_HIGH_LIMIT_LSB
        )

    async def set_precise_remote_temp_low_limit(self, limit: float) -> None:
        """Set the remote low limit with 0.0625 °C resolution."""
        await self._write_precise(
            Register.REMOTE_TEMP_LOW_LIMIT_MSB_WRITE, Register.REMOTE_TEMP_LOW_LIMIT_LSB, limit
        )

    async def precise_remote_temp_low_limit(self) -> float:
        """The remote low limit with 0.0625 °C resolution."""
        return await self._read_precise(
            Register.REMOTE_TEMP_LOW_LIMIT_MSB_READ, Register.REMOTE_TEMP_LOW_LIMIT_LSB
        )

    async def set_remote_temp_offset(self, offset: int) -> None:
        """Set the remote reading offset in whole degrees."""
        await self._write_temp(Register.REMOTE_TEMP_OFFSET_MSB, offset)

    async def remote_temp_offset(self) -> int:
        """The remote reading offset in whole degrees."""
        return await self._read_temp(Register.REMOTE_TEMP_OFFSET_MSB)

    async def set_precise_remote_temp_offset(self, offset: float) -> None:
        """Set the remote reading offset with 0.0625 °C resolution."""
        await self._write_precise(
            Register.REMOTE_TEMP_OFFSET_MSB, Register.REMOTE_TEMP_OFFSET_LSB, offset
        )

    async def precise_remote_temp_offset(self) -> float:
        """The remote reading offset with 0.0625 °C resolution."""
        return await self._read_precise(
            Register.REMOTE_TEMP_OFFSET_MSB, Register.REMOTE_TEMP_OFFSET_LSB
        )

    async def set_local_temp_therm_limit(self, limit: int) -> None:
        """Set the local THERM limit in whole degrees."""
        await self._write_temp(Register.LOCAL_TEMP_THERM_LIMIT_MSB, limit)

    async def local_temp_therm_limit(self) -> int:
        """The local THERM limit in whole degrees."""
        return await self._read_temp(Register.LOCAL_TEMP_THERM_LIMIT_MSB)

    async def set_remote_temp_therm_limit(self, limit: int) -> None:
        """Set the remote THERM limit in whole degrees."""
        await self._write_temp(Register.REMOTE_TEMP_THERM_LIMIT_MSB, limit)

    async def remote_temp_therm_limit(self) -> int:
        """The remote THERM limit in whole degrees."""
        return await self._read_temp(Register.REMOTE_TEMP_THERM_LIMIT_MSB)