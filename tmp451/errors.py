"""Exceptions raised by the TMP451 driver."""

from __future__ import annotations


class Tmp451Error(Exception):
    """Base class for every error raised by the driver."""


class I2cError(Tmp451Error):
    """The I2C bus reported a failure while talking to the sensor."""

    def __init__(self, error: BaseException | str) -> None:
        super().__init__(f"I2C bus error: {error}")
        self.error = error


class InvalidIdError(Tmp451Error):
    """The device answered with a product ID that is not a TMP451."""

    def __init__(self, product_id: int | None = None) -> None:
        if product_id is None:
            message = "unsupported device product ID"
        else:
            message = f"unsupported device product ID 0x{product_id:02X}"
        super().__init__(message)
        self.product_id = product_id


class InvalidValueError(Tmp451Error, ValueError):
    """A value read from or given for a register is not valid."""


class StateError(Tmp451Error, RuntimeError):
    """The operation is not allowed in the driver's current range or mode."""