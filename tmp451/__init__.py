"""Blocking and asyncio drivers for the TMP451 temperature sensor over I2C."""

__version__ = "0.3.0"