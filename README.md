# tmp451

A driver for the TMP451 remote and local temperature sensor. It talks to
the device through an I2C bus object that you supply. There is a blocking
driver, `tmp451.device.TMP451`, and an asyncio driver,
`tmp451.aio.AsyncTMP451`.

## Installing

```
pip install tmp451
```

## The bus object

The package does no bus access of its own and ships no bus
implementation. Pass the driver an object with two methods:

- `write(address, data)` sends the bytes in `data` to the device.
- `write_read(address, data, length)` sends `data`, then reads back
  `length` bytes and returns them.

For `AsyncTMP451` both methods must be coroutines. Any exception the bus
raises reaches the caller as `tmp451.errors.I2cError`, with the original
exception in its `error` attribute.

## Blocking use

```python
from tmp451.device import TMP451
from tmp451.registers import ConversionRate, DigitalFilter

sensor = TMP451(bus, 0x4C)           # reads and checks the product ID
sensor.set_conversion_rate(ConversionRate.RATE_4HZ)
sensor.set_digital_filter(DigitalFilter.AVERAGE4)

print(sensor.local_temp())           # whole degrees Celsius
print(sensor.precise_remote_temp())  # 0.0625 °C resolution
print(sensor.status())               # Status dataclass
print(sensor.config())               # Config dataclass
```

The address defaults to `tmp451.registers.DEFAULT_ADDRESS` (0x4C).

### Range

The driver starts in the standard range, 0 to 127 °C. After
`set_extended_range()` temperatures, limits and offsets are read and
written in the extended range, -64 to 191 °C; `set_standard_range()`
switches back. The `extended` property tells which range is active.
Values given to the limit and offset setters are clamped to the active
range.

```python
sensor.set_extended_range()
sensor.set_remote_temp_high_limit(150)
sensor.set_precise_remote_temp_low_limit(-10.5)
```

### Shutdown and one-shot conversions

`set_shutdown()` stops continuous conversions; `set_continuous()`
restarts them, and the `shutdown` property tells which mode is active.
In shutdown mode `wait_one_shot()` starts one conversion and waits for
a time set by the conversion rate last given to `set_conversion_rate`
(16 Hz unless changed). By default it sleeps; pass a callable to wait
another way — it is called with the wait in nanoseconds:

```python
sensor.set_shutdown()
sensor.wait_one_shot()
print(sensor.precise_local_temp())
sensor.set_continuous()
```

Calling a method that does not fit the current mode, such as
`wait_one_shot` while converting continuously or `set_extended_range`
when already extended, raises `StateError`.

### Other settings

- `enable_alert()` / `disable_alert()`
- `set_pin6_mode(Pin6Mode.ALERT | Pin6Mode.THERM2)`
- `set_consecutive_alert(ConsecutiveAlert.ONE … FOUR)` / `consecutive_alert()`
- `enable_smb_timeout()` / `disable_smb_timeout()` / `smb_timeout_enabled()`
- `set_hysteresis(value)` / `hysteresis()` — a raw byte, 0 to 255
- `set_n_factor(neff)` / `n_factor()` — η-factor, clamped to 0.950198–1.073837
- local and remote THERM limits, remote offset, high and low limits
- `release()` returns the bus object.

## asyncio use

`AsyncTMP451` has the same methods as coroutines; build it with
`create`, which checks the product ID:

```python
from tmp451.aio import AsyncTMP451

sensor = await AsyncTMP451.create(bus, 0x4C)
print(await sensor.precise_local_temp())

await sensor.set_shutdown()
await sensor.wait_one_shot()        # asyncio.sleep by default
```

A `delay` callable given to `wait_one_shot` may be a plain function or
return an awaitable.

## Register helpers

`tmp451.registers` holds the register map (`Register`) and the value
types. `tmp451.codec` converts between register bytes and physical
values, for example `decode_precise(msb, lsb, extended)`,
`encode_precise(value, extended)`, `encode_n_factor(neff)` and
`decode_n_factor(raw)`.

## Errors

All errors derive from `tmp451.errors.Tmp451Error`:

- `I2cError` wraps a failure raised by the bus.
- `InvalidIdError` means the device did not report the TMP451 product ID
  (0x55); the ID read is in `product_id`.
- `InvalidValueError` (also a `ValueError`) means a register held a value
  the driver does not recognise, or a given value is out of range.
- `StateError` (also a `RuntimeError`) means the call does not fit the
  current range or conversion mode.

## Tests

```
pip install -e ".[test]"
pytest
```