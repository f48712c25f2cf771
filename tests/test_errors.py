from tmp451.errors import (
    I2cError,
    InvalidIdError,
    InvalidValueError,
    StateError,
    Tmp451Error,
)


def test_i2c_error_keeps_cause():
    cause = OSError("bus stuck")
    err = I2cError(cause)
    assert err.error is cause
    assert "bus stuck" in str(err)


def test_i2c_error_is_driver_error():
    err = I2cError("nack")
    assert isinstance(err, Tmp451Error)
    assert "nack" in str(err)


def test_invalid_id_reports_product_id():
    err = InvalidIdError(0x12)
    assert err.product_id == 0x12
    assert "0x12" in str(err)


def test_invalid_id_without_value():
    err = InvalidIdError()
    assert err.product_id is None
    assert "product ID" in str(err)


def test_invalid_value_is_value_error():
    err = InvalidValueError("bad")
    assert isinstance(err, ValueError)
    assert isinstance(err, Tmp451Error)
    assert "bad" in str(err)


def test_state_error_hierarchy():
    err = StateError("wrong mode")
    assert isinstance(err, RuntimeError)
    assert isinstance(err, Tmp451Error)
    assert "wrong mode" in str(err)