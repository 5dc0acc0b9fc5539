from datetime import datetime, timedelta, timezone

import pytest

from clikit.values import (
    FloatValue,
    GenericValue,
    IntegerConfig,
    IntValue,
    NumError,
    StringValue,
    TimestampConfig,
    TimestampValue,
    UintValue,
)


@pytest.mark.parametrize(
    "bits, text, expected",
    [
        (64, "-234567", -234567),
        (8, "127", 127),
        (16, "32767", 32767),
        (32, "2147483647", 2147483647),
        (64, "-2147483648", -2147483648),
    ],
)
def test_int_valid(bits, text, expected):
    value = IntValue(bits=bits)
    value.set(text)
    assert value.get() == expected


@pytest.mark.parametrize("bits", [8, 16, 32, 64])
def test_int_invalid(bits):
    with pytest.raises(NumError) as info:
        IntValue(bits=bits).set("gopher")
    assert info.value.reason == "invalid syntax"


@pytest.mark.parametrize("bits, text", [(16, "32768"), (32, "2147483648"), (8, "-129")])
def test_int_out_of_range(bits, text):
    with pytest.raises(NumError) as info:
        IntValue(bits=bits).set(text)
    assert info.value.reason == "value out of range"


@pytest.mark.parametrize("config", [IntegerConfig(), IntegerConfig(base=10)])
def test_int_ext_base10(config):
    value = IntValue(0, config)
    value.set("234567")
    assert str(value) == "234567"


def test_int_hex_default():
    value = IntValue(0, IntegerConfig(base=16))
    value.set("FFFF")
    assert str(value) == "ffff"
    assert value.get() == 65535


@pytest.mark.parametrize(
    "text, expected",
    [("0x1f", 31), ("0b101", 5), ("0o17", 15), ("017", 15), ("1_000", 1000), ("0", 0), ("+7", 7)],
)
def test_int_base_zero_prefixes(text, expected):
    value = IntValue()
    value.set(text)
    assert value.get() == expected


@pytest.mark.parametrize("text", ["1__0", "_1", "1_", "0x"])
def test_int_base_zero_bad_syntax(text):
    with pytest.raises(NumError):
        IntValue().set(text)


def test_int_underscore_rejected_with_explicit_base():
    with pytest.raises(NumError):
        IntValue(0, IntegerConfig(base=10)).set("1_000")


def test_int_invalid_base():
    with pytest.raises(NumError) as info:
        IntValue(0, IntegerConfig(base=1)).set("1")
    assert "invalid base" in str(info.value)


def test_int_unsupported_bits():
    with pytest.raises(ValueError):
        IntValue(bits=12)


@pytest.mark.parametrize(
    "bits, text, expected",
    [
        (64, "234567", 234567),
        (8, "255", 255),
        (16, "65535", 65535),
        (32, "2147483648", 2147483648),
        (64, "21474836480", 21474836480),
    ],
)
def test_uint_valid(bits, text, expected):
    value = UintValue(bits=bits)
    value.set(text)
    assert value.get() == expected


@pytest.mark.parametrize("bits", [8, 16, 32, 64])
def test_uint_invalid(bits):
    with pytest.raises(NumError):
        UintValue(bits=bits).set("gopher")


@pytest.mark.parametrize("bits, text", [(16, "65536"), (32, "4294967297")])
def test_uint_out_of_range(bits, text):
    with pytest.raises(NumError) as info:
        UintValue(bits=bits).set(text)
    assert info.value.reason == "value out of range"


def test_uint_rejects_sign():
    with pytest.raises(NumError):
        UintValue().set("-1")


@pytest.mark.parametrize("config", [IntegerConfig(), IntegerConfig(base=10)])
def test_uint_ext_base10(config):
    value = UintValue(0, config)
    value.set("234567")
    assert str(value) == "234567"


def test_uint_ext_hex():
    value = UintValue(0, IntegerConfig(base=16))
    value.set("39447")
    assert str(value) == "39447"
    assert value.get() == 0x39447


def test_uint_ext_hex_default():
    value = UintValue(0, IntegerConfig(base=16))
    value.set("FFFF")
    assert str(value) == "ffff"


def test_float_valid():
    value = FloatValue()
    value.set("-234567")
    assert value.get() == -234567.0


def test_float32_valid():
    value = FloatValue(bits=32)
    value.set("2147483647")
    assert value.get() == 2147483648.0


def test_float64_valid():
    value = FloatValue(bits=64)
    value.set("-2147483648")
    assert value.get() == -2147483648.0


@pytest.mark.parametrize("bits", [32, 64])
def test_float_invalid(bits):
    with pytest.raises(NumError):
        FloatValue(bits=bits).set("gopher")


def test_float_value_string():
    assert str(FloatValue(100.0)) == "100"


@pytest.mark.parametrize(
    "number, expected",
    [
        (1e6, "1e+06"),
        (123456.0, "123456"),
        (0.5, "0.5"),
        (0.0001, "0.0001"),
        (0.00001, "1e-05"),
        (-0.0, "-0"),
        (float("inf"), "+Inf"),
        (float("nan"), "NaN"),
        (1.25e21, "1.25e+21"),
    ],
)
def test_float_to_string(number, expected):
    assert FloatValue().to_string(number) == expected


def test_float32_to_string_is_shortest():
    value = FloatValue(bits=32)
    value.set("0.1")
    assert str(value) == "0.1"


def test_float64_overflow():
    with pytest.raises(NumError):
        FloatValue().set("1e400")


@pytest.mark.parametrize("text, expected", [("0x1p-2", 0.25), ("1_000.5", 1000.5), ("-Inf", float("-inf"))])
def test_float_other_forms(text, expected):
    value = FloatValue()
    value.set(text)
    assert value.get() == expected


@pytest.mark.parametrize("text", [" 1", "1 ", "", "."])
def test_float_rejects_malformed(text):
    with pytest.raises(NumError):
        FloatValue().set(text)


def test_string_value_roundtrip():
    value = StringValue("a")
    value.set("hello")
    assert value.get() == "hello"
    assert str(value) == "hello"


def test_generic_delegates():
    inner = IntValue()
    value = GenericValue(inner)
    value.set("42")
    assert value.get() == 42
    assert inner.get() == 42
    assert str(value) == "42"
    assert value.is_bool_flag() is False


def test_generic_without_inner():
    value = GenericValue()
    value.set("anything")
    assert value.get() is None
    assert str(value) == ""
    assert value.is_bool_flag() is False


def test_generic_bool_flag_passthrough():
    class Toggle(StringValue):
        def is_bool_flag(self):
            return True

    assert GenericValue(Toggle()).is_bool_flag() is True


def test_timestamp_full_layout():
    value = TimestampValue(config=TimestampConfig(layouts=["%Y-%m-%dT%H:%M:%S"]))
    value.set("2006-01-02T15:04:05")
    assert value.get() == datetime(2006, 1, 2, 15, 4, 5, tzinfo=timezone.utc)


def test_timestamp_second_layout_matches():
    config = TimestampConfig(layouts=["%Y-%m-%d %H:%M", "%d/%m/%Y"])
    value = TimestampValue(config=config)
    value.set("05/06/2020")
    assert value.get() == datetime(2020, 6, 5, tzinfo=timezone.utc)


def test_timestamp_timezone_applied():
    zone = timezone(timedelta(hours=2))
    value = TimestampValue(config=TimestampConfig(timezone=zone, layouts=["%Y-%m-%d"]))
    value.set("2021-03-04")
    assert value.get().tzinfo == zone
    assert value.get().day == 4


def test_timestamp_time_only_uses_today():
    value = TimestampValue(config=TimestampConfig(layouts=["%H:%M"]))
    before = datetime.now(timezone.utc).date()
    value.set("10:30")
    after = datetime.now(timezone.utc).date()
    result = value.get()
    assert result.date() in (before, after)
    assert (result.hour, result.minute) == (10, 30)


def test_timestamp_missing_year_uses_current_year():
    value = TimestampValue(config=TimestampConfig(layouts=["%m-%d"]))
    value.set("03-04")
    result = value.get()
    assert (result.month, result.day) == (3, 4)
    assert result.year == datetime.now(timezone.utc).year


def test_timestamp_no_match():
    value = TimestampValue(config=TimestampConfig(layouts=["%Y-%m-%d", "%H:%M"]))
    with pytest.raises(ValueError):
        value.set("not a date")
    assert value.get() is None


def test_timestamp_empty_layouts():
    with pytest.raises(ValueError, match="empty layouts"):
        TimestampValue().set("2020-01-01")


def test_timestamp_to_string():
    value = TimestampValue()
    assert value.to_string(None) == ""
    moment = datetime(2020, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    assert value.to_string(moment) == str(moment)