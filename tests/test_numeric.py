"""Tests for cfgdecode.numeric."""

import math

import pytest

from cfgdecode.numeric import FloatBits, IntBits, parse_float, parse_int


class TestParseInt:
    def test_native(self):
        assert parse_int("42") == 42

    def test_signs(self):
        assert parse_int("-5") == -5
        assert parse_int("+5") == 5

    @pytest.mark.parametrize(
        "bits,low,high",
        [(8, -128, 127), (16, -32768, 32767), (32, -(2**31), 2**31 - 1), (64, -(2**63), 2**63 - 1)],
    )
    def test_signed_bounds(self, bits, low, high):
        width = IntBits(bits)
        assert parse_int(str(low), width) == low
        assert parse_int(str(high), width) == high
        with pytest.raises(ValueError, match="out of range"):
            parse_int(str(high + 1), width)
        with pytest.raises(ValueError, match="out of range"):
            parse_int(str(low - 1), width)

    @pytest.mark.parametrize("bits", [8, 16, 32, 64])
    def test_unsigned_bounds(self, bits):
        width = IntBits(bits, signed=False)
        assert parse_int(str(2**bits - 1), width) == 2**bits - 1
        with pytest.raises(ValueError, match="out of range"):
            parse_int(str(2**bits), width)

    def test_unsigned_rejects_sign(self):
        with pytest.raises(ValueError, match="invalid syntax"):
            parse_int("-1", IntBits(8, signed=False))

    @pytest.mark.parametrize("text", ["", "x", "1.5", "1_000", "0x10", " 1"])
    def test_invalid_syntax(self, text):
        with pytest.raises(ValueError, match="invalid syntax"):
            parse_int(text)

    def test_message(self):
        with pytest.raises(ValueError) as exc:
            parse_int("1234", IntBits(8))
        assert str(exc.value) == 'parsing "1234": value out of range'


class TestParseFloat:
    def test_double(self):
        assert parse_float("3.14") == 3.14

    def test_forms(self):
        assert parse_float("1.") == 1.0
        assert parse_float(".5") == 0.5
        assert parse_float("-2e3") == -2000.0

    def test_single_is_rounded(self):
        value = parse_float("0.1", FloatBits(32))
        assert value != 0.1
        assert value == pytest.approx(0.1)

    def test_single_exact(self):
        assert parse_float("1.5", FloatBits(32)) == 1.5

    def test_single_overflow(self):
        with pytest.raises(ValueError, match="out of range"):
            parse_float("1e39", FloatBits(32))

    def test_double_overflow(self):
        with pytest.raises(ValueError, match="out of range"):
            parse_float("1e400")

    def test_infinity_literal(self):
        assert math.isinf(parse_float("inf"))
        assert math.isinf(parse_float("-Infinity", FloatBits(32)))

    def test_nan(self):
        assert math.isnan(parse_float("NaN"))

    def test_hexadecimal(self):
        assert parse_float("0x1p-2") == 0.25
        assert parse_float("-0X1.8P1") == -3.0
        assert parse_float("0x.8p0", FloatBits(32)) == 0.5

    def test_hexadecimal_overflow(self):
        with pytest.raises(ValueError, match="out of range"):
            parse_float("0x1p1024")
        with pytest.raises(ValueError, match="out of range"):
            parse_float("0x1p200", FloatBits(32))

    @pytest.mark.parametrize("text", ["", "abc", "1_0", "1e", "--1", "0x1", "0x1.8"])
    def test_invalid_syntax(self, text):
        with pytest.raises(ValueError, match="invalid syntax"):
            parse_float(text)
