"""Tests for Decimal construction, formatting, rescaling and comparison."""

import pytest

from bigdecimal.errors import (
    ContractViolation,
    InexactResultError,
    InvalidArgumentError,
    InvalidDecimalString,
    InvalidRoundingModeError,
    NegativeValueError,
    NilValueError,
    PrecisionOutOfRangeError,
)
from bigdecimal.math.bigint import BigInt
from bigdecimal.math.bit_len import UINT256_BIT_LEN
from bigdecimal.math.decimal import ONE, TEN, ZERO, Decimal, max_decimal, min_decimal
from bigdecimal.math.rounding import RoundingMode
from tests.helpers import MAX_UINT128_TEXT, MAX_UINT256, MAX_UINT256_TEXT, D, make_scaled

DOWN = RoundingMode.DOWN
UP = RoundingMode.UP
CEILING = RoundingMode.CEILING
HALF_UP = RoundingMode.HALF_UP
HALF_DOWN = RoundingMode.HALF_DOWN
HALF_EVEN = RoundingMode.HALF_EVEN

# Rounding x.y (unscaled, precision 1) to precision 0, by mode
RESCALE_TABLE = {
    #         5.5  2.5  1.6  1.1  1.0 -1.0 -1.1 -1.6 -2.5 -5.5
    UP: (6, 3, 2, 2, 1, -1, -2, -2, -3, -6),
    DOWN: (5, 2, 1, 1, 1, -1, -1, -1, -2, -5),
    CEILING: (6, 3, 2, 2, 1, -1, -1, -1, -2, -5),
    HALF_UP: (6, 3, 2, 1, 1, -1, -1, -2, -3, -6),
    HALF_DOWN: (5, 2, 2, 1, 1, -1, -1, -2, -2, -5),
    HALF_EVEN: (6, 2, 2, 1, 1, -1, -1, -2, -2, -6),
}
RESCALE_INPUTS = (55, 25, 16, 11, 10, -10, -11, -16, -25, -55)

RESCALE_CASES = [
    (mode, unscaled, expected)
    for mode, results in RESCALE_TABLE.items()
    for unscaled, expected in zip(RESCALE_INPUTS, results)
]

# Values whose dropped digits are zero, so every mode including UNNECESSARY applies
EXACT_RESCALE_INPUTS = ("1.2500", "-3.7500", "0.0100", "0.0000")
INEXACT_RESCALE_INPUTS = ("-1.2345", "1.2350", "0.0049", "-0.0051", "9.9999")
IDEMPOTENCE_CASES = [
    (mode, text)
    for mode in RoundingMode
    for text in EXACT_RESCALE_INPUTS
    + (INEXACT_RESCALE_INPUTS if mode is not RoundingMode.UNNECESSARY else ())
]


class TestDecimalFromString:
    """Tests for Decimal text parsing."""

    @pytest.mark.parametrize(
        "text,precision,negative,expected",
        [
            ("1", 0, False, "1"),
            ("0", 0, False, "0"),
            ("-1", 0, True, "-1"),
            ("1.0001", 4, False, "1.0001"),
            ("-1.0001", 4, True, "-1.0001"),
            ("3.7154500000000011e-15", 31, False, "0.0000000000000037154500000000011"),
            ("-3.7154500000000011e-15", 31, True, "-0.0000000000000037154500000000011"),
            ("3.7154e3", 1, False, "3715.4"),
            ("-3.7154e3", 1, True, "-3715.4"),
            ("3.7154e5", 0, False, "371540"),
            ("-3.7154e5", 0, True, "-371540"),
            ("1.5E1", 0, False, "15"),
            ("25e-2", 2, False, "0.25"),
            ("  1.5\n", 1, False, "1.5"),
            (f"{MAX_UINT128_TEXT}.{'0' * 128}", 128, False, f"{MAX_UINT128_TEXT}.{'0' * 128}"),
            (f"-{MAX_UINT128_TEXT}.{'0' * 128}", 128, True, f"-{MAX_UINT128_TEXT}.{'0' * 128}"),
            (f"-{MAX_UINT256_TEXT}", 0, True, f"-{MAX_UINT256_TEXT}"),
        ],
    )
    def test_valid(self, text, precision, negative, expected):
        """Valid text parses with the implied precision."""
        d = Decimal.from_string(text)
        assert d.precision == precision
        assert d.is_negative() == negative
        assert str(d) == expected

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "   ",
            "1.",
            ".1",
            "-",
            "-1.",
            "-.1",
            "1.2.3",
            "1e",
            "e5",
            "1e1.5",
            "abc",
            "1_000",
            "--1",
            "0x10",
            "0." + "0" * 129,
            "1e-129",
        ],
    )
    def test_invalid(self, text):
        """Malformed text raises the recoverable InvalidDecimalString."""
        with pytest.raises(InvalidDecimalString):
            Decimal.from_string(text)

    def test_invalid_is_value_error(self):
        """InvalidDecimalString is also a ValueError."""
        with pytest.raises(ValueError):
            Decimal.from_string("not a number")

    def test_must_from_string(self):
        """must_from_string escalates to ContractViolation."""
        assert D("1.5") == Decimal(15, 1)
        with pytest.raises(ContractViolation) as exc_info:
            Decimal.must_from_string("1.")
        assert isinstance(exc_info.value.__cause__, InvalidDecimalString)


class TestDecimalConstruction:
    """Tests for the other Decimal constructors."""

    def test_from_int(self):
        """Decimal(value, precision) scales value by 10**-precision."""
        d = Decimal(10001, 4)
        assert d.unscaled == 10001
        assert d.precision == 4
        assert str(d) == "1.0001"

    def test_from_bigint(self):
        """BigInt values are accepted directly or via from_bigint."""
        assert Decimal(BigInt(15), 1) == D("1.5")
        assert Decimal.from_bigint(BigInt(MAX_UINT256)).unscaled == MAX_UINT256

    def test_from_nil_bigint_raises(self):
        """A nil BigInt has no value to scale."""
        with pytest.raises(NilValueError):
            Decimal.from_bigint(BigInt())

    def test_invalid_type_raises(self):
        """Only int and BigInt are accepted."""
        with pytest.raises(TypeError):
            Decimal("1")  # type: ignore
        with pytest.raises(TypeError):
            Decimal(True)  # type: ignore

    @pytest.mark.parametrize("precision", [-1, 129, 1000])
    def test_precision_out_of_range(self, precision):
        """Precision outside [0, 128] is a contract violation."""
        with pytest.raises(PrecisionOutOfRangeError):
            Decimal(1, precision)

    def test_scaled(self):
        """scaled appends precision zeros."""
        d = make_scaled(2, 18)
        assert d.precision == 18
        assert d.unscaled == 2 * 10**18
        assert str(make_scaled(1, 2)) == "1.00"

    def test_zero_with_precision(self):
        """Zero keeps its precision in the text form."""
        d = Decimal(0, 18)
        assert d.precision == 18
        assert d.sign() == 0
        assert str(d) == "0.000000000000000000"

    @pytest.mark.parametrize(
        "value,unscaled,precision",
        [
            (0.0, 0, 0),
            (1.0, 1, 0),
            (1.1, 11, 1),
            (1.01, 101, 2),
            (1.001, 1001, 3),
            (1.000000001, 1000000001, 9),
            (-2.5, -25, 1),
            (1e20, 10**20, 0),
        ],
    )
    def test_from_float(self, value, unscaled, precision):
        """Floats use their shortest decimal text, not their binary expansion."""
        d = Decimal.from_float(value)
        assert d.unscaled == unscaled
        assert d.precision == precision

    def test_from_float_non_finite_raises(self):
        """NaN and infinity have no decimal value."""
        with pytest.raises(ContractViolation):
            Decimal.from_float(float("nan"))
        with pytest.raises(ContractViolation):
            Decimal.from_float(float("inf"))

    def test_constants(self):
        """Module constants hold their values at precision 0."""
        assert ZERO == Decimal(0)
        assert ONE == Decimal(1)
        assert TEN == Decimal(10)
        assert ONE.precision == 0


class TestDecimalString:
    """Tests for canonical text formatting."""

    def test_nil(self):
        """Nil renders as <nil>."""
        assert str(Decimal.nil()) == "<nil>"
        assert repr(Decimal.nil()) == "Decimal(None)"

    def test_zero_padded_fraction(self):
        """Small values are zero-padded after the point."""
        assert str(Decimal(0)) == "0"
        assert str(Decimal(1000, 18)) == "0.000000000000001000"
        assert str(Decimal(-5, 3)) == "-0.005"

    def test_repr(self):
        """repr shows the canonical text."""
        assert repr(D("1.50")) == "Decimal('1.50')"

    def test_round_trip(self):
        """Text form parses back to an identical value and precision."""
        for text in ["0", "-0.001", "123.4500", MAX_UINT256_TEXT]:
            d = D(text)
            again = D(str(d))
            assert again.unscaled == d.unscaled
            assert again.precision == d.precision

    def test_value_beyond_digit_limit(self):
        """Values with thousands of digits format without error."""
        assert str(Decimal(10**5000)) == "1" + "0" * 5000
        assert str(Decimal(-(10**5000 + 3), 2)) == "-1" + "0" * 4998 + ".03"
        assert repr(Decimal(10**5000)) == "Decimal('1" + "0" * 5000 + "')"

    def test_power_beyond_digit_limit(self):
        """A large power renders and serializes as text."""
        value = Decimal(10).power(5000)
        assert str(value) == "1" + "0" * 5000
        assert value.to_sql() == "1" + "0" * 5000

    def test_parse_beyond_digit_limit(self):
        """Long digit strings parse exactly and round-trip."""
        text = "1" * 5000 + ".5"
        d = Decimal.from_string(text)
        assert d.unscaled == (10**5000 - 1) // 9 * 10 + 5
        assert d.precision == 1
        assert str(d) == text
        assert d.to_json() == f'"{text}"'

    def test_long_exponent_is_recoverable(self):
        """An exponent with thousands of digits is out of range, not a crash."""
        with pytest.raises(InvalidDecimalString):
            Decimal.from_string("1e" + "9" * 5000)


class TestDecimalAddSub:
    """Tests for addition and subtraction."""

    def test_add_mixed_precision(self):
        """Operands are aligned to the larger precision."""
        result = Decimal(1).add(Decimal(50, 1))
        assert result == Decimal(60, 1)
        assert result.precision == 1
        assert Decimal(10, 1).add(Decimal(5, 1)) == Decimal(15, 1)

    def test_sub(self):
        """Subtraction aligns precision too."""
        result = D("1").sub(D("0.50"))
        assert str(result) == "0.50"

    def test_operators(self):
        """+ and - delegate to add and sub."""
        assert D("1.5") + D("2.25") == D("3.75")
        assert D("1.5") - D("2.25") == D("-0.75")
        assert -D("1.5") == D("-1.5")
        assert abs(D("-1.5")) == D("1.5")

    def test_no_implicit_multiply(self):
        """* and / are not provided since they need a rounding mode."""
        with pytest.raises(TypeError):
            D("1.5") * D("2")  # type: ignore
        with pytest.raises(TypeError):
            D("1.5") / D("2")  # type: ignore

    @pytest.mark.parametrize(
        "a,b,expected",
        [
            (Decimal(1), Decimal(50, 1), Decimal(60, 1)),
            (Decimal(1), Decimal(-10, 1), Decimal(0)),
        ],
    )
    def test_safe_add(self, a, b, expected):
        """safe_add returns non-negative sums."""
        assert a.safe_add(b) == expected

    def test_safe_add_negative_raises(self):
        """safe_add refuses a negative result."""
        with pytest.raises(NegativeValueError):
            Decimal(1).safe_add(Decimal(-20, 1))

    @pytest.mark.parametrize(
        "a,b,expected",
        [
            (Decimal(1), Decimal(50, 2), Decimal(5, 1)),
            (Decimal(1), Decimal(-10, 1), Decimal(2)),
        ],
    )
    def test_safe_sub(self, a, b, expected):
        """safe_sub returns non-negative differences."""
        assert a.safe_sub(b) == expected

    def test_safe_sub_negative_raises(self):
        """safe_sub refuses a negative result."""
        with pytest.raises(NegativeValueError):
            Decimal(1).safe_sub(Decimal(20, 1))

    def test_add_raw(self):
        """add_raw and sub_raw work on the unscaled integer."""
        d = Decimal.from_bigint(BigInt(MAX_UINT256)).add_raw(1)
        assert not d.is_negative()
        assert d.unscaled == MAX_UINT256 + 1
        assert Decimal(15, 1).sub_raw(20) == Decimal(-5, 1)


class TestDecimalUnsigned:
    """Tests for uint256 wraparound add and subtract."""

    @pytest.mark.parametrize(
        "a,b,expected",
        [
            (Decimal(1), Decimal(-1), "0"),
            (Decimal(1), Decimal(0), "1"),
            (
                Decimal(0),
                Decimal(-5, 1),
                "11579208923731619542357098500868790785326998466564056403945758400791312963993.1",
            ),
            (Decimal(1), Decimal(-2), MAX_UINT256_TEXT),
        ],
    )
    def test_unsigned_add(self, a, b, expected):
        """Negative sums wrap to large positive values."""
        assert a.unsigned_add(b, UINT256_BIT_LEN) == D(expected)

    @pytest.mark.parametrize(
        "a,b,expected",
        [
            (Decimal(1), Decimal(1), "0"),
            (Decimal(1), Decimal(0), "1"),
            (
                Decimal(0),
                Decimal(5, 1),
                "11579208923731619542357098500868790785326998466564056403945758400791312963993.1",
            ),
            (Decimal(1), Decimal(2), MAX_UINT256_TEXT),
        ],
    )
    def test_unsigned_sub(self, a, b, expected):
        """Negative differences wrap to large positive values."""
        assert a.unsigned_sub(b, UINT256_BIT_LEN) == D(expected)

    def test_overflow_wraps_to_zero(self):
        """MAX_UINT256 + 1 wraps to zero."""
        result = Decimal(MAX_UINT256).unsigned_add(Decimal(1), UINT256_BIT_LEN)
        assert result == Decimal(0)

    def test_underflow_wraps_to_max(self):
        """0 - 1 wraps to MAX_UINT256."""
        result = Decimal(0).unsigned_add(Decimal(-1), UINT256_BIT_LEN)
        assert result == Decimal(MAX_UINT256)

    def test_overflow_flag(self):
        """The *_overflow variants report whether the raw result was too wide."""
        result, overflowed = Decimal(MAX_UINT256).unsigned_add_overflow(Decimal(1), UINT256_BIT_LEN)
        assert result == Decimal(0)
        assert overflowed

        result, overflowed = Decimal(1).unsigned_add_overflow(Decimal(1), UINT256_BIT_LEN)
        assert result == Decimal(2)
        assert not overflowed

    def test_underflow_is_not_flagged(self):
        """Only width overflow is flagged; a small negative result is not."""
        result, overflowed = Decimal(0).unsigned_sub_overflow(Decimal(1), UINT256_BIT_LEN)
        assert result == Decimal(MAX_UINT256)
        assert not overflowed


class TestDecimalRescale:
    """Tests for rescale across rounding modes."""

    @pytest.mark.parametrize("mode,unscaled,expected", RESCALE_CASES)
    def test_rescale_to_zero(self, mode, unscaled, expected):
        """Dropping the single fractional digit rounds with the mode."""
        result = Decimal(unscaled, 1).rescale(0, mode)
        assert result.precision == 0
        assert result == Decimal(expected)

    def test_same_precision_is_identity(self):
        """Rescaling to the current precision returns the value unchanged."""
        assert Decimal(1).rescale(0, DOWN) == Decimal(1)

    def test_increase_is_exact(self):
        """Increasing precision appends zeros."""
        result = D("1.5").rescale(4, RoundingMode.UNNECESSARY)
        assert str(result) == "1.5000"

    def test_unnecessary_inexact_raises(self):
        """UNNECESSARY rejects dropping a non-zero digit."""
        with pytest.raises(InexactResultError):
            Decimal(10001, 4).rescale(0, RoundingMode.UNNECESSARY)

    def test_unnecessary_exact(self):
        """UNNECESSARY accepts dropping zeros."""
        assert Decimal(10000, 4).rescale(0, RoundingMode.UNNECESSARY).cmp(Decimal(1)) == 0

    def test_rescale_down(self):
        """rescale_down truncates."""
        assert str(D("-1.999").rescale_down(1)) == "-1.9"

    def test_rescale_out_of_range(self):
        """Target precision must be in range."""
        with pytest.raises(PrecisionOutOfRangeError):
            D("1.5").rescale(129, DOWN)

    def test_invalid_mode_raises(self):
        """A non-RoundingMode value is rejected."""
        with pytest.raises(InvalidRoundingModeError):
            D("1.55").rescale(1, "half_up")  # type: ignore

    @pytest.mark.parametrize("mode,text", IDEMPOTENCE_CASES)
    def test_rescale_is_idempotent(self, mode, text):
        """Rescaling an already rescaled value to the same precision changes nothing."""
        once = D(text).rescale(2, mode)
        twice = once.rescale(2, mode)
        assert twice.unscaled == once.unscaled
        assert twice.precision == once.precision == 2


class TestStripTrailingZeros:
    """Tests for strip_trailing_zeros."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("0", "0"),
            ("0.00", "0"),
            ("0.10", "0.1"),
            ("0.11", "0.11"),
            ("0.110000000000", "0.11"),
            ("-0", "0"),
            ("-0.00", "0"),
            ("-0.10", "-0.1"),
            ("-0.11", "-0.11"),
            ("-0.110000000000", "-0.11"),
            ("100.00", "100"),
        ],
    )
    def test_strip(self, text, expected):
        """Trailing fractional zeros are removed; integer zeros are kept."""
        assert str(D(text).strip_trailing_zeros()) == expected


class TestSignificantFigures:
    """Tests for significant_figures."""

    @pytest.mark.parametrize(
        "text,figures,expected",
        [
            ("0", 1, "0"),
            ("0", 10, "0"),
            ("0.001", 1, "0.001"),
            ("0.001", 2, "0.001"),
            ("0.001", 10, "0.001"),
            ("-0.001", 1, "-0.001"),
            ("-0.001", 2, "-0.001"),
            ("-0.001", 10, "-0.001"),
            ("0.001001", 1, "0.002"),
            ("0.001001", 2, "0.0011"),
            ("0.001001", 4, "0.001001"),
            ("-0.001001", 1, "-0.002"),
            ("-0.001001", 2, "-0.0011"),
            ("-0.001001", 4, "-0.001001"),
            ("1.001001", 1, "2"),
            ("1.001001", 2, "1.1"),
            ("1.001001", 4, "1.002"),
            ("-1.001001", 1, "-2"),
            ("-1.001001", 2, "-1.1"),
            ("-1.001001", 4, "-1.002"),
            ("1111.001001", 1, "1112"),
            ("1111.001001", 3, "1112"),
            ("1111.001001", 4, "1112"),
            ("1111.001001", 5, "1111.1"),
            ("-1111.001001", 1, "-1112"),
            ("-1111.001001", 3, "-1112"),
            ("-1111.001001", 4, "-1112"),
            ("-1111.001001", 5, "-1111.1"),
        ],
    )
    def test_round_up(self, text, figures, expected):
        """Rounds away from zero to the requested significant figures."""
        assert str(D(text).significant_figures(figures, UP)) == expected

    def test_all_zero_fraction(self):
        """A zero with fractional digits is returned unchanged."""
        assert str(D("0.0000").significant_figures(2, UP)) == "0.0000"

    def test_non_positive_figures_raises(self):
        """figures must be positive."""
        with pytest.raises(InvalidArgumentError):
            D("1.5").significant_figures(0, UP)


class TestDecimalComparison:
    """Tests for comparison, hashing and sign helpers."""

    def test_cmp_across_precisions(self):
        """Comparison is numeric regardless of precision."""
        assert D("1.0").cmp(D("1")) == 0
        assert D("1.01").cmp(D("1.1")) == -1
        assert D("-1").cmp(D("-1.5")) == 1

    def test_rich_comparisons(self):
        """GT/GTE/LT/LTE map to the comparison operators."""
        assert D("1.5") > D("1.49")
        assert D("1.5") >= D("1.50")
        assert D("-2") < D("-1.999")
        assert D("0") <= D("0.000")

    def test_equality_and_hash(self):
        """Equal values hash equally regardless of precision."""
        assert D("1.0") == D("1")
        assert hash(D("1.0")) == hash(D("1"))
        assert len({D("2"), D("2.00"), D("2.000")}) == 1

    def test_not_equal_to_other_types(self):
        """Decimal never equals a plain number."""
        assert D("1") != 1
        assert D("1") != "1"

    def test_nil_equality(self):
        """Nil equals nil only."""
        assert Decimal.nil() == Decimal.nil()
        assert Decimal.nil() != Decimal(0)
        assert Decimal.nil().is_nil()

    def test_nil_arithmetic_raises(self):
        """Arithmetic and ordering on nil is a contract violation."""
        with pytest.raises(NilValueError):
            Decimal.nil().add(ONE)
        with pytest.raises(NilValueError):
            ONE.add(Decimal.nil())
        with pytest.raises(NilValueError):
            Decimal.nil() < ONE

    def test_sign_helpers(self):
        """sign, is_zero, is_negative, is_positive, neg and abs."""
        assert D("-0.5").sign() == -1
        assert D("0.00").is_zero()
        assert D("-0.5").is_negative()
        assert D("0.5").is_positive()
        assert D("0.5").neg() == D("-0.5")
        assert D("-0.5").abs() == D("0.5")

    def test_must_non_negative(self):
        """must_non_negative passes through non-negative values."""
        assert D("0").must_non_negative() == D("0")
        with pytest.raises(NegativeValueError):
            D("-0.1").must_non_negative()

    def test_max_min(self):
        """max_decimal and min_decimal compare numerically."""
        assert max_decimal(D("1.5"), D("1.25")) == D("1.5")
        assert min_decimal(D("1.5"), D("1.25")) == D("1.25")


class TestDecimalParts:
    """Tests for the integer/fraction accessors."""

    def test_int_part_truncates(self):
        """int_part truncates toward zero."""
        assert D("1.99").int_part() == 1
        assert D("-1.99").int_part() == -1

    def test_remainder(self):
        """remainder splits into integer and unscaled fractional parts."""
        int_part, frac = D("-1.25").remainder()
        assert int_part == -1
        assert frac == -25

    def test_to_bigint_and_bit_len(self):
        """to_bigint exposes the unscaled integer."""
        assert D("1.25").to_bigint() == 125
        assert Decimal.nil().to_bigint().is_nil()
        assert D("-2.55").bit_len() == (255).bit_length()

    def test_as_fraction(self):
        """as_fraction is exact."""
        frac = D("0.125").as_fraction()
        assert frac.numerator == 1
        assert frac.denominator == 8
