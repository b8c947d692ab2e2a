import copy
import fractions
import math
import sys

import mpmath
import numpy as np
import pytest

from dualnum import CastError, Dual, DualF32, DualF64, UndefinedDerivativeError
from dualnum.context import localcontext


def test_construction():
    x = DualF64(1.5, -2)
    assert x.into_tuple() == (1.5, -2.0)
    assert type(x.dual) is float

    assert DualF64.from_real(3).into_tuple() == (3.0, 0.0)
    assert DualF64.variable(3).into_tuple() == (3.0, 1.0)
    assert Dual(1, 2).into_tuple() == (1, 2)

    x = DualF32(1, 0.1)
    assert type(x.real) is np.float32
    assert x.dual == np.float32(0.1)

    with pytest.raises(TypeError):
        DualF64("1", 0)

    with pytest.raises(TypeError):
        DualF32(DualF32(1, 0), 0)


def test_accessors():
    x = DualF64(1.0, 2.0)
    x.real = 4.0
    x.dual *= 3
    assert x.into_tuple() == (4.0, 6.0)

    assert x.map(lambda y: y * 2).into_tuple() == (8.0, 12.0)
    assert x.map_parts(lambda r, d: DualF64(d, r)).into_tuple() == (6.0, 4.0)

    y = x.replace(dual=0.0)
    assert y.into_tuple() == (4.0, 0.0)
    assert x.into_tuple() == (4.0, 6.0)

    with pytest.raises(TypeError):
        x.replace(imag=1.0)

    z = copy.copy(x)
    assert z is not x
    assert z.into_tuple() == x.into_tuple()


def test_sealed():
    with pytest.raises(RuntimeError):

        class _Derived(Dual):
            pass


def test_conjugate():
    x = DualF64(1.0, 2.0)
    assert x.conjugate().into_tuple() == (1.0, -2.0)
    assert x.conjugate().conjugate().into_tuple() == (1.0, 2.0)

    with pytest.raises(TypeError):
        Dual(1, 2).conjugate()


def test_ring():
    x = DualF64(3, 2)
    y = DualF64(5, 7)
    assert (x + y).into_tuple() == (8.0, 9.0)
    assert (x - y).into_tuple() == (-2.0, -5.0)
    assert (x * y).into_tuple() == (15.0, 31.0)
    assert pytest.approx((x / y).into_tuple()) == (0.6, -0.44)
    assert (-x).into_tuple() == (-3.0, -2.0)
    assert (+x).into_tuple() == (3.0, 2.0)


def test_ring_scalar():
    x = DualF64(3, 2)
    assert (x + 1).into_tuple() == (4.0, 2.0)
    assert (1 + x).into_tuple() == (4.0, 2.0)
    assert (x - 1).into_tuple() == (2.0, 2.0)
    assert (10 - x).into_tuple() == (7.0, -2.0)
    assert (x * 2).into_tuple() == (6.0, 4.0)
    assert (2 * x).into_tuple() == (6.0, 4.0)
    assert (x / 2).into_tuple() == (1.5, 1.0)
    assert pytest.approx((6 / x).into_tuple()) == (2.0, -4 / 3)


def test_ring_mixed():
    with pytest.raises(TypeError):
        DualF32(1, 1) + DualF64(1, 1)

    with pytest.raises(TypeError):
        DualF64(1, 1) * Dual(1.0, 1.0)

    with pytest.raises(TypeError):
        DualF64(1, 1) + "a"  # type: ignore


def test_pow():
    x = DualF64(3, 2)
    assert (x**2).into_tuple() == (9.0, 12.0)
    assert (x**0).into_tuple() == (1.0, 0.0)
    assert pytest.approx((x**-1).into_tuple()) == (1 / 3, -2 / 9)
    assert pytest.approx((x**0.5).into_tuple()) == (math.sqrt(3), 1 / math.sqrt(3))
    assert pytest.approx((2**x).into_tuple()) == (8.0, 16 * math.log(2))

    with pytest.raises(CastError):
        x.powi(10**400)


def test_rem():
    x = DualF64(7, 1)
    y = DualF64(3, 0)

    for lhs, rhs in [(x, y), (y, x), (x, 2.0), (x, x)]:
        with pytest.raises(UndefinedDerivativeError):
            lhs % rhs

    with pytest.raises(UndefinedDerivativeError):
        2.0 % x

    with pytest.raises(UndefinedDerivativeError):
        x.rem(y)

    with pytest.raises(UndefinedDerivativeError):
        pow(x, 2, 3)


def test_comparison():
    assert DualF64(5, 1) == DualF64(5, 99)
    assert DualF64(5, 1) < DualF64(6, 0)
    assert DualF64(6, 0) >= DualF64(6, 100)
    assert not DualF64(6, 0) > DualF64(6, -100)
    assert DualF64(5, 1) == 5.0
    assert 5.0 == DualF64(5, 1)
    assert 6 > DualF64(5, 3)
    assert DualF64(5, 3) <= 5
    assert (DualF64(1, 0) == DualF32(1, 0)) is False

    assert DualF64(1, 0).compare(2.0) == -1
    assert DualF64(3, 0).compare(DualF64(3, 5)) == 0
    assert DualF64(4, 0).compare(3) == 1
    assert DualF64(math.nan, 0).compare(1.0) is None

    with pytest.raises(TypeError):
        hash(DualF64(1, 0))


def test_min_max():
    x = DualF64(3, 10)
    y = DualF64(7, 20)
    assert x.max(y).into_tuple() == (7.0, 20.0)
    assert x.min(y).into_tuple() == (3.0, 10.0)
    assert y.min(x) is x
    assert max(x, y) is y
    assert min(x, y) is x
    assert x.max(5.0).into_tuple() == (5.0, 0.0)


def test_zero_one():
    assert DualF64.zero().into_tuple() == (0.0, 0.0)
    assert DualF32.one().into_tuple() == (np.float32(1), np.float32(0))
    assert Dual.one(scalartype=int).into_tuple() == (1, 0)

    with pytest.raises(TypeError):
        Dual.zero()

    assert DualF64(0.0, 5.0).is_zero()
    assert not DualF64(0.0, 5.0)
    assert DualF64(1e-300, 0.0)


def test_signed():
    assert DualF64(-2, 3).abs().into_tuple() == (2.0, -3.0)
    assert abs(DualF64(2, 3)).into_tuple() == (2.0, 3.0)
    assert abs(DualF64(0, 3)).into_tuple() == (0.0, 0.0)
    assert DualF64(-4, 7).signum().into_tuple() == (-1.0, 0.0)
    assert DualF64(5, 1).abs_sub(DualF64(3, 4)).into_tuple() == (2.0, -3.0)
    assert DualF64(3, 1).abs_sub(DualF64(5, 4)).into_tuple() == (0.0, 0.0)
    assert DualF64(2, 0).is_positive()
    assert DualF64(-2, 0).is_negative()


def test_unsigned():
    x = Dual(np.uint8(3), np.uint8(1))
    y = Dual(np.uint8(2), np.uint8(0))
    assert (x + y).into_tuple() == (5, 1)
    assert (x * y).into_tuple() == (6, 2)

    with pytest.raises(TypeError):
        -x

    with pytest.raises(TypeError):
        x.abs()

    with pytest.raises(TypeError):
        x.signum()


def test_generic_scalars():
    x = Dual.variable(fractions.Fraction(1, 2))
    y = x * x / (x + 1)
    assert y.into_tuple() == (fractions.Fraction(1, 6), fractions.Fraction(5, 9))

    x = Dual.variable(mpmath.mpf("0.5"))
    assert float(x.atan().dual) == pytest.approx(0.8)
    assert isinstance(x.sqrt().real, mpmath.mpf)


def test_primitive():
    x = DualF64(3.7, 1.0)
    assert x.to_i32() == 3
    assert type(x.to_i32()) is np.int32
    assert DualF64(-3.7, 0).to_i8() == -3
    assert x.to_f32() == np.float32(3.7)
    assert x.to_primitive("u64") == 3
    assert float(x) == 3.7
    assert int(x) == 3

    with pytest.raises(CastError):
        DualF64(300.0, 0).to_u8()

    with pytest.raises(CastError):
        DualF64(-1.0, 0).to_usize()

    with pytest.raises(CastError):
        DualF64(math.nan, 0).to_i64()

    assert DualF64.from_i8(5).into_tuple() == (5.0, 0.0)
    assert DualF32.from_f64(0.1).real == np.float32(0.1)
    assert Dual.from_i16(7, scalartype=int).into_tuple() == (7, 0)

    with pytest.raises(CastError):
        DualF64.from_u8(256)

    with pytest.raises(CastError):
        DualF64.from_i32(2.5)


def test_cast():
    assert DualF64.cast(fractions.Fraction(1, 4)).into_tuple() == (0.25, 0.0)
    assert DualF32.cast(2).into_tuple() == (np.float32(2), np.float32(0))

    with pytest.raises(CastError):
        DualF64.cast(10**400)


def test_from_str_radix():
    assert DualF64.from_str_radix("1.5").into_tuple() == (1.5, 0.0)
    assert DualF64.from_str_radix("ff", 16).real == 255.0
    assert DualF64.from_str_radix("-1.8", 16).real == -1.5
    assert DualF64.from_str_radix("101.1", 2).real == 5.5
    assert DualF32.from_str_radix("0.1").real == np.float32(0.1)
    assert Dual.from_str_radix("ff", 16, scalartype=int).into_tuple() == (255, 0)

    with pytest.raises(ValueError, match="could not convert string to float"):
        DualF64.from_str_radix("1z")

    with pytest.raises(ValueError):
        DualF64.from_str_radix("12", 2)


def test_constants():
    assert DualF64.pi().into_tuple() == (math.pi, 0.0)
    assert DualF64.e().real == math.e
    assert DualF64.sqrt_2().real == math.sqrt(2)
    assert DualF64.frac_1_sqrt_2().real == math.sqrt(0.5)
    assert DualF64.ln_2().real == math.log(2)
    assert DualF64.constant("FRAC_PI_2").real == math.pi / 2
    assert DualF32.pi().real == np.float32(math.pi)
    assert Dual.pi(scalartype=mpmath.mpf).real == +mpmath.pi

    assert DualF64.nan().is_nan()
    assert DualF64.infinity().real == math.inf
    assert DualF64.neg_infinity().real == -math.inf
    assert DualF64.neg_zero().is_sign_negative()
    assert DualF64.epsilon().real == sys.float_info.epsilon
    assert DualF64.max_value().real == sys.float_info.max
    assert DualF64.min_value().real == -sys.float_info.max
    assert DualF64.min_positive_value().real == sys.float_info.min
    assert DualF32.epsilon().real == np.finfo(np.float32).eps
    assert DualF64.infinity().dual == 0.0

    with pytest.raises(TypeError):
        Dual.pi()

    with pytest.raises(TypeError):
        DualF64.constant("TAU")


def test_integer_decode():
    assert DualF64(1.0, 5.0).integer_decode() == (2**52, -52, 1)
    assert DualF64(-0.5, 0.0).integer_decode() == (2**52, -53, -1)
    assert DualF32(1.0, 0.0).integer_decode() == (2**23, -23, 1)


def test_display():
    assert str(DualF64(1.0, 2.0)) == "1.00 + ε2.00"
    assert format(DualF64(3.14159, -1.0), ".3") == "3.142 + ε-1.000"
    assert f"{DualF64(3.14159, -1.0):+.1f}" == "+3.1 + ε-1.0"
    assert repr(DualF64(1, 2)) == "DualF64(real=1.0, dual=2.0)"

    with localcontext(precision=0):
        assert str(DualF64(3.14159, -1.0)) == "3 + ε-1"

    with pytest.raises(ValueError):
        format(DualF64(1.0, 2.0), "spam")


def test_display_generic():
    assert str(Dual.variable(mpmath.mpf(1))) == "1.00 + ε1.00"
    assert format(Dual.variable(mpmath.mpf("0.25")), ".1") == "0.2 + ε1.0"
    assert str(Dual.variable(fractions.Fraction(1, 2))) == "0.50 + ε1.00"


def test_numpy_ufunc():
    x = DualF64.variable(0.0)
    assert np.sin(x).into_tuple() == (0.0, 1.0)
    assert np.arctan(x).into_tuple() == (0.0, 1.0)
    assert np.exp(x).into_tuple() == (1.0, 1.0)
