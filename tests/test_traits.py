import decimal
import fractions
import math

import mpmath
import numpy as np
import pytest

from dualnum.traits import (
    CastError,
    FloatTraits,
    FpCategory,
    GenericTraits,
    MpfTraits,
    NumpyTraits,
    cast,
    register,
    scalartraits,
)


def test_scalartraits():
    assert isinstance(scalartraits(float), FloatTraits)
    assert isinstance(scalartraits(mpmath.mpf), MpfTraits)
    assert scalartraits(np.float32) is scalartraits(np.float32)

    traits = scalartraits(np.float32)
    assert isinstance(traits, NumpyTraits)
    assert traits.floating and traits.signed
    assert type(traits.ZERO) is np.float32

    traits = scalartraits(np.uint16)
    assert not traits.signed
    assert not traits.floating

    traits = scalartraits(fractions.Fraction)
    assert isinstance(traits, GenericTraits)
    assert traits.ZERO == 0 and traits.ONE == 1
    assert not traits.floating


def test_register():
    traits = GenericTraits(decimal.Decimal)
    register(traits)
    assert scalartraits(decimal.Decimal) is traits
    assert repr(traits) == "GenericTraits(Decimal)"

    with pytest.raises(TypeError):
        NumpyTraits(np.complex128)


def test_fromnumber():
    assert FloatTraits().fromnumber(fractions.Fraction(1, 8)) == 0.125
    assert NumpyTraits(np.int8).fromnumber(np.int64(-128)) == -128
    assert NumpyTraits(np.float32).fromnumber(mpmath.mpf(2)) == np.float32(2)

    with pytest.raises(CastError):
        NumpyTraits(np.int8).fromint(128)

    with pytest.raises(CastError):
        FloatTraits().fromint(10**400)

    with pytest.raises(CastError):
        NumpyTraits(np.uint8).fromnumber(-1)


def test_fromstr():
    traits = FloatTraits()
    assert traits.fromstr("101.1", 2) == 5.5
    assert traits.fromstr("-inf", 16) == -math.inf
    assert math.isnan(traits.fromstr("nan", 8))
    assert traits.fromstr("+z", 36) == 35.0

    with pytest.raises(ValueError):
        traits.fromstr("1g", 16)

    with pytest.raises(ValueError):
        traits.fromstr("10", 40)

    with pytest.raises(ValueError):
        traits.fromstr(".", 2)

    assert NumpyTraits(np.int8).fromstr("7f", 16) == 127

    with pytest.raises(ValueError):
        NumpyTraits(np.int8).fromstr("80", 16)

    assert NumpyTraits(np.float32).fromstr("0.c", 16) == np.float32(0.75)
    assert MpfTraits().fromstr("0.8", 16) == mpmath.mpf(0.5)
    assert MpfTraits().fromstr("1.25") == mpmath.mpf(1.25)


def test_constant():
    assert FloatTraits().constant("PI") == math.pi
    assert FloatTraits().constant("LOG2_E") == pytest.approx(1 / math.log(2))
    assert FloatTraits().constant("FRAC_2_PI") == pytest.approx(2 / math.pi)
    assert NumpyTraits(np.float32).constant("E") == np.float32(math.e)
    assert NumpyTraits(np.int16).constant("max_value") == 32767

    with pytest.raises(TypeError):
        NumpyTraits(np.int16).constant("PI")

    with pytest.raises(TypeError):
        MpfTraits().constant("max_value")

    with mpmath.workprec(200):
        assert MpfTraits().constant("PI") == +mpmath.pi
        assert MpfTraits().constant("SQRT_2") == mpmath.sqrt(2)


def test_integer_decode():
    assert FloatTraits().integer_decode(2.0) == (2**52, -51, 1)
    assert FloatTraits().integer_decode(5e-324) == (2, -1075, 1)
    assert NumpyTraits(np.float32).integer_decode(np.float32(-2.0)) == (2**23, -22, -1)
    assert MpfTraits().integer_decode(mpmath.mpf(-6)) == (3, 1, -1)

    with pytest.raises(TypeError):
        NumpyTraits(np.int32).integer_decode(np.int32(1))


def test_cast():
    assert cast(3.9, "i8") == 3
    assert type(cast(3.9, "i8")) is np.int8
    assert cast(-3.9, "i64") == -3
    assert cast(255, "u8") == 255
    assert cast(0.1, "f32") == np.float32(0.1)
    assert cast(np.float32(2.5), "f64") == 2.5

    with pytest.raises(CastError):
        cast(-1, "u8")

    with pytest.raises(CastError):
        cast(2.5, "i32", strict=True)

    with pytest.raises(CastError):
        cast(math.inf, "isize")

    with pytest.raises(ValueError, match="unknown primitive"):
        cast(1, "i128")


def test_fpcategory():
    assert repr(FpCategory.NAN) == "<FpCategory.NAN>"
