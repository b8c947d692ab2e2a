"""
################################################
Mathematical functions (:mod:`dualnum.function`)
################################################

.. currentmodule:: dualnum.function

This module provides mathematical functions that accept plain scalars
(:class:`float`, :class:`int`, NumPy scalars, :mod:`mpmath` numbers) as well as
dual numbers. For dual numbers the derivative is propagated by the chain rule.

Power, exponents, and logarithmic functions
===========================================

.. autosummary::
    :toctree: generated/

    cbrt
    exp
    exp2
    exp_m1
    hypot
    ln
    ln_1p
    log
    log10
    log2
    mul_add
    pow
    recip
    sqrt

Trigonometric and hyperbolic functions
======================================

.. autosummary::
    :toctree: generated/

    acos
    acosh
    asin
    asinh
    atan
    atan2
    atanh
    cos
    cosh
    sin
    sin_cos
    sinh
    tan
    tanh
    to_degrees
    to_radians

Rounding and sign
=================

.. autosummary::
    :toctree: generated/

    ceil
    floor
    fract
    round
    signum
    trunc

Classification
==============

.. autosummary::
    :toctree: generated/

    classify
    is_finite
    is_infinite
    is_nan
    is_normal
    is_sign_negative
    is_sign_positive

"""

import math
import numbers
import sys
from collections.abc import Callable
from typing import Any

import mpmath
import mpmath.ctx_mp_python
import numpy as np

from dualnum.traits import FpCategory


def _overload(fun: Callable, *args: Any) -> Any:
    for x in args:
        if hook := getattr(type(x), "_dualnum_overload_", None):
            if (res := hook(x, fun, *args)) is not NotImplemented:
                return res

            raise TypeError(f"{fun.__name__}() does not support these operands")

    return NotImplemented


def _scalar(x: Any, builtin: Callable, ufunc: Callable, mpfun: Callable) -> Any:
    match x:
        case np.floating() | np.integer():
            return ufunc(x)

        case mpmath.ctx_mp_python.mpnumeric():
            return mpfun(x)

        case numbers.Real():
            return builtin(x)

        case _:
            raise TypeError(f"unsupported operand type: {type(x).__name__!r}")


def _scalar2(
    x: Any, y: Any, builtin: Callable, ufunc: Callable, mpfun: Callable
) -> Any:
    mpnumeric = mpmath.ctx_mp_python.mpnumeric

    match x, y:
        case (mpnumeric(), _) | (_, mpnumeric()):
            return mpfun(x, y)

        case (np.floating() | np.integer(), _) | (_, np.floating() | np.integer()):
            return ufunc(x, y)

        case (numbers.Real(), numbers.Real()):
            return builtin(x, y)

        case _:
            raise TypeError(
                f"unsupported operand types: {type(x).__name__!r} and "
                f"{type(y).__name__!r}"
            )


def _fmaround(x: float, y: float, z: float, finfo: np.finfo) -> float:
    product = mpmath.fmul(x, y, exact=True)
    exact = mpmath.fadd(product, z, exact=True)
    prec = finfo.nmant + 1

    # subnormal results have fewer significant bits
    if exact and mpmath.isfinite(exact):
        _, exponent = mpmath.frexp(exact)
        prec = min(prec, exponent - finfo.minexp + finfo.nmant)

    if prec < 1:
        return float(exact)

    return float(mpmath.fadd(product, z, prec=prec))


def _fma(x: Any, y: Any, z: Any) -> Any:
    match x:
        case np.floating() | float():
            finfo = np.finfo(type(x))
            return type(x)(_fmaround(float(x), float(y), float(z), finfo))

        case mpmath.ctx_mp_python.mpnumeric():
            return mpmath.fadd(mpmath.fmul(x, y, exact=True), z)

        case _:
            return x * y + z


def _trunc(x: Any) -> Any:
    if not isinstance(x, float):
        return type(x)(math.trunc(x))

    if not math.isfinite(x):
        return x

    return math.copysign(float(math.trunc(x)), x)


def _mptrunc(x: Any) -> Any:
    return mpmath.floor(x) if x >= 0 else mpmath.ceil(x)


def cbrt(x, /):
    """Cube root.

    Examples
    --------
    >>> print(format(cbrt(-27.0), ".6f"))
    -3.000000
    """
    if (res := _overload(cbrt, x)) is not NotImplemented:
        return res

    return _scalar(
        x, math.cbrt, np.cbrt, lambda x: mpmath.sign(x) * mpmath.cbrt(abs(x))
    )


def exp(x, /):
    """Exponential.

    Examples
    --------
    >>> print(format(exp(2), ".6f"))
    7.389056
    """
    if (res := _overload(exp, x)) is not NotImplemented:
        return res

    return _scalar(x, math.exp, np.exp, mpmath.exp)


def exp2(x, /):
    """2 raised to the power `x`."""
    if (res := _overload(exp2, x)) is not NotImplemented:
        return res

    return _scalar(x, math.exp2, np.exp2, lambda x: mpmath.power(2, x))


def exp_m1(x, /):
    """``exp(x) - 1`` computed accurately for small `x`."""
    if (res := _overload(exp_m1, x)) is not NotImplemented:
        return res

    return _scalar(x, math.expm1, np.expm1, mpmath.expm1)


def hypot(x, y, /):
    """Euclidean norm ``sqrt(x**2 + y**2)``.

    Examples
    --------
    >>> hypot(3.0, 4.0)
    5.0
    """
    if (res := _overload(hypot, x, y)) is not NotImplemented:
        return res

    return _scalar2(x, y, math.hypot, np.hypot, mpmath.hypot)


def ln(x, /):
    """Natural logarithm.

    Examples
    --------
    >>> print(format(ln(5), ".6f"))
    1.609438
    """
    if (res := _overload(ln, x)) is not NotImplemented:
        return res

    return _scalar(x, math.log, np.log, mpmath.log)


def ln_1p(x, /):
    """``ln(1 + x)`` computed accurately for small `x`."""
    if (res := _overload(ln_1p, x)) is not NotImplemented:
        return res

    return _scalar(x, math.log1p, np.log1p, mpmath.log1p)


def log(x, base=None, /):
    """Logarithm of `x` to the given `base`, natural if `base` is omitted."""
    if base is None:
        return ln(x)

    if (res := _overload(log, x, base)) is not NotImplemented:
        return res

    return ln(x) / ln(base)


def log2(x, /):
    """Base 2 logarithm."""
    if (res := _overload(log2, x)) is not NotImplemented:
        return res

    return _scalar(x, math.log2, np.log2, lambda x: mpmath.log(x, 2))


def log10(x, /):
    """Base 10 logarithm."""
    if (res := _overload(log10, x)) is not NotImplemented:
        return res

    return _scalar(x, math.log10, np.log10, mpmath.log10)


def mul_add(x, a, b, /):
    """``x * a + b`` with a single rounding.

    Examples
    --------
    >>> mul_add(0.1, 10.0, -1.0)
    5.551115123125783e-17
    """
    if (res := _overload(mul_add, x, a, b)) is not NotImplemented:
        return res

    return _fma(x, a, b)


def pow(x, y, /):
    """`x` raised to the power `y`.

    Examples
    --------
    >>> print(format(pow(3.25, 1.25), ".6f"))
    4.363693
    """
    if (res := _overload(pow, x, y)) is not NotImplemented:
        return res

    return _scalar2(x, y, math.pow, np.power, mpmath.power)


def recip(x, /):
    """Reciprocal ``1 / x``."""
    if (res := _overload(recip, x)) is not NotImplemented:
        return res

    return 1 / x


def sqrt(x, /):
    """Square root.

    Examples
    --------
    >>> print(format(sqrt(2.0), ".6f"))
    1.414214
    """
    if (res := _overload(sqrt, x)) is not NotImplemented:
        return res

    return _scalar(x, math.sqrt, np.sqrt, mpmath.sqrt)


def acos(x, /):
    """Inverse cosine."""
    if (res := _overload(acos, x)) is not NotImplemented:
        return res

    return _scalar(x, math.acos, np.arccos, mpmath.acos)


def acosh(x, /):
    """Inverse hyperbolic cosine."""
    if (res := _overload(acosh, x)) is not NotImplemented:
        return res

    return _scalar(x, math.acosh, np.arccosh, mpmath.acosh)


def asin(x, /):
    """Inverse sine."""
    if (res := _overload(asin, x)) is not NotImplemented:
        return res

    return _scalar(x, math.asin, np.arcsin, mpmath.asin)


def asinh(x, /):
    """Inverse hyperbolic sine."""
    if (res := _overload(asinh, x)) is not NotImplemented:
        return res

    return _scalar(x, math.asinh, np.arcsinh, mpmath.asinh)


def atan(x, /):
    """Inverse tangent."""
    if (res := _overload(atan, x)) is not NotImplemented:
        return res

    return _scalar(x, math.atan, np.arctan, mpmath.atan)


def atan2(y, x, /):
    """Angle of the point ``(x, y)``, in the range ``[-pi, pi]``."""
    if (res := _overload(atan2, y, x)) is not NotImplemented:
        return res

    return _scalar2(y, x, math.atan2, np.arctan2, mpmath.atan2)


def atanh(x, /):
    """Inverse hyperbolic tangent."""
    if (res := _overload(atanh, x)) is not NotImplemented:
        return res

    return _scalar(x, math.atanh, np.arctanh, mpmath.atanh)


def cos(x, /):
    """Cosine."""
    if (res := _overload(cos, x)) is not NotImplemented:
        return res

    return _scalar(x, math.cos, np.cos, mpmath.cos)


def cosh(x, /):
    """Hyperbolic cosine."""
    if (res := _overload(cosh, x)) is not NotImplemented:
        return res

    return _scalar(x, math.cosh, np.cosh, mpmath.cosh)


def sin(x, /):
    """Sine.

    Examples
    --------
    >>> sin(0.0)
    0.0
    """
    if (res := _overload(sin, x)) is not NotImplemented:
        return res

    return _scalar(x, math.sin, np.sin, mpmath.sin)


def sin_cos(x, /):
    """Sine and cosine of `x` as a pair."""
    if (res := _overload(sin_cos, x)) is not NotImplemented:
        return res

    return (sin(x), cos(x))


def sinh(x, /):
    """Hyperbolic sine."""
    if (res := _overload(sinh, x)) is not NotImplemented:
        return res

    return _scalar(x, math.sinh, np.sinh, mpmath.sinh)


def tan(x, /):
    """Tangent."""
    if (res := _overload(tan, x)) is not NotImplemented:
        return res

    return _scalar(x, math.tan, np.tan, mpmath.tan)


def tanh(x, /):
    """Hyperbolic tangent."""
    if (res := _overload(tanh, x)) is not NotImplemented:
        return res

    return _scalar(x, math.tanh, np.tanh, mpmath.tanh)


def to_degrees(x, /):
    """Convert radians to degrees."""
    if (res := _overload(to_degrees, x)) is not NotImplemented:
        return res

    return _scalar(x, math.degrees, np.degrees, mpmath.degrees)


def to_radians(x, /):
    """Convert degrees to radians."""
    if (res := _overload(to_radians, x)) is not NotImplemented:
        return res

    return _scalar(x, math.radians, np.radians, mpmath.radians)


def ceil(x, /):
    """Smallest integral value not less than `x`, of the same type as `x`."""
    if (res := _overload(ceil, x)) is not NotImplemented:
        return res

    def builtin(x):
        result = _trunc(x)
        return result + 1 if result < x else result

    return _scalar(x, builtin, np.ceil, mpmath.ceil)


def floor(x, /):
    """Largest integral value not greater than `x`, of the same type as `x`."""
    if (res := _overload(floor, x)) is not NotImplemented:
        return res

    def builtin(x):
        result = _trunc(x)
        return result - 1 if result > x else result

    return _scalar(x, builtin, np.floor, mpmath.floor)


def trunc(x, /):
    """Integral part of `x`, rounding toward zero."""
    if (res := _overload(trunc, x)) is not NotImplemented:
        return res

    return _scalar(x, _trunc, np.trunc, _mptrunc)


def round(x, /):
    """Nearest integral value, rounding half-way cases away from zero.

    Examples
    --------
    >>> round(2.5), round(-2.5), round(0.49999999999999994)
    (3.0, -3.0, 0.0)
    """
    if (res := _overload(round, x)) is not NotImplemented:
        return res

    result = trunc(x)

    if abs(x - result) >= 0.5:
        return result + signum(x)

    return result


def fract(x, /):
    """Fractional part ``x - trunc(x)``."""
    if (res := _overload(fract, x)) is not NotImplemented:
        return res

    return x - trunc(x)


def signum(x, /):
    """Sign of `x`: ``-1``, ``0`` or ``1`` of the same type as `x`, or NaN."""
    if (res := _overload(signum, x)) is not NotImplemented:
        return res

    def builtin(x):
        if x == 0 or x != x:
            return x

        return math.copysign(1.0, x) if isinstance(x, float) else (1 if x > 0 else -1)

    return _scalar(x, builtin, np.sign, mpmath.sign)


def is_nan(x, /) -> bool:
    """Return ``True`` if `x` is NaN."""
    if (res := _overload(is_nan, x)) is not NotImplemented:
        return res

    return bool(_scalar(x, math.isnan, np.isnan, mpmath.isnan))


def is_infinite(x, /) -> bool:
    """Return ``True`` if `x` is positive or negative infinity."""
    if (res := _overload(is_infinite, x)) is not NotImplemented:
        return res

    return bool(_scalar(x, math.isinf, np.isinf, mpmath.isinf))


def is_finite(x, /) -> bool:
    """Return ``True`` if `x` is neither infinite nor NaN."""
    if (res := _overload(is_finite, x)) is not NotImplemented:
        return res

    return bool(_scalar(x, math.isfinite, np.isfinite, mpmath.isfinite))


def is_normal(x, /) -> bool:
    """Return ``True`` if `x` is neither zero, infinite, subnormal nor NaN."""
    if (res := _overload(is_normal, x)) is not NotImplemented:
        return res

    def builtin(x):
        return math.isfinite(x) and abs(x) >= sys.float_info.min

    def ufunc(x):
        if isinstance(x, np.integer):
            return x != 0

        return np.isfinite(x) and abs(x) >= np.finfo(type(x)).tiny

    return bool(_scalar(x, builtin, ufunc, mpmath.isnormal))


def is_sign_positive(x, /) -> bool:
    """Return ``True`` if the sign bit of `x` is clear, including ``+0.0`` and
    positive NaN."""
    if (res := _overload(is_sign_positive, x)) is not NotImplemented:
        return res

    return not is_sign_negative(x)


def is_sign_negative(x, /) -> bool:
    """Return ``True`` if the sign bit of `x` is set, including ``-0.0``."""
    if (res := _overload(is_sign_negative, x)) is not NotImplemented:
        return res

    def builtin(x):
        return math.copysign(1.0, x) < 0 if isinstance(x, float) else x < 0

    return bool(_scalar(x, builtin, np.signbit, lambda x: x < 0))


def classify(x, /) -> FpCategory:
    """Return the floating-point category of `x`."""
    if (res := _overload(classify, x)) is not NotImplemented:
        return res

    if is_nan(x):
        return FpCategory.NAN

    if is_infinite(x):
        return FpCategory.INFINITE

    if x == 0:
        return FpCategory.ZERO

    if is_normal(x):
        return FpCategory.NORMAL

    return FpCategory.SUBNORMAL
