"""
#######################################
Scalar traits (:mod:`dualnum.traits`)
#######################################

.. currentmodule:: dualnum.traits

This module describes what each coefficient type of a dual number can do:
identities, conversions, parsing, limits and mathematical constants.

Traits
======

.. autosummary::
    :toctree: generated/

    ScalarTraits
    FloatTraits
    NumpyTraits
    MpfTraits
    GenericTraits
    register
    scalartraits

Primitive conversions
=====================

.. autosummary::
    :toctree: generated/

    PRIMITIVES
    cast
    CastError

Constants and classification
============================

.. autosummary::
    :toctree: generated/

    FLOAT_CONSTANTS
    REAL_CONSTANTS
    FpCategory

"""

import enum
import fractions
import functools
import logging
import math
import struct
import sys
from abc import ABC
from collections.abc import Callable
from typing import Any, Final

import mpmath
import numpy as np

logger = logging.getLogger(__name__)


class FpCategory(enum.Enum):
    """Floating-point category specifier.

    Attributes
    ----------
    NAN
    INFINITE
    ZERO
    SUBNORMAL
    NORMAL
    """

    NAN = enum.auto()
    INFINITE = enum.auto()
    ZERO = enum.auto()
    SUBNORMAL = enum.auto()
    NORMAL = enum.auto()

    def __repr__(self):
        return f"<{self.__class__.__name__}.{self.name}>"


class CastError(ValueError):
    """Error raised when a number cannot be represented in the requested type."""


PRIMITIVES: Final[tuple[tuple[str, type[np.number]], ...]] = (
    ("isize", np.intp),
    ("i8", np.int8),
    ("i16", np.int16),
    ("i32", np.int32),
    ("i64", np.int64),
    ("usize", np.uintp),
    ("u8", np.uint8),
    ("u16", np.uint16),
    ("u32", np.uint32),
    ("u64", np.uint64),
    ("f32", np.float32),
    ("f64", np.float64),
)
"""Primitive numeric types a dual number converts to and from, by name."""

FLOAT_CONSTANTS: Final[tuple[tuple[str, Callable[[], Any]], ...]] = (
    ("E", lambda: +mpmath.e),
    ("FRAC_1_PI", lambda: 1 / mpmath.pi),
    ("FRAC_1_SQRT_2", lambda: 1 / mpmath.sqrt(2)),
    ("FRAC_2_PI", lambda: 2 / mpmath.pi),
    ("FRAC_2_SQRT_PI", lambda: 2 / mpmath.sqrt(mpmath.pi)),
    ("FRAC_PI_2", lambda: mpmath.pi / 2),
    ("FRAC_PI_3", lambda: mpmath.pi / 3),
    ("FRAC_PI_4", lambda: mpmath.pi / 4),
    ("FRAC_PI_6", lambda: mpmath.pi / 6),
    ("FRAC_PI_8", lambda: mpmath.pi / 8),
    ("LN_10", lambda: mpmath.log(10)),
    ("LN_2", lambda: +mpmath.ln2),
    ("LOG10_E", lambda: 1 / mpmath.log(10)),
    ("LOG2_E", lambda: 1 / mpmath.ln2),
    ("PI", lambda: +mpmath.pi),
    ("SQRT_2", lambda: mpmath.sqrt(2)),
)
"""Mathematical constants, evaluated with :mod:`mpmath` and rounded once."""

REAL_CONSTANTS: Final[tuple[str, ...]] = (
    "nan",
    "infinity",
    "neg_infinity",
    "neg_zero",
    "min_positive_value",
    "epsilon",
    "min_value",
    "max_value",
)
"""Special values and limits of a floating-point type."""

_PRIMITIVES: Final = dict(PRIMITIVES)
_FLOAT_CONSTANTS: Final = dict(FLOAT_CONSTANTS)
_DIGITS: Final = "0123456789abcdefghijklmnopqrstuvwxyz"


@functools.cache
def _evaluate(name: str, prec: int) -> Any:
    with mpmath.workprec(prec + 32):
        value = _FLOAT_CONSTANTS[name]()

    with mpmath.workprec(prec):
        return +value


def _parse_radix(value: str, radix: int) -> fractions.Fraction | float:
    if not 2 <= radix <= 36:
        raise ValueError(f"radix must be in [2, 36], got {radix}")

    text = value.lower()
    negative = text[:1] == "-"

    if text[:1] in ("-", "+"):
        text = text[1:]

    if text in ("inf", "infinity"):
        return -math.inf if negative else math.inf

    if text == "nan":
        return math.nan

    head, _, tail = text.partition(".")
    digits = head + tail

    if not digits or any(c not in _DIGITS[:radix] for c in digits):
        raise ValueError(f"invalid literal for radix {radix}: {value!r}")

    result = fractions.Fraction(int(digits, radix), radix ** len(tail))
    return -result if negative else result


def _tofloat(value: fractions.Fraction | float) -> float:
    try:
        return float(value)
    except OverflowError:
        return math.copysign(math.inf, value)


class ScalarTraits[T](ABC):
    """Abstract base class describing the capabilities of a scalar type.

    Attributes
    ----------
    scalartype : type[T]
    ZERO : T
        Additive identity.
    ONE : T
        Multiplicative identity.
    signed : bool
        Whether the type supports sign negation.
    floating : bool
        Whether the type is a floating-point type.

    Notes
    -----
    Classes that inherit from this must define `scalartype`, `ZERO` and `ONE`.
    """

    __slots__ = ()
    scalartype: type[T]
    ZERO: T
    ONE: T
    signed: bool = True
    floating: bool = False

    def fromint(self, value: int) -> T:
        """Convert the integer to a scalar.

        Raises
        ------
        CastError
            If `value` is not representable.
        """
        try:
            return self.scalartype(value)  # type: ignore
        except (OverflowError, ValueError, TypeError) as exc:
            logger.debug("cannot convert %r to %s", value, self.scalartype.__name__)
            raise CastError(
                f"{value!r} is not representable as {self.scalartype.__name__}"
            ) from exc

    def fromnumber(self, value: Any) -> T:
        """Convert an arbitrary number to a scalar.

        Raises
        ------
        CastError
            If `value` is not representable.
        """
        if isinstance(value, int | np.integer):
            return self.fromint(int(value))

        try:
            return self.scalartype(value)  # type: ignore
        except (OverflowError, ValueError, TypeError) as exc:
            logger.debug("cannot convert %r to %s", value, self.scalartype.__name__)
            raise CastError(
                f"{value!r} is not representable as {self.scalartype.__name__}"
            ) from exc

    def fromstr(self, value: str, radix: int = 10) -> T:
        """Parse the string in the given radix.

        Raises
        ------
        ValueError
            If `value` does not represent a number. The error is the one raised by
            the scalar type's own parser.
        """
        if radix == 10:
            return self.scalartype(value)  # type: ignore

        return self.scalartype(int(value, radix))  # type: ignore

    def constant(self, name: str) -> T:
        """Return the named constant.

        `name` is one of :data:`REAL_CONSTANTS` or :data:`FLOAT_CONSTANTS`.

        Raises
        ------
        TypeError
            If the scalar type has no such constant.
        """
        raise TypeError(f"{self.scalartype.__name__} has no constant {name!r}")

    def integer_decode(self, value: T) -> tuple[int, int, int]:
        """Return the mantissa, the base 2 exponent and the sign of `value`."""
        raise TypeError(f"{self.scalartype.__name__} is not a binary floating type")

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.scalartype.__name__})"


class FloatTraits(ScalarTraits[float]):
    """Traits of the built-in :class:`float` (IEEE 754 binary64)."""

    __slots__ = ()
    scalartype = float
    ZERO = 0.0
    ONE = 1.0
    floating = True

    def fromstr(self, value, radix=10):
        if radix == 10:
            return float(value)

        return _tofloat(_parse_radix(value, radix))

    def constant(self, name):
        match name:
            case "nan":
                return math.nan

            case "infinity":
                return math.inf

            case "neg_infinity":
                return -math.inf

            case "neg_zero":
                return -0.0

            case "min_positive_value":
                return sys.float_info.min

            case "epsilon":
                return sys.float_info.epsilon

            case "min_value":
                return -sys.float_info.max

            case "max_value":
                return sys.float_info.max

        if name not in _FLOAT_CONSTANTS:
            return super().constant(name)

        return float(_evaluate(name, sys.float_info.mant_dig))

    def integer_decode(self, value):
        (bits,) = struct.unpack("<Q", struct.pack("<d", value))
        sign = -1 if bits >> 63 else 1
        exponent = (bits >> 52) & 0x7FF
        mantissa = bits & 0xFFFFFFFFFFFFF

        if exponent == 0:
            mantissa <<= 1
        else:
            mantissa |= 0x10000000000000

        return (mantissa, exponent - 1075, sign)


class NumpyTraits[T: np.number](ScalarTraits[T]):
    """Traits of a NumPy scalar type such as :class:`numpy.float32` or
    :class:`numpy.uint8`.

    Parameters
    ----------
    scalartype : type[numpy.number]
    """

    def __init__(self, scalartype: type[T]):
        if not issubclass(scalartype, np.floating | np.integer):
            raise TypeError(f"{scalartype.__name__} is not a real NumPy scalar type")

        self.scalartype = scalartype
        self.ZERO = scalartype(0)
        self.ONE = scalartype(1)
        self.signed = not issubclass(scalartype, np.unsignedinteger)
        self.floating = issubclass(scalartype, np.floating)

    def fromint(self, value):
        if not self.floating:
            info = np.iinfo(self.scalartype)

            if not info.min <= value <= info.max:
                logger.debug("%d is out of range of %s", value, self.scalartype.__name__)
                raise CastError(
                    f"{value} is out of range of {self.scalartype.__name__}"
                )

        return super().fromint(value)

    def fromnumber(self, value):
        if not self.floating or isinstance(value, int | np.integer):
            return super().fromnumber(value)

        return self.scalartype(float(value))

    def fromstr(self, value, radix=10):
        if not self.floating:
            parsed = int(value, radix)
            info = np.iinfo(self.scalartype)

            if not info.min <= parsed <= info.max:
                raise ValueError(
                    f"{value!r} is out of range of {self.scalartype.__name__}"
                )

            return self.scalartype(parsed)

        if radix == 10:
            return self.scalartype(value)

        return self.scalartype(_tofloat(_parse_radix(value, radix)))

    def constant(self, name):
        if not self.floating:
            match name:
                case "min_value":
                    return self.scalartype(np.iinfo(self.scalartype).min)

                case "max_value":
                    return self.scalartype(np.iinfo(self.scalartype).max)

            return super().constant(name)

        finfo = np.finfo(self.scalartype)

        match name:
            case "nan":
                return self.scalartype(np.nan)

            case "infinity":
                return self.scalartype(np.inf)

            case "neg_infinity":
                return self.scalartype(-np.inf)

            case "neg_zero":
                return self.scalartype(-0.0)

            case "min_positive_value":
                return finfo.tiny

            case "epsilon":
                return finfo.eps

            case "min_value":
                return finfo.min

            case "max_value":
                return finfo.max

        if name not in _FLOAT_CONSTANTS:
            return super().constant(name)

        return self.scalartype(float(_evaluate(name, finfo.nmant + 1)))

    def integer_decode(self, value):
        if not self.floating:
            return super().integer_decode(value)

        finfo = np.finfo(self.scalartype)
        nbits = finfo.bits
        uint = np.dtype(f"u{nbits // 8}")
        bits = int(np.array(value, dtype=self.scalartype).view(uint))
        sign = -1 if bits >> (nbits - 1) else 1
        exponent = (bits >> finfo.nmant) & ((1 << finfo.nexp) - 1)
        mantissa = bits & ((1 << finfo.nmant) - 1)

        if exponent == 0:
            mantissa <<= 1
        else:
            mantissa |= 1 << finfo.nmant

        bias = (1 << (finfo.nexp - 1)) - 1
        return (mantissa, exponent - bias - finfo.nmant, sign)


class MpfTraits(ScalarTraits[mpmath.mpf]):
    """Traits of :class:`mpmath.mpf` at the current working precision.

    The exponent range of :class:`mpmath.mpf` is unbounded, so the limits
    ``min_positive_value``, ``min_value`` and ``max_value`` do not exist.
    """

    __slots__ = ()
    scalartype = mpmath.mpf
    ZERO = mpmath.mpf(0)
    ONE = mpmath.mpf(1)
    floating = True

    def fromstr(self, value, radix=10):
        if radix == 10:
            return mpmath.mpf(value)

        parsed = _parse_radix(value, radix)

        if isinstance(parsed, float):
            return mpmath.mpf(parsed)

        return mpmath.mpf(parsed.numerator) / parsed.denominator

    def constant(self, name):
        match name:
            case "nan":
                return mpmath.nan

            case "infinity":
                return mpmath.inf

            case "neg_infinity":
                return -mpmath.inf

            case "neg_zero":
                return mpmath.mpf(0)

            case "epsilon":
                return +mpmath.eps

        if name not in _FLOAT_CONSTANTS:
            return super().constant(name)

        return _evaluate(name, mpmath.mp.prec)

    def integer_decode(self, value):
        sign, mantissa, exponent, _ = value._mpf_
        return (int(mantissa), exponent, -1 if sign else 1)


class GenericTraits[T](ScalarTraits[T]):
    """Traits of any other scalar type, such as :class:`int` or
    :class:`fractions.Fraction`.

    Parameters
    ----------
    scalartype : type

    Notes
    -----
    The identities are ``scalartype(0)`` and ``scalartype(1)``. Only
    :class:`float` subclasses are treated as floating.
    """

    def __init__(self, scalartype: type[T]):
        self.scalartype = scalartype
        self.ZERO = scalartype(0)  # type: ignore
        self.ONE = scalartype(1)  # type: ignore
        self.floating = issubclass(scalartype, float)


_registry: dict[type, ScalarTraits] = {}


def register(traits: ScalarTraits) -> None:
    """Register `traits` for its scalar type, replacing any previous entry."""
    _registry[traits.scalartype] = traits
    logger.debug("registered %r", traits)


def scalartraits[T](scalartype: type[T]) -> ScalarTraits[T]:
    """Return the traits of `scalartype`.

    Traits of NumPy scalar types and of unknown types are created on first use.
    """
    if (traits := _registry.get(scalartype)) is not None:
        return traits

    if issubclass(scalartype, np.floating | np.integer):
        traits = NumpyTraits(scalartype)
    else:
        traits = GenericTraits(scalartype)

    register(traits)
    return traits


def cast(value: Any, name: str, strict: bool = False) -> np.number:
    """Convert `value` to the primitive type `name` of :data:`PRIMITIVES`.

    Conversion to an integer type truncates toward zero.

    Parameters
    ----------
    value
        Number to convert.
    name : str
        Name of the primitive type, such as ``"i32"`` or ``"f64"``.
    strict : bool, default=False
        If ``True``, conversion to an integer type also fails for non-integral
        values.

    Raises
    ------
    CastError
        If `value` is out of range or not finite for an integer type.
    """
    if (dtype := _PRIMITIVES.get(name)) is None:
        raise ValueError(f"unknown primitive type {name!r}")

    if issubclass(dtype, np.floating):
        return dtype(float(value))

    try:
        integral = int(value)
    except (OverflowError, ValueError) as exc:
        logger.debug("cannot cast %r to %s", value, name)
        raise CastError(f"{value!r} is not representable as {name}") from exc

    info = np.iinfo(dtype)

    if not info.min <= integral <= info.max or (strict and integral != value):
        logger.debug("cannot cast %r to %s", value, name)
        raise CastError(f"{value!r} is not representable as {name}")

    return dtype(integral)


register(FloatTraits())
register(MpfTraits())
