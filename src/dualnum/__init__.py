"""
#############################
Dual numbers (:mod:`dualnum`)
#############################

.. currentmodule:: dualnum

This package provides dual numbers for forward-mode automatic differentiation of
univariate functions.

Differential operators
----------------------

.. autosummary::
    :toctree: generated/

    differentiate
    deriv

Dual numbers
------------

.. autosummary::
    :toctree: generated/

    Dual
    DualF32
    DualF64

Errors
------

.. autosummary::
    :toctree: generated/

    CastError
    UndefinedDerivativeError

"""

import logging

from . import function
from .autodiff import deriv, differentiate
from .context import Context, getcontext, localcontext, setcontext
from .dual import Dual, DualF32, DualF64, UndefinedDerivativeError
from .traits import CastError, FpCategory

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "function",
    "deriv",
    "differentiate",
    "Context",
    "getcontext",
    "localcontext",
    "setcontext",
    "Dual",
    "DualF32",
    "DualF64",
    "UndefinedDerivativeError",
    "CastError",
    "FpCategory",
]
