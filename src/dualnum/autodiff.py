import logging
from collections.abc import Callable
from typing import Any

from dualnum.dual import Dual, dualtype
from dualnum.traits import scalartraits

logger = logging.getLogger(__name__)


def differentiate[T](x: T, fun: Callable[[Dual[T]], Any]) -> T:
    """Evaluate the derivative of the univariate function `fun` at `x`.

    `fun` is applied once to the dual number ``(x, 1)``, and the dual part of the
    result is returned.

    Parameters
    ----------
    x : T
        Point at which the derivative is evaluated. Its type selects the dual number
        class (see :func:`~dualnum.dual.dualtype`).
    fun : Callable
        Function built from the operations of :class:`~dualnum.Dual`.

    Returns
    -------
    T
        Derivative of `fun` at `x`. If `fun` returns a plain scalar, the function is
        regarded as a constant and zero is returned.

    Warnings
    --------
    `fun` must not contain conditional branches on the value of its argument, or
    only the derivative of the branch taken is obtained.

    Examples
    --------
    >>> differentiate(4.0, lambda x: x.sqrt())
    0.25
    >>> from dualnum import function as dnf
    >>> differentiate(0.0, dnf.sin)
    1.0
    """
    seed = dualtype(x).variable(x)
    logger.debug("differentiating %r at %r", fun, seed)
    result = fun(seed)

    if not isinstance(result, Dual):
        return scalartraits(type(seed.real)).ZERO

    return result.dual


def deriv[T](fun: Callable[[Dual[T]], Any]) -> Callable[[T], T]:
    """Return a function that evaluates the derivative of the univariate function.

    Parameters
    ----------
    fun : Callable
        Differentiated function.

    Returns
    -------
    Callable
        Derivative of `fun`.

    Examples
    --------
    >>> from dualnum import function as dnf
    >>> f = lambda x: x**2 + dnf.sqrt(x + 3)
    >>> df = deriv(f)
    >>> print(format(df(1.2), ".6g"))
    2.64398
    """

    def result(x):
        return differentiate(x, fun)

    return result
