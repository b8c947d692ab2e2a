"""
################################
Context (:mod:`dualnum.context`)
################################

.. currentmodule:: dualnum.context

This module provides the configuration used when dual numbers are rendered as
text.

.. autosummary::
    :toctree: generated/

    Context
    getcontext
    localcontext
    setcontext

"""

import contextlib
import contextvars
from typing import Self


class Context:
    """Create a new context.

    Parameters
    ----------
    precision : int, default=2
        Number of digits after the decimal point used by :func:`str` and by
        :func:`format` when the format specification has no precision.

    Examples
    --------
    >>> from dualnum import DualF64
    >>> x = DualF64(1.0, 0.5)
    >>> str(x)
    '1.00 + ε0.50'
    >>> with localcontext(precision=4):
    ...     str(x)
    '1.0000 + ε0.5000'
    """

    __slots__ = ("_precision",)
    _precision: int

    def __init__(self, precision: int = 2):
        if precision < 0:
            raise ValueError(f"precision must be non-negative, got {precision}")

        self._precision = precision

    @property
    def precision(self) -> int:
        return self._precision

    def copy(self) -> Self:
        return self.__class__(self._precision)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(precision={self._precision})"

    def __copy__(self) -> Self:
        return self.copy()


_var: contextvars.ContextVar[Context] = contextvars.ContextVar("dualnum")


def getcontext() -> Context:
    """Return the current context for the active thread."""
    if context := _var.get(None):
        return context

    context = Context()
    _var.set(context)
    return context


def setcontext(ctx: Context) -> None:
    """Set the current context for the active thread to `ctx`."""
    _var.set(ctx)


@contextlib.contextmanager
def localcontext(ctx: Context | None = None, *, precision: int | None = None):
    """Return a context manager that will set the current context for the active thread
    to a copy of `ctx` on entry to the with-statement and restore the previous context
    when exiting the with-statement."""
    if ctx is None:
        ctx = getcontext()

    if precision is None:
        precision = ctx.precision

    ctx = Context(precision)
    token = _var.set(ctx)

    try:
        yield ctx
    finally:
        _var.reset(token)
