"""
##############################
Typing (:mod:`dualnum.typing`)
##############################

This module provides the protocol that coefficient types of
:class:`~dualnum.Dual` must satisfy. Further capabilities, such as sign negation
or a floating-point representation, are described per type by
:class:`~dualnum.traits.ScalarTraits`.

.. autoclass:: Scalar
    :show-inheritance:
    :no-members:

"""

from abc import abstractmethod
from typing import Protocol, Self


class Scalar(Protocol):
    """Protocol for the ring operations.

    Scalar types implementing this protocol can be used as coefficients of dual
    numbers for addition, subtraction, multiplication and division. Unsigned
    integer types belong here.
    """

    __slots__ = ()

    @abstractmethod
    def __add__(self, rhs: Self | int) -> Self: ...

    @abstractmethod
    def __sub__(self, rhs: Self | int) -> Self: ...

    @abstractmethod
    def __mul__(self, rhs: Self | int) -> Self: ...

    @abstractmethod
    def __truediv__(self, rhs: Self | int) -> Self: ...

    @abstractmethod
    def __radd__(self, lhs: Self | int) -> Self: ...

    @abstractmethod
    def __rsub__(self, lhs: Self | int) -> Self: ...

    @abstractmethod
    def __rmul__(self, lhs: Self | int) -> Self: ...

    @abstractmethod
    def __rtruediv__(self, lhs: Self | int) -> Self: ...
