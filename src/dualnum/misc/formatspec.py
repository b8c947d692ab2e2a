import re
from typing import Literal, Self, TypedDict, Unpack

_PATTERN = re.compile(
    r"(?:(?P<fill>[\s\S])?(?P<align>[<>=^]))?"
    r"(?P<sign>[-+ ])?"
    r"(?P<z>z)?"
    r"(?P<alt>#)?"
    r"(?P<zfill>0)?"
    r"(?P<width>\d+)?"
    r"(?P<grouping>[_,])?"
    r"(?:\.(?P<prec>\d+))?"
    r"(?P<type>[eEfFgGn%])?"
)


class _FormatSpecDict(TypedDict, total=False):
    fill: str
    align: Literal["<", ">", "=", "^"] | None
    sign: Literal["+", "-", " "]
    z: bool
    alt: bool
    zfill: bool
    width: int | None
    grouping: Literal["_", ","] | None
    prec: int | None
    type: Literal["e", "E", "f", "F", "g", "G", "n", "%"] | None


class FormatSpec:
    r"""Parsed format specification of a real number.

    See `Python's documentation
    <https://docs.python.org/3/library/string.html#formatspec>`__ for the meaning of
    each field. Dual numbers apply the specification to each of their two
    components.

    Parameters
    ----------
    format_spec : str, default=""
    **kwargs
        Fields overriding those parsed from `format_spec`.

    Raises
    ------
    ValueError
        If `format_spec` is not a valid specification for real numbers.

    Examples
    --------
    >>> x = FormatSpec("+.3")
    >>> x.prec, x.type
    (3, None)
    >>> y = x.replace(type="f")
    >>> y
    FormatSpec('+.3f')
    >>> y.format(2.0)
    '+2.000'
    """

    __slots__ = (
        "fill",
        "align",
        "sign",
        "z",
        "alt",
        "zfill",
        "width",
        "grouping",
        "prec",
        "type",
    )

    fill: str
    align: Literal["<", ">", "=", "^"] | None
    sign: Literal["+", "-", " "]
    z: bool
    alt: bool
    zfill: bool
    width: int | None
    grouping: Literal["_", ","] | None
    prec: int | None
    type: Literal["e", "E", "f", "F", "g", "G", "n", "%"] | None

    def __init__(self, format_spec: str = "", **kwargs: Unpack[_FormatSpecDict]):
        if (match := _PATTERN.fullmatch(format_spec)) is None:
            raise ValueError(f"invalid format specifier {format_spec!r}")

        self.fill = match.group("fill") or " "
        self.align = match.group("align")  # type: ignore
        self.sign = match.group("sign") or "-"  # type: ignore
        self.z = match.group("z") is not None
        self.alt = match.group("alt") is not None
        self.zfill = match.group("zfill") is not None
        self.width = None if (width := match.group("width")) is None else int(width)
        self.grouping = match.group("grouping")  # type: ignore
        self.prec = None if (prec := match.group("prec")) is None else int(prec)
        self.type = match.group("type")  # type: ignore

        for key, value in kwargs.items():
            setattr(self, key, value)

    def format(self, value: object) -> str:
        """Shorthand for ``format(value, str(self))``."""
        return format(value, self.__str__())

    def replace(self, **changes: Unpack[_FormatSpecDict]) -> Self:
        """Create a new :class:`FormatSpec`, replacing fields with values from
        `changes`."""
        result = self.__class__()

        for key in self.__slots__:
            setattr(result, key, getattr(self, key))

        for key, value in changes.items():
            setattr(result, key, value)

        return result

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.__str__()!r})"

    def __str__(self) -> str:
        result = ""

        if self.align is not None:
            if self.fill != " ":
                result += self.fill

            result += self.align

        if self.sign != "-":
            result += self.sign

        if self.z:
            result += "z"

        if self.alt:
            result += "#"

        if self.zfill:
            result += "0"

        if self.width is not None:
            result += str(self.width)

        if self.grouping is not None:
            result += self.grouping

        if self.prec is not None:
            result += f".{self.prec}"

        if self.type is not None:
            result += self.type

        return result

    def __replace__(self, **changes: Unpack[_FormatSpecDict]) -> Self:
        return self.replace(**changes)
