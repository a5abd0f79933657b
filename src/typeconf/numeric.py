# Copyright 2025 CrownOps Engineering
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Numeric readers with radix detection, width narrowing and range limits.

Readers are immutable builders::

    port = setting("port", read_integer().lower_limit(0).upper_limit(65536).as_int32())
    ratio = setting("ratio", read_floating_point().as_float64(), 0.5)

Integer literals accept the prefixes ``0x``, ``0o`` and ``0b`` (any letter
case) after a leading zero; everything else is read as base 10. The generic
number is then narrowed to the requested width and checked against the
configured limits. Limits are exclusive: ``lower_limit(0)`` rejects ``0``.

Range failures report the effective bounds: the target width's natural bounds,
with each configured limit replacing its side. Floating-point targets have no
natural bounds, so an unconfigured side is reported as infinite.
"""

from __future__ import annotations

import math
import re
import struct
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Final, TypeVar, cast

from typeconf._internal.exceptions import TypeconfTypeError
from typeconf.compat import override
from typeconf.conversion import Conversion, combine
from typeconf.exceptions import InvalidNumberError, InvalidRangeError

if TYPE_CHECKING:
    from typeconf.compat import Self

Number = int | float
N = TypeVar("N", int, float)

INT64_MIN: Final[int] = -(2**63)
INT64_MAX: Final[int] = 2**63 - 1

_RADIX_PREFIXES: Final[dict[str, int]] = {"x": 16, "o": 8, "b": 2}
_INTEGER_LITERALS: Final[dict[int, re.Pattern[str]]] = {
    2: re.compile(r"[+-]?[01]+"),
    8: re.compile(r"[+-]?[0-7]+"),
    10: re.compile(r"[+-]?[0-9]+"),
    16: re.compile(r"[+-]?[0-9a-fA-F]+"),
}
_FLOAT_LITERAL: Final[re.Pattern[str]] = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE,
)


@dataclass(slots=True, frozen=True)
class NumericType:
    """Target representation a generic number is narrowed to.

    Attributes:
        name: Display name of the width (``int8`` ... ``float64``).
        minimum: Smallest representable integer, ``None`` for floating point.
        maximum: Largest representable integer, ``None`` for floating point.
        single_precision: Whether floating-point values round to IEEE binary32.
    """

    name: str
    minimum: int | None = None
    maximum: int | None = None
    single_precision: bool = False

    @property
    def integral(self) -> bool:
        """Return whether the width holds integers."""
        return self.minimum is not None

    def narrow(self, number: Number) -> Number | None:
        """Return ``number`` in this representation, or ``None`` if it does not fit.

        Integer widths require an exact round trip, so fractional, non-finite
        and out-of-width values do not fit. Floating-point widths always fit.
        """
        if not self.integral:
            return _to_float32(number) if self.single_precision else float(number)
        if isinstance(number, float):
            if not math.isfinite(number) or not number.is_integer():
                return None
            number = int(number)
        if cast("int", self.minimum) <= number <= cast("int", self.maximum):
            return number
        return None


INT8: Final[NumericType] = NumericType("int8", -(2**7), 2**7 - 1)
INT16: Final[NumericType] = NumericType("int16", -(2**15), 2**15 - 1)
INT32: Final[NumericType] = NumericType("int32", -(2**31), 2**31 - 1)
INT64: Final[NumericType] = NumericType("int64", INT64_MIN, INT64_MAX)
FLOAT32: Final[NumericType] = NumericType("float32", single_precision=True)
FLOAT64: Final[NumericType] = NumericType("float64")


def _to_float32(number: Number) -> float:
    value = float(number)
    try:
        return cast("float", struct.unpack("<f", struct.pack("<f", value))[0])
    except OverflowError:
        return math.copysign(math.inf, value)


def _promote(lhs: Number, rhs: Number) -> tuple[Number, Number]:
    if isinstance(lhs, float) or isinstance(rhs, float):
        return float(lhs), float(rhs)
    return lhs, rhs


def _greater_than(lhs: Number, rhs: Number) -> bool:
    left, right = _promote(lhs, rhs)
    return left > right


def _less_than(lhs: Number, rhs: Number) -> bool:
    left, right = _promote(lhs, rhs)
    return left < right


def _checked_limit(limit: object) -> Number:
    if isinstance(limit, bool) or not isinstance(limit, int | float):
        message = f"numeric limits must be int or float, not {type(limit).__name__}"
        raise TypeconfTypeError(message)
    return limit


@dataclass(slots=True, frozen=True)
class NumericLimits:
    """Optional exclusive bounds applied after narrowing.

    Attributes:
        lower: Values must be strictly greater than this, when set.
        upper: Values must be strictly less than this, when set.
    """

    lower: Number | None = None
    upper: Number | None = None

    def admits(self, value: Number) -> bool:
        """Return whether ``value`` lies strictly inside the configured bounds."""
        if self.lower is not None and not _greater_than(value, self.lower):
            return False
        if self.upper is not None and not _less_than(value, self.upper):
            return False
        return True

    def effective(self, target: NumericType) -> tuple[Number | None, Number | None]:
        """Return the bounds reported for ``target``.

        Each configured limit replaces the width's natural bound on its side.
        """
        lower = target.minimum if self.lower is None else self.lower
        upper = target.maximum if self.upper is None else self.upper
        return lower, upper


class _IntegerReader(Conversion[str, int]):
    __slots__ = ()

    @override
    def convert(self, value: str) -> int:
        text = value.strip()
        radix = 10
        if len(text) > 1 and text[0] == "0":
            prefixed = _RADIX_PREFIXES.get(text[1].lower())
            if prefixed is not None:
                radix = prefixed
                text = text[2:]
        if not _INTEGER_LITERALS[radix].fullmatch(text):
            raise InvalidNumberError(text)
        number = int(text, radix)
        if not INT64_MIN <= number <= INT64_MAX:
            raise InvalidNumberError(text)
        return number

    @override
    def __repr__(self) -> str:
        return "read_integer()"


class _FloatingPointReader(Conversion[str, float]):
    __slots__ = ()

    @override
    def convert(self, value: str) -> float:
        text = value.strip()
        if not _FLOAT_LITERAL.fullmatch(text):
            raise InvalidNumberError(text)
        return float(text)

    @override
    def __repr__(self) -> str:
        return "read_floating_point()"


class _Narrowing(Conversion[Number, N]):
    __slots__ = ("_limits", "_target")

    def __init__(self, target: NumericType, limits: NumericLimits) -> None:
        self._target = target
        self._limits = limits

    @override
    def convert(self, value: Number) -> N:
        narrowed = self._target.narrow(value)
        if narrowed is None or not self._limits.admits(narrowed):
            lower, upper = self._limits.effective(self._target)
            raise InvalidRangeError(value, lower, upper)
        return cast("N", narrowed)

    @override
    def __repr__(self) -> str:
        return f"as_{self._target.name}(lower={self._limits.lower}, upper={self._limits.upper})"


_INTEGER_READER: Final[_IntegerReader] = _IntegerReader()
_FLOATING_POINT_READER: Final[_FloatingPointReader] = _FloatingPointReader()


@dataclass(slots=True, frozen=True)
class NumericReader:
    """Immutable builder for numeric conversions.

    Attributes:
        reader: Conversion producing the generic number from a literal.
        limits: Explicit bounds checked after narrowing.
    """

    reader: Conversion[str, int] | Conversion[str, float]
    limits: NumericLimits = field(default_factory=NumericLimits)

    def lower_limit(self, limit: Number) -> Self:
        """Return a reader rejecting values less than or equal to ``limit``.

        Raises:
            TypeconfTypeError: If ``limit`` is not an ``int`` or ``float``.
        """
        return replace(self, limits=replace(self.limits, lower=_checked_limit(limit)))

    def upper_limit(self, limit: Number) -> Self:
        """Return a reader rejecting values greater than or equal to ``limit``.

        Raises:
            TypeconfTypeError: If ``limit`` is not an ``int`` or ``float``.
        """
        return replace(self, limits=replace(self.limits, upper=_checked_limit(limit)))

    def as_int8(self) -> Conversion[str, int]:
        """Return a conversion to a signed 8-bit integer."""
        return self._narrowed(INT8)

    def as_int16(self) -> Conversion[str, int]:
        """Return a conversion to a signed 16-bit integer."""
        return self._narrowed(INT16)

    def as_int32(self) -> Conversion[str, int]:
        """Return a conversion to a signed 32-bit integer."""
        return self._narrowed(INT32)

    def as_int64(self) -> Conversion[str, int]:
        """Return a conversion to a signed 64-bit integer."""
        return self._narrowed(INT64)

    def as_float32(self) -> Conversion[str, float]:
        """Return a conversion to a single-precision float."""
        return self._narrowed(FLOAT32)

    def as_float64(self) -> Conversion[str, float]:
        """Return a conversion to a double-precision float."""
        return self._narrowed(FLOAT64)

    def _narrowed(self, target: NumericType) -> Conversion[str, Any]:
        return combine(self.reader, _Narrowing(target, self.limits))


def read_integer() -> NumericReader:
    """Return a reader for integer literals (base 10, or ``0x``/``0o``/``0b``)."""
    return NumericReader(_INTEGER_READER)


def read_floating_point() -> NumericReader:
    """Return a reader for base-10 floating-point literals."""
    return NumericReader(_FLOATING_POINT_READER)


__all__ = [
    "FLOAT32",
    "FLOAT64",
    "INT8",
    "INT16",
    "INT32",
    "INT64",
    "INT64_MAX",
    "INT64_MIN",
    "NumericLimits",
    "NumericReader",
    "NumericType",
    "read_floating_point",
    "read_integer",
]
