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

"""Composable conversions from raw configuration literals to typed values.

A ``Conversion`` is a pure function from a source value to a target value that
fails by raising an ``InvalidConfigurationValueError``. Conversions compose with
``combine`` (or ``Conversion.then``) and report their result to settings as a
tri-state outcome:

- ``Converted(value)``: the literal was interpreted;
- ``USE_DEFAULT``: the literal asks the owning setting for its default value
  (list conversions do this for blank input);
- ``Failed(error)``: the literal was rejected.
"""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Final, Generic, TypeAlias, TypeVar, cast

from typeconf.compat import override
from typeconf.exceptions import InvalidConfigurationValueError

if TYPE_CHECKING:
    from collections.abc import Callable

S = TypeVar("S")
T = TypeVar("T")
U = TypeVar("U")


class UseDefault(enum.Enum):
    """Marker outcome asking the owning setting to resolve its default value."""

    USE_DEFAULT = "use-default"

    @override
    def __repr__(self) -> str:
        return "USE_DEFAULT"


USE_DEFAULT: Final = UseDefault.USE_DEFAULT


@dataclass(slots=True, frozen=True)
class Converted(Generic[T]):
    """Successful conversion outcome."""

    value: T


@dataclass(slots=True, frozen=True)
class Failed:
    """Rejected conversion outcome carrying the validation failure."""

    error: InvalidConfigurationValueError


Outcome: TypeAlias = Converted[T] | UseDefault | Failed


class Conversion(ABC, Generic[S, T]):
    """A pure, possibly failing conversion from ``S`` to ``T``."""

    __slots__ = ()

    @abstractmethod
    def convert(self, value: S) -> T:
        """Convert ``value``.

        Args:
            value: Source value to interpret.

        Returns:
            The converted value.

        Raises:
            InvalidConfigurationValueError: If ``value`` cannot be interpreted.
        """

    def outcome(self, value: S) -> Outcome[T]:
        """Convert ``value`` and report the tri-state result.

        Args:
            value: Source value to interpret.

        Returns:
            ``Converted`` on success, ``Failed`` when the conversion rejected the
            value, or ``USE_DEFAULT`` when the owning setting should fall back to
            its default.
        """
        try:
            return Converted(self.convert(value))
        except InvalidConfigurationValueError as exc:
            return Failed(exc)

    def then(self, other: Conversion[T, U]) -> Conversion[S, U]:
        """Return a conversion that feeds this conversion's result into ``other``."""
        return combine(self, other)

    def __call__(self, value: S) -> T:
        return self.convert(value)


class Combined(Conversion[S, T]):
    """Two conversions chained through an intermediate value."""

    __slots__ = ("_first", "_second")

    def __init__(self, first: Conversion[S, Any], second: Conversion[Any, T]) -> None:
        self._first = first
        self._second = second

    @override
    def convert(self, value: S) -> T:
        return self._second.convert(self._first.convert(value))

    @override
    def outcome(self, value: S) -> Outcome[T]:
        intermediate = self._first.outcome(value)
        if not isinstance(intermediate, Converted):
            return intermediate
        return self._second.outcome(intermediate.value)

    @override
    def __repr__(self) -> str:
        return f"{self._first!r} -> {self._second!r}"


class _Identity(Conversion[Any, Any]):
    __slots__ = ()

    @override
    def convert(self, value: Any) -> Any:
        return value

    @override
    def __repr__(self) -> str:
        return "no_conversion()"


class FunctionConversion(Conversion[S, T]):
    """Conversion backed by a plain callable."""

    __slots__ = ("_func", "_name")

    def __init__(self, func: Callable[[S], T], name: str | None = None) -> None:
        self._func = func
        self._name = name or getattr(func, "__name__", type(func).__name__)

    @override
    def convert(self, value: S) -> T:
        return self._func(value)

    @override
    def __repr__(self) -> str:
        return f"conversion({self._name})"


_IDENTITY: Final[_Identity] = _Identity()


def combine(first: Conversion[S, Any], second: Conversion[Any, T]) -> Conversion[S, T]:
    """Chain two conversions.

    The combined conversion fails with whichever stage's error occurred first; a
    ``USE_DEFAULT`` outcome of the first stage is passed through untouched.

    Args:
        first: Conversion applied to the source value.
        second: Conversion applied to the first stage's result.

    Returns:
        The combined conversion.
    """
    return Combined(first, second)


def no_conversion() -> Conversion[T, T]:
    """Return the shared identity conversion."""
    return cast("Conversion[T, T]", _IDENTITY)


def conversion(func: Callable[[S], T], *, name: str | None = None) -> Conversion[S, T]:
    """Adapt ``func`` into a conversion.

    ``func`` signals a rejected value by raising an
    ``InvalidConfigurationValueError``, passing the literal as ``value=`` so it
    shows up in configuration errors; any other exception propagates.

    Args:
        func: Callable performing the conversion.
        name: Display name used in ``repr``; defaults to ``func.__name__``.

    Returns:
        Conversion wrapping ``func``.
    """
    return FunctionConversion(func, name)


__all__ = [
    "USE_DEFAULT",
    "Combined",
    "Conversion",
    "Converted",
    "Failed",
    "FunctionConversion",
    "Outcome",
    "UseDefault",
    "combine",
    "conversion",
    "no_conversion",
]
