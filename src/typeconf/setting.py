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

"""Typed setting declarations.

A ``Setting`` couples a name with a conversion from the raw literal and a
default value strategy. Settings are declared once, usually at module level,
and are compared by identity: two separately declared settings with the same
name conflict inside a ``Configuration`` instead of being merged.

Example::

    DEBUG = boolean_setting("debug", False)
    WORKERS = setting("workers", read_integer().lower_limit(0).as_int32(), 4)
    HOSTS = list_setting("hosts", no_conversion(), "localhost")
"""

from __future__ import annotations

import enum
import itertools
import logging
import re
from typing import TYPE_CHECKING, Final, Generic, TypeVar

from typeconf._internal.logging_utils import structured_extra
from typeconf.compat import override
from typeconf.conversion import USE_DEFAULT, Conversion, Converted, Failed, Outcome, UseDefault, no_conversion
from typeconf.core.model_types import LogComponent
from typeconf.defaults import DefaultValue, fixed, fixed_list, no_default
from typeconf.exceptions import InvalidBooleanError, NoConfigurationError, NoConfigurationValueError

if TYPE_CHECKING:
    from collections.abc import Iterator

logger: logging.Logger = logging.getLogger("typeconf.setting")

T = TypeVar("T")

TRUE_VALUES: Final[tuple[str, ...]] = ("true", "yes", "on", "enable", "enabled")
FALSE_VALUES: Final[tuple[str, ...]] = ("false", "no", "off", "disable", "disabled")
COMMA_SEPARATED: Final[re.Pattern[str]] = re.compile(",")

_KEYS: Final[Iterator[int]] = itertools.count(1)


class Unset(enum.Enum):
    """Marker for an omitted default."""

    UNSET = "unset"


UNSET: Final = Unset.UNSET


class Setting(Generic[T]):
    """A named, typed and validated configuration parameter.

    Every instance receives a unique ``key`` on construction; configuration
    stores cache resolved values under that key rather than under the name.
    """

    __slots__ = ("_conversion", "_default", "_key", "_name")

    def __init__(
        self,
        name: str,
        conversion: Conversion[str, T],
        default: DefaultValue[T] | None = None,
    ) -> None:
        self._name = name
        self._conversion = conversion
        self._default: DefaultValue[T] = default if default is not None else no_default()
        self._key = next(_KEYS)

    @property
    def name(self) -> str:
        return self._name

    @property
    def key(self) -> int:
        """Opaque identifier unique to this declaration."""
        return self._key

    @property
    def conversion(self) -> Conversion[str, T]:
        return self._conversion

    @property
    def default(self) -> DefaultValue[T]:
        return self._default

    def parse(self, value: str | None) -> T:
        """Interpret a raw literal, falling back to the default when absent.

        Args:
            value: Raw literal, or ``None`` when nothing was supplied.

        Returns:
            The typed value.

        Raises:
            InvalidConfigurationValueError: If the literal is rejected by the
                conversion.
            NoConfigurationValueError: If a default was needed but the setting
                has none.
        """
        try:
            if value is None:
                return self._default.get(self)
            return self._resolve(self._conversion.outcome(value))
        except NoConfigurationError as exc:
            raise NoConfigurationValueError(exc) from exc

    def verify(self, value: str) -> None:
        """Parse ``value`` and discard the result."""
        self.parse(value)

    def default_value(self) -> T:
        """Resolve the default value.

        Raises:
            NoConfigurationValueError: If the setting has no default.
        """
        try:
            return self._default.get(self)
        except NoConfigurationError as exc:
            raise NoConfigurationValueError(exc) from exc

    def _resolve(self, outcome: Outcome[T]) -> T:
        match outcome:
            case Converted(value=converted):
                return converted
            case Failed(error=error):
                raise error
            case UseDefault.USE_DEFAULT:
                logger.debug(
                    "Blank literal for %s; using default",
                    self._name,
                    extra=structured_extra(component=LogComponent.SETTING, setting=self._name),
                )
                return self._default.get(self)

    @override
    def __repr__(self) -> str:
        if self._default.is_defined:
            return f"Setting({self._name!r}, default={self._default!r})"
        return f"Setting({self._name!r})"


class _BooleanConversion(Conversion[str, bool]):
    __slots__ = ()

    @override
    def convert(self, value: str) -> bool:
        text = value.strip()
        lowered = text.lower()
        if lowered in TRUE_VALUES:
            return True
        if lowered in FALSE_VALUES:
            return False
        raise InvalidBooleanError(text, TRUE_VALUES, FALSE_VALUES)

    @override
    def __repr__(self) -> str:
        return "BOOLEAN"


BOOLEAN: Final[Conversion[str, bool]] = _BooleanConversion()


class ListConversion(Conversion[str, tuple[T, ...]]):
    """Split a literal on a separator pattern and convert every part.

    Blank input produces ``USE_DEFAULT`` as its outcome so the owning setting
    falls back to its default; calling ``convert`` directly on blank input
    returns an empty tuple.
    """

    __slots__ = ("_item", "_separator")

    def __init__(self, separator: re.Pattern[str], item: Conversion[str, T]) -> None:
        self._separator = separator
        self._item = item

    @override
    def convert(self, value: str) -> tuple[T, ...]:
        text = value.strip()
        if not text:
            return ()
        parts = self._separator.split(text)
        while parts and not parts[-1]:
            parts.pop()
        return tuple(self._item.convert(part) for part in parts)

    @override
    def outcome(self, value: str) -> Outcome[tuple[T, ...]]:
        if not value.strip():
            return USE_DEFAULT
        return super().outcome(value)

    @override
    def __repr__(self) -> str:
        return f"list({self._item!r}, separator={self._separator.pattern!r})"


def default_value_of(default: T | Unset) -> DefaultValue[T]:
    if isinstance(default, Unset):
        return no_default()
    return fixed(default)


def setting(name: str, conversion: Conversion[str, T], default: T | Unset = UNSET) -> Setting[T]:
    """Declare a setting converted by ``conversion``.

    Args:
        name: Setting name.
        conversion: Conversion from the raw literal.
        default: Value used when nothing is configured; omit for a required
            setting.

    Returns:
        The new setting.
    """
    return Setting(name, conversion, default_value_of(default))


def string_setting(name: str, default: str | Unset = UNSET) -> Setting[str]:
    """Declare a setting whose value is the raw literal."""
    return Setting(name, no_conversion(), default_value_of(default))


def boolean_setting(name: str, default: bool | Unset = UNSET) -> Setting[bool]:
    """Declare a boolean setting.

    Accepted literals (any letter case): ``true``, ``yes``, ``on``, ``enable``,
    ``enabled`` and ``false``, ``no``, ``off``, ``disable``, ``disabled``.
    """
    return Setting(name, BOOLEAN, default_value_of(default))


def list_setting(
    name: str,
    conversion: Conversion[str, T],
    *defaults: T,
    separator: str | re.Pattern[str] | None = None,
) -> Setting[tuple[T, ...]]:
    """Declare a list setting.

    Args:
        name: Setting name.
        conversion: Conversion applied to every part of the literal.
        *defaults: Default items, in order; omit for a required setting.
        separator: Regular expression separating the parts; defaults to a
            comma.

    Returns:
        The new setting, resolving to a tuple.
    """
    if separator is None:
        pattern = COMMA_SEPARATED
    elif isinstance(separator, str):
        pattern = re.compile(separator)
    else:
        pattern = separator
    default: DefaultValue[tuple[T, ...]] = fixed_list(*defaults) if defaults else no_default()
    return Setting(name, ListConversion(pattern, conversion), default)


__all__ = [
    "BOOLEAN",
    "COMMA_SEPARATED",
    "FALSE_VALUES",
    "TRUE_VALUES",
    "UNSET",
    "Unset",
    "ListConversion",
    "Setting",
    "boolean_setting",
    "default_value_of",
    "list_setting",
    "setting",
    "string_setting",
]
