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

"""Default value strategies used when a setting received no literal."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Final, Generic, TypeVar, cast

from typeconf.compat import override
from typeconf.exceptions import NoConfigurationError

if TYPE_CHECKING:
    from typeconf.setting import Setting

T = TypeVar("T")


class DefaultValue(ABC, Generic[T]):
    """Fallback resolution strategy for a setting."""

    __slots__ = ()

    @abstractmethod
    def get(self, setting: Setting[T]) -> T:
        """Resolve the default for ``setting``.

        Raises:
            NoConfigurationError: If there is no default to resolve.
        """

    @property
    def is_defined(self) -> bool:
        """Return whether ``get`` produces a value."""
        return True


class NoDefault(DefaultValue[Any]):
    """Strategy for settings that must be configured explicitly."""

    __slots__ = ()

    @override
    def get(self, setting: Setting[Any]) -> Any:
        raise NoConfigurationError(setting)

    @property
    @override
    def is_defined(self) -> bool:
        return False

    @override
    def __repr__(self) -> str:
        return "<NoDefaultValue>"


class FixedDefault(DefaultValue[T]):
    """Strategy returning the same value every time."""

    __slots__ = ("value",)

    def __init__(self, value: T) -> None:
        self.value = value

    @override
    def get(self, setting: Setting[T]) -> T:
        return self.value

    @override
    def __repr__(self) -> str:
        return f"<DefaultValue: {self.value!r}>"


_NO_DEFAULT: Final[NoDefault] = NoDefault()


def no_default() -> DefaultValue[T]:
    """Return the shared strategy for settings without a default."""
    return cast("DefaultValue[T]", _NO_DEFAULT)


def fixed(value: T) -> DefaultValue[T]:
    """Return a strategy that always resolves to ``value``."""
    return FixedDefault(value)


def fixed_list(first: T, *more: T) -> DefaultValue[tuple[T, ...]]:
    """Return a strategy resolving to the given values as an immutable tuple.

    Order is preserved and duplicates are kept.
    """
    return FixedDefault((first, *more))


__all__ = [
    "DefaultValue",
    "FixedDefault",
    "NoDefault",
    "fixed",
    "fixed_list",
    "no_default",
]
