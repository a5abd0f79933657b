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

"""Schema-backed conversions for types pydantic can validate from strings.

Useful for values the numeric and boolean conversions do not cover::

    DATA_DIR = typed_setting("data_dir", Path, Path("/var/lib/app"))
    STARTS = typed_setting("starts", datetime)
    MODE = typed_setting("mode", Literal["fast", "safe"], "safe")
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError

from typeconf.compat import override
from typeconf.conversion import Conversion
from typeconf.exceptions import InvalidTypedValueError
from typeconf.setting import UNSET, Setting, Unset, default_value_of

T = TypeVar("T")


def _type_name(target: Any) -> str:
    return getattr(target, "__name__", None) or repr(target)


class TypedConversion(Conversion[str, T]):
    """Validate a stripped literal against ``target`` using a pydantic ``TypeAdapter``."""

    __slots__ = ("_adapter", "_target")

    def __init__(self, target: type[T] | Any) -> None:
        self._target = target
        self._adapter: TypeAdapter[T] = TypeAdapter(target)

    @override
    def convert(self, value: str) -> T:
        text = value.strip()
        try:
            return self._adapter.validate_python(text)
        except ValidationError as exc:
            errors = exc.errors()
            detail = str(errors[0]["msg"]) if errors else str(exc)
            raise InvalidTypedValueError(text, _type_name(self._target), detail) from exc

    @override
    def __repr__(self) -> str:
        return f"typed({_type_name(self._target)})"


def typed(target: type[T] | Any) -> Conversion[str, T]:
    """Return a conversion validating literals as ``target``."""
    return TypedConversion(target)


def typed_setting(name: str, target: type[T] | Any, default: T | Unset = UNSET) -> Setting[T]:
    """Declare a setting validated as ``target``.

    Args:
        name: Setting name.
        target: Any type pydantic validates from a string in lax mode.
        default: Value used when nothing is configured; omit for a required
            setting.

    Returns:
        The new setting.
    """
    return Setting(name, TypedConversion(target), default_value_of(default))


__all__ = ["TypedConversion", "typed", "typed_setting"]
