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

"""Untyped parameters: a name plus a basic validation contract.

Loaders hand ``Configuration.configure`` a parameter and its raw literal before
the application has necessarily declared the typed ``Setting`` for that name.
The parameter's ``verify`` is the only validation that can run at that point.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from typeconf._internal.exceptions import TypeconfTypeError
from typeconf.compat import override


@runtime_checkable
class Parameter(Protocol):
    """Protocol implemented by anything that can be configured from a literal."""

    @property
    def name(self) -> str:
        """Return the name joining this parameter to typed settings."""
        ...

    def verify(self, value: str) -> None:
        """Validate ``value`` as far as this parameter can.

        Raises:
            InvalidConfigurationValueError: If ``value`` is rejected.
        """
        ...


@dataclass(slots=True, frozen=True)
class UntypedParameter:
    """Parameter harvested by a loader before its typed setting is known.

    Attributes:
        name: Setting name the literal is destined for.
        source: Where the literal came from (``environment``, a file path, ...).
    """

    name: str
    source: str = "unknown"

    def verify(self, value: str) -> None:
        """Check that ``value`` is a string literal.

        Raises:
            TypeconfTypeError: If ``value`` is not a ``str``.
        """
        if not isinstance(value, str):
            message = f"parameter [{self.name}] expects a string literal, not {type(value).__name__}"
            raise TypeconfTypeError(message)

    @override
    def __str__(self) -> str:
        return f"{self.name} ({self.source})"


__all__ = ["Parameter", "UntypedParameter"]
