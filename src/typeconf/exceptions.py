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

"""Configuration conditions raised while parsing and resolving settings.

Every condition carries the context needed to rebuild its message (setting
name, offending literal, bounds, originating parameter) and exposes a
``localize`` hook. The hook returns the built-in English message; applications
that translate messages subclass the condition or post-process the result.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Final

from typeconf._internal.exceptions import TypeconfError, TypeconfTypeError, TypeconfValidationError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from typeconf.parameter import Parameter
    from typeconf.setting import Setting

Number = int | float

NEGATIVE_INFINITY: Final[float] = float("-inf")
POSITIVE_INFINITY: Final[float] = float("inf")


def _format_number(value: Number) -> str:
    return str(value)


def _format_literals(values: Sequence[str]) -> str:
    return "[" + ", ".join(values) + "]"


class InvalidConfigurationValueError(TypeconfValidationError):
    """Raised when a raw configuration literal cannot be interpreted.

    Custom conversions may raise this class directly; subclasses describe the
    built-in failures and derive ``value`` from their own context.
    """

    def __init__(self, message: str, *, value: str | None = None) -> None:
        """Initialize the exception with its message and the rejected literal.

        Args:
            message: Human-readable failure message.
            value: The rejected literal, when known.
        """
        super().__init__(message)
        self._value = value

    @property
    def value(self) -> str | None:
        """Return the offending literal, or ``None`` when no literal was supplied."""
        return self._value

    def localize(self, locale: str | None = None) -> str:
        """Return the message rendered for ``locale``.

        Args:
            locale: Locale identifier (for example ``"en_US"``); ignored by the
                built-in messages.

        Returns:
            The human-readable failure message.
        """
        del locale
        return str(self)


class InvalidNumberError(InvalidConfigurationValueError):
    """Raised when a literal is not a number in the detected radix."""

    def __init__(self, literal: str) -> None:
        """Initialize the exception with the offending literal.

        Args:
            literal: The text handed to the number parser.
        """
        self.literal = literal
        super().__init__(f"[{literal}] is not a valid numerical string.")

    @property
    def value(self) -> str:
        return self.literal


class InvalidRangeError(InvalidConfigurationValueError):
    """Raised when a parsed number falls outside the required bounds."""

    def __init__(self, number: Number, lower: Number | None, upper: Number | None) -> None:
        """Initialize the exception with the number and the violated range.

        Args:
            number: The number produced by the reader.
            lower: Lower bound, or ``None`` when unbounded below.
            upper: Upper bound, or ``None`` when unbounded above.
        """
        self.number = number
        self.lower = lower
        self.upper = upper
        shown_lower = NEGATIVE_INFINITY if lower is None else lower
        shown_upper = POSITIVE_INFINITY if upper is None else upper
        super().__init__(
            f"{_format_number(number)} is not within the valid range "
            f"[{_format_number(shown_lower)},{_format_number(shown_upper)}].",
        )

    @property
    def value(self) -> str:
        return _format_number(self.number)


class InvalidBooleanError(InvalidConfigurationValueError):
    """Raised when a literal is in neither accepted boolean set."""

    def __init__(
        self,
        literal: str,
        true_values: Sequence[str],
        false_values: Sequence[str],
    ) -> None:
        """Initialize the exception with the literal and the accepted sets.

        Args:
            literal: The rejected literal.
            true_values: Literals accepted as ``True``.
            false_values: Literals accepted as ``False``.
        """
        self.literal = literal
        self.true_values = tuple(true_values)
        self.false_values = tuple(false_values)
        super().__init__(
            f"[{literal}] is not a valid boolean value, valid values are "
            f"{_format_literals(self.true_values)} or {_format_literals(self.false_values)}.",
        )

    @property
    def value(self) -> str:
        return self.literal


class InvalidTypedValueError(InvalidConfigurationValueError):
    """Raised when a schema-backed conversion rejects a literal."""

    def __init__(self, literal: str, type_name: str, detail: str) -> None:
        """Initialize the exception with the literal, target type and reason.

        Args:
            literal: The rejected literal.
            type_name: Display name of the target type.
            detail: First validation message reported for the literal.
        """
        self.literal = literal
        self.type_name = type_name
        self.detail = detail
        super().__init__(f"[{literal}] is not a valid {type_name}: {detail}.")

    @property
    def value(self) -> str:
        return self.literal


class NoConfigurationError(TypeconfError):
    """Raised when a setting without a default value is asked for its default."""

    def __init__(self, setting: Setting[Any]) -> None:
        """Initialize the exception with the setting that has no default.

        Args:
            setting: The setting whose default was consulted.
        """
        self.setting = setting
        super().__init__(f"No value specified for configuration parameter [{setting.name}].")


class NoConfigurationValueError(InvalidConfigurationValueError):
    """Raised when a setting had neither a literal nor a default to resolve."""

    def __init__(self, cause: NoConfigurationError) -> None:
        """Initialize the exception from the missing-default condition.

        Args:
            cause: The condition raised by the setting's default value.
        """
        self.setting = cause.setting
        super().__init__(
            f"No configuration value supplied for configuration parameter [{cause.setting.name}].",
        )
        self.__cause__ = cause

    @property
    def value(self) -> None:
        return None


class SettingNotConfiguredError(TypeconfError, LookupError):
    """Raised by ``Configuration.get`` when no value could be produced."""

    def __init__(self, setting: Setting[Any], message: str | None = None) -> None:
        """Initialize the exception for ``setting``.

        Args:
            setting: The setting that could not be resolved.
            message: Optional message overriding the default wording.
        """
        self.setting = setting
        super().__init__(
            message or f"The required setting [{setting.name}] has not been configured.",
        )

    def localize(self, locale: str | None = None) -> str:
        """Return the message rendered for ``locale``."""
        del locale
        return str(self)


class SettingNotConfiguredWithValidValueError(SettingNotConfiguredError):
    """Raised when a buffered literal fails to parse against the requested setting."""

    def __init__(
        self,
        setting: Setting[Any],
        invalid: InvalidConfigurationValueError,
        parameter: Parameter,
        literal: str | None = None,
    ) -> None:
        """Initialize the exception with the parse failure and its origin.

        Args:
            setting: The setting that was requested.
            invalid: The parse failure for the buffered literal.
            parameter: The untyped parameter the literal was configured through.
            literal: The buffered literal; defaults to ``invalid.value``.
        """
        self.invalid = invalid
        self.parameter = parameter
        self.literal = invalid.value if literal is None else literal
        super().__init__(
            setting,
            f"The setting [{setting.name}] has been configured with an invalid value "
            f"[{self.literal}]. {invalid} Configuration was done through the use of the "
            f"foreign parameter [{parameter}].",
        )


class ConflictingConfigurationError(TypeconfError):
    """Raised when two distinct settings claim the same name."""

    def __init__(self, configured: Setting[Any], attempted: Setting[Any]) -> None:
        """Initialize the exception with both settings.

        Args:
            configured: The setting that currently owns the name.
            attempted: The setting that tried to claim it.
        """
        self.configured_setting = configured
        self.attempted_setting = attempted
        super().__init__(
            f"Attempted to configure [{configured.name}] by {attempted!r}, "
            f"but it is already configured by {configured!r}.",
        )

    def localize(self, locale: str | None = None) -> str:
        """Return the message rendered for ``locale``."""
        del locale
        return str(self)


class InvalidArgumentError(TypeconfValidationError):
    """User-facing failure raised by ``Configuration.configure``.

    The message is the localized message of the underlying condition, which is
    available as ``__cause__``.
    """


class ConfigSourceError(TypeconfValidationError):
    """Raised when a parameter source cannot be read or flattened."""

    def __init__(self, source: str | Path, reason: str) -> None:
        """Initialize the exception with the source and a reason.

        Args:
            source: File path or source label that failed.
            reason: Description of the failure.
        """
        self.source = source
        self.reason = reason
        super().__init__(f"Unable to read parameters from {source}: {reason}")


__all__ = [
    "ConfigSourceError",
    "ConflictingConfigurationError",
    "InvalidArgumentError",
    "InvalidBooleanError",
    "InvalidConfigurationValueError",
    "InvalidNumberError",
    "InvalidRangeError",
    "InvalidTypedValueError",
    "NoConfigurationError",
    "NoConfigurationValueError",
    "SettingNotConfiguredError",
    "SettingNotConfiguredWithValidValueError",
    "TypeconfError",
    "TypeconfTypeError",
    "TypeconfValidationError",
]
