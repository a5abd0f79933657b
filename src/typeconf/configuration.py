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

"""Thread-safe store resolving settings from configured literals.

Loaders usually run before the application has declared its settings, so a
``Configuration`` accepts literals for names it does not know yet. Those
literals are buffered against the untyped parameter they arrived through and
parsed the first time the matching ``Setting`` is requested::

    config = Configuration()
    config.configure(UntypedParameter("workers", "environment"), "8")
    WORKERS = setting("workers", read_integer().as_int32(), 4)
    config.get(WORKERS)  # 8

A name is owned by at most one ``Setting`` at a time. Configuring or setting
a value through a different ``Setting`` with the same name is a conflict.
"""

from __future__ import annotations

import locale as _locale
import logging
import threading
from typing import TYPE_CHECKING, Any, TypeVar, cast

from typeconf._internal.logging_utils import structured_extra
from typeconf.compat import override
from typeconf.core.model_types import LogComponent
from typeconf.exceptions import (
    ConflictingConfigurationError,
    InvalidArgumentError,
    InvalidConfigurationValueError,
    NoConfigurationValueError,
    SettingNotConfiguredError,
    SettingNotConfiguredWithValidValueError,
)
from typeconf.setting import Setting

if TYPE_CHECKING:
    from typeconf.parameter import Parameter

logger: logging.Logger = logging.getLogger("typeconf.configuration")

T = TypeVar("T")


def _process_locale() -> str | None:
    return _locale.getlocale()[0]


class Configuration:
    """Registry of settings, resolved values and buffered literals.

    All public operations hold a per-instance lock for their full duration.

    Attributes:
        locale: Locale handed to the ``localize`` hook of conditions that
            ``configure`` translates into ``InvalidArgumentError``.
    """

    def __init__(self, locale: str | None = None) -> None:
        self.locale = locale if locale is not None else _process_locale()
        self._lock = threading.Lock()
        self._settings: dict[str, Setting[Any]] = {}
        self._resolved: dict[int, object] = {}
        self._pending: dict[str, tuple[Parameter, str]] = {}

    def configure(self, parameter: Parameter, value: str) -> None:
        """Configure ``parameter`` with a raw literal.

        A ``Setting`` (or a parameter whose name already has an owning
        setting) parses the literal immediately. Any other parameter only
        verifies it, and the literal is buffered until the setting is
        requested through ``get``.

        Args:
            parameter: Typed setting or untyped parameter being configured.
            value: Raw literal.

        Raises:
            InvalidArgumentError: If the literal is invalid or the setting
                conflicts with the current owner of its name. The underlying
                condition is chained as ``__cause__``.
            TypeconfTypeError: If an untyped parameter receives a non-string
                literal; this is not translated.
        """
        with self._lock:
            try:
                self._configure(parameter, value)
            except (InvalidConfigurationValueError, ConflictingConfigurationError) as cond:
                raise InvalidArgumentError(cond.localize(self.locale)) from cond

    def get(self, setting: Setting[T]) -> T:
        """Return the value of ``setting``.

        Resolution order: the cached value, then a buffered literal for the
        setting's name, then the setting's default. Only the first two are
        cached. Requesting a setting makes it the owner of its name.

        Raises:
            SettingNotConfiguredWithValidValueError: If the buffered literal
                does not parse; the literal stays buffered.
            SettingNotConfiguredError: If there is neither a literal nor a
                default.
        """
        with self._lock:
            key = setting.key
            if key in self._resolved:
                return cast("T", self._resolved[key])
            self._settings[setting.name] = setting
            pending = self._pending.pop(setting.name, None)
            if pending is None:
                return self._default_for(setting)
            parameter, raw = pending
            try:
                value = setting.parse(raw)
            except InvalidConfigurationValueError as exc:
                self._pending[setting.name] = pending
                logger.warning(
                    "Buffered value for %s from %s is invalid: %s",
                    setting.name,
                    parameter,
                    exc,
                    extra=structured_extra(
                        component=LogComponent.CONFIGURATION,
                        setting=setting.name,
                        parameter=str(parameter),
                    ),
                )
                raise SettingNotConfiguredWithValidValueError(setting, exc, parameter, raw) from exc
            self._resolved[key] = value
            logger.debug(
                "Resolved %s from buffered value",
                setting.name,
                extra=structured_extra(
                    component=LogComponent.CONFIGURATION,
                    setting=setting.name,
                    parameter=str(parameter),
                ),
            )
            return value

    def set(self, setting: Setting[T], value: T) -> None:
        """Install an already typed value for ``setting``.

        Raises:
            ConflictingConfigurationError: If a different setting owns the name.
        """
        with self._lock:
            self._install(setting, value)

    def pending(self) -> dict[str, str]:
        """Return a snapshot of the buffered literals by setting name."""
        with self._lock:
            return {name: raw for name, (_, raw) in self._pending.items()}

    def _configure(self, parameter: Parameter, value: str) -> None:
        target = parameter if isinstance(parameter, Setting) else self._settings.get(parameter.name)
        if target is None:
            parameter.verify(value)
            self._pending[parameter.name] = (parameter, value)
            logger.debug(
                "Buffered value for unregistered parameter %s",
                parameter.name,
                extra=structured_extra(
                    component=LogComponent.CONFIGURATION,
                    setting=parameter.name,
                    parameter=str(parameter),
                ),
            )
            return
        self._install(target, target.parse(value))

    def _install(self, setting: Setting[Any], value: object) -> None:
        owner = self._settings.get(setting.name)
        if owner is not None and owner is not setting:
            raise ConflictingConfigurationError(owner, setting)
        self._settings[setting.name] = setting
        self._resolved[setting.key] = value
        if self._pending.pop(setting.name, None) is not None:
            logger.debug(
                "Discarded buffered value for %s",
                setting.name,
                extra=structured_extra(component=LogComponent.CONFIGURATION, setting=setting.name),
            )

    def _default_for(self, setting: Setting[T]) -> T:
        try:
            value = setting.default_value()
        except NoConfigurationValueError as exc:
            raise SettingNotConfiguredError(setting) from exc
        logger.debug(
            "Using default value for %s",
            setting.name,
            extra=structured_extra(component=LogComponent.CONFIGURATION, setting=setting.name),
        )
        return value

    @override
    def __repr__(self) -> str:
        with self._lock:
            return (
                f"Configuration(settings={len(self._settings)}, "
                f"resolved={len(self._resolved)}, pending={len(self._pending)})"
            )


__all__ = ["Configuration"]
