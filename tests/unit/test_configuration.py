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

"""Unit tests for the configuration store."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

import pytest

from typeconf._internal.exceptions import TypeconfTypeError
from typeconf.configuration import Configuration
from typeconf.conversion import conversion, no_conversion
from typeconf.exceptions import (
    ConflictingConfigurationError,
    InvalidArgumentError,
    InvalidBooleanError,
    InvalidConfigurationValueError,
    InvalidNumberError,
    NoConfigurationValueError,
    SettingNotConfiguredError,
    SettingNotConfiguredWithValidValueError,
)
from typeconf.numeric import read_integer
from typeconf.parameter import UntypedParameter
from typeconf.setting import boolean_setting, list_setting, setting, string_setting

if TYPE_CHECKING:
    from typeconf.setting import Setting

pytestmark = pytest.mark.unit


def test_get_unconfigured_required_setting(configuration: Configuration, workers: Setting[int]) -> None:
    with pytest.raises(SettingNotConfiguredError) as excinfo:
        _ = configuration.get(workers)
    assert str(excinfo.value) == "The required setting [workers] has not been configured."
    assert excinfo.value.setting is workers
    assert isinstance(excinfo.value, LookupError)


def test_get_returns_default_then_configured_value(configuration: Configuration) -> None:
    port = setting("port", read_integer().as_int32(), 80)
    assert configuration.get(port) == 80
    configuration.configure(UntypedParameter("port", "cli"), "8080")
    assert configuration.get(port) == 8080


def test_late_registration_parses_buffered_literal(
    configuration: Configuration,
    workers: Setting[int],
    env_workers: UntypedParameter,
) -> None:
    configuration.configure(env_workers, "0x10")
    assert configuration.pending() == {"workers": "0x10"}
    assert configuration.get(workers) == 16
    assert configuration.pending() == {}


def test_invalid_buffered_literal_can_be_retried(
    configuration: Configuration,
    workers: Setting[int],
    env_workers: UntypedParameter,
) -> None:
    configuration.configure(env_workers, "many")
    with pytest.raises(SettingNotConfiguredWithValidValueError) as excinfo:
        _ = configuration.get(workers)
    assert str(excinfo.value) == (
        "The setting [workers] has been configured with an invalid value [many]. "
        "[many] is not a valid numerical string. "
        "Configuration was done through the use of the foreign parameter [workers (environment)]."
    )
    assert isinstance(excinfo.value.invalid, InvalidNumberError)
    assert excinfo.value.parameter is env_workers
    assert isinstance(excinfo.value.__cause__, InvalidNumberError)
    assert configuration.pending() == {"workers": "many"}

    with pytest.raises(SettingNotConfiguredWithValidValueError):
        _ = configuration.get(workers)

    configuration.configure(env_workers, "8")
    assert configuration.pending() == {}
    assert configuration.get(workers) == 8
    assert configuration.get(workers) == 8


def test_configure_known_setting_rejects_invalid_literal(configuration: Configuration) -> None:
    debug = boolean_setting("debug", False)
    with pytest.raises(InvalidArgumentError) as excinfo:
        configuration.configure(debug, "maybe")
    assert str(excinfo.value).startswith("[maybe] is not a valid boolean value")
    assert isinstance(excinfo.value.__cause__, InvalidBooleanError)
    assert isinstance(excinfo.value, ValueError)
    assert configuration.get(debug) is False


def test_configure_untyped_parameter_for_registered_owner_parses_immediately(
    configuration: Configuration,
    workers: Setting[int],
    env_workers: UntypedParameter,
) -> None:
    configuration.set(workers, 2)
    with pytest.raises(InvalidArgumentError) as excinfo:
        configuration.configure(env_workers, "lots")
    assert str(excinfo.value) == "[lots] is not a valid numerical string."
    assert configuration.pending() == {}
    assert configuration.get(workers) == 2


def test_configure_through_known_setting_drops_pending(
    configuration: Configuration,
    workers: Setting[int],
    env_workers: UntypedParameter,
) -> None:
    configuration.configure(env_workers, "bogus")
    configuration.configure(workers, "12")
    assert configuration.pending() == {}
    assert configuration.get(workers) == 12


def test_set_conflicting_settings(configuration: Configuration) -> None:
    first = string_setting("name")
    second = string_setting("name")
    configuration.set(first, "a")
    with pytest.raises(ConflictingConfigurationError) as excinfo:
        configuration.set(second, "b")
    assert excinfo.value.configured_setting is first
    assert excinfo.value.attempted_setting is second
    assert str(excinfo.value) == (
        "Attempted to configure [name] by Setting('name'), but it is already configured by Setting('name')."
    )


def test_set_same_setting_overwrites(configuration: Configuration) -> None:
    name = string_setting("name")
    configuration.set(name, "a")
    configuration.set(name, "b")
    assert configuration.get(name) == "b"


def test_configure_conflict_is_reported_as_invalid_argument(configuration: Configuration) -> None:
    first = string_setting("name")
    second = string_setting("name")
    configuration.set(first, "a")
    with pytest.raises(InvalidArgumentError) as excinfo:
        configuration.configure(second, "b")
    assert isinstance(excinfo.value.__cause__, ConflictingConfigurationError)
    assert configuration.get(first) == "a"


def test_buffered_literal_is_replaced_by_later_configure(
    configuration: Configuration,
    workers: Setting[int],
) -> None:
    configuration.configure(UntypedParameter("workers", "file"), "3")
    configuration.configure(UntypedParameter("workers", "environment"), "5")
    assert configuration.pending() == {"workers": "5"}
    assert configuration.get(workers) == 5


def test_untyped_parameter_rejects_non_string(configuration: Configuration) -> None:
    with pytest.raises(TypeconfTypeError) as excinfo:
        configuration.configure(UntypedParameter("workers"), 5)  # type: ignore[arg-type]
    assert not isinstance(excinfo.value, InvalidArgumentError)
    assert isinstance(excinfo.value, TypeError)
    assert configuration.pending() == {}


def test_default_is_not_cached(configuration: Configuration) -> None:
    mode = string_setting("mode", "safe")
    assert configuration.get(mode) == "safe"
    configuration.configure(mode, "fast")
    assert configuration.get(mode) == "fast"


def _colour(value: str) -> str:
    if value not in {"red", "green", "blue"}:
        message = f"[{value}] is not a colour."
        raise InvalidConfigurationValueError(message)
    return value


def test_custom_conversion_rejection_of_buffered_literal(configuration: Configuration) -> None:
    colour = setting("colour", conversion(_colour), "red")
    parameter = UntypedParameter("colour", "environment")
    configuration.configure(parameter, "mauve")
    with pytest.raises(SettingNotConfiguredWithValidValueError) as excinfo:
        _ = configuration.get(colour)
    assert str(excinfo.value) == (
        "The setting [colour] has been configured with an invalid value [mauve]. "
        "[mauve] is not a colour. "
        "Configuration was done through the use of the foreign parameter [colour (environment)]."
    )
    assert excinfo.value.invalid.value is None
    assert configuration.pending() == {"colour": "mauve"}

    configuration.configure(parameter, "blue")
    assert configuration.get(colour) == "blue"


def test_custom_conversion_rejection_carries_literal() -> None:
    error = InvalidConfigurationValueError("[mauve] is not a colour.", value="mauve")
    assert error.value == "mauve"
    assert error.localize("en_US") == "[mauve] is not a colour."


def test_blank_buffered_list_literal_without_default_names_literal(configuration: Configuration) -> None:
    hosts = list_setting("hosts", no_conversion())
    configuration.configure(UntypedParameter("hosts", "environment"), " ")
    with pytest.raises(SettingNotConfiguredWithValidValueError) as excinfo:
        _ = configuration.get(hosts)
    assert isinstance(excinfo.value.invalid, NoConfigurationValueError)
    assert excinfo.value.literal == " "
    assert str(excinfo.value).startswith(
        "The setting [hosts] has been configured with an invalid value [ ]. "
        "No configuration value supplied for configuration parameter [hosts].",
    )
    assert "[None]" not in str(excinfo.value)


def test_locale_defaults_to_process_locale() -> None:
    assert Configuration(locale="fr_FR").locale == "fr_FR"
    _ = Configuration().locale


def test_concurrent_configure_and_get(configuration: Configuration) -> None:
    settings = [setting(f"n{index}", read_integer().as_int32()) for index in range(16)]
    errors: list[BaseException] = []
    barrier = threading.Barrier(8)

    def worker(offset: int) -> None:
        try:
            barrier.wait()
            for index, declared in enumerate(settings):
                configuration.configure(UntypedParameter(declared.name, "thread"), str(index))
                if (index + offset) % 2 == 0:
                    _ = configuration.get(declared)
        except Exception as exc:  # pragma: no cover - surfaced by the assertion below
            errors.append(exc)

    threads = [threading.Thread(target=worker, args=(offset,)) for offset in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    assert [configuration.get(declared) for declared in settings] == list(range(16))
    assert configuration.pending() == {}
