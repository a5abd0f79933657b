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

"""typeconf - typed, validated configuration settings.

Declares named settings with conversions, numeric limits and defaults, and
resolves them from raw string literals supplied through environment
variables, TOML files or plain mappings, even when the literals arrive before
the settings are declared.
"""

from __future__ import annotations

from typeconf.exceptions import (
    ConfigSourceError,
    ConflictingConfigurationError,
    InvalidArgumentError,
    InvalidBooleanError,
    InvalidConfigurationValueError,
    InvalidNumberError,
    InvalidRangeError,
    InvalidTypedValueError,
    NoConfigurationError,
    NoConfigurationValueError,
    SettingNotConfiguredError,
    SettingNotConfiguredWithValidValueError,
    TypeconfError,
    TypeconfTypeError,
    TypeconfValidationError,
)

from .configuration import Configuration
from .conversion import USE_DEFAULT, Conversion, Converted, Failed, combine, conversion, no_conversion
from .defaults import DefaultValue, fixed, fixed_list, no_default
from .numeric import NumericReader, read_floating_point, read_integer
from .parameter import Parameter, UntypedParameter
from .setting import Setting, boolean_setting, list_setting, setting, string_setting
from .sources import apply_sources, environ_parameters, mapping_parameters, toml_parameters
from .typed import typed, typed_setting

__all__ = [
    "USE_DEFAULT",
    "ConfigSourceError",
    "Configuration",
    "ConflictingConfigurationError",
    "Conversion",
    "Converted",
    "DefaultValue",
    "Failed",
    "InvalidArgumentError",
    "InvalidBooleanError",
    "InvalidConfigurationValueError",
    "InvalidNumberError",
    "InvalidRangeError",
    "InvalidTypedValueError",
    "NoConfigurationError",
    "NoConfigurationValueError",
    "NumericReader",
    "Parameter",
    "Setting",
    "SettingNotConfiguredError",
    "SettingNotConfiguredWithValidValueError",
    "TypeconfError",
    "TypeconfTypeError",
    "TypeconfValidationError",
    "UntypedParameter",
    "__version__",
    "apply_sources",
    "boolean_setting",
    "combine",
    "conversion",
    "environ_parameters",
    "fixed",
    "fixed_list",
    "list_setting",
    "mapping_parameters",
    "no_conversion",
    "no_default",
    "read_floating_point",
    "read_integer",
    "setting",
    "string_setting",
    "toml_parameters",
    "typed",
    "typed_setting",
]

__version__ = "0.1.0"
