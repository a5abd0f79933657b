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

"""Integration tests for loading literals before settings are declared."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from typeconf import (
    Configuration,
    InvalidArgumentError,
    SettingNotConfiguredWithValidValueError,
    apply_sources,
    boolean_setting,
    environ_parameters,
    list_setting,
    mapping_parameters,
    read_floating_point,
    read_integer,
    setting,
    string_setting,
    toml_parameters,
    typed_setting,
)

if TYPE_CHECKING:
    from typeconf import Setting

pytestmark = pytest.mark.integration


@pytest.fixture
def app_toml(tmp_path: Path) -> Path:
    """Write a representative application config file.

    Returns:
        Path to the TOML file.
    """
    path = tmp_path / "app.toml"
    _ = path.write_text(
        "\n".join(
            [
                'name = "billing"',
                "workers = 0x10",
                "ratio = 0.75",
                'ports = [8080, 8443]',
                'data_dir = "/srv/billing"',
                "",
            ],
        ),
        encoding="utf-8",
    )
    return path


def test_application_settings_resolve_from_layered_sources(
    app_toml: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("BILLING_DEBUG", "on")
    monkeypatch.setenv("BILLING_WORKERS", "0b1100")
    configuration = Configuration(locale="en_US")

    applied = apply_sources(
        configuration,
        mapping_parameters({"name": "app", "debug": False}, source="defaults"),
        toml_parameters(app_toml),
        environ_parameters("BILLING_"),
    )
    assert applied >= 8

    name: Setting[str] = string_setting("name")
    debug = boolean_setting("debug", False)
    workers = setting("workers", read_integer().lower_limit(0).as_int32(), 1)
    ratio = setting("ratio", read_floating_point().lower_limit(0).upper_limit(1).as_float64())
    ports = list_setting("ports", read_integer().lower_limit(0).upper_limit(65536).as_int32(), 80)
    data_dir = typed_setting("data_dir", Path)
    timeout = setting("timeout", read_integer().as_int32(), 30)

    assert configuration.get(name) == "billing"
    assert configuration.get(debug) is True
    assert configuration.get(workers) == 12
    assert configuration.get(ratio) == 0.75
    assert configuration.get(ports) == (8080, 8443)
    assert configuration.get(data_dir) == Path("/srv/billing")
    assert configuration.get(timeout) == 30
    assert configuration.pending() == {}


def test_invalid_environment_literal_is_corrected_on_retry(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BILLING_RATIO", "1.5")
    configuration = Configuration(locale="en_US")
    _ = apply_sources(configuration, environ_parameters("BILLING_"))

    ratio = setting("ratio", read_floating_point().lower_limit(0).upper_limit(1).as_float64(), 0.5)
    with pytest.raises(SettingNotConfiguredWithValidValueError) as excinfo:
        _ = configuration.get(ratio)
    assert "1.5 is not within the valid range [0,1]." in str(excinfo.value)
    assert "[ratio (environment)]" in str(excinfo.value)
    assert configuration.pending() == {"ratio": "1.5"}

    with pytest.raises(InvalidArgumentError):
        _ = apply_sources(configuration, mapping_parameters({"ratio": 2}, source="operator"))
    assert configuration.pending() == {"ratio": "1.5"}

    _ = apply_sources(configuration, mapping_parameters({"ratio": 0.25}, source="operator"))
    assert configuration.get(ratio) == 0.25
    assert configuration.pending() == {}
