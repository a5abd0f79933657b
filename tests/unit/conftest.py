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

"""Shared fixtures for unit tests."""

from __future__ import annotations

import pytest

from typeconf.configuration import Configuration
from typeconf.numeric import read_integer
from typeconf.parameter import UntypedParameter
from typeconf.setting import Setting, setting


@pytest.fixture
def configuration() -> Configuration:
    """Return an empty store with a fixed locale."""
    return Configuration(locale="en_US")


@pytest.fixture
def workers() -> Setting[int]:
    """Return a required 32-bit integer setting named ``workers``."""
    return setting("workers", read_integer().as_int32())


@pytest.fixture
def env_workers() -> UntypedParameter:
    """Return the untyped parameter a loader would harvest for ``workers``."""
    return UntypedParameter("workers", "environment")
