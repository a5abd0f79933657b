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

"""Parameter sources feeding raw literals into a ``Configuration``.

Each source returns ``(UntypedParameter, literal)`` pairs. ``apply_sources``
configures them in order, so later sources take precedence::

    apply_sources(
        config,
        mapping_parameters({"workers": 4}, source="defaults"),
        toml_parameters("app.toml"),
        environ_parameters("APP_"),
    )
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping, Sequence
from datetime import date, time
from pathlib import Path
from typing import TYPE_CHECKING, Final

from typeconf._internal.logging_utils import structured_extra
from typeconf.compat import tomllib
from typeconf.core.model_types import LogComponent
from typeconf.exceptions import ConfigSourceError
from typeconf.parameter import UntypedParameter

if TYPE_CHECKING:
    from collections.abc import Iterable

    from typeconf.configuration import Configuration

logger: logging.Logger = logging.getLogger("typeconf.sources")

ParameterPairs = list[tuple[UntypedParameter, str]]

ENVIRONMENT_SOURCE: Final[str] = "environment"
LIST_SEPARATOR: Final[str] = ","


def _render(source: str, name: str, value: object) -> str:
    match value:
        case str():
            return value
        case bool():
            return "true" if value else "false"
        case int() | float():
            return str(value)
        case date() | time():
            return value.isoformat()
        case Mapping():
            raise ConfigSourceError(source, f"nested table [{name}] is not supported")
        case Sequence():
            return LIST_SEPARATOR.join(_render(source, name, item) for item in value)
        case None:
            raise ConfigSourceError(source, f"parameter [{name}] has no value")
        case _:
            return str(value)


def mapping_parameters(mapping: Mapping[str, object], *, source: str = "mapping") -> ParameterPairs:
    """Turn a flat mapping into parameter pairs.

    Args:
        mapping: Setting names to values. Strings pass through unchanged;
            booleans render as ``true``/``false`` and sequences are joined
            with commas.
        source: Label recorded on every parameter.

    Returns:
        Parameter pairs in the mapping's iteration order.

    Raises:
        ConfigSourceError: If a value is a nested mapping or ``None``.
    """
    return [
        (UntypedParameter(str(name), source), _render(source, str(name), value))
        for name, value in mapping.items()
    ]


def environ_parameters(prefix: str, *, environ: Mapping[str, str] | None = None) -> ParameterPairs:
    """Collect parameters from environment variables starting with ``prefix``.

    ``APP_WORKERS=8`` with prefix ``APP_`` becomes the parameter ``workers``.

    Args:
        prefix: Variable name prefix, matched case-sensitively.
        environ: Mapping to read instead of ``os.environ``.

    Returns:
        Parameter pairs sorted by parameter name.
    """
    variables = os.environ if environ is None else environ
    pairs = [
        (UntypedParameter(key[len(prefix) :].lower(), ENVIRONMENT_SOURCE), value)
        for key, value in variables.items()
        if key.startswith(prefix) and len(key) > len(prefix)
    ]
    pairs.sort(key=lambda pair: pair[0].name)
    return pairs


def toml_parameters(path: str | Path) -> ParameterPairs:
    """Read parameters from the top-level keys of a TOML file.

    Args:
        path: TOML file to read.

    Returns:
        Parameter pairs in file order, labelled with the file path.

    Raises:
        ConfigSourceError: If the file cannot be read or parsed, or contains
            a nested table.
    """
    config_path = Path(path)
    try:
        raw = tomllib.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as exc:
        raise ConfigSourceError(config_path, str(exc)) from exc
    pairs = mapping_parameters(raw, source=str(config_path))
    logger.debug(
        "Read %d parameters from %s",
        len(pairs),
        config_path,
        extra=structured_extra(component=LogComponent.SOURCES, source=str(config_path), count=len(pairs)),
    )
    return pairs


def apply_sources(configuration: Configuration, *sources: Iterable[tuple[UntypedParameter, str]]) -> int:
    """Configure every pair of every source, in order.

    Later sources override earlier ones for the same name.

    Args:
        configuration: Store receiving the literals.
        *sources: Parameter pairs, lowest precedence first.

    Returns:
        The number of pairs applied.

    Raises:
        InvalidArgumentError: If a literal is rejected; pairs applied before
            the failure stay applied.
    """
    applied = 0
    for source in sources:
        for parameter, value in source:
            configuration.configure(parameter, value)
            applied += 1
    logger.debug(
        "Applied %d parameters from %d sources",
        applied,
        len(sources),
        extra=structured_extra(component=LogComponent.SOURCES, count=applied),
    )
    return applied


__all__ = [
    "ENVIRONMENT_SOURCE",
    "ParameterPairs",
    "apply_sources",
    "environ_parameters",
    "mapping_parameters",
    "toml_parameters",
]
