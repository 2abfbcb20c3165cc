# Copyright 2026 Google LLC
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
#
# SPDX-License-Identifier: Apache-2.0

"""Configuration for licensekit.

Settings are read from ``licensekit.toml`` at the project root (keys at
the top level) or, when that file is absent, from the
``[tool.licensekit]`` table of ``pyproject.toml``::

    [tool.licensekit]
    encoding = "utf-8"
    licenses_dir = "build/licenses"
    backup = false

All validation problems are collected and raised together as a
:class:`~licensekit.errors.ConfigError`.
"""

from __future__ import annotations

import codecs
import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from licensekit.errors import ConfigError
from licensekit.logging import get_logger

__all__ = [
    'CONFIG_FILE',
    'LicenseKitConfig',
    'load_config',
]

logger = get_logger(__name__)

CONFIG_FILE = 'licensekit.toml'
PYPROJECT_FILE = 'pyproject.toml'


@dataclass(frozen=True)
class LicenseKitConfig:
    """Resolved licensekit settings.

    Attributes:
        encoding: Encoding used to read and write license texts.
        licenses_dir: Directory holding cached license texts, relative
            to the project root unless absolute.
        backup: Keep a ``~`` backup when a cached text is replaced.
    """

    encoding: str = 'utf-8'
    licenses_dir: str = 'licenses'
    backup: bool = True

    def licenses_path(self, root: Path) -> Path:
        """Resolve :attr:`licenses_dir` against ``root``."""
        return root / self.licenses_dir


_EXPECTED_TYPES: dict[str, type] = {f.name: type(f.default) for f in fields(LicenseKitConfig)}


def _validate(table: dict[str, Any], source: str) -> LicenseKitConfig:
    errors: list[str] = []
    for key, value in table.items():
        expected = _EXPECTED_TYPES.get(key)
        if expected is None:
            errors.append(f'unknown key "{key}"')
        elif not isinstance(value, expected):
            errors.append(f'{key}: expected {expected.__name__}, got {type(value).__name__}')

    encoding = table.get('encoding')
    if isinstance(encoding, str):
        try:
            codecs.lookup(encoding)
        except LookupError:
            errors.append(f'encoding: unknown encoding "{encoding}"')

    licenses_dir = table.get('licenses_dir')
    if isinstance(licenses_dir, str) and not licenses_dir.strip():
        errors.append('licenses_dir: must not be empty')

    if errors:
        raise ConfigError(source, errors)
    return LicenseKitConfig(**table)


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        return tomllib.loads(path.read_text(encoding='utf-8'))
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(str(path), [f'invalid TOML: {exc}']) from exc


def load_config(root: Path) -> LicenseKitConfig:
    """Load settings for the project rooted at ``root``.

    Returns defaults when neither file provides any settings.

    Raises:
        ConfigError: If the settings are malformed.
    """
    config_path = root / CONFIG_FILE
    if config_path.is_file():
        config = _validate(_read_toml(config_path), str(config_path))
        logger.debug('config_loaded', path=str(config_path))
        return config

    pyproject_path = root / PYPROJECT_FILE
    if pyproject_path.is_file():
        table = _read_toml(pyproject_path).get('tool', {}).get('licensekit')
        if table is not None:
            if not isinstance(table, dict):
                raise ConfigError(str(pyproject_path), ['[tool.licensekit]: expected a table'])
            config = _validate(table, f'{pyproject_path} [tool.licensekit]')
            logger.debug('config_loaded', path=str(pyproject_path))
            return config

    logger.debug('config_defaults', root=str(root))
    return LicenseKitConfig()
