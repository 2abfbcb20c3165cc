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

"""Shared leaf-level types used across licensekit.

This module must have **zero** imports from other ``licensekit``
modules. It is safe to import from anywhere in the project.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

__all__ = [
    'LicenseDescriptor',
    'SupportsLicense',
]


@runtime_checkable
class SupportsLicense(Protocol):
    """Anything shaped like a license entry from a build manifest."""

    @property
    def name(self) -> str | None: ...

    @property
    def url(self) -> str | None: ...

    @property
    def distribution(self) -> str | None: ...

    @property
    def comments(self) -> str | None: ...


@dataclass(frozen=True)
class LicenseDescriptor:
    """A license entry as declared by a dependency's manifest.

    Attributes:
        name: Full legal name of the license.
        url: Official URL of the license text.
        distribution: How the artifact may be obtained, e.g. ``"repo"``
            or ``"manual"``. Free text.
        comments: Addendum information about the license.
    """

    name: str | None = None
    url: str | None = None
    distribution: str | None = None
    comments: str | None = None
