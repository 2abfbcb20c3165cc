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

"""License record attached to a third-party dependency.

A :class:`ProjectLicense` is created for each license a dependency
declares, filled in while license texts are collected (``file`` is set
once a copy of the text is cached locally), and finally handed to a
report writer.

Usage::

    from licensekit.model import ProjectLicense

    lic = ProjectLicense.from_license(descriptor)
    lic.file = 'apache-license-2-0.txt'
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass
from typing import Any

from licensekit._types import SupportsLicense

__all__ = [
    'ProjectLicense',
]

_FIELDS = ('name', 'url', 'distribution', 'comments', 'file')


@dataclass
class ProjectLicense:
    """One license of a dependency.

    Attributes:
        name: Full legal name of the license.
        url: Official URL of the license text.
        distribution: Primary method by which the dependency may be
            distributed. Commonly ``"repo"`` (downloadable from the
            package repository) or ``"manual"`` (the user must obtain
            it by hand). Not validated.
        comments: Addendum information pertaining to this license.
        file: Name (without directory) of the local copy of the text
            fetched from :attr:`url`, or ``None``.
    """

    name: str | None = None
    url: str | None = None
    distribution: str | None = None
    comments: str | None = None
    file: str | None = None

    @classmethod
    def from_license(cls, license: SupportsLicense) -> ProjectLicense:  # noqa: A002
        """Copy name, url, distribution and comments from a descriptor.

        The local ``file`` is always left unset.
        """
        return cls(
            name=license.name,
            url=license.url,
            distribution=license.distribution,
            comments=license.comments,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ProjectLicense:
        """Rebuild a record from :meth:`as_dict` output; extra keys are ignored."""
        return cls(**{key: data.get(key) for key in _FIELDS})

    def as_dict(self) -> dict[str, str | None]:
        """Return the record as a plain dict."""
        return asdict(self)
