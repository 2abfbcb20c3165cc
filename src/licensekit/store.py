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

"""Local cache of license texts.

License texts obtained by the caller (from a repository, a web page or
by hand) are kept in one directory, one file per license, named after
the license and typed by MIME type::

    licenses/
    ├── apache-license-version-2-0.txt
    ├── apache-license-version-2-0.txt~     previous copy (backup)
    └── eclipse-public-license-2-0.html

Writes go to a ``.part`` file first and are moved into place with
:func:`~licensekit.fileutil.rename_file`. A file whose SHA-1 matches the
new content is left alone.

Usage::

    from licensekit.store import LicenseFileStore

    store = LicenseFileStore(Path('licenses'))
    store.save_text(record, text, 'text/plain')
    record.file  # 'mit-license.txt'
"""

from __future__ import annotations

import re
from pathlib import Path, PurePosixPath
from typing import BinaryIO, Final
from urllib.parse import urlsplit

from licensekit.config import LicenseKitConfig
from licensekit.fileutil import (
    BACKUP_SUFFIX,
    backup_file,
    backup_path_for,
    delete_file,
    ensure_directory,
    extension_for_mime_type,
    ordered_by_path,
    quietly_closing,
    read_all_text,
    rename_file,
    sha1_hex,
    write_all_text,
)
from licensekit.logging import get_logger
from licensekit.model import ProjectLicense

__all__ = [
    'LicenseFileStore',
]

logger = get_logger(__name__)

_PART_SUFFIX: Final[str] = '.part'
_DEFAULT_STEM: Final[str] = 'license'
_SLUG_RE: Final[re.Pattern[str]] = re.compile(r'[^a-z0-9]+')


def _slug(value: str) -> str:
    return _SLUG_RE.sub('-', value.lower()).strip('-')


class LicenseFileStore:
    """A directory of cached license texts.

    Args:
        directory: Where the texts live. Created on first write.
        encoding: Encoding for text written by :meth:`save_text` and
            read by :meth:`read_text`.
        backup: Keep a ``~`` copy of a text before replacing it.
    """

    def __init__(self, directory: Path, *, encoding: str = 'utf-8', backup: bool = True) -> None:
        self.directory = directory
        self.encoding = encoding
        self.backup = backup

    @classmethod
    def from_config(cls, config: LicenseKitConfig, root: Path) -> LicenseFileStore:
        """Build a store from loaded settings."""
        return cls(config.licenses_path(root), encoding=config.encoding, backup=config.backup)

    def file_name_for(self, record: ProjectLicense, mime_type: str | None) -> str:
        """Name of the cached file for ``record`` holding ``mime_type`` content.

        Raises:
            UnknownMimeTypeError: If ``mime_type`` maps to no extension.
        """
        extension = extension_for_mime_type(mime_type, raise_if_unknown=True)
        stem = _slug(record.name or '')
        if not stem and record.url:
            stem = _slug(PurePosixPath(urlsplit(record.url).path).stem)
        return f'{stem or _DEFAULT_STEM}{extension}'

    def path_for(self, record: ProjectLicense) -> Path | None:
        """Path of the cached file of ``record``, if it has one."""
        if record.file is None:
            return None
        return self.directory / record.file

    def save_text(self, record: ProjectLicense, text: str, mime_type: str | None) -> Path:
        """Cache ``text`` for ``record`` with platform line endings.

        Sets ``record.file`` and returns the cached path.
        """
        target = self.directory / self.file_name_for(record, mime_type)
        staging = target.with_name(target.name + _PART_SUFFIX)
        write_all_text(staging, text, self.encoding)
        return self._commit(record, staging, target)

    def save_stream(self, record: ProjectLicense, stream: BinaryIO, mime_type: str | None) -> Path:
        """Cache the bytes of ``stream`` for ``record`` verbatim.

        ``stream`` is consumed and closed. Sets ``record.file`` and
        returns the cached path.
        """
        target = self.directory / self.file_name_for(record, mime_type)
        staging = target.with_name(target.name + _PART_SUFFIX)
        with quietly_closing(stream) as source:
            data = source.read()
        ensure_directory(self.directory)
        staging.write_bytes(data)
        return self._commit(record, staging, target)

    def _commit(self, record: ProjectLicense, staging: Path, target: Path) -> Path:
        if target.is_file() and sha1_hex(target) == sha1_hex(staging):
            delete_file(staging)
            logger.debug('license_unchanged', license=record.name, path=str(target))
        else:
            if self.backup and target.is_file():
                backup_file(target)
            rename_file(staging, target)
            logger.info('license_saved', license=record.name, path=str(target))
        record.file = target.name
        return target

    def read_text(self, record: ProjectLicense) -> str:
        """Return the cached text of ``record``.

        Raises:
            ValueError: If ``record`` has no cached file.
            OSError: If the file cannot be read.
        """
        path = self.path_for(record)
        if path is None:
            raise ValueError(f'License {record.name!r} has no cached file')
        return read_all_text(path, self.encoding)

    def files(self) -> list[Path]:
        """Cached license files ordered by path, without backups or partial writes."""
        if not self.directory.is_dir():
            return []
        return ordered_by_path(
            p
            for p in self.directory.iterdir()
            if p.is_file() and not p.name.endswith((BACKUP_SUFFIX, _PART_SUFFIX))
        )

    def remove(self, record: ProjectLicense) -> None:
        """Delete the cached file of ``record`` and its backup, and clear ``record.file``."""
        path = self.path_for(record)
        if path is None:
            return
        delete_file(path)
        delete_file(backup_path_for(path))
        record.file = None
        logger.debug('license_removed', license=record.name, path=str(path))
