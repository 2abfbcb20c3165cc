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

"""Tests for licensekit.store."""

from __future__ import annotations

import io
import os
from pathlib import Path

import pytest
from licensekit.config import LicenseKitConfig
from licensekit.errors import UnknownMimeTypeError
from licensekit.model import ProjectLicense
from licensekit.store import LicenseFileStore

_NL = os.linesep

# ── Helpers ──────────────────────────────────────────────────────────


def _store(tmp_path: Path, **kwargs: bool) -> LicenseFileStore:
    return LicenseFileStore(tmp_path / 'licenses', **kwargs)


def _mit() -> ProjectLicense:
    return ProjectLicense(name='MIT License', url='https://opensource.org/license/mit', distribution='repo')


class _TrackingBytes(io.BytesIO):
    """BytesIO whose first close() fails after closing."""

    def __init__(self, data: bytes) -> None:
        super().__init__(data)
        self.close_calls = 0

    def close(self) -> None:
        self.close_calls += 1
        super().close()
        if self.close_calls == 1:
            raise OSError('connection reset')


# ── File naming ──────────────────────────────────────────────────────


class TestFileNameFor:
    """Tests for LicenseFileStore.file_name_for()."""

    def test_from_name(self, tmp_path: Path) -> None:
        """The license name is slugged."""
        lic = ProjectLicense(name='Apache License, Version 2.0')
        assert _store(tmp_path).file_name_for(lic, 'text/plain') == 'apache-license-version-2-0.txt'

    def test_from_url(self, tmp_path: Path) -> None:
        """Without a name the last URL segment is used."""
        lic = ProjectLicense(url='https://opensource.org/licenses/BSD-3-Clause.txt')
        assert _store(tmp_path).file_name_for(lic, 'text/html') == 'bsd-3-clause.html'

    def test_fallback(self, tmp_path: Path) -> None:
        """Without name or URL a generic stem is used."""
        assert _store(tmp_path).file_name_for(ProjectLicense(), 'application/pdf') == 'license.pdf'

    def test_unknown_mime_type(self, tmp_path: Path) -> None:
        """Unknown MIME types are rejected."""
        with pytest.raises(UnknownMimeTypeError):
            _store(tmp_path).file_name_for(_mit(), 'application/zip')


# ── Saving ───────────────────────────────────────────────────────────


class TestSaveText:
    """Tests for LicenseFileStore.save_text()."""

    def test_writes_and_sets_file(self, tmp_path: Path) -> None:
        """Text is written with platform line endings and file is set."""
        store = _store(tmp_path)
        lic = _mit()
        path = store.save_text(lic, 'MIT License\r\n\r\nPermission is hereby granted', 'text/plain; charset=utf-8')
        assert path == tmp_path / 'licenses' / 'mit-license.txt'
        assert lic.file == 'mit-license.txt'
        assert path.read_bytes() == f'MIT License{_NL}{_NL}Permission is hereby granted{_NL}'.encode()

    def test_no_partial_file_left(self, tmp_path: Path) -> None:
        """The staging file is moved into place."""
        store = _store(tmp_path)
        store.save_text(_mit(), 'text', 'text/plain')
        assert sorted(p.name for p in store.directory.iterdir()) == ['mit-license.txt']

    def test_unchanged_content_not_backed_up(self, tmp_path: Path) -> None:
        """Saving identical text keeps the file and makes no backup."""
        store = _store(tmp_path)
        store.save_text(_mit(), 'text', 'text/plain')
        store.save_text(_mit(), 'text', 'text/plain')
        assert sorted(p.name for p in store.directory.iterdir()) == ['mit-license.txt']

    def test_changed_content_backed_up(self, tmp_path: Path) -> None:
        """A differing previous copy is kept as a backup."""
        store = _store(tmp_path)
        path = store.save_text(_mit(), 'old', 'text/plain')
        store.save_text(_mit(), 'new', 'text/plain')
        assert path.read_text(encoding='utf-8') == f'new{_NL}'
        backup = path.with_name('mit-license.txt~')
        assert backup.read_text(encoding='utf-8') == f'old{_NL}'

    def test_backup_disabled(self, tmp_path: Path) -> None:
        """No backup is kept when disabled."""
        store = _store(tmp_path, backup=False)
        store.save_text(_mit(), 'old', 'text/plain')
        store.save_text(_mit(), 'new', 'text/plain')
        assert sorted(p.name for p in store.directory.iterdir()) == ['mit-license.txt']

    def test_unknown_mime_writes_nothing(self, tmp_path: Path) -> None:
        """A rejected MIME type leaves the record and disk untouched."""
        store = _store(tmp_path)
        lic = _mit()
        with pytest.raises(UnknownMimeTypeError):
            store.save_text(lic, 'text', None)
        assert lic.file is None
        assert not store.directory.exists()

    def test_encoding(self, tmp_path: Path) -> None:
        """The store encoding is used."""
        store = LicenseFileStore(tmp_path, encoding='latin-1')
        path = store.save_text(ProjectLicense(name='Licence'), 'é', 'text/plain')
        assert path.read_bytes() == b'\xe9' + _NL.encode('ascii')


class TestSaveStream:
    """Tests for LicenseFileStore.save_stream()."""

    def test_writes_bytes_verbatim(self, tmp_path: Path) -> None:
        """Stream bytes are stored unchanged."""
        store = _store(tmp_path)
        lic = ProjectLicense(name='EPL 2.0')
        data = b'%PDF-1.4\r\n\x00\x01binary'
        path = store.save_stream(lic, io.BytesIO(data), 'application/pdf')
        assert path.read_bytes() == data
        assert lic.file == 'epl-2-0.pdf'

    def test_stream_closed_quietly(self, tmp_path: Path) -> None:
        """The stream is closed and a close error is discarded."""
        stream = _TrackingBytes(b'<html></html>')
        path = _store(tmp_path).save_stream(_mit(), stream, 'text/html')
        assert stream.close_calls == 1
        assert path.name == 'mit-license.html'

    def test_replaces_with_backup(self, tmp_path: Path) -> None:
        """A changed stream replaces the file and backs up the old one."""
        store = _store(tmp_path)
        store.save_stream(_mit(), io.BytesIO(b'one'), 'text/plain')
        path = store.save_stream(_mit(), io.BytesIO(b'two'), 'text/plain')
        assert path.read_bytes() == b'two'
        assert path.with_name(path.name + '~').read_bytes() == b'one'


# ── Reading and housekeeping ─────────────────────────────────────────


class TestReadAndList:
    """Tests for read_text(), files(), path_for() and remove()."""

    def test_read_text(self, tmp_path: Path) -> None:
        """The cached text is returned."""
        store = _store(tmp_path)
        lic = _mit()
        store.save_text(lic, 'body', 'text/plain')
        assert store.read_text(lic) == f'body{_NL}'

    def test_read_text_without_file(self, tmp_path: Path) -> None:
        """A record without a cached file cannot be read."""
        with pytest.raises(ValueError, match='no cached file'):
            _store(tmp_path).read_text(_mit())

    def test_path_for(self, tmp_path: Path) -> None:
        """path_for follows record.file."""
        store = _store(tmp_path)
        lic = _mit()
        assert store.path_for(lic) is None
        lic.file = 'x.txt'
        assert store.path_for(lic) == store.directory / 'x.txt'

    def test_files_ordered_without_backups(self, tmp_path: Path) -> None:
        """Backups and partial files are not listed."""
        store = _store(tmp_path)
        store.save_text(ProjectLicense(name='Zlib'), 'a', 'text/plain')
        store.save_text(ProjectLicense(name='Apache 2'), 'a', 'text/plain')
        store.save_text(ProjectLicense(name='Apache 2'), 'b', 'text/plain')
        (store.directory / 'mit.txt.part').write_text('x', encoding='utf-8')
        assert [p.name for p in store.files()] == ['apache-2.txt', 'zlib.txt']

    def test_files_missing_directory(self, tmp_path: Path) -> None:
        """A store that was never written lists nothing."""
        assert _store(tmp_path).files() == []

    def test_remove(self, tmp_path: Path) -> None:
        """The file and its backup are deleted and record.file cleared."""
        store = _store(tmp_path)
        lic = _mit()
        store.save_text(lic, 'one', 'text/plain')
        store.save_text(lic, 'two', 'text/plain')
        store.remove(lic)
        assert lic.file is None
        assert list(store.directory.iterdir()) == []

    def test_remove_without_file(self, tmp_path: Path) -> None:
        """Removing a record without a cached file is a no-op."""
        lic = _mit()
        _store(tmp_path).remove(lic)
        assert lic.file is None


class TestFromConfig:
    """Tests for LicenseFileStore.from_config()."""

    def test_uses_settings(self, tmp_path: Path) -> None:
        """Directory, encoding and backup come from the config."""
        config = LicenseKitConfig(encoding='latin-1', licenses_dir='third-party', backup=False)
        store = LicenseFileStore.from_config(config, tmp_path)
        assert store.directory == tmp_path / 'third-party'
        assert store.encoding == 'latin-1'
        assert store.backup is False
