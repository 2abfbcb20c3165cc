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

"""File-system helpers for cached license texts and generated reports.

Every function is stateless and synchronous. Failures raised by these
helpers themselves are :class:`~licensekit.errors.FileOperationError`
(an :class:`OSError`) carrying the offending path(s); errors from the
standard library propagate unchanged. Nothing here logs a failure;
successful mutations are logged at debug level.

Usage::

    from licensekit import fileutil

    target = fileutil.build_path(out_dir, 'licenses', 'mit.txt')
    fileutil.write_all_text(target, text, 'utf-8')
    digest = fileutil.sha1_hex(target)
"""

from __future__ import annotations

import hashlib
import os
import re
import shutil
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Final, Protocol, TypeVar

from licensekit.errors import (
    DigestUnavailableError,
    FileOperationError,
    RenameError,
    UnknownMimeTypeError,
)
from licensekit.logging import get_logger

__all__ = [
    'BACKUP_SUFFIX',
    'backup_file',
    'backup_path_for',
    'build_path',
    'copy_file',
    'delete_file',
    'ensure_directory',
    'ensure_file',
    'extension_for_mime_type',
    'ordered_by_path',
    'quietly_closing',
    'read_all_text',
    'rename_file',
    'sha1_hex',
    'try_close',
    'write_all_text',
]

logger = get_logger(__name__)

StrPath = str | os.PathLike[str]

#: Appended to the absolute path of a file to name its backup copy.
BACKUP_SUFFIX: Final[str] = '~'

# Line terminators recognised when re-emitting text.
_LINE_BREAK_RE: Final[re.Pattern[str]] = re.compile(r'\r\n|\r|\n')


class SupportsClose(Protocol):
    def close(self) -> object: ...


_C = TypeVar('_C', bound=SupportsClose)


# ── Streams ──────────────────────────────────────────────────────────


def try_close(stream: SupportsClose | None) -> None:
    """Close ``stream``, discarding any error raised while closing."""
    if stream is None:
        return
    try:
        stream.close()
    except Exception:  # noqa: BLE001, S110
        pass


@contextmanager
def quietly_closing(stream: _C) -> Iterator[_C]:
    """Yield ``stream`` and :func:`try_close` it on every exit path."""
    try:
        yield stream
    finally:
        try_close(stream)


# ── Creation and removal ─────────────────────────────────────────────


def ensure_directory(path: StrPath) -> bool:
    """Create ``path`` and any missing parents.

    Returns:
        ``True`` if the directory was created, ``False`` if something
        already existed at ``path``.

    Raises:
        FileOperationError: If the directory could not be created.
    """
    directory = Path(path)
    if directory.exists():
        return False
    try:
        directory.mkdir(parents=True)
    except OSError as exc:
        raise FileOperationError(f'Could not create directory {directory}', directory) from exc
    logger.debug('directory_created', path=str(directory))
    return True


def ensure_file(path: StrPath) -> bool:
    """Create an empty file at ``path`` (and its parent directory) if absent.

    Returns:
        ``True`` if the file was created, ``False`` if it already existed.

    Raises:
        FileOperationError: If the directory or the file could not be
            created.
    """
    file = Path(path)
    ensure_directory(file.parent)
    if file.exists():
        return False
    try:
        file.touch(exist_ok=False)
    except OSError as exc:
        raise FileOperationError(f'Could not create new file {file}', file) from exc
    logger.debug('file_created', path=str(file))
    return True


def delete_file(path: StrPath) -> None:
    """Delete a file or an empty directory; absent paths are ignored.

    The existence check and the deletion are two separate steps.

    Raises:
        FileOperationError: If ``path`` exists but could not be deleted.
    """
    file = Path(path)
    if not file.exists():
        return
    try:
        if file.is_dir() and not file.is_symlink():
            file.rmdir()
        else:
            file.unlink()
    except OSError as exc:
        raise FileOperationError(f'could not delete file {file}', file) from exc
    logger.debug('file_deleted', path=str(file))


def _force_delete(path: Path) -> None:
    """Delete ``path`` whatever it is; raises FileNotFoundError if absent."""
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()


def rename_file(source: StrPath, destination: StrPath) -> None:
    """Move ``source`` to ``destination``, replacing whatever is there.

    The destination is deleted first (a missing destination is fine),
    its parent directories are created, then the source is moved. This
    is not an atomic replace.

    Raises:
        RenameError: If any step fails. The original error is chained.
    """
    src = Path(source)
    dst = Path(destination)
    try:
        try:
            _force_delete(dst)
        except FileNotFoundError:
            pass
        if src.is_dir():
            raise IsADirectoryError(f'Source is a directory: {src}')
        dst.parent.mkdir(parents=True, exist_ok=True)
        shutil.move(src, dst)
    except OSError as exc:
        raise RenameError(src, dst) from exc
    logger.debug('file_renamed', source=str(src), destination=str(dst))


def copy_file(source: StrPath, target: StrPath) -> None:
    """Copy ``source`` to ``target`` with its metadata.

    The parent directory of ``target`` is created when missing.

    Raises:
        OSError: If the copy fails.
    """
    dst = Path(target)
    ensure_directory(dst.parent)
    shutil.copy2(source, dst)
    logger.debug('file_copied', source=os.fspath(source), target=str(dst))


# ── Paths ────────────────────────────────────────────────────────────


def build_path(base: StrPath, *segments: str) -> Path:
    """Join ``segments`` onto ``base`` with the platform separator.

    Plain concatenation: ``.`` and ``..`` are kept as given, and a
    segment starting with a separator does not discard ``base``.
    """
    if not segments:
        return Path(base)
    return Path(f'{os.fspath(base)}{os.sep}{os.sep.join(segments)}')


def backup_path_for(path: StrPath) -> Path:
    """Return the absolute form of ``path`` with ``~`` appended."""
    return Path(f'{Path(path).absolute()}{BACKUP_SUFFIX}')


def backup_file(path: StrPath) -> Path:
    """Copy ``path`` to :func:`backup_path_for` and return the backup path."""
    backup = backup_path_for(path)
    copy_file(path, backup)
    return backup


def ordered_by_path(files: Iterable[StrPath]) -> list[Path]:
    """Return ``files`` as a new list sorted by absolute path."""
    return sorted((Path(f) for f in files), key=lambda f: str(f.absolute()))


# ── Content ──────────────────────────────────────────────────────────


def read_all_text(path: StrPath, encoding: str) -> str:
    """Return the whole content of ``path`` decoded with ``encoding``.

    Line endings are returned as stored.
    """
    with open(path, encoding=encoding, newline='') as fh:
        return fh.read()


def write_all_text(path: StrPath, content: str, encoding: str) -> None:
    """Write ``content`` to ``path`` with platform line endings.

    Each line of ``content`` (terminated by ``\\r\\n``, ``\\r`` or
    ``\\n``) is written followed by :data:`os.linesep`, so the file always
    ends with a line terminator unless ``content`` is empty. The parent
    directory is created when missing.
    """
    file = Path(path)
    ensure_directory(file.parent)
    lines = _LINE_BREAK_RE.split(content)
    if lines[-1] == '':
        lines.pop()
    with open(file, 'w', encoding=encoding, newline='') as out:
        for line in lines:
            out.write(line)
            out.write(os.linesep)
    logger.debug('text_written', path=str(file), lines=len(lines), encoding=encoding)


def sha1_hex(path: StrPath) -> str:
    """Return the SHA-1 of the file content as 40 lowercase hex characters.

    Raises:
        DigestUnavailableError: If this interpreter has no SHA-1.
        OSError: If the file cannot be read.
    """
    try:
        digest = hashlib.new('sha1')
    except ValueError as exc:
        raise DigestUnavailableError('sha1') from exc
    digest.update(Path(path).read_bytes())
    return digest.hexdigest()


def extension_for_mime_type(mime_type: str | None, raise_if_unknown: bool = False) -> str | None:
    """Map a MIME type to ``.txt``, ``.html`` or ``.pdf``.

    Matching is case-insensitive and checked in that order: ``plain``
    (or exactly ``text/x-c``), then ``html``, then ``pdf`` as
    substrings. Parameters such as ``; charset=utf-8`` are tolerated.

    Args:
        mime_type: The MIME type, e.g. from a ``Content-Type`` header.
        raise_if_unknown: Raise instead of returning ``None`` when no
            extension matches or ``mime_type`` is ``None``.

    Raises:
        UnknownMimeTypeError: If nothing matches and
            ``raise_if_unknown`` is set.
    """
    if mime_type is None:
        if raise_if_unknown:
            raise UnknownMimeTypeError(None)
        return None

    lowered = mime_type.lower()
    if 'plain' in lowered or lowered == 'text/x-c':
        return '.txt'
    if 'html' in lowered:
        return '.html'
    if 'pdf' in lowered:
        return '.pdf'

    if raise_if_unknown:
        raise UnknownMimeTypeError(mime_type)
    return None
