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

"""Exceptions raised by licensekit."""

from __future__ import annotations

import os

__all__ = [
    'ConfigError',
    'DigestUnavailableError',
    'EnvironmentFailure',
    'FileOperationError',
    'RenameError',
    'UnknownMimeTypeError',
]


class FileOperationError(OSError):
    """A file-system operation could not be completed.

    Attributes:
        paths: The path(s) the failed operation was acting on.
    """

    def __init__(self, message: str, *paths: str | os.PathLike[str]) -> None:
        super().__init__(message)
        self.paths = tuple(os.fspath(p) for p in paths)
        if self.paths:
            self.filename = self.paths[0]
        if len(self.paths) > 1:
            self.filename2 = self.paths[1]

    def __str__(self) -> str:
        return str(self.args[0])


class RenameError(FileOperationError):
    """Moving a file onto its destination failed."""

    def __init__(self, source: str | os.PathLike[str], destination: str | os.PathLike[str]) -> None:
        super().__init__(
            f"could not rename '{os.fspath(source)}' to '{os.fspath(destination)}'",
            source,
            destination,
        )
        self.source = os.fspath(source)
        self.destination = os.fspath(destination)


class EnvironmentFailure(RuntimeError):
    """The runtime or the caller's configuration cannot satisfy a request."""


class DigestUnavailableError(EnvironmentFailure):
    """The requested hash algorithm is not provided by this interpreter."""

    def __init__(self, algorithm: str) -> None:
        super().__init__(f'Hash algorithm {algorithm!r} is not available')
        self.algorithm = algorithm


class UnknownMimeTypeError(EnvironmentFailure):
    """No file extension is known for a MIME type."""

    def __init__(self, mime_type: str | None) -> None:
        if mime_type is None:
            message = 'Unexpected null mime type'
        else:
            message = f"Unexpected mime type '{mime_type}'"
        super().__init__(message)
        self.mime_type = mime_type


class ConfigError(Exception):
    """Raised when licensekit configuration fails validation.

    Attributes:
        errors: List of human-readable error strings.
    """

    def __init__(self, source: str, errors: list[str]) -> None:
        self.source = source
        self.errors = errors
        bullet_list = '\n'.join(f'  - {e}' for e in errors)
        super().__init__(f'{source} has {len(errors)} configuration error(s):\n{bullet_list}')
