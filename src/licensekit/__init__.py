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

"""Third-party license records and file-system helpers."""

from licensekit._types import LicenseDescriptor, SupportsLicense
from licensekit.config import LicenseKitConfig, load_config
from licensekit.errors import (
    ConfigError,
    DigestUnavailableError,
    EnvironmentFailure,
    FileOperationError,
    RenameError,
    UnknownMimeTypeError,
)
from licensekit.model import ProjectLicense
from licensekit.store import LicenseFileStore

__all__ = [
    'ConfigError',
    'DigestUnavailableError',
    'EnvironmentFailure',
    'FileOperationError',
    'LicenseDescriptor',
    'LicenseFileStore',
    'LicenseKitConfig',
    'ProjectLicense',
    'RenameError',
    'SupportsLicense',
    'UnknownMimeTypeError',
    'load_config',
]
