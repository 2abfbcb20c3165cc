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

"""Structured logging for licensekit.

Built on `structlog <https://www.structlog.org/>`_. Events go to stderr,
either as colored console lines or, with ``json_log=True``, as one JSON
object per line.

Usage::

    from licensekit.logging import configure_logging, get_logger

    configure_logging(verbose=True)
    log = get_logger(__name__)
    log.debug('license_saved', path='licenses/mit.txt')
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

import structlog

#: Env var that turns secret redaction off when set to ``0``.
REDACT_ENV_VAR = 'LICENSEKIT_REDACT_SECRETS'

# Credentials that may be present when license texts are collected from
# authenticated repositories.
_SENSITIVE_ENV_VARS: tuple[str, ...] = (
    'GITHUB_TOKEN',
    'GH_TOKEN',
    'GITLAB_TOKEN',
    'MAVEN_PASSWORD',
    'MAVEN_GPG_PASSPHRASE',
    'NEXUS_PASSWORD',
    'ARTIFACTORY_API_KEY',
    'PYPI_TOKEN',
    'NPM_TOKEN',
)

_REDACTED = '[REDACTED]'

# Populated by configure_logging().
_secret_values: frozenset[str] = frozenset()


def configure_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    json_log: bool = False,
    redact_secrets: bool = True,
) -> None:
    """Configure structlog and the stdlib root logger.

    Call once at startup. Calling again reconfigures from scratch.

    Args:
        verbose: Emit debug events.
        quiet: Only warnings and errors.
        json_log: Render events as JSON instead of console text.
        redact_secrets: Replace credential values in events with
            ``[REDACTED]``. Also disabled by ``LICENSEKIT_REDACT_SECRETS=0``.
    """
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(
        format='%(message)s',
        stream=sys.stderr,
        level=level,
        force=True,
    )

    global _secret_values  # noqa: PLW0603
    redact = redact_secrets and os.environ.get(REDACT_ENV_VAR, '1') != '0'
    _secret_values = _collect_secret_values() if redact else frozenset()

    shared_processors: list[structlog.types.Processor] = [  # type: ignore[assignment]
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt='iso'),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        redact_sensitive_values,
    ]

    if json_log:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )
    for handler in logging.root.handlers:
        handler.setFormatter(formatter)


def get_logger(name: str = 'licensekit') -> structlog.stdlib.BoundLogger:
    """Return a bound structlog logger named ``name``."""
    return structlog.get_logger(name)


def _collect_secret_values() -> frozenset[str]:
    """Non-empty runtime values of the sensitive env vars."""
    return frozenset(value for value in (os.environ.get(name, '') for name in _SENSITIVE_ENV_VARS) if value)


def _scrub(value: object) -> object:
    if not isinstance(value, str) or not _secret_values:
        return value
    result = value
    for secret in _secret_values:
        # Values under eight characters are left alone.
        if len(secret) >= 8 and secret in result:
            result = result.replace(secret, _REDACTED)
    return result


def redact_sensitive_values(
    logger: Any,  # noqa: ANN401
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Structlog processor: replace credential values in every event field."""
    if not _secret_values:
        return event_dict
    return {k: _scrub(v) for k, v in event_dict.items()}


__all__ = [
    'REDACT_ENV_VAR',
    'configure_logging',
    'get_logger',
    'redact_sensitive_values',
]
