"""Shared helpers for Copa Vallejo."""

# Copa Vallejo
# Copyright (C) 2025  Copa Vallejo developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import logging
import os
import uuid

from copavallejo.constants import LOG_LEVEL_ENV_VAR

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_root_configured = False


def _configure_package_logger() -> None:
    """Attach a single stream handler to the package logger."""
    global _root_configured
    if _root_configured:
        return

    package_logger = logging.getLogger("copavallejo")
    level_name = os.environ.get(LOG_LEVEL_ENV_VAR, "WARNING").upper()
    package_logger.setLevel(getattr(logging, level_name, logging.WARNING))

    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)

    _root_configured = True


def setup_logger(name: str) -> logging.Logger:
    """Return a logger for a module of this package.

    Args:
        name: Usually ``__name__`` of the calling module

    Returns:
        Logger that propagates to the configured ``copavallejo`` logger
    """
    _configure_package_logger()
    return logging.getLogger(name)


def set_log_level(level: int) -> None:
    """Change the level of every Copa Vallejo logger at once."""
    _configure_package_logger()
    logging.getLogger("copavallejo").setLevel(level)


def generate_id(prefix: str) -> str:
    """Generate a unique document id.

    Args:
        prefix: Kind of record, e.g. ``"match"``

    Returns:
        Id of the form ``<prefix>-<32 hex chars>``
    """
    return f"{prefix.lower()}-{uuid.uuid4().hex}"
