"""Shared helpers for PickleFlow."""

# PickleFlow
# Copyright (C) 2025  PickleFlow developers
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


def setup_logger(name: str) -> logging.Logger:
    """Return the module logger for ``name``.

    The library never installs output handlers of its own; the root
    ``pickleflow`` logger carries a ``NullHandler`` so applications decide
    where records go.

    Args:
        name: Usually ``__name__`` of the calling module

    Returns:
        The configured logger
    """
    root = logging.getLogger("pickleflow")
    if not root.handlers:
        root.addHandler(logging.NullHandler())
    return logging.getLogger(name)
