# This file is part of Checkbox.
#
# Copyright 2025 Canonical Ltd.
#
# Checkbox is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License version 3,
# as published by the Free Software Foundation.
#
# Checkbox is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with Checkbox.  If not, see <http://www.gnu.org/licenses/>.

"""
:mod:`jetson_power.nvpmodel` -- access to the nvpmodel utility
==============================================================

Loading the available modes only needs the config file, querying the current
mode runs ``nvpmodel`` unprivileged, changing it goes through ``sudo``.
"""

import logging
import os
import subprocess as sp

from jetson_power.errors import (
    ConfigFileNotFoundError,
    ConfigFileUnreadableError,
    NoPowerModesError,
)
from jetson_power.parsers.nvpmodel_conf import parse_nvpmodel_conf
from jetson_power.parsers.nvpmodel_query import (
    UNKNOWN_MODE,
    parse_current_mode,
)


logger = logging.getLogger(__name__)

NVPMODEL_CONF = "/etc/nvpmodel.conf"
QUERY_CMD = ["nvpmodel", "-q", "--verbose"]
CHANGE_CMD = ["sudo", "nvpmodel", "-m"]


def load_power_modes(path=NVPMODEL_CONF):
    """
    Read the POWER_MODEL records from an nvpmodel.conf file.

    :returns: a dict with {'mode id': 'mode name'} entries.
    :raises ConfigFileNotFoundError: the path is not a regular file
    :raises ConfigFileUnreadableError: the file cannot be read
    :raises NoPowerModesError: the file declares no power mode
    """
    if not os.path.isfile(path):
        raise ConfigFileNotFoundError(path)
    try:
        with open(path, "r", encoding="UTF-8", errors="replace") as stream:
            text = stream.read()
    except FileNotFoundError:
        raise ConfigFileNotFoundError(path) from None
    except OSError as exc:
        raise ConfigFileUnreadableError(path, exc) from exc
    modes = parse_nvpmodel_conf(text)
    if not modes:
        raise NoPowerModesError(path)
    logger.debug("Loaded %d power modes from %s", len(modes), path)
    return modes


def get_current_mode():
    """Return the id of the active power mode, or UNKNOWN_MODE."""
    try:
        proc = sp.run(QUERY_CMD, stdout=sp.PIPE, stderr=sp.DEVNULL,
                      universal_newlines=True)
    except OSError as exc:
        logger.debug("Cannot run %s: %s", QUERY_CMD[0], exc)
        return UNKNOWN_MODE
    if proc.returncode:
        logger.debug("%s returned %d", " ".join(QUERY_CMD), proc.returncode)
    return parse_current_mode(proc.stdout)


def set_power_mode(mode_id):
    """
    Switch to mode_id with `sudo nvpmodel -m`.

    :returns: a (returncode, output) tuple, stdout and stderr combined
    """
    cmd = CHANGE_CMD + [str(mode_id)]
    logger.debug("Apply command: %s", " ".join(cmd))
    try:
        proc = sp.run(cmd, stdout=sp.PIPE, stderr=sp.STDOUT,
                      universal_newlines=True)
    except OSError as exc:
        return 1, str(exc)
    return proc.returncode, proc.stdout


def change_mode(mode_id, name):
    """
    Apply a power mode and tell the operator how it went.

    The output of a failed command is printed as is.

    :returns: True if nvpmodel accepted the new mode
    """
    returncode, output = set_power_mode(mode_id)
    if returncode == 0:
        print('Successfully changed power mode to: {} ("{}")'.format(
            mode_id, name))
        return True
    logger.debug("Mode change to %s failed with %d", mode_id, returncode)
    print('Failed to change power mode to: {} ("{}")'.format(mode_id, name))
    print("Error output:")
    print(output.rstrip("\n"))
    return False
