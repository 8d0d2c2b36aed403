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


class PowerModeConfigError(Exception):
    """The nvpmodel configuration cannot be used."""


class ConfigFileNotFoundError(PowerModeConfigError):

    def __init__(self, path):
        self.path = path
        super().__init__("Error: {} not found!".format(path))


class ConfigFileUnreadableError(PowerModeConfigError):

    def __init__(self, path, reason):
        self.path = path
        self.reason = reason
        super().__init__("Error: cannot read {}: {}".format(
            path, getattr(reason, "strerror", None) or reason))


class NoPowerModesError(PowerModeConfigError):

    def __init__(self, path):
        self.path = path
        super().__init__(
            "No <POWER_MODEL> entries found in {}.".format(path))
