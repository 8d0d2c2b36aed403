#!/usr/bin/env python3
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
Show the Jetson power modes declared in nvpmodel.conf and switch between them
"""
import argparse
import logging
import os
import sys

from jetson_power.errors import PowerModeConfigError
from jetson_power.menu import (
    current_mode,
    format_current_mode,
    format_mode_line,
    get_menu,
)
from jetson_power.nvpmodel import (
    NVPMODEL_CONF,
    change_mode,
    load_power_modes,
)


def list_modes(modes):
    print(format_current_mode(*current_mode(modes)))
    for mode_id, name in modes.items():
        print(format_mode_line(mode_id, name))


def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.strip())
    parser.add_argument("-c", "--conf",
                        default=os.environ.get("NVPMODEL_CONF",
                                               NVPMODEL_CONF),
                        help="nvpmodel configuration file "
                             "[Default: %(default)s]")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--text",
                       action="store_true",
                       help="Use the text menu even if dialog is installed")
    group.add_argument("--list",
                       action="store_true",
                       help="List the power modes and exit")
    group.add_argument("-m", "--mode",
                       help="Switch to the given mode id and exit")
    parser.add_argument("--verbose",
                        action="store_true",
                        help="Turn on verbosity")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(format="%(levelname)s:%(message)s",
                            level=logging.DEBUG, stream=sys.stderr)

    try:
        modes = load_power_modes(args.conf)
    except PowerModeConfigError as exc:
        print(exc)
        return 1

    if args.list:
        list_modes(modes)
        return 0
    if args.mode is not None:
        if args.mode not in modes:
            parser.error("unknown power mode: {}".format(args.mode))
        return 0 if change_mode(args.mode, modes[args.mode]) else 1

    menu = get_menu(modes, text_only=args.text)
    try:
        return menu.run()
    except KeyboardInterrupt:
        print()
        return 130


if __name__ == "__main__":
    sys.exit(main())
