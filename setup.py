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

import os
import sys

from setuptools import setup, find_packages

if "test" in sys.argv:
    # Reset locale for setup.py test
    os.environ["LANG"] = ""
    os.environ["LANGUAGE"] = ""
    os.environ["LC_ALL"] = "C.UTF-8"

base_dir = os.path.dirname(__file__)

# Load the README.rst file relative to the setup file
with open(os.path.join(base_dir, "README.rst"), encoding="UTF-8") as stream:
    long_description = stream.read()

setup(
    name="jetson-power-menu",
    version="0.1.0",
    url="https://launchpad.net/checkbox/",
    packages=find_packages(include=["jetson_power", "jetson_power.*"]),
    test_suite='jetson_power.tests.test_suite',
    license="GPLv3",
    description="Interactive power mode selector for NVIDIA Jetson boards",
    long_description=long_description,
    python_requires=">=3.7",
    install_requires=[
        'pyparsing >= 3.0.0',
    ],
    entry_points={
        'console_scripts': [
            "jetson-power-menu=jetson_power.scripts.power_mode_menu:main",
        ],
    },
)
