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

import re


UNKNOWN_MODE = "???"

CURRENT_MODE_RE = re.compile(r'current mode', re.IGNORECASE)


def parse_current_mode(output):
    """
    Get the active mode id from the output of `nvpmodel -q --verbose`.

    The id is printed alone on the line right after the marker::

        NVPM VERB: Current mode: NV Power Mode: MAXN
        0

    :returns: the mode id, or UNKNOWN_MODE if it cannot be found.
    """
    lines = (output or "").splitlines()
    markers = [i for i, line in enumerate(lines)
               if CURRENT_MODE_RE.search(line)]
    if not markers or markers[-1] + 1 >= len(lines):
        return UNKNOWN_MODE
    return lines[markers[-1] + 1].strip() or UNKNOWN_MODE
