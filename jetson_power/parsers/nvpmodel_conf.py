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
:mod:`jetson_power.parsers.nvpmodel_conf` -- ``nvpmodel.conf`` parser
=====================================================================

Parser for the power mode declarations of ``/etc/nvpmodel.conf``.

The file is made of one tag per line. Only the ``POWER_MODEL`` tags are of
interest here::

    < POWER_MODEL ID=0 NAME=MAXN >
    < POWER_MODEL ID=1 NAME="15W" >

Everything else (``PM_CONFIG``, ``PARAM``, the per-mode settings, comments)
is skipped.
"""

import io
import logging

import pyparsing as p


logger = logging.getLogger(__name__)


def _clean_name(tokens):
    # The match ends on the closing '>' of the tag
    return tokens[0][:-1].replace('"', '').strip()


POWER_MODEL = (
    p.Suppress('<')
    + p.Keyword('POWER_MODEL').suppress()
    + p.Keyword('ID').suppress()
    + p.Suppress('=')
    + p.Word(p.nums)('mode-id')
    + p.Keyword('NAME').suppress()
    + p.Suppress('=')
    + p.Regex(r'.*>').set_parse_action(_clean_name)('mode-name')
)


class PowerModelResult():

    """
    A simple class to hold results for the NvpmodelConfParser.

    The names are stored in a dict keyed by mode identifier, in the order
    the records were found.
    """

    def __init__(self):
        self.modes = {}

    def addPowerModel(self, mode_id, name):
        self.modes[mode_id] = name


class NvpmodelConfParser(object):

    """Parser for the POWER_MODEL records of nvpmodel.conf."""

    def __init__(self, stream):
        self.stream = stream

    def run(self, result):
        for line in self.stream.readlines():
            try:
                tokens = POWER_MODEL.parse_string(line)
            except p.ParseException:
                continue
            logger.debug("Found power mode %s: %s",
                         tokens['mode-id'], tokens['mode-name'])
            result.addPowerModel(tokens['mode-id'], tokens['mode-name'])


def parse_nvpmodel_conf(text):
    """
    Parse the content of nvpmodel.conf.

    :returns: a dict with {'mode id': 'mode name'} entries.
    """
    stream = io.StringIO(text)
    parser = NvpmodelConfParser(stream)
    result = PowerModelResult()
    parser.run(result)
    return result.modes
