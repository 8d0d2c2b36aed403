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
This module contains the menus used to pick a power mode.

Two flavours are available:
- DialogMenu draws a menu with the `dialog` program
- TextMenu prints the modes and reads a single keystroke, for systems where
  `dialog` is not installed

Both loop until the operator presses ESC.
"""
import codecs
import logging
import os
import subprocess as sp
import sys
import termios
import tty
from abc import ABC, abstractmethod
from contextlib import contextmanager
from shutil import which

from jetson_power.nvpmodel import change_mode, get_current_mode


logger = logging.getLogger(__name__)

DIALOG = "dialog"
TITLE = "Jetson Power Mode Selector"
ESC = "\x1b"
TTY_DEVICE = "/dev/tty"


def current_mode(modes):
    """Return the (id, name) of the active mode, name empty if unknown."""
    mode_id = get_current_mode()
    return mode_id, modes.get(mode_id, "")


def format_current_mode(mode_id, name):
    return 'Current mode: {} ("{}")'.format(mode_id, name)


def format_mode_line(mode_id, name):
    return "  {}) {}".format(mode_id, name)


def clear_screen():
    sys.stdout.write("\033[H\033[2J")
    sys.stdout.flush()


def wait_for_enter(prompt="\nPress <Enter> to continue..."):
    try:
        input(prompt)
    except EOFError:
        print()


def read_key(stream=None):
    """
    Read exactly one character, without echo and without waiting for Enter.

    On a terminal the file descriptor is read directly, like input() does,
    so that nothing typed ahead is left in the buffer of the stream.
    An empty string is returned once the input is exhausted.
    """
    stream = stream or sys.stdin
    if not stream.isatty():
        return stream.read(1)
    fd = stream.fileno()
    old_settings = termios.tcgetattr(fd)
    try:
        # cbreak keeps ISIG so that Ctrl-C still interrupts
        tty.setcbreak(fd)
        decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        key = ""
        while not key:
            data = os.read(fd, 1)
            if not data:
                return decoder.decode(b"", final=True)
            key = decoder.decode(data)
        return key
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)


@contextmanager
def terminal_output():
    """
    Open the controlling terminal for writing.

    Yields None when there is no terminal, the caller then keeps its stdout.
    """
    try:
        terminal = open(TTY_DEVICE, "w")
    except OSError as exc:
        logger.debug("Cannot open %s: %s", TTY_DEVICE, exc)
        yield None
        return
    with terminal:
        yield terminal


class PowerModeMenu(ABC):
    """
    Read-act-redisplay loop over the available power modes.

    :param modes: dict with {'mode id': 'mode name'} entries
    """

    def __init__(self, modes):
        self.modes = modes

    def current_mode(self):
        """Return the (id, name) of the active mode."""
        return current_mode(self.modes)

    def prepare(self):
        """Called once before the first menu is shown."""

    @abstractmethod
    def iterate(self):
        """
        Show the menu once and act on the operator's answer.

        :returns: False when the operator asked to leave
        """

    def run(self):
        self.prepare()
        while self.iterate():
            pass
        return 0


class DialogMenu(PowerModeMenu):

    def build_command(self, current_id, current_name):
        text = ("Use ↑↓ to choose a mode. Press ESC to exit.\\n\\n"
                + format_current_mode(current_id, current_name))
        cmd = [
            DIALOG, "--clear",
            "--title", TITLE,
            "--cancel-label", "ESC",
            "--default-item", current_id,
            "--menu", text, "20", "50", "12",
        ]
        for mode_id, name in self.modes.items():
            cmd += [mode_id, name]
        return cmd

    def iterate(self):
        cmd = self.build_command(*self.current_mode())
        # dialog draws on the terminal and reports the chosen tag on stderr
        with terminal_output() as terminal:
            proc = sp.run(cmd, stdout=terminal, stderr=sp.PIPE,
                          universal_newlines=True)
        clear_screen()
        if proc.returncode != 0:
            logger.debug("dialog returned %d", proc.returncode)
            print("Exiting. Goodbye!")
            return False
        choice = proc.stderr.strip()
        if choice in self.modes:
            change_mode(choice, self.modes[choice])
            wait_for_enter()
        else:
            logger.debug("Ignoring unknown choice %r", choice)
        return True


class TextMenu(PowerModeMenu):
    """
    Single keystroke menu.

    Only one character is read per selection, so modes with a multi
    character id are listed but cannot be chosen.
    """

    def prepare(self):
        print("Warning: '{}' not found. Using text-based menu.".format(DIALOG))
        wait_for_enter("Press <Enter> to continue...")

    def show(self, current_id, current_name):
        clear_screen()
        print("=" * 46)
        print(" {} (Text-Only)".format(TITLE))
        print("-" * 46)
        print(' Current Mode: {} ("{}")'.format(current_id, current_name))
        print("-" * 46)
        print("Press ESC to exit or type a single digit for these modes:")
        for mode_id, name in self.modes.items():
            print(format_mode_line(mode_id, name))
        print("-" * 46)
        print("Your selection: ", end="", flush=True)

    def iterate(self):
        self.show(*self.current_mode())
        key = read_key()
        if key in (ESC, ""):
            print()
            print("Exiting. Goodbye!")
            return False
        print(key)
        if key in self.modes:
            change_mode(key, self.modes[key])
        else:
            print('Invalid choice: "{}"'.format(key))
        wait_for_enter()
        return True


def get_menu(modes, text_only=False):
    """Pick the dialog menu when available, the text menu otherwise."""
    if not text_only and which(DIALOG):
        return DialogMenu(modes)
    return TextMenu(modes)
