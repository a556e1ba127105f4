# -*- coding: utf-8 -*-
"""Helper code for logging in the command line apps"""

import logging
import sys

import logzero
from termcolor import colored


#: Message level: ERROR
LVL_ERROR = "ERROR"

#: Message level: WARNING
LVL_WARNING = "WARNING"

#: Message level: INFO
LVL_INFO = "INFO"

#: Message level: IMPORTANT
LVL_IMPORTANT = "IMPORTANT"

#: Message level: SUCCESS
LVL_SUCCESS = "SUCCESS"

#: Prefix colors for the levels
PREFIX_COLORS = {
    LVL_ERROR: "red",
    LVL_WARNING: "magenta",
    LVL_INFO: "yellow",
    LVL_SUCCESS: "green",
}


def log(msg, args=None, level=None, file=None):
    """Print log message for given levels of importance

    For LVL_ERROR, LVL_WARNING, LVL_INFO, LVL_SUCCESS, the message will be prefixed with a
    colored keyword identifying the level.  For IMPORTANT, the message itself will be colored.
    """
    args = args or {}
    file = file or sys.stderr
    if level == LVL_IMPORTANT:
        print(colored(msg.format(**args), "yellow"), file=file)
    else:
        if level in PREFIX_COLORS:
            prefix = colored("{}: ".format(level), PREFIX_COLORS[level], attrs=["bold"])
        else:
            prefix = ""
        print(prefix, msg.format(**args), sep="", file=file)


def banner(title, file=None):
    """Print ``title`` underlined"""
    log(title, file=file)
    log("=" * len(title), file=file)


def set_verbosity(verbose):
    """Switch the library logger to DEBUG or INFO"""
    if verbose:
        logzero.loglevel(logging.DEBUG)
    else:
        logzero.loglevel(logging.INFO)
