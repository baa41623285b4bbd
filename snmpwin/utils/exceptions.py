#!/usr/bin/env python3
# Copyright (C) 2026 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""User-defined exceptions of the probe."""

__all__ = [
    "MKBailOut",
    "MKException",
    "MKGeneralException",
    "MKSNMPError",
    "MKTimeout",
]


# never used directly in the code. Just some wrapper to make all of our
# exceptions handleable with one call
class MKException(Exception):
    pass


class MKGeneralException(MKException):
    pass


class MKSNMPError(MKException):
    """The SNMP command line tools could not be used"""


# This is raised to print an error message and then end the program.
# The probe catches this at top level and ends with exit code 3, in order
# to be compatible with the monitoring plug-in API.
class MKBailOut(MKException):
    pass


class MKTimeout(MKException):
    """Raise when an SNMP tool did not finish within its timeout.

    The SNMP backend treats it like an empty answer.
    """
