#!/usr/bin/env python3
# Copyright (C) 2026 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

import enum


class State(enum.IntEnum):
    """Monitoring state of a check result. The value is the exit code."""

    OK = 0
    WARN = 1
    CRIT = 2
    UNKNOWN = 3


def core_state_names() -> dict[int, str]:
    return {
        0: "OK",
        1: "WARNING",
        2: "CRITICAL",
        3: "UNKNOWN",
    }


def service_state_name(state_num: int, deflt: str = "") -> str:
    return core_state_names().get(state_num, deflt)
