#!/usr/bin/env python3
# Copyright (C) 2026 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

import sys
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TextIO

from snmpwin.utils.statename import service_state_name, State


@dataclass(frozen=True)
class Verdict:
    state: State
    summary: str
    perfdata: Sequence[tuple[str, int]] = ()


def format_perfdata(perfdata: Sequence[tuple[str, int]]) -> str:
    """Render the metrics with empty warn/crit/min/max fields

    >>> format_perfdata([("running", 1)])
    'running=1;;;;'
    """
    return " ".join(f"{name}={value};;;;" for name, value in perfdata)


def format_check_result(check_name: str, verdict: Verdict) -> str:
    """
    >>> format_check_result("WINSERVICE", Verdict(State.OK, "Spooler is running", [("running", 1)]))
    'WINSERVICE OK - Spooler is running | running=1;;;;'
    >>> format_check_result("WINSERVICE", Verdict(State.UNKNOWN, "no ping reply from\\nfoo"))
    'WINSERVICE UNKNOWN - no ping reply from foo'
    """
    # The monitoring core only takes the first line
    summary = " ".join(verdict.summary.splitlines())
    s = f"{check_name} {service_state_name(verdict.state)} - {summary}"
    if verdict.perfdata:
        s += " | %s" % format_perfdata(verdict.perfdata)
    return s


def output_check_result(check_name: str, verdict: Verdict, stream: TextIO | None = None) -> None:
    (sys.stdout if stream is None else stream).write(
        "%s\n" % format_check_result(check_name, verdict)
    )
