#!/usr/bin/env python3
# Copyright (C) 2026 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

import io

import pytest

from snmpwin.checkresult import format_check_result, output_check_result, Verdict
from snmpwin.utils.statename import service_state_name, State


@pytest.mark.parametrize(
    "verdict, expected",
    [
        pytest.param(
            Verdict(State.OK, "Print Spooler is running", [("running", 1)]),
            "WINSERVICE OK - Print Spooler is running | running=1;;;;",
            id="with metric",
        ),
        pytest.param(
            Verdict(State.WARN, "not a Windows system: Linux"),
            "WINSERVICE WARNING - not a Windows system: Linux",
            id="without metric",
        ),
        pytest.param(
            Verdict(State.UNKNOWN, "could not resolve hostname nosuchhost"),
            "WINSERVICE UNKNOWN - could not resolve hostname nosuchhost",
            id="unknown",
        ),
        pytest.param(
            Verdict(State.WARN, "not a Windows system: Cisco IOS\nSoftware, Version 15"),
            "WINSERVICE WARNING - not a Windows system: Cisco IOS Software, Version 15",
            id="multi-line description",
        ),
    ],
)
def test_format_check_result(verdict: Verdict, expected: str) -> None:
    assert format_check_result("WINSERVICE", verdict) == expected


def test_output_check_result_writes_one_line() -> None:
    stream = io.StringIO()
    output_check_result("WINSERVICE", Verdict(State.OK, "A is running", [("running", 1)]), stream)
    assert stream.getvalue() == "WINSERVICE OK - A is running | running=1;;;;\n"


def test_output_check_result_defaults_to_stdout(capsys: pytest.CaptureFixture[str]) -> None:
    output_check_result("WINSERVICE", Verdict(State.UNKNOWN, "no ping reply from a"))
    assert capsys.readouterr() == ("WINSERVICE UNKNOWN - no ping reply from a\n", "")


@pytest.mark.parametrize(
    "state, name",
    [
        (State.OK, "OK"),
        (State.WARN, "WARNING"),
        (State.CRIT, "CRITICAL"),
        (State.UNKNOWN, "UNKNOWN"),
    ],
)
def test_service_state_name(state: State, name: str) -> None:
    assert service_state_name(state) == name


def test_service_state_name_default() -> None:
    assert service_state_name(17, "?") == "?"
