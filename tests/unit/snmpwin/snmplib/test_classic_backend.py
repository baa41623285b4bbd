#!/usr/bin/env python3
# Copyright (C) 2026 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

# pylint: disable=protected-access
import logging
import subprocess
from collections.abc import Sequence
from typing import Any

import pytest

from snmpwin.snmplib import _classic
from snmpwin.snmplib import ClassicSNMPBackend, find_snmp_tool, SNMPHostConfig
from snmpwin.utils.exceptions import MKSNMPError
from snmpwin.utils.log import VERBOSE


class _FakeRun:
    def __init__(self, returncode: int = 0, stdout: str = "", stderr: str = "") -> None:
        self.result = (returncode, stdout, stderr)
        self.calls: list[tuple[Sequence[str], dict[str, Any]]] = []

    def __call__(self, cmd: Sequence[str], **kwargs: Any) -> subprocess.CompletedProcess[str]:
        self.calls.append((cmd, kwargs))
        returncode, stdout, stderr = self.result
        return subprocess.CompletedProcess(cmd, returncode, stdout, stderr)


def _backend(port: int = 161) -> ClassicSNMPBackend:
    return ClassicSNMPBackend(
        SNMPHostConfig(hostname="10.1.1.1", credentials="s3cret", port=port, timeout=7.5),
        logging.getLogger("snmpwin.test"),
        snmpget="/usr/bin/snmpget",
        snmpwalk="/usr/bin/snmpwalk",
    )


def test_get_command_line(monkeypatch: pytest.MonkeyPatch) -> None:
    fake_run = _FakeRun(stdout='.1.3.6.1.2.1.1.1.0 "Windows"\n')
    monkeypatch.setattr(_classic.subprocess, "run", fake_run)

    assert _backend().get(".1.3.6.1.2.1.1.1.0") == '.1.3.6.1.2.1.1.1.0 "Windows"'

    ((cmd, kwargs),) = fake_run.calls
    assert cmd == [
        "/usr/bin/snmpget",
        "-v1",
        "-c",
        "s3cret",
        "-On",
        "-Oq",
        "-Oe",
        "-Ot",
        "-OU",
        "10.1.1.1",
        ".1.3.6.1.2.1.1.1.0",
    ]
    assert kwargs["timeout"] == 7.5
    assert "LANG" not in kwargs["env"]


def test_walk_uses_port(monkeypatch: pytest.MonkeyPatch) -> None:
    fake_run = _FakeRun(
        stdout=".1.3.6.1.4.1.77.1.2.3.1.3.1.65 1\n.1.3.6.1.4.1.77.1.2.3.1.3.1.66 4\n"
    )
    monkeypatch.setattr(_classic.subprocess, "run", fake_run)

    assert _backend(port=1161).walk(".1.3.6.1.4.1.77.1.2.3.1.3") == [
        ".1.3.6.1.4.1.77.1.2.3.1.3.1.65 1",
        ".1.3.6.1.4.1.77.1.2.3.1.3.1.66 4",
    ]
    ((cmd, _kwargs),) = fake_run.calls
    assert cmd[0] == "/usr/bin/snmpwalk"
    assert cmd[-2:] == ["10.1.1.1:1161", ".1.3.6.1.4.1.77.1.2.3.1.3"]


def test_get_no_answer(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        _classic.subprocess, "run", _FakeRun(1, stderr="Timeout: No Response from 10.1.1.1.")
    )
    assert _backend().get(".1.3.6.1.2.1.1.1.0") is None


def test_get_empty_answer(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(_classic.subprocess, "run", _FakeRun(0, stdout="\n"))
    assert _backend().get(".1.3.6.1.2.1.1.1.0") is None


def test_walk_keeps_output_of_failed_walk(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        _classic.subprocess,
        "run",
        _FakeRun(1, stdout='.1.3.6.1.4.1.77.1.2.3.1.1.1.65 "A"\n', stderr="Timeout"),
    )
    assert _backend().walk(".1.3.6.1.4.1.77.1.2.3.1.1") == ['.1.3.6.1.4.1.77.1.2.3.1.1.1.65 "A"']


def test_timeout_is_no_answer(monkeypatch: pytest.MonkeyPatch) -> None:
    def _timeout(cmd: Sequence[str], **kwargs: Any) -> subprocess.CompletedProcess[str]:
        raise subprocess.TimeoutExpired(cmd, kwargs["timeout"])

    monkeypatch.setattr(_classic.subprocess, "run", _timeout)
    backend = _backend()
    assert backend.get(".1.3.6.1.2.1.1.1.0") is None
    assert backend.walk(".1.3.6.1.4.1.77.1.2.3.1.1") == []


def test_unusable_tool(monkeypatch: pytest.MonkeyPatch) -> None:
    def _permission_denied(cmd: Sequence[str], **kwargs: Any) -> subprocess.CompletedProcess[str]:
        raise PermissionError(13, "Permission denied")

    monkeypatch.setattr(_classic.subprocess, "run", _permission_denied)
    with pytest.raises(MKSNMPError, match="could not execute /usr/bin/snmpget"):
        _backend().get(".1.3.6.1.2.1.1.1.0")


def test_community_is_not_logged(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    monkeypatch.setattr(_classic.subprocess, "run", _FakeRun(stdout=""))
    with caplog.at_level(VERBOSE, logger="snmpwin"):
        _backend().walk(".1.3.6.1.4.1.77.1.2.3.1.1")
    assert "Running '/usr/bin/snmpwalk -v1 -c -On" in caplog.text
    assert "s3cret" not in caplog.text


def test_find_snmp_tool_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(_classic.shutil, "which", lambda name: None)
    with pytest.raises(MKSNMPError, match="could not find snmpwalk"):
        find_snmp_tool("snmpwalk")


def test_from_path(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(_classic.shutil, "which", lambda name: f"/opt/bin/{name}")
    backend = ClassicSNMPBackend.from_path(
        SNMPHostConfig(hostname="winhost", credentials="public"), logging.getLogger("test")
    )
    assert backend._snmpget == "/opt/bin/snmpget"
    assert backend._snmpwalk == "/opt/bin/snmpwalk"
