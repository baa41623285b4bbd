#!/usr/bin/env python3
# Copyright (C) 2026 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

import logging
import os
from collections.abc import Callable, Iterator, Mapping, Sequence

import pytest

from snmpwin.reachability import ProbeOutcome
from snmpwin.snmplib import OID, SNMPBackend, SNMPHostConfig, SNMPRawLine
from snmpwin.utils.log import clear_console_logging

# This allows exceptions to be handled by IDEs (rather than just printing the results)
# when pytest based tests are being run from inside the IDE
# To enable this, set `_PYTEST_RAISE` to some value != '0' in your IDE
PYTEST_RAISE = os.getenv("_PYTEST_RAISE", "0") != "0"

WINDOWS_SYS_DESCR = (
    '.1.3.6.1.2.1.1.1.0 "Hardware: Intel64 Family 6 Model 85 Stepping 4 AT/AT COMPATIBLE'
    ' - Software: Windows Version 6.3 (Build 17763 Multiprocessor Free)"'
)


class FakeSNMPBackend(SNMPBackend):
    """Answers from canned command line output and records every request"""

    def __init__(
        self,
        get_answers: Mapping[OID, SNMPRawLine],
        walk_answers: Mapping[OID, Sequence[SNMPRawLine]],
    ) -> None:
        super().__init__(
            SNMPHostConfig(hostname="winhost", credentials="public"),
            logging.getLogger("snmpwin.test"),
        )
        self._get_answers = get_answers
        self._walk_answers = walk_answers
        self.requests: list[tuple[str, OID]] = []

    def get(self, /, oid: OID) -> SNMPRawLine | None:
        self.requests.append(("get", oid))
        return self._get_answers.get(oid)

    def walk(self, /, oid: OID) -> Sequence[SNMPRawLine]:
        self.requests.append(("walk", oid))
        return self._walk_answers.get(oid, [])


class FakeProber:
    def __init__(self, outcome: ProbeOutcome) -> None:
        self.outcome = outcome
        self.hosts: list[str] = []

    def __call__(self, host: str) -> ProbeOutcome:
        self.hosts.append(host)
        return self.outcome


def service_walks(services: Mapping[str, int]) -> dict[OID, list[SNMPRawLine]]:
    """Build the output of both walks of the service table"""
    names = []
    states = []
    for name, state in services.items():
        index = ".".join(map(str, [len(name.encode()), *name.encode()]))
        names.append(f'.1.3.6.1.4.1.77.1.2.3.1.1.{index} "{name}"')
        states.append(f".1.3.6.1.4.1.77.1.2.3.1.3.{index} {state}")
    return {
        ".1.3.6.1.4.1.77.1.2.3.1.1": names,
        ".1.3.6.1.4.1.77.1.2.3.1.3": states,
    }


@pytest.fixture(name="make_backend")
def fixture_make_backend() -> Callable[..., FakeSNMPBackend]:
    def _make_backend(
        sys_descr: SNMPRawLine | None = WINDOWS_SYS_DESCR,
        services: Mapping[str, int] | None = None,
        walk_answers: Mapping[OID, Sequence[SNMPRawLine]] | None = None,
    ) -> FakeSNMPBackend:
        return FakeSNMPBackend(
            {} if sys_descr is None else {".1.3.6.1.2.1.1.1.0": sys_descr},
            service_walks(services or {}) if walk_answers is None else walk_answers,
        )

    return _make_backend


@pytest.fixture(name="make_prober")
def fixture_make_prober() -> Callable[[ProbeOutcome], FakeProber]:
    return FakeProber


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    yield
    clear_console_logging()


@pytest.hookimpl(tryfirst=True)
def pytest_exception_interact(
    node: pytest.Item | pytest.Collector,
    call: pytest.CallInfo,
    report: pytest.CollectReport | pytest.TestReport,
) -> None:
    if not (excinfo := call.excinfo):
        return

    excp_ = excinfo.value
    report.longrepr = node.repr_failure(excinfo)
    if PYTEST_RAISE:
        raise excp_
