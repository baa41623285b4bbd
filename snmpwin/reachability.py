#!/usr/bin/env python3
# Copyright (C) 2026 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""Check if the host answers to ping before asking its SNMP agent

This is not a strict gate: a single reply is enough to go on. It only
exists to tell an unreachable host apart from a misconfigured SNMP agent.

Example outputs of ping (iputils):

    PING 10.1.1.1 (10.1.1.1) 56(84) bytes of data.

    --- 10.1.1.1 ping statistics ---
    3 packets transmitted, 0 received, 100% packet loss, time 2049ms

    ping: nosuchhost: Name or service not known

    From 10.1.1.254 icmp_seq=1 Destination Host Unreachable
    ...
    3 packets transmitted, 0 received, +3 errors, 100% packet loss, time 2038ms

    connect: No route to host

Other implementations say "ping: unknown host nosuchhost" or
"ping: cannot resolve nosuchhost: Unknown host".
"""

import enum
import logging
import os
import re
import shutil
import subprocess
from typing import assert_never, Protocol

from snmpwin.checkresult import Verdict
from snmpwin.utils.exceptions import MKGeneralException
from snmpwin.utils.log import VERBOSE
from snmpwin.utils.statename import State

_UNRESOLVED_PATTERN = re.compile(
    r"unknown host"
    r"|cannot resolve"
    r"|Name or service not known"
    r"|Temporary failure in name resolution"
    r"|No address associated with hostname"
    r"|nodename nor servname provided",
    re.IGNORECASE,
)
_NO_ROUTE_PATTERN = re.compile(
    r"No route to host"
    r"|Network is unreachable"
    r"|Destination (Host|Net) Unreachable"
    # ICMP errors instead of replies, e.g. from a router without a route
    r"|\+\d+ errors, 100(\.0+)?% packet loss",
    re.IGNORECASE,
)
_NO_REPLY_PATTERN = re.compile(r"(?<![\d.])100(\.0+)?% packet loss")


class ProbeOutcome(enum.Enum):
    REACHABLE = "reachable"
    NO_ROUTE = "no-route"
    UNRESOLVED = "unresolved"
    NO_REPLY = "no-reply"


class PingProberProto(Protocol):
    def __call__(self, host: str) -> ProbeOutcome: ...


def classify_ping_output(output: str) -> ProbeOutcome:
    """
    >>> classify_ping_output("ping: nosuchhost: Name or service not known")
    <ProbeOutcome.UNRESOLVED: 'unresolved'>
    >>> classify_ping_output("3 packets transmitted, 0 received, 100% packet loss, time 2049ms")
    <ProbeOutcome.NO_REPLY: 'no-reply'>
    >>> classify_ping_output("3 packets transmitted, 1 received, 66.6667% packet loss, time 2003ms")
    <ProbeOutcome.REACHABLE: 'reachable'>
    >>> classify_ping_output("connect: No route to host")
    <ProbeOutcome.NO_ROUTE: 'no-route'>
    """
    if _UNRESOLVED_PATTERN.search(output):
        return ProbeOutcome.UNRESOLVED
    if _NO_ROUTE_PATTERN.search(output):
        return ProbeOutcome.NO_ROUTE
    if _NO_REPLY_PATTERN.search(output):
        return ProbeOutcome.NO_REPLY
    return ProbeOutcome.REACHABLE


class PingProber:
    def __init__(
        self,
        ping: str,
        *,
        count: int,
        timeout: int,
        logger: logging.Logger,
    ) -> None:
        self._ping = ping
        self._count = count
        self._timeout = timeout
        self._logger = logger

    @classmethod
    def from_path(cls, *, count: int, timeout: int, logger: logging.Logger) -> "PingProber":
        if (ping := shutil.which("ping")) is None:
            raise MKGeneralException("could not find ping")
        return cls(ping, count=count, timeout=timeout, logger=logger)

    def __call__(self, host: str) -> ProbeOutcome:
        if (output := self._execute_ping(host)) is None:
            return ProbeOutcome.NO_REPLY
        return classify_ping_output(output)

    def _execute_ping(self, host: str) -> str | None:
        # -w is the deadline for the whole run, not the wait for each reply
        cmd = [self._ping, "-n", "-c", str(self._count), "-w", str(self._timeout), host]
        self._logger.log(VERBOSE, "Running '%s'", " ".join(cmd))
        try:
            completed_process = subprocess.run(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                encoding="utf8",
                errors="replace",
                check=False,
                # ping should stop on its own after the deadline
                timeout=self._timeout + 5,
                env={k: v for k, v in os.environ.items() if k != "LANG"},
            )
        except subprocess.TimeoutExpired:
            self._logger.debug("ping did not finish within %ds", self._timeout + 5)
            return None
        except OSError as e:
            raise MKGeneralException(f"could not execute {self._ping}: {e}") from e

        self._logger.debug(
            "ping exited with %d: %r", completed_process.returncode, completed_process.stdout
        )
        return completed_process.stdout


def check_reachability(host: str, prober: PingProberProto) -> Verdict | None:
    """Return a verdict if the host is unreachable, None to go on"""
    outcome = prober(host)
    match outcome:
        case ProbeOutcome.REACHABLE:
            return None
        case ProbeOutcome.NO_REPLY:
            return Verdict(State.UNKNOWN, f"no ping reply from {host}")
        case ProbeOutcome.UNRESOLVED:
            return Verdict(State.UNKNOWN, f"could not resolve hostname {host}")
        case ProbeOutcome.NO_ROUTE:
            return Verdict(State.UNKNOWN, f"could not find a route to {host}")
        case _:
            assert_never(outcome)
