#!/usr/bin/env python3
# Copyright (C) 2026 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

from dataclasses import dataclass

from snmpwin.checkresult import Verdict
from snmpwin.reachability import check_reachability, PingProberProto
from snmpwin.snmplib import SNMPBackend
from snmpwin.sysdescr import validate_platform
from snmpwin.winservices import classify, read_service_table


@dataclass(frozen=True)
class ProbeTarget:
    host: str
    community: str
    service_name: str


def run_probe(
    target: ProbeTarget,
    *,
    backend: SNMPBackend,
    prober: PingProberProto | None,
) -> Verdict:
    """Run the stages one after another, the first verdict ends the probe

    Without a prober the reachability check is skipped.
    """
    if prober is not None and (verdict := check_reachability(target.host, prober)) is not None:
        return verdict

    if (verdict := validate_platform(backend)) is not None:
        return verdict

    return classify(read_service_table(backend), target.service_name)
