#!/usr/bin/env python3
# Copyright (C) 2026 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

from snmpwin.checkresult import Verdict
from snmpwin.snmplib import get_single_oid, SNMPBackend
from snmpwin.utils.statename import State

OID_SYS_DESCR = ".1.3.6.1.2.1.1.1.0"

# Windows agents answer e.g. "Hardware: Intel64 Family 6 Model 85 Stepping 4
# AT/AT COMPATIBLE - Software: Windows Version 6.3 (Build 17763 Multiprocessor Free)"
WINDOWS_MARKER = "Windows"


def validate_platform(backend: SNMPBackend) -> Verdict | None:
    """Make sure we talk to a Windows system, None means go on

    The service table only exists in the LanMgr MIB of Windows agents.
    Walking it on other devices would end up in a misleading "not found".
    """
    description = get_single_oid(OID_SYS_DESCR, backend=backend)

    if not description:
        return Verdict(
            State.WARN,
            f"cannot query SNMP on {backend.hostname} "
            "(wrong community string or SNMP daemon not running)",
        )

    backend.logger.debug("System description: %s", description)
    if WINDOWS_MARKER not in description:
        return Verdict(State.WARN, f"not a Windows system: {description}")

    return None
