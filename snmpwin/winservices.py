#!/usr/bin/env python3
# Copyright (C) 2026 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""Read the service table of the LanMgr-Mib-II and look for a service

The table lives below .1.3.6.1.4.1.77.1.2.3.1 (svSvcEntry):

    .1  svSvcName                display name of the service
    .2  svSvcInstalledState      not used
    .3  svSvcOperatingState      active(1), continue-pending(2),
                                 pause-pending(3), paused(4)
    .4  svSvcCanBeUninstalled    not used

Both columns share the same index, which encodes the name of the service as
length-prefixed sequence of bytes, e.g. "7.83.112.111.111.108.101.114" for
"Spooler". Stopped services are not part of the table at all.
"""

import enum
import logging
from collections.abc import Mapping
from dataclasses import dataclass

from snmpwin.checkresult import Verdict
from snmpwin.snmplib import OIDIndex, SNMPBackend, SNMPRow, walk_subtree
from snmpwin.utils.log import VERBOSE
from snmpwin.utils.statename import State

OID_SERVICE_ENTRY = ".1.3.6.1.4.1.77.1.2.3.1"
OID_SERVICE_NAME = f"{OID_SERVICE_ENTRY}.1"
OID_SERVICE_OPERATING_STATE = f"{OID_SERVICE_ENTRY}.3"


class ServiceState(enum.IntEnum):
    ACTIVE = 1
    CONTINUE_PENDING = 2
    PAUSE_PENDING = 3
    PAUSED = 4


def state_label(state: int) -> str:
    """
    >>> state_label(3)
    'pause-pending'
    >>> state_label(7)
    'unknown(7)'
    """
    try:
        return ServiceState(state).name.lower().replace("_", "-")
    except ValueError:
        return f"unknown({state})"


@dataclass
class ServiceRecord:
    name: str | None = None
    state: int | None = None

    @property
    def is_complete(self) -> bool:
        return self.name is not None and self.state is not None


ServiceTable = dict[OIDIndex, ServiceRecord]


def _parse_state(value: str) -> int | None:
    """
    >>> _parse_state("4")
    4
    >>> _parse_state("paused")
    4
    >>> _parse_state("active(1)")
    1
    >>> _parse_state("") is None
    True
    """
    try:
        return int(value)
    except ValueError:
        pass
    # Without -Oe the tools print the label of the enum, maybe with its value
    label = value.split("(", 1)[0].strip().replace("-", "_").upper()
    try:
        return int(ServiceState[label])
    except KeyError:
        return None


def _add_names(table: ServiceTable, rows: list[SNMPRow]) -> None:
    for row in rows:
        table.setdefault(row.index, ServiceRecord()).name = row.value


def _add_states(table: ServiceTable, rows: list[SNMPRow], logger: logging.Logger) -> None:
    for row in rows:
        if (state := _parse_state(row.value)) is None:
            logger.log(VERBOSE, "Ignoring invalid service state %r at %s", row.value, row.oid)
            continue
        table.setdefault(row.index, ServiceRecord()).state = state


def read_service_table(backend: SNMPBackend) -> ServiceTable:
    """Walk the names and the states of the services and join them by index

    An index only seen by one of the walks results in an incomplete record.
    """
    table: ServiceTable = {}
    _add_names(table, walk_subtree(OID_SERVICE_NAME, backend=backend))
    _add_states(table, walk_subtree(OID_SERVICE_OPERATING_STATE, backend=backend), backend.logger)

    if backend.logger.isEnabledFor(VERBOSE):
        _log_service_table(table, backend.logger)

    return table


def _log_service_table(table: Mapping[OIDIndex, ServiceRecord], logger: logging.Logger) -> None:
    logger.log(VERBOSE, "Services found: %d", sum(1 for r in table.values() if r.is_complete))
    for index, record in sorted(table.items()):
        if record.is_complete:
            assert record.state is not None
            logger.log(VERBOSE, "  %s: %s", record.name, state_label(record.state))
        else:
            logger.log(
                VERBOSE,
                "  incomplete entry %s: name=%r state=%r",
                ".".join(map(str, index)),
                record.name,
                record.state,
            )


def classify(table: Mapping[OIDIndex, ServiceRecord], service_name: str) -> Verdict:
    """Look up the service and tell if it is running

    The name has to match exactly. A missing or not active service is
    never more than a WARNING: on some hosts it may be missing on purpose.
    """
    matches = [
        record
        for _index, record in sorted(table.items())
        if record.is_complete and record.name == service_name
    ]

    if any(record.state == ServiceState.ACTIVE for record in matches):
        return Verdict(State.OK, f"{service_name} is running", [("running", 1)])

    if any(record.state is not None and record.state > ServiceState.ACTIVE for record in matches):
        return Verdict(State.WARN, f"{service_name} exists but is not running", [("running", 0)])

    return Verdict(State.WARN, f"{service_name} is not running or was not found", [("running", 0)])
