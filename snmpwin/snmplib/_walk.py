#!/usr/bin/env python3
# Copyright (C) 2026 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

from snmpwin.utils.log import VERBOSE

from ._parse import normalize_oid, parse_rows
from ._typedefs import OID, SNMPBackend, SNMPRow


def walk_subtree(oid: OID, *, backend: SNMPBackend) -> list[SNMPRow]:
    """Walk the subtree below the OID and return the parsed rows

    Rows keep the order of the agent. Lines that cannot be parsed are
    skipped, an OID reported twice is only taken once.
    """
    oid = normalize_oid(oid)
    backend.logger.debug("       Walking OID %s...", oid)

    lines = backend.walk(oid)
    rows: list[SNMPRow] = []
    added_oids: set[OID] = set()
    for row in parse_rows(lines, oid, backend.logger):
        # I've seen broken devices returning the same OID several times.
        # Only the first answer counts.
        if row.oid in added_oids:
            backend.logger.log(VERBOSE, "Duplicate OID found: %s (%r)", row.oid, row.value)
            continue
        rows.append(row)
        added_oids.add(row.oid)

    backend.logger.debug("       Got %d of %d lines below OID %s", len(rows), len(lines), oid)
    return rows
