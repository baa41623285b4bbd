#!/usr/bin/env python3
# Copyright (C) 2026 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

from ._parse import normalize_oid, parse_rows
from ._typedefs import OID, SNMPBackend


def get_single_oid(oid: OID, *, backend: SNMPBackend) -> str | None:
    """Fetch and decode the value of a single OID

    None means that the agent did not send a usable answer for the OID.
    """
    oid = normalize_oid(oid)
    backend.logger.debug("       Getting OID %s...", oid)

    if (raw := backend.get(oid)) is None:
        backend.logger.debug("       Getting OID %s failed.", oid)
        return None

    for row in parse_rows(raw.splitlines(), oid, backend.logger):
        if row.index == ():
            backend.logger.debug("       Got OID %s: %r", oid, row.value)
            return row.value

    backend.logger.debug("       No value for OID %s in answer %r", oid, raw)
    return None
