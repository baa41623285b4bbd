#!/usr/bin/env python3
# Copyright (C) 2026 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""Package with our SNMP stuff."""

from ._classic import ClassicSNMPBackend as ClassicSNMPBackend
from ._classic import find_snmp_tool as find_snmp_tool
from ._getoid import get_single_oid as get_single_oid
from ._parse import parse_row as parse_row
from ._parse import parse_rows as parse_rows
from ._parse import strip_snmp_value as strip_snmp_value
from ._typedefs import OID as OID
from ._typedefs import OIDIndex as OIDIndex
from ._typedefs import SNMPBackend as SNMPBackend
from ._typedefs import SNMPCommunity as SNMPCommunity
from ._typedefs import SNMPHostConfig as SNMPHostConfig
from ._typedefs import SNMPRawLine as SNMPRawLine
from ._typedefs import SNMPRow as SNMPRow
from ._walk import walk_subtree as walk_subtree
