#!/usr/bin/env python3
# Copyright (C) 2026 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""Parse the output of snmpget and snmpwalk

The tools are called with "-On -Oq", which makes them print one line per OID:

    .1.3.6.1.2.1.1.1.0 "Hardware: Intel64 - Software: Windows Version 6.3"
    .1.3.6.1.4.1.77.1.2.3.1.3.7.83.112.111.111.108.101.114 1

Every line is matched against the grammar

    line  := oid [ whitespace value ]
    oid   := prefix [ "." index ]
    index := number { "." number }

where the prefix is the OID that was queried. Lines that do not follow this
grammar or belong to another OID (diagnostics of the tools, empty lines) are
skipped.
"""

import logging
import re
from collections.abc import Iterable, Iterator

from snmpwin.utils.log import VERBOSE

from ._typedefs import OID, OIDIndex, SNMPRawLine, SNMPRow

_LINE_PATTERN = re.compile(r"^\s*(?P<oid>\.?\d+(?:\.\d+)*)(?:\s+(?P<value>.*?))?\s*$")

# Error messages the agent sends instead of a value
_NO_VALUE_MARKERS = (
    "No more variables",
    "End of MIB",
    "No Such Object available",
    "No Such Instance currently exists",
)


def normalize_oid(oid: OID) -> OID:
    """
    >>> normalize_oid("1.3.6.1.2.1.1.1.0")
    '.1.3.6.1.2.1.1.1.0'
    >>> normalize_oid(".1.3.6.1.4.1.77.")
    '.1.3.6.1.4.1.77'
    """
    return "." + oid.strip(".")


def oid_to_index(end_oid: str) -> OIDIndex:
    """
    >>> oid_to_index("3.65.66.67")
    (3, 65, 66, 67)
    >>> oid_to_index("")
    ()
    """
    if not end_oid:
        return ()
    return tuple(int(part) for part in end_oid.split("."))


def extract_end_oid(prefix: OID, complete: OID) -> str | None:
    """Return the part of the OID after the prefix or None for foreign OIDs

    >>> extract_end_oid(".1.3.6.1.4.1.77.1.2.3.1.1", ".1.3.6.1.4.1.77.1.2.3.1.1.2.65.66")
    '2.65.66'
    >>> extract_end_oid(".1.3.6.1.2.1.1.1.0", ".1.3.6.1.2.1.1.1.0")
    ''
    >>> extract_end_oid(".1.3.6.1.4.1.77.1.2.3.1.1", ".1.3.6.1.4.1.77.1.2.3.1.10.1") is None
    True
    """
    prefix = normalize_oid(prefix)
    complete = normalize_oid(complete)
    if complete == prefix:
        return ""
    if complete.startswith(prefix + "."):
        return complete[len(prefix) + 1 :]
    return None


def is_hex_string(value: str) -> bool:
    # snmpwalk puts a trailing space within the quotes in case of hex strings.
    # So we require that space to be present in order make sure, we really
    # deal with a hex string.
    if not value or value[-1] != " ":
        return False
    hexdigits = "0123456789abcdefABCDEF"
    for n, x in enumerate(value):
        if n % 3 == 2:
            if x != " ":
                return False
        elif x not in hexdigits:
            return False
    return True


def convert_from_hex(value: str) -> str:
    """
    >>> convert_from_hex("53 70 6F 6F 6C 65 72 ")
    'Spooler'
    """
    raw = bytes(int(hx, 16) for hx in value.split())
    try:
        return raw.decode()
    except UnicodeDecodeError:
        return raw.decode("latin1")


def strip_snmp_value(value: str) -> str:
    """
    >>> strip_snmp_value('"Print Spooler"')
    'Print Spooler'
    >>> strip_snmp_value(' 4 ')
    '4'
    >>> strip_snmp_value('"44 48 43 50 20 43 6C 69 65 6E 74 "')
    'DHCP Client'
    """
    v = value.strip()
    if len(v) >= 2 and v.startswith('"') and v.endswith('"'):
        v = v[1:-1]
        if len(v) > 2 and is_hex_string(v):
            return convert_from_hex(v)
    return v.strip()


def parse_row(line: SNMPRawLine, prefix: OID) -> SNMPRow | None:
    """Parse one complete line, None means the line has to be skipped

    >>> parse_row('.1.3.6.1.4.1.77.1.2.3.1.3.2.65.66 1', ".1.3.6.1.4.1.77.1.2.3.1.3")
    SNMPRow(oid='.1.3.6.1.4.1.77.1.2.3.1.3.2.65.66', index=(2, 65, 66), value='1')
    >>> parse_row('Timeout: No Response from 10.1.1.1', ".1.3.6.1.2.1.1.1.0") is None
    True
    >>> parse_row('.1.3.6.1.2.1.1.1.0 No Such Object available on this agent at this OID',
    ...           ".1.3.6.1.2.1.1.1.0") is None
    True
    """
    if (match := _LINE_PATTERN.match(line)) is None:
        return None

    oid = normalize_oid(match.group("oid"))
    if (end_oid := extract_end_oid(prefix, oid)) is None:
        return None

    value = match.group("value") or ""
    if value.startswith(_NO_VALUE_MARKERS):
        return None

    return SNMPRow(oid, oid_to_index(end_oid), strip_snmp_value(value))


def parse_rows(
    lines: Iterable[SNMPRawLine], prefix: OID, logger: logging.Logger | None = None
) -> Iterator[SNMPRow]:
    """Parse the output of one snmpget or snmpwalk call

    Values enclosed in double quotes may span several lines. This happens
    for example on hexdump outputs longer than a few bytes. So if the value
    begins with a double quote, but the line does not end with a double
    quote, we take the next line(s) as continuation line.

    Skipped lines are logged with level VERBOSE if a logger is given.

    >>> list(parse_rows(['.1.3.6 "41 42 43 44 45 46 47 48 49 4A 4B 4C 4D 4E 4F 50 51 52 ',
    ...                  '53 54 "', '', '.1.3.7 "x"'], ".1.3.6"))
    [SNMPRow(oid='.1.3.6', index=(), value='ABCDEFGHIJKLMNOPQRST')]
    """
    line_iter = iter(lines)
    for line in line_iter:
        line = line.strip()
        if _is_unterminated(line):
            for next_line in line_iter:
                line += " " + next_line.strip()
                if line.endswith('"'):
                    break

        if (row := parse_row(line, prefix)) is not None:
            yield row
        elif line and logger is not None:
            logger.log(VERBOSE, "Skipping line: %r", line)


def _is_unterminated(line: str) -> bool:
    if (match := _LINE_PATTERN.match(line)) is None:
        return False
    value = match.group("value") or ""
    return value.startswith('"') and (len(value) == 1 or not value.endswith('"'))
