#!/usr/bin/env python3
# Copyright (C) 2026 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""SNMP access through the net-snmp command line tools"""

import logging
import os
import shutil
import subprocess
from collections.abc import Sequence

from snmpwin.utils.exceptions import MKSNMPError, MKTimeout
from snmpwin.utils.log import VERBOSE

from ._typedefs import OID, SNMPBackend, SNMPHostConfig, SNMPRawLine

# -On: numeric OIDs, -Oq: no "=" and no type, -Oe: numeric enums,
# -Ot: numeric timeticks, -OU: no units
_OUTPUT_OPTIONS = ["-On", "-Oq", "-Oe", "-Ot", "-OU"]


def find_snmp_tool(name: str) -> str:
    if (path := shutil.which(name)) is None:
        raise MKSNMPError(f"could not find {name}, please install the net-snmp tools")
    return path


class ClassicSNMPBackend(SNMPBackend):
    def __init__(
        self,
        snmp_config: SNMPHostConfig,
        logger: logging.Logger,
        *,
        snmpget: str,
        snmpwalk: str,
    ) -> None:
        super().__init__(snmp_config, logger)
        self._snmpget = snmpget
        self._snmpwalk = snmpwalk

    @classmethod
    def from_path(
        cls, snmp_config: SNMPHostConfig, logger: logging.Logger
    ) -> "ClassicSNMPBackend":
        return cls(
            snmp_config,
            logger,
            snmpget=find_snmp_tool("snmpget"),
            snmpwalk=find_snmp_tool("snmpwalk"),
        )

    def get(self, /, oid: OID) -> SNMPRawLine | None:
        try:
            completed_process = self._run(self._command(self._snmpget, oid))
        except MKTimeout as e:
            self.logger.debug("%s", e)
            return None

        if completed_process.returncode:
            self.logger.debug(
                "snmpget failed with exit code %d: %s",
                completed_process.returncode,
                completed_process.stderr.strip(),
            )
            return None

        return completed_process.stdout.strip() or None

    def walk(self, /, oid: OID) -> Sequence[SNMPRawLine]:
        try:
            completed_process = self._run(self._command(self._snmpwalk, oid))
        except MKTimeout as e:
            self.logger.debug("%s", e)
            return []

        if completed_process.returncode:
            # Whatever made it to stdout before the error is still valid
            self.logger.debug(
                "snmpwalk failed with exit code %d: %s",
                completed_process.returncode,
                completed_process.stderr.strip(),
            )

        return completed_process.stdout.splitlines()

    def _command(self, tool: str, oid: OID) -> list[str]:
        return [
            tool,
            "-v1",
            "-c",
            self.config.credentials,
            *_OUTPUT_OPTIONS,
            self._agent_spec(),
            oid,
        ]

    def _agent_spec(self) -> str:
        """
        >>> def spec(hostname, port):
        ...     config = SNMPHostConfig(hostname=hostname, credentials="public", port=port)
        ...     return ClassicSNMPBackend(
        ...         config, logging.getLogger("test"), snmpget="", snmpwalk=""
        ...     )._agent_spec()
        >>> spec("10.1.1.1", 161)
        '10.1.1.1'
        >>> spec("10.1.1.1", 1161)
        '10.1.1.1:1161'
        >>> spec("fe80::1", 161)
        'udp6:[fe80::1]:161'
        """
        if self.config.is_ipv6:
            return f"udp6:[{self.hostname}]:{self.port}"
        if self.port != 161:
            return f"{self.hostname}:{self.port}"
        return self.hostname

    def _run(self, cmd: Sequence[str]) -> subprocess.CompletedProcess[str]:
        # Do not log the community, it is a secret
        self.logger.log(
            VERBOSE, "Running '%s'", " ".join(c for c in cmd if c != self.config.credentials)
        )
        try:
            return subprocess.run(
                cmd,
                capture_output=True,
                encoding="utf8",
                errors="replace",
                check=False,
                timeout=self.config.timeout,
                env={k: v for k, v in os.environ.items() if k != "LANG"},
            )
        except subprocess.TimeoutExpired as e:
            raise MKTimeout(f"{cmd[0]} timed out after {self.config.timeout}s") from e
        except OSError as e:
            raise MKSNMPError(f"could not execute {cmd[0]}: {e}") from e
