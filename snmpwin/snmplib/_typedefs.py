#!/usr/bin/env python3
# Copyright (C) 2026 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

import abc
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import NamedTuple

OID = str
# The numeric segments following the walked OID, e.g. (7, 83, 112, 111, 111, 108, 101, 114)
OIDIndex = tuple[int, ...]
SNMPCommunity = str
# One line of output of the SNMP command line tools, e.g. '.1.3.6.1.2.1.1.1.0 "Linux ns1"'
SNMPRawLine = str


class SNMPRow(NamedTuple):
    oid: OID
    index: OIDIndex
    value: str


@dataclass(frozen=True, kw_only=True)
class SNMPHostConfig:
    hostname: str
    credentials: SNMPCommunity
    port: int = 161
    timeout: float = 10.0

    @property
    def is_ipv6(self) -> bool:
        return ":" in self.hostname


class SNMPBackend(abc.ABC):
    def __init__(self, snmp_config: SNMPHostConfig, logger: logging.Logger) -> None:
        super().__init__()
        self._logger = logger
        self.config = snmp_config

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    @property
    def hostname(self) -> str:
        return self.config.hostname

    @property
    def port(self) -> int:
        return self.config.port

    @abc.abstractmethod
    def get(self, /, oid: OID) -> SNMPRawLine | None:
        """Fetch a single OID from the host

        Returns the unparsed answer of the agent or None if the agent
        did not answer at all.
        """
        raise NotImplementedError()

    @abc.abstractmethod
    def walk(self, /, oid: OID) -> Sequence[SNMPRawLine]:
        """Fetch all OIDs below the given one

        The lines are returned unparsed and in the order of the agent. They
        may contain diagnostic messages of the command line tools.
        """
        return []
