#!/usr/bin/env python3
# Copyright (C) 2026 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""check_snmp_win_service - Check if a Windows service is running via SNMP"""

# The check pings the host, makes sure its SNMP agent belongs to a Windows
# system and looks up the service in the LanMgr service table.
#
# Example output:
# WINSERVICE OK - Print Spooler is running | running=1;;;;
# WINSERVICE WARNING - BogusServiceName is not running or was not found | running=0;;;;
# WINSERVICE UNKNOWN - no ping reply from 10.1.1.1
#
# The result is never CRITICAL: a missing service may be expected on some
# hosts, so it does not page anyone.

import argparse
import logging
import sys
from collections.abc import Sequence
from typing import IO, NoReturn

from pydantic import BaseModel, Field, ValidationError

from snmpwin.checkresult import output_check_result, Verdict
from snmpwin.probe import ProbeTarget, run_probe
from snmpwin.reachability import PingProber, PingProberProto
from snmpwin.snmplib import ClassicSNMPBackend, SNMPBackend, SNMPHostConfig
from snmpwin.utils.exceptions import MKBailOut, MKException
from snmpwin.utils.log import logger, setup_console_logging, verbosity_to_log_level
from snmpwin.utils.statename import State

CHECK_NAME = "WINSERVICE"


class Args(BaseModel):
    # anything starting with "-" would be taken for an option by ping and snmpget
    hostname: str = Field(min_length=1, pattern=r"^[^-]")
    community: str
    name: str = Field(min_length=1)
    port: int = Field(gt=0, lt=65536)
    timeout: float = Field(gt=0)
    ping_count: int = Field(gt=0)
    ping_timeout: int = Field(gt=0)
    no_ping: bool
    verbose: int
    debug: bool

    def target(self) -> ProbeTarget:
        return ProbeTarget(host=self.hostname, community=self.community, service_name=self.name)

    def snmp_config(self) -> SNMPHostConfig:
        target = self.target()
        return SNMPHostConfig(
            hostname=target.host,
            credentials=target.community,
            port=self.port,
            timeout=self.timeout,
        )


class ArgParser(argparse.ArgumentParser):
    # argparse would exit with 2, which is CRITICAL for the monitoring core
    def error(self, message: str) -> NoReturn:
        raise MKBailOut(f"Parsing the arguments failed - {message}")

    # stdout is reserved for the status line
    def print_help(self, file: IO[str] | None = None) -> None:
        super().print_help(sys.stderr if file is None else file)

    def exit(self, status: int = 0, message: str | None = None) -> NoReturn:
        super().exit(int(State.UNKNOWN), message)


def parse_arguments(argv: Sequence[str]) -> Args:
    parser = ArgParser(
        prog="check_snmp_win_service",
        description="Check if a service is running on a Windows host using SNMP.",
    )
    parser.add_argument(
        "-H",
        "--hostname",
        required=True,
        metavar="HOST",
        help="Name or IP address of the host to check",
    )
    parser.add_argument(
        "-C",
        "--community",
        default="public",
        metavar="COMMUNITY",
        help='SNMP community of the host (Default: "public")',
    )
    parser.add_argument(
        "-n",
        "--name",
        required=True,
        metavar="SERVICE",
        help="Display name of the service, e.g. 'Print Spooler'. The match is case-sensitive.",
    )
    parser.add_argument(
        "-p",
        "--port",
        type=int,
        default=161,
        help="SNMP port of the host (Default: 161)",
    )
    parser.add_argument(
        "-t",
        "--timeout",
        type=float,
        default=10.0,
        metavar="SECONDS",
        help="Seconds before a call of snmpget or snmpwalk is aborted (Default: 10)",
    )
    parser.add_argument(
        "--ping-count",
        type=int,
        default=3,
        metavar="COUNT",
        help="Number of echo requests sent to the host (Default: 3)",
    )
    parser.add_argument(
        "--ping-timeout",
        type=int,
        default=5,
        metavar="SECONDS",
        help="Seconds to wait for the echo replies in total (Default: 5)",
    )
    parser.add_argument(
        "--no-ping",
        action="store_true",
        help="Do not ping the host before querying its SNMP agent",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Verbose mode, lists all services found on stderr (-vv for debug output)",
    )
    parser.add_argument("--debug", action="store_true", help="Raise python exceptions.")

    try:
        return Args.model_validate(vars(parser.parse_args(argv)))
    except ValidationError as e:
        raise MKBailOut(
            "Invalid arguments - %s"
            % ", ".join(f"{'.'.join(map(str, err['loc']))}: {err['msg']}" for err in e.errors())
        ) from e


def _check_snmp_win_service_main(
    argv: Sequence[str],
    *,
    backend: SNMPBackend | None,
    prober: PingProberProto | None,
) -> Verdict:
    try:
        args = parse_arguments(argv)
    except MKBailOut as e:
        return Verdict(State.UNKNOWN, str(e))

    if args.verbose:
        setup_console_logging()
        logger.setLevel(verbosity_to_log_level(args.verbose))

    try:
        # Look for the tools before sending anything over the network
        if backend is None:
            backend = ClassicSNMPBackend.from_path(
                args.snmp_config(), logging.getLogger("snmpwin.snmp")
            )
        if prober is None and not args.no_ping:
            prober = PingProber.from_path(
                count=args.ping_count,
                timeout=args.ping_timeout,
                logger=logging.getLogger("snmpwin.ping"),
            )

        return run_probe(args.target(), backend=backend, prober=None if args.no_ping else prober)

    except MKException as e:
        if args.debug:
            raise
        return Verdict(State.UNKNOWN, str(e))

    except Exception as e:
        if args.debug:
            raise
        return Verdict(State.UNKNOWN, f"Unhandled exception: {e}")


def main(
    argv: Sequence[str] | None = None,
    *,
    backend: SNMPBackend | None = None,
    prober: PingProberProto | None = None,
) -> int:
    verdict = _check_snmp_win_service_main(
        sys.argv[1:] if argv is None else argv,
        backend=backend,
        prober=prober,
    )
    output_check_result(CHECK_NAME, verdict)
    return int(verdict.state)


if __name__ == "__main__":
    sys.exit(main())
