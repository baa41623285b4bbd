#!/usr/bin/env python3
# Copyright (C) 2026 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""Probe for Windows services via SNMP.

The probe checks whether a named service is running on a Windows host by
walking the LanMgr service table of the host's SNMP agent. It is meant to be
executed by a monitoring core as an active check."""
