#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# Copyright (c) 2026 plumiume
# SPDX-License-Identifier: MIT
# License: MIT License (https://opensource.org/licenses/MIT)
# See LICENSE.txt for details.

"""
Exit codes returned by the dispatcher.

Anything not listed here is the external tool's own exit status, passed
through unchanged, except that a child killed by a signal is reported
the way a shell reports it.
"""

SUCCESS = 0
CONFIG_ERROR = 1
USAGE_ERROR = 2
# Same value click uses for "No such command"
UNKNOWN_COMMAND = 2
COMMAND_NOT_EXECUTABLE = 126
COMMAND_NOT_FOUND = 127
INTERRUPTED = 130
# A child killed by signal N exits as 128 + N, as a shell reports it
SIGNAL_BASE = 128
