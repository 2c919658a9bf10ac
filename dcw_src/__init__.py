#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2026 plumiume
# SPDX-License-Identifier: MIT
# License: MIT License (https://opensource.org/licenses/MIT)
# See LICENSE.txt for details.

"""
Docker Compose workspace dispatcher package.
"""

from .commands import app, main
from .dispatcher import Dispatcher
from .models import (
    CommandArgs,
    FileConfig,
    Overrides,
    ResolvedConfig,
    Settings,
)
from .process import ProcessRunner
from .registry import Command, CommandSpec, Slot
from .resolver import detect_compose_command, read_domain, resolve_config

__all__ = [
    # Commands
    "app",
    "main",
    # Dispatcher
    "Dispatcher",
    "ProcessRunner",
    # Registry
    "Command",
    "CommandSpec",
    "Slot",
    # Resolver
    "resolve_config",
    "read_domain",
    "detect_compose_command",
    # Models
    "CommandArgs",
    "FileConfig",
    "Overrides",
    "ResolvedConfig",
    "Settings",
]
