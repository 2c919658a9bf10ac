#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Shared Rich consoles."""

from rich.console import Console

# Command output (help, url, doctor, usage lines)
console = Console(highlight=False, soft_wrap=True)
# Diagnostics (errors, command echo, interruption notices)
err_console = Console(stderr=True, highlight=False, soft_wrap=True)
