#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Exceptions raised below the dispatch boundary."""


class DcwError(Exception):
    """Base error, reported by the dispatcher with exit code 1"""


class ConfigError(DcwError):
    """Invalid configuration file or unresolved configuration value"""
