#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# Copyright (c) 2026 plumiume
# SPDX-License-Identifier: MIT
# License: MIT License (https://opensource.org/licenses/MIT)
# See LICENSE.txt for details.

"""
Configuration resolution.

Priority per field: command line > DCW_* environment > dcw.yaml > default
"""

from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from .exceptions import ConfigError
from .models import (
    DEFAULT_COMPOSE_FILE,
    DEFAULT_CONFIG_FILE,
    DEFAULT_ENV_FILE,
    DEFAULT_EXAMPLE_ENV_FILE,
    FileConfig,
    Overrides,
    ResolvedConfig,
    Settings,
)
from .process import ProcessRunner

COMPOSE_V2 = ("docker", "compose")
COMPOSE_V1 = ("docker-compose",)
DOMAIN_PREFIX = "DOMAIN="


def _first(*values: Optional[str]) -> Optional[str]:
    """Return the first non-empty value"""
    for value in values:
        if value:
            return value
    return None


def read_domain(env_path: Path) -> Optional[str]:
    """Return the value of the first DOMAIN= line in an env file

    A missing or unreadable file, or one without the key, yields None.
    """
    try:
        with open(env_path, encoding="utf-8", errors="replace") as f:
            for line in f:
                if line.startswith(DOMAIN_PREFIX):
                    return line[len(DOMAIN_PREFIX) :].rstrip("\n") or None
    except OSError:
        return None
    return None


def load_file_config(path: Path) -> FileConfig:
    """Load dcw.yaml; a missing file means no project settings"""
    if not path.is_file():
        return FileConfig()

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"{path}: invalid YAML: {e}") from e

    if data is None:
        return FileConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a mapping at the top level")

    try:
        return FileConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"{path}: {e}") from e


def resolve_config(
    overrides: Optional[Overrides] = None,
    settings: Optional[Settings] = None,
    file_config: Optional[FileConfig] = None,
    cwd: Optional[Path] = None,
    compose_command: Optional[tuple[str, ...]] = None,
) -> ResolvedConfig:
    """Compute the effective configuration for one dispatch"""
    overrides = overrides or Overrides()
    settings = settings if settings is not None else Settings()
    workdir = (cwd or Path.cwd()).resolve()

    if file_config is None:
        config_name = (
            _first(overrides.config_file, settings.config_file) or DEFAULT_CONFIG_FILE
        )
        file_config = load_file_config(workdir / config_name)

    project_name = (
        _first(overrides.project_name, settings.project_name, file_config.project_name)
        or workdir.name
    )
    compose_file = (
        _first(overrides.compose_file, settings.compose_file, file_config.compose_file)
        or DEFAULT_COMPOSE_FILE
    )
    env_file = (
        _first(overrides.env_file, settings.env_file, file_config.env_file)
        or DEFAULT_ENV_FILE
    )
    example_env_file = (
        _first(settings.example_env_file, file_config.example_env_file)
        or DEFAULT_EXAMPLE_ENV_FILE
    )
    remove_volumes = _first(overrides.remove_volumes, settings.remove_volumes)

    return ResolvedConfig(
        workdir=str(workdir),
        project_name=project_name,
        compose_file=compose_file,
        env_file=env_file,
        example_env_file=example_env_file,
        domain=read_domain(workdir / env_file),
        remove_volumes_on_down=remove_volumes == "1",
        compose_command=compose_command,
    )


def detect_compose_command(runner: ProcessRunner) -> tuple[str, ...]:
    """Prefer the compose plugin, fall back to the standalone binary"""
    if runner.capture([*COMPOSE_V2, "version"]) is not None:
        return COMPOSE_V2
    return COMPOSE_V1
