#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# Copyright (c) 2026 plumiume
# SPDX-License-Identifier: MIT
# License: MIT License (https://opensource.org/licenses/MIT)
# See LICENSE.txt for details.

"""
Configuration models for the compose dispatcher.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_COMPOSE_FILE = "docker-compose.yaml"
DEFAULT_ENV_FILE = ".env"
DEFAULT_EXAMPLE_ENV_FILE = ".env.example"
DEFAULT_CONFIG_FILE = "dcw.yaml"


# ============================================================================
# Configuration sources
# ============================================================================


class Settings(BaseSettings):
    """Environment defaults (DCW_* variables)

    Unset values stay None so that lower-priority sources can fill them in.
    """

    model_config = SettingsConfigDict(
        env_prefix="DCW_",
        case_sensitive=False,
        extra="ignore",
    )

    project_name: Optional[str] = Field(default=None, description="Project name")
    compose_file: Optional[str] = Field(default=None, description="Compose file")
    env_file: Optional[str] = Field(default=None, description="Env file")
    example_env_file: Optional[str] = Field(
        default=None, description="Example env file used by init"
    )
    remove_volumes: Optional[str] = Field(
        default=None, description="Set to 1 to remove volumes on down"
    )
    config_file: Optional[str] = Field(
        default=None, description="Path to the YAML project file"
    )


class FileConfig(BaseModel):
    """Project file configuration (dcw.yaml)"""

    model_config = ConfigDict(extra="forbid")

    project_name: Optional[str] = Field(default=None, description="Project name")
    compose_file: Optional[str] = Field(default=None, description="Compose file")
    env_file: Optional[str] = Field(default=None, description="Env file")
    example_env_file: Optional[str] = Field(
        default=None, description="Example env file used by init"
    )

    @field_validator("project_name")
    @classmethod
    def validate_project_name(cls, v: Optional[str]) -> Optional[str]:
        """Reject names compose cannot use as a project name"""
        if v is not None and (not v.strip() or any(c.isspace() for c in v)):
            raise ValueError("project_name must be a non-empty word")
        return v


# ============================================================================
# Per-invocation values
# ============================================================================


@dataclass(frozen=True)
class Overrides:
    """Values given explicitly on the command line"""

    project_name: Optional[str] = None
    compose_file: Optional[str] = None
    env_file: Optional[str] = None
    remove_volumes: Optional[str] = None
    config_file: Optional[str] = None


@dataclass(frozen=True)
class CommandArgs:
    """User-supplied command slots; empty string means absent"""

    service: str = ""
    exec_command: str = ""
    log_args: str = ""
    build_args: str = ""


class ResolvedConfig(BaseModel):
    """Effective configuration for one dispatch"""

    model_config = ConfigDict(frozen=True)

    workdir: str = Field(description="Directory relative paths are taken from")
    project_name: str
    compose_file: str = DEFAULT_COMPOSE_FILE
    env_file: str = DEFAULT_ENV_FILE
    example_env_file: str = DEFAULT_EXAMPLE_ENV_FILE
    domain: Optional[str] = None
    remove_volumes_on_down: bool = False
    # Filled in by the dispatcher from the compose probe
    compose_command: Optional[tuple[str, ...]] = None

    @property
    def env_path(self) -> Path:
        return Path(self.workdir) / self.env_file

    @property
    def example_env_path(self) -> Path:
        return Path(self.workdir) / self.example_env_file
