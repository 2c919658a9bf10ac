#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# Copyright (c) 2026 plumiume
# SPDX-License-Identifier: MIT
# License: MIT License (https://opensource.org/licenses/MIT)
# See LICENSE.txt for details.

"""
Command registry.

Every command the dispatcher knows is a member of ``Command``; the member's
value describes what the command requires and how its invocation is built.
Declaration order is the order shown by ``help``.
"""

import shlex
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from . import actions
from .exceptions import ConfigError
from .models import CommandArgs, ResolvedConfig

CONTAINER_RUNTIME = "docker"
# Runs inside the target container: bash when available, sh otherwise
SHELL_PROBE = "command -v bash >/dev/null 2>&1 && exec bash || exec sh"
HELP_NAME_WIDTH = 18

ArgvBuilder = Callable[[ResolvedConfig, CommandArgs], list[str]]


class Slot(Enum):
    """Inputs a command may require before it can run"""

    SERVICE = "service"
    EXEC_COMMAND = "command"
    DOMAIN = "domain"


@dataclass(frozen=True)
class CommandSpec:
    """How one command is validated and run"""

    name: str
    help: str
    requires: frozenset = frozenset()
    # Printed when a requirement is missing; may reference {env_file}
    usage: str = ""
    argv: Optional[ArgvBuilder] = None
    action: Optional[actions.Action] = None
    uses_compose: bool = False


# ============================================================================
# Invocation builders
# ============================================================================


def compose_base(config: ResolvedConfig) -> list[str]:
    """Compose command with project and file selection"""
    if config.compose_command is None:
        raise ConfigError("compose command has not been resolved")
    return [
        *config.compose_command,
        "-p",
        config.project_name,
        "-f",
        config.compose_file,
    ]


def split_flags(value: str) -> list[str]:
    """Split extra flags the way a shell would"""
    try:
        return shlex.split(value)
    except ValueError as e:
        raise ConfigError(f"cannot parse flags {value!r}: {e}") from e


def _optional(value: str) -> list[str]:
    return [value] if value else []


def _verb(*words: str) -> ArgvBuilder:
    def build(config: ResolvedConfig, args: CommandArgs) -> list[str]:
        return compose_base(config) + list(words)

    return build


def _service_verb(verb: str) -> ArgvBuilder:
    def build(config: ResolvedConfig, args: CommandArgs) -> list[str]:
        return compose_base(config) + [verb] + _optional(args.service)

    return build


def _down(config: ResolvedConfig, args: CommandArgs) -> list[str]:
    flags = ["-v"] if config.remove_volumes_on_down else []
    return compose_base(config) + ["down"] + flags


def _build(config: ResolvedConfig, args: CommandArgs) -> list[str]:
    return compose_base(config) + ["build"] + split_flags(args.build_args)


def _logs(config: ResolvedConfig, args: CommandArgs) -> list[str]:
    return (
        compose_base(config)
        + ["logs", "-f"]
        + split_flags(args.log_args)
        + _optional(args.service)
    )


def _exec(config: ResolvedConfig, args: CommandArgs) -> list[str]:
    # The command string stays one argument so the container shell parses it
    return compose_base(config) + ["exec", args.service, "sh", "-lc", args.exec_command]


def _shell(config: ResolvedConfig, args: CommandArgs) -> list[str]:
    return compose_base(config) + ["exec", args.service, "sh", "-lc", SHELL_PROBE]


def _prune(config: ResolvedConfig, args: CommandArgs) -> list[str]:
    return [CONTAINER_RUNTIME, "system", "prune", "-f"]


# ============================================================================
# Registry
# ============================================================================


class Command(Enum):
    """All commands, in help order"""

    HELP = CommandSpec(
        name="help",
        help="Show this help",
        action=actions.show_help,
    )
    INIT = CommandSpec(
        name="init",
        help="Initialize local environment (env file from example if missing)",
        action=actions.init_env,
    )
    UP = CommandSpec(
        name="up",
        help="Start all services in the background",
        argv=_verb("up", "-d"),
        uses_compose=True,
    )
    DOWN = CommandSpec(
        name="down",
        help="Stop and remove containers (use V=1 to remove volumes)",
        argv=_down,
        uses_compose=True,
    )
    RESTART = CommandSpec(
        name="restart",
        help="Restart services (optionally: s=service)",
        argv=_service_verb("restart"),
        uses_compose=True,
    )
    START = CommandSpec(
        name="start",
        help="Start stopped services (optionally: s=service)",
        argv=_service_verb("start"),
        uses_compose=True,
    )
    STOP = CommandSpec(
        name="stop",
        help="Stop running services (optionally: s=service)",
        argv=_service_verb("stop"),
        uses_compose=True,
    )
    BUILD = CommandSpec(
        name="build",
        help='Build images (add flags via BUILD_ARGS="--no-cache --pull")',
        argv=_build,
        uses_compose=True,
    )
    PULL = CommandSpec(
        name="pull",
        help="Pull images (optionally: s=service)",
        argv=_service_verb("pull"),
        uses_compose=True,
    )
    PS = CommandSpec(
        name="ps",
        help="Show service status",
        argv=_verb("ps"),
        uses_compose=True,
    )
    STATUS = CommandSpec(
        name="status",
        help="Show service status",
        argv=_verb("ps"),
        uses_compose=True,
    )
    LOGS = CommandSpec(
        name="logs",
        help='Follow logs (optionally: s=service, LARGS="-n 100" for tail lines)',
        argv=_logs,
        uses_compose=True,
    )
    TOP = CommandSpec(
        name="top",
        help="Show running processes",
        argv=_verb("top"),
        uses_compose=True,
    )
    EVENTS = CommandSpec(
        name="events",
        help="Stream compose events",
        argv=_verb("events"),
        uses_compose=True,
    )
    EXEC = CommandSpec(
        name="exec",
        help='Exec into a service and run command (requires s=service, c="command")',
        requires=frozenset({Slot.SERVICE, Slot.EXEC_COMMAND}),
        usage='Usage: dcw exec s=service c="command"',
        argv=_exec,
        uses_compose=True,
    )
    SHELL = CommandSpec(
        name="shell",
        help="Open an interactive shell in a service (requires s=service)",
        requires=frozenset({Slot.SERVICE}),
        usage="Usage: dcw shell s=service",
        argv=_shell,
        uses_compose=True,
    )
    URL = CommandSpec(
        name="url",
        help="Print the dashboard/entrypoint URL (from DOMAIN in the env file)",
        action=actions.print_url,
    )
    OPEN_DASHBOARD = CommandSpec(
        name="open-dashboard",
        help="Try to open the DOMAIN URL in your browser",
        requires=frozenset({Slot.DOMAIN}),
        usage=(
            "DOMAIN not set in {env_file}. "
            "Use: echo DOMAIN=example.com >> {env_file}"
        ),
        action=actions.open_dashboard,
    )
    DOCTOR = CommandSpec(
        name="doctor",
        help="Quick diagnostics",
        action=actions.doctor,
        uses_compose=True,
    )
    PRUNE = CommandSpec(
        name="prune",
        help="Prune unused Docker data (dangling images, networks, cache)",
        argv=_prune,
    )

    @property
    def spec(self) -> CommandSpec:
        return self.value

    @classmethod
    def from_name(cls, name: str) -> Optional["Command"]:
        """Look up a command by its CLI name"""
        for command in cls:
            if command.spec.name == name:
                return command
        return None


def missing_slots(
    spec: CommandSpec, config: ResolvedConfig, args: CommandArgs
) -> set[Slot]:
    """Required inputs that are absent for this dispatch"""
    present = {
        Slot.SERVICE: bool(args.service),
        Slot.EXEC_COMMAND: bool(args.exec_command),
        Slot.DOMAIN: bool(config.domain),
    }
    return {slot for slot in spec.requires if not present[slot]}


def usage_message(spec: CommandSpec, config: ResolvedConfig) -> str:
    return spec.usage.format(env_file=config.env_file)


def render_help() -> list[str]:
    """Help lines for every registered command"""
    lines = ["", "Available commands:"]
    for command in Command:
        spec = command.spec
        lines.append(f"  {spec.name:<{HELP_NAME_WIDTH}} {spec.help}")
    return lines
