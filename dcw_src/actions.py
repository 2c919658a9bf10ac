#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Commands that run locally instead of through docker compose.
"""

from dataclasses import dataclass
from typing import Callable

from rich.console import Console

from .models import CommandArgs, ResolvedConfig
from .process import ProcessRunner

# Tried in order; the first one found on PATH opens the URL
BROWSER_OPENERS = ("xdg-open", "open")


@dataclass(frozen=True)
class ActionContext:
    """Everything a local action may use"""

    config: ResolvedConfig
    args: CommandArgs
    runner: ProcessRunner
    console: Console
    # Report what would change instead of changing it
    dry_run: bool = False


Action = Callable[[ActionContext], int]


def dashboard_url(config: ResolvedConfig) -> str:
    return f"https://{config.domain}"


def show_help(ctx: ActionContext) -> int:
    """Print every registered command with its help text"""
    from .registry import render_help

    for line in render_help():
        ctx.console.print(line, markup=False)
    return 0


def init_env(ctx: ActionContext) -> int:
    """Create the env file from the example file when it is missing"""
    config = ctx.config
    env_path = config.env_path
    example_path = config.example_env_path

    if not env_path.exists() and example_path.is_file():
        if ctx.dry_run:
            ctx.console.print(
                f"Would create {config.env_file} from {config.example_env_file}",
                markup=False,
            )
            return 0
        env_path.write_bytes(example_path.read_bytes())
        ctx.console.print(
            f"Created {config.env_file} from {config.example_env_file}", markup=False
        )
    else:
        ctx.console.print(
            f"{config.env_file} already exists or no {config.example_env_file} found.",
            markup=False,
        )
    return 0


def print_url(ctx: ActionContext) -> int:
    if ctx.config.domain:
        ctx.console.print(dashboard_url(ctx.config), markup=False)
    else:
        ctx.console.print(f"DOMAIN not set in {ctx.config.env_file}.", markup=False)
    return 0


def open_dashboard(ctx: ActionContext) -> int:
    """Open the dashboard URL without waiting for the browser"""
    url = dashboard_url(ctx.config)
    if ctx.dry_run:
        ctx.console.print(url, markup=False)
        return 0
    ctx.console.print(f"Opening {url} ...", markup=False)

    for opener in BROWSER_OPENERS:
        path = ctx.runner.which(opener)
        if path is None:
            continue
        try:
            ctx.runner.launch([path, url])
        except OSError:
            continue
        return 0

    ctx.console.print(f"Please open {url} in your browser.", markup=False)
    return 0


def doctor(ctx: ActionContext) -> int:
    """Print resolved configuration and tool versions"""
    config = ctx.config
    compose = config.compose_command or ()
    env_state = "(present)" if config.env_path.is_file() else "(missing)"
    docker_version = ctx.runner.capture(["docker", "--version"])
    compose_version = ctx.runner.capture([*compose, "version"]) if compose else None

    rows = [
        ("Compose cmd:", " ".join(compose) or "not found"),
        ("Project:", config.project_name),
        ("File:", config.compose_file),
        ("Env file:", f"{config.env_file} {env_state}"),
        ("Domain:", config.domain or "(unset)"),
        ("Docker:", docker_version or "not found"),
        ("Compose:", compose_version or "not found"),
    ]
    for label, value in rows:
        ctx.console.print(f"{label:<12} {value}", markup=False)
    return 0
