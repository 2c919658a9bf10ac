#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
CLI commands for the compose dispatcher.
"""

import dataclasses
import sys
from typing import Annotated, Optional

import typer
from rich.markup import escape
from typer.core import TyperGroup

from . import exit_codes
from .console import console, err_console
from .dispatcher import Dispatcher
from .models import CommandArgs, Overrides
from .process import ProcessRunner
from .registry import Command, render_help

# make-style NAME=VALUE tokens and the options they stand for
GLOBAL_ASSIGNMENTS = {
    "PROJECT_NAME": "--project-name",
    "COMPOSE_FILE": "--compose-file",
    "ENV_FILE": "--env-file",
}
COMMAND_ASSIGNMENTS = {
    "s": "--service",
    "c": "--command",
    "V": "--remove-volumes",
    "LARGS": "--log-args",
    "BUILD_ARGS": "--build-args",
}
# Options whose next token is their value, never an assignment
VALUE_OPTIONS = frozenset(
    {
        "-p",
        "--project-name",
        "-f",
        "--compose-file",
        "--env-file",
        "--config",
        "-s",
        "--service",
        "-c",
        "--command",
        "-V",
        "--remove-volumes",
        "--log-args",
        "--build-args",
    }
)


class RegistryGroup(TyperGroup):
    """Command group that answers unknown commands with the command list"""

    def resolve_command(self, ctx, args):
        name = args[0] if args else None
        if name and not name.startswith("-") and self.get_command(ctx, name) is None:
            err_console.print(f"[red]Unknown command: {escape(name)}[/red]")
            for line in render_help():
                console.print(line, markup=False)
            ctx.exit(exit_codes.UNKNOWN_COMMAND)
        return super().resolve_command(ctx, args)


app = typer.Typer(
    name="dcw",
    help="Docker Compose workspace dispatcher",
    add_completion=False,
    cls=RegistryGroup,
)


@dataclasses.dataclass
class CliState:
    """Values shared by every command of one invocation"""

    dispatcher: Dispatcher
    overrides: Overrides


ServiceOption = Annotated[
    str, typer.Option("-s", "--service", help="Service name", metavar="SERVICE")
]


def _dispatch(
    ctx: typer.Context,
    command: Command,
    args: Optional[CommandArgs] = None,
    remove_volumes: Optional[str] = None,
) -> None:
    state: CliState = ctx.obj
    overrides = state.overrides
    if remove_volumes is not None:
        overrides = dataclasses.replace(overrides, remove_volumes=remove_volumes)
    code = state.dispatcher.dispatch(command.spec.name, args, overrides)
    raise typer.Exit(code)


# ============================================================================
# Global options
# ============================================================================


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    project_name: Annotated[
        Optional[str],
        typer.Option(
            "-p", "--project-name", help="Compose project name (default: cwd name)"
        ),
    ] = None,
    compose_file: Annotated[
        Optional[str],
        typer.Option(
            "-f", "--compose-file", help="Compose file (default: docker-compose.yaml)"
        ),
    ] = None,
    env_file: Annotated[
        Optional[str],
        typer.Option("--env-file", help="Env file holding DOMAIN (default: .env)"),
    ] = None,
    config: Annotated[
        Optional[str],
        typer.Option("--config", help="Project settings file (default: dcw.yaml)"),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("-n", "--dry-run", help="Print commands instead of running them"),
    ] = False,
    verbose: Annotated[
        bool, typer.Option("-v", "--verbose", help="Echo commands before running")
    ] = False,
):
    """Run docker compose commands for the project in the current directory"""
    ctx.obj = CliState(
        dispatcher=Dispatcher(runner=ProcessRunner(), dry_run=dry_run, verbose=verbose),
        overrides=Overrides(
            project_name=project_name,
            compose_file=compose_file,
            env_file=env_file,
            config_file=config,
        ),
    )
    if ctx.invoked_subcommand is None:
        _dispatch(ctx, Command.HELP)


# ============================================================================
# CLI Commands
# ============================================================================


@app.command("help", help=Command.HELP.spec.help)
def help_(ctx: typer.Context):
    _dispatch(ctx, Command.HELP)


@app.command("init", help=Command.INIT.spec.help)
def init(ctx: typer.Context):
    _dispatch(ctx, Command.INIT)


@app.command("up", help=Command.UP.spec.help)
def up(ctx: typer.Context):
    _dispatch(ctx, Command.UP)


@app.command("down", help=Command.DOWN.spec.help)
def down(
    ctx: typer.Context,
    remove_volumes: Annotated[
        Optional[str],
        typer.Option(
            "-V", "--remove-volumes", help="Set to 1 to remove volumes", metavar="V"
        ),
    ] = None,
):
    _dispatch(ctx, Command.DOWN, remove_volumes=remove_volumes)


@app.command("restart", help=Command.RESTART.spec.help)
def restart(ctx: typer.Context, service: ServiceOption = ""):
    _dispatch(ctx, Command.RESTART, CommandArgs(service=service))


@app.command("start", help=Command.START.spec.help)
def start(ctx: typer.Context, service: ServiceOption = ""):
    _dispatch(ctx, Command.START, CommandArgs(service=service))


@app.command("stop", help=Command.STOP.spec.help)
def stop(ctx: typer.Context, service: ServiceOption = ""):
    _dispatch(ctx, Command.STOP, CommandArgs(service=service))


@app.command("build", help=Command.BUILD.spec.help)
def build(
    ctx: typer.Context,
    build_args: Annotated[
        str,
        typer.Option("--build-args", help="Extra flags for compose build"),
    ] = "",
):
    _dispatch(ctx, Command.BUILD, CommandArgs(build_args=build_args))


@app.command("pull", help=Command.PULL.spec.help)
def pull(ctx: typer.Context, service: ServiceOption = ""):
    _dispatch(ctx, Command.PULL, CommandArgs(service=service))


@app.command("ps", help=Command.PS.spec.help)
def ps(ctx: typer.Context):
    _dispatch(ctx, Command.PS)


@app.command("status", help=Command.STATUS.spec.help)
def status(ctx: typer.Context):
    _dispatch(ctx, Command.STATUS)


@app.command("logs", help=Command.LOGS.spec.help)
def logs(
    ctx: typer.Context,
    service: ServiceOption = "",
    log_args: Annotated[
        str,
        typer.Option("--log-args", help='Extra flags for compose logs (e.g. "-n 100")'),
    ] = "",
):
    _dispatch(ctx, Command.LOGS, CommandArgs(service=service, log_args=log_args))


@app.command("top", help=Command.TOP.spec.help)
def top(ctx: typer.Context):
    _dispatch(ctx, Command.TOP)


@app.command("events", help=Command.EVENTS.spec.help)
def events(ctx: typer.Context):
    _dispatch(ctx, Command.EVENTS)


@app.command("exec", help=Command.EXEC.spec.help)
def exec_(
    ctx: typer.Context,
    service: ServiceOption = "",
    command: Annotated[
        str,
        typer.Option("-c", "--command", help="Command run by sh -lc in the service"),
    ] = "",
):
    _dispatch(ctx, Command.EXEC, CommandArgs(service=service, exec_command=command))


@app.command("shell", help=Command.SHELL.spec.help)
def shell(ctx: typer.Context, service: ServiceOption = ""):
    _dispatch(ctx, Command.SHELL, CommandArgs(service=service))


@app.command("url", help=Command.URL.spec.help)
def url(ctx: typer.Context):
    _dispatch(ctx, Command.URL)


@app.command("open-dashboard", help=Command.OPEN_DASHBOARD.spec.help)
def open_dashboard(ctx: typer.Context):
    _dispatch(ctx, Command.OPEN_DASHBOARD)


@app.command("doctor", help=Command.DOCTOR.spec.help)
def doctor(ctx: typer.Context):
    _dispatch(ctx, Command.DOCTOR)


@app.command("prune", help=Command.PRUNE.spec.help)
def prune(ctx: typer.Context):
    _dispatch(ctx, Command.PRUNE)


# ============================================================================
# Entry point
# ============================================================================


def translate_assignments(argv: list[str]) -> list[str]:
    """Turn make-style NAME=VALUE tokens into options

    Global settings move in front of the command, command settings go last.
    Option values and tokens after ``--`` are left alone.
    """
    leading: list[str] = []
    rest: list[str] = []
    trailing: list[str] = []
    passthrough: list[str] = []
    option_value = False

    for i, token in enumerate(argv):
        if option_value:
            rest.append(token)
            option_value = False
            continue
        if token == "--":
            passthrough = argv[i:]
            break
        if token in VALUE_OPTIONS:
            rest.append(token)
            option_value = True
            continue
        name, sep, value = token.partition("=")
        if sep and name in GLOBAL_ASSIGNMENTS:
            leading.extend([GLOBAL_ASSIGNMENTS[name], value])
        elif sep and name in COMMAND_ASSIGNMENTS:
            trailing.extend([COMMAND_ASSIGNMENTS[name], value])
        else:
            rest.append(token)

    return leading + rest + trailing + passthrough


def main():
    """Main entry point"""
    app(args=translate_assignments(sys.argv[1:]), prog_name="dcw")
