#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Dispatcher for registry commands.
"""

import shlex
from pathlib import Path
from typing import Optional, Sequence

from rich.console import Console
from rich.markup import escape

from . import exit_codes
from .actions import ActionContext, show_help
from .console import console as default_console
from .console import err_console as default_err_console
from .exceptions import DcwError
from .models import CommandArgs, Overrides, ResolvedConfig, Settings
from .process import ProcessRunner
from .registry import Command, missing_slots, usage_message
from .resolver import detect_compose_command, resolve_config


# ============================================================================
# Core Dispatcher
# ============================================================================


class Dispatcher:
    """Resolves configuration and runs one command at a time"""

    def __init__(
        self,
        runner: Optional[ProcessRunner] = None,
        console: Optional[Console] = None,
        err_console: Optional[Console] = None,
        dry_run: bool = False,
        verbose: bool = False,
        cwd: Optional[Path] = None,
        settings: Optional[Settings] = None,
    ):
        self.runner = runner or ProcessRunner()
        self.console = console or default_console
        self.err_console = err_console or default_err_console
        self.dry_run = dry_run
        self.verbose = verbose
        self.cwd = cwd
        self.settings = settings
        self._compose_command: Optional[tuple[str, ...]] = None

    def compose_command(self) -> tuple[str, ...]:
        """Probe for the compose command once and reuse the answer"""
        if self._compose_command is None:
            self._compose_command = detect_compose_command(self.runner)
        return self._compose_command

    def dispatch(
        self,
        name: str,
        args: Optional[CommandArgs] = None,
        overrides: Optional[Overrides] = None,
    ) -> int:
        """Run a command by name and return the exit code"""
        try:
            return self._dispatch(name, args or CommandArgs(), overrides or Overrides())
        except DcwError as e:
            self.err_console.print(f"[red]Error: {escape(str(e))}[/red]")
            return exit_codes.CONFIG_ERROR
        except KeyboardInterrupt:
            self.err_console.print("\n[yellow]Interrupted by user[/yellow]")
            return exit_codes.INTERRUPTED

    def _dispatch(self, name: str, args: CommandArgs, overrides: Overrides) -> int:
        config = resolve_config(overrides, settings=self.settings, cwd=self.cwd)

        command = Command.from_name(name)
        if command is None:
            self.err_console.print(f"[red]Unknown command: {escape(name)}[/red]")
            show_help(self._context(config, args))
            return exit_codes.UNKNOWN_COMMAND

        spec = command.spec
        if missing_slots(spec, config, args):
            self.console.print(usage_message(spec, config), markup=False)
            return exit_codes.USAGE_ERROR

        if spec.uses_compose:
            config = config.model_copy(
                update={"compose_command": self.compose_command()}
            )

        if spec.action is not None:
            return spec.action(self._context(config, args))
        return self.run(spec.argv(config, args))

    def _context(self, config: ResolvedConfig, args: CommandArgs) -> ActionContext:
        return ActionContext(
            config=config,
            args=args,
            runner=self.runner,
            console=self.console,
            dry_run=self.dry_run,
        )

    def run(self, argv: Sequence[str]) -> int:
        """Run an external command, or print it in dry-run mode"""
        cmd_str = shlex.join(argv)
        if self.dry_run:
            self.console.print(cmd_str, markup=False)
            return exit_codes.SUCCESS

        if self.verbose:
            self.err_console.print(f"[dim]Running: {escape(cmd_str)}[/dim]")

        try:
            return self.runner.run(argv)
        except FileNotFoundError:
            self.err_console.print(f"[red]Error: {escape(argv[0])} not found[/red]")
            return exit_codes.COMMAND_NOT_FOUND
        except PermissionError:
            self.err_console.print(
                f"[red]Error: {escape(argv[0])} is not executable[/red]"
            )
            return exit_codes.COMMAND_NOT_EXECUTABLE
