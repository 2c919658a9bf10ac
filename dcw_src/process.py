#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Child process execution for dispatched commands.
"""

import os
import shutil
import signal
import subprocess
from typing import Optional, Sequence

from .console import err_console
from . import exit_codes

INTERRUPT_GRACE_SECONDS = 10


class ProcessRunner:
    """Runs external programs on behalf of the dispatcher"""

    def run(self, argv: Sequence[str]) -> int:
        """Run a command with inherited stdio and return its exit code

        Raises FileNotFoundError if the program does not exist.
        """
        proc = subprocess.Popen(list(argv))
        try:
            returncode = proc.wait()
        except KeyboardInterrupt:
            err_console.print("\n[yellow]Interrupted by user[/yellow]")
            self._stop(proc)
            return exit_codes.INTERRUPTED
        if returncode < 0:
            return exit_codes.SIGNAL_BASE - returncode
        return returncode

    def _stop(self, proc: subprocess.Popen) -> None:
        """Bring the child down after the user interrupted us

        Another Ctrl+C during the grace period skips straight to terminate.
        """
        # The terminal already delivered SIGINT to the foreground process
        # group; forward it anyway for children started outside a tty.
        if proc.poll() is None:
            proc.send_signal(signal.SIGINT)
        stopped = False
        try:
            proc.wait(timeout=INTERRUPT_GRACE_SECONDS)
            stopped = True
        except subprocess.TimeoutExpired:
            pass
        finally:
            if not stopped:
                self._escalate(proc)

    def _escalate(self, proc: subprocess.Popen) -> None:
        proc.terminate()
        try:
            proc.wait(timeout=INTERRUPT_GRACE_SECONDS)
        except subprocess.TimeoutExpired:
            pass
        finally:
            if proc.poll() is None:
                proc.kill()
                proc.wait()

    def capture(self, argv: Sequence[str]) -> Optional[str]:
        """Run a probe and return its stripped stdout, or None on failure"""
        try:
            result = subprocess.run(
                list(argv),
                capture_output=True,
                text=True,
                stdin=subprocess.DEVNULL,
            )
        except (FileNotFoundError, PermissionError):
            return None
        if result.returncode != 0:
            return None
        return result.stdout.strip()

    def which(self, name: str) -> Optional[str]:
        """Locate an executable on PATH"""
        return shutil.which(name)

    def launch(self, argv: Sequence[str]) -> None:
        """Start a program in the background without waiting for it"""
        subprocess.Popen(
            list(argv),
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=os.name == "posix",
        )
