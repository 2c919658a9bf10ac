# Copyright (c) 2026 plumiume
# SPDX-License-Identifier: MIT
# License: MIT License (https://opensource.org/licenses/MIT)
# See LICENSE.txt for details.

import io
from pathlib import Path
from typing import Optional, Sequence

import pytest
from rich.console import Console

from dcw_src.dispatcher import Dispatcher
from dcw_src.process import ProcessRunner

COMPOSE_V2_VERSION = ("docker", "compose", "version")
DOCKER_VERSION = ("docker", "--version")

DCW_ENV_VARS = [
    "DCW_PROJECT_NAME",
    "DCW_COMPOSE_FILE",
    "DCW_ENV_FILE",
    "DCW_EXAMPLE_ENV_FILE",
    "DCW_REMOVE_VOLUMES",
    "DCW_CONFIG_FILE",
]


class FakeRunner(ProcessRunner):
    """Records every process the dispatcher would start"""

    def __init__(self, returncode: int = 0):
        self.returncode = returncode
        self.runs: list[list[str]] = []
        self.captures: list[list[str]] = []
        self.launches: list[list[str]] = []
        self.outputs: dict[tuple[str, ...], Optional[str]] = {
            COMPOSE_V2_VERSION: "Docker Compose version v2.27.0",
            DOCKER_VERSION: "Docker version 26.1.0, build 9714adc",
        }
        self.executables: dict[str, str] = {}
        self.run_error: Optional[BaseException] = None

    def run(self, argv: Sequence[str]) -> int:
        self.runs.append(list(argv))
        if self.run_error is not None:
            raise self.run_error
        return self.returncode

    def capture(self, argv: Sequence[str]) -> Optional[str]:
        self.captures.append(list(argv))
        return self.outputs.get(tuple(argv))

    def which(self, name: str) -> Optional[str]:
        return self.executables.get(name)

    def launch(self, argv: Sequence[str]) -> None:
        self.launches.append(list(argv))


class Captured:
    """A dispatcher wired to a fake runner and in-memory consoles"""

    def __init__(self, runner: FakeRunner, cwd: Path, dry_run: bool = False):
        self.runner = runner
        self._out = io.StringIO()
        self._err = io.StringIO()
        self.dispatcher = Dispatcher(
            runner=runner,
            console=Console(file=self._out, width=200, highlight=False, soft_wrap=True),
            err_console=Console(
                file=self._err, width=200, highlight=False, soft_wrap=True
            ),
            dry_run=dry_run,
            cwd=cwd,
        )

    @property
    def out(self) -> str:
        return self._out.getvalue()

    @property
    def err(self) -> str:
        return self._err.getvalue()

    def dispatch(self, *args, **kwargs) -> int:
        return self.dispatcher.dispatch(*args, **kwargs)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in DCW_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch) -> Path:
    project = tmp_path / "myproj"
    project.mkdir()
    monkeypatch.chdir(project)
    return project


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def captured(runner: FakeRunner, workdir: Path) -> Captured:
    return Captured(runner, workdir)


@pytest.fixture
def make_captured(runner: FakeRunner, workdir: Path):
    def make(dry_run: bool = False) -> Captured:
        return Captured(runner, workdir, dry_run=dry_run)

    return make
