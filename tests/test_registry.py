# Copyright (c) 2026 plumiume
# SPDX-License-Identifier: MIT
# License: MIT License (https://opensource.org/licenses/MIT)
# See LICENSE.txt for details.

import pytest

from dcw_src.exceptions import ConfigError
from dcw_src.models import CommandArgs, ResolvedConfig
from dcw_src.registry import (
    SHELL_PROBE,
    Command,
    Slot,
    missing_slots,
    render_help,
    usage_message,
)

BASE = ["docker", "compose", "-p", "proj", "-f", "docker-compose.yaml"]


def make_config(**kwargs) -> ResolvedConfig:
    values = {
        "workdir": "/srv/proj",
        "project_name": "proj",
        "compose_command": ("docker", "compose"),
    }
    values.update(kwargs)
    return ResolvedConfig(**values)


def build(command: Command, config=None, **args) -> list[str]:
    return command.spec.argv(config or make_config(), CommandArgs(**args))


def test_up():
    assert build(Command.UP) == BASE + ["up", "-d"]


def test_base_uses_v1_binary_and_overrides():
    config = make_config(
        compose_command=("docker-compose",),
        project_name="web",
        compose_file="compose.prod.yml",
    )
    assert build(Command.PS, config) == [
        "docker-compose",
        "-p",
        "web",
        "-f",
        "compose.prod.yml",
        "ps",
    ]


@pytest.mark.parametrize(("remove", "flags"), [(True, ["-v"]), (False, [])])
def test_down_volume_flag(remove, flags):
    config = make_config(remove_volumes_on_down=remove)
    assert build(Command.DOWN, config) == BASE + ["down"] + flags


@pytest.mark.parametrize(
    "command", [Command.RESTART, Command.START, Command.STOP, Command.PULL]
)
def test_service_verbs(command: Command):
    verb = command.spec.name
    assert build(command) == BASE + [verb]
    assert build(command, service="traefik") == BASE + [verb, "traefik"]


def test_build_flags_are_split():
    assert build(Command.BUILD, build_args="--no-cache --pull") == BASE + [
        "build",
        "--no-cache",
        "--pull",
    ]
    assert build(Command.BUILD) == BASE + ["build"]


def test_build_flags_keep_quoted_values():
    argv = build(Command.BUILD, build_args='--build-arg "GREETING=hello world"')
    assert argv[-2:] == ["--build-arg", "GREETING=hello world"]


def test_unbalanced_quotes_are_a_config_error():
    with pytest.raises(ConfigError):
        build(Command.BUILD, build_args='--build-arg "oops')


@pytest.mark.parametrize("command", [Command.PS, Command.STATUS])
def test_ps_and_status(command: Command):
    assert build(command) == BASE + ["ps"]


def test_logs_flags_before_service():
    argv = build(Command.LOGS, service="traefik", log_args="-n 100")
    assert argv[-5:] == ["logs", "-f", "-n", "100", "traefik"]
    assert argv == BASE + ["logs", "-f", "-n", "100", "traefik"]


def test_logs_without_options():
    assert build(Command.LOGS) == BASE + ["logs", "-f"]


@pytest.mark.parametrize("command", [Command.TOP, Command.EVENTS])
def test_verbs_without_arguments(command: Command):
    assert build(command, service="ignored") == BASE + [command.spec.name]


def test_exec_keeps_command_as_one_argument():
    argv = build(Command.EXEC, service="app", exec_command="php -v | head -1 > /tmp/v")
    assert argv == BASE + ["exec", "app", "sh", "-lc", "php -v | head -1 > /tmp/v"]


def test_shell_prefers_bash():
    argv = build(Command.SHELL, service="app")
    assert argv == BASE + ["exec", "app", "sh", "-lc", SHELL_PROBE]
    assert "bash" in SHELL_PROBE and "exec sh" in SHELL_PROBE


def test_prune_uses_container_runtime():
    config = make_config(compose_command=None)
    assert build(Command.PRUNE, config) == ["docker", "system", "prune", "-f"]
    assert not Command.PRUNE.spec.uses_compose


def test_compose_command_must_be_resolved():
    with pytest.raises(ConfigError):
        build(Command.UP, make_config(compose_command=None))


@pytest.mark.parametrize(
    "command", [Command.INIT, Command.URL, Command.OPEN_DASHBOARD, Command.HELP]
)
def test_local_commands_do_not_need_compose(command: Command):
    spec = command.spec
    assert spec.action is not None
    assert spec.argv is None
    assert not spec.uses_compose


def test_every_command_has_exactly_one_way_to_run():
    for command in Command:
        spec = command.spec
        assert (spec.argv is None) != (spec.action is None), spec.name


# ============================================================================
# Requirements
# ============================================================================


@pytest.mark.parametrize(
    ("command", "args", "missing"),
    [
        (Command.EXEC, {}, {Slot.SERVICE, Slot.EXEC_COMMAND}),
        (Command.EXEC, {"service": "app"}, {Slot.EXEC_COMMAND}),
        (Command.EXEC, {"exec_command": "ls"}, {Slot.SERVICE}),
        (Command.EXEC, {"service": "app", "exec_command": "ls"}, set()),
        (Command.SHELL, {}, {Slot.SERVICE}),
        (Command.SHELL, {"service": "app"}, set()),
        (Command.LOGS, {}, set()),
        (Command.URL, {}, set()),
    ],
)
def test_missing_slots(command: Command, args, missing):
    assert missing_slots(command.spec, make_config(), CommandArgs(**args)) == missing


def test_open_dashboard_requires_domain():
    spec = Command.OPEN_DASHBOARD.spec
    assert missing_slots(spec, make_config(), CommandArgs()) == {Slot.DOMAIN}
    assert missing_slots(spec, make_config(domain="example.com"), CommandArgs()) == set()


def test_usage_messages():
    config = make_config(env_file="stack.env")
    assert usage_message(Command.EXEC.spec, config) == (
        'Usage: dcw exec s=service c="command"'
    )
    assert usage_message(Command.SHELL.spec, config) == "Usage: dcw shell s=service"
    assert usage_message(Command.OPEN_DASHBOARD.spec, config) == (
        "DOMAIN not set in stack.env. Use: echo DOMAIN=example.com >> stack.env"
    )


# ============================================================================
# Lookup and help
# ============================================================================


def test_from_name():
    assert Command.from_name("open-dashboard") is Command.OPEN_DASHBOARD
    assert Command.from_name("status") is Command.STATUS
    assert Command.from_name("OPEN_DASHBOARD") is None
    assert Command.from_name("nope") is None


def test_command_names_are_unique():
    names = [command.spec.name for command in Command]
    assert len(names) == len(set(names)) == 20


def test_help_lists_each_command_once_in_order():
    lines = [line for line in render_help() if line.startswith("  ")]
    names = [line.split()[0] for line in lines]

    assert names == [command.spec.name for command in Command]
    assert names[:3] == ["help", "init", "up"]
    for line, command in zip(lines, Command):
        assert line == f"  {command.spec.name:<18} {command.spec.help}"
