"""Exec command - run a program directly (no shell)."""

import json
import os
import sys
from contextlib import ExitStack

import click

from ...errors import ExecError
from ...executor import spawn_exec
from ...models import SpawnOptions


def _parse_env(ctx, param, values):
    """Split KEY=VALUE pairs into a dict, keeping command-line order."""
    env = {}
    for item in values:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got {item!r}")
        env[key] = value
    return env


def _parse_options(ctx, param, value):
    if value is None:
        return {}
    try:
        options = json.loads(value)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"invalid JSON: {e}")
    if not isinstance(options, dict):
        raise click.BadParameter("options must be a JSON object")
    return options


def _exit_status(code: int) -> int:
    """Map a child exit code to a shell-style status (signals -> 128+N)."""
    return 128 - code if code < 0 else code


@click.command(
    name="exec", context_settings=dict(ignore_unknown_options=True)
)
@click.argument("args", nargs=-1, required=True, type=click.UNPROCESSED)
@click.option(
    "--block/--no-block",
    default=None,
    help="Wait for the program and exit with its code (default), or print its pid.",
)
@click.option(
    "--path/--no-path",
    "use_path",
    default=None,
    help="Search PATH for the program (default), or treat it as a path.",
)
@click.option("--file", "file", help="Program to run instead of ARGS[0].")
@click.option(
    "--stdout",
    "stdout_path",
    type=click.Path(dir_okay=False),
    help="Send the program's stdout to this file.",
)
@click.option("--append", is_flag=True, help="Append to --stdout instead of truncating.")
@click.option(
    "--env",
    "env",
    multiple=True,
    callback=_parse_env,
    help="KEY=VALUE for the program's environment (repeatable).",
)
@click.option(
    "--inherit-env",
    is_flag=True,
    help="Layer --env entries on top of the current environment.",
)
@click.option(
    "--options",
    "options_json",
    callback=_parse_options,
    help="Options bag as a JSON object; explicit flags take precedence.",
)
def exec_command(
    args,
    block,
    use_path,
    file,
    stdout_path,
    append,
    env,
    inherit_env,
    options_json,
):
    """Run a program with ARGS as its argument vector.

    ARGS[0] names the program unless --file is given; it is still passed
    to the program as argv[0].

    Examples:
        xspawn exec -- ls -l /tmp
        xspawn exec --stdout out.txt -- echo hello
        xspawn exec --env LANG=C --inherit-env -- sort data.txt
        xspawn exec --file /bin/sh -- login-sh -c 'echo $0'
        xspawn exec --no-block -- sleep 60

    Note:
        Use '--' before ARGS so options meant for the program are not
        parsed by xspawn.
    """
    options = dict(options_json)
    if block is not None:
        options["block"] = block
    if use_path is not None:
        options["usePath"] = use_path
    if file is not None:
        options["file"] = file
    if env or inherit_env:
        json_env = options.get("env") or {}
        if not isinstance(json_env, dict):
            raise click.BadParameter(
                "env must be a JSON object", param_hint="--options"
            )
        base = dict(os.environ) if inherit_env else {}
        options["env"] = {**base, **json_env, **env}

    try:
        with ExitStack() as stack:
            if stdout_path:
                out = stack.enter_context(
                    open(stdout_path, "ab" if append else "wb")
                )
                options["stdout"] = out.fileno()
            opts = SpawnOptions.parse(options)
            result = spawn_exec(list(args), opts)
    except (ExecError, OSError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if not opts.block:
        click.echo(result)
        sys.exit(0)
    sys.exit(_exit_status(result))
