"""Command-line entry point: `notefeed [OPTIONS] COMMAND ...`.

Subcommand modules are imported on demand and wired into the container
when it boots, so their `di.Provide[...]` defaults resolve.
"""

from __future__ import annotations

import importlib
import sys
import threading
import traceback
import types
import typing as t
from pathlib import Path

import pydantic as p

import notefeed
import notefeed.lib.cli as click
from notefeed.core import NotefeedContainer
from notefeed.model import DeploymentEnvironment

COMMANDS = ("feedback", "link", "schema")
DEFAULT_CONFIG_ROOT = Path(notefeed.__file__).resolve().parents[1] / "config"

_booted = False
_wiring: list[types.ModuleType] = []


class NotefeedMultiCommand(click.Group):
    def list_commands(self, ctx: click.Context) -> list[str]:
        return list(COMMANDS)

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        if cmd_name not in COMMANDS:
            return None
        mod = importlib.import_module(f"notefeed.cli.{cmd_name}")
        _wiring.append(mod)
        return getattr(mod, cmd_name)


@click.group(cls=NotefeedMultiCommand)
@click.option("-E", "--env", default=DeploymentEnvironment.Local, type=click.EnumType(DeploymentEnvironment))
@click.option("-c", "--config-root", default=DEFAULT_CONFIG_ROOT, type=click.URIParamType(dir_ok=True))
@click.option("-s", "--secrets-path", default=None, type=click.URIParamType())
@click.option(
    "-o",
    "--override",
    multiple=True,
    help="override a configuration value, e.g. -o feedback.max_summary_files=10",
)
@click.option("-D", "--debug", is_flag=True, default=False)
@click.pass_obj
def main(
    ct: NotefeedContainer,
    env: DeploymentEnvironment,
    config_root: p.FileUrl,
    secrets_path: p.AnyUrl | None,
    override: tuple[str, ...],
    debug: bool,
):
    global _booted
    NotefeedContainer.boot(
        ct,
        debug=debug,
        env=env,
        config_root=config_root,
        secrets_path=secrets_path,
        override=override,
        wiring=tuple(_wiring),
    )
    _booted = True


def _report(ex: Exception, debug: bool) -> int:
    click.echo(click.style("ERROR ", fg="red"), nl=False, file=sys.stderr)
    click.echo(str(ex), file=sys.stderr)
    if debug:
        traceback.print_exc()
    return ex.exit_code if isinstance(ex, click.ClickException) else 2


def execute_command(*_args: str) -> None:
    threading.current_thread().name = "notefeed-0"
    args = list(_args or sys.argv)
    prog = Path(args[0]).name
    container = NotefeedContainer()

    try:
        with main.make_context(prog, args=args[1:]) as ctx:
            ctx.obj = container
            sys.exit(t.cast(int, main.invoke(ctx)))
    except (EOFError, KeyboardInterrupt, click.Abort):
        click.echo("Aborted!", file=sys.stderr)
        sys.exit(1)
    except click.exceptions.Exit as e:
        sys.exit(e.exit_code)
    except Exception as ex:
        # before boot the container cannot say whether -D was given
        debug = container.debug() if _booted else "-D" in args[1:] or "--debug" in args[1:]
        sys.exit(_report(ex, debug))
    finally:
        container.shutdown_resources()


if __name__ == "__main__":
    execute_command(*sys.argv)
