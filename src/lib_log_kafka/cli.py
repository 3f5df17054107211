"""Command line interface for probing a Kafka log topic.

Purpose
-------
Give operators a quick way to check a deployment's Kafka logging settings:
``send`` starts a :class:`KafkaAppender` from the environment, forwards one
record through the stdlib bridge, stops it, and prints the status board.

Contents
--------
* :func:`cli` - Click group with ``--traceback`` and ``--use-dotenv`` toggles.
* ``info``, ``strategies``, ``send`` subcommands.
* :func:`main` - entry point wrapped by ``lib_cli_exit_tools``.
"""

from __future__ import annotations

import logging
import os
from typing import Sequence

import click
import lib_cli_exit_tools
from rich.console import Console
from rich.table import Table

from . import __init__conf__
from . import config as config_module
from .adapters import JsonLayout, KafkaLoggingHandler, PatternLayout
from .application.appender import KafkaAppender
from .application.use_cases.resolve_settings import BOOTSTRAP_SERVERS
from .domain import LogLevel, PartitioningStrategy, StatusBoard, StatusLevel

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}

_STATUS_STYLES = {
    StatusLevel.INFO: "cyan",
    StatusLevel.WARN: "yellow",
    StatusLevel.ERROR: "bold red",
}

logger = logging.getLogger(__name__)


def _render_statuses(board: StatusBoard, console: Console) -> None:
    table = Table(title="Appender status")
    table.add_column("Level", no_wrap=True)
    table.add_column("Name", no_wrap=True)
    table.add_column("Message")
    for status in board:
        style = _STATUS_STYLES[status.level]
        table.add_row(f"[{style}]{status.level.name}[/{style}]", status.name, status.message)
    console.print(table)


@click.group(invoke_without_command=True, context_settings=CLICK_CONTEXT_SETTINGS)
@click.version_option(
    version=__init__conf__.version,
    prog_name=__init__conf__.shell_command,
    message=f"{__init__conf__.shell_command} version {__init__conf__.version}",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors.",
)
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=None,
    help="Load environment variables from the nearest .env before running commands.",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool, use_dotenv: bool | None) -> None:
    """Forward log events to Apache Kafka."""

    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback

    env_toggle = os.getenv(config_module.DOTENV_ENV_VAR)
    if config_module.should_use_dotenv(explicit=use_dotenv, env_value=env_toggle):
        config_module.enable_dotenv()

    if ctx.invoked_subcommand is None:
        __init__conf__.print_info()


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print package metadata."""

    __init__conf__.print_info()


@cli.command("strategies", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_strategies() -> None:
    """List the built-in partitioning strategies."""

    for strategy in PartitioningStrategy:
        click.echo(strategy.value)


@cli.command("send", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("message")
@click.option("--topic", default=None, help="Topic to publish to (overrides LOG_KAFKA_TOPIC).")
@click.option("--bootstrap-servers", default=None, help="Broker list (overrides LOG_KAFKA_PRODUCER_BOOTSTRAP_SERVERS).")
@click.option("--logger", "logger_name", default="lib_log_kafka.probe", show_default=True, help="Logger name of the record.")
@click.option(
    "--level",
    type=click.Choice([level.name for level in LogLevel], case_sensitive=False),
    default="INFO",
    show_default=True,
)
@click.option(
    "--partitioning",
    type=click.Choice([strategy.value for strategy in PartitioningStrategy], case_sensitive=False),
    default=None,
    help="Partition-key strategy (default: round_robin).",
)
@click.option(
    "--preset",
    type=click.Choice(["full", "short", "message", "json"], case_sensitive=False),
    default="full",
    show_default=True,
    help="Layout used to render the payload.",
)
def cli_send(
    message: str,
    topic: str | None,
    bootstrap_servers: str | None,
    logger_name: str,
    level: str,
    partitioning: str | None,
    preset: str,
) -> None:
    """Publish MESSAGE through a freshly started appender."""

    context = config_module.context_from_environ()
    if bootstrap_servers:
        context = context.with_properties(**{BOOTSTRAP_SERVERS: bootstrap_servers})
    layout = JsonLayout() if preset.lower() == "json" else PatternLayout(preset=preset)
    appender = KafkaAppender(
        name="cli",
        context=context,
        topic=topic,
        partitioning_strategy=PartitioningStrategy.from_name(partitioning) if partitioning else None,
        layout=layout,
    )
    console = Console()

    appender.start()
    if not appender.is_started():
        _render_statuses(appender.statuses, console)
        raise click.ClickException("appender did not start; see the status table above")

    handler = KafkaLoggingHandler(appender)
    target = logging.getLogger(logger_name)
    target.addHandler(handler)
    previous_level = target.level
    target.setLevel(logging.DEBUG)
    try:
        target.log(LogLevel.from_name(level).to_python_level(), message)
    finally:
        target.removeHandler(handler)
        target.setLevel(previous_level)
        handler.close()

    _render_statuses(appender.statuses, console)
    logger.debug("probe message published to %s", topic or context.property("topic"))
    click.echo(f"published to {topic or context.property('topic')}")


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI, restoring traceback preferences afterwards."""

    previous_traceback = lib_cli_exit_tools.config.traceback
    previous_force_color = lib_cli_exit_tools.config.traceback_force_color
    try:
        return lib_cli_exit_tools.run_cli(
            cli,
            argv=list(argv) if argv is not None else None,
            prog_name=__init__conf__.shell_command,
        )
    finally:
        lib_cli_exit_tools.config.traceback = previous_traceback
        lib_cli_exit_tools.config.traceback_force_color = previous_force_color


__all__ = ["cli", "main"]
