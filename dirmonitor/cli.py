import json
import logging

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from dirmonitor import config
from dirmonitor import logger as dm_logger
from dirmonitor.events import ALL, EventKind
from dirmonitor.exceptions import InvalidDirectory
from dirmonitor.monitor import Monitor

EVENT_CHOICES = [kind.value for kind in EventKind] + [ALL]

EVENT_STYLES = {
    EventKind.CREATED: "green",
    EventKind.DELETED: "red",
    EventKind.UPDATED: "yellow",
}


@click.group()
@click.option("--config", "-c", "config_path", default=None, help="Path to configuration TOML or YAML file.")
@click.option("--debug", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx, config_path, debug):
    """
    DirMonitor CLI: Report files created, updated or deleted under a directory.
    """
    try:
        cfg = config.load_config(config_path)
    except Exception as e:
        click.echo(f"Error loading configuration: {e}")
        ctx.abort()
    if debug:
        cfg["logging"]["level"] = "DEBUG"
    ctx.obj = {"config": cfg, "config_path": config_path, "debug": debug}


def build_monitor(cfg, directory, interval=None):
    """Create a Monitor from the configuration, turning a bad root into a usage error."""
    log_cfg = cfg.get("logging", {})
    dm_logger.setup_logger(
        "dirmonitor",
        log_cfg.get("log_dir"),
        level=log_cfg.get("level", "INFO"),
        console=True,
    )

    directory = config.resolve_directory(directory, cfg)
    if not directory:
        raise click.UsageError(
            f"No directory given; pass one or set {config.ENV_DIRECTORY_VAR}."
        )

    monitor_cfg = cfg.get("monitor", {})
    if interval is None:
        interval = monitor_cfg.get("interval", 1.0)
    try:
        return Monitor(
            directory,
            interval=float(interval),
            isolate_listeners=bool(monitor_cfg.get("isolate_listeners", False)),
        )
    except InvalidDirectory as e:
        raise click.BadParameter(str(e), param_hint="DIRECTORY")


@main.command()
@click.pass_context
def show_config(ctx):
    """
    Show the loaded configuration.
    """
    cfg = ctx.obj.get("config")
    click.echo(json.dumps(cfg, indent=2))


@main.command()
@click.argument("directory", required=False)
@click.option("--interval", "-i", type=float, default=None, help="Seconds between scan passes.")
@click.option("--event", "-e", "events", multiple=True, type=click.Choice(EVENT_CHOICES, case_sensitive=False), help="Event kinds to report (default: all).")
@click.option("--json", "as_json", is_flag=True, help="Print events as JSON lines.")
@click.pass_context
def watch(ctx, directory, interval, events, as_json):
    """
    Watch DIRECTORY and print every change until interrupted.
    """
    cfg = ctx.obj.get("config")
    m = build_monitor(cfg, directory, interval)
    console = Console()

    def print_event(event):
        if as_json:
            click.echo(json.dumps(event.to_dict()))
        else:
            style = EVENT_STYLES[event.kind]
            console.print(f"[{style}]{event.kind.value}[/{style}] {escape(event.file_path)}", highlight=False, soft_wrap=True)

    for kind in events or (ALL,):
        m.register(kind, print_event)

    click.echo(f"Watching {m.directory} (Ctrl-C to stop)...", err=True)
    try:
        m.start()
    except KeyboardInterrupt:
        m.stop()
    logging.getLogger("dirmonitor").info("Stopped watching %s", m.directory)


@main.command()
@click.argument("directory", required=False)
@click.pass_context
def snapshot(ctx, directory):
    """
    Record one snapshot of DIRECTORY and print each file's fingerprint.
    """
    cfg = ctx.obj.get("config")
    m = build_monitor(cfg, directory)
    m.initialize()

    table = Table(title=f"Snapshot of {m.directory}")
    table.add_column("File", style="cyan")
    table.add_column("Fingerprint", style="magenta", no_wrap=True)
    for path in sorted(m.snapshot):
        table.add_row(escape(path), m.snapshot[path] or "<unreadable>")
    Console().print(table)


if __name__ == "__main__":
    main()
