"""
Command-line interface for procsnap.

Provides commands for taking a snapshot and inspecting the configuration.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from procsnap import __version__
from procsnap.collectors import COLLECTORS, list_collectors
from procsnap.config import Config
from procsnap.core import ProcSnap
from procsnap.errors import SourceUnavailable
from procsnap.formatting import bytes_to_human
from procsnap.models import Snapshot

console = Console()


def setup_logging(level: str, log_file: str | None = None) -> None:
    """Configure logging with rich handler."""
    handlers: list[logging.Handler] = [RichHandler(console=console, rich_tracebacks=True)]
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=handlers,
    )


@click.group()
@click.version_option(version=__version__, prog_name="procsnap")
@click.option(
    "-c",
    "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file",
)
@click.option(
    "-V",
    "--verbose",
    is_flag=True,
    help="Enable verbose output",
)
@click.pass_context
def main(ctx: click.Context, config: Path | None, verbose: bool) -> None:
    """
    procsnap - Hardware and OS snapshots for Linux.

    Reads /proc, /sys and the PCI/USB id databases into one snapshot.
    """
    ctx.ensure_object(dict)

    # Load configuration
    if config:
        ctx.obj["config"] = Config.load(config)
    else:
        ctx.obj["config"] = Config.load()

    # Set log level
    log_level = "DEBUG" if verbose else ctx.obj["config"].log_level
    setup_logging(log_level, ctx.obj["config"].log_file)
    ctx.obj["verbose"] = verbose


@main.command()
@click.option(
    "--subsystem",
    "-S",
    "subsystems",
    multiple=True,
    type=click.Choice(list_collectors()),
    help="Specific subsystems to collect (can be repeated)",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    help="Write output to file instead of stdout",
)
@click.option(
    "--format",
    "-f",
    type=click.Choice(["json", "pretty"]),
    default="pretty",
    help="Output format",
)
@click.option(
    "--root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Read /proc and /sys below this directory",
)
@click.pass_context
def collect(
    ctx: click.Context,
    subsystems: tuple[str, ...],
    output: Path | None,
    format: str,
    root: Path | None,
) -> None:
    """
    Take a snapshot of this host.

    By default, collects every enabled subsystem. Use --subsystem to
    narrow the run.
    """
    config: Config = ctx.obj["config"]
    if root:
        config.root = str(root)

    try:
        snapshot = ProcSnap(config).collect(list(subsystems) or None)
    except SourceUnavailable as e:
        console.print(f"[red]Error: {escape(str(e))}[/]")
        sys.exit(1)

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(snapshot.to_json())
        console.print(f"[dim]Snapshot saved to: {output}[/]")
    elif format == "json":
        console.print_json(snapshot.to_json())
    else:
        _display_snapshot(snapshot)


def _display_snapshot(snapshot: Snapshot) -> None:
    """Display the snapshot as a set of tables."""
    console.print()
    console.print(
        Panel.fit(
            f"[bold blue]{escape(snapshot.hostname or 'procsnap')}[/]\n"
            f"Kernel {snapshot.kernel or '-'}"
            + (f"  |  up {snapshot.uptime.text}" if snapshot.uptime else ""),
            border_style="blue",
        )
    )

    if snapshot.memory:
        mem = snapshot.memory
        table = Table(title="Memory", show_header=True)
        table.add_column("Total", justify="right")
        table.add_column("Free", justify="right")
        table.add_column("Swap total", justify="right")
        table.add_column("Swap free", justify="right")
        table.add_row(
            bytes_to_human(mem.total),
            bytes_to_human(mem.free),
            bytes_to_human(mem.swap_total),
            bytes_to_human(mem.swap_free),
        )
        console.print(table)

    if snapshot.cpus:
        table = Table(title="CPUs", show_header=True)
        table.add_column("#", justify="right", style="dim")
        table.add_column("Vendor", style="cyan")
        table.add_column("Model")
        table.add_column("MHz", justify="right")
        for i, cpu in enumerate(snapshot.cpus):
            mhz = "-" if cpu.mhz is None else f"{cpu.mhz:.0f}"
            table.add_row(str(i), escape(cpu.vendor), escape(cpu.model), mhz)
        console.print(table)

    if snapshot.mounts:
        table = Table(title="Mounts", show_header=True)
        table.add_column("Device", style="cyan")
        table.add_column("Mount")
        table.add_column("Type")
        table.add_column("Size", justify="right")
        table.add_column("Used", justify="right")
        for mount in snapshot.mounts:
            used = "-" if mount.used_percent is None else f"{mount.used_percent:.0f}%"
            table.add_row(
                escape(mount.device),
                escape(mount.mount),
                mount.type,
                bytes_to_human(mount.size),
                used,
            )
        console.print(table)

    if snapshot.devices:
        table = Table(title="Devices", show_header=True)
        table.add_column("Bus", style="cyan")
        table.add_column("Vendor")
        table.add_column("Device")
        for device in snapshot.devices:
            table.add_row(device.bus, escape(device.vendor), escape(device.device))
        console.print(table)

    if snapshot.raid:
        table = Table(title="RAID", show_header=True)
        table.add_column("Array", style="cyan")
        table.add_column("Level")
        table.add_column("Status")
        table.add_column("Drives")
        table.add_column("Chart")
        for array in snapshot.raid:
            drives = " ".join(
                d.drive if d.state == "normal" else f"{d.drive} ({d.state})" for d in array.drives
            )
            chart = f"[red]{array.chart}[/]" if array.degraded else f"[green]{array.chart}[/]"
            table.add_row(array.device, f"raid{array.level}", array.status, drives, chart)
        console.print(table)

    if snapshot.network:
        table = Table(title="Network", show_header=True)
        table.add_column("Interface", style="cyan")
        table.add_column("State")
        table.add_column("Type")
        table.add_column("Received", justify="right")
        table.add_column("Sent", justify="right")
        for iface in snapshot.network:
            table.add_row(
                iface.name,
                iface.state,
                iface.type,
                bytes_to_human(iface.received.bytes),
                bytes_to_human(iface.sent.bytes),
            )
        console.print(table)

    if snapshot.temps:
        table = Table(title="Temperatures", show_header=True)
        table.add_column("Source", style="cyan")
        table.add_column("Name")
        table.add_column("Value", justify="right")
        for reading in snapshot.temps:
            label = escape(reading.name or reading.path)
            table.add_row(reading.source, label, f"{reading.temp:g} {reading.unit}")
        console.print(table)

    for battery in snapshot.batteries:
        console.print(
            f"[bold]Battery[/] {escape(battery.device)}: {battery.percentage} ({battery.state})"
        )

    if snapshot.diagnostics:
        console.print()
        console.print("[yellow]Diagnostics:[/]")
        for diagnostic in snapshot.diagnostics:
            console.print(f"  • {escape(str(diagnostic))}")


@main.command("list")
@click.pass_context
def list_available(ctx: click.Context) -> None:
    """List all subsystems and whether they are enabled."""
    config: Config = ctx.obj["config"]

    table = Table(title="Available Subsystems", show_header=True)
    table.add_column("Name", style="cyan")
    table.add_column("Description")
    table.add_column("Enabled", justify="center")

    for name, cls in COLLECTORS.items():
        table.add_row(name, cls.description, "[green]✓[/]" if config.shows(name) else "[dim]-[/]")

    console.print()
    console.print(table)


@main.command("version", short_help="Display version information")
def version() -> None:
    """Display version information for procsnap."""
    console.print()
    console.print(
        Panel.fit(
            f"[bold blue]procsnap[/]\nVersion: [cyan]{__version__}[/]",
            border_style="blue",
            title="Version Information",
        )
    )
    console.print()

    table = Table(show_header=False, box=None)
    table.add_column("Component", style="dim", width=20)
    table.add_column("Version", style="cyan")

    table.add_row("procsnap", __version__)
    table.add_row("Python", f"{sys.version.split()[0]}")

    console.print(table)
    console.print()


@main.command()
@click.argument("output_path", type=click.Path(path_type=Path))
def init_config(output_path: Path) -> None:
    """
    Generate a sample configuration file.

    Creates a YAML configuration file with all available options
    and helpful comments.
    """
    sample_config = """# procsnap configuration

# Directory holding proc/ and sys/ (use another root to read a captured tree)
root: /

# Run subsystems on this many threads (1 = sequential)
workers: 1

# Subsystems to collect
show:
  os: true
  kernel: true
  hostname: true
  uptime: true
  load: true
  ram: true
  cpu: true
  hd: true
  mounts: true
  devices: true
  temps: true
  battery: true
  raid: true
  network: true
  wifi: true

# Mounts to leave out
hide:
  storage_devices: []
  filesystems: [proc, sysfs, devpts, cgroup, cgroup2, securityfs, debugfs, tracefs]

# Vendor databases used to name PCI and USB devices
paths:
  pci_ids_path: /usr/share/misc/pci.ids
  usb_ids_path: /usr/share/misc/usb.ids

raid:
  mdadm: true

# External temperature sources
temps:
  hddtemp: false
  mbmon: false
  sensord: false

hddtemp:
  # daemon or syslog
  mode: daemon
  host: 127.0.0.1
  port: 7634
  log: /var/log/syslog

mbmon:
  host: 127.0.0.1
  port: 411

sensord:
  log: /var/log/messages

# Seconds to wait on sensor daemons
daemon_timeout: 5.0

logging:
  # DEBUG, INFO, WARNING, ERROR
  log_level: INFO
  log_file: null
"""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(sample_config)
    console.print(f"[green]✓ Configuration file created: {output_path}[/]")


if __name__ == "__main__":
    main()
