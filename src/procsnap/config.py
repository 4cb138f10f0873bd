"""
Configuration management for procsnap.

Supports configuration via YAML files, environment variables, and programmatic access.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from procsnap.reader import DEFAULT_MAX_BYTES

DEFAULT_CONFIG_PATHS = [
    Path("/etc/procsnap/config.yaml"),
    Path.home() / ".config" / "procsnap" / "config.yaml",
    Path("procsnap-config.yaml"),
]

# Subsystem names, in snapshot order. Each has a matching ``show_<name>`` flag.
SUBSYSTEMS = [
    "os",
    "kernel",
    "hostname",
    "uptime",
    "load",
    "ram",
    "cpu",
    "hd",
    "mounts",
    "devices",
    "temps",
    "battery",
    "raid",
    "network",
    "wifi",
]


@dataclass
class Config:
    """
    Configuration container for procsnap.

    Priority (highest to lowest):
    1. Programmatic values passed to __init__
    2. Environment variables (prefixed with PROCSNAP_)
    3. Config file values
    4. Default values
    """

    # Where /proc and /sys live
    root: str = "/"
    max_read_bytes: int = DEFAULT_MAX_BYTES
    workers: int = 1

    # Subsystem visibility
    show_os: bool = True
    show_kernel: bool = True
    show_hostname: bool = True
    show_uptime: bool = True
    show_load: bool = True
    show_ram: bool = True
    show_cpu: bool = True
    show_hd: bool = True
    show_mounts: bool = True
    show_devices: bool = True
    show_temps: bool = True
    show_battery: bool = True
    show_raid: bool = True
    show_network: bool = True
    show_wifi: bool = True

    # Mount filtering
    hide_storage_devices: list[str] = field(default_factory=list)
    hide_filesystems: list[str] = field(default_factory=list)

    # Vendor databases
    pci_ids_path: str = "/usr/share/misc/pci.ids"
    usb_ids_path: str = "/usr/share/misc/usb.ids"

    # RAID
    raid_mdadm: bool = True

    # Temperature sources
    temps_hddtemp: bool = False
    temps_mbmon: bool = False
    temps_sensord: bool = False
    hddtemp_mode: str = "daemon"
    hddtemp_host: str = "127.0.0.1"
    hddtemp_port: int = 7634
    hddtemp_log: str = "/var/log/syslog"
    mbmon_host: str = "127.0.0.1"
    mbmon_port: int = 411
    sensord_log: str = "/var/log/messages"
    daemon_timeout: float = 5.0

    # Logging
    log_level: str = "INFO"
    log_file: str | None = None

    @classmethod
    def from_file(cls, path: str | Path) -> Config:
        """Load configuration from a YAML file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Config:
        """
        Create config from a dictionary.

        Nested sections are flattened: ``{"show": {"cpu": False}}`` sets
        ``show_cpu``. A nested key that is already a field name on its own
        (``{"logging": {"log_level": "DEBUG"}}``) is used as is.
        """
        known_fields = {f.name for f in fields(cls)}

        flat = {}
        for key, value in data.items():
            if isinstance(value, dict):
                for subkey, subvalue in value.items():
                    prefixed = f"{key}_{subkey}"
                    flat[prefixed if prefixed in known_fields else subkey] = subvalue
            else:
                flat[key] = value

        filtered = {k: v for k, v in flat.items() if k in known_fields}

        return cls(**filtered)

    @classmethod
    def load(cls, config_path: str | Path | None = None) -> Config:
        """
        Load configuration with full resolution order.

        Args:
            config_path: Explicit path to config file. If None, searches
                        default locations.

        Returns:
            Fully resolved Config instance.
        """
        base_config: dict[str, Any] = {}

        # Find and load config file
        if config_path:
            path = Path(config_path)
            if path.exists():
                with open(path) as f:
                    base_config = yaml.safe_load(f) or {}
        else:
            for path in DEFAULT_CONFIG_PATHS:
                if path.exists():
                    with open(path) as f:
                        base_config = yaml.safe_load(f) or {}
                    break

        # Create config from file
        config = cls.from_dict(base_config) if base_config else cls()

        # Override with environment variables
        config._apply_env_overrides()

        return config

    def _apply_env_overrides(self) -> None:
        """Apply environment variable overrides."""
        env_mappings = {
            "PROCSNAP_ROOT": "root",
            "PROCSNAP_WORKERS": "workers",
            "PROCSNAP_PCI_IDS": "pci_ids_path",
            "PROCSNAP_USB_IDS": "usb_ids_path",
            "PROCSNAP_DAEMON_TIMEOUT": "daemon_timeout",
            "PROCSNAP_LOG_LEVEL": "log_level",
            "PROCSNAP_LOG_FILE": "log_file",
        }

        for env_var, attr in env_mappings.items():
            value = os.environ.get(env_var)
            if value is not None:
                # Type coercion
                current = getattr(self, attr)
                if isinstance(current, bool):
                    setattr(self, attr, value.lower() in ("true", "1", "yes"))
                elif isinstance(current, int):
                    setattr(self, attr, int(value))
                elif isinstance(current, float):
                    setattr(self, attr, float(value))
                else:
                    setattr(self, attr, value)

    def shows(self, subsystem: str) -> bool:
        """Whether a subsystem is enabled."""
        return bool(getattr(self, f"show_{subsystem}"))

    def enabled_subsystems(self) -> list[str]:
        """Names of all enabled subsystems, in snapshot order."""
        return [name for name in SUBSYSTEMS if self.shows(name)]

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary."""
        return {
            "root": self.root,
            "max_read_bytes": self.max_read_bytes,
            "workers": self.workers,
            "show": {name: self.shows(name) for name in SUBSYSTEMS},
            "hide": {
                "storage_devices": self.hide_storage_devices,
                "filesystems": self.hide_filesystems,
            },
            "paths": {
                "pci_ids_path": self.pci_ids_path,
                "usb_ids_path": self.usb_ids_path,
            },
            "raid": {
                "mdadm": self.raid_mdadm,
            },
            "temps": {
                "hddtemp": self.temps_hddtemp,
                "mbmon": self.temps_mbmon,
                "sensord": self.temps_sensord,
            },
            "hddtemp": {
                "mode": self.hddtemp_mode,
                "host": self.hddtemp_host,
                "port": self.hddtemp_port,
                "log": self.hddtemp_log,
            },
            "mbmon": {
                "host": self.mbmon_host,
                "port": self.mbmon_port,
            },
            "sensord": {
                "log": self.sensord_log,
            },
            "daemon_timeout": self.daemon_timeout,
            "logging": {
                "log_level": self.log_level,
                "log_file": self.log_file,
            },
        }

    def save(self, path: str | Path) -> None:
        """Save configuration to a YAML file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)
