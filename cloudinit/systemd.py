"""Placing, masking and controlling systemd units."""

from __future__ import annotations

import logging
import os
import posixpath
import socket
import stat
import subprocess
from dataclasses import dataclass

from .file import File, _join, write_file
from .unit import Unit, UnitDropIn

log = logging.getLogger(__name__)

# Placed on images without a real machine id; never a true machine id.
_FAKE_MACHINE_ID = "42000000000000000000000000000042"

_UNIT_COMMANDS = frozenset(
    {
        "start",
        "stop",
        "restart",
        "reload",
        "try-restart",
        "reload-or-restart",
        "reload-or-try-restart",
    }
)


def _run(args: list[str]) -> str:
    result = subprocess.run(args, check=True, capture_output=True, text=True)
    return result.stdout.strip()


@dataclass
class SystemdUnitManager:
    """Manages unit files below ``root`` and controls units through systemctl."""

    root: str = ""

    def place_unit(self, unit: Unit) -> None:
        """Write the unit file at its destination, creating directories as needed."""
        file = File(
            path=unit.destination(self.root),
            content=unit.content,
            raw_file_permissions="0644",
        )
        write_file(file, "/")

    def place_unit_drop_in(self, unit: Unit, drop_in: UnitDropIn) -> None:
        """Write a drop-in file for the unit, creating directories as needed."""
        file = File(
            path=unit.drop_in_destination(self.root, drop_in),
            content=drop_in.content,
            raw_file_permissions="0644",
        )
        write_file(file, "/")

    def enable_unit_file(self, unit: Unit) -> None:
        """Enable the unit, at runtime only if the unit is a runtime unit."""
        args = ["systemctl", "enable", "--force"]
        if unit.runtime:
            args.append("--runtime")
        args.append(unit.name)
        _run(args)

    def run_unit_command(self, unit: Unit, command: str) -> str:
        """Run a start/stop/restart style command on the unit and return its output."""
        if command not in _UNIT_COMMANDS:
            raise ValueError(f"Unsupported systemd command {command!r}")
        return _run(["systemctl", "--job-mode=replace", command, unit.name])

    def daemon_reload(self) -> None:
        """Ask systemd to reload its unit files."""
        _run(["systemctl", "daemon-reload"])

    def mask_unit(self, unit: Unit) -> None:
        """Mask the unit by linking its unit file to /dev/null.

        Any existing file at the unit's location is removed first.
        """
        masked = unit.destination(self.root)
        try:
            os.stat(masked)
        except FileNotFoundError:
            os.makedirs(posixpath.dirname(masked), mode=0o755, exist_ok=True)
        else:
            os.remove(masked)
        os.symlink("/dev/null", masked)

    def unmask_unit(self, unit: Unit) -> None:
        """Remove the unit file if it is empty or a link to /dev/null."""
        masked = unit.destination(self.root)
        try:
            masked_or_empty = null_or_empty(masked)
        except FileNotFoundError:
            return
        if not masked_or_empty:
            log.info("%s is not null or empty, refusing to unmask", masked)
            return
        os.remove(masked)


def new_unit_manager(root: str) -> SystemdUnitManager:
    """Return a unit manager working below root."""
    return SystemdUnitManager(root)


def null_or_empty(path: str) -> bool:
    """Return whether path is an empty regular file or resolves to a character device."""
    info = os.stat(path)
    if stat.S_ISREG(info.st_mode) and info.st_size <= 0:
        return True
    return stat.S_ISCHR(info.st_mode)


def execute_script(script_path: str) -> str:
    """Run the script in a transient unit and return the unit's name."""
    name = f"coreos-cloudinit-{posixpath.basename(script_path)}.service"
    log.info("Creating transient systemd unit '%s'", name)
    _run(
        [
            "systemd-run",
            f"--unit={name}",
            "--description=Unit generated and executed by coreos-cloudinit on behalf of user",
            "/bin/bash",
            script_path,
        ]
    )
    return name


def set_hostname(hostname: str) -> None:
    """Set the system hostname."""
    log.info("Setting hostname to %s", hostname)
    subprocess.run(["hostname", hostname], check=True)


def hostname() -> str:
    """Return the system hostname."""
    return socket.gethostname()


def machine_id(root: str) -> str:
    """Return the machine id below root, or "" if missing or a placeholder."""
    try:
        with open(_join(root, "etc", "machine-id"), encoding="utf-8") as handle:
            contents = handle.read()
    except OSError:
        contents = ""
    ident = contents.strip()
    return "" if ident == _FAKE_MACHINE_ID else ident