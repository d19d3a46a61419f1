"""Systemd drop-ins and option files for cluster services.

Each service wraps a configuration dataclass whose fields carry their
environment variable name in the field metadata under ``"env"``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .env import get_env_vars, service_contents
from .file import File
from .unit import Unit, UnitDropIn

_DROP_IN_NAME = "20-cloudinit.conf"


def _drop_in_units(unit_name: str, config: Any) -> list[Unit]:
    return [
        Unit(
            name=unit_name,
            runtime=True,
            drop_ins=[UnitDropIn(name=_DROP_IN_NAME, content=service_contents(config))],
        )
    ]


@dataclass
class Etcd:
    """The etcd service and its configuration."""

    config: Any

    def units(self) -> list[Unit]:
        """Return the etcd unit with a drop-in setting the configured options."""
        return _drop_in_units("etcd.service", self.config)


@dataclass
class Etcd2:
    """The etcd2 service and its configuration."""

    config: Any

    def units(self) -> list[Unit]:
        """Return the etcd2 unit with a drop-in setting the configured options."""
        return _drop_in_units("etcd2.service", self.config)


@dataclass
class Fleet:
    """The fleet service and its configuration."""

    config: Any

    def units(self) -> list[Unit]:
        """Return the fleet unit with a drop-in setting the configured options."""
        return _drop_in_units("fleet.service", self.config)


@dataclass
class Locksmith:
    """The locksmithd service and its configuration."""

    config: Any

    def units(self) -> list[Unit]:
        """Return the locksmithd unit with a drop-in setting the configured options."""
        return _drop_in_units("locksmithd.service", self.config)


@dataclass
class Flannel:
    """The flannel daemon and its configuration."""

    config: Any

    def env_vars(self) -> str:
        """Return the configured options as newline-separated ``KEY=value`` lines."""
        return "\n".join(get_env_vars(self.config))

    def file(self) -> File | None:
        """Return the flannel options file, or None if nothing is configured."""
        content = self.env_vars()
        if content == "":
            return None
        return File(
            path="run/flannel/options.env",
            raw_file_permissions="0644",
            content=content,
        )