"""Systemd units and where their files belong."""

from __future__ import annotations

from dataclasses import dataclass, field

from .file import _join

_NETWORK_TYPES = frozenset({"network", "netdev", "link"})


@dataclass
class UnitDropIn:
    """A drop-in configuration fragment for a unit."""

    name: str = ""
    content: str = ""


@dataclass
class Unit:
    """A systemd unit with its content, command and drop-ins."""

    name: str = ""
    mask: bool = False
    enable: bool = False
    runtime: bool = False
    content: str = ""
    command: str = ""
    drop_ins: list[UnitDropIn] = field(default_factory=list)

    def type(self) -> str:
        """Return the extension of the unit name, without leading dots."""
        base = self.name.rsplit("/", 1)[-1]
        dot = base.rfind(".")
        if dot < 0:
            return ""
        return base[dot:].lstrip(".")

    def group(self) -> str:
        """Return "network" for network units and "system" for the rest."""
        return "network" if self.type() in _NETWORK_TYPES else "system"

    def destination(self, root: str) -> str:
        """Return the path of the unit file below root."""
        return _join(self._prefix(root), self.name)

    def drop_in_destination(self, root: str, drop_in: UnitDropIn) -> str:
        """Return the path of the given drop-in below root."""
        return _join(self._prefix(root), f"{self.name}.d", drop_in.name)

    def _prefix(self, root: str) -> str:
        directory = "run" if self.runtime else "etc"
        return _join(root, directory, "systemd", self.group())