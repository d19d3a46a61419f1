"""Generating update configuration and the units that act on it."""

from __future__ import annotations

import dataclasses
import re
from dataclasses import dataclass, field
from typing import Callable, TextIO

from .file import File
from .unit import Unit

_LOCKSMITH_UNIT = "locksmithd.service"
_UPDATE_ENGINE_UNIT = "update-engine.service"

_ETC_UPDATE = "/etc/coreos/update.conf"
_USR_UPDATE = "/usr/share/coreos/update.conf"


class InvalidValueError(ValueError):
    """A configuration value does not match the pattern it must follow."""

    def __init__(self, value: str, field: str, valid: str) -> None:
        self.value = value
        self.field = field
        self.valid = valid
        super().__init__(
            f"invalid value {value!r} for option {field!r} (valid options: {valid!r})"
        )


@dataclass
class UpdateConfig:
    """Update settings; each field names its key in update.conf."""

    reboot_strategy: str = field(
        default="",
        metadata={"env": "REBOOT_STRATEGY", "valid": "^(best-effort|etcd-lock|reboot|off)$"},
    )
    group: str = field(default="", metadata={"env": "GROUP"})
    server: str = field(default="", metadata={"env": "SERVER"})

    def validate(self) -> None:
        """Raise InvalidValueError for the first set value that is not allowed."""
        for item in dataclasses.fields(self):
            pattern = item.metadata.get("valid")
            value = getattr(self, item.name)
            if pattern and value and not re.search(pattern, value):
                raise InvalidValueError(value, item.name, pattern)

    def _is_empty(self) -> bool:
        return all(not getattr(self, item.name) for item in dataclasses.fields(self))


def default_read_config() -> TextIO:
    """Open the existing update.conf, falling back to the shipped default."""
    try:
        return open(_ETC_UPDATE, encoding="utf-8")
    except FileNotFoundError:
        return open(_USR_UPDATE, encoding="utf-8")


@dataclass
class Update:
    """Update configuration and the source of the existing update.conf."""

    config: UpdateConfig = field(default_factory=UpdateConfig)
    read_config: Callable[[], TextIO] = default_read_config

    def file(self) -> File | None:
        """Return a rewritten update.conf, or None if no option is configured."""
        if self.config._is_empty():
            return None
        self.config.validate()

        subs = {}
        for item in dataclasses.fields(self.config):
            value = getattr(self.config, item.name)
            if value:
                env = item.metadata["env"]
                subs[env] = f"{env}={value}"

        lines = []
        with self.read_config() as conf:
            for raw in conf:
                line = raw[:-1] if raw.endswith("\n") else raw
                if line.endswith("\r"):
                    line = line[:-1]
                for env in sorted(subs):
                    if line.startswith(env):
                        line = subs.pop(env)
                        break
                lines.append(line)

        lines.extend(subs[key] for key in sorted(subs))
        return File(
            path="etc/coreos/update.conf",
            raw_file_permissions="0644",
            content="".join(f"{line}\n" for line in lines),
        )

    def units(self) -> list[Unit]:
        """Return the locksmith and update-engine units the settings call for."""
        units = []
        if self.config.reboot_strategy:
            locksmith = Unit(name=_LOCKSMITH_UNIT, command="restart", runtime=True)
            if self.config.reboot_strategy == "off":
                locksmith.command = "stop"
                locksmith.mask = True
            units.append(locksmith)

        if self.config.group or self.config.server:
            units.append(Unit(name=_UPDATE_ENGINE_UNIT, command="restart"))
        return units