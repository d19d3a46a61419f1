"""Generating ``/etc/hosts``."""

from __future__ import annotations

import socket
from dataclasses import dataclass

from .file import File

DEFAULT_IPV4_ADDRESS = "127.0.0.1"


@dataclass
class EtcHosts:
    """The ``manage_etc_hosts`` setting; only "localhost" is supported."""

    etc_hosts: str = ""

    def _generate(self) -> str:
        if self.etc_hosts != "localhost":
            raise ValueError("Invalid option to manage_etc_hosts")
        return f"{DEFAULT_IPV4_ADDRESS} {socket.gethostname()}\n"

    def file(self) -> File | None:
        """Return the hosts file to write, or None if the setting is empty."""
        if self.etc_hosts == "":
            return None
        return File(
            path="etc/hosts",
            raw_file_permissions="0644",
            content=self._generate(),
        )