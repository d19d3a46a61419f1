"""Generating the ``/etc/oem-release`` file."""

from __future__ import annotations

from dataclasses import dataclass

from .file import File

_ESCAPES = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    "\\": "\\\\",
    '"': '\\"',
}


def _quote(text: str) -> str:
    """Return text as a double-quoted string literal with escapes."""
    parts = []
    for char in text:
        if char in _ESCAPES:
            parts.append(_ESCAPES[char])
        elif char.isprintable():
            parts.append(char)
        elif ord(char) < 0x80:
            parts.append(f"\\x{ord(char):02x}")
        elif ord(char) < 0x10000:
            parts.append(f"\\u{ord(char):04x}")
        else:
            parts.append(f"\\U{ord(char):08x}")
    return '"' + "".join(parts) + '"'


@dataclass
class OEM:
    """Identification of the OEM that provided the image."""

    id: str = ""
    name: str = ""
    version_id: str = ""
    home_url: str = ""
    bug_report_url: str = ""

    def file(self) -> File | None:
        """Return the oem-release file, or None if no OEM id is set."""
        if self.id == "":
            return None
        content = (
            f"ID={self.id}\n"
            f"VERSION_ID={self.version_id}\n"
            f"NAME={_quote(self.name)}\n"
            f"HOME_URL={_quote(self.home_url)}\n"
            f"BUG_REPORT_URL={_quote(self.bug_report_url)}\n"
        )
        return File(
            path="etc/oem-release",
            raw_file_permissions="0644",
            content=content,
        )