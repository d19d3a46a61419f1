"""Writing configured files to the filesystem."""

from __future__ import annotations

import json
import logging
import os
import posixpath
import re
import subprocess
import tempfile
from dataclasses import dataclass

log = logging.getLogger(__name__)

_DEFAULT_PERMISSIONS = 0o644
_OCTAL = re.compile(r"\+?[0-7]+")


def _join(*elements: str) -> str:
    """Join path elements and clean the result; empty elements are ignored."""
    joined = "/".join(element for element in elements if element)
    if not joined:
        return ""
    cleaned = posixpath.normpath(joined)
    if cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    return cleaned


@dataclass
class File:
    """A file to be written, with its content and attributes."""

    path: str = ""
    content: str = ""
    encoding: str = ""
    owner: str = ""
    raw_file_permissions: str = ""

    def permissions(self) -> int:
        """Return the file mode parsed from the octal permission string."""
        raw = self.raw_file_permissions
        if raw == "":
            return _DEFAULT_PERMISSIONS
        if not _OCTAL.fullmatch(raw) or int(raw, 8) >= 2**31:
            raise ValueError(
                f"Unable to parse file permissions {json.dumps(raw)} as integer"
            )
        return int(raw, 8)


def write_file(file: File, root: str) -> str:
    """Atomically write the file below root and return its full path."""
    if file.encoding:
        raise ValueError(f"Unable to write file with encoding {file.encoding}")

    fullpath = _join(root, file.path)
    directory = posixpath.dirname(fullpath) or "."
    log.info("Writing file to %r", fullpath)

    ensure_directory_exists(directory)
    perm = file.permissions()

    fd, tmp_name = tempfile.mkstemp(dir=directory, prefix="cloudinit-temp")
    try:
        with os.fdopen(fd, "wb") as tmp:
            tmp.write(file.content.encode())
        # Set the mode explicitly so the umask and sticky bits cannot interfere.
        os.chmod(tmp_name, perm)
        if file.owner:
            subprocess.run(["chown", file.owner, tmp_name], check=True)
        os.rename(tmp_name, fullpath)
    except BaseException:
        if os.path.lexists(tmp_name):
            os.remove(tmp_name)
        raise

    log.info("Wrote file to %r", fullpath)
    return fullpath


def ensure_directory_exists(directory: str) -> None:
    """Create the directory if missing; raise if the path is not a directory."""
    try:
        is_dir = os.path.isdir(directory) if os.stat(directory) else False
    except OSError:
        os.makedirs(directory, mode=0o755, exist_ok=True)
        return
    if not is_dir:
        raise NotADirectoryError(f"{directory} is not a directory")