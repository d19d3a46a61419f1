"""Installing SSH public keys into a user's authorized_keys file."""

from __future__ import annotations

import logging
import os
import pwd
from dataclasses import dataclass, field
from typing import Iterable

log = logging.getLogger(__name__)

# Location of the authorized_keys file relative to a home directory.
AUTHORIZED_KEYS_PATH = os.path.join(".ssh", "authorized_keys")

_SSH_DIR_MODE = 0o700
_AUTHORIZED_KEYS_MODE = 0o600


@dataclass
class SSHAuthorizer:
    """Adds keys to the authorized_keys file of one home directory."""

    home_dir: str
    uid: int
    gid: int
    keys: list[str] = field(default_factory=list)

    def setup_ssh_directory(self) -> None:
        """Create the .ssh directory with mode 0700, owned by the user."""
        sshdir = os.path.join(self.home_dir, ".ssh")
        os.makedirs(sshdir, mode=_SSH_DIR_MODE, exist_ok=True)
        os.chmod(sshdir, _SSH_DIR_MODE)
        os.chown(sshdir, self.uid, self.gid)

    def authorize(self, keys: Iterable[str]) -> None:
        """Append the keys to authorized_keys, creating it if needed."""
        try:
            self.setup_ssh_directory()
        except OSError as exc:
            raise RuntimeError(
                f"Could not setup .ssh directory for uid {self.uid}: {exc}"
            ) from exc

        sshfile = os.path.join(self.home_dir, AUTHORIZED_KEYS_PATH)
        try:
            contents = get_authorized_keys_contents(sshfile)
        except RuntimeError as exc:
            raise RuntimeError(
                f"Could not get contents of authorized_keys for uid {self.uid}: {exc}"
            ) from exc

        contents += "\n".join(keys) + "\n"
        try:
            fd = os.open(
                sshfile, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, _AUTHORIZED_KEYS_MODE
            )
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(contents)
        except OSError as exc:
            raise RuntimeError(
                f"Could not write authorized_keys for uid {self.uid}: {exc}"
            ) from exc

        try:
            os.chown(sshfile, self.uid, self.gid)
        except OSError as exc:
            raise RuntimeError(
                f"Error setting rightful owner and group of {sshfile}: {exc}"
            ) from exc


def get_authorized_keys_contents(sshfile: str) -> str:
    """Return the file's contents ending in a newline, or "" if it does not exist."""
    try:
        with open(sshfile, encoding="utf-8") as handle:
            contents = handle.read()
    except FileNotFoundError:
        return ""
    except OSError as exc:
        raise RuntimeError(f"Error reading sshfile {sshfile}: {exc}") from exc
    if contents and not contents.endswith("\n"):
        contents += "\n"
    return contents


def authorize_ssh_keys(username: str, keys: Iterable[str]) -> None:
    """Add the keys to the authorized_keys file of the named user."""
    try:
        entry = pwd.getpwnam(username)
    except KeyError as exc:
        log.error("Could not set authorized keys for %s: unknown user", username)
        raise KeyError(f"unknown user {username!r}") from exc

    authorizer = SSHAuthorizer(home_dir=entry.pw_dir, uid=entry.pw_uid, gid=entry.pw_gid)
    try:
        authorizer.authorize(keys)
    except RuntimeError as exc:
        raise RuntimeError(
            f"Error setting up ssh authorized keys for {username}: {exc}"
        ) from exc