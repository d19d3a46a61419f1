"""Creating users and setting their passwords."""

from __future__ import annotations

import logging
import pwd
import subprocess
from dataclasses import dataclass, field

from .oem import _quote

log = logging.getLogger(__name__)


@dataclass
class User:
    """A user account to create."""

    name: str = ""
    password_hash: str = ""
    ssh_authorized_keys: list[str] = field(default_factory=list)
    gecos: str = ""
    homedir: str = ""
    no_create_home: bool = False
    primary_group: str = ""
    groups: list[str] = field(default_factory=list)
    no_user_group: bool = False
    system: bool = False
    no_log_init: bool = False
    shell: str = ""


def user_exists(user: User) -> bool:
    """Return whether an account with the user's name exists."""
    try:
        pwd.getpwnam(user.name)
    except KeyError:
        return False
    return True


def _adduser_args(user: User) -> list[str]:
    args = []
    if user.gecos:
        args += ["-g", _quote(user.gecos)]
    if user.homedir:
        args += ["-h", user.homedir]
    if user.no_create_home:
        args.append("-H")
    if user.primary_group:
        args += ["-G", user.primary_group]
    if user.system:
        args.append("-S")
    if user.shell:
        args += ["-s", user.shell]
    args += ["-D", user.name]
    return args


def _adduser(args: list[str]) -> Exception | None:
    """Run adduser, logging and returning any failure instead of raising."""
    command = ["adduser", *args]
    try:
        result = subprocess.run(command, stdout=subprocess.PIPE, stderr=subprocess.STDOUT)
    except OSError as exc:
        log.error("Command 'adduser %s' failed: %s", " ".join(args), exc)
        return exc
    if result.returncode != 0:
        log.error(
            "Command 'adduser %s' failed with status %d\n%s",
            " ".join(args),
            result.returncode,
            result.stdout,
        )
        return subprocess.CalledProcessError(result.returncode, command, result.stdout)
    return None


def create_user(user: User) -> None:
    """Create the account, add it to its groups and set its password.

    Failures to join groups or set the password are logged; a failure to
    create the account is raised after the remaining steps have been tried.
    """
    error = _adduser(_adduser_args(user))
    for group in user.groups:
        _adduser([user.name, group])
    if user.password_hash:
        try:
            set_user_password(user.name, user.password_hash)
        except (OSError, subprocess.CalledProcessError) as exc:
            log.error("Error setting password for %s: %s", user.name, exc)
    if error is not None:
        raise error


def set_user_password(user: str, password_hash: str) -> None:
    """Set an already hashed password for the user with chpasswd."""
    subprocess.run(
        ["/usr/sbin/chpasswd", "-e"],
        input=f"{user}:{password_hash}".encode(),
        check=True,
    )