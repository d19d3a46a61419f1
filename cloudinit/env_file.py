"""Updating ``KEY=value`` environment files in place."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Mapping

from .file import File, _join, write_file

# Only sh compatible identifiers are allowed as keys.
_VALID_KEY = re.compile(r"[a-zA-Z0-9_]+")

# Match each line, optionally capturing a valid identifier, dropping DOS line endings.
_LINE_LEXER = re.compile(rb"(?m)^((?:([a-zA-Z0-9_]+)=)?.*?)\r?\n")


@dataclass
class EnvFile:
    """Variables to set in the environment file described by ``file``.

    The content of ``file`` is ignored; it is replaced by the merged result.
    """

    file: File
    vars: dict[str, str] = field(default_factory=dict)


def merge_env_contents(old: bytes, pending: Mapping[str, str]) -> bytes:
    """Apply new values to existing contents.

    Existing ordering and lines that are not understood are preserved; values
    for keys not already present are appended, sorted by key.
    """
    remaining = dict(pending)
    if old and not old.endswith(b"\n"):
        old += b"\n"

    out = bytearray()
    for match in _LINE_LEXER.finditer(old):
        key = (match.group(2) or b"").decode()
        if key in remaining:
            out += f"{key}={remaining.pop(key)}\n".encode()
        else:
            out += match.group(1) + b"\n"

    for key in sorted(remaining):
        out += f"{key}={remaining[key]}\n".encode()
    return bytes(out)


def write_env_file(env_file: EnvFile, root: str) -> None:
    """Merge the variables into the file below root, rewriting it only if it changes."""
    for key in env_file.vars:
        if not _VALID_KEY.fullmatch(key):
            raise ValueError(f"Invalid name {json.dumps(key)} for {env_file.file.path}")

    if not env_file.vars:
        return

    try:
        with open(_join(root, env_file.file.path), "rb") as handle:
            old_content = handle.read()
    except FileNotFoundError:
        old_content = b""

    new_content = merge_env_contents(old_content, env_file.vars)
    if new_content == old_content:
        return

    env_file.file.content = new_content.decode()
    write_file(env_file.file, root)