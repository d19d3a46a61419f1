"""Running user-supplied shell scripts."""

from __future__ import annotations

import logging
import os
import subprocess
import tempfile

log = logging.getLogger(__name__)


def run_script(script: str) -> str:
    """Run the script with /bin/sh and return its combined output."""
    try:
        fd, script_path = tempfile.mkstemp(prefix="cloud-init-script")
    except OSError as exc:
        raise RuntimeError(f"could not create runcmd script: {exc}") from exc
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(script)
        try:
            result = subprocess.run(
                ["/bin/sh", script_path],
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                check=True,
            )
        except (OSError, subprocess.CalledProcessError) as exc:
            raise RuntimeError(f"error executing runcmd script: {exc}") from exc
    finally:
        os.remove(script_path)

    output = result.stdout.decode(errors="replace")
    log.info("Successfully ran runcmd script, output was %s", output)
    return output