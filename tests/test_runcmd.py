import os

import pytest

from cloudinit.runcmd import run_script


def test_run_script_returns_output():
    assert run_script("echo hello") == "hello\n"


def test_run_script_combines_stderr():
    output = run_script("echo out\necho err 1>&2\n")
    assert "out\n" in output
    assert "err\n" in output


def test_run_script_removes_temporary_file():
    script_path = run_script('echo "$0"').strip()
    assert os.path.basename(script_path).startswith("cloud-init-script")
    assert not os.path.exists(script_path)


def test_run_script_failure_raises():
    with pytest.raises(RuntimeError, match="error executing runcmd script"):
        run_script("exit 3")