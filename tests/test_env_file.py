import os
from unittest import mock

import pytest

from cloudinit.env_file import EnvFile, merge_env_contents, write_env_file
from cloudinit.file import File

BASE = "# a file\nFOO=base\n\nBAR= hi there\n"
BASE_NO_NEWLINE = "# a file\nFOO=base\n\nBAR= hi there"
BASE_DOS = "# a file\r\nFOO=base\r\n\r\nBAR= hi there\r\n"
EXPECT_UPDATE = "# a file\nFOO=test\n\nBAR= hi there\nNEW=a value\n"
EXPECT_CREATE = "FOO=test\nNEW=a value\n"

VALUE_UPDATE = {"FOO": "test", "NEW": "a value"}
VALUE_NOOP = {"FOO": "base"}
VALUE_EMPTY: dict = {}
VALUE_INVALID = {"FOO-X": "test"}

NAME = "foo.conf"


def _write_base(directory, content):
    full_path = directory / NAME
    full_path.write_bytes(content.encode())
    return full_path


def _env_file(values):
    return EnvFile(file=File(path=NAME), vars=dict(values))


@pytest.mark.parametrize("base", [BASE, BASE_NO_NEWLINE, BASE_DOS])
def test_update_replaces_file(tmp_path, base):
    full_path = _write_base(tmp_path, base)
    old_inode = os.stat(full_path).st_ino

    write_env_file(_env_file(VALUE_UPDATE), str(tmp_path))

    assert full_path.read_bytes().decode() == EXPECT_UPDATE
    assert os.stat(full_path).st_ino != old_inode


def test_create(tmp_path):
    write_env_file(_env_file(VALUE_UPDATE), str(tmp_path))
    assert (tmp_path / NAME).read_bytes().decode() == EXPECT_CREATE


def test_noop_leaves_file_untouched(tmp_path):
    full_path = _write_base(tmp_path, BASE)
    old_inode = os.stat(full_path).st_ino

    write_env_file(_env_file(VALUE_NOOP), str(tmp_path))

    assert full_path.read_bytes().decode() == BASE
    assert os.stat(full_path).st_ino == old_inode


def test_dos2unix_rewrites_file(tmp_path):
    full_path = _write_base(tmp_path, BASE_DOS)
    old_inode = os.stat(full_path).st_ino

    write_env_file(_env_file(VALUE_NOOP), str(tmp_path))

    assert full_path.read_bytes().decode() == BASE
    assert os.stat(full_path).st_ino != old_inode


def test_empty_vars_do_not_touch_file(tmp_path):
    full_path = _write_base(tmp_path, BASE_DOS)
    old_inode = os.stat(full_path).st_ino

    write_env_file(_env_file(VALUE_EMPTY), str(tmp_path))

    assert full_path.read_bytes().decode() == BASE_DOS
    assert os.stat(full_path).st_ino == old_inode


def test_empty_vars_do_not_create_file(tmp_path):
    write_env_file(_env_file(VALUE_EMPTY), str(tmp_path))
    assert not (tmp_path / NAME).exists()


def test_permission_failure(tmp_path):
    _write_base(tmp_path, BASE)
    with mock.patch("builtins.open", side_effect=PermissionError(13, "Permission denied")):
        with pytest.raises(PermissionError):
            write_env_file(_env_file(VALUE_UPDATE), str(tmp_path))


def test_invalid_name(tmp_path):
    with pytest.raises(ValueError, match=r"^Invalid name"):
        write_env_file(_env_file(VALUE_INVALID), str(tmp_path))
    assert not (tmp_path / NAME).exists()


def test_key_with_trailing_newline_is_invalid(tmp_path):
    with pytest.raises(ValueError, match=r"^Invalid name"):
        write_env_file(_env_file({"FOO\n": "x"}), str(tmp_path))


def test_merge_into_empty():
    assert merge_env_contents(b"", {"B": "2", "A": "1"}) == b"A=1\nB=2\n"


def test_merge_does_not_mutate_pending():
    pending = {"FOO": "test"}
    result = merge_env_contents(BASE.encode(), pending)
    assert result == b"# a file\nFOO=test\n\nBAR= hi there\n"
    assert pending == {"FOO": "test"}


def test_merge_preserves_unknown_lines():
    old = b"# comment\nnot a var line\nX=1\n"
    assert merge_env_contents(old, {"X": "2"}) == b"# comment\nnot a var line\nX=2\n"