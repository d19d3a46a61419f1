import os
import pwd
import subprocess
from unittest import mock

import pytest

from cloudinit.user import User, create_user, set_user_password, user_exists


def ok():
    return subprocess.CompletedProcess([], 0, stdout=b"")


def failed():
    return subprocess.CompletedProcess([], 1, stdout=b"boom")


def test_user_exists_current_user():
    name = pwd.getpwuid(os.getuid()).pw_name
    assert user_exists(User(name=name)) is True


def test_user_exists_missing_user():
    assert user_exists(User(name="no-such-user-zzqx")) is False


def test_create_user_arguments():
    user = User(
        name="jane",
        gecos="Jane Doe",
        homedir="/home/jane",
        no_create_home=True,
        primary_group="staff",
        system=True,
        shell="/bin/ash",
    )
    with mock.patch("cloudinit.user.subprocess.run", return_value=ok()) as run:
        result = create_user(user)
    assert result is None
    assert run.call_count == 1
    assert run.call_args.args[0] == [
        "adduser",
        "-g",
        '"Jane Doe"',
        "-h",
        "/home/jane",
        "-H",
        "-G",
        "staff",
        "-S",
        "-s",
        "/bin/ash",
        "-D",
        "jane",
    ]


def test_create_user_groups_and_password():
    password_hash = "placeholder"
    user = User(name="jane", groups=["wheel", "docker"], password_hash=password_hash)
    with mock.patch("cloudinit.user.subprocess.run", return_value=ok()) as run:
        result = create_user(user)
    assert result is None
    assert run.call_count == 4
    calls = [call.args[0] for call in run.call_args_list]
    assert calls[0] == ["adduser", "-D", "jane"]
    assert calls[1] == ["adduser", "jane", "wheel"]
    assert calls[2] == ["adduser", "jane", "docker"]
    assert calls[3] == ["/usr/sbin/chpasswd", "-e"]
    assert run.call_args_list[3].kwargs["input"] == b"jane:placeholder"


def test_create_user_failure_raises_after_groups():
    user = User(name="jane", groups=["wheel"])
    with mock.patch(
        "cloudinit.user.subprocess.run", side_effect=[failed(), ok()]
    ) as run:
        with pytest.raises(subprocess.CalledProcessError):
            create_user(user)
    assert run.call_count == 2


def test_set_user_password_failure_raises():
    with mock.patch(
        "cloudinit.user.subprocess.run",
        side_effect=subprocess.CalledProcessError(1, ["/usr/sbin/chpasswd"]),
    ):
        with pytest.raises(subprocess.CalledProcessError):
            set_user_password("jane", "placeholder")