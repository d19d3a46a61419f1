[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cloudinit"
version = "0.1.0"
description = "Apply cloud-config style settings to a Linux host: files, systemd units, env files, service options, users, SSH keys and update configuration."
requires-python = ">=3.10"
dependencies = []
keywords = ["cloud-config", "provisioning", "systemd", "ssh", "env-file"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Installation/Setup",
    "Topic :: System :: Systems Administration",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["cloudinit"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
