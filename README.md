# cloudinit

A library of building blocks for applying cloud-config style settings to a
Linux host. It writes files atomically, places and controls systemd units,
merges `KEY=value` environment files, generates drop-ins and option files
for cluster services, writes `/etc/hosts`, OEM release data and update
configuration, creates users, installs SSH authorized keys and runs shell
scripts. It also has an HTTP client that retries with exponential backoff.

It uses only the Python standard library. Several functions run system
commands (`systemctl`, `systemd-run`, `hostname`, `chown`, `adduser`,
`/usr/sbin/chpasswd`, `/bin/sh`) and most host changes need root.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

### `cloudinit.file`

- `File(path, content, encoding, owner, raw_file_permissions)` describes a
  file to write. `File.permissions()` parses `raw_file_permissions` as an
  octal string (default `0o644`) and raises `ValueError` if it is not one.
- `write_file(file, root)` writes the file below `root` through a temporary
  file in the same directory, sets its mode, runs `chown` when `owner` is
  set, renames it into place and returns the full path. Any non-empty
  `encoding` raises `ValueError`.
- `ensure_directory_exists(directory)` creates a missing directory (mode
  `0755`) and raises `NotADirectoryError` if the path is something else.

### `cloudinit.unit`

- `Unit(name, mask, enable, runtime, content, command, drop_ins)` and
  `UnitDropIn(name, content)`.
- `Unit.type()` is the name's extension; `Unit.group()` is `"network"` for
  `.network`, `.netdev` and `.link` units and `"system"` otherwise.
- `Unit.destination(root)` and `Unit.drop_in_destination(root, drop_in)`
  give paths under `etc/systemd/<group>` (or `run/systemd/<group>` for
  runtime units).

### `cloudinit.systemd`

- `new_unit_manager(root)` returns a `SystemdUnitManager` with
  `place_unit`, `place_unit_drop_in`, `mask_unit` (links the unit file to
  `/dev/null`, replacing any existing file), `unmask_unit` (removes the
  file only if it is empty or a link to `/dev/null`), and, through
  `systemctl`, `enable_unit_file`, `run_unit_command` (`start`, `stop`,
  `restart`, `reload`, `try-restart`, `reload-or-restart`,
  `reload-or-try-restart`; anything else raises `ValueError`) and
  `daemon_reload`.
- `null_or_empty(path)`, `execute_script(script_path)` (runs the script
  with `/bin/bash` in a transient unit via `systemd-run` and returns the
  unit name), `set_hostname(hostname)`, `hostname()` and `machine_id(root)`
  (returns `""` when the file is missing or holds the placeholder id).

### `cloudinit.env` and `cloudinit.services`

Service configuration is a dataclass whose fields carry their environment
variable name in the field metadata under `"env"`. Empty, zero and false
fields are skipped.

- `get_env_vars(config)` returns `KEY=value` strings;
  `service_contents(config)` returns a `[Service]` drop-in of
  `Environment="KEY=value"` lines, or `""`.
- `Etcd`, `Etcd2`, `Fleet` and `Locksmith` wrap such a config;
  `.units()` returns the service unit (`etcd.service`, `etcd2.service`,
  `fleet.service`, `locksmithd.service`) as a runtime unit with a
  `20-cloudinit.conf` drop-in.
- `Flannel(config).env_vars()` returns the variables one per line and
  `.file()` returns a `run/flannel/options.env` `File`, or `None`.

```python
from dataclasses import dataclass, field
from cloudinit.services import Fleet

@dataclass
class FleetConfig:
    public_ip: str = field(default="", metadata={"env": "FLEET_PUBLIC_IP"})

unit = Fleet(FleetConfig(public_ip="12.34.56.78")).units()[0]
print(unit.drop_ins[0].content)
# [Service]
# Environment="FLEET_PUBLIC_IP=12.34.56.78"
```

### `cloudinit.env_file`

- `EnvFile(file, vars)` and `write_env_file(env_file, root)` update an
  existing env file: values of known keys are replaced in place, comments
  and unknown lines are kept, DOS line endings are dropped, and new keys
  are appended sorted. Keys must match `[a-zA-Z0-9_]+` or `ValueError` is
  raised. The file is not touched when nothing changes, and not created
  when there is nothing to set.
- `merge_env_contents(old, pending)` does the merge on bytes.

### `cloudinit.etc_hosts`, `cloudinit.oem`, `cloudinit.update`

- `EtcHosts("localhost").file()` returns an `etc/hosts` `File` mapping
  `127.0.0.1` to the host name; any other non-empty value raises
  `ValueError`, and `""` gives `None`.
- `OEM(id, name, version_id, home_url, bug_report_url).file()` returns an
  `etc/oem-release` `File`, or `None` without an id.
- `UpdateConfig(reboot_strategy, group, server)` with `validate()`, which
  raises `InvalidValueError` for a reboot strategy other than
  `best-effort`, `etcd-lock`, `reboot` or `off`.
  `Update(config, read_config).file()` rewrites the existing update.conf
  (read by `default_read_config()` from `/etc/coreos/update.conf`, falling
  back to `/usr/share/coreos/update.conf`) with the configured values;
  `Update.units()` returns the `locksmithd.service` and
  `update-engine.service` units the settings call for.

### `cloudinit.user`, `cloudinit.ssh_key`, `cloudinit.runcmd`

- `User(...)`, `user_exists(user)`, `create_user(user)` (runs `adduser`,
  adds the user to each of its groups and sets the password hash; only a
  failure to create the account is raised) and
  `set_user_password(user, password_hash)` (pipes `user:hash` to
  `chpasswd -e`).
- `SSHAuthorizer(home_dir, uid, gid)` with `setup_ssh_directory()` and
  `authorize(keys)`, which appends the keys to `.ssh/authorized_keys`
  (mode `0600`, owned by the user); `get_authorized_keys_contents(sshfile)`;
  `authorize_ssh_keys(username, keys)` looks the user up and raises
  `KeyError` for an unknown one.
- `run_script(script)` runs the script with `/bin/sh` and returns its
  combined output; failures raise `RuntimeError`.

### `cloudinit.http_client`

`HttpClient(initial_backoff=0.05, max_backoff=5.0, max_retries=15,
header=None, timeout=10.0)`, durations in seconds. `get(url)` fetches once;
`get_retry(url)` retries network and server errors, doubling the wait with
`exp_backoff` up to `max_backoff`. Errors derive from `FetchError`:
`InvalidURLError` (empty or non-HTTP URL), `NotFoundError` (4xx),
`ServerError`, `NetworkError` and `FetchTimeoutError` (retries exhausted).

### `cloudinit.errors`

`new_aggregate(errors)` returns an `AggregateError` holding the errors, or
`None` for an empty list; `AggregateError.errors()` returns them.

## What it does not do

There is no command-line program and no parser for cloud-config or
user-data documents: the caller builds the configuration objects and calls
the functions above. Network interfaces are not brought down or
reconfigured, and systemd is controlled through its command-line tools
rather than over D-Bus.