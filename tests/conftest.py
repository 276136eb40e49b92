"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from unboundsetup.core.base import BaseHost
from unboundsetup.core.errors import FileOperationError
from unboundsetup.core.models import CommandResult, Settings
from unboundsetup.core.sequencer import ProvisioningSequencer


class FakeHost(BaseHost):
    """
    In-memory machine.

    Simulates the commands the sequencer issues, the files it touches and
    the immutable attribute, which blocks writes and deletes like the
    kernel does. `events` records commands and file operations in order.
    """

    def __init__(
        self,
        files: dict[str, str] | None = None,
        active: set[str] | None = None,
        enabled: set[str] | None = None,
        immutable: set[str] | None = None,
        fail_on: list[tuple[str, ...]] | None = None,
        checkconf_ok: bool = True,
    ):
        self.files: dict[Path, str] = {Path(p): c for p, c in (files or {}).items()}
        self.active = set(active or ())
        self.enabled = set(enabled or ())
        self.immutable = {Path(p) for p in (immutable or ())}
        self.fail_on = list(fail_on or [])
        self.checkconf_ok = checkconf_ok
        self.commands: list[list[str]] = []
        self.environments: dict[tuple[str, ...], dict[str, str]] = {}
        self.events: list[str] = []

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def _execute(
        self,
        argv: list[str],
        input_text: str | None = None,
        env: dict[str, str] | None = None,
    ) -> CommandResult:
        self.commands.append(list(argv))
        if env:
            self.environments[tuple(argv)] = dict(env)
        self.events.append(" ".join(argv))

        for prefix in self.fail_on:
            if tuple(argv[: len(prefix)]) == prefix:
                return CommandResult(argv=argv, returncode=1, stderr="simulated failure")

        rc, out, err = self._simulate(argv)
        return CommandResult(argv=argv, returncode=rc, stdout=out, stderr=err)

    def _simulate(self, argv: list[str]) -> tuple[int, str, str]:
        match argv:
            case ["systemctl", "is-active", "--quiet", unit]:
                return (0 if unit in self.active else 3), "", ""
            case ["systemctl", "is-active", unit]:
                state = "active" if unit in self.active else "inactive"
                return (0 if unit in self.active else 3), f"{state}\n", ""
            case ["systemctl", "is-enabled", "--quiet", unit]:
                return (0 if unit in self.enabled else 1), "", ""
            case ["systemctl", "stop", unit]:
                self.active.discard(unit)
            case ["systemctl", "disable", unit]:
                self.enabled.discard(unit)
            case ["systemctl", "restart", unit]:
                self.active.add(unit)
            case ["lsattr", "-d", path]:
                if Path(path) not in self.files:
                    return 1, "", f"lsattr: No such file or directory while trying to stat {path}"
                attrs = "----i---------e-------" if Path(path) in self.immutable else "--------------e-------"
                return 0, f"{attrs} {path}\n", ""
            case ["chattr", flag, path] if flag in ("+i", "-i"):
                if Path(path) not in self.files:
                    return 1, "", f"chattr: No such file or directory while trying to stat {path}"
                if flag == "+i":
                    self.immutable.add(Path(path))
                else:
                    self.immutable.discard(Path(path))
            case ["unbound-checkconf", *_]:
                if not self.checkconf_ok:
                    return 1, "", "/etc/unbound/unbound.conf.d/custom.conf:3: error: syntax error\n"
                return 0, "unbound-checkconf: no errors in /etc/unbound/unbound.conf\n", ""
        return 0, "", ""

    # ------------------------------------------------------------------
    # Files
    # ------------------------------------------------------------------

    def _guard(self, path: Path) -> None:
        if path in self.immutable:
            raise FileOperationError(path, PermissionError(1, "Operation not permitted"))

    def exists(self, path: Path) -> bool:
        path = Path(path)
        return any(p == path or path in p.parents for p in self.files)

    def read_text(self, path: Path) -> str:
        path = Path(path)
        if path not in self.files:
            raise FileOperationError(path, FileNotFoundError(2, "No such file or directory"))
        return self.files[path]

    def write_text(self, path: Path, content: str) -> None:
        path = Path(path)
        self._guard(path)
        self.events.append(f"write {path}")
        self.files[path] = content

    def append_text(self, path: Path, content: str) -> None:
        path = Path(path)
        self._guard(path)
        self.events.append(f"append {path}")
        self.files[path] = self.files.get(path, "") + content

    def remove(self, path: Path) -> None:
        path = Path(path)
        self._guard(path)
        self.events.append(f"remove {path}")
        self.files.pop(path, None)

    def remove_tree(self, path: Path) -> None:
        path = Path(path)
        doomed = [p for p in self.files if p == path or path in p.parents]
        for p in doomed:
            self._guard(p)
        self.events.append(f"remove-tree {path}")
        for p in doomed:
            del self.files[p]

    def ran(self, *prefix: str) -> bool:
        """Whether any command starting with prefix was issued."""
        return any(tuple(cmd[: len(prefix)]) == prefix for cmd in self.commands)


HOSTS = "127.0.0.1\tlocalhost\n::1\tlocalhost ip6-localhost ip6-loopback\n"


@pytest.fixture
def settings() -> Settings:
    """Default settings without an action log file."""
    return Settings(log_file=None)


@pytest.fixture
def fake_host() -> FakeHost:
    """Fresh Ubuntu-like host with systemd-resolved running."""
    return FakeHost(
        files={"/etc/hosts": HOSTS, "/etc/resolv.conf": "nameserver 127.0.0.53\n"},
        active={"systemd-resolved"},
        enabled={"systemd-resolved"},
    )


@pytest.fixture
def sequencer(fake_host: FakeHost, settings: Settings) -> ProvisioningSequencer:
    return ProvisioningSequencer(fake_host, settings)


@pytest.fixture
def expected_config() -> str:
    """Unbound configuration written by install with default forwarders."""
    return """server:
    cache-max-ttl: 86400
    cache-min-ttl: 3600
    prefetch: yes
    do-ip4: yes
    do-ip6: yes
    do-udp: yes
    do-tcp: yes
    interface: 127.0.0.1
    interface: ::1
    port: 53
    access-control: 127.0.0.0/8 allow
    access-control: ::1 allow
    private-address: 192.168.0.0/16
    private-address: 172.16.0.0/12
    private-address: 10.0.0.0/8
    private-address: fd00::/8
    private-address: fe80::/10

    remote-control:
        control-enable: yes
        control-interface: 127.0.0.1

forward-zone:
    name: "."
    forward-first: no
    forward-addr: 8.8.8.8
    forward-addr: 8.8.4.4
    forward-addr: 2001:4860:4860::8888
    forward-addr: 2001:4860:4860::8844
"""
