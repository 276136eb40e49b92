"""Tests for resolv.conf handling and the immutable attribute."""

from pathlib import Path

import pytest
from conftest import FakeHost

from unboundsetup.core.errors import CommandError, FileOperationError
from unboundsetup.core.resolv import ResolverPointer, render_resolv_conf

RESOLV = "/etc/resolv.conf"


@pytest.fixture
def pointer_host() -> FakeHost:
    return FakeHost(files={RESOLV: "nameserver 127.0.0.53\n"})


class TestRenderResolvConf:
    def test_loopback_nameservers(self):
        assert render_resolv_conf(["127.0.0.1", "::1"]) == "nameserver 127.0.0.1\nnameserver ::1\n"

    def test_empty(self):
        assert render_resolv_conf([]) == ""


class TestResolverPointer:
    """Tests for ResolverPointer."""

    def test_missing_file_is_not_immutable(self):
        host = FakeHost()
        pointer = ResolverPointer(host, Path(RESOLV))

        assert pointer.is_immutable() is False
        assert not host.ran("lsattr")

    def test_immutable_query_parses_lsattr(self, pointer_host):
        pointer = ResolverPointer(pointer_host, Path(RESOLV))
        assert pointer.is_immutable() is False

        pointer.set_immutable()
        assert pointer.is_immutable() is True
        assert ["lsattr", "-d", RESOLV] in pointer_host.commands

    def test_lsattr_failure_reads_as_mutable(self, pointer_host):
        pointer_host.fail_on.append(("lsattr",))
        pointer = ResolverPointer(pointer_host, Path(RESOLV))
        assert pointer.is_immutable() is False

    def test_delete_while_immutable_fails(self, pointer_host):
        pointer = ResolverPointer(pointer_host, Path(RESOLV))
        pointer.set_immutable()

        with pytest.raises(FileOperationError):
            pointer.remove()
        assert pointer.exists()

        pointer.clear_immutable()
        pointer.remove()
        assert not pointer.exists()

    def test_write_while_immutable_fails(self, pointer_host):
        pointer = ResolverPointer(pointer_host, Path(RESOLV))
        pointer.set_immutable()

        with pytest.raises(FileOperationError):
            pointer.write(["127.0.0.1"])
        assert pointer_host.files[Path(RESOLV)] == "nameserver 127.0.0.53\n"

    def test_chattr_failure_raises(self, pointer_host):
        pointer_host.fail_on.append(("chattr", "+i"))
        pointer = ResolverPointer(pointer_host, Path(RESOLV))

        with pytest.raises(CommandError) as exc:
            pointer.set_immutable()
        assert exc.value.returncode == 1
        assert exc.value.argv == ["chattr", "+i", RESOLV]
