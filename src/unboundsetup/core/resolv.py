"""System resolver pointer file (/etc/resolv.conf) handling."""

import logging
from pathlib import Path

from unboundsetup.core.base import BaseHost

logger = logging.getLogger(__name__)


def render_resolv_conf(nameservers: list[str]) -> str:
    """Render one nameserver line per address."""
    return "".join(f"nameserver {ns}\n" for ns in nameservers)


class ResolverPointer:
    """
    Writes resolv.conf and guards it with the immutable attribute.

    The immutable flag must be cleared before the file is rewritten or
    deleted; otherwise the write fails.
    """

    def __init__(self, host: BaseHost, path: Path = Path("/etc/resolv.conf")):
        self.host = host
        self.path = Path(path)

    def exists(self) -> bool:
        return self.host.exists(self.path)

    def is_immutable(self) -> bool:
        """Query the immutable attribute with lsattr."""
        if not self.exists():
            return False

        result = self.host.run("lsattr", "-d", str(self.path), check=False)
        if not result.success:
            # lsattr refuses symlinks and filesystems without attributes
            logger.debug("lsattr failed on %s: %s", self.path, result.stderr.strip())
            return False

        parts = result.stdout.split()
        return bool(parts) and "i" in parts[0]

    def set_immutable(self) -> None:
        self.host.run("chattr", "+i", str(self.path))

    def clear_immutable(self) -> None:
        self.host.run("chattr", "-i", str(self.path))

    def write(self, nameservers: list[str]) -> None:
        self.host.write_text(self.path, render_resolv_conf(nameservers))

    def remove(self) -> None:
        self.host.remove(self.path)
