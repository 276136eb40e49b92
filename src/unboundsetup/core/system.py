"""Package and service manager wrappers."""

from unboundsetup.core.base import BaseHost
from unboundsetup.core.models import CommandResult, ServiceState

# Output is captured, so debconf must never prompt
APT_ENV = {"DEBIAN_FRONTEND": "noninteractive"}


class PackageManager:
    """apt-get, run non-interactively."""

    def __init__(self, host: BaseHost):
        self.host = host

    def update(self) -> CommandResult:
        """Refresh the package index."""
        return self.host.run("apt-get", "update", env=APT_ENV)

    def install(self, package: str) -> CommandResult:
        return self.host.run("apt-get", "install", "-y", package, env=APT_ENV)

    def remove(self, package: str) -> CommandResult:
        return self.host.run("apt-get", "remove", "-y", package, env=APT_ENV)


class ServiceManager:
    """systemctl unit control."""

    def __init__(self, host: BaseHost):
        self.host = host

    def stop(self, unit: str) -> CommandResult:
        return self.host.run("systemctl", "stop", unit)

    def restart(self, unit: str) -> CommandResult:
        return self.host.run("systemctl", "restart", unit)

    def disable(self, unit: str) -> CommandResult:
        return self.host.run("systemctl", "disable", unit)

    def state(self, unit: str) -> ServiceState:
        """Active state of a unit as reported by systemctl."""
        result = self.host.run("systemctl", "is-active", unit, check=False)
        return ServiceState.parse(result.stdout)

    def is_active(self, unit: str) -> bool:
        return self.host.run("systemctl", "is-active", "--quiet", unit, check=False).success

    def is_enabled(self, unit: str) -> bool:
        return self.host.run("systemctl", "is-enabled", "--quiet", unit, check=False).success
