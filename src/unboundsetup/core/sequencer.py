"""Provisioning sequencer: the install, configure, restart and uninstall actions."""

import logging
from datetime import datetime
from typing import Any, Callable

from unboundsetup.core.base import BaseHost
from unboundsetup.core.errors import ProvisionError, StepFailedError
from unboundsetup.core.models import ActionResult, ProvisionStatus, Settings, StepRecord
from unboundsetup.core.resolv import ResolverPointer
from unboundsetup.core.system import PackageManager, ServiceManager
from unboundsetup.core.unbound.config import UnboundConfigGenerator
from unboundsetup.core.unbound.control import UnboundControl

logger = logging.getLogger(__name__)

StepCallback = Callable[[str, StepRecord], None]

GUIDE_LINES = [
    "Unbound Features and Useful Commands:",
    "- Local DNS resolver with caching.",
    "- Reduces latency and increases security.",
    "- Example commands:",
    "  Flush a domain cache: sudo unbound-control flush <domain>",
    "  Lookup cache: sudo unbound-control lookup <domain>",
    "  Test local DNS: dig @127.0.0.1 google.com",
]


class ProvisioningSequencer:
    """
    Runs each provisioning action as a fail-fast sequence of steps.

    State lives entirely on the host: every action inspects what it needs
    (hosts entry, unit state, immutable flag) before changing it. The first
    failing step raises StepFailedError and nothing after it runs; steps
    already applied are left in place.
    """

    def __init__(
        self,
        host: BaseHost,
        settings: Settings | None = None,
        on_step: StepCallback | None = None,
    ):
        self.host = host
        self.settings = settings or Settings()
        self.on_step = on_step

        self.packages = PackageManager(host)
        self.services = ServiceManager(host)
        self.control = UnboundControl(host)
        self.pointer = ResolverPointer(host, self.settings.resolv_path)
        self.generator = UnboundConfigGenerator()

    # ========================================================================
    # Step bookkeeping
    # ========================================================================

    def _begin(self, action: str) -> ActionResult:
        logger.info("Starting %s", action)
        return ActionResult(action=action)

    def _finish(self, result: ActionResult, message: str) -> ActionResult:
        result.message = message
        result.finished_at = datetime.now()
        logger.info("Finished %s: %s", result.action, message)
        return result

    def _record(self, result: ActionResult, record: StepRecord) -> None:
        result.steps.append(record)
        if self.on_step:
            self.on_step(result.action, record)

    def _step(
        self,
        result: ActionResult,
        description: str,
        fn: Callable[..., Any],
        *args: Any,
    ) -> Any:
        logger.info("%s: %s", result.action, description)
        try:
            value = fn(*args)
        except ProvisionError as e:
            logger.error("%s: %s failed: %s", result.action, description, e)
            result.success = False
            result.message = str(e)
            result.finished_at = datetime.now()
            self._record(result, StepRecord(description=description, success=False, message=str(e)))
            raise StepFailedError(description, e) from e

        self._record(result, StepRecord(description=description, success=True))
        return value

    def _skip(self, result: ActionResult, description: str, reason: str) -> None:
        logger.info("%s: %s skipped (%s)", result.action, description, reason)
        self._record(
            result,
            StepRecord(description=description, success=True, skipped=True, message=reason),
        )

    # ========================================================================
    # Host identity
    # ========================================================================

    def _read_hosts(self) -> str:
        path = self.settings.hosts_path
        if not self.host.exists(path):
            return ""
        return self.host.read_text(path)

    def _names_hostname(self, hosts: str) -> bool:
        for line in hosts.splitlines():
            fields = line.split("#", 1)[0].split()
            if self.settings.hostname in fields[1:]:
                return True
        return False

    def has_hosts_entry(self) -> bool:
        """Whether any hosts line already names the configured hostname."""
        return self._names_hostname(self._read_hosts())

    def set_host_identity(self, result: ActionResult | None = None) -> ActionResult:
        """Ensure the loopback hosts entry exists and set the hostname."""
        own = result is None
        if result is None:
            result = self._begin("set-host-identity")
        hostname = self.settings.hostname

        hosts = self._step(result, "Read hosts file", self._read_hosts)
        if self._names_hostname(hosts):
            self._skip(result, "Add hostname entry to hosts file", "entry already present")
        else:
            entry = f"{self.settings.loopback_alias}    {hostname}\n"
            if hosts and not hosts.endswith("\n"):
                entry = "\n" + entry
            self._step(
                result,
                "Add hostname entry to hosts file",
                self.host.append_text,
                self.settings.hosts_path,
                entry,
            )

        self._step(
            result,
            f"Set hostname to {hostname}",
            self.host.run,
            "hostnamectl",
            "set-hostname",
            hostname,
        )

        if own:
            return self._finish(result, "Hostname and hosts file updated")
        return result

    # ========================================================================
    # Actions
    # ========================================================================

    def install(self) -> ActionResult:
        """Install Unbound, write its configuration, validate and restart it."""
        s = self.settings
        result = self._begin("install")

        self.set_host_identity(result)
        self._step(result, "Refresh package index", self.packages.update)
        self._step(result, f"Install {s.package}", self.packages.install, s.package)
        self._step(result, "Generate control keys", self.control.setup_keys)
        self._step(
            result,
            f"Write configuration to {s.config_path}",
            self.host.write_text,
            s.config_path,
            self.generator.from_settings(s),
        )
        self._step(result, "Validate configuration", self._require_valid_config)
        self._step(result, f"Restart {s.service}", self.services.restart, s.service)

        return self._finish(result, "Unbound installed and configured")

    def _require_valid_config(self) -> None:
        validation = self.control.check_config()
        if not validation.valid:
            raise ProvisionError("Configuration is invalid: " + "; ".join(validation.errors))

    def configure_dns(self) -> ActionResult:
        """Point the system resolver at the local Unbound listener."""
        s = self.settings
        result = self._begin("configure-dns")
        competing = s.competing_service

        if self.services.is_active(competing):
            self._step(result, f"Stop {competing}", self.services.stop, competing)
        else:
            self._skip(result, f"Stop {competing}", "not active")

        if self.services.is_enabled(competing):
            self._step(result, f"Disable {competing}", self.services.disable, competing)
        else:
            self._skip(result, f"Disable {competing}", "not enabled")

        self._clear_pointer_flag(result)
        self._step(result, f"Remove {s.resolv_path}", self.pointer.remove)
        self._step(result, f"Write {s.resolv_path}", self.pointer.write, s.nameservers)
        self._step(result, "Set immutable flag", self.pointer.set_immutable)

        return self._finish(result, "DNS configured to use Unbound")

    def _clear_pointer_flag(self, result: ActionResult) -> None:
        if self.pointer.is_immutable():
            self._step(result, "Clear immutable flag", self.pointer.clear_immutable)
        else:
            self._skip(result, "Clear immutable flag", "not set")

    def restart(self) -> ActionResult:
        """Restart the Unbound service."""
        result = self._begin("restart")
        self._step(
            result,
            f"Restart {self.settings.service}",
            self.services.restart,
            self.settings.service,
        )
        return self._finish(result, "Unbound service restarted")

    def uninstall(self) -> ActionResult:
        """Remove Unbound, its configuration and the resolv.conf pointer."""
        s = self.settings
        result = self._begin("uninstall")

        self._step(result, f"Remove {s.package}", self.packages.remove, s.package)
        self._step(result, f"Delete {s.config_dir}", self.host.remove_tree, s.config_dir)
        self._clear_pointer_flag(result)
        self._step(result, f"Remove {s.resolv_path}", self.pointer.remove)

        return self._finish(result, "Unbound uninstalled")

    def guide(self) -> list[str]:
        """Static usage hints."""
        return list(GUIDE_LINES)

    def status(self) -> ProvisionStatus:
        """Read-only snapshot of the resolver setup."""
        s = self.settings
        return ProvisionStatus(
            service=s.service,
            service_state=self.services.state(s.service),
            competing_service=s.competing_service,
            competing_state=self.services.state(s.competing_service),
            config_path=str(s.config_path),
            config_present=self.host.exists(s.config_path),
            resolv_path=str(s.resolv_path),
            resolv_present=self.pointer.exists(),
            resolv_immutable=self.pointer.is_immutable(),
        )
