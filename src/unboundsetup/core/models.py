"""Core data models for unbound-setup."""

from datetime import datetime
from enum import Enum, IntEnum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


DEFAULT_FORWARDERS = [
    "8.8.8.8",
    "8.8.4.4",
    "2001:4860:4860::8888",
    "2001:4860:4860::8844",
]


class MenuAction(IntEnum):
    """Numbered entries of the interactive menu."""

    INSTALL = 1
    CONFIGURE_DNS = 2
    RESTART = 3
    UNINSTALL = 4
    GUIDE = 5
    EXIT = 6

    @classmethod
    def from_choice(cls, choice: str) -> "MenuAction | None":
        """Map raw menu input to an action, or None when it is not 1-6."""
        choice = choice.strip()
        if not (choice.isascii() and choice.isdigit()):
            return None
        try:
            return cls(int(choice))
        except ValueError:
            return None

    @property
    def label(self) -> str:
        return _MENU_LABELS[self]


_MENU_LABELS = {
    MenuAction.INSTALL: "Install Unbound",
    MenuAction.CONFIGURE_DNS: "Configure DNS",
    MenuAction.RESTART: "Restart Unbound",
    MenuAction.UNINSTALL: "Uninstall Unbound",
    MenuAction.GUIDE: "Show Features",
    MenuAction.EXIT: "Exit",
}


class ServiceState(str, Enum):
    """Service states as reported by systemctl is-active."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    FAILED = "failed"
    ACTIVATING = "activating"
    DEACTIVATING = "deactivating"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, text: str) -> "ServiceState":
        try:
            return cls(text.strip())
        except ValueError:
            return cls.UNKNOWN


# ============================================================================
# Settings
# ============================================================================


class Settings(BaseModel):
    """Paths, names and upstreams used by every provisioning action."""

    model_config = ConfigDict(extra="forbid")

    hostname: str = Field(default="server", min_length=1, description="Host identity to set")
    hosts_path: Path = Field(default=Path("/etc/hosts"))
    loopback_alias: str = Field(default="127.0.1.1")
    config_path: Path = Field(
        default=Path("/etc/unbound/unbound.conf.d/custom.conf"),
        description="Unbound configuration file written on install",
    )
    config_dir: Path = Field(default=Path("/etc/unbound"), description="Removed on uninstall")
    resolv_path: Path = Field(default=Path("/etc/resolv.conf"))
    package: str = Field(default="unbound")
    service: str = Field(default="unbound")
    competing_service: str = Field(default="systemd-resolved")
    forwarders: list[str] = Field(default_factory=lambda: list(DEFAULT_FORWARDERS), min_length=1)
    nameservers: list[str] = Field(default_factory=lambda: ["127.0.0.1", "::1"], min_length=1)
    log_file: Path | None = Field(default=Path("/var/log/unbound-setup.log"))
    use_sudo: bool = Field(default=True, description="Prefix commands with sudo when not root")


# ============================================================================
# Command / Action Models
# ============================================================================


class CommandResult(BaseModel):
    """Outcome of one external command."""

    argv: list[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def success(self) -> bool:
        return self.returncode == 0

    @property
    def command_line(self) -> str:
        return " ".join(self.argv)


class StepRecord(BaseModel):
    """One executed step of an action."""

    description: str
    success: bool
    skipped: bool = False
    message: str = ""
    timestamp: datetime = Field(default_factory=datetime.now)


class ActionResult(BaseModel):
    """Record of a completed provisioning action."""

    action: str
    success: bool = True
    message: str = ""
    steps: list[StepRecord] = Field(default_factory=list)
    started_at: datetime = Field(default_factory=datetime.now)
    finished_at: datetime | None = None


class ConfigValidationResult(BaseModel):
    """Result of running unbound-checkconf."""

    valid: bool
    errors: list[str] = Field(default_factory=list)
    config_path: str | None = None


class ProvisionStatus(BaseModel):
    """Snapshot of everything install and configure-dns touch."""

    service: str
    service_state: ServiceState
    competing_service: str
    competing_state: ServiceState
    config_path: str
    config_present: bool
    resolv_path: str
    resolv_present: bool
    resolv_immutable: bool
    timestamp: datetime = Field(default_factory=datetime.now)
