"""Tests for core models."""

import pytest

from unboundsetup.core.models import (
    ActionResult,
    CommandResult,
    MenuAction,
    ServiceState,
    Settings,
    StepRecord,
)


class TestMenuAction:
    """Tests for menu choice parsing."""

    @pytest.mark.parametrize(
        "choice,expected",
        [
            ("1", MenuAction.INSTALL),
            ("2", MenuAction.CONFIGURE_DNS),
            ("3", MenuAction.RESTART),
            ("4", MenuAction.UNINSTALL),
            ("5", MenuAction.GUIDE),
            ("6", MenuAction.EXIT),
            (" 4 \n", MenuAction.UNINSTALL),
        ],
    )
    def test_valid_choices(self, choice, expected):
        assert MenuAction.from_choice(choice) is expected

    @pytest.mark.parametrize("choice", ["", "0", "7", "10", "-1", "1.0", "install", "١"])
    def test_invalid_choices(self, choice):
        assert MenuAction.from_choice(choice) is None

    def test_labels(self):
        assert MenuAction.INSTALL.label == "Install Unbound"
        assert MenuAction.GUIDE.label == "Show Features"
        assert MenuAction.EXIT.label == "Exit"


class TestServiceState:
    """Tests for ServiceState parsing."""

    def test_parse_known(self):
        assert ServiceState.parse("active\n") == ServiceState.ACTIVE
        assert ServiceState.parse("inactive") == ServiceState.INACTIVE

    def test_parse_unknown(self):
        assert ServiceState.parse("") == ServiceState.UNKNOWN
        assert ServiceState.parse("reloading") == ServiceState.UNKNOWN


class TestCommandResult:
    """Tests for CommandResult model."""

    def test_success(self):
        result = CommandResult(argv=["apt-get", "update"], returncode=0)
        assert result.success is True
        assert result.command_line == "apt-get update"

    def test_failure(self):
        result = CommandResult(argv=["false"], returncode=1, stderr="boom")
        assert result.success is False


class TestSettings:
    """Tests for Settings defaults."""

    def test_defaults(self):
        settings = Settings()
        assert settings.hostname == "server"
        assert str(settings.config_path) == "/etc/unbound/unbound.conf.d/custom.conf"
        assert str(settings.resolv_path) == "/etc/resolv.conf"
        assert settings.nameservers == ["127.0.0.1", "::1"]
        assert settings.forwarders[0] == "8.8.8.8"
        assert settings.use_sudo is True

    def test_default_lists_are_independent(self):
        a = Settings()
        b = Settings()
        a.forwarders.append("1.1.1.1")
        assert "1.1.1.1" not in b.forwarders


class TestActionResult:
    """Tests for ActionResult model."""

    def test_defaults(self):
        result = ActionResult(action="install")
        assert result.success is True
        assert result.steps == []
        assert result.finished_at is None

    def test_steps(self):
        result = ActionResult(action="restart")
        result.steps.append(StepRecord(description="Restart unbound", success=True))
        assert result.steps[0].skipped is False
