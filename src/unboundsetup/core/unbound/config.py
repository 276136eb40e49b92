"""Unbound configuration generator."""

from unboundsetup.core.base import BaseConfigGenerator
from unboundsetup.core.models import Settings


class UnboundConfigGenerator(BaseConfigGenerator):
    """Generator for the Unbound configuration written on install."""

    indent = "    "

    def _format(self, value) -> str:
        if isinstance(value, bool):
            return "yes" if value else "no"
        return str(value)

    def _emit(self, lines: list[str], key: str, value, depth: int) -> None:
        prefix = self.indent * depth
        if isinstance(value, list):
            for v in value:
                lines.append(f"{prefix}{key}: {self._format(v)}")
        else:
            lines.append(f"{prefix}{key}: {self._format(value)}")

    def generate(self, config_dict: dict) -> str:
        """Generate unbound.conf text from structured configuration."""
        lines: list[str] = []

        # Server section
        if "server" in config_dict:
            lines.append("server:")
            for key, value in config_dict["server"].items():
                self._emit(lines, key, value, 1)

        # Remote control, indented under server: as the installed file has it.
        # Unbound clauses are not scoped by indentation.
        if "remote-control" in config_dict:
            if lines:
                lines.append("")
            lines.append(f"{self.indent}remote-control:")
            for key, value in config_dict["remote-control"].items():
                self._emit(lines, key, value, 2)

        # Forward zones
        for fz in config_dict.get("forward-zone", []):
            if lines:
                lines.append("")
            lines.append("forward-zone:")
            for key, value in fz.items():
                if key == "name":
                    lines.append(f'{self.indent}name: "{value}"')
                else:
                    self._emit(lines, key, value, 1)

        return "\n".join(lines) + "\n"

    def from_settings(self, settings: Settings) -> str:
        """Generate the configuration the installer writes."""
        return self.generate(build_config_dict(settings.forwarders))


def build_config_dict(forwarders: list[str]) -> dict:
    """Structured form of the local caching resolver configuration."""
    return {
        "server": {
            "cache-max-ttl": 86400,
            "cache-min-ttl": 3600,
            "prefetch": True,
            "do-ip4": True,
            "do-ip6": True,
            "do-udp": True,
            "do-tcp": True,
            "interface": ["127.0.0.1", "::1"],
            "port": 53,
            "access-control": ["127.0.0.0/8 allow", "::1 allow"],
            "private-address": [
                "192.168.0.0/16",
                "172.16.0.0/12",
                "10.0.0.0/8",
                "fd00::/8",
                "fe80::/10",
            ],
        },
        "remote-control": {
            "control-enable": True,
            "control-interface": "127.0.0.1",
        },
        "forward-zone": [
            {
                "name": ".",
                "forward-first": False,
                "forward-addr": list(forwarders),
            }
        ],
    }


def generate_default_config() -> str:
    """Generate the configuration for default settings."""
    return UnboundConfigGenerator().from_settings(Settings())
