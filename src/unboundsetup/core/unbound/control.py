"""Unbound control-plane utilities."""

import logging
import time

import dns.exception
import dns.message
import dns.query
import dns.rcode
import dns.rdatatype

from unboundsetup.core.base import BaseHost
from unboundsetup.core.errors import CommandError, ProvisionError
from unboundsetup.core.models import CommandResult, ConfigValidationResult

logger = logging.getLogger(__name__)


class UnboundControl:
    """
    Wraps unbound-control-setup, unbound-checkconf and unbound-control.

    Also answers direct DNS queries against the local listener so an
    install can be checked end to end.
    """

    def __init__(
        self,
        host: BaseHost,
        control_path: str = "unbound-control",
        checkconf_path: str = "unbound-checkconf",
        setup_path: str = "unbound-control-setup",
    ):
        self.host = host
        self.control_path = control_path
        self.checkconf_path = checkconf_path
        self.setup_path = setup_path

    def setup_keys(self) -> CommandResult:
        """Generate the remote-control keys and certificates."""
        return self.host.run(self.setup_path)

    def check_config(self, config_path: str | None = None) -> ConfigValidationResult:
        """Validate configuration syntax using unbound-checkconf."""
        argv = [self.checkconf_path]
        if config_path:
            argv.append(config_path)

        try:
            self.host.run(*argv)
        except CommandError as e:
            errors = [line for line in e.stderr.splitlines() if line.strip()]
            return ConfigValidationResult(
                valid=False,
                errors=errors or [str(e)],
                config_path=config_path,
            )

        return ConfigValidationResult(valid=True, config_path=config_path)

    def flush(self, domain: str) -> CommandResult:
        """Remove a name from the cache."""
        return self.host.run(self.control_path, "flush", domain)

    def lookup(self, domain: str) -> str:
        """Show which servers would be queried for a name."""
        return self.host.run(self.control_path, "lookup", domain).stdout

    def query(
        self,
        name: str,
        record_type: str = "A",
        server: str = "127.0.0.1",
        port: int = 53,
        timeout: float = 5.0,
    ) -> tuple[str, list[str], float]:
        """
        Query the resolver directly.

        Returns the rcode text, the answer values and the query time in
        milliseconds.
        """
        try:
            rdtype = dns.rdatatype.from_text(record_type)
        except dns.rdatatype.UnknownRdatatype:
            raise ProvisionError(f"Unknown record type: {record_type}")

        start = time.monotonic()
        try:
            msg = dns.message.make_query(name, rdtype)
            response = dns.query.udp(msg, server, port=port, timeout=timeout)
        except (dns.exception.DNSException, OSError, ValueError) as e:
            raise ProvisionError(f"Query for {name} via {server}:{port} failed: {e}")
        elapsed_ms = (time.monotonic() - start) * 1000

        answers = [str(rdata) for rrset in response.answer for rdata in rrset]
        rcode = dns.rcode.to_text(response.rcode())
        logger.debug("%s %s via %s: %s %s", name, record_type, server, rcode, answers)
        return rcode, answers, elapsed_ms
