"""Provision the Unbound DNS resolver on a Debian/Ubuntu host."""

__version__ = "0.1.0"
