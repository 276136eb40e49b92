"""Unbound control and configuration modules."""

from unboundsetup.core.unbound.config import UnboundConfigGenerator
from unboundsetup.core.unbound.control import UnboundControl

__all__ = ["UnboundConfigGenerator", "UnboundControl"]
