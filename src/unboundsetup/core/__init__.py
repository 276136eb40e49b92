"""Core library modules for provisioning Unbound."""

from unboundsetup.core.errors import (
    CommandError,
    FileOperationError,
    ProvisionError,
    SettingsError,
    StepFailedError,
)
from unboundsetup.core.models import (
    ActionResult,
    CommandResult,
    MenuAction,
    ProvisionStatus,
    Settings,
    StepRecord,
)
from unboundsetup.core.sequencer import ProvisioningSequencer

__all__ = [
    "ActionResult",
    "CommandError",
    "CommandResult",
    "FileOperationError",
    "MenuAction",
    "ProvisionError",
    "ProvisionStatus",
    "ProvisioningSequencer",
    "Settings",
    "SettingsError",
    "StepFailedError",
    "StepRecord",
]
