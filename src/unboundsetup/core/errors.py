"""Exceptions raised while provisioning."""

from pathlib import Path


class ProvisionError(Exception):
    """Base class for every provisioning failure."""


class CommandError(ProvisionError):
    """An external command exited non-zero or could not be started."""

    def __init__(self, argv: list[str], returncode: int, stderr: str = ""):
        self.argv = list(argv)
        self.returncode = returncode
        self.stderr = stderr
        detail = f": {stderr.strip()}" if stderr.strip() else ""
        super().__init__(
            f"Command failed with code {returncode}: {' '.join(self.argv)}{detail}"
        )


class FileOperationError(ProvisionError):
    """A local file could not be written or removed."""

    def __init__(self, path: Path | str, error: OSError | str):
        self.path = Path(path)
        self.error = error
        super().__init__(f"{self.path}: {error}")


class StepFailedError(ProvisionError):
    """A sequencer step failed; the remaining steps were skipped."""

    def __init__(self, step: str, cause: ProvisionError):
        self.step = step
        self.cause = cause
        super().__init__(f"{step} failed: {cause}")


class SettingsError(ProvisionError):
    """Settings file or environment override is invalid."""
