"""Abstract base classes defining the host and generator interfaces."""

import logging
from abc import ABC, abstractmethod
from pathlib import Path

from unboundsetup.core.errors import CommandError
from unboundsetup.core.models import CommandResult, Settings

logger = logging.getLogger(__name__)


class BaseHost(ABC):
    """
    The machine being provisioned.

    Every side effect of the sequencer goes through a host: external
    commands and the handful of file operations the actions need.
    """

    # ========================================================================
    # Commands
    # ========================================================================

    @abstractmethod
    def _execute(
        self,
        argv: list[str],
        input_text: str | None = None,
        env: dict[str, str] | None = None,
    ) -> CommandResult:
        """Run a command to completion and return its result.

        env holds variables added to the inherited environment.
        """
        ...

    def run(
        self,
        *argv: str,
        check: bool = True,
        input_text: str | None = None,
        env: dict[str, str] | None = None,
    ) -> CommandResult:
        """Run a command, raising CommandError on non-zero exit when check is set."""
        logger.debug("Running: %s", " ".join(argv))
        result = self._execute(list(argv), input_text=input_text, env=env)

        if check and not result.success:
            logger.error("Command failed with code %d: %s", result.returncode, result.command_line)
            raise CommandError(result.argv, result.returncode, result.stderr)

        return result

    # ========================================================================
    # Files
    # ========================================================================

    @abstractmethod
    def exists(self, path: Path) -> bool:
        """Whether a file or directory exists at path."""
        ...

    @abstractmethod
    def read_text(self, path: Path) -> str:
        """Read a text file."""
        ...

    @abstractmethod
    def write_text(self, path: Path, content: str) -> None:
        """Create or truncate path with content, creating parent directories."""
        ...

    @abstractmethod
    def append_text(self, path: Path, content: str) -> None:
        """Append content to path."""
        ...

    @abstractmethod
    def remove(self, path: Path) -> None:
        """Remove a file; a missing file is not an error."""
        ...

    @abstractmethod
    def remove_tree(self, path: Path) -> None:
        """Remove a directory recursively; a missing directory is not an error."""
        ...


class BaseConfigGenerator(ABC):
    """Abstract base class for configuration generators."""

    @abstractmethod
    def generate(self, config_dict: dict) -> str:
        """Generate configuration text from structured data."""
        ...

    @abstractmethod
    def from_settings(self, settings: Settings) -> str:
        """Generate the configuration the installer writes."""
        ...
