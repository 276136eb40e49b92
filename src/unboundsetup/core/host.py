"""Local machine implementation of BaseHost."""

import os
import shutil
import subprocess
from pathlib import Path

from unboundsetup.core.base import BaseHost
from unboundsetup.core.errors import FileOperationError
from unboundsetup.core.models import CommandResult


class LocalHost(BaseHost):
    """
    Runs commands with subprocess and edits files with pathlib.

    When the process is not root and use_sudo is set, commands are
    prefixed with sudo and file edits go through sudo tee/rm, since every
    path the installer touches is root-owned.
    """

    def __init__(self, use_sudo: bool = True):
        self.use_sudo = use_sudo

    @property
    def escalate(self) -> bool:
        return self.use_sudo and os.geteuid() != 0

    def _execute(
        self,
        argv: list[str],
        input_text: str | None = None,
        env: dict[str, str] | None = None,
    ) -> CommandResult:
        cmd = list(argv)
        proc_env = None
        if self.escalate:
            # sudo resets the environment; env(1) sets it on the far side
            assignments = [f"{k}={v}" for k, v in (env or {}).items()]
            cmd = ["sudo", *(["env", *assignments] if assignments else []), *argv]
        elif env:
            proc_env = {**os.environ, **env}

        try:
            proc = subprocess.run(
                cmd,
                input=input_text,
                env=proc_env,
                capture_output=True,
                text=True,
                check=False,
            )
        except FileNotFoundError as e:
            return CommandResult(argv=cmd, returncode=127, stderr=str(e))

        return CommandResult(
            argv=cmd,
            returncode=proc.returncode,
            stdout=proc.stdout,
            stderr=proc.stderr,
        )

    def exists(self, path: Path) -> bool:
        return os.path.lexists(path)

    def read_text(self, path: Path) -> str:
        if self.escalate:
            return self.run("cat", str(path)).stdout
        try:
            return Path(path).read_text()
        except OSError as e:
            raise FileOperationError(path, e)

    def write_text(self, path: Path, content: str) -> None:
        path = Path(path)
        if self.escalate:
            self.run("mkdir", "-p", str(path.parent))
            self.run("tee", str(path), input_text=content)
            return
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)
        except OSError as e:
            raise FileOperationError(path, e)

    def append_text(self, path: Path, content: str) -> None:
        if self.escalate:
            self.run("tee", "-a", str(path), input_text=content)
            return
        try:
            with open(path, "a") as f:
                f.write(content)
        except OSError as e:
            raise FileOperationError(path, e)

    def remove(self, path: Path) -> None:
        if self.escalate:
            self.run("rm", "-f", str(path))
            return
        try:
            Path(path).unlink(missing_ok=True)
        except OSError as e:
            raise FileOperationError(path, e)

    def remove_tree(self, path: Path) -> None:
        if self.escalate:
            self.run("rm", "-rf", str(path))
            return
        path = Path(path)
        if not path.exists():
            return
        try:
            shutil.rmtree(path)
        except OSError as e:
            raise FileOperationError(path, e)

