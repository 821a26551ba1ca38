"""Process launcher ABC + the asyncio shell implementation.

Hooks are run through the system shell so authors can use pipes,
redirection and variable expansion. That is a deliberate policy: a command
string that an attacker can influence becomes arbitrary shell code, so hook
configuration must only come from trusted settings files.
"""

from __future__ import annotations

import asyncio
import os
import signal
import sys
from abc import ABC, abstractmethod


class ProcessHandle(ABC):
    """A started child process with piped stdio."""

    @property
    @abstractmethod
    def pid(self) -> int: ...

    @property
    @abstractmethod
    def stdout(self) -> asyncio.StreamReader: ...

    @property
    @abstractmethod
    def stderr(self) -> asyncio.StreamReader: ...

    @abstractmethod
    async def write_stdin(self, data: bytes) -> None:
        """Write *data* and close stdin.

        Raises OSError only when the input could not be handed to the
        process. A child that closes its end of the pipe without reading is
        not an error: its exit code still decides the outcome.
        """
        ...

    @abstractmethod
    async def wait(self) -> int | None:
        """Wait for exit and return the exit code."""
        ...

    @abstractmethod
    def terminate(self) -> None:
        """Forcibly stop the process. Idempotent, safe from any cancellation path."""
        ...


class ProcessLauncher(ABC):
    """Abstract base for process launchers."""

    @abstractmethod
    async def start(self, command: str, *, cwd: str | None, env: dict[str, str]) -> ProcessHandle:
        """Start *command*. Raises OSError or ValueError when it cannot be spawned."""
        ...


class _AsyncioProcessHandle(ProcessHandle):
    def __init__(self, proc: asyncio.subprocess.Process, *, own_group: bool) -> None:
        self._proc = proc
        self._own_group = own_group

    @property
    def pid(self) -> int:
        return self._proc.pid

    @property
    def stdout(self) -> asyncio.StreamReader:
        assert self._proc.stdout is not None
        return self._proc.stdout

    @property
    def stderr(self) -> asyncio.StreamReader:
        assert self._proc.stderr is not None
        return self._proc.stderr

    async def write_stdin(self, data: bytes) -> None:
        stdin = self._proc.stdin
        assert stdin is not None
        try:
            stdin.write(data)
            await stdin.drain()
        except (BrokenPipeError, ConnectionResetError):
            # Child exited or closed stdin without reading it all
            pass
        finally:
            stdin.close()
        try:
            await stdin.wait_closed()
        except (BrokenPipeError, ConnectionResetError):
            pass

    async def wait(self) -> int | None:
        return await self._proc.wait()

    def terminate(self) -> None:
        if self._proc.returncode is not None:
            return
        if self._own_group:
            # Kill the whole group so shell pipelines don't leave orphans
            try:
                os.killpg(self._proc.pid, signal.SIGKILL)
                return
            except (ProcessLookupError, PermissionError):
                pass
        try:
            self._proc.kill()
        except ProcessLookupError:
            pass


class ShellProcessLauncher(ProcessLauncher):
    """Starts commands with ``asyncio.create_subprocess_shell``.

    On POSIX each hook gets its own session, hence its own process group,
    so that :meth:`ProcessHandle.terminate` reaches grandchildren too.
    """

    async def start(self, command: str, *, cwd: str | None, env: dict[str, str]) -> ProcessHandle:
        own_group = sys.platform != "win32"
        proc = await asyncio.create_subprocess_shell(
            command,
            stdin=asyncio.subprocess.PIPE,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            cwd=cwd or None,
            env=env,
            start_new_session=own_group,
        )
        return _AsyncioProcessHandle(proc, own_group=own_group)
