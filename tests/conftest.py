"""Test fixtures including FakeLauncher for deterministic process behavior."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

import pytest

from hookgate.hooks.events import HookInvocationInput, build_invocation_input
from hookgate.hooks.process import ProcessHandle, ProcessLauncher
from hookgate.types.hooks import HookEvent


class FakeHandle(ProcessHandle):
    """A scripted process: fixed output, exit code, and optional failures."""

    def __init__(
        self,
        *,
        stdout: bytes = b"",
        stderr: bytes = b"",
        exit_code: int | None = 0,
        stdin_error: BaseException | None = None,
        hang: bool = False,
    ) -> None:
        self._stdout = asyncio.StreamReader()
        self._stderr = asyncio.StreamReader()
        self._stdin_error = stdin_error
        self._exit_code = exit_code
        self._exited = asyncio.Event()
        self.written = b""
        self.terminated = False

        self._stdout.feed_data(stdout)
        self._stderr.feed_data(stderr)
        if not hang:
            self._stdout.feed_eof()
            self._stderr.feed_eof()
            self._exited.set()

    @property
    def pid(self) -> int:
        return 424242

    @property
    def stdout(self) -> asyncio.StreamReader:
        return self._stdout

    @property
    def stderr(self) -> asyncio.StreamReader:
        return self._stderr

    async def write_stdin(self, data: bytes) -> None:
        if self._stdin_error is not None:
            raise self._stdin_error
        self.written = data

    async def wait(self) -> int | None:
        await self._exited.wait()
        return self._exit_code

    def terminate(self) -> None:
        self.terminated = True
        if not self._stdout.at_eof():
            self._stdout.feed_eof()
            self._stderr.feed_eof()
        self._exited.set()


class FakeLauncher(ProcessLauncher):
    """Launcher returning FakeHandles built from keyword arguments."""

    def __init__(self, start_error: Exception | None = None, **handle_kwargs) -> None:
        self._start_error = start_error
        self._handle_kwargs = handle_kwargs
        self.handles: list[FakeHandle] = []
        self.calls: list[dict] = []

    async def start(self, command: str, *, cwd: str | None, env: dict[str, str]) -> ProcessHandle:
        self.calls.append({"command": command, "cwd": cwd, "env": env})
        if self._start_error is not None:
            raise self._start_error
        handle = FakeHandle(**self._handle_kwargs)
        self.handles.append(handle)
        return handle


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Keep user config, HOOKGATE_* variables and CLI log handlers out of every test."""
    for var in ("HOOKGATE_DEBUG", "HOOKGATE_HOOKS_FILE", "HOOKGATE_TIMEOUT_MS"):
        monkeypatch.delenv(var, raising=False)
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))

    pkg_logger = logging.getLogger("hookgate")
    handlers, level = list(pkg_logger.handlers), pkg_logger.level
    yield home
    pkg_logger.handlers[:] = handlers
    pkg_logger.setLevel(level)


@pytest.fixture
def invocation(tmp_path: Path) -> HookInvocationInput:
    """A PreToolUse input for the Bash tool rooted at tmp_path."""
    return build_invocation_input(
        HookEvent.PRE_TOOL_USE,
        session_id="test-session",
        tool_name="Bash",
        tool_params={"command": "ls -la"},
        cwd=tmp_path,
        timestamp=1729147500000,
    )


@pytest.fixture
def hooks_file(tmp_path: Path):
    """Factory writing a hooks.json into tmp_path and returning its path."""

    def _write(config: dict, name: str = "hooks.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(config))
        return path

    return _write
