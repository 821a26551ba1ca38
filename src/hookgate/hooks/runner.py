"""Hook runner: one command, one input, one outcome."""

from __future__ import annotations

import asyncio
import json
import logging
import os
import time

from hookgate.hooks.events import HookInvocationInput
from hookgate.hooks.process import ProcessHandle, ProcessLauncher, ShellProcessLauncher
from hookgate.types.config import HookSettings
from hookgate.types.hooks import (
    BLOCKING_EXIT_CODE,
    HookCommand,
    HookOutcome,
    HookResponse,
    RunState,
)

logger = logging.getLogger(__name__)

_READ_CHUNK = 64 * 1024


class _StdinWriteError(Exception):
    pass


def parse_hook_response(stdout: str) -> HookResponse | None:
    """Parse the whole of *stdout* as a structured hook response.

    Returns None for empty output, invalid JSON, or JSON that is not an
    object. A ``block`` value that is not a boolean is treated as absent.
    """
    if not stdout.strip():
        return None
    try:
        data = json.loads(stdout)
    except (json.JSONDecodeError, ValueError):
        return None
    if not isinstance(data, dict):
        return None

    block = data.get("block")
    message = data.get("message")
    context = data.get("context")
    return HookResponse(
        block=block if isinstance(block, bool) else None,
        message=message if isinstance(message, str) else None,
        context=context if isinstance(context, dict) else None,
        extra={k: v for k, v in data.items() if k not in ("block", "message", "context")},
    )


def decide_blocks(exit_code: int, response: HookResponse | None) -> bool:
    """An explicit ``block`` in the response wins over the exit code."""
    if response is not None and response.has_block:
        return bool(response.block)
    return exit_code == BLOCKING_EXIT_CODE


async def _drain(stream: asyncio.StreamReader, buf: bytearray) -> None:
    while chunk := await stream.read(_READ_CHUNK):
        buf.extend(chunk)


def _decode(buf: bytearray) -> str:
    return buf.decode("utf-8", errors="replace")


class HookRunner:
    """Executes a single hook command and classifies the result.

    ``run`` never raises for runtime failures: spawn errors, broken stdin,
    timeouts and odd exit codes all come back as a :class:`HookOutcome`.
    """

    def __init__(
        self,
        settings: HookSettings | None = None,
        launcher: ProcessLauncher | None = None,
    ) -> None:
        self._settings = settings or HookSettings()
        self._launcher = launcher or ShellProcessLauncher()

    def build_env(self, invocation: HookInvocationInput) -> dict[str, str]:
        """Parent environment plus the session id and project root."""
        env = dict(os.environ)
        env[self._settings.session_env_var] = invocation.session_id
        env[self._settings.project_root_env_var] = invocation.project_root
        return env

    async def run(self, command: HookCommand, invocation: HookInvocationInput) -> HookOutcome:
        """Run *command* with *invocation* on stdin and return its outcome."""
        timeout_ms = command.timeout_ms
        payload = invocation.to_json().encode("utf-8")
        debug = self._settings.debug

        if debug:
            logger.info("Executing hook: %s", command.command)
            logger.info("Hook input: %s", invocation.to_json())

        started = time.monotonic()
        try:
            handle = await self._launcher.start(
                command.command, cwd=invocation.cwd, env=self.build_env(invocation),
            )
        except (OSError, ValueError) as exc:
            # ValueError: NUL bytes in the command line or environment
            logger.warning("Failed to spawn hook %r: %s", command.command, exc)
            return HookOutcome(
                exit_code=1,
                stderr=f"Failed to spawn hook: {exc}",
                command=command.command,
                state=RunState.SPAWN_FAILED,
            )

        stdout_buf = bytearray()
        stderr_buf = bytearray()
        try:
            exit_code: int | None = await asyncio.wait_for(
                self._communicate(handle, payload, stdout_buf, stderr_buf),
                timeout=timeout_ms / 1000,
            )
        except _StdinWriteError as exc:
            logger.warning("Failed to write input to hook %r: %s", command.command, exc)
            await self._kill(handle)
            return HookOutcome(
                exit_code=1,
                stderr=f"Failed to write to stdin: {exc}",
                command=command.command,
                state=RunState.STDIN_WRITE_FAILED,
                duration_ms=_elapsed_ms(started),
            )
        except TimeoutError:
            logger.warning("Hook timed out after %dms: %s", timeout_ms, command.command)
            await self._kill(handle)
            return self._classify(
                command,
                exit_code=1,
                stdout=_decode(stdout_buf),
                stderr=f"Hook timed out after {timeout_ms}ms\n{_decode(stderr_buf)}",
                state=RunState.TIMED_OUT,
                started=started,
            )
        except asyncio.CancelledError:
            handle.terminate()
            raise

        return self._classify(
            command,
            exit_code=1 if exit_code is None else exit_code,
            stdout=_decode(stdout_buf),
            stderr=_decode(stderr_buf),
            state=RunState.COMPLETED,
            started=started,
        )

    async def _communicate(
        self,
        handle: ProcessHandle,
        payload: bytes,
        stdout_buf: bytearray,
        stderr_buf: bytearray,
    ) -> int | None:
        readers = [
            asyncio.ensure_future(_drain(handle.stdout, stdout_buf)),
            asyncio.ensure_future(_drain(handle.stderr, stderr_buf)),
        ]
        try:
            try:
                await handle.write_stdin(payload)
            except OSError as exc:
                raise _StdinWriteError(str(exc) or type(exc).__name__) from exc
            await asyncio.gather(*readers)
            return await handle.wait()
        finally:
            for task in readers:
                task.cancel()

    async def _kill(self, handle: ProcessHandle) -> None:
        """Terminate *handle* and reap it so no zombie is left behind."""
        handle.terminate()
        try:
            await asyncio.wait_for(handle.wait(), timeout=self._settings.kill_grace_sec)
        except TimeoutError:
            logger.warning("Hook process %d did not exit after kill", handle.pid)

    def _classify(
        self,
        command: HookCommand,
        *,
        exit_code: int,
        stdout: str,
        stderr: str,
        state: RunState,
        started: float,
    ) -> HookOutcome:
        response = parse_hook_response(stdout)
        blocks = decide_blocks(exit_code, response)
        duration_ms = _elapsed_ms(started)

        if self._settings.debug:
            logger.info("Hook completed in %dms with exit code %d", duration_ms, exit_code)
            if blocks:
                logger.warning("Hook BLOCKED operation: %s", command.command)

        return HookOutcome(
            exit_code=exit_code,
            stdout=stdout,
            stderr=stderr,
            blocks=blocks,
            response=response,
            command=command.command,
            state=state,
            duration_ms=duration_ms,
        )


def _elapsed_ms(started: float) -> int:
    return int((time.monotonic() - started) * 1000)
