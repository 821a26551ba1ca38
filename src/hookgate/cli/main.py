"""CLI entry point for hookgate."""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from typing import Any

import click

from hookgate.cli.output import print_outcomes
from hookgate.types.hooks import HookEvent

EXIT_BLOCKED = 2


def _configure_logging(verbose: bool, use_rich: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    if use_rich:
        from rich.console import Console
        from rich.logging import RichHandler

        handler: logging.Handler = RichHandler(
            console=Console(stderr=True), show_path=False, rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    root = logging.getLogger("hookgate")
    root.handlers[:] = [handler]
    root.setLevel(level)


def _parse_json_option(value: str | None, name: str) -> dict[str, Any] | None:
    if value is None:
        return None
    try:
        data = json.loads(value)
    except json.JSONDecodeError as e:
        raise click.ClickException(f"{name}: invalid JSON: {e}")
    if not isinstance(data, dict):
        raise click.ClickException(f"{name}: must be a JSON object")
    return data


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Verbose logging")
@click.option("--rich/--no-rich", default=None, help="Rich terminal output (default: auto)")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, rich: bool | None) -> None:
    """hookgate -- run tool lifecycle hooks.

    \b
    Usage:
      hookgate run PreToolUse --tool Bash --params '{"command": "ls"}'
      hookgate run PostToolUse --tool Write --result '{"success": true}'
      hookgate events
      hookgate config list
      hookgate config validate .hookgate/hooks.json
    """
    use_rich = rich if rich is not None else sys.stderr.isatty()
    ctx.ensure_object(dict)
    ctx.obj["use_rich"] = use_rich
    _configure_logging(verbose, use_rich)


@cli.command("run")
@click.argument("event", type=click.Choice([e.value for e in HookEvent]))
@click.option("--tool", "-t", default=None, help="Tool name")
@click.option("--params", default=None, help="Tool parameters as a JSON object")
@click.option("--result", "tool_result", default=None, help="Tool result as a JSON object (PostToolUse)")
@click.option("--prompt", default=None, help="User prompt (UserPromptSubmit)")
@click.option("--data", "event_data", default=None, help="Extra event data as a JSON object")
@click.option("--session", "-s", default=None, help="Session ID")
@click.option("--cwd", default=None, help="Working directory")
@click.option("--hooks-file", "-f", default=None, type=click.Path(dir_okay=False), help="Hooks JSON file")
@click.option("--debug", is_flag=True, default=False, help="Log hook execution traces")
@click.pass_context
def run_cmd(
    ctx: click.Context,
    event: str,
    tool: str | None,
    params: str | None,
    tool_result: str | None,
    prompt: str | None,
    event_data: str | None,
    session: str | None,
    cwd: str | None,
    hooks_file: str | None,
    debug: bool,
) -> None:
    """Dispatch EVENT once and print the verdict.

    Exits 2 when a block-capable event is blocked.
    """
    from dataclasses import replace

    from hookgate.core.config import load_hook_registry, load_settings
    from hookgate.hooks.manager import HookManager
    from hookgate.hooks.registry import HookConfigError
    from hookgate.hooks.session import HookSession
    from hookgate.hooks.verdict import aggregate

    hook_event = HookEvent(event)
    parsed_params = _parse_json_option(params, "--params")
    parsed_result = _parse_json_option(tool_result, "--result")
    parsed_data = _parse_json_option(event_data, "--data")
    if parsed_result is not None and hook_event is not HookEvent.POST_TOOL_USE:
        raise click.ClickException("--result is only valid for PostToolUse")

    try:
        settings = load_settings(cwd)
        if debug:
            settings = replace(settings, debug=True)
        registry = load_hook_registry(cwd, path=hooks_file, settings=settings)
    except HookConfigError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    if debug:
        logging.getLogger("hookgate").setLevel(logging.INFO)

    hook_session = HookSession(HookManager(registry, settings=settings), session_id=session, cwd=cwd)
    outcomes = asyncio.run(hook_session.fire(
        hook_event,
        tool_name=tool,
        tool_params=parsed_params,
        tool_result=parsed_result,
        user_prompt=prompt,
        event_data=parsed_data,
    ))
    verdict = aggregate(outcomes)

    if ctx.obj.get("use_rich"):
        from hookgate.cli.output import RichOutcomePrinter

        RichOutcomePrinter().print_outcomes(outcomes, verdict)
    else:
        print_outcomes(outcomes, verdict)

    if verdict.blocked and hook_event.can_block:
        raise SystemExit(EXIT_BLOCKED)


def _register_subcommands() -> None:
    """Register CLI subcommands."""
    from hookgate.cli.commands import config_cmd, events_cmd

    cli.add_command(config_cmd, "config")
    cli.add_command(events_cmd, "events")


_register_subcommands()


def main() -> None:
    """Entry point."""
    cli()


if __name__ == "__main__":
    main()
