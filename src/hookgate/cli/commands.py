"""CLI subcommands for hookgate (config, events)."""

from __future__ import annotations

import click

from hookgate.types.hooks import HookEvent


@click.command("events")
def events_cmd() -> None:
    """List hook event names."""
    for event in HookEvent:
        suffix = "  (can block)" if event.can_block else ""
        click.echo(f"{event.value}{suffix}")


@click.group()
def config_cmd() -> None:
    """Inspect hook configuration."""


@config_cmd.command("list")
@click.option("--cwd", default=None, help="Project directory")
def config_list(cwd: str | None) -> None:
    """Show settings and loaded hook rules."""
    from hookgate.core.config import find_hooks_file, load_hook_registry, load_settings
    from hookgate.hooks.registry import HookConfigError

    try:
        settings = load_settings(cwd)
        registry = load_hook_registry(cwd, settings=settings)
    except HookConfigError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    click.echo("Settings:")
    click.echo(f"  debug: {settings.debug}")
    click.echo(f"  default_timeout_ms: {settings.default_timeout_ms}")
    click.echo(f"  session_env_var: {settings.session_env_var}")
    click.echo(f"  project_root_env_var: {settings.project_root_env_var}")

    hooks_file = find_hooks_file(cwd)
    click.echo(f"\nHooks file: {hooks_file or '(none)'}")
    if registry is None or registry.is_empty():
        click.echo("  (no hooks configured)")
        return

    for event, rules in registry:
        click.echo(f"\n{event.value}:")
        for rule in rules:
            click.echo(f"  matcher: {rule.matcher}")
            for cmd in rule.commands:
                click.echo(f"    - {cmd.command}  (timeout {cmd.timeout_ms}ms)")


@config_cmd.command("validate")
@click.argument("path", required=False, type=click.Path(dir_okay=False))
def config_validate(path: str | None) -> None:
    """Validate a hooks file (default: the discovered one)."""
    from hookgate.core.config import find_hooks_file, load_hook_registry
    from hookgate.hooks.registry import HookConfigError

    target = path or find_hooks_file()
    if target is None:
        click.echo("Error: no hooks file found", err=True)
        raise SystemExit(1)

    try:
        registry = load_hook_registry(path=target)
    except HookConfigError as e:
        click.echo(f"Invalid: {e}", err=True)
        raise SystemExit(1)

    if registry is None:
        click.echo(f"Error: cannot load hooks file {target}", err=True)
        raise SystemExit(1)
    click.echo(f"Valid: {target}")
    for event, rules in registry:
        commands = sum(len(r.commands) for r in rules)
        click.echo(f"  {event.value}: {len(rules)} rule(s), {commands} command(s)")
