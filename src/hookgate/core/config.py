"""Configuration loading (.env, env vars, TOML settings, JSON hooks files)."""

from __future__ import annotations

import json
import logging
import os
import tomllib
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from hookgate.hooks.registry import HookConfigError, HookRegistry, parse_hooks_config
from hookgate.types.config import HookSettings

logger = logging.getLogger(__name__)

# Load .env from current directory (and parents), won't override existing env vars
load_dotenv()

CONFIG_DIR = ".hookgate"
HOOKS_FILE = "hooks.json"
CONFIG_FILE = "config.toml"

_TRUTHY = {"1", "true", "yes", "on"}


def _search_dirs(cwd: str | Path | None) -> list[Path]:
    dirs: list[Path] = []
    if cwd:
        dirs.append(Path(cwd))
    if Path.cwd() not in dirs:
        dirs.append(Path.cwd())
    return dirs


def load_env_config() -> dict[str, Any]:
    """Load configuration from environment variables."""
    config: dict[str, Any] = {}

    if (debug := os.environ.get("HOOKGATE_DEBUG")) is not None:
        config["debug"] = debug.strip().lower() in _TRUTHY
    if hooks_file := os.environ.get("HOOKGATE_HOOKS_FILE"):
        config["hooks_file"] = hooks_file
    if timeout := os.environ.get("HOOKGATE_TIMEOUT_MS"):
        try:
            config["default_timeout_ms"] = int(timeout)
        except ValueError:
            logger.warning("Ignoring non-integer HOOKGATE_TIMEOUT_MS=%r", timeout)

    return config


def load_toml_config(cwd: str | Path | None = None) -> dict[str, Any]:
    """Load the first .hookgate/config.toml found, falling back to ~/.hookgate/config.toml."""
    candidates = [d / CONFIG_DIR / CONFIG_FILE for d in _search_dirs(cwd)]
    candidates.append(Path.home() / CONFIG_DIR / CONFIG_FILE)

    for toml_path in candidates:
        if not toml_path.is_file():
            continue
        try:
            with open(toml_path, "rb") as f:
                return tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as exc:
            logger.warning("Cannot read config file %s: %s", toml_path, exc)
    return {}


def load_settings(cwd: str | Path | None = None) -> HookSettings:
    """Build HookSettings from the TOML ``[settings]`` table and env overrides."""
    values: dict[str, Any] = {}
    section = load_toml_config(cwd).get("settings", {})
    if isinstance(section, dict):
        for key in ("debug", "default_timeout_ms", "session_env_var", "project_root_env_var"):
            if key in section:
                values[key] = section[key]

    env = load_env_config()
    for key in ("debug", "default_timeout_ms"):
        if key in env:
            values[key] = env[key]

    timeout = values.get("default_timeout_ms")
    if timeout is not None and (not isinstance(timeout, int) or timeout <= 0):
        raise HookConfigError(f"default_timeout_ms must be a positive integer, got {timeout!r}")

    return HookSettings(**values)


def find_hooks_file(cwd: str | Path | None = None) -> Path | None:
    """Locate a hooks JSON file: $HOOKGATE_HOOKS_FILE, then project, then home."""
    if env_path := os.environ.get("HOOKGATE_HOOKS_FILE"):
        return Path(env_path).expanduser()

    candidates = [d / CONFIG_DIR / HOOKS_FILE for d in _search_dirs(cwd)]
    candidates.append(Path.home() / CONFIG_DIR / HOOKS_FILE)
    for path in candidates:
        if path.is_file():
            return path
    return None


def load_hooks_file(path: str | Path) -> dict[str, Any]:
    """Read a hooks JSON file into a dict."""
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise HookConfigError(f"Cannot read hooks file {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise HookConfigError(f"Invalid JSON in hooks file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise HookConfigError(f"Hooks file {path} must contain a JSON object")
    return data


def load_hook_registry(
    cwd: str | Path | None = None,
    *,
    path: str | Path | None = None,
    settings: HookSettings | None = None,
) -> HookRegistry | None:
    """Load the hook registry for a session.

    Sources, first hit wins: explicit *path*, a discovered hooks.json, the
    ``[hooks]`` table of config.toml. Returns None when no hooks are
    configured anywhere, which disables dispatch entirely.
    """
    settings = settings or load_settings(cwd)
    hooks_path = Path(path) if path else find_hooks_file(cwd)

    if hooks_path is not None:
        data = load_hooks_file(hooks_path)
        source = str(hooks_path)
    else:
        data = load_toml_config(cwd).get("hooks")
        if not data:
            return None
        source = CONFIG_FILE

    registry = parse_hooks_config(data, default_timeout_ms=settings.default_timeout_ms)
    logger.debug("Loaded %d hook rule(s) from %s", len(registry), source)
    return registry
