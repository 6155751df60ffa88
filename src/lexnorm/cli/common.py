"""Shared helpers used across the lexnorm CLI modules."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, MutableMapping

import typer
from rich.console import Console
from rich.panel import Panel

from lexnorm.config.settings import Settings
from lexnorm.fields import FieldNormalizers

console = Console()


class CLIError(RuntimeError):
    """Exception raised for user-facing CLI errors."""


@dataclass(slots=True)
class CLIState:
    """State object attached to ``typer.Context`` for downstream commands."""

    settings: Settings
    overrides: Dict[str, Any]
    environment: str
    verbose: bool

    def normalizers(self) -> FieldNormalizers:
        return FieldNormalizers.from_policies(self.settings.policies)


def _merge_dict(dest: MutableMapping[str, Any], src: Mapping[str, Any]) -> None:
    for key, value in src.items():
        if isinstance(value, Mapping) and isinstance(dest.get(key), MutableMapping):
            _merge_dict(dest[key], value)  # type: ignore[index]
        elif isinstance(value, Mapping):
            dest[key] = dict(value)
        else:
            dest[key] = value


def parse_override(argument: str) -> Dict[str, Any]:
    """Parse dotted ``key=value`` overrides into nested dictionaries."""

    if "=" not in argument:
        raise typer.BadParameter("Overrides must be expressed as dotted.key=value")
    dotted, value = argument.split("=", 1)
    cursor: MutableMapping[str, Any] = {}
    current = cursor
    segments = [segment.strip() for segment in dotted.split(".") if segment.strip()]
    if not segments:
        raise typer.BadParameter("Override keys must not be empty")
    for segment in segments[:-1]:
        nested: Dict[str, Any] = {}
        current[segment] = nested
        current = nested
    try:
        parsed_value = json.loads(value)
    except json.JSONDecodeError:
        parsed_value = value
    current[segments[-1]] = parsed_value
    return cursor


def merge_overrides(overrides: Iterable[Dict[str, Any]]) -> Dict[str, Any]:
    """Merge override dictionaries using deep semantics."""

    result: Dict[str, Any] = {}
    for override in overrides:
        _merge_dict(result, override)
    return result


def resolve_settings(environment: str | None, overrides: Dict[str, Any]) -> Settings:
    """Construct :class:`Settings` with environment and overrides applied."""

    payload = dict(overrides)
    if environment:
        payload["environment"] = environment
    return Settings(**payload)


def configure_state(
    ctx: typer.Context,
    *,
    environment: str | None,
    overrides: Iterable[Dict[str, Any]],
    verbose: bool,
) -> None:
    """Populate ``ctx.obj`` with :class:`CLIState`."""

    merged = merge_overrides(overrides)
    try:
        settings = resolve_settings(environment, merged)
    except ValueError as exc:
        raise CLIError(f"Invalid configuration: {exc}") from exc
    ctx.obj = CLIState(
        settings=settings,
        overrides=merged,
        environment=settings.environment,
        verbose=verbose,
    )


def get_state(ctx: typer.Context) -> CLIState:
    """Return the previously configured :class:`CLIState`."""

    state = ctx.obj
    if state is None and ctx.parent is not None:
        state = ctx.find_object(CLIState)
    if not isinstance(state, CLIState):
        raise CLIError("CLI context is not initialised")
    return state


def render_panel(title: str, content: Mapping[str, Any]) -> None:
    """Utility for rendering JSON-like mappings using Rich panels."""

    from rich.json import JSON as RichJSON

    console.print(Panel(RichJSON.from_data(content, default=str), title=title, border_style="cyan"))


def resolve_path(path: str | Path, *, must_exist: bool = True) -> Path:
    target = Path(path).expanduser().resolve()
    if must_exist and not target.exists():
        raise CLIError(f"Path does not exist: {target}")
    return target


__all__ = [
    "CLIError",
    "CLIState",
    "console",
    "parse_override",
    "merge_overrides",
    "resolve_settings",
    "configure_state",
    "get_state",
    "render_panel",
    "resolve_path",
]
