from __future__ import annotations

from typing import Mapping, Optional

# Variables a template accent overrides inside its own subtree.
ACCENT_VARIABLES: tuple[str, ...] = ("--primary", "--accent", "--ring")

DEFAULT_THEME_VARIABLES: dict[str, str] = {
    "--background": "#ffffff",
    "--foreground": "#0f172a",
    "--primary": "#6d54df",
    "--primary-foreground": "#ffffff",
    "--accent": "#6d54df",
    "--accent-foreground": "#ffffff",
    "--muted-foreground": "#64748b",
    "--destructive": "#ef4444",
    "--ring": "#6d54df",
}


def scope(accent: Optional[str]) -> dict[str, str]:
    """Variable bindings for one template subtree.

    An unset or blank accent inherits the ambient theme. The value is passed
    through as given.
    """
    if accent is None or not accent.strip():
        return {}
    return {name: accent for name in ACCENT_VARIABLES}


def resolve_theme(
    accent: Optional[str],
    ambient: Optional[Mapping[str, str]] = None,
) -> dict[str, str]:
    resolved = dict(DEFAULT_THEME_VARIABLES if ambient is None else ambient)
    resolved.update(scope(accent))
    return resolved


def css_declarations(bindings: Mapping[str, str]) -> str:
    return " ".join(f"{name}: {value};" for name, value in bindings.items())
