"""Formatting helpers shared by the engine and the catalog."""

from __future__ import annotations


def display_name(name: str) -> str:
    """Turn a PokeAPI identifier into a display name.

    Only the first character is capitalized and hyphens become spaces, so
    ``"mr-mime"`` becomes ``"Mr mime"``.
    """
    if not name:
        return name
    return name[0].upper() + name[1:].replace("-", " ")


def format_multiplier(value: float) -> str:
    """Render a type multiplier without trailing zeros (``2``, ``0.5``, ``0.25``)."""
    return f"{value:g}"
