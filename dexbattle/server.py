"""Expose FastMCP tools for Pokemon lookups, filtering and battle comparisons."""

from __future__ import annotations

import logging

from mcp.server.fastmcp import FastMCP

from .catalog import (
    filter_pokemon as _filter_pokemon,
    get_pokemon_by_ability as _get_pokemon_by_ability,
    get_pokemon_by_type as _get_pokemon_by_type,
    list_abilities as _list_abilities,
    list_pokemon as _list_pokemon,
    list_types as _list_types,
    search_pokemon as _search_pokemon,
)
from .compare import compare_pokemon as _compare_pokemon
from .models import ComparisonResult, FilterRequest, PokemonDetail, PokemonSummary
from .pokemon import get_pokemon as _get_pokemon

# Each decorated function becomes a structured tool discoverable by MCP hosts.
# Errors are raised as ValueError so clients receive a clean message.

mcp = FastMCP("DexBattle Server")


@mcp.tool()
def get_pokemon(name_or_dex: str) -> PokemonDetail:
    """Fetch stats, typing, abilities and sprite for a Pokemon.

    Args:
        name_or_dex: Pokemon name or national dex number.
    """
    return _get_pokemon(name_or_dex)


@mcp.tool()
def list_pokemon(limit: int = 20, offset: int = 0) -> list[PokemonSummary]:
    """List Pokemon in national dex order.

    Args:
        limit: Page size.
        offset: Number of entries to skip.
    """
    return _list_pokemon(limit=limit, offset=offset)


@mcp.tool()
def search_pokemon(name: str) -> list[PokemonSummary]:
    """Find Pokemon whose name contains the search term."""
    return _search_pokemon(name)


@mcp.tool()
def list_types() -> list[str]:
    """List the eighteen battle types."""
    return _list_types()


@mcp.tool()
def get_pokemon_by_type(type_name: str) -> list[PokemonSummary]:
    """List every Pokemon of a type (e.g., "fire")."""
    return _get_pokemon_by_type(type_name)


@mcp.tool()
def get_pokemon_by_ability(ability: str) -> list[PokemonSummary]:
    """List every Pokemon that can have an ability (e.g., "levitate" or "Huge Power")."""
    return _get_pokemon_by_ability(ability)


@mcp.tool()
def list_abilities() -> list[str]:
    """List every ability name in alphabetical order."""
    return _list_abilities()


@mcp.tool()
def filter_pokemon(criteria: FilterRequest) -> list[PokemonSummary]:
    """Find Pokemon matching stat ranges, a type and required abilities.

    Args:
        criteria: Optional filters; set a type or ability to keep the scan small.
    """
    return _filter_pokemon(criteria)


@mcp.tool()
def compare_pokemon(pokemon1: str, pokemon2: str) -> ComparisonResult:
    """Predict which of two Pokemon wins a one-on-one battle.

    Args:
        pokemon1: Name or national dex number of the first Pokemon.
        pokemon2: Name or national dex number of the second Pokemon.

    Returns:
        Winner, scores, reasoning, type multipliers, ability impact and effective stats.
    """
    return _compare_pokemon(pokemon1, pokemon2)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    mcp.run()
