"""Shared API helpers for PokeAPI and pypokedex access."""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import Dict, List

import requests

import pypokedex

from .models import TypeRelations

# requests is used for direct PokeAPI lookups that supplement the pypokedex client.

logger = logging.getLogger(__name__)

API_BASE_URL = os.environ.get("DEXBATTLE_API_URL", "https://pokeapi.co/api/v2").rstrip("/")
HTTP_TIMEOUT = float(os.environ.get("DEXBATTLE_HTTP_TIMEOUT", "10"))

# Page size used when walking the full Pokemon listing.
LIST_BATCH_SIZE = 1000

# The eighteen types that take part in standard battles.
BATTLE_TYPES = (
    "normal",
    "fire",
    "water",
    "electric",
    "grass",
    "ice",
    "fighting",
    "poison",
    "ground",
    "flying",
    "psychic",
    "bug",
    "rock",
    "ghost",
    "dragon",
    "dark",
    "steel",
    "fairy",
)


class PokemonNotFoundError(ValueError):
    """Raised when PokeAPI has no entry for the requested identifier."""


def _url(path: str) -> str:
    """Join a relative PokeAPI path onto the configured base URL."""
    return f"{API_BASE_URL}/{path.lstrip('/')}"


def _api_name(name: str) -> str:
    """Convert a display name ("Huge Power") into a PokeAPI identifier ("huge-power")."""
    return name.strip().lower().replace(" ", "-")


@lru_cache(maxsize=256)
def _cached_fetch(url: str) -> Dict:
    """Fetch JSON data from a URL with caching.

    Args:
        url: PokeAPI URL to request.

    Returns:
        Parsed JSON response data.

    Raises:
        requests.RequestException: If the HTTP request fails.
        ValueError: If the response cannot be decoded as JSON.
    """
    # Cache raw HTTP responses so repeated comparisons and filters do not spam the public API.
    logger.info("Fetching %s", url)
    response = requests.get(url, timeout=HTTP_TIMEOUT)
    response.raise_for_status()
    return response.json()


def _fetch_json(url: str, context: str) -> Dict:
    """Fetch JSON data and wrap errors with context.

    Args:
        url: PokeAPI URL to request.
        context: Description used for error messages.

    Returns:
        Parsed JSON response data.

    Raises:
        ValueError: If the request fails or JSON decoding fails.
    """
    # Wrap lower-level exceptions in a consistent, user-facing error.
    try:
        return _cached_fetch(url)
    except (requests.RequestException, ValueError) as exc:
        logger.warning("Failed to fetch %s: %s", context, exc)
        raise ValueError(f"Failed to fetch {context}: {exc}") from exc


def _lookup(name_or_dex: str):
    """Fetch a pypokedex.Pokemon by name or dex number.

    Args:
        name_or_dex: Pokemon name (case-insensitive) or dex number.

    Returns:
        The pypokedex Pokemon object.

    Raises:
        PokemonNotFoundError: If the Pokemon cannot be found.
    """
    # pypokedex caches responses locally, so repeat lookups avoid hitting the public API.
    # Use numeric dex IDs when the input is digits only.
    identifier = name_or_dex.strip()
    try:
        if identifier.isdigit():
            return pypokedex.get(dex=int(identifier))
        return pypokedex.get(name=_api_name(identifier))
    except Exception as exc:
        logger.warning("Pokemon not found: %s", name_or_dex)
        # Let the client see a clean error string
        raise PokemonNotFoundError(f"Could not find Pokemon '{name_or_dex}': {exc}") from exc


@lru_cache(maxsize=64)
def _get_type_relations(type_name: str) -> TypeRelations:
    """Fetch offensive damage relations for one attacking type.

    Args:
        type_name: Type name to look up.

    Returns:
        Relations keyed by the damage the type deals.
    """
    data = _fetch_json(
        _url(f"type/{type_name.lower()}"),
        context=f"type data for {type_name}",
    )
    relations = data.get("damage_relations", {})
    # The *_from relations are not needed for offensive matchups.
    return TypeRelations(
        name=type_name.lower(),
        **{
            key: frozenset(entry["name"] for entry in relations.get(key, []))
            for key in (
                "double_damage_to",
                "half_damage_to",
                "no_damage_to",
            )
        },
    )


def _list_pokemon_page(limit: int, offset: int) -> Dict:
    """Fetch one page of the Pokemon listing.

    Args:
        limit: Page size.
        offset: Number of entries to skip.

    Returns:
        Listing payload with ``results`` and a ``next`` link.
    """
    return _fetch_json(
        _url(f"pokemon?limit={limit}&offset={offset}"),
        context="Pokemon list",
    )


def _list_all_pokemon() -> List[Dict[str, str]]:
    """Walk every page of the Pokemon listing.

    Returns:
        Named resources (``name`` and ``url``) for every Pokemon.
    """
    entries: List[Dict[str, str]] = []
    offset = 0
    while True:
        page = _list_pokemon_page(LIST_BATCH_SIZE, offset)
        results = page.get("results") or []
        logger.info("Fetched %d Pokemon at offset %d", len(results), offset)
        entries.extend(results)
        if not page.get("next") or not results:
            return entries
        offset += LIST_BATCH_SIZE


def _get_type_roster(type_name: str) -> List[Dict[str, str]]:
    """Return the Pokemon that have a given type.

    Args:
        type_name: Type name to look up.

    Returns:
        Named resources for each Pokemon of the type.
    """
    data = _fetch_json(
        _url(f"type/{type_name.lower()}"),
        context=f"Pokemon of type {type_name}",
    )
    return [entry["pokemon"] for entry in data.get("pokemon", [])]


def _get_ability_roster(ability: str) -> List[Dict[str, str]]:
    """Return the Pokemon that can have a given ability.

    Args:
        ability: Ability display name or identifier.

    Returns:
        Named resources for each Pokemon with the ability.
    """
    data = _fetch_json(
        _url(f"ability/{_api_name(ability)}"),
        context=f"Pokemon with ability {ability}",
    )
    return [entry["pokemon"] for entry in data.get("pokemon", [])]


@lru_cache(maxsize=1)
def _list_all_abilities() -> List[str]:
    """Return every ability identifier known to PokeAPI."""
    data = _fetch_json(_url("ability?limit=1000"), context="ability listing")
    return [entry["name"] for entry in data.get("results", [])]
