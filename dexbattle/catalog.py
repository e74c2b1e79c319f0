"""Listing, search and filter helpers over the PokeAPI catalog."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Optional

from . import api
from .filtering import matches
from .models import FilterRequest, PokemonDetail, PokemonSummary
from .pokemon import extract_id, get_pokemon, to_summary
from .text import display_name

logger = logging.getLogger(__name__)

# Search scans the first page of the listing only.
SEARCH_SCOPE = 1000
FILTER_WORKERS = 8


def list_pokemon(limit: int = 20, offset: int = 0) -> List[PokemonSummary]:
    """Return one page of the Pokemon listing.

    Raises:
        ValueError: If the paging arguments are out of range.
    """
    if limit < 1 or offset < 0:
        raise ValueError("limit must be positive and offset must not be negative")
    logger.info("Fetching Pokemon list: limit=%d, offset=%d", limit, offset)
    page = api._list_pokemon_page(limit, offset)
    return [to_summary(entry) for entry in page.get("results", [])]


def search_pokemon(name: str) -> List[PokemonSummary]:
    """Find Pokemon whose name contains the search term (case-insensitive).

    Raises:
        ValueError: If the search term is blank.
    """
    if not name or not name.strip():
        raise ValueError("Search term required")
    term = name.strip().lower()
    return [summary for summary in list_pokemon(SEARCH_SCOPE, 0) if term in summary.name.lower()]


def list_types() -> List[str]:
    """Return the eighteen battle types."""
    return list(api.BATTLE_TYPES)


def get_pokemon_by_type(type_name: str) -> List[PokemonSummary]:
    """List every Pokemon that has the given type.

    Raises:
        ValueError: If the type is unknown or has no Pokemon.
    """
    logger.info("Fetching Pokemon by type: %s", type_name)
    roster = [to_summary(entry) for entry in api._get_type_roster(type_name)]
    if not roster:
        raise ValueError(f"No Pokemon found for type '{type_name}'")
    return roster


def get_pokemon_by_ability(ability: str) -> List[PokemonSummary]:
    """List every Pokemon that can have the given ability.

    Raises:
        ValueError: If the ability is unknown or has no Pokemon.
    """
    logger.info("Fetching Pokemon by ability: %s", ability)
    roster = [to_summary(entry) for entry in api._get_ability_roster(ability)]
    if not roster:
        raise ValueError(f"No Pokemon found for ability '{ability}'")
    return roster


def list_abilities() -> List[str]:
    """Return every ability as a sorted display name.

    Raises:
        ValueError: If the catalog is empty.
    """
    abilities = sorted(display_name(name) for name in api._list_all_abilities())
    if not abilities:
        raise ValueError("No abilities found")
    return abilities


def _candidates(criteria: FilterRequest) -> List[Dict[str, str]]:
    """Pick the smallest roster that can still contain every match."""
    # No battle type name contains another, so an exact type name can use its roster.
    # Ability terms are substrings and may span several abilities, so they never narrow.
    if criteria.type and criteria.type.strip().lower() in api.BATTLE_TYPES:
        return api._get_type_roster(criteria.type.strip().lower())
    return api._list_all_pokemon()


def _detail_or_none(resource: Dict[str, str]) -> Optional[PokemonDetail]:
    try:
        return get_pokemon(str(extract_id(resource["url"])))
    except ValueError as exc:
        # Entries that fail to resolve are left out of the results.
        logger.warning("Skipping %s: %s", resource.get("name"), exc)
        return None


def filter_pokemon(criteria: FilterRequest) -> List[PokemonSummary]:
    """Return every Pokemon matching all configured criteria.

    Args:
        criteria: Optional bounds, type substring and required abilities.

    Returns:
        Matching Pokemon, in catalog order.

    Raises:
        ValueError: If nothing matches.
    """
    candidates = _candidates(criteria)
    # Details are independent lookups, so resolve them on a small thread pool.
    with ThreadPoolExecutor(max_workers=FILTER_WORKERS) as pool:
        details = list(pool.map(_detail_or_none, candidates))

    results = [
        PokemonSummary(
            id=detail.id,
            name=detail.name,
            url=api._url(f"pokemon/{detail.id}/"),
        )
        for detail in details
        if detail is not None and matches(detail, criteria)
    ]
    logger.info("Filter matched %d of %d Pokemon", len(results), len(candidates))
    if not results:
        raise ValueError("No Pokemon found matching the filter criteria")
    return results
