"""Predicate used by the filter tool."""

from __future__ import annotations

from typing import Optional

from .models import FilterRequest, PokemonDetail


def _in_range(value: int, minimum: Optional[int], maximum: Optional[int]) -> bool:
    """Inclusive bounds check where a missing bound always passes."""
    return (minimum is None or value >= minimum) and (maximum is None or value <= maximum)


def _normalize(text: str) -> str:
    # Display names use spaces where identifiers use hyphens; compare them alike.
    return text.lower().replace("-", " ").strip()


def matches(pokemon: PokemonDetail, criteria: FilterRequest) -> bool:
    """Return True when the Pokemon satisfies every criterion that is set.

    Args:
        pokemon: Pokemon entry to test.
        criteria: Optional bounds, type substring and required abilities.

    Returns:
        Conjunction of all configured checks.
    """
    stats = pokemon.stats
    ranges = (
        (pokemon.height_dm, criteria.min_height, criteria.max_height),
        (pokemon.weight_hg, criteria.min_weight, criteria.max_weight),
        (stats.hp, criteria.min_hp, criteria.max_hp),
        (stats.attack, criteria.min_attack, criteria.max_attack),
        (stats.defense, criteria.min_defense, criteria.max_defense),
        (stats.special_attack, criteria.min_special_attack, criteria.max_special_attack),
        (stats.special_defense, criteria.min_special_defense, criteria.max_special_defense),
        (stats.speed, criteria.min_speed, criteria.max_speed),
        (stats.total, criteria.min_total, criteria.max_total),
    )
    if not all(_in_range(value, low, high) for value, low, high in ranges):
        return False

    if criteria.type:
        wanted = _normalize(criteria.type)
        if not any(wanted in _normalize(type_name) for type_name in pokemon.types):
            return False

    # Every requested ability must appear in at least one of the Pokemon's abilities.
    for wanted_ability in criteria.abilities or []:
        wanted = _normalize(wanted_ability)
        if not any(wanted in _normalize(ability) for ability in pokemon.abilities):
            return False
    return True
