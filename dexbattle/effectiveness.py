"""Type effectiveness resolution and matchup explanations."""

from __future__ import annotations

from typing import Callable, List, Optional, Sequence

from .models import TypeRelations
from .text import display_name, format_multiplier

# Returns the offensive relations for an attacking type, or None when unknown.
TypeLookup = Callable[[str], Optional[TypeRelations]]


def single_type_multiplier(relations: TypeRelations, defend_types: Sequence[str]) -> float:
    """Return the damage multiplier for one attacking type.

    Args:
        relations: Offensive relations of the attacking type.
        defend_types: Defending type names.

    Returns:
        Product of per-type modifiers, or 0.0 if any defending type is immune.
    """
    # Multiply type modifiers for dual-typed defenders.
    multiplier = 1.0
    for defend_type in defend_types:
        if defend_type in relations.no_damage_to:
            return 0.0
        if defend_type in relations.double_damage_to:
            multiplier *= 2.0
        elif defend_type in relations.half_damage_to:
            multiplier *= 0.5
    return multiplier


def resolve_multiplier(
    attack_types: Sequence[str],
    defend_types: Sequence[str],
    lookup: TypeLookup,
) -> float:
    """Return the best multiplier any of the attacker's types achieves.

    Args:
        attack_types: Attacker type names.
        defend_types: Defender type names.
        lookup: Source of relations per attacking type.

    Returns:
        Maximum multiplier over the attacking types with data, or 1.0 if none have any.
    """
    # The attacker uses its best type.
    best: Optional[float] = None
    for attack_type in attack_types:
        relations = lookup(attack_type)
        if relations is None:
            # Unknown types contribute nothing.
            continue
        multiplier = single_type_multiplier(relations, defend_types)
        best = multiplier if best is None else max(best, multiplier)
    # No usable type data at all degrades to neutral.
    return 1.0 if best is None else best


def _matchup_clause(relations: TypeRelations, defend_type: str) -> str:
    label = display_name(defend_type)
    if defend_type in relations.no_damage_to:
        return f"no effect on {label}"
    if defend_type in relations.double_damage_to:
        return f"super effective vs {label}"
    if defend_type in relations.half_damage_to:
        return f"not very effective vs {label}"
    return f"neutral vs {label}"


def describe_matchup(
    attack_types: Sequence[str],
    defend_types: Sequence[str],
    final_multiplier: float,
    lookup: TypeLookup,
) -> str:
    """Explain how the attacker's types fare against the defender.

    Args:
        attack_types: Attacker type names.
        defend_types: Defender type names.
        final_multiplier: Multiplier the engine used for this attacker.
        lookup: Source of relations per attacking type.

    Returns:
        A verdict prefix followed by one clause per known attacking type.
    """
    explanations: List[str] = []
    for attack_type in attack_types:
        relations = lookup(attack_type)
        if relations is None:
            continue
        details = [_matchup_clause(relations, defend_type) for defend_type in defend_types]
        if details:
            multiplier = single_type_multiplier(relations, defend_types)
            explanations.append(
                f"{display_name(attack_type)} attacks are {' and '.join(details)} "
                f"({format_multiplier(multiplier)}x)"
            )

    joined = "; ".join(explanations)
    if final_multiplier == 0.0:
        return f"IMMUNE: {joined}"
    if final_multiplier >= 4.0:
        return f"DOUBLE SUPER EFFECTIVE (4x): {joined}"
    if final_multiplier > 1.0:
        return f"Super Effective ({format_multiplier(final_multiplier)}x): {joined}"
    if final_multiplier < 1.0:
        return f"Not Very Effective ({format_multiplier(final_multiplier)}x): {joined}"
    return f"Neutral damage (1x): {joined}"
