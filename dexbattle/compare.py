"""Head-to-head comparison entry point."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Optional

from . import api
from .battle import BattleProfile, build_profile, resolve_battle
from .effectiveness import describe_matchup
from .models import ComparisonResult, CreatureRecord, EffectiveStats, TypeRelations
from .pokemon import get_record
from .text import display_name

logger = logging.getLogger(__name__)

# Winner label when neither side can damage the other.
STALEMATE = "Stalemate"


def _relations_or_none(type_name: str) -> Optional[TypeRelations]:
    try:
        return api._get_type_relations(type_name)
    except ValueError as exc:
        # Unknown types are treated as neutral by the engine.
        logger.warning("No type data for %s: %s", type_name, exc)
        return None


def _effective_stats(profile: BattleProfile, opponent: CreatureRecord) -> EffectiveStats:
    return EffectiveStats(
        base_hp=profile.hp,
        effective_offense=profile.offense,
        effective_defense=profile.defense,
        effective_speed=profile.speed,
        offense_type="Physical" if profile.is_physical else "Special",
        offense_multiplier=profile.modifiers.offense,
        defense_multiplier=profile.modifiers.defense,
        speed_multiplier=profile.modifiers.speed,
        base_defense=opponent.stats.defense,
        base_special_defense=opponent.stats.special_defense,
    )


def _stat_differences(record1: CreatureRecord, record2: CreatureRecord) -> Dict[str, int]:
    first, second = record1.stats, record2.stats
    return {
        "HP": first.hp - second.hp,
        "Attack": first.attack - second.attack,
        "Defense": first.defense - second.defense,
        "Special Attack": first.special_attack - second.special_attack,
        "Special Defense": first.special_defense - second.special_defense,
        "Speed": first.speed - second.speed,
    }


def compare_records(
    record1: CreatureRecord,
    record2: CreatureRecord,
    relations: Dict[str, Optional[TypeRelations]],
) -> ComparisonResult:
    """Run the battle engine over two resolved records.

    Args:
        record1: First combatant.
        record2: Second combatant.
        relations: Type relations keyed by type name; missing or None entries are neutral.

    Returns:
        Winner, scores, reasoning and the numbers behind them.
    """
    lookup = relations.get
    profile1 = build_profile(record1, record2, lookup)
    profile2 = build_profile(record2, record1, lookup)

    outcome = resolve_battle(profile1, profile2, record1, record2)
    for index, combatant in ((1, outcome.trace.pokemon1), (2, outcome.trace.pokemon2)):
        if combatant is not None and combatant.substituted:
            name = record1.name if index == 1 else record2.name
            logger.warning("Invalid damage for %s; treating its KO as unreachable", name)

    if outcome.winner is None:
        winner = STALEMATE
    else:
        winner = display_name(record1.name if outcome.winner == 1 else record2.name)
    logger.info(
        "%s vs %s: %s (%d-%d, %s)",
        record1.name,
        record2.name,
        winner,
        outcome.score1,
        outcome.score2,
        outcome.trace.phase,
    )

    return ComparisonResult(
        pokemon1=display_name(record1.name),
        pokemon2=display_name(record2.name),
        winner=winner,
        score1=outcome.score1,
        score2=outcome.score2,
        reasoning=outcome.reasoning,
        stat_differences=_stat_differences(record1, record2),
        type_multiplier_1_vs_2=profile1.type_effectiveness,
        type_multiplier_2_vs_1=profile2.type_effectiveness,
        ability_impact1=profile1.ability_description,
        ability_impact2=profile2.ability_description,
        type_effectiveness_explanation1=describe_matchup(
            record1.types, record2.types, profile1.type_effectiveness, lookup
        ),
        type_effectiveness_explanation2=describe_matchup(
            record2.types, record1.types, profile2.type_effectiveness, lookup
        ),
        pokemon1_effective_stats=_effective_stats(profile1, record2),
        pokemon2_effective_stats=_effective_stats(profile2, record1),
        trace=outcome.trace,
    )


def compare_pokemon(pokemon1: str, pokemon2: str) -> ComparisonResult:
    """Predict the winner of a battle between two Pokemon.

    Args:
        pokemon1: Name or national dex number of the first Pokemon.
        pokemon2: Name or national dex number of the second Pokemon.

    Returns:
        Comparison result with reasoning and effective stats.

    Raises:
        ValueError: If either identifier is blank.
        PokemonNotFoundError: If either Pokemon does not exist.
    """
    if not pokemon1 or not pokemon1.strip() or not pokemon2 or not pokemon2.strip():
        raise ValueError("Both Pokemon names are required")
    logger.info("Comparing Pokemon: %s vs %s", pokemon1, pokemon2)

    # The two lookups are independent; so are the per-type relation fetches.
    with ThreadPoolExecutor(max_workers=4) as pool:
        futures = [pool.submit(get_record, pokemon1), pool.submit(get_record, pokemon2)]
        try:
            record1, record2 = (future.result() for future in futures)
        except api.PokemonNotFoundError as exc:
            raise api.PokemonNotFoundError("One or both Pokemon not found") from exc

        type_names = sorted(set(record1.types) | set(record2.types))
        relations = dict(zip(type_names, pool.map(_relations_or_none, type_names)))

    return compare_records(record1, record2, relations)
