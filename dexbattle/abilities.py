"""Ability effects that shift the battle comparison."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Optional, Sequence

from .models import AbilityRef

OFFENSE = "offense"
DEFENSE = "defense"
SPEED = "speed"
CONDITIONAL_IMMUNITY = "conditional_immunity"
BYPASS_ALL = "bypass_all"
NOTE = "note"

NO_IMPACT = "No significant ability impact"


@dataclass(frozen=True)
class AbilityEffect:
    """Table entry describing what one ability does in the comparison."""

    kind: str
    description: str
    multiplier: float = 1.0
    critical_tag: Optional[str] = None
    # Opponent type that activates a conditional immunity.
    immune_to: Optional[str] = None


@dataclass(frozen=True)
class AbilityModifiers:
    """Accumulated multipliers and notes for one combatant."""

    offense: float = 1.0
    defense: float = 1.0
    speed: float = 1.0
    description: str = NO_IMPACT
    critical: FrozenSet[str] = frozenset()


# "{ability}" in a description is replaced with the ability name as supplied.
ABILITY_EFFECTS: Dict[str, AbilityEffect] = {
    # Game-breaking
    "huge-power": AbilityEffect(OFFENSE, "Attack DOUBLED by {ability}", 2.0, critical_tag="huge-power"),
    "pure-power": AbilityEffect(OFFENSE, "Attack DOUBLED by {ability}", 2.0, critical_tag="huge-power"),
    "wonder-guard": AbilityEffect(
        BYPASS_ALL, "CRITICAL: Only super-effective moves can hit", critical_tag="wonder-guard"
    ),
    # Offense
    "adaptability": AbilityEffect(OFFENSE, "+33% damage from Adaptability", 1.33),
    "guts": AbilityEffect(OFFENSE, "+50% Attack from Guts", 1.5),
    "skill-link": AbilityEffect(OFFENSE, "+30% from multi-hit moves", 1.3),
    # Defense
    "marvel-scale": AbilityEffect(DEFENSE, "+50% Defense from Marvel Scale", 1.5),
    "thick-fat": AbilityEffect(DEFENSE, "+25% bulk vs Fire/Ice", 1.25),
    "solid-rock": AbilityEffect(DEFENSE, "Super-effective damage reduced 25%", 1.25),
    "filter": AbilityEffect(DEFENSE, "Super-effective damage reduced 25%", 1.25),
    # Speed
    "speed-boost": AbilityEffect(SPEED, "+50% Speed boost", 1.5),
    "swift-swim": AbilityEffect(SPEED, "+30% Speed in weather", 1.3),
    "chlorophyll": AbilityEffect(SPEED, "+30% Speed in weather", 1.3),
    "sand-rush": AbilityEffect(SPEED, "+30% Speed in weather", 1.3),
    # Immunity and utility
    "levitate": AbilityEffect(
        CONDITIONAL_IMMUNITY, "IMMUNE to Ground-type", critical_tag="levitate", immune_to="ground"
    ),
    "water-absorb": AbilityEffect(NOTE, "Heals from certain type attacks"),
    "volt-absorb": AbilityEffect(NOTE, "Heals from certain type attacks"),
    "flash-fire": AbilityEffect(NOTE, "Heals from certain type attacks"),
    # Intimidate acts on the opponent, which this model does not simulate.
    "intimidate": AbilityEffect(NOTE, "Lowers opponent Attack 33%"),
    "unaware": AbilityEffect(NOTE, "Ignores opponent's stat boosts"),
}


def normalize_ability(name: str) -> str:
    """Return the table key for an ability name ("Huge Power" -> "huge-power")."""
    return name.strip().lower().replace(" ", "-")


def apply_abilities(abilities: Sequence[AbilityRef], opponent_types: Sequence[str]) -> AbilityModifiers:
    """Fold every recognized ability into multipliers, notes and critical tags.

    Args:
        abilities: The combatant's abilities, in supplied order.
        opponent_types: The opponent's type names.

    Returns:
        Combined modifiers; unrecognized abilities leave everything at 1.0.
    """
    multipliers = {OFFENSE: 1.0, DEFENSE: 1.0, SPEED: 1.0}
    descriptions: List[str] = []
    critical: List[str] = []

    for ability in abilities:
        effect = ABILITY_EFFECTS.get(normalize_ability(ability.name))
        if effect is None:
            continue
        if effect.kind == CONDITIONAL_IMMUNITY and effect.immune_to not in opponent_types:
            # Immunity only matters when the opponent actually carries the type.
            continue
        if effect.kind in multipliers:
            multipliers[effect.kind] *= effect.multiplier
        # Bypass-all has no numeric multiplier; the resolver reads its critical tag.
        descriptions.append(effect.description.format(ability=ability.name))
        if effect.critical_tag:
            critical.append(effect.critical_tag)

    return AbilityModifiers(
        offense=multipliers[OFFENSE],
        defense=multipliers[DEFENSE],
        speed=multipliers[SPEED],
        description="; ".join(descriptions) if descriptions else NO_IMPACT,
        critical=frozenset(critical),
    )
