"""Deterministic head-to-head battle model.

Everything here is pure: callers hand in fully resolved records and a type
lookup, and get back profiles and an outcome. Intermediate figures travel in
the returned ``BattleTrace`` instead of being logged.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import FrozenSet, Optional, Tuple

from .abilities import AbilityModifiers, apply_abilities
from .effectiveness import TypeLookup, resolve_multiplier
from .models import BattleTrace, CombatantTrace, CreatureRecord, CreatureStats
from .text import display_name, format_multiplier

# Attack minus Special Attack needed to commit to a role.
ROLE_GAP = 15

# Empirical scale: evenly matched Pokemon trade roughly 20-50% HP per turn.
DAMAGE_SCALE = 15
MAX_DAMAGE_FRACTION = 0.50
MIN_DAMAGE_FRACTION = 0.03
SUBSTITUTE_DAMAGE = 0.1

OFFENSE_WEIGHT = 0.30
SURVIVAL_WEIGHT = 0.40
SPEED_WEIGHT = 0.20
EFFICIENCY_TURNS = 10
EFFICIENCY_PER_TURN = 20

SPEED_TIE_EPSILON = 0.01
SIGNIFICANT_SCORE_THRESHOLD = 40
MIRROR_SCORE_MARGIN = 5
INSTANT_WIN_SCORE = 999
STALEMATE_SCORE = 500

BYPASS_TAG = "wonder-guard"


@dataclass(frozen=True)
class BattleProfile:
    """Effective numbers for one combatant against a specific opponent."""

    hp: int
    offense: float
    # How hard the opponent is to hit with this combatant's chosen role.
    defense: float
    speed: float
    type_effectiveness: float
    is_physical: bool
    role: str
    ability_description: str
    critical_abilities: FrozenSet[str]
    modifiers: AbilityModifiers


@dataclass(frozen=True)
class BattleOutcome:
    """Decision produced by the resolver."""

    # 1 or 2; None for a stalemate.
    winner: Optional[int]
    score1: int
    score2: int
    reasoning: str
    trace: BattleTrace


def attack_role(stats: CreatureStats) -> Tuple[bool, str]:
    """Classify a Pokemon as a physical or special attacker.

    Returns:
        ``(is_physical, explanation)``. Close calls default to special so
        damage output is not overestimated.
    """
    difference = stats.attack - stats.special_attack
    if difference >= ROLE_GAP:
        return True, "Physical attacker"
    if difference <= -ROLE_GAP:
        return False, "Special attacker"
    return False, "Mixed attacker, using Special"


def build_profile(attacker: CreatureRecord, defender: CreatureRecord, lookup: TypeLookup) -> BattleProfile:
    """Build the attacker's profile with the defender as context.

    Args:
        attacker: Combatant being profiled.
        defender: Its opponent.
        lookup: Type relation source.

    Returns:
        Effective HP, offense, defense and speed for the attacker.
    """
    type_effectiveness = resolve_multiplier(attacker.types, defender.types, lookup)
    modifiers = apply_abilities(attacker.abilities, defender.types)
    is_physical, role = attack_role(attacker.stats)

    if is_physical:
        raw_offense, raw_defense = attacker.stats.attack, defender.stats.defense
    else:
        raw_offense, raw_defense = attacker.stats.special_attack, defender.stats.special_defense

    return BattleProfile(
        hp=attacker.stats.hp,
        offense=raw_offense * modifiers.offense * type_effectiveness,
        defense=raw_defense * modifiers.defense,
        speed=attacker.stats.speed * modifiers.speed,
        type_effectiveness=type_effectiveness,
        is_physical=is_physical,
        role=role,
        ability_description=modifiers.description,
        critical_abilities=modifiers.critical,
        modifiers=modifiers,
    )


def damage_per_turn(offense: float, defense: float, target_hp: float, type_effectiveness: float) -> float:
    """Estimate damage dealt per turn.

    Immunity returns exactly 0. Otherwise the scaled offense/defense ratio is
    capped at half the target's HP and floored at 3% of it.
    """
    if type_effectiveness == 0.0:
        return 0.0

    # Type effectiveness is already folded into offense.
    base_damage = offense / max(defense, 1) * DAMAGE_SCALE
    capped = min(base_damage, target_hp * MAX_DAMAGE_FRACTION)
    return max(capped, target_hp * MIN_DAMAGE_FRACTION)


def turns_to_ko(target_hp: float, damage: float) -> Tuple[float, float, bool]:
    """Return ``(damage, turns, substituted)`` for knocking out the target.

    Non-positive, NaN or infinite damage is replaced with a token amount and
    the KO is marked unreachable (``math.inf`` turns).
    """
    if damage <= 0 or math.isnan(damage) or math.isinf(damage):
        return SUBSTITUTE_DAMAGE, math.inf, True
    return damage, float(math.ceil(target_hp / max(damage, SUBSTITUTE_DAMAGE))), False


def score(stats: CreatureStats, effective_offense: float, effective_speed: float, turns: float) -> int:
    """Weighted battle score: survivability 40%, offense 30%, speed 20%, plus a quick-KO bonus."""
    offense_score = effective_offense * OFFENSE_WEIGHT
    survival_score = (stats.hp + stats.defense) * SURVIVAL_WEIGHT
    speed_score = effective_speed * SPEED_WEIGHT
    efficiency_bonus = max(0, (EFFICIENCY_TURNS - turns) * EFFICIENCY_PER_TURN)
    if turns < 1:
        efficiency_bonus = 0
    return int(offense_score + survival_score + speed_score + efficiency_bonus)


def _turns_text(turns: float) -> str:
    return "never" if math.isinf(turns) else f"{int(turns)} turns"


def _margin_text(margin: float) -> str:
    if math.isinf(margin):
        return "opponent cannot land a KO"
    return f"{int(margin)} turn advantage"


def resolve_battle(
    profile1: BattleProfile,
    profile2: BattleProfile,
    record1: CreatureRecord,
    record2: CreatureRecord,
) -> BattleOutcome:
    """Decide the matchup from two finished profiles.

    Phases run in order and the first decisive one wins: instant win,
    mutual immunity, one-sided immunity, then damage, speed and score based
    comparison.
    """
    name1, name2 = display_name(record1.name), display_name(record2.name)

    # Phase 1: bypass abilities. Only the holder's own effectiveness is checked.
    if BYPASS_TAG in profile1.critical_abilities and profile1.type_effectiveness <= 1.0:
        return BattleOutcome(
            1,
            INSTANT_WIN_SCORE,
            0,
            f"{name1} is INVINCIBLE with Wonder Guard - opponent has no super-effective moves!",
            BattleTrace(phase="instant_win"),
        )
    if BYPASS_TAG in profile2.critical_abilities and profile2.type_effectiveness <= 1.0:
        return BattleOutcome(
            2,
            0,
            INSTANT_WIN_SCORE,
            f"{name2} is INVINCIBLE with Wonder Guard - opponent has no super-effective moves!",
            BattleTrace(phase="instant_win"),
        )

    # Phase 2 and 3: immunity.
    p1_immune = profile2.type_effectiveness == 0.0
    p2_immune = profile1.type_effectiveness == 0.0
    if p1_immune and p2_immune:
        return BattleOutcome(
            None,
            STALEMATE_SCORE,
            STALEMATE_SCORE,
            "STALEMATE: Both Pokemon are immune to each other's attacks. No winner can be determined.",
            BattleTrace(phase="mutual_immunity"),
        )
    if p1_immune:
        return BattleOutcome(
            1, INSTANT_WIN_SCORE, 0, f"{name1} is IMMUNE to {name2}'s attacks!", BattleTrace(phase="immunity")
        )
    if p2_immune:
        return BattleOutcome(
            2, 0, INSTANT_WIN_SCORE, f"{name2} is IMMUNE to {name1}'s attacks!", BattleTrace(phase="immunity")
        )

    # Phase 4: each side's damage is measured against the other's HP.
    damage1, turns1, substituted1 = turns_to_ko(
        profile2.hp,
        damage_per_turn(profile1.offense, profile1.defense, profile2.hp, profile1.type_effectiveness),
    )
    damage2, turns2, substituted2 = turns_to_ko(
        profile1.hp,
        damage_per_turn(profile2.offense, profile2.defense, profile1.hp, profile2.type_effectiveness),
    )

    # Phase 5: first strike.
    p1_first = profile1.speed > profile2.speed
    p2_first = profile2.speed > profile1.speed
    speed_tie = abs(profile1.speed - profile2.speed) < SPEED_TIE_EPSILON

    # Phase 6: scores.
    score1 = score(record1.stats, profile1.offense, profile1.speed, turns1)
    score2 = score(record2.stats, profile2.offense, profile2.speed, turns2)

    def outcome(winner: int, phase: str, reasoning: str) -> BattleOutcome:
        trace = BattleTrace(
            phase=phase,
            pokemon1=CombatantTrace(
                damage_per_turn=damage1, turns_to_ko=turns1, score=score1, substituted=substituted1
            ),
            pokemon2=CombatantTrace(
                damage_per_turn=damage2, turns_to_ko=turns2, score=score2, substituted=substituted2
            ),
            first_striker=None if speed_tie else (1 if p1_first else 2),
        )
        return BattleOutcome(winner, score1, score2, reasoning, trace)

    # Phase 7: decision. Mirror matches are checked before turn counts.
    if record1.name.lower() == record2.name.lower() and abs(score1 - score2) < MIRROR_SCORE_MARGIN and speed_tie:
        return outcome(
            1,
            "mirror_match",
            f"MIRROR MATCH: Both {name1} are identical. Battle outcome would be a coin flip.",
        )

    if turns1 != turns2:
        if turns1 < turns2:
            winner, name, profile, damage, first = 1, name1, profile1, damage1, p1_first
            own, other = turns1, turns2
        else:
            winner, name, profile, damage, first = 2, name2, profile2, damage2, p2_first
            own, other = turns2, turns1
        reasoning = (
            f"{name} KOs in {_turns_text(own)} vs {_turns_text(other)} ({_margin_text(other - own)}). "
            f"Deals {damage:.1f} damage/turn with {format_multiplier(profile.type_effectiveness)}x type advantage."
        )
        if first:
            reasoning += " Speed advantage ensures first strike."
        return outcome(winner, "turns", reasoning)

    both = f"Both KO in {_turns_text(turns1)}" if not math.isinf(turns1) else "Neither side can land a KO"
    if abs(score1 - score2) > SIGNIFICANT_SCORE_THRESHOLD:
        winner = 1 if score1 > score2 else 2
        return outcome(
            winner,
            "score",
            f"{both}, but {name1 if winner == 1 else name2} wins with superior combat profile "
            f"(Score: {max(score1, score2)} vs {min(score1, score2)}). "
            "Type advantage and stats outweigh speed difference.",
        )
    if speed_tie:
        winner = 1 if score1 >= score2 else 2
        return outcome(
            winner,
            "speed_tie",
            f"{both} with equal speed and similar power (Scores: {score1} vs {score2}). "
            f"{name1 if winner == 1 else name2} edges out marginally.",
        )

    winner = 1 if p1_first else 2
    fast, slow = (profile1.speed, profile2.speed) if p1_first else (profile2.speed, profile1.speed)
    return outcome(
        winner,
        "first_strike",
        f"{both} with similar power (Scores: {score1} vs {score2}), "
        f"but {name1 if winner == 1 else name2} wins by striking first (Speed: {fast:.0f} vs {slow:.0f}).",
    )
