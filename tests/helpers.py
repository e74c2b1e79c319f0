"""Shared builders for engine tests."""

from typing import Dict, List, Sequence

from dexbattle.models import AbilityRef, CreatureRecord, CreatureStats, TypeRelations

# Offensive relations, trimmed to the types the fixtures need.
TYPE_RELATIONS: Dict[str, Dict[str, List[str]]] = {
    "normal": {"double_damage_to": [], "half_damage_to": ["rock", "steel"], "no_damage_to": ["ghost"]},
    "ghost": {"double_damage_to": ["ghost", "psychic"], "half_damage_to": ["dark"], "no_damage_to": ["normal"]},
    "electric": {
        "double_damage_to": ["water", "flying"],
        "half_damage_to": ["electric", "grass", "dragon"],
        "no_damage_to": ["ground"],
    },
    "ground": {
        "double_damage_to": ["electric", "fire", "poison", "rock", "steel"],
        "half_damage_to": ["grass", "bug"],
        "no_damage_to": ["flying"],
    },
    "dragon": {"double_damage_to": ["dragon"], "half_damage_to": ["steel"], "no_damage_to": ["fairy"]},
    "water": {
        "double_damage_to": ["fire", "ground", "rock"],
        "half_damage_to": ["water", "grass", "dragon"],
        "no_damage_to": [],
    },
    "flying": {
        "double_damage_to": ["grass", "fighting", "bug"],
        "half_damage_to": ["electric", "rock", "steel"],
        "no_damage_to": [],
    },
    "bug": {
        "double_damage_to": ["grass", "psychic", "dark"],
        "half_damage_to": ["fire", "fighting", "poison", "flying", "ghost", "steel", "fairy"],
        "no_damage_to": [],
    },
}


def relations_table() -> Dict[str, TypeRelations]:
    """Fixture relations as engine models, keyed by attacking type."""
    return {
        name: TypeRelations(
            name=name,
            double_damage_to=frozenset(data["double_damage_to"]),
            half_damage_to=frozenset(data["half_damage_to"]),
            no_damage_to=frozenset(data["no_damage_to"]),
        )
        for name, data in TYPE_RELATIONS.items()
    }


def make_record(
    name: str,
    types: Sequence[str],
    stats: Sequence[int],
    abilities: Sequence[str] = (),
    dex: int = 1,
) -> CreatureRecord:
    """Build an engine record from (hp, atk, def, spa, spd, spe)."""
    hp, attack, defense, special_attack, special_defense, speed = stats
    return CreatureRecord(
        id=dex,
        name=name,
        types=list(types),
        abilities=[AbilityRef(name=ability) for ability in abilities],
        stats=CreatureStats(
            hp=hp,
            attack=attack,
            defense=defense,
            special_attack=special_attack,
            special_defense=special_defense,
            speed=speed,
        ),
    )


