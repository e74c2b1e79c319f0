"""Tests for the filter predicate."""

from __future__ import annotations

import pytest

from dexbattle.filtering import matches
from dexbattle.models import CreatureStats, FilterRequest, PokemonDetail


@pytest.fixture
def garchomp() -> PokemonDetail:
    return PokemonDetail(
        id=445,
        name="Garchomp",
        height_dm=19,
        height_m=1.9,
        weight_hg=950,
        weight_kg=95.0,
        types=["Dragon", "Ground"],
        abilities=["Sand veil", "Rough skin"],
        stats=CreatureStats(hp=108, attack=130, defense=95, special_attack=80, special_defense=85, speed=102),
        sprite_url="",
    )


def test_empty_criteria_match_everything(garchomp: PokemonDetail) -> None:
    assert matches(garchomp, FilterRequest())


@pytest.mark.parametrize(
    ("criteria", "expected"),
    [
        ({"min_attack": 130}, True),
        ({"min_attack": 131}, False),
        ({"max_speed": 102}, True),
        ({"max_speed": 101}, False),
        ({"min_height": 19, "max_height": 19}, True),
        ({"max_weight": 900}, False),
        ({"min_total": 600, "max_total": 600}, True),
        ({"min_total": 601}, False),
        ({"min_hp": 100, "max_defense": 90}, False),
    ],
)
def test_ranges_are_inclusive(garchomp: PokemonDetail, criteria, expected) -> None:
    """Bounds include their endpoints; every configured range must pass."""
    assert matches(garchomp, FilterRequest(**criteria)) is expected


def test_type_is_case_insensitive_substring(garchomp: PokemonDetail) -> None:
    assert matches(garchomp, FilterRequest(type="GROUND"))
    assert matches(garchomp, FilterRequest(type="drag"))
    assert not matches(garchomp, FilterRequest(type="fire"))


def test_every_requested_ability_is_required(garchomp: PokemonDetail) -> None:
    """Abilities match as substrings; hyphenated identifiers compare like display names."""
    assert matches(garchomp, FilterRequest(abilities=["rough-skin"]))
    assert matches(garchomp, FilterRequest(abilities=["Rough Skin", "veil"]))
    assert not matches(garchomp, FilterRequest(abilities=["rough skin", "levitate"]))
    assert matches(garchomp, FilterRequest(abilities=[]))
