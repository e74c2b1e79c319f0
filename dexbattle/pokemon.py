"""Pokemon lookup helpers that adapt API data into DexBattle models."""

from __future__ import annotations

from typing import Dict

from . import api
from .models import AbilityRef, CreatureRecord, CreatureStats, PokemonDetail, PokemonSummary
from .text import display_name


def extract_id(url: str) -> int:
    """Return the numeric id at the end of a PokeAPI resource URL."""
    return int(url.rstrip("/").split("/")[-1])


def to_record(pk) -> CreatureRecord:
    """Convert a pypokedex.Pokemon into the engine's record.

    Args:
        pk: pypokedex Pokemon object.

    Returns:
        Record with API identifiers for the name, types and abilities.
    """
    # pk.base_stats is a namedtuple in the fixed PokeAPI order.
    stats = CreatureStats(
        hp=pk.base_stats.hp,
        attack=pk.base_stats.attack,
        defense=pk.base_stats.defense,
        special_attack=pk.base_stats.sp_atk,
        special_defense=pk.base_stats.sp_def,
        speed=pk.base_stats.speed,
    )
    return CreatureRecord(
        id=pk.dex,
        name=pk.name,
        types=list(pk.types),
        abilities=[AbilityRef(name=ability.name, is_hidden=ability.is_hidden) for ability in pk.abilities],
        stats=stats,
        sprite_url=_sprite_url(pk),
        height_dm=pk.height,  # decimeters per pypokedex/PokeAPI
        weight_hg=pk.weight,  # hectograms per pypokedex/PokeAPI
    )


def _sprite_url(pk) -> str:
    """Prefer official artwork, falling back to the default front sprite."""
    # pk.other_sprites maps names like 'official-artwork' to front/back sprite dicts.
    artwork = (getattr(pk, "other_sprites", None) or {}).get("official-artwork")
    if artwork is not None:
        official = (artwork.front or {}).get("default")
        if official:
            return official
    # pk.sprites.front is a dict with keys like 'default' and 'shiny'.
    return (pk.sprites.front or {}).get("default") or ""


def to_detail(record: CreatureRecord) -> PokemonDetail:
    """Render a record with display names and derived units."""
    return PokemonDetail(
        id=record.id,
        name=display_name(record.name),
        height_dm=record.height_dm,
        height_m=record.height_dm / 10.0,  # convert dm -> m
        weight_hg=record.weight_hg,
        weight_kg=record.weight_hg / 10.0,  # convert hg -> kg
        types=[display_name(type_name) for type_name in record.types],
        abilities=[display_name(ability.name) for ability in record.abilities],
        stats=record.stats,
        sprite_url=record.sprite_url,
    )


def to_summary(resource: Dict[str, str]) -> PokemonSummary:
    """Convert a PokeAPI named resource into a listing entry."""
    return PokemonSummary(
        id=extract_id(resource["url"]),
        name=display_name(resource["name"]),
        url=resource["url"],
    )


def get_record(name_or_dex: str) -> CreatureRecord:
    """Look up a Pokemon and return the engine record.

    Raises:
        PokemonNotFoundError: If the Pokemon does not exist.
    """
    return to_record(api._lookup(name_or_dex))


def get_pokemon(name_or_dex: str) -> PokemonDetail:
    """Look up a Pokemon and return its detail entry.

    Args:
        name_or_dex: Pokemon name (e.g., "garchomp") or dex number (e.g., "445").

    Returns:
        Stats, typing, abilities, measurements and sprite.
    """
    return to_detail(get_record(name_or_dex))
