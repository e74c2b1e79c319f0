from dataclasses import dataclass
from types import SimpleNamespace
from typing import Any, Dict, Iterable, List, Optional

import pytest

import dexbattle.api as api
from helpers import TYPE_RELATIONS


@dataclass
class StubBaseStats:
    hp: int
    attack: int
    defense: int
    sp_atk: int
    sp_def: int
    speed: int


class StubSprites:
    def __init__(self, front: Dict[str, Optional[str]], back: Dict[str, Optional[str]]) -> None:
        self.front = front
        self.back = back


class StubPokemon:
    def __init__(
        self,
        name: str,
        dex: int,
        types: Iterable[str],
        base_stats: StubBaseStats,
        abilities: Iterable[SimpleNamespace],
        height_dm: int = 19,
        weight_hg: int = 950,
        official_artwork: Optional[str] = None,
    ) -> None:
        self.name = name
        self.dex = dex
        self.types = tuple(types)
        self.base_stats = base_stats
        self.abilities = list(abilities)
        self.height = height_dm
        self.weight = weight_hg
        self.other_sprites: Dict[str, StubSprites] = {}
        if official_artwork:
            self.other_sprites["official-artwork"] = StubSprites(front={"default": official_artwork}, back={})
        self.sprites = StubSprites(
            front={
                "default": f"https://img.poke/{name}/front.png",
                "shiny": f"https://img.poke/{name}/front-shiny.png",
            },
            back={
                "default": f"https://img.poke/{name}/back.png",
                "shiny": f"https://img.poke/{name}/back-shiny.png",
            },
        )


def _registry() -> Dict[Any, StubPokemon]:
    garchomp = StubPokemon(
        name="garchomp",
        dex=445,
        types=["dragon", "ground"],
        base_stats=StubBaseStats(hp=108, attack=130, defense=95, sp_atk=80, sp_def=85, speed=102),
        abilities=[
            SimpleNamespace(name="sand-veil", is_hidden=False),
            SimpleNamespace(name="rough-skin", is_hidden=True),
        ],
        height_dm=19,
        weight_hg=950,
        official_artwork="https://img.poke/garchomp/official.png",
    )
    pikachu = StubPokemon(
        name="pikachu",
        dex=25,
        types=["electric"],
        base_stats=StubBaseStats(hp=35, attack=55, defense=40, sp_atk=50, sp_def=50, speed=90),
        abilities=[
            SimpleNamespace(name="static", is_hidden=False),
            SimpleNamespace(name="lightning-rod", is_hidden=True),
        ],
        height_dm=4,
        weight_hg=60,
    )
    gyarados = StubPokemon(
        name="gyarados",
        dex=130,
        types=["water", "flying"],
        base_stats=StubBaseStats(hp=95, attack=125, defense=79, sp_atk=60, sp_def=100, speed=81),
        abilities=[SimpleNamespace(name="intimidate", is_hidden=False)],
        height_dm=65,
        weight_hg=2350,
    )
    registry: Dict[Any, StubPokemon] = {}
    for pk in (pikachu, gyarados, garchomp):
        registry[pk.name] = pk
        registry[pk.dex] = pk
    return registry


@pytest.fixture(autouse=True)
def reset_caches() -> None:
    api._cached_fetch.cache_clear()
    api._get_type_relations.cache_clear()
    api._list_all_abilities.cache_clear()


@pytest.fixture(autouse=True)
def stubbed_external_dependencies(monkeypatch: pytest.MonkeyPatch) -> None:
    pokemon_registry = _registry()

    def fake_get(*, name: Optional[str] = None, dex: Optional[int] = None):
        if name is not None:
            key = name.lower()
            if key in pokemon_registry:
                return pokemon_registry[key]
        if dex is not None and dex in pokemon_registry:
            return pokemon_registry[dex]
        raise ValueError("Pokemon not found")

    monkeypatch.setattr(api.pypokedex, "get", fake_get)

    # Dex order for the listing endpoint.
    by_dex = {pk.dex: pk for pk in pokemon_registry.values()}
    listing = [
        {"name": by_dex[dex].name, "url": f"https://pokeapi.co/api/v2/pokemon/{dex}/"}
        for dex in sorted(by_dex)
    ]

    def roster(names: Iterable[str]) -> List[Dict[str, Any]]:
        return [
            {"pokemon": {"name": name, "url": f"https://pokeapi.co/api/v2/pokemon/{pokemon_registry[name].dex}/"}}
            for name in names
        ]

    type_rosters = {
        "electric": roster(["pikachu"]),
        "water": roster(["gyarados"]),
        "flying": roster(["gyarados"]),
        "dragon": roster(["garchomp"]),
        "ground": roster(["garchomp"]),
        "ghost": [],
    }
    ability_rosters = {
        "static": roster(["pikachu"]),
        "lightning-rod": roster(["pikachu"]),
        "intimidate": roster(["gyarados"]),
        "sand-veil": roster(["garchomp"]),
        "rough-skin": roster(["garchomp"]),
    }

    def fake_fetch_json(url: str, context: str) -> Dict[str, Any]:
        path = url.split("/api/v2/", 1)[-1]
        if path.startswith("pokemon?"):
            query = dict(part.split("=") for part in path.split("?", 1)[1].split("&"))
            limit, offset = int(query["limit"]), int(query["offset"])
            page = listing[offset : offset + limit]
            more = offset + limit < len(listing)
            return {
                "count": len(listing),
                "next": f"https://pokeapi.co/api/v2/pokemon?limit={limit}&offset={offset + limit}" if more else None,
                "results": page,
            }
        if path.startswith("ability?"):
            return {"results": [{"name": name} for name in ("static", "levitate", "huge-power", "intimidate")]}
        if path.startswith("type/"):
            type_name = path.rstrip("/").split("/")[-1]
            if type_name in TYPE_RELATIONS:
                relations = {
                    key: [{"name": value} for value in values]
                    for key, values in TYPE_RELATIONS[type_name].items()
                }
                return {"damage_relations": relations, "pokemon": type_rosters.get(type_name, [])}
        if path.startswith("ability/"):
            ability_name = path.rstrip("/").split("/")[-1]
            if ability_name in ability_rosters:
                return {"pokemon": ability_rosters[ability_name]}
        raise ValueError(f"Failed to fetch {context}: 404 Not Found")

    monkeypatch.setattr(api, "_fetch_json", fake_fetch_json)
