"""Pydantic models for DexBattle tool inputs and outputs."""

from __future__ import annotations

from typing import Dict, FrozenSet, List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field


# --- Engine inputs ---


class CreatureStats(BaseModel):
    """Base stat block in the fixed PokeAPI order."""

    model_config = ConfigDict(frozen=True)

    hp: int = Field(ge=0)
    attack: int = Field(ge=0)
    defense: int = Field(ge=0)
    special_attack: int = Field(ge=0)
    special_defense: int = Field(ge=0)
    speed: int = Field(ge=0)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total(self) -> int:
        """Sum of the six base stats."""
        return (
            self.hp
            + self.attack
            + self.defense
            + self.special_attack
            + self.special_defense
            + self.speed
        )


class AbilityRef(BaseModel):
    """Ability slot on a Pokemon."""

    model_config = ConfigDict(frozen=True)

    name: str
    is_hidden: bool = False


class CreatureRecord(BaseModel):
    """Normalized Pokemon record consumed by the battle engine."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(description="National Pokedex number")
    name: str = Field(description="PokeAPI identifier, e.g. 'mr-mime'")
    types: List[str] = Field(min_length=1, max_length=2)
    abilities: List[AbilityRef] = Field(default_factory=list)
    stats: CreatureStats
    sprite_url: str = ""
    height_dm: int = 0
    weight_hg: int = 0


class TypeRelations(BaseModel):
    """Offensive damage relations for one attacking type."""

    model_config = ConfigDict(frozen=True)

    name: str
    double_damage_to: FrozenSet[str] = frozenset()
    half_damage_to: FrozenSet[str] = frozenset()
    no_damage_to: FrozenSet[str] = frozenset()


# --- Comparison outputs ---


class EffectiveStats(BaseModel):
    """Per-combatant breakdown of the numbers the engine used."""

    model_config = ConfigDict(frozen=True)

    base_hp: int
    effective_offense: float = Field(description="After ability and type modifiers")
    effective_defense: float = Field(description="After ability modifiers")
    effective_speed: float = Field(description="After ability modifiers")
    offense_type: str = Field(description="Physical or Special")
    offense_multiplier: float
    defense_multiplier: float
    speed_multiplier: float
    base_defense: int = Field(description="Opponent's base Defense stat")
    base_special_defense: int = Field(description="Opponent's base Special Defense stat")


class CombatantTrace(BaseModel):
    """Intermediate damage and score figures for one combatant."""

    model_config = ConfigDict(frozen=True)

    damage_per_turn: float
    # math.inf when the opponent can never be knocked out.
    turns_to_ko: float
    score: int
    substituted: bool = Field(
        default=False,
        description="True when a degenerate damage value was replaced",
    )


class BattleTrace(BaseModel):
    """Diagnostic side channel attached to every comparison."""

    model_config = ConfigDict(frozen=True)

    phase: str = Field(description="Resolver phase that decided the outcome")
    pokemon1: Optional[CombatantTrace] = None
    pokemon2: Optional[CombatantTrace] = None
    first_striker: Optional[int] = Field(
        default=None, description="1 or 2, None on a speed tie"
    )


class ComparisonResult(BaseModel):
    """Complete result of a head-to-head battle comparison."""

    model_config = ConfigDict(frozen=True)

    pokemon1: str
    pokemon2: str
    winner: str
    score1: int
    score2: int
    reasoning: str
    stat_differences: Dict[str, int] = Field(description="Pokemon 1 minus Pokemon 2")
    type_multiplier_1_vs_2: float
    type_multiplier_2_vs_1: float
    ability_impact1: str
    ability_impact2: str
    type_effectiveness_explanation1: str
    type_effectiveness_explanation2: str
    pokemon1_effective_stats: EffectiveStats
    pokemon2_effective_stats: EffectiveStats
    trace: BattleTrace


# --- Catalog outputs ---


class PokemonDetail(BaseModel):
    """Full Pokemon entry with display names."""

    id: int = Field(description="National Pokedex number")
    name: str
    # Keep both raw and derived units so clients can pick a display.
    height_dm: int = Field(description="Height in decimeters (as provided by API)")
    height_m: float = Field(description="Height in meters (derived)")
    weight_hg: int = Field(description="Weight in hectograms (as provided by API)")
    weight_kg: float = Field(description="Weight in kilograms (derived)")
    types: List[str]
    abilities: List[str]
    stats: CreatureStats
    sprite_url: str


class PokemonSummary(BaseModel):
    """Lightweight listing entry."""

    id: int
    name: str
    url: str


class FilterRequest(BaseModel):
    """Optional criteria for the filter tool; unset fields match everything.

    Height is in decimeters and weight in hectograms, as provided by PokeAPI.
    Narrowing by type or ability avoids scanning the full catalog.
    """

    min_height: Optional[int] = None
    max_height: Optional[int] = None
    min_weight: Optional[int] = None
    max_weight: Optional[int] = None
    min_hp: Optional[int] = None
    max_hp: Optional[int] = None
    min_attack: Optional[int] = None
    max_attack: Optional[int] = None
    min_defense: Optional[int] = None
    max_defense: Optional[int] = None
    min_special_attack: Optional[int] = None
    max_special_attack: Optional[int] = None
    min_special_defense: Optional[int] = None
    max_special_defense: Optional[int] = None
    min_speed: Optional[int] = None
    max_speed: Optional[int] = None
    min_total: Optional[int] = None
    max_total: Optional[int] = None
    type: Optional[str] = Field(default=None, description="Substring of a type name")
    abilities: Optional[List[str]] = Field(
        default=None, description="Every entry must match one of the Pokemon's abilities"
    )
