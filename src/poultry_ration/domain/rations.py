"""Domain models for computed rations."""

from dataclasses import dataclass
from enum import StrEnum

from poultry_ration.domain.ingredients import Ingredient, IngredientRole
from poultry_ration.domain.requirements import (
    BreedCategory,
    NutrientRequirement,
    Stage,
)


class RationStatus(StrEnum):
    """Outcome of a ration calculation."""

    BALANCED = "balanced"
    BALANCED_WITH_DEFAULTS = "balanced_with_defaults"
    UNBALANCEABLE = "unbalanceable"


@dataclass(frozen=True)
class RationLine:
    """One ingredient's share of a ration."""

    ingredient: Ingredient
    percentage: float
    mass_kg: float
    fixed: bool
    role: IngredientRole


@dataclass(frozen=True)
class Composition:
    """Ingredient percentages produced by the composer."""

    lines: list[RationLine]
    balanced: bool


@dataclass(frozen=True)
class RationQuantities:
    """Absolute quantities derived from a composition."""

    lines: list[RationLine]
    total_daily_grams: float
    total_daily_kg: float
    bag_count: float
    achieved_protein_percent: float
    achieved_energy_kcal_per_kg: float
    cost_per_kg: float | None
    daily_cost: float | None


@dataclass(frozen=True)
class RationResult:
    """Full result of a ration calculation, owned by the caller."""

    breed: BreedCategory
    stage: Stage
    bird_count: int
    requirement: NutrientRequirement
    lines: list[RationLine]
    total_daily_grams: float
    total_daily_kg: float
    bag_count: float
    protein_percent: float
    energy_kcal_per_kg: float
    achieved_protein_percent: float
    achieved_energy_kcal_per_kg: float
    cost_per_kg: float | None
    daily_cost: float | None
    status: RationStatus

    @property
    def is_degraded(self) -> bool:
        """Return True when no usable energy/protein balance was found."""
        return self.status is RationStatus.UNBALANCEABLE


@dataclass(frozen=True)
class CycleProjection:
    """Feed needed until the end of the current stage."""

    days_remaining: int
    total_kg: float
    total_bags: int
