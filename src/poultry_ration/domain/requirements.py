"""Domain models for nutrient requirements."""

from dataclasses import dataclass
from enum import StrEnum


class BreedCategory(StrEnum):
    """Normalized bird breed category."""

    LAYER = "layer"
    BROILER = "broiler"


class Stage(StrEnum):
    """Normalized growth stage."""

    STARTER = "starter"
    GROWER = "grower"
    FINISHER = "finisher"
    LAYER = "layer"


class RequirementSource(StrEnum):
    """Where a resolved requirement came from."""

    TEMPLATE = "template"
    DEFAULT = "default"


@dataclass(frozen=True)
class NutrientRequirement:
    """Target nutrient levels for one ration."""

    protein_percent: float
    energy_kcal_per_kg: float
    daily_consumption_grams_per_bird: float


@dataclass(frozen=True)
class ResolvedRequirement:
    """A requirement resolved for a breed and stage."""

    breed: BreedCategory
    stage: Stage
    requirement: NutrientRequirement
    source: RequirementSource
