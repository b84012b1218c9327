"""Domain models for feed ingredients."""

from dataclasses import dataclass
from enum import StrEnum


class IngredientRole(StrEnum):
    """Functional role of an ingredient within one ration."""

    ENERGY_SOURCE = "energy_source"
    PROTEIN_SOURCE = "protein_source"
    MINERAL_ADDITIVE = "mineral_additive"
    FIBER_FILLER = "fiber_filler"
    UNUSED = "unused"


class CatalogSource(StrEnum):
    """Provenance of a loaded ingredient catalog."""

    STORE = "store"
    AUGMENTED = "augmented"
    DEFAULT = "default"


@dataclass(frozen=True)
class Ingredient:
    """A feed ingredient with its composition."""

    id: str
    name: str
    protein_percent: float
    energy_kcal_per_kg: float
    price_per_kg: float | None = None


@dataclass(frozen=True)
class IngredientCatalog:
    """Ingredients available for one calculation."""

    ingredients: list[Ingredient]
    source: CatalogSource
