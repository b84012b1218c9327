"""Built-in reference data used when the data store has none."""

from collections.abc import Mapping
from dataclasses import dataclass

from poultry_ration.domain.ingredients import Ingredient
from poultry_ration.domain.requirements import (
    BreedCategory,
    NutrientRequirement,
    Stage,
)

STANDARD_BAG_SIZE_KG = 50.0

DEFAULT_REQUIREMENTS: Mapping[Stage, NutrientRequirement] = {
    Stage.STARTER: NutrientRequirement(
        protein_percent=21,
        energy_kcal_per_kg=2900,
        daily_consumption_grams_per_bird=25,
    ),
    Stage.GROWER: NutrientRequirement(
        protein_percent=19,
        energy_kcal_per_kg=3000,
        daily_consumption_grams_per_bird=80,
    ),
    Stage.FINISHER: NutrientRequirement(
        protein_percent=18,
        energy_kcal_per_kg=3100,
        daily_consumption_grams_per_bird=120,
    ),
    Stage.LAYER: NutrientRequirement(
        protein_percent=16,
        energy_kcal_per_kg=2750,
        daily_consumption_grams_per_bird=110,
    ),
}

# Prices are indicative West African market prices in FCFA per kg.
STANDARD_INGREDIENTS: tuple[Ingredient, ...] = (
    Ingredient(
        id="std-soybean-meal",
        name="Tourteau de soja",
        protein_percent=44,
        energy_kcal_per_kg=2500,
        price_per_kg=450,
    ),
    Ingredient(
        id="std-wheat-bran",
        name="Son de blé",
        protein_percent=16,
        energy_kcal_per_kg=2000,
        price_per_kg=120,
    ),
    Ingredient(
        id="std-yellow-maize",
        name="Maïs jaune",
        protein_percent=9,
        energy_kcal_per_kg=3300,
        price_per_kg=250,
    ),
    Ingredient(
        id="std-oyster-shells",
        name="Coquilles d'huîtres",
        protein_percent=0,
        energy_kcal_per_kg=0,
        price_per_kg=150,
    ),
    Ingredient(
        id="std-salt",
        name="Sel",
        protein_percent=0,
        energy_kcal_per_kg=0,
        price_per_kg=100,
    ),
    Ingredient(
        id="std-premix",
        name="Prémix vitamines/minéraux",
        protein_percent=0,
        energy_kcal_per_kg=0,
        price_per_kg=1500,
    ),
)


@dataclass(frozen=True)
class FixedRateTable:
    """Fixed inclusion rates (percent of the mix) for non-balanced lines."""

    base_rates: Mapping[str, float]
    laying_shell_percent: float = 8.0
    starter_phosphate_percent: float = 1.5
    filler_percent: float = 5.0

    def rates_for(self, breed: BreedCategory, stage: Stage) -> dict[str, float]:
        """Return mineral/additive rates by category for a breed and stage."""
        rates = dict(self.base_rates)
        if breed is BreedCategory.LAYER and stage is Stage.LAYER and "shell" in rates:
            # eggshell calcium
            rates["shell"] = self.laying_shell_percent
        if stage is Stage.STARTER and "phosphate" in rates:
            rates["phosphate"] = self.starter_phosphate_percent
        return rates


DEFAULT_FIXED_RATES = FixedRateTable(
    base_rates={
        "shell": 1.5,
        "premix": 0.5,
        "salt": 0.3,
        "phosphate": 1.0,
        "methionine": 0.2,
        "lysine": 0.1,
    }
)
