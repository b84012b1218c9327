"""Supabase repository for ration requirement templates."""

from dataclasses import dataclass

from supabase import Client

from poultry_ration.domain.requirements import (
    BreedCategory,
    NutrientRequirement,
    Stage,
)
from poultry_ration.services.requirements import RequirementRepository


@dataclass
class SupabaseRequirementRepository(RequirementRepository):
    """Supabase-backed requirement templates from `feed_rations`."""

    client: Client

    def get_requirement(
        self, breed: BreedCategory, stage: Stage
    ) -> NutrientRequirement | None:
        """Return the template for a breed and stage, if present."""
        response = (
            self.client.table("feed_rations")
            .select("*")
            .eq("breed", breed.value)
            .eq("stage", stage.value)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_requirement(response.data[0])


def _parse_requirement(row: dict[str, object]) -> NutrientRequirement:
    """Parse a `feed_rations` row into a requirement.

    Rows with missing, non-numeric or out-of-range values are rejected so the
    resolver can fall back to the default table.
    """
    try:
        requirement = NutrientRequirement(
            protein_percent=float(row["protein_percentage"]),
            energy_kcal_per_kg=float(row["energy_kcal"]),
            daily_consumption_grams_per_bird=float(
                row["daily_consumption_per_bird_grams"]
            ),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise RuntimeError(f"Malformed requirement template: {row!r}") from exc
    if not (
        0 <= requirement.protein_percent <= 100  # noqa: PLR2004
        and requirement.energy_kcal_per_kg > 0
        and requirement.daily_consumption_grams_per_bird > 0
    ):
        raise RuntimeError(f"Requirement template out of range: {row!r}")
    return requirement
