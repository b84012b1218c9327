"""Supabase repository for the feed ingredient catalog."""

from dataclasses import dataclass

from supabase import Client

from poultry_ration.domain.ingredients import Ingredient
from poultry_ration.services.catalog import IngredientRepository


@dataclass
class SupabaseIngredientRepository(IngredientRepository):
    """Supabase-backed ingredients from `feed_ingredients`."""

    client: Client

    def list_ingredients(self) -> list[Ingredient]:
        """Return all ingredients, richest in protein first."""
        response = (
            self.client.table("feed_ingredients")
            .select("*")
            .order("protein_percent", desc=True)
            .execute()
        )
        return [_parse_ingredient(row) for row in response.data or []]


def _parse_ingredient(row: dict[str, object]) -> Ingredient:
    price = row.get("price_per_kg")
    return Ingredient(
        id=str(row.get("id", "")),
        name=str(row.get("name", "")),
        protein_percent=float(row.get("protein_percent") or 0.0),
        energy_kcal_per_kg=float(row.get("energy_kcal") or 0.0),
        price_per_kg=float(price) if price is not None else None,
    )
