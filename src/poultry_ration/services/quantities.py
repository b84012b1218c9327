"""Convert ration percentages into daily quantities, bags and cost."""

from collections.abc import Sequence
from dataclasses import replace

from poultry_ration.domain.rations import RationLine, RationQuantities
from poultry_ration.services.reference_data import STANDARD_BAG_SIZE_KG


def calculate_quantities(
    lines: Sequence[RationLine],
    daily_grams_per_bird: float,
    bird_count: int,
    bag_size_kg: float = STANDARD_BAG_SIZE_KG,
) -> RationQuantities:
    """Compute per-ingredient mass, bag count, mix statistics and cost."""
    total_daily_grams = daily_grams_per_bird * bird_count
    total_daily_kg = total_daily_grams / 1000
    weighed = [
        replace(line, mass_kg=(line.percentage / 100) * total_daily_kg)
        for line in lines
    ]
    protein, energy = _mixture_profile(weighed)
    cost_per_kg = _cost_per_kg(weighed)
    return RationQuantities(
        lines=weighed,
        total_daily_grams=total_daily_grams,
        total_daily_kg=total_daily_kg,
        bag_count=round(total_daily_kg / bag_size_kg, 2),
        achieved_protein_percent=round(protein, 2),
        achieved_energy_kcal_per_kg=round(energy, 1),
        cost_per_kg=cost_per_kg,
        daily_cost=(
            round(cost_per_kg * total_daily_kg, 2) if cost_per_kg is not None else None
        ),
    )


def _mixture_profile(lines: Sequence[RationLine]) -> tuple[float, float]:
    """Return the percentage-weighted protein and energy of the mix."""
    total = sum(line.percentage for line in lines)
    if total == 0:
        return 0.0, 0.0
    protein = sum(line.percentage * line.ingredient.protein_percent for line in lines)
    energy = sum(line.percentage * line.ingredient.energy_kcal_per_kg for line in lines)
    return protein / total, energy / total


def _cost_per_kg(lines: Sequence[RationLine]) -> float | None:
    """Return the mix price per kg, or None when it cannot be priced.

    An empty mix or any included line without a price leaves the cost unknown.
    """
    included = [line for line in lines if line.percentage > 0]
    if not included or any(line.ingredient.price_per_kg is None for line in included):
        return None
    return round(
        sum(line.percentage / 100 * line.ingredient.price_per_kg for line in included),
        2,
    )
