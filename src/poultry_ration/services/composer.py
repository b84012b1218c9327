"""Ration composition using the Pearson Square balancing method."""

import logging
from collections.abc import Sequence

from poultry_ration.domain.ingredients import Ingredient, IngredientRole
from poultry_ration.domain.rations import Composition, RationLine
from poultry_ration.domain.requirements import BreedCategory, Stage
from poultry_ration.services.reference_data import (
    DEFAULT_FIXED_RATES,
    FixedRateTable,
)
from poultry_ration.services.vocabulary import (
    DEFAULT_VOCABULARY,
    ClassificationVocabulary,
)

ENERGY_MAX_PROTEIN = 12
PROTEIN_MIN_PROTEIN = 20
MINERAL_MAX_PROTEIN = 5
FILLER_PROTEIN_RANGE = (10, 20)

_logger = logging.getLogger(__name__)


class RationCompositionError(ValueError):
    """Raised when fixed inclusion rates leave nothing to balance."""


def classify_ingredient(
    ingredient: Ingredient, vocabulary: ClassificationVocabulary = DEFAULT_VOCABULARY
) -> IngredientRole:
    """Assign one functional role to an ingredient."""
    protein = ingredient.protein_percent
    name = ingredient.name
    if protein < ENERGY_MAX_PROTEIN and vocabulary.is_energy_grain(name):
        return IngredientRole.ENERGY_SOURCE
    if protein > PROTEIN_MIN_PROTEIN and vocabulary.is_protein_concentrate(name):
        return IngredientRole.PROTEIN_SOURCE
    if protein < MINERAL_MAX_PROTEIN and vocabulary.mineral_category(name):
        return IngredientRole.MINERAL_ADDITIVE
    low, high = FILLER_PROTEIN_RANGE
    if low <= protein <= high and vocabulary.is_bran(name):
        return IngredientRole.FIBER_FILLER
    return IngredientRole.UNUSED


def classify_ingredients(
    ingredients: Sequence[Ingredient],
    vocabulary: ClassificationVocabulary = DEFAULT_VOCABULARY,
) -> list[tuple[Ingredient, IngredientRole]]:
    """Classify every ingredient, preserving order."""
    return [(item, classify_ingredient(item, vocabulary)) for item in ingredients]


def pearson_square(target: float, low: float, high: float) -> tuple[float, float]:
    """Return the (low, high) mixing shares that hit a target concentration.

    Targets outside the [low, high] interval put the whole share on the
    nearest component.
    """
    if target <= low:
        return 1.0, 0.0
    if target >= high:
        return 0.0, 1.0
    distance_high = abs(target - high)
    distance_low = abs(target - low)
    share_low = distance_high / (distance_high + distance_low)
    return share_low, 1 - share_low


def compose_ration(  # noqa: PLR0913
    ingredients: Sequence[Ingredient],
    target_protein: float,
    stage: Stage,
    breed: BreedCategory,
    vocabulary: ClassificationVocabulary = DEFAULT_VOCABULARY,
    rates: FixedRateTable = DEFAULT_FIXED_RATES,
) -> Composition:
    """Compose a ration whose protein level matches the target.

    Minerals, additives and one fiber filler get fixed rates; the rest of the
    mix is split between the first energy source and the richest protein
    source. Without both sources every line is returned at 0%.
    """
    classified = classify_ingredients(ingredients, vocabulary)
    category_rates = rates.rates_for(breed, stage)

    fixed_lines: list[RationLine] = []
    used: set[int] = set()
    filled_categories: set[str] = set()
    for index, (ingredient, role) in enumerate(classified):
        if role is not IngredientRole.MINERAL_ADDITIVE:
            continue
        category = vocabulary.mineral_category(ingredient.name)
        if category in filled_categories or category not in category_rates:
            continue
        filled_categories.add(category)
        used.add(index)
        fixed_lines.append(
            _line(ingredient, category_rates[category], role, fixed=True)
        )

    for index, (ingredient, role) in enumerate(classified):
        if role is IngredientRole.FIBER_FILLER:
            used.add(index)
            fixed_lines.append(
                _line(ingredient, rates.filler_percent, role, fixed=True)
            )
            break

    fixed_total = sum(line.percentage for line in fixed_lines)
    if fixed_total >= 100:  # noqa: PLR2004
        raise RationCompositionError(
            f"Fixed inclusion rates total {fixed_total:.2f}%, nothing left to balance"
        )
    remaining = 100 - fixed_total

    energy_candidates = [
        (index, item)
        for index, (item, role) in enumerate(classified)
        if role is IngredientRole.ENERGY_SOURCE
    ]
    protein_candidates = [
        (index, item)
        for index, (item, role) in enumerate(classified)
        if role is IngredientRole.PROTEIN_SOURCE
    ]
    if not energy_candidates or not protein_candidates:
        _logger.warning(
            "Cannot balance ration: energy_sources=%s protein_sources=%s",
            len(energy_candidates),
            len(protein_candidates),
        )
        return Composition(
            lines=[_line(item, 0, role, fixed=False) for item, role in classified],
            balanced=False,
        )

    energy_index, energy = energy_candidates[0]
    protein_index, protein = max(
        protein_candidates, key=lambda candidate: candidate[1].protein_percent
    )
    used.update({energy_index, protein_index})

    fixed_protein = (
        sum(line.percentage * line.ingredient.protein_percent for line in fixed_lines)
        / 100
    )
    required_protein = (target_protein - fixed_protein) * 100 / remaining
    energy_share, protein_share = pearson_square(
        required_protein, energy.protein_percent, protein.protein_percent
    )

    lines = [
        *fixed_lines,
        _line(
            energy, energy_share * remaining, IngredientRole.ENERGY_SOURCE, fixed=False
        ),
        _line(
            protein,
            protein_share * remaining,
            IngredientRole.PROTEIN_SOURCE,
            fixed=False,
        ),
    ]
    lines.extend(
        _line(item, 0, IngredientRole.UNUSED, fixed=False)
        for index, (item, _role) in enumerate(classified)
        if index not in used
    )
    lines.sort(key=lambda line: line.percentage, reverse=True)
    return Composition(lines=lines, balanced=True)


def _line(
    ingredient: Ingredient, percentage: float, role: IngredientRole, *, fixed: bool
) -> RationLine:
    return RationLine(
        ingredient=ingredient,
        percentage=round(percentage, 2),
        mass_kg=0.0,
        fixed=fixed,
        role=role,
    )
