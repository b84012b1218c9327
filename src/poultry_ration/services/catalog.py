"""Ingredient catalog loading with standard-ingredient fallbacks."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from poultry_ration.domain.ingredients import (
    CatalogSource,
    Ingredient,
    IngredientCatalog,
    IngredientRole,
)
from poultry_ration.services.composer import classify_ingredient
from poultry_ration.services.reference_data import STANDARD_INGREDIENTS
from poultry_ration.services.vocabulary import (
    DEFAULT_VOCABULARY,
    ClassificationVocabulary,
)

_logger = logging.getLogger(__name__)


class IngredientRepository(Protocol):
    """Read access to the ingredient catalog."""

    def list_ingredients(self) -> list[Ingredient]:
        """Return all ingredients, richest in protein first."""


@dataclass
class CatalogService:
    """Loads the ingredient catalog and fills gaps with standard ingredients."""

    repository: IngredientRepository
    standard_ingredients: Sequence[Ingredient] = STANDARD_INGREDIENTS
    vocabulary: ClassificationVocabulary = DEFAULT_VOCABULARY
    augment: bool = True
    fallback_on_store_error: bool = True

    def load(self) -> IngredientCatalog:
        """Return the working ingredient list for one calculation."""
        stored = self._fetch()
        if not stored:
            _logger.warning("Ingredient catalog is empty, using standard ingredients")
            return IngredientCatalog(
                ingredients=_by_protein(self.standard_ingredients),
                source=CatalogSource.DEFAULT,
            )
        if not self.augment:
            return IngredientCatalog(
                ingredients=_by_protein(stored), source=CatalogSource.STORE
            )

        missing = self._missing_standards(stored)
        if not missing:
            return IngredientCatalog(
                ingredients=_by_protein(stored), source=CatalogSource.STORE
            )
        _logger.info(
            "Augmenting ingredient catalog with %s",
            ", ".join(item.name for item in missing),
        )
        return IngredientCatalog(
            ingredients=_by_protein([*stored, *missing]),
            source=CatalogSource.AUGMENTED,
        )

    def _fetch(self) -> list[Ingredient]:
        try:
            return self.repository.list_ingredients()
        except Exception:
            if not self.fallback_on_store_error:
                raise
            _logger.exception("Ingredient catalog lookup failed")
            return []

    def _missing_standards(self, stored: Sequence[Ingredient]) -> list[Ingredient]:
        """Return standard ingredients covering roles and categories not in stock."""
        roles = {classify_ingredient(item, self.vocabulary) for item in stored}
        categories = {
            self.vocabulary.mineral_category(item.name)
            for item in stored
            if classify_ingredient(item, self.vocabulary)
            is IngredientRole.MINERAL_ADDITIVE
        }
        missing: list[Ingredient] = []
        for standard in self.standard_ingredients:
            role = classify_ingredient(standard, self.vocabulary)
            if role in {IngredientRole.ENERGY_SOURCE, IngredientRole.PROTEIN_SOURCE}:
                if role in roles:
                    continue
                roles.add(role)
                missing.append(standard)
            elif role is IngredientRole.MINERAL_ADDITIVE:
                category = self.vocabulary.mineral_category(standard.name)
                if category in categories:
                    continue
                categories.add(category)
                missing.append(standard)
        return missing


def _by_protein(ingredients: Sequence[Ingredient]) -> list[Ingredient]:
    return sorted(ingredients, key=lambda item: item.protein_percent, reverse=True)
