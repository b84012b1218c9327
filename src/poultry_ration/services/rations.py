"""Automatic ration formulation service."""

import logging
from dataclasses import dataclass

from poultry_ration.domain.ingredients import CatalogSource
from poultry_ration.domain.rations import RationResult, RationStatus
from poultry_ration.domain.requirements import RequirementSource
from poultry_ration.services.catalog import CatalogService
from poultry_ration.services.composer import compose_ration
from poultry_ration.services.quantities import calculate_quantities
from poultry_ration.services.reference_data import (
    DEFAULT_FIXED_RATES,
    STANDARD_BAG_SIZE_KG,
    FixedRateTable,
)
from poultry_ration.services.requirements import RequirementService
from poultry_ration.services.vocabulary import (
    DEFAULT_VOCABULARY,
    ClassificationVocabulary,
)

_logger = logging.getLogger(__name__)


class InvalidRationRequest(ValueError):
    """Raised when ration inputs are rejected before any lookup."""


@dataclass
class RationService:
    """Computes a daily ration for a flock."""

    requirement_service: RequirementService
    catalog_service: CatalogService
    vocabulary: ClassificationVocabulary = DEFAULT_VOCABULARY
    rates: FixedRateTable = DEFAULT_FIXED_RATES
    bag_size_kg: float = STANDARD_BAG_SIZE_KG

    def compute_ration(
        self, breed_label: str, stage_label: str, bird_count: int
    ) -> RationResult:
        """Resolve requirements, compose the mix and size it for the flock."""
        _validate_request(breed_label, stage_label, bird_count)

        resolved = self.requirement_service.resolve(breed_label, stage_label)
        catalog = self.catalog_service.load()
        requirement = resolved.requirement
        composition = compose_ration(
            catalog.ingredients,
            target_protein=requirement.protein_percent,
            stage=resolved.stage,
            breed=resolved.breed,
            vocabulary=self.vocabulary,
            rates=self.rates,
        )
        quantities = calculate_quantities(
            composition.lines,
            daily_grams_per_bird=requirement.daily_consumption_grams_per_bird,
            bird_count=bird_count,
            bag_size_kg=self.bag_size_kg,
        )

        if not composition.balanced:
            status = RationStatus.UNBALANCEABLE
        elif (
            resolved.source is RequirementSource.DEFAULT
            or catalog.source is not CatalogSource.STORE
        ):
            status = RationStatus.BALANCED_WITH_DEFAULTS
        else:
            status = RationStatus.BALANCED

        _logger.info(
            "Computed ration: breed=%s stage=%s birds=%s status=%s total_kg=%.2f",
            resolved.breed,
            resolved.stage,
            bird_count,
            status,
            quantities.total_daily_kg,
        )
        return RationResult(
            breed=resolved.breed,
            stage=resolved.stage,
            bird_count=bird_count,
            requirement=requirement,
            lines=quantities.lines,
            total_daily_grams=quantities.total_daily_grams,
            total_daily_kg=quantities.total_daily_kg,
            bag_count=quantities.bag_count,
            protein_percent=requirement.protein_percent,
            energy_kcal_per_kg=requirement.energy_kcal_per_kg,
            achieved_protein_percent=quantities.achieved_protein_percent,
            achieved_energy_kcal_per_kg=quantities.achieved_energy_kcal_per_kg,
            cost_per_kg=quantities.cost_per_kg,
            daily_cost=quantities.daily_cost,
            status=status,
        )


def _validate_request(breed_label: str, stage_label: str, bird_count: int) -> None:
    if isinstance(bird_count, bool) or not isinstance(bird_count, int):
        raise InvalidRationRequest("Bird count must be an integer")
    if bird_count <= 0:
        raise InvalidRationRequest("Bird count must be positive")
    if not isinstance(breed_label, str) or not breed_label.strip():
        raise InvalidRationRequest("Breed is required")
    if not isinstance(stage_label, str) or not stage_label.strip():
        raise InvalidRationRequest("Stage is required")
