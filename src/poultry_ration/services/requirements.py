"""Resolve nutrient requirements for a breed and growth stage."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Protocol

from poultry_ration.domain.requirements import (
    BreedCategory,
    NutrientRequirement,
    RequirementSource,
    ResolvedRequirement,
    Stage,
)
from poultry_ration.services.reference_data import DEFAULT_REQUIREMENTS
from poultry_ration.services.vocabulary import (
    DEFAULT_VOCABULARY,
    ClassificationVocabulary,
)

_logger = logging.getLogger(__name__)


class RequirementRepository(Protocol):
    """Read access to requirement templates."""

    def get_requirement(
        self, breed: BreedCategory, stage: Stage
    ) -> NutrientRequirement | None:
        """Return the template for a breed and stage, if present."""


def normalize_breed(
    label: str, vocabulary: ClassificationVocabulary = DEFAULT_VOCABULARY
) -> BreedCategory:
    """Map a free-text breed label to a breed category, broiler by default."""
    return vocabulary.breed_for(label) or BreedCategory.BROILER


def normalize_stage(
    label: str, vocabulary: ClassificationVocabulary = DEFAULT_VOCABULARY
) -> Stage:
    """Map a free-text stage label to a stage, finisher by default."""
    return vocabulary.stage_for(label) or Stage.FINISHER


@dataclass
class RequirementService:
    """Resolves requirements from templates with built-in fallbacks."""

    repository: RequirementRepository
    defaults: Mapping[Stage, NutrientRequirement] = field(
        default_factory=lambda: dict(DEFAULT_REQUIREMENTS)
    )
    vocabulary: ClassificationVocabulary = DEFAULT_VOCABULARY
    fallback_on_store_error: bool = True

    def resolve(self, breed_label: str, stage_label: str) -> ResolvedRequirement:
        """Return the requirement for the labels, using defaults when missing."""
        breed = normalize_breed(breed_label, self.vocabulary)
        stage = normalize_stage(stage_label, self.vocabulary)

        template = self._fetch_template(breed, stage)
        if template is not None:
            return ResolvedRequirement(
                breed=breed,
                stage=stage,
                requirement=template,
                source=RequirementSource.TEMPLATE,
            )

        _logger.warning(
            "No requirement template for breed=%s stage=%s, using defaults",
            breed,
            stage,
        )
        return ResolvedRequirement(
            breed=breed,
            stage=stage,
            requirement=self.defaults[stage],
            source=RequirementSource.DEFAULT,
        )

    def _fetch_template(
        self, breed: BreedCategory, stage: Stage
    ) -> NutrientRequirement | None:
        try:
            return self.repository.get_requirement(breed, stage)
        except Exception:
            if not self.fallback_on_store_error:
                raise
            _logger.exception(
                "Requirement lookup failed for breed=%s stage=%s", breed, stage
            )
            return None
