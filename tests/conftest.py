"""Shared test fixtures."""

from dataclasses import dataclass, field

import pytest

from poultry_ration.config import Settings
from poultry_ration.containers import AppContainer
from poultry_ration.domain.ingredients import Ingredient
from poultry_ration.domain.requirements import (
    BreedCategory,
    NutrientRequirement,
    Stage,
)
from poultry_ration.services.catalog import CatalogService, IngredientRepository
from poultry_ration.services.rations import RationService
from poultry_ration.services.requirements import (
    RequirementRepository,
    RequirementService,
)
from poultry_ration.services.vocabulary import DEFAULT_VOCABULARY

# Shaped like a Supabase JWT so client construction accepts it.
FAKE_SERVICE_KEY = (
    "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9."
    "eyJyb2xlIjoic2VydmljZV9yb2xlIn0."
    "c2lnbmF0dXJlLWZvci10ZXN0cw"
)


def make_ingredient(
    name: str,
    protein: float,
    energy: float = 0.0,
    price: float | None = None,
) -> Ingredient:
    """Build an ingredient with an id derived from its name."""
    return Ingredient(
        id=name.lower().replace(" ", "-"),
        name=name,
        protein_percent=protein,
        energy_kcal_per_kg=energy,
        price_per_kg=price,
    )


@dataclass
class InMemoryRequirementRepository(RequirementRepository):
    """In-memory requirement templates for tests."""

    templates: dict[tuple[BreedCategory, Stage], NutrientRequirement] = field(
        default_factory=dict
    )
    calls: list[tuple[BreedCategory, Stage]] = field(default_factory=list)
    error: Exception | None = None

    def get_requirement(
        self, breed: BreedCategory, stage: Stage
    ) -> NutrientRequirement | None:
        self.calls.append((breed, stage))
        if self.error is not None:
            raise self.error
        return self.templates.get((breed, stage))


@dataclass
class InMemoryIngredientRepository(IngredientRepository):
    """In-memory ingredient catalog for tests."""

    ingredients: list[Ingredient] = field(default_factory=list)
    calls: int = 0
    error: Exception | None = None

    def list_ingredients(self) -> list[Ingredient]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return sorted(
            self.ingredients, key=lambda item: item.protein_percent, reverse=True
        )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key=FAKE_SERVICE_KEY,
        admin_token="admin-token",
    )


@pytest.fixture
def requirement_repository() -> InMemoryRequirementRepository:
    return InMemoryRequirementRepository()


@pytest.fixture
def ingredient_repository() -> InMemoryIngredientRepository:
    return InMemoryIngredientRepository()


@pytest.fixture
def ration_service(
    requirement_repository: InMemoryRequirementRepository,
    ingredient_repository: InMemoryIngredientRepository,
) -> RationService:
    return RationService(
        requirement_service=RequirementService(requirement_repository),
        catalog_service=CatalogService(ingredient_repository),
    )


@pytest.fixture
def container(settings: Settings, ration_service: RationService) -> AppContainer:
    return AppContainer(
        settings=settings,
        vocabulary=DEFAULT_VOCABULARY,
        requirement_service=ration_service.requirement_service,
        catalog_service=ration_service.catalog_service,
        ration_service=ration_service,
    )
