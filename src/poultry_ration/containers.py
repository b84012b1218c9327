"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from poultry_ration.adapters.supabase_ingredient_repository import (
    SupabaseIngredientRepository,
)
from poultry_ration.adapters.supabase_requirement_repository import (
    SupabaseRequirementRepository,
)
from poultry_ration.config import Settings
from poultry_ration.services.catalog import CatalogService
from poultry_ration.services.rations import RationService
from poultry_ration.services.requirements import RequirementService
from poultry_ration.services.vocabulary import (
    DEFAULT_VOCABULARY,
    ClassificationVocabulary,
    load_vocabulary,
)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    vocabulary: ClassificationVocabulary
    requirement_service: RequirementService
    catalog_service: CatalogService
    ration_service: RationService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    vocabulary = (
        load_vocabulary(resolved_settings.vocabulary_path)
        if resolved_settings.vocabulary_path
        else DEFAULT_VOCABULARY
    )
    requirement_service = RequirementService(
        repository=SupabaseRequirementRepository(supabase_client),
        vocabulary=vocabulary,
        fallback_on_store_error=resolved_settings.fallback_on_store_error,
    )
    catalog_service = CatalogService(
        repository=SupabaseIngredientRepository(supabase_client),
        vocabulary=vocabulary,
        augment=resolved_settings.augment_catalog,
        fallback_on_store_error=resolved_settings.fallback_on_store_error,
    )
    ration_service = RationService(
        requirement_service=requirement_service,
        catalog_service=catalog_service,
        vocabulary=vocabulary,
        bag_size_kg=resolved_settings.bag_size_kg,
    )

    return AppContainer(
        settings=resolved_settings,
        vocabulary=vocabulary,
        requirement_service=requirement_service,
        catalog_service=catalog_service,
        ration_service=ration_service,
    )
