"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from poultry_ration.services.composer import classify_ingredients

if TYPE_CHECKING:
    from poultry_ration.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/health", dependencies=[Depends(require_admin)])
async def admin_health() -> dict[str, str]:
    """Admin health check endpoint."""
    return {"status": "ok"}


@router.get("/catalog", dependencies=[Depends(require_admin)])
async def catalog(request: Request) -> dict[str, object]:
    """Return the effective ingredient catalog with each ingredient's role."""
    container: AppContainer = request.app.state.container
    loaded = container.catalog_service.load()
    return {
        "source": loaded.source.value,
        "ingredients": [
            {**asdict(ingredient), "role": role.value}
            for ingredient, role in classify_ingredients(
                loaded.ingredients, container.vocabulary
            )
        ],
    }


@router.get("/requirements", dependencies=[Depends(require_admin)])
async def requirements(
    request: Request, breed: str, stage: str
) -> dict[str, object]:
    """Return the requirement resolved for a breed and stage label."""
    container: AppContainer = request.app.state.container
    resolved = container.requirement_service.resolve(breed, stage)
    return {
        "breed": resolved.breed.value,
        "stage": resolved.stage.value,
        "source": resolved.source.value,
        "requirement": asdict(resolved.requirement),
    }


@router.get("/vocabulary", dependencies=[Depends(require_admin)])
async def vocabulary(request: Request) -> dict[str, object]:
    """Return the active classification vocabulary."""
    container: AppContainer = request.app.state.container
    active = container.vocabulary
    return {
        "version": active.version,
        "layer_breed_keywords": list(active.layer_breed_keywords),
        "broiler_breed_keywords": list(active.broiler_breed_keywords),
        "stage_keywords": [
            {"stage": stage.value, "keywords": list(keywords)}
            for stage, keywords in active.stage_keywords
        ],
        "energy_keywords": list(active.energy_keywords),
        "protein_keywords": list(active.protein_keywords),
        "bran_keywords": list(active.bran_keywords),
        "mineral_categories": {
            category: list(keywords)
            for category, keywords in active.mineral_categories.items()
        },
    }
