"""FastAPI application factory."""

from dataclasses import asdict

from fastapi import FastAPI, HTTPException, Request

from poultry_ration.api.admin import router as admin_router
from poultry_ration.api.models import RationRequest
from poultry_ration.app_logging import configure_logging
from poultry_ration.containers import AppContainer
from poultry_ration.domain.rations import RationLine, RationResult
from poultry_ration.services.cycle import project_cycle, stage_label_for_age
from poultry_ration.services.rations import InvalidRationRequest
from poultry_ration.services.requirements import normalize_breed


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()

    app = FastAPI(title="Poultry Ration Engine")
    app.state.container = container

    app.include_router(admin_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/rations")
    async def compute_ration(
        payload: RationRequest, request: Request
    ) -> dict[str, object]:
        """Compute a daily ration, inferring the stage from age when omitted."""
        state_container: AppContainer = request.app.state.container
        stage_label = payload.stage
        if not stage_label and payload.age_days is not None:
            breed = normalize_breed(payload.breed, state_container.vocabulary)
            stage_label = stage_label_for_age(breed, payload.age_days)

        try:
            result = state_container.ration_service.compute_ration(
                payload.breed, stage_label or "", payload.bird_count
            )
        except InvalidRationRequest as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc

        body = _serialize_result(result)
        if payload.age_days is not None:
            cycle = project_cycle(
                result.total_daily_kg,
                result.breed,
                payload.age_days,
                bag_size_kg=state_container.settings.bag_size_kg,
                target_sale_date=payload.target_sale_date,
                stage=result.stage,
            )
            body["cycle"] = asdict(cycle)
        return body

    return app


def _serialize_result(result: RationResult) -> dict[str, object]:
    return {
        "breed": result.breed.value,
        "stage": result.stage.value,
        "bird_count": result.bird_count,
        "status": result.status.value,
        "degraded": result.is_degraded,
        "requirement": asdict(result.requirement),
        "protein_percent": result.protein_percent,
        "energy_kcal_per_kg": result.energy_kcal_per_kg,
        "achieved_protein_percent": result.achieved_protein_percent,
        "achieved_energy_kcal_per_kg": result.achieved_energy_kcal_per_kg,
        "total_daily_grams": result.total_daily_grams,
        "total_daily_kg": round(result.total_daily_kg, 2),
        "bag_count": result.bag_count,
        "cost_per_kg": result.cost_per_kg,
        "daily_cost": result.daily_cost,
        "ingredients": [_serialize_line(line) for line in result.lines],
    }


def _serialize_line(line: RationLine) -> dict[str, object]:
    return {
        "id": line.ingredient.id,
        "name": line.ingredient.name,
        "role": line.role.value,
        "fixed": line.fixed,
        "percentage": line.percentage,
        "mass_kg": round(line.mass_kg, 2),
        "protein_percent": line.ingredient.protein_percent,
        "energy_kcal_per_kg": line.ingredient.energy_kcal_per_kg,
    }
