"""Stage inference from flock age and feed projection to the end of a stage."""

import math
from datetime import date

from poultry_ration.domain.rations import CycleProjection
from poultry_ration.domain.requirements import BreedCategory, Stage
from poultry_ration.services.reference_data import STANDARD_BAG_SIZE_KG

# (stage label, ration stage, last day of the stage) in flock age order.
_PHASES: dict[BreedCategory, tuple[tuple[str, Stage, int], ...]] = {
    BreedCategory.LAYER: (
        ("démarrage", Stage.STARTER, 42),
        ("croissance", Stage.GROWER, 119),
        ("pré-ponte", Stage.GROWER, 140),
        ("ponte", Stage.LAYER, 540),
    ),
    BreedCategory.BROILER: (
        ("démarrage", Stage.STARTER, 21),
        ("croissance", Stage.GROWER, 32),
        ("finition", Stage.FINISHER, 45),
    ),
}


def _phase_for_age(breed: BreedCategory, age_days: int) -> tuple[str, int, bool]:
    if age_days < 0:
        raise ValueError("Age in days must not be negative")
    phases = _PHASES[breed]
    for position, (label, _stage, end_day) in enumerate(phases):
        if age_days <= end_day:
            return label, end_day, position == len(phases) - 1
    label, _stage, end_day = phases[-1]
    return label, end_day, True


def _phase_for_stage(
    breed: BreedCategory, stage: Stage, age_days: int
) -> tuple[str, int, bool]:
    """Return the phase of the breed fed with `stage`.

    When several phases share the stage, the first one the flock has not
    yet finished wins. Stages the breed never goes through fall back to the
    phase matching the flock's age.
    """
    if age_days < 0:
        raise ValueError("Age in days must not be negative")
    phases = _PHASES[breed]
    matching = [
        (label, end_day, position == len(phases) - 1)
        for position, (label, phase_stage, end_day) in enumerate(phases)
        if phase_stage is stage
    ]
    if not matching:
        return _phase_for_age(breed, age_days)
    for phase in matching:
        if age_days <= phase[1]:
            return phase
    return matching[-1]


def stage_label_for_age(breed: BreedCategory, age_days: int) -> str:
    """Return the stage label matching a flock's age in days."""
    label, _end_day, _is_last = _phase_for_age(breed, age_days)
    return label


def project_cycle(  # noqa: PLR0913
    total_daily_kg: float,
    breed: BreedCategory,
    age_days: int,
    bag_size_kg: float = STANDARD_BAG_SIZE_KG,
    target_sale_date: date | None = None,
    today: date | None = None,
    stage: Stage | None = None,
) -> CycleProjection:
    """Project feed needed until the current stage ends.

    The stage end day comes from `stage` when given, otherwise from the
    flock's age. In the final stage a target sale date, when given,
    replaces the stage end day.
    """
    if stage is None:
        _label, end_day, is_last = _phase_for_age(breed, age_days)
    else:
        _label, end_day, is_last = _phase_for_stage(breed, stage, age_days)
    if target_sale_date is not None and is_last:
        reference = today or date.today()
        days_remaining = max(0, (target_sale_date - reference).days)
    else:
        days_remaining = max(0, end_day - age_days)
    total_kg = total_daily_kg * days_remaining
    return CycleProjection(
        days_remaining=days_remaining,
        total_kg=round(total_kg, 2),
        total_bags=math.ceil(round(total_kg / bag_size_kg, 6)),
    )
