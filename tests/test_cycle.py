"""Tests for stage inference and cycle projection."""

from datetime import date

import pytest

from poultry_ration.domain.requirements import BreedCategory, Stage
from poultry_ration.services.cycle import project_cycle, stage_label_for_age
from poultry_ration.services.requirements import normalize_stage


@pytest.mark.parametrize(
    ("breed", "age_days", "label"),
    [
        (BreedCategory.LAYER, 1, "démarrage"),
        (BreedCategory.LAYER, 42, "démarrage"),
        (BreedCategory.LAYER, 100, "croissance"),
        (BreedCategory.LAYER, 130, "pré-ponte"),
        (BreedCategory.LAYER, 300, "ponte"),
        (BreedCategory.LAYER, 700, "ponte"),
        (BreedCategory.BROILER, 21, "démarrage"),
        (BreedCategory.BROILER, 30, "croissance"),
        (BreedCategory.BROILER, 40, "finition"),
        (BreedCategory.BROILER, 90, "finition"),
    ],
)
def test_stage_label_for_age(breed: BreedCategory, age_days: int, label: str) -> None:
    assert stage_label_for_age(breed, age_days) == label


def test_inferred_labels_normalize_to_stages() -> None:
    assert normalize_stage(stage_label_for_age(BreedCategory.LAYER, 130)) is Stage.GROWER
    assert normalize_stage(stage_label_for_age(BreedCategory.LAYER, 200)) is Stage.LAYER
    assert (
        normalize_stage(stage_label_for_age(BreedCategory.BROILER, 10)) is Stage.STARTER
    )


def test_negative_age_is_rejected() -> None:
    with pytest.raises(ValueError):
        stage_label_for_age(BreedCategory.BROILER, -1)


def test_project_cycle_until_stage_end() -> None:
    projection = project_cycle(12.0, BreedCategory.BROILER, age_days=10)

    assert projection.days_remaining == 11
    assert projection.total_kg == pytest.approx(132.0)
    assert projection.total_bags == 3


def test_project_cycle_uses_sale_date_in_final_stage() -> None:
    projection = project_cycle(
        10.0,
        BreedCategory.BROILER,
        age_days=40,
        target_sale_date=date(2024, 1, 11),
        today=date(2024, 1, 1),
    )

    assert projection.days_remaining == 10
    assert projection.total_kg == pytest.approx(100.0)
    assert projection.total_bags == 2


def test_project_cycle_ignores_sale_date_before_final_stage() -> None:
    projection = project_cycle(
        10.0,
        BreedCategory.BROILER,
        age_days=10,
        target_sale_date=date(2024, 3, 1),
        today=date(2024, 1, 1),
    )

    assert projection.days_remaining == 11


def test_project_cycle_past_stage_end_needs_nothing() -> None:
    projection = project_cycle(10.0, BreedCategory.BROILER, age_days=60)

    assert projection.days_remaining == 0
    assert projection.total_kg == 0
    assert projection.total_bags == 0


def test_project_cycle_uses_given_stage_end_day() -> None:
    projection = project_cycle(
        10.0, BreedCategory.LAYER, age_days=30, stage=Stage.LAYER
    )

    assert projection.days_remaining == 510


def test_project_cycle_given_final_stage_uses_sale_date() -> None:
    projection = project_cycle(
        10.0,
        BreedCategory.BROILER,
        age_days=10,
        target_sale_date=date(2024, 1, 21),
        today=date(2024, 1, 1),
        stage=Stage.FINISHER,
    )

    assert projection.days_remaining == 20


@pytest.mark.parametrize(
    ("age_days", "days_remaining"),
    [(100, 19), (130, 10)],
)
def test_project_cycle_shared_stage_picks_unfinished_phase(
    age_days: int, days_remaining: int
) -> None:
    projection = project_cycle(
        1.0, BreedCategory.LAYER, age_days=age_days, stage=Stage.GROWER
    )

    assert projection.days_remaining == days_remaining


def test_project_cycle_stage_outside_breed_uses_age() -> None:
    projection = project_cycle(
        1.0, BreedCategory.BROILER, age_days=10, stage=Stage.LAYER
    )

    assert projection.days_remaining == 11
