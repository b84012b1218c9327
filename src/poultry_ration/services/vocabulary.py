"""Keyword vocabulary used to normalize labels and classify ingredients."""

import re
import unicodedata
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace
from pathlib import Path

from pydantic import BaseModel

from poultry_ration.domain.requirements import BreedCategory, Stage

_WORD_PATTERN = re.compile(r"[a-z0-9]+")


def normalize_text(text: str) -> str:
    """Lower-case text and strip accents."""
    decomposed = unicodedata.normalize("NFKD", text.strip().lower())
    return "".join(char for char in decomposed if not unicodedata.combining(char))


def _normalize_all(keywords: Iterable[str]) -> tuple[str, ...]:
    return tuple(normalize_text(keyword) for keyword in keywords if keyword.strip())


@dataclass(frozen=True)
class ClassificationVocabulary:
    """Versioned keyword sets for breeds, stages and ingredient roles.

    Breed and stage labels match by substring. Ingredient names match when
    one of their words starts with a keyword, so "son" (bran) does not match
    "poisson". All keywords are stored normalized.
    """

    version: str
    layer_breed_keywords: tuple[str, ...]
    broiler_breed_keywords: tuple[str, ...]
    stage_keywords: tuple[tuple[Stage, tuple[str, ...]], ...]
    energy_keywords: tuple[str, ...]
    protein_keywords: tuple[str, ...]
    bran_keywords: tuple[str, ...]
    mineral_categories: Mapping[str, tuple[str, ...]]

    def breed_for(self, label: str) -> BreedCategory | None:
        """Return the breed matching a label, if any keyword matches."""
        text = normalize_text(label)
        if any(keyword in text for keyword in self.layer_breed_keywords):
            return BreedCategory.LAYER
        if any(keyword in text for keyword in self.broiler_breed_keywords):
            return BreedCategory.BROILER
        return None

    def stage_for(self, label: str) -> Stage | None:
        """Return the first stage whose keywords match a label."""
        text = normalize_text(label)
        for stage, keywords in self.stage_keywords:
            if any(keyword in text for keyword in keywords):
                return stage
        return None

    def is_energy_grain(self, name: str) -> bool:
        """Return True when the name looks like an energy grain."""
        return _matches_words(name, self.energy_keywords)

    def is_protein_concentrate(self, name: str) -> bool:
        """Return True when the name looks like a protein concentrate."""
        return _matches_words(name, self.protein_keywords)

    def is_bran(self, name: str) -> bool:
        """Return True when the name looks like a bran."""
        return _matches_words(name, self.bran_keywords)

    def mineral_category(self, name: str) -> str | None:
        """Return the mineral/additive category for a name, if any."""
        for category, keywords in self.mineral_categories.items():
            if _matches_words(name, keywords):
                return category
        return None


def _matches_words(name: str, keywords: tuple[str, ...]) -> bool:
    words = _WORD_PATTERN.findall(normalize_text(name))
    return any(word.startswith(keyword) for word in words for keyword in keywords)


DEFAULT_VOCABULARY = ClassificationVocabulary(
    version="2024.1",
    layer_breed_keywords=("pondeuse", "layer"),
    broiler_breed_keywords=("chair", "broiler"),
    stage_keywords=(
        (Stage.STARTER, ("demarrage", "starter")),
        (Stage.GROWER, ("croissance", "grower")),
        (Stage.GROWER, ("pre-ponte", "preponte", "pre-lay", "prelay")),
        (Stage.LAYER, ("ponte", "layer", "laying")),
        (Stage.FINISHER, ("finition", "finisher")),
    ),
    energy_keywords=("mais", "maize", "corn", "sorgho", "sorghum", "millet"),
    protein_keywords=("soja", "soy", "poisson", "fish", "tourteau", "concentr"),
    bran_keywords=("son", "bran"),
    mineral_categories={
        "shell": ("coquille", "shell", "huitre", "oyster", "calcaire", "limestone"),
        "premix": ("premix", "cmv", "vitamin"),
        "salt": ("sel", "salt"),
        "phosphate": ("phosphate", "bicalcique", "dicalcium"),
        "methionine": ("methionine",),
        "lysine": ("lysine",),
    },
)


class StageKeywords(BaseModel):
    """Keyword group for one stage in a vocabulary file."""

    stage: Stage
    keywords: list[str]


class VocabularyFile(BaseModel):
    """JSON overrides for the default vocabulary; omitted fields keep defaults."""

    version: str
    layer_breed_keywords: list[str] | None = None
    broiler_breed_keywords: list[str] | None = None
    stage_keywords: list[StageKeywords] | None = None
    energy_keywords: list[str] | None = None
    protein_keywords: list[str] | None = None
    bran_keywords: list[str] | None = None
    mineral_categories: dict[str, list[str]] | None = None


def vocabulary_from_file(
    data: VocabularyFile, base: ClassificationVocabulary = DEFAULT_VOCABULARY
) -> ClassificationVocabulary:
    """Merge parsed overrides into a base vocabulary."""
    changes: dict[str, object] = {"version": data.version}
    for name in (
        "layer_breed_keywords",
        "broiler_breed_keywords",
        "energy_keywords",
        "protein_keywords",
        "bran_keywords",
    ):
        value = getattr(data, name)
        if value is not None:
            changes[name] = _normalize_all(value)
    if data.stage_keywords is not None:
        changes["stage_keywords"] = tuple(
            (group.stage, _normalize_all(group.keywords))
            for group in data.stage_keywords
        )
    if data.mineral_categories is not None:
        changes["mineral_categories"] = {
            normalize_text(category): _normalize_all(keywords)
            for category, keywords in data.mineral_categories.items()
        }
    return replace(base, **changes)


def load_vocabulary(path: str | Path) -> ClassificationVocabulary:
    """Load a vocabulary override from a JSON file."""
    raw = Path(path).read_text(encoding="utf-8")
    return vocabulary_from_file(VocabularyFile.model_validate_json(raw))
