# =============================================================================
# Analysis Configuration Table
# =============================================================================
#
# One AnalysisConfig per fact type the assistant cross-checks. The table
# is a plain tuple built at import time; adding a fact type means adding
# an entry here together with its two pure functions in
# app/services/fact_parsing.py.
#
# Order matters: the workflow runs the analyses, and reports them, in
# table order.
# =============================================================================

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from app.services.fact_parsing import (
    calculate_floor_confidence,
    calculate_parking_confidence,
    extract_floor_value,
    extract_parking_value,
)

ValueExtractor = Callable[[Sequence[str]], str]
ConfidenceCalculator = Callable[[Sequence[str], str], float]

# Stage labels, combined with the config name into step event names
STAGE_DOCUMENT = "Dokument {index}"
STAGE_COMPARISON = "Porovnanie"
STAGE_CLASSIFICATION = "Klasifikácia"
STAGE_EXPLANATION = "Vysvetlenie"


@dataclass(frozen=True)
class AnalysisConfig:
    """Static description of one cross-document fact check."""

    id: str
    name: str
    extraction_instruction: str
    search_queries: tuple[str, ...]
    orchestrator_prompt: str
    value_extractor: ValueExtractor
    confidence_calculator: ConfidenceCalculator

    def __post_init__(self) -> None:
        if not 1 <= len(self.search_queries) <= 3:
            raise ValueError(
                f"Analysis '{self.id}' needs 1-3 search queries, "
                f"got {len(self.search_queries)}"
            )

    def query_for(self, index: int) -> str:
        """Query for document slot `index` (0-based); falls back to the first."""
        if index < len(self.search_queries):
            return self.search_queries[index]
        return self.search_queries[0]

    def step_name(self, stage: str) -> str:
        return f"[{self.name}] {stage}"


FLOOR_COUNT = AnalysisConfig(
    id="pocet_podlazi",
    name="Počet podlaží",
    extraction_instruction=(
        "Prehľadaj dokument a zisti, koľko podlaží má objekt.\n"
        "Odpovedz iba v tomto formáte: Počet podzemných podlaží: X, "
        "Počet nadzemných podlaží: Y\n"
        "Nepridávaj žiadny ďalší text."
    ),
    search_queries=(
        "počet podlaží objektu",
        "počet podlaží objektu",
        "počet nadzemných a podzemných podlaží",
    ),
    orchestrator_prompt=(
        "Posúď zhodu medzi zistenými počtami podlaží z rôznych dokumentov.\n"
        "Odpovedz iba v tomto formáte: Zhodujú sa: áno/nie\n"
        "Nepridávaj žiadny ďalší text."
    ),
    value_extractor=extract_floor_value,
    confidence_calculator=calculate_floor_confidence,
)

PARKING_SPACES = AnalysisConfig(
    id="pocet_parkovacich_miest",
    name="Počet parkovacích miest",
    extraction_instruction=(
        "Prehľadaj dokument a zisti, koľko parkovacích miest má objekt.\n"
        "Odpovedz iba v tomto formáte: Počet parkovacích miest: X, "
        "Počet vonkajších parkovacích miest: Y, "
        "Počet parkovacích miest v garáži: Z\n"
        "Ak údaj chýba, uveď 0. Nepridávaj žiadny ďalší text."
    ),
    search_queries=(
        "počet parkovacích miest",
        "parkovacie miesta a garážové státia",
    ),
    orchestrator_prompt=(
        "Posúď zhodu medzi zistenými počtami parkovacích miest z rôznych "
        "dokumentov.\n"
        "Odpovedz iba v tomto formáte: Zhodujú sa: áno/nie\n"
        "Nepridávaj žiadny ďalší text."
    ),
    value_extractor=extract_parking_value,
    confidence_calculator=calculate_parking_confidence,
)

ANALYSES: tuple[AnalysisConfig, ...] = (FLOOR_COUNT, PARKING_SPACES)
