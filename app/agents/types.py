# =============================================================================
# Workflow Data Contracts
# =============================================================================
# Immutable records produced by the comparison workflow. They are mapped
# to Pydantic response models (app/models/responses.py) only at the API
# boundary.
# =============================================================================

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal

StepStatus = Literal["running", "completed", "error"]
Category = Literal["zhoda", "problem_s_korespondenciou"]
NoteType = Literal["zhoda", "problem"]

MATCH_CATEGORY: Category = "zhoda"
MISMATCH_CATEGORY: Category = "problem_s_korespondenciou"


@dataclass(frozen=True)
class StepEvent:
    """Progress notification for one stage of one analysis."""

    name: str
    status: StepStatus
    output: str | None = None
    analysis_id: str | None = None


# Invoked synchronously, in order, as each stage transitions
StepCallback = Callable[[StepEvent], None]


@dataclass(frozen=True)
class WorkflowDetails:
    """Raw material behind a WorkflowResult, kept for the report's detail view."""

    doc1: str
    doc2: str
    doc3: str
    orchestrator: str
    category: str
    final_output: str


@dataclass(frozen=True)
class WorkflowResult:
    """Outcome of one fact-type analysis."""

    name: str
    value: str
    confidence: float
    note: str
    note_type: NoteType
    details: WorkflowDetails
