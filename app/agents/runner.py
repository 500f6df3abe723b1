# =============================================================================
# Analysis Runner — One Fact-Type Check as a LangGraph Graph
# =============================================================================
#
# Runs one AnalysisConfig against up to three document collections:
#
#   START ──▶ extract_1 ──▶ extract_2 ──▶ extract_3 ──▶ compare ──▶ classify
#                                                                     │
#                                                                   score
#                                                        ┌────────────┴───────────┐
#                                                  explain_match          describe_problem
#                                                        └──────────▶ END ◀───────┘
#
# Each remote stage (the three extractions, compare, classify) emits a
# `running` step event immediately before its call and a `completed`
# event carrying the raw output right after it. A failing stage emits an
# `error` event and the exception leaves the graph unchanged; no partial
# result is produced.
#
# Collaborators (LLM provider, document searcher, step callback) travel in
# the state, the same way the LLM override does in a Q&A graph. The graph
# has no checkpointer, so non-serialisable state is fine.
# =============================================================================

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Sequence

from langgraph.graph import END, START, StateGraph
from typing_extensions import TypedDict

from app.agents.analyses import (
    STAGE_CLASSIFICATION,
    STAGE_COMPARISON,
    STAGE_DOCUMENT,
    STAGE_EXPLANATION,
    AnalysisConfig,
)
from app.agents.judges import classify, compare, describe_problem, explain_match
from app.agents.types import (
    MATCH_CATEGORY,
    StepCallback,
    StepEvent,
    StepStatus,
    WorkflowDetails,
    WorkflowResult,
)
from app.services.file_search import DocumentSearcher, get_document_searcher
from app.services.llm import LLMProvider, get_llm_provider

logger = logging.getLogger(__name__)

MATCH_NOTE = "Zhoda - Dokumenty sa zhodujú"
MISMATCH_NOTE = "Problém s korešpondenciou"


# ---------------------------------------------------------------------------
# Analysis State Schema
# ---------------------------------------------------------------------------


class AnalysisState(TypedDict, total=False):
    """State flowing through the analysis graph."""

    # --- Input (set by run_single_analysis) ---
    analysis: AnalysisConfig
    sources: tuple[str, str, str]
    on_step: StepCallback | None
    llm: LLMProvider
    searcher: DocumentSearcher

    # --- Raw stage outputs ---
    doc1: str
    doc2: str
    doc3: str
    orchestrator: str
    category: str

    # --- Computed ---
    value: str
    confidence: float

    # --- Output ---
    result: WorkflowResult


# ---------------------------------------------------------------------------
# Source Resolution
# ---------------------------------------------------------------------------


def resolve_sources(source_ids: Sequence[str]) -> tuple[str, str, str]:
    """
    Pick the collection for each of the three document slots.

    Slot 2 reuses slot 1 and slot 3 reuses slot 2 when fewer than three
    collections are enabled.

    Raises:
        ValueError: If no collection is available at all.
    """
    ids = list(source_ids)
    if not ids:
        raise ValueError(
            "Nie je povolená žiadna kolekcia dokumentov. "
            "Povoľte alebo nahrajte dokumenty pred spustením analýzy."
        )
    first = ids[0]
    second = ids[1] if len(ids) > 1 else first
    third = ids[2] if len(ids) > 2 else second
    return first, second, third


# ---------------------------------------------------------------------------
# Stage Plumbing
# ---------------------------------------------------------------------------


def _emit(
    state: AnalysisState,
    name: str,
    status: StepStatus,
    output: str | None = None,
) -> None:
    on_step = state.get("on_step")
    if on_step is not None:
        on_step(StepEvent(
            name=name,
            status=status,
            output=output,
            analysis_id=state["analysis"].id,
        ))


async def _run_stage(
    state: AnalysisState,
    stage: str,
    call: Callable[[], Awaitable[str]],
) -> str:
    """Run one remote call bracketed by running/completed (or error) events."""
    name = state["analysis"].step_name(stage)
    _emit(state, name, "running")
    try:
        output = await call()
    except Exception as e:
        logger.warning("Stage %s failed: %s", name, e)
        _emit(state, name, "error", output=str(e))
        raise
    _emit(state, name, "completed", output)
    logger.info("%s: %s", name, output[:80])
    return output


def _outputs(state: AnalysisState) -> list[str]:
    return [state["doc1"], state["doc2"], state["doc3"]]


# ---------------------------------------------------------------------------
# Node Functions
# ---------------------------------------------------------------------------


def _make_extract_node(slot: int) -> Callable[[AnalysisState], Awaitable[dict]]:
    """Node extracting the fact from document slot `slot` (1-based)."""

    async def extract_node(state: AnalysisState) -> dict:
        analysis = state["analysis"]
        source_id = state["sources"][slot - 1]
        query = analysis.query_for(slot - 1)

        output = await _run_stage(
            state,
            STAGE_DOCUMENT.format(index=slot),
            lambda: state["searcher"].search_and_extract(
                source_id, query, analysis.extraction_instruction,
            ),
        )
        return {f"doc{slot}": output}

    extract_node.__name__ = f"extract_{slot}_node"
    return extract_node


async def compare_node(state: AnalysisState) -> dict:
    output = await _run_stage(
        state,
        STAGE_COMPARISON,
        lambda: compare(state["analysis"], _outputs(state), state["llm"]),
    )
    return {"orchestrator": output}


async def classify_node(state: AnalysisState) -> dict:
    category = await _run_stage(
        state,
        STAGE_CLASSIFICATION,
        lambda: classify(state["orchestrator"], state["llm"]),
    )
    return {"category": category}


async def score_node(state: AnalysisState) -> dict:
    """Deterministic value + confidence from the config's pure functions."""
    analysis = state["analysis"]
    outputs = _outputs(state)
    return {
        "value": analysis.value_extractor(outputs),
        "confidence": analysis.confidence_calculator(
            outputs, state["orchestrator"],
        ),
    }


async def explain_match_node(state: AnalysisState) -> dict:
    explanation = explain_match(state["analysis"], state["value"])
    return {"result": _build_result(state, explanation)}


async def describe_problem_node(state: AnalysisState) -> dict:
    analysis = state["analysis"]
    try:
        explanation = await describe_problem(
            analysis, _outputs(state), state["llm"],
        )
    except Exception as e:
        # Not a progress stage, but the failure is still tagged
        _emit(state, analysis.step_name(STAGE_EXPLANATION), "error", str(e))
        raise
    return {"result": _build_result(state, explanation)}


def _route_by_category(state: AnalysisState) -> str:
    if state["category"] == MATCH_CATEGORY:
        return "explain_match"
    return "describe_problem"


def _build_result(state: AnalysisState, explanation: str) -> WorkflowResult:
    is_match = state["category"] == MATCH_CATEGORY
    return WorkflowResult(
        name=state["analysis"].name,
        value=state["value"],
        confidence=state["confidence"],
        note=MATCH_NOTE if is_match else MISMATCH_NOTE,
        note_type="zhoda" if is_match else "problem",
        details=WorkflowDetails(
            doc1=state["doc1"],
            doc2=state["doc2"],
            doc3=state["doc3"],
            orchestrator=state["orchestrator"],
            category=state["category"],
            final_output=explanation,
        ),
    )


# ---------------------------------------------------------------------------
# Graph Assembly
# ---------------------------------------------------------------------------

_builder = StateGraph(AnalysisState)
_builder.add_node("extract_1", _make_extract_node(1))
_builder.add_node("extract_2", _make_extract_node(2))
_builder.add_node("extract_3", _make_extract_node(3))
_builder.add_node("compare", compare_node)
_builder.add_node("classify", classify_node)
_builder.add_node("score", score_node)
_builder.add_node("explain_match", explain_match_node)
_builder.add_node("describe_problem", describe_problem_node)

_builder.add_edge(START, "extract_1")
_builder.add_edge("extract_1", "extract_2")
_builder.add_edge("extract_2", "extract_3")
_builder.add_edge("extract_3", "compare")
_builder.add_edge("compare", "classify")
_builder.add_edge("classify", "score")
_builder.add_conditional_edges(
    "score",
    _route_by_category,
    {
        "explain_match": "explain_match",
        "describe_problem": "describe_problem",
    },
)
_builder.add_edge("explain_match", END)
_builder.add_edge("describe_problem", END)

graph = _builder.compile()


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


async def run_single_analysis(
    analysis: AnalysisConfig,
    source_ids: Sequence[str],
    on_step: StepCallback | None = None,
    llm: LLMProvider | None = None,
    searcher: DocumentSearcher | None = None,
) -> WorkflowResult:
    """
    Run the full extraction → comparison → classification pipeline for
    one fact type.

    Args:
        analysis: The fact type to check.
        source_ids: Enabled collection ids in priority order (1 or more).
        on_step: Optional progress callback.
        llm: Provider for the plain completions (default: configured one).
        searcher: Document searcher (default: OpenAI file search).

    Returns:
        The populated WorkflowResult.

    Raises:
        ValueError: No collection available, or a collaborator is not
            configured.
        Exception: Whatever a remote call raised, unchanged.
    """
    initial_state: AnalysisState = {
        "analysis": analysis,
        "sources": resolve_sources(source_ids),
        "on_step": on_step,
        "llm": llm or get_llm_provider(),
        "searcher": searcher or get_document_searcher(),
    }

    logger.info(
        "Starting analysis %s against %d source(s)",
        analysis.id, len(set(initial_state["sources"])),
    )

    final_state = await graph.ainvoke(initial_state)
    result: WorkflowResult = final_state["result"]

    logger.info(
        "Analysis %s complete: value=%s, confidence=%.2f, category=%s",
        analysis.id, result.value, result.confidence, result.details.category,
    )
    return result
