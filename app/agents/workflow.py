# =============================================================================
# Workflow Controller — All Fact Types, One After Another
# =============================================================================
#
# Runs the analysis graph once per AnalysisConfig in table order and
# collects the results. Analyses never overlap: the next one starts only
# after the previous one has returned, so the step-event stream for one
# fact type is always complete before the next fact type's first event.
#
# Failures are not caught here. If analysis N raises, analysis N+1 never
# runs and the caller receives the original exception.
# =============================================================================

from __future__ import annotations

import logging
from collections.abc import Sequence

from app.agents.analyses import ANALYSES, AnalysisConfig
from app.agents.runner import run_single_analysis
from app.agents.types import StepCallback, WorkflowResult
from app.services.document_registry import get_registry
from app.services.file_search import DocumentSearcher
from app.services.llm import LLMProvider

logger = logging.getLogger(__name__)


async def run_workflow(
    input_text: str,
    on_step: StepCallback | None = None,
    *,
    analyses: Sequence[AnalysisConfig] = ANALYSES,
    source_ids: Sequence[str] | None = None,
    llm: LLMProvider | None = None,
    searcher: DocumentSearcher | None = None,
) -> list[WorkflowResult]:
    """
    Entry point: cross-check every configured fact type.

    Args:
        input_text: The user's free-text intent. Logged only; the set of
            checks is fixed by `analyses`.
        on_step: Optional progress callback, invoked in order.
        analyses: Fact types to check (default: the full table).
        source_ids: Collection ids to search. Read from the document
            registry once per run when omitted.
        llm: Optional LLM provider override.
        searcher: Optional document searcher override.

    Returns:
        One WorkflowResult per analysis, in `analyses` order.
    """
    if source_ids is None:
        source_ids = get_registry().get_vector_store_ids()

    logger.info(
        "Starting workflow: input='%s', analyses=%d, sources=%d",
        input_text[:80], len(analyses), len(source_ids),
    )

    results: list[WorkflowResult] = []
    for analysis in analyses:
        result = await run_single_analysis(
            analysis,
            source_ids,
            on_step=on_step,
            llm=llm,
            searcher=searcher,
        )
        results.append(result)

    logger.info("Workflow complete: %d result(s)", len(results))
    return results
