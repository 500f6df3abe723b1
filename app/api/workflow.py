# =============================================================================
# Workflow API — Streaming Document Comparison
# =============================================================================
#
# POST /workflow runs every configured fact-type analysis and streams the
# progress as Server-Sent Events:
#
#   event: step    — one per stage transition (running/completed/error)
#   event: result  — the full result array, once every analysis finished
#   event: done    — {}
#
# or, on any failure, a single terminal `event: error` with {"message"}
# after whatever step frames were already sent. The stream always ends
# after `done` or `error`.
#
# FLOW:
#   1. The workflow runs in its own task; its step callback pushes frames
#      onto a queue.
#   2. The response generator drains the queue until the task signals the
#      end of the stream.
#   3. If the client disconnects, the workflow task is cancelled.
# =============================================================================

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator

from fastapi import APIRouter
from fastapi.responses import StreamingResponse

from app.agents.types import StepEvent
from app.agents.workflow import run_workflow
from app.models.requests import WorkflowRequest
from app.models.responses import (
    StepEventResponse,
    WorkflowErrorResponse,
    WorkflowResultResponse,
)
from app.services.sse import format_sse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Workflow"])

_END_OF_STREAM = None


def _step_payload(event: StepEvent) -> dict:
    return StepEventResponse.model_validate(event).model_dump(
        by_alias=True, exclude_none=True,
    )


async def _workflow_stream(input_text: str) -> AsyncIterator[str]:
    queue: asyncio.Queue[str | None] = asyncio.Queue()

    def on_step(event: StepEvent) -> None:
        queue.put_nowait(format_sse("step", _step_payload(event)))

    async def run() -> None:
        try:
            results = await run_workflow(input_text, on_step)
            payload = [
                WorkflowResultResponse.model_validate(result).model_dump(by_alias=True)
                for result in results
            ]
            queue.put_nowait(format_sse("result", payload))
            queue.put_nowait(format_sse("done", {}))
        except Exception as e:
            logger.exception("Workflow failed: %s", e)
            error = WorkflowErrorResponse(message=str(e) or "Neznáma chyba")
            queue.put_nowait(format_sse("error", error.model_dump()))
        finally:
            queue.put_nowait(_END_OF_STREAM)

    task = asyncio.create_task(run())
    try:
        while True:
            frame = await queue.get()
            if frame is _END_OF_STREAM:
                break
            yield frame
    finally:
        if not task.done():
            logger.info("Client disconnected, cancelling workflow")
            task.cancel()


@router.post(
    "/workflow",
    summary="Run the cross-document comparison",
    description=(
        "Extracts floor and parking-space counts from every enabled "
        "collection, compares them and streams progress plus the final "
        "report as Server-Sent Events."
    ),
    response_class=StreamingResponse,
)
async def workflow_endpoint(request: WorkflowRequest) -> StreamingResponse:
    logger.info("Workflow request: input='%s'", request.input[:80])

    return StreamingResponse(
        _workflow_stream(request.input),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )
