# =============================================================================
# Chat Intent Routing — Answer Directly or Trigger the Analysis
# =============================================================================
#
# Each chat turn is one LLM completion with the `analyze_documents` tool on
# offer. The model decides:
#   - it calls the tool → the client is told to start the document analysis
#     (POST /workflow), with the model's own short reason;
#   - it answers       → the answer is returned as a chat message.
# =============================================================================

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal

from app.config import settings
from app.services.llm import LLMProvider, ToolSpec, get_llm_provider

logger = logging.getLogger(__name__)

ANALYZE_TOOL = "analyze_documents"
EMPTY_REPLY = "Prepáčte, nepodarilo sa mi vygenerovať odpoveď."
DEFAULT_REASON = "kontrola zhody údajov v dokumentoch"

SYSTEM_PROMPT = """Si odborný asistent pre stavebné povolenia na Slovensku. \
Pomáhaš používateľom s otázkami o stavebnom konaní, dokumentácii, \
legislatíve a procesoch súvisiacich so stavebnými povoleniami.

Máš k dispozícii nástroj "analyze_documents", ktorý spustí automatickú \
analýzu nahraných dokumentov. Tento nástroj porovná údaje z rôznych \
dokumentov (napr. počet podlaží, parkovacie miesta) a zistí, či sa zhodujú.

PRAVIDLÁ:
- Ak používateľ požiada o analýzu dokumentov, kontrolu zhody, overenie \
údajov, alebo spomína "bilančnú tabuľku", "kontrolu dokumentov", "analýzu" \
a pod., použi nástroj analyze_documents.
- Ak sa používateľ pýta všeobecnú otázku o stavebnom povolení, odpovedz \
priamo bez použitia nástroja.
- Odpovedaj vždy po slovensky.
- Buď stručný, ale informatívny."""

ANALYZE_DOCUMENTS = ToolSpec(
    name=ANALYZE_TOOL,
    description=(
        "Spustí automatickú analýzu nahraných dokumentov. Porovná údaje z "
        "rôznych dokumentov (počet podlaží, parkovacie miesta a pod.) a "
        "zistí, či sa zhodujú. Použi tento nástroj keď používateľ chce "
        "skontrolovať, analyzovať alebo overiť dokumenty."
    ),
    parameters={
        "type": "object",
        "properties": {
            "reason": {
                "type": "string",
                "description": "Krátky dôvod prečo sa spúšťa analýza",
            },
        },
        "required": ["reason"],
    },
)


@dataclass(frozen=True)
class ChatReply:
    """What the chat endpoint returns for one turn."""

    type: Literal["message", "tool_call"]
    content: str | None = None
    tool: str | None = None
    reason: str | None = None
    pre_message: str | None = None


async def respond(
    messages: list[dict[str, str]],
    llm: LLMProvider | None = None,
) -> ChatReply:
    """
    Route one chat turn.

    Args:
        messages: Full history as {"role": "user"|"assistant", "content"}.
        llm: Optional provider override.
    """
    provider = llm or get_llm_provider()
    response = await provider.complete(
        messages=messages,
        system=SYSTEM_PROMPT,
        temperature=settings.chat_temperature,
        tools=[ANALYZE_DOCUMENTS],
    )

    for call in response.tool_calls:
        if call.name != ANALYZE_TOOL:
            continue
        reason = str(call.arguments.get("reason") or DEFAULT_REASON).strip()
        logger.info("Chat routed to %s: '%s'", ANALYZE_TOOL, reason[:80])
        return ChatReply(
            type="tool_call",
            tool=ANALYZE_TOOL,
            reason=reason,
            pre_message=f"Spúšťam analýzu dokumentov: {reason}",
        )

    logger.info("Chat answered directly (model=%s)", response.model)
    return ChatReply(type="message", content=response.content or EMPTY_REPLY)
