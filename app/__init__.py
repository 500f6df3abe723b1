# =============================================================================
# Document Comparison Assistant
# =============================================================================
# A chat assistant for building-permit paperwork. On request it queries
# several document collections for the same facts (floor count, parking
# spaces), has an LLM judge whether the documents agree, and reports each
# fact with a confidence score.
#
# Package structure:
#   app/
#   ├── api/          → FastAPI route handlers (chat, workflow, documents)
#   ├── agents/       → comparison workflow (LangGraph), intent routing
#   ├── models/       → Pydantic V2 request/response schemas
#   └── services/     → LLM providers, OpenAI file search, document
#                        registry, fact parsing, SSE framing
# =============================================================================
