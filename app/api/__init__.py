# =============================================================================
# API Package — FastAPI Route Handlers
# =============================================================================
# Each module defines a FastAPI APIRouter for a specific feature:
#   - chat.py: conversational endpoint with analysis intent routing
#   - workflow.py: SSE stream of the document comparison workflow
#   - documents.py: collection registry, uploads, enable/disable
#   - deps.py: collaborator dependencies (registry, searcher, LLM)
# =============================================================================
