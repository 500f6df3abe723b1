# =============================================================================
# Services Package — Collaborators and Pure Helpers
# =============================================================================
#   - llm.py: multi-provider LLM abstraction (OpenAI-compatible, Anthropic)
#   - file_search.py: OpenAI vector-store search and uploads
#   - document_registry.py: in-memory collection registry
#   - fact_parsing.py: regex value extraction + confidence scoring
#   - sse.py: Server-Sent Events framing and decoding
# =============================================================================
