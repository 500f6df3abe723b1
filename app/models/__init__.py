# =============================================================================
# Models Package — Pydantic V2 Schemas
# =============================================================================
# Request/response schemas for the API, kept separate from the internal
# dataclasses in app/agents and app/services.
# =============================================================================
