# =============================================================================
# Agents Package — Cross-Document Comparison Workflow
# =============================================================================
#   - analyses.py: static table of fact types (floor count, parking spaces)
#   - runner.py: LangGraph graph for one fact type (3 extractions →
#     compare → classify → score → explain)
#   - judges.py: comparator / classifier / explanation prompts and calls
#   - workflow.py: runs every fact type sequentially
#   - intent.py: decides whether a chat message asks for the analysis
#   - types.py: StepEvent / WorkflowResult records
# =============================================================================
