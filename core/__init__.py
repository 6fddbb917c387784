# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# Framework-agnostic business logic:
# - models/: Pydantic schemas for requests, responses and stored rows
# - services/: signup/login and click/applied tracking workflows
#
# Services raise app.exceptions errors but never import FastAPI routing,
# so they can be driven directly from tests with in-memory fakes.
# =============================================================================
