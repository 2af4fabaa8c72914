# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains framework-agnostic business logic:
# - models/: User table and Pydantic schemas
# - services/: User store, object upload client, upload orchestrator
#
# Code in this package should NOT import from FastAPI routers.
# Services receive their engine, clients and settings through their
# constructors, which keeps them testable with fakes.
# =============================================================================
