# =============================================================================
# app/ - FastAPI Application Package
# =============================================================================
# This package contains the FastAPI web application:
# - main.py: App factory, middleware setup, error handlers, lifespan
# - config.py: Environment variable loading and settings
# - exceptions.py: Error taxonomy and JSON error rendering
# - dependencies.py: Service injection for route handlers
# - routers/: API endpoint definitions organized by feature
#
# The app layer is thin - it handles HTTP concerns and delegates
# business logic to the core/ package.
# =============================================================================
