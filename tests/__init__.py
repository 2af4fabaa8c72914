# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Spaces Upload API:
# - test_config.py: Settings parsing
# - test_database.py: Engine creation and schema bootstrap
# - test_user_service.py: User store against in-memory SQLite
# - test_storage_service.py: Object upload client with botocore Stubber
# - test_upload_service.py: Profile image pipeline
# - test_api.py: HTTP endpoints via TestClient
#
# Run tests with: pytest
# =============================================================================
